"""Knowledge base browse and search endpoint."""

import asyncio

from fastapi import APIRouter, Query

from ..deps import get_index_cache, get_repository
from ..models import (
    KnowledgeDocument,
    KnowledgeListResponse,
    KnowledgeSearchResponse,
    ScoredKnowledgeDocument,
    SearchResultModel,
)

router = APIRouter(prefix="/api", tags=["knowledge"])


@router.get(
    "/knowledge",
    response_model=KnowledgeListResponse | KnowledgeSearchResponse,
)
async def knowledge(
    q: str | None = Query(None, max_length=1000, description="Search query"),
    top_k: int = Query(5, ge=1, le=50, description="Maximum number of results"),
) -> KnowledgeListResponse | KnowledgeSearchResponse:
    """List every document, or run a similarity search when ``q`` is given."""
    documents = await asyncio.to_thread(get_repository().load)
    index = await asyncio.to_thread(get_index_cache().get, documents)

    if not q:
        return KnowledgeListResponse(
            documents=[KnowledgeDocument(**doc.to_dict()) for doc in index.get_all_documents()]
        )

    result = index.search(q, top_k)
    return KnowledgeSearchResponse(
        query=q,
        search_result=SearchResultModel(
            documents=[ScoredKnowledgeDocument(**doc.to_dict()) for doc in result.documents],
            has_relevant_content=result.has_relevant_content,
            max_score=result.max_score,
        ),
    )
