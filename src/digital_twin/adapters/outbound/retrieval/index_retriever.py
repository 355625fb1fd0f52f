"""TF-IDF index adapter implementing the retriever port."""

from __future__ import annotations

import asyncio
import logging

from ....core.domain import ContextDocument, ScoredDocument
from ....core.domain.exceptions import KnowledgeBaseError, RetrievalError
from ....core.index import DocumentIndexCache
from ....core.ports import KnowledgeBasePort, RetrieverPort

logger = logging.getLogger(__name__)


class IndexRetriever(RetrieverPort):
    """Retrieve context from the knowledge base through the cached TF-IDF index."""

    def __init__(
        self,
        repository: KnowledgeBasePort,
        index_cache: DocumentIndexCache,
        top_k: int = 5,
    ) -> None:
        self.repository = repository
        self.index_cache = index_cache
        self.top_k = top_k

    @staticmethod
    def _to_context(result: ScoredDocument) -> ContextDocument:
        return ContextDocument(
            id=result.id,
            content=result.content,
            source=result.category,
            score=result.score,
            metadata={"category": result.category},
        )

    async def retrieve(self, query: str) -> list[ContextDocument]:
        try:
            documents = await asyncio.to_thread(self.repository.load)
        except KnowledgeBaseError as e:
            raise RetrievalError("Knowledge base unavailable", cause=e) from e

        index = await asyncio.to_thread(self.index_cache.get, documents)
        search_result = index.search(query, self.top_k)
        logger.debug(
            "Index search: %d hits, max score %.3f",
            len(search_result.documents),
            search_result.max_score,
        )
        return [self._to_context(r) for r in search_result.documents if r.score > 0]
