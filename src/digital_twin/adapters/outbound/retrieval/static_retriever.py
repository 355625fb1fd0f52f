"""Keyword-match retriever that works without a prebuilt index."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import replace

from ....core.domain import ContextDocument
from ....core.domain.exceptions import KnowledgeBaseError, RetrievalError
from ....core.ports import KnowledgeBasePort, RetrieverPort

DocumentLoader = Callable[[], Sequence[ContextDocument]]


class StaticRetriever(RetrieverPort):
    """Score documents by literal substring matches.

    A document scores 1.0 when it contains the whole query, otherwise the
    fraction of whitespace-separated query terms it contains.

    ``documents`` is either a fixed list or a loader called on every
    ``retrieve``, so a loader backed by the knowledge base sees ingested
    documents without a restart.
    """

    def __init__(
        self,
        documents: Sequence[ContextDocument] | DocumentLoader,
        limit: int = 5,
    ) -> None:
        if callable(documents):
            self._loader = documents
        else:
            fixed = list(documents)
            self._loader = lambda: fixed
        self.limit = limit

    @classmethod
    def from_repository(cls, repository: KnowledgeBasePort, limit: int = 5) -> StaticRetriever:
        """Build a retriever that rereads ``repository`` on every query."""

        def load() -> list[ContextDocument]:
            return [
                ContextDocument(
                    id=doc.id,
                    content=doc.content,
                    source=doc.category,
                    metadata={"category": doc.category},
                )
                for doc in repository.load()
            ]

        return cls(load, limit=limit)

    @staticmethod
    def score(query: str, content: str) -> float:
        """Score ``content`` against an already lowercased ``query``."""
        normalized_content = content.lower()
        if query in normalized_content:
            return 1.0

        terms = query.split()
        if not terms:
            return 0.0

        matches = sum(1 for term in terms if term in normalized_content)
        return matches / len(terms)

    async def retrieve(self, query: str) -> list[ContextDocument]:
        try:
            documents = await asyncio.to_thread(self._loader)
        except KnowledgeBaseError as e:
            raise RetrievalError("Knowledge base unavailable", cause=e) from e

        normalized_query = query.lower()
        scored = [(doc, self.score(normalized_query, doc.content)) for doc in documents]
        ranked = sorted(
            (entry for entry in scored if entry[1] > 0),
            key=lambda entry: entry[1],
            reverse=True,
        )
        return [replace(doc, score=score) for doc, score in ranked[: self.limit]]
