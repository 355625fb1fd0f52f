"""Retriever Port Interface."""

from abc import ABC, abstractmethod

from ..domain import ContextDocument


class RetrieverPort(ABC):
    """Abstract interface for ranking context documents for a query."""

    @abstractmethod
    async def retrieve(self, query: str) -> list[ContextDocument]:
        """Return context documents ranked by relevance to ``query``."""
        ...
