"""Knowledge Base Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..domain import Document


class KnowledgeBasePort(ABC):
    """Abstract interface for the persisted document collection."""

    @abstractmethod
    def load(self) -> list[Document]:
        """Return all documents in stored order."""
        ...

    @abstractmethod
    def save(self, documents: Sequence[Document]) -> None:
        """Replace the stored collection."""
        ...

    @abstractmethod
    def replace_reserved(self, documents: Sequence[Document], prefix: str) -> list[Document]:
        """Swap every document whose id starts with ``prefix`` for ``documents``."""
        ...
