"""Knowledge base documents and search result models for the TF-IDF index."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    """A knowledge base record that can be indexed and searched.

    Documents are immutable once indexed. Updating the corpus means
    rebuilding the index from a new document list.

    Attributes:
        id: Unique identifier. Ids starting with the reserved ingestion
            prefix may be replaced by a later ingestion run.
        category: Coarse topic used to group context (skills, experience, ...).
        content: The text that is tokenized and indexed.
    """

    id: str
    category: str
    content: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Build a document from a knowledge base JSON record."""
        return cls(
            id=str(data["id"]),
            category=str(data.get("category") or "general"),
            content=str(data["content"]),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON record layout of the knowledge base file."""
        return {"id": self.id, "category": self.category, "content": self.content}


@dataclass(frozen=True)
class ScoredDocument:
    """A document paired with its cosine similarity to a query.

    Attributes:
        document: The matched Document.
        score: Cosine similarity in [0, 1], higher is more relevant.
    """

    document: Document
    score: float

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def category(self) -> str:
        return self.document.category

    @property
    def content(self) -> str:
        return self.document.content

    def to_dict(self) -> dict[str, Any]:
        return {**self.document.to_dict(), "score": self.score}


@dataclass
class SearchResult:
    """Envelope returned by a top-K index search.

    Attributes:
        documents: At most K scored documents, sorted by descending score.
        has_relevant_content: True when max_score clears the relevance threshold.
        max_score: Score of the best document, 0.0 when there is none.
    """

    documents: list[ScoredDocument] = field(default_factory=list)
    has_relevant_content: bool = False
    max_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "documents": [doc.to_dict() for doc in self.documents],
            "has_relevant_content": self.has_relevant_content,
            "max_score": self.max_score,
        }
