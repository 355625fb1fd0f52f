"""Domain models for the digital twin agent.

- document: Document, ScoredDocument and SearchResult for the TF-IDF index
- chat: ContextDocument, ChatMessage, QueryTopic and OrchestratorResult

    from digital_twin.core.domain import Document, ContextDocument
"""

from .chat import ChatMessage, ContextDocument, OrchestratorResult, QueryTopic
from .document import Document, ScoredDocument, SearchResult

__all__ = [
    # Index models
    "Document",
    "ScoredDocument",
    "SearchResult",
    # Chat models
    "ChatMessage",
    "ContextDocument",
    "OrchestratorResult",
    "QueryTopic",
]
