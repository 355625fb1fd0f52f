"""Models shared by the retrieval, answer generation and orchestration layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class QueryTopic(Enum):
    """Coarse topic of a visitor question.

    Used to decide whether a question without matching knowledge base
    context is still worth sending to the language model.
    """

    GREETING = "greeting"
    ABOUT_ME = "about_me"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    PROJECTS = "projects"
    OUT_OF_SCOPE = "out_of_scope"


@dataclass
class ContextDocument:
    """A retrieved snippet handed to the answer generator.

    Attributes:
        id: Identifier of the source document.
        content: Snippet text.
        source: Human-readable origin (the document category for indexed documents).
        score: Retrieval score, when the retriever produces one.
        metadata: Free-form extra attributes.
    """

    id: str
    content: str
    source: str | None = None
    score: float | None = None
    metadata: dict[str, Any] | None = None


@dataclass
class ChatMessage:
    """A single message in the chat history."""

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class OrchestratorResult:
    """Outcome of one handled visitor message."""

    session_id: str
    answer: str
