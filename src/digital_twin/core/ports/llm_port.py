"""Answer Generator Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..domain import ChatMessage, ContextDocument


class AnswerGeneratorPort(ABC):
    """Abstract interface for turning a question and its context into an answer."""

    @abstractmethod
    async def generate_answer(
        self,
        question: str,
        documents: Sequence[ContextDocument],
        history: Sequence[ChatMessage] | None = None,
    ) -> str:
        """Generate an answer.

        Args:
            question: The visitor's question.
            documents: Retrieved context documents, best first.
            history: Prior conversation supplied by the caller, oldest first.
        """
        ...
