"""Placeholder answer generator that echoes the question and its context."""

from __future__ import annotations

from collections.abc import Sequence

from ....core.domain import ChatMessage, ContextDocument
from ....core.ports import AnswerGeneratorPort

PLACEHOLDER_NOTICE = (
    "This is a placeholder response. Configure a language-model backend "
    "(LLM_BACKEND=openrouter) to get real answers."
)


class TemplateAnswerGenerator(AnswerGeneratorPort):
    """Stand-in generator for local development and tests."""

    async def generate_answer(
        self,
        question: str,
        documents: Sequence[ContextDocument],
        history: Sequence[ChatMessage] | None = None,
    ) -> str:
        summary = "\n".join(f"- ({doc.source or doc.id}) {doc.content}" for doc in documents)
        context_block = f"\n\nContext:\n{summary}" if summary else "\n\nContext: None found."
        return f"Answer: {question}{context_block}\n\n{PLACEHOLDER_NOTICE}"
