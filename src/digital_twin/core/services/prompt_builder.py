"""System prompt construction for the chat-completion backend."""

from __future__ import annotations

from collections.abc import Sequence

from ..domain import ChatMessage, ContextDocument
from ..domain.utils import normalize_text, truncate
from ..index.document_index import DEFAULT_RELEVANCE_THRESHOLD
from .prompts import (
    CONVERSATION_MEMORY_TEMPLATE,
    KNOWLEDGE_CONTEXT_TEMPLATE,
    PERSONA_SYSTEM_PROMPT,
)


class PromptBuilder:
    """Assemble persona text, conversation memory and retrieved context."""

    def __init__(
        self,
        owner_name: str = "the site owner",
        twin_name: str = "Hero",
        persona_prompt: str | None = None,
        relevance_threshold: float = DEFAULT_RELEVANCE_THRESHOLD,
        history_window: int = 8,
        history_snippet_length: int = 150,
    ) -> None:
        template = persona_prompt or PERSONA_SYSTEM_PROMPT
        self.persona = template.format(owner_name=owner_name, twin_name=twin_name)
        self.relevance_threshold = relevance_threshold
        self.history_window = history_window
        self.history_snippet_length = history_snippet_length

    def relevant_documents(self, documents: Sequence[ContextDocument]) -> list[ContextDocument]:
        """Documents scoring strictly above the threshold (unscored documents always pass)."""
        return [
            doc
            for doc in documents
            if doc.score is None or doc.score > self.relevance_threshold
        ]

    def format_context(self, documents: Sequence[ContextDocument]) -> str:
        """Group relevant documents by upper-cased category.

        Returns an empty string when nothing clears the threshold.
        """
        by_category: dict[str, list[ContextDocument]] = {}
        for doc in self.relevant_documents(documents):
            category = (doc.metadata or {}).get("category") or doc.source or "general"
            by_category.setdefault(str(category).upper(), []).append(doc)

        lines: list[str] = []
        for category, docs in by_category.items():
            lines.append(f"\n[{category}]")
            for doc in docs:
                content = normalize_text(doc.content)
                if doc.score is None:
                    lines.append(f"• {content}")
                else:
                    lines.append(f"• ({doc.score * 100:.0f}% match) {content}")
        return "\n".join(lines)

    def format_history(self, history: Sequence[ChatMessage]) -> str:
        """Summarize the turns that precede the current question.

        The window and the minimum length both count the question being
        answered, which is not part of ``history``. So a window of 8 keeps
        the last 7 earlier messages, and a single prior exchange is enough
        to produce a summary.
        """
        prior_slots = max(self.history_window - 1, 0)
        recent = list(history)[-prior_slots:] if prior_slots else []
        if len(recent) + 1 <= 2:
            return ""

        lines = []
        for message in recent:
            if message.role == "system":
                continue
            speaker = "User" if message.role == "user" else "You"
            lines.append(f"{speaker}: {truncate(message.content, self.history_snippet_length)}")
        return "\n".join(lines)

    def build_system_prompt(
        self,
        documents: Sequence[ContextDocument],
        history: Sequence[ChatMessage] | None = None,
    ) -> str:
        parts = [self.persona]

        memory = self.format_history(history or [])
        if memory:
            parts.append(CONVERSATION_MEMORY_TEMPLATE.format(history=memory))

        context = self.format_context(documents)
        if context:
            parts.append(KNOWLEDGE_CONTEXT_TEMPLATE.format(context=context))

        return "\n".join(parts)
