"""Answer generator decorator that declines off-topic questions without a model call."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ....core.domain import ChatMessage, ContextDocument
from ....core.ports import AnswerGeneratorPort
from ....core.services.prompt_builder import PromptBuilder
from ....core.services.prompts import OUT_OF_SCOPE_RESPONSE
from ....core.services.query_classifier import QueryClassifier

logger = logging.getLogger(__name__)


class ScopedAnswerGenerator(AnswerGeneratorPort):
    """Return a canned redirect when there is neither context nor an on-topic question.

    Empty questions are always delegated.
    """

    def __init__(
        self,
        inner: AnswerGeneratorPort,
        classifier: QueryClassifier,
        prompt_builder: PromptBuilder,
        out_of_scope_response: str = OUT_OF_SCOPE_RESPONSE,
    ) -> None:
        self.inner = inner
        self.classifier = classifier
        self.prompt_builder = prompt_builder
        self.out_of_scope_response = out_of_scope_response

    async def generate_answer(
        self,
        question: str,
        documents: Sequence[ContextDocument],
        history: Sequence[ChatMessage] | None = None,
    ) -> str:
        has_context = bool(self.prompt_builder.relevant_documents(documents))
        if not has_context and question and not self.classifier.is_in_scope(question):
            logger.info("No context and off-topic question; skipping model call")
            return self.out_of_scope_response

        return await self.inner.generate_answer(question, documents, history=history)
