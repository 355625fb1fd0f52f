"""Request flow for one visitor message: notify, retrieve, generate."""

import asyncio
import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from ..domain import ChatMessage, OrchestratorResult
from ..domain.utils import truncate
from ..ports import AnswerGeneratorPort, NotifierPort, RetrieverPort

logger = logging.getLogger(__name__)

DEFAULT_PUSH_TITLE = "New chatbot message"
DEFAULT_MAX_PUSH_BODY_LENGTH = 160
FALLBACK_ANSWER = "Sorry, I could not generate a response right now. Please try again shortly."


class RagOrchestrator:
    """Composes a retriever, an answer generator and a notifier.

    ``handle_message`` always resolves with an answer. Retrieval and
    generation failures collapse into ``FALLBACK_ANSWER``; notification runs
    as a detached task whose outcome never reaches the caller.
    """

    def __init__(
        self,
        retriever: RetrieverPort,
        answer_generator: AnswerGeneratorPort,
        notifier: NotifierPort,
        push_title: str = DEFAULT_PUSH_TITLE,
        max_push_body_length: int = DEFAULT_MAX_PUSH_BODY_LENGTH,
        fallback_answer: str = FALLBACK_ANSWER,
    ) -> None:
        self.retriever = retriever
        self.answer_generator = answer_generator
        self.notifier = notifier
        self.push_title = push_title
        self.max_push_body_length = max_push_body_length
        self.fallback_answer = fallback_answer
        # The event loop only keeps weak references to tasks
        self._pending_notifications: set[asyncio.Task[None]] = set()

    async def handle_message(
        self,
        message: str,
        session_id: str | None = None,
        history: Sequence[ChatMessage] | None = None,
    ) -> OrchestratorResult:
        """Answer one visitor message.

        Args:
            message: The visitor's message.
            session_id: Caller-supplied session token; a new one is generated if empty.
            history: Prior conversation, forwarded to the answer generator.

        Returns:
            OrchestratorResult with the session id and the answer.
        """
        session_id = session_id or str(uuid.uuid4())
        message = message.strip()

        task = asyncio.create_task(self._notify_owner(session_id, message))
        self._pending_notifications.add(task)
        task.add_done_callback(self._pending_notifications.discard)

        try:
            documents = await self.retriever.retrieve(message)
            answer = await self.answer_generator.generate_answer(
                message, documents, history=history
            )
        except Exception:
            logger.exception(
                "RAG flow failed for session %s", session_id, extra={"session_id": session_id}
            )
            return OrchestratorResult(session_id=session_id, answer=self.fallback_answer)

        return OrchestratorResult(session_id=session_id, answer=answer)

    async def drain_notifications(self) -> None:
        """Wait for notifications still in flight (shutdown and tests)."""
        if self._pending_notifications:
            await asyncio.gather(*self._pending_notifications, return_exceptions=True)

    async def _notify_owner(self, session_id: str, message: str) -> None:
        try:
            await self.notifier.send_notification(
                title=self.push_title,
                body=truncate(message, self.max_push_body_length),
                data={
                    "session_id": session_id,
                    "received_at": datetime.now(UTC).isoformat(),
                },
            )
        except Exception as e:
            logger.warning(
                "Failed to send push notification: %s", e, extra={"session_id": session_id}
            )
