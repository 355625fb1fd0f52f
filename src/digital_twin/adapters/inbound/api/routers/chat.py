"""Chat endpoint for the digital twin widget."""

import logging

from fastapi import APIRouter

from .....core.domain import ChatMessage
from .....core.domain.exceptions import EmptyQueryError
from .....core.domain.utils import normalize_text
from ..deps import get_orchestrator
from ..models import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No user message in the request"},
        500: {"model": ErrorResponse, "description": "Answer backend not configured"},
    },
)
async def chat(request: ChatRequest) -> ChatResponse:
    """Answer the last user message of the conversation.

    Earlier messages are passed along as conversation history. Retrieval or
    generation failures still produce a reply (a fallback apology).

    Raises:
        EmptyQueryError: If the conversation has no user message.
    """
    user_positions = [i for i, m in enumerate(request.messages) if m.role == "user"]
    if not user_positions:
        raise EmptyQueryError("The conversation must contain at least one user message")

    last = user_positions[-1]
    question = normalize_text(request.messages[last].content)
    history = [ChatMessage(role=m.role, content=m.content) for m in request.messages[:last]]

    orchestrator = get_orchestrator()
    result = await orchestrator.handle_message(
        question, session_id=request.session_id, history=history
    )
    return ChatResponse(reply=result.answer, session_id=result.session_id)
