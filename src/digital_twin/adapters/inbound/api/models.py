"""Pydantic models for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessageModel(BaseModel):
    """A single message in the chat history."""

    role: Literal["user", "assistant", "system"] = Field(
        ..., description="Role of the message sender"
    )
    content: str = Field(..., description="Content of the message")


class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""

    messages: list[ChatMessageModel] = Field(
        ...,
        min_length=1,
        description="Conversation so far; the last user message is answered",
        json_schema_extra={
            "example": [{"role": "user", "content": "What do you use Python for?"}]
        },
    )
    session_id: str | None = Field(
        None, max_length=128, description="Session token returned by a previous reply"
    )


class ChatResponse(BaseModel):
    """Response model for the chat endpoint."""

    reply: str = Field(..., description="The digital twin's answer")
    session_id: str = Field(..., description="Session token to send with follow-up messages")


class KnowledgeDocument(BaseModel):
    """A knowledge base record."""

    id: str
    category: str
    content: str


class ScoredKnowledgeDocument(KnowledgeDocument):
    """A knowledge base record with its similarity to the query."""

    score: float = Field(..., ge=0, le=1, description="Cosine similarity to the query")


class SearchResultModel(BaseModel):
    """Top-K similarity search result."""

    documents: list[ScoredKnowledgeDocument]
    has_relevant_content: bool
    max_score: float


class KnowledgeListResponse(BaseModel):
    documents: list[KnowledgeDocument]


class KnowledgeSearchResponse(BaseModel):
    query: str
    search_result: SearchResultModel


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    knowledge_base: str = Field(..., description="Knowledge base status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., DT_VAL_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "EmptyQueryError", "code": "DT_VAL_002", "message": "..."},
            "location": {"class": "<module>", "method": "chat", ...},
            "stack_trace": ["Traceback...", ...]  # Only in debug mode
        }
    """

    error: ErrorDetail = Field(..., description="Error details including type, code, and message")
    location: dict | None = Field(None, description="Source location of the error")
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
