"""Unit tests for the answer generator adapters."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from digital_twin.adapters.outbound.llm import (
    OpenRouterAnswerGenerator,
    ScopedAnswerGenerator,
    TemplateAnswerGenerator,
)
from digital_twin.adapters.outbound.llm.template_llm import PLACEHOLDER_NOTICE
from digital_twin.core.domain import ChatMessage, ContextDocument
from digital_twin.core.domain.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    MissingAPIKeyError,
)
from digital_twin.core.services import PromptBuilder, QueryClassifier
from digital_twin.core.services.prompts import OUT_OF_SCOPE_RESPONSE

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


def completion_transport(requests: list, status_code: int = 200, body=None) -> httpx.MockTransport:
    if body is None:
        body = {"choices": [{"message": {"role": "assistant", "content": "I love Python."}}]}

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


def make_generator(transport: httpx.MockTransport) -> OpenRouterAnswerGenerator:
    return OpenRouterAnswerGenerator(
        api_key="sk-test",
        prompt_builder=PromptBuilder(owner_name="Ada", twin_name="Echo"),
        model="test/model",
        endpoint="https://llm.example.com/v1/chat/completions",
        transport=transport,
    )


class TestTemplateAnswerGenerator:
    @pytest.mark.asyncio
    async def test_lists_context(self, context_documents):
        answer = await TemplateAnswerGenerator().generate_answer("What do you do?", context_documents)

        assert answer.startswith("Answer: What do you do?\n\nContext:\n")
        assert "- (skills) Python developer skilled in machine learning" in answer
        assert answer.endswith(PLACEHOLDER_NOTICE)

    @pytest.mark.asyncio
    async def test_without_context(self):
        answer = await TemplateAnswerGenerator().generate_answer("Anything?", [])
        assert "Context: None found." in answer

    @pytest.mark.asyncio
    async def test_uses_id_when_source_missing(self):
        answer = await TemplateAnswerGenerator().generate_answer(
            "q", [ContextDocument(id="doc-7", content="text")]
        )
        assert "- (doc-7) text" in answer


class TestOpenRouterAnswerGenerator:
    """Tests for the chat-completion adapter."""

    def test_missing_api_key_raises_error(self):
        with pytest.raises(MissingAPIKeyError):
            OpenRouterAnswerGenerator(api_key="", prompt_builder=PromptBuilder())

    def test_build_messages_order(self, context_documents):
        generator = make_generator(completion_transport([]))
        history = [
            ChatMessage(role="system", content="dropped"),
            ChatMessage(role="user", content="Hi"),
            ChatMessage(role="assistant", content="Hello!"),
        ]

        messages = generator.build_messages("What do you study?", context_documents, history)

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        assert "## Knowledge Context" in messages[0]["content"]
        assert messages[-1] == {"role": "user", "content": "What do you study?"}

    @pytest.mark.asyncio
    async def test_returns_first_choice(self, context_documents):
        requests: list[httpx.Request] = []
        generator = make_generator(completion_transport(requests))

        answer = await generator.generate_answer("Python?", context_documents)

        assert answer == "I love Python."
        request = requests[0]
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert request.headers["X-Title"] == "Hero-Portfolio-Chatbot"
        payload = json.loads(request.content)
        assert payload["model"] == "test/model"
        assert payload["temperature"] == 0.3
        assert payload["max_tokens"] == 500

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty_string(self):
        body = {"choices": [{"message": {"content": None}}]}
        generator = make_generator(completion_transport([], body=body))

        assert await generator.generate_answer("q", []) == ""

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        generator = make_generator(completion_transport([], status_code=429, body={}))

        with pytest.raises(LLMRateLimitError):
            await generator.generate_answer("q", [])

    @pytest.mark.asyncio
    async def test_error_status(self):
        generator = make_generator(
            completion_transport([], status_code=500, body={"error": "boom"})
        )

        with pytest.raises(LLMGenerationError) as exc_info:
            await generator.generate_answer("q", [])

        assert exc_info.value.extra_context["status"] == 500

    @pytest.mark.asyncio
    async def test_missing_choices(self):
        generator = make_generator(completion_transport([], body={"choices": []}))

        with pytest.raises(LLMGenerationError):
            await generator.generate_answer("q", [])

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        generator = make_generator(completion_transport([], body="<html>oops</html>"))

        with pytest.raises(LLMGenerationError):
            await generator.generate_answer("q", [])

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        generator = make_generator(httpx.MockTransport(handler))

        with pytest.raises(LLMConnectionError) as exc_info:
            await generator.generate_answer("q", [])

        assert isinstance(exc_info.value.cause, httpx.ConnectTimeout)


class TestScopedAnswerGenerator:
    """Tests for the off-topic short circuit."""

    @pytest.fixture
    def inner(self):
        mock = AsyncMock()
        mock.generate_answer.return_value = "model answer"
        return mock

    @pytest.fixture
    def scoped(self, inner):
        return ScopedAnswerGenerator(inner, QueryClassifier(), PromptBuilder())

    @pytest.mark.asyncio
    async def test_off_topic_without_context_skips_model(self, scoped, inner):
        answer = await scoped.generate_answer("What is the weather today?", [])

        assert answer == OUT_OF_SCOPE_RESPONSE
        inner.generate_answer.assert_not_called()

    @pytest.mark.asyncio
    async def test_on_topic_without_context_delegates(self, scoped, inner):
        assert await scoped.generate_answer("Hello!", []) == "model answer"

    @pytest.mark.asyncio
    async def test_off_topic_with_context_delegates(self, scoped, inner, context_documents):
        history = [ChatMessage(role="user", content="Hi")]

        answer = await scoped.generate_answer("Weather?", context_documents, history=history)

        assert answer == "model answer"
        inner.generate_answer.assert_awaited_once_with(
            "Weather?", context_documents, history=history
        )

    @pytest.mark.asyncio
    async def test_low_score_context_counts_as_none(self, scoped, inner):
        weak = [ContextDocument(id="1", content="x", score=0.001)]
        assert await scoped.generate_answer("Weather?", weak) == OUT_OF_SCOPE_RESPONSE

    @pytest.mark.asyncio
    async def test_empty_question_delegates(self, scoped, inner):
        assert await scoped.generate_answer("", []) == "model answer"
