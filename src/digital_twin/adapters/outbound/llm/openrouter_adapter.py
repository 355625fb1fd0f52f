"""OpenAI-compatible chat-completion adapter (OpenRouter by default)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ....core.domain import ChatMessage, ContextDocument
from ....core.domain.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    MissingAPIKeyError,
)
from ....core.ports import AnswerGeneratorPort
from ....core.services.prompt_builder import PromptBuilder

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"


class OpenRouterAnswerGenerator(AnswerGeneratorPort):
    """Generate answers with a hosted chat-completion model.

    The system message carries the persona, a summary of the recent
    conversation and the retrieved context; the conversation itself follows.
    """

    def __init__(
        self,
        api_key: str,
        prompt_builder: PromptBuilder,
        model: str = "z-ai/glm-4.5-air:free",
        endpoint: str = DEFAULT_ENDPOINT,
        temperature: float = 0.3,
        max_tokens: int = 500,
        timeout: float = 30.0,
        site_url: str = "http://localhost:3000",
        app_title: str = "Hero-Portfolio-Chatbot",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            api_key: Bearer token for the provider.
            prompt_builder: Builds the system prompt.
            model: Provider model identifier.
            endpoint: Full URL of the chat-completions endpoint.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.
            timeout: Request timeout in seconds.
            site_url: Sent as HTTP-Referer for provider attribution.
            app_title: Sent as X-Title for provider attribution.
            transport: Optional httpx transport (used by tests).

        Raises:
            MissingAPIKeyError: If ``api_key`` is empty.
        """
        if not api_key:
            raise MissingAPIKeyError(
                "OPENROUTER_API_KEY not configured. Set it in your .env file "
                "or use LLM_BACKEND=template."
            )
        self.api_key = api_key
        self.prompt_builder = prompt_builder
        self.model = model
        self.endpoint = endpoint
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.site_url = site_url
        self.app_title = app_title
        self._transport = transport

    def build_messages(
        self,
        question: str,
        documents: Sequence[ContextDocument],
        history: Sequence[ChatMessage] | None = None,
    ) -> list[dict[str, str]]:
        system_prompt = self.prompt_builder.build_system_prompt(documents, history)
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(m.to_dict() for m in (history or []) if m.role != "system")
        messages.append({"role": "user", "content": question})
        return messages

    @staticmethod
    def _extract_reply(data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMGenerationError(
                "Chat completion response has no message content", cause=e
            ) from e
        return content or ""

    async def generate_answer(
        self,
        question: str,
        documents: Sequence[ContextDocument],
        history: Sequence[ChatMessage] | None = None,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": self.build_messages(question, documents, history),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.site_url,
            "X-Title": self.app_title,
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise LLMConnectionError(
                "Chat completion request failed",
                cause=e,
                context={"endpoint": self.endpoint, "model": self.model},
            ) from e

        if response.status_code == 429:
            raise LLMRateLimitError(
                "Chat completion rate limit reached", context={"model": self.model}
            )
        if response.is_error:
            logger.error("Chat completion error %d: %s", response.status_code, response.text)
            raise LLMGenerationError(
                "Chat completion request was rejected",
                context={"status": response.status_code, "details": response.text[:500]},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LLMGenerationError("Chat completion response is not JSON", cause=e) from e
        return self._extract_reply(data)
