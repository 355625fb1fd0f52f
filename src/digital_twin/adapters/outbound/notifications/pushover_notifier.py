"""Pushover adapter implementing the notifier port."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ....core.ports import NotifierPort

logger = logging.getLogger(__name__)

PUSHOVER_ENDPOINT = "https://api.pushover.net/1/messages.json"
# Pushover rejects messages longer than this
PUSHOVER_MAX_MESSAGE_LENGTH = 1024


class PushoverNotifier(NotifierPort):
    """Send notifications through the Pushover messages API (form-encoded)."""

    def __init__(
        self,
        token: str,
        user_key: str,
        endpoint: str = PUSHOVER_ENDPOINT,
        timeout: float = 4.0,
        max_message_length: int = PUSHOVER_MAX_MESSAGE_LENGTH,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.user_key = user_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_message_length = max_message_length
        self._transport = transport

    def build_message(self, body: str, data: dict[str, Any] | None = None) -> str:
        """Combine body, session line and remaining metadata, capped at the length limit."""
        parts = [body]
        data = data or {}

        if data.get("session_id"):
            parts.append(f"Session: {data['session_id']}")

        rest = {key: value for key, value in data.items() if key != "session_id"}
        if rest:
            parts.append(f"Meta: {json.dumps(rest, default=str)}")

        combined = "\n".join(parts).strip()
        if len(combined) > self.max_message_length:
            return f"{combined[: self.max_message_length - 3]}..."
        return combined

    async def send_notification(
        self,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        form = {
            "token": self.token,
            "user": self.user_key,
            "title": title,
            "message": self.build_message(body, data),
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, data=form)
        except Exception as e:  # noqa: BLE001
            logger.warning("Pushover notification error: %s", e)
            return

        if response.is_error:
            logger.warning(
                "Pushover notification failed: %d %s", response.status_code, response.text
            )
