"""Generic JSON webhook adapter implementing the notifier port."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ....core.ports import NotifierPort

logger = logging.getLogger(__name__)


class HttpWebhookNotifier(NotifierPort):
    """POST ``{title, body, data}`` as JSON, with an optional bearer token."""

    def __init__(
        self,
        endpoint: str,
        token: str | None = None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.token = token
        self.timeout = timeout
        self._transport = transport

    async def send_notification(
        self,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        payload = {"title": title, "body": body, "data": data}

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except Exception as e:  # noqa: BLE001
            logger.warning("Webhook notification error: %s", e)
            return

        if response.is_error:
            logger.warning(
                "Webhook notification failed: %d %s", response.status_code, response.text
            )
