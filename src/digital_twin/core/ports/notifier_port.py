"""Notifier Port Interface."""

from abc import ABC, abstractmethod
from typing import Any


class NotifierPort(ABC):
    """Abstract interface for best-effort, out-of-band owner notifications.

    Implementations must not raise: delivery errors are logged and dropped.
    """

    @abstractmethod
    async def send_notification(
        self,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Deliver a notification."""
        ...
