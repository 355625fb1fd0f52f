"""Notifier used when owner notifications are disabled."""

from typing import Any

from ....core.ports import NotifierPort


class NoopNotifier(NotifierPort):
    async def send_notification(
        self,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        return None
