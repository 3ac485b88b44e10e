"""Notification port. Best-effort, fire-and-forget."""

from __future__ import annotations

from typing import Protocol


class NotifierProtocol(Protocol):
    """Protocol for delivering a message to a user."""

    async def notify(self, recipient_id: str, message: str) -> None:
        """Deliver message to recipient_id. May raise; callers swallow and log."""
        ...
