"""Notifier stub implementation.

Collects notifications in memory instead of delivering them.
"""

from __future__ import annotations

from dataclasses import dataclass

from hostel_noc.application.ports.notifier import NotifierProtocol


@dataclass(frozen=True)
class SentNotification:
    """A notification captured by the stub."""

    recipient_id: str
    message: str


class NotifierStub(NotifierProtocol):
    """In-memory stub implementation of NotifierProtocol.

    Attributes:
        sent: Notifications delivered so far, in order.
    """

    def __init__(self) -> None:
        """Initialize the stub with no notifications."""
        self.sent: list[SentNotification] = []
        self._fail_with: Exception | None = None

    def set_failure(self, error: Exception | None) -> None:
        """Make every delivery raise error; None restores delivery."""
        self._fail_with = error

    async def notify(self, recipient_id: str, message: str) -> None:
        """Record the notification, or raise the injected failure."""
        if self._fail_with is not None:
            raise self._fail_with
        self.sent.append(SentNotification(recipient_id=recipient_id, message=message))

    def messages_for(self, recipient_id: str) -> list[str]:
        """Messages delivered to one recipient."""
        return [n.message for n in self.sent if n.recipient_id == recipient_id]

    def clear(self) -> None:
        """Forget delivered notifications and injected failures (for testing)."""
        self.sent.clear()
        self._fail_with = None
