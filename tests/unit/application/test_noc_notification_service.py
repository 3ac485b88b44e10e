"""Unit tests for NocNotificationService.

Notifications are best-effort: delivery failures and timeouts are
logged and counted, never raised.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from hostel_noc.application.services.noc_notification_service import (
    NocNotificationService,
)
from hostel_noc.config.noc_config import NocWorkflowConfig
from hostel_noc.domain.models.noc_request import NocAction, NocRequest, NocStatus
from hostel_noc.infrastructure.stubs import NotifierStub
from tests.helpers.noc_factories import ADMIN, STUDENT_ID, WARDEN, make_request


def _verified() -> NocRequest:
    return make_request().with_transition(
        NocAction.VERIFY,
        WARDEN,
        NocStatus.WARDEN_VERIFIED,
        verified_by=WARDEN.actor_id,
    )


@pytest.fixture
def notifier() -> NotifierStub:
    """Create a notifier stub."""
    return NotifierStub()


@pytest.fixture
def service(notifier: NotifierStub) -> NocNotificationService:
    """Create the service under test."""
    return NocNotificationService(notifier)


class TestNotifyTransition:
    """Tests for notify_transition()."""

    @pytest.mark.asyncio
    async def test_pending_sends_nothing(
        self, service: NocNotificationService, notifier: NotifierStub
    ) -> None:
        """A new request has no one to notify."""
        assert await service.notify_transition(make_request()) == 0
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_verified_notifies_student(
        self, service: NocNotificationService, notifier: NotifierStub
    ) -> None:
        """The student learns that the warden verified the request."""
        assert await service.notify_transition(_verified()) == 1
        assert "verified by the warden" in notifier.messages_for(STUDENT_ID)[0]

    @pytest.mark.asyncio
    async def test_approved_notifies_student_and_warden(
        self, service: NocNotificationService, notifier: NotifierStub
    ) -> None:
        """Approval reaches the student and the verifying warden."""
        approved = _verified().with_transition(
            NocAction.APPROVE, ADMIN, NocStatus.APPROVED, student_deactivated=True
        )

        assert await service.notify_transition(approved) == 2
        assert "deactivated" in notifier.messages_for(STUDENT_ID)[0]
        assert "21CS1001" in notifier.messages_for(WARDEN.actor_id)[0]

    @pytest.mark.asyncio
    async def test_correction_message_carries_remarks(
        self, service: NocNotificationService, notifier: NotifierStub
    ) -> None:
        """The correction notes are included in the student's message."""
        corrected = _verified().with_transition(
            NocAction.SEND_FOR_CORRECTION,
            ADMIN,
            NocStatus.SENT_FOR_CORRECTION,
            admin_remarks="Upload fee receipt",
        )

        await service.notify_transition(corrected)

        assert notifier.messages_for(STUDENT_ID) == [
            "Your NOC request was sent for correction: Upload fee receipt"
        ]

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(
        self, service: NocNotificationService, notifier: NotifierStub
    ) -> None:
        """A failing notifier is logged, not raised."""
        notifier.set_failure(ConnectionError("smtp down"))

        assert await service.notify_transition(_verified()) == 0

    @pytest.mark.asyncio
    async def test_slow_delivery_times_out(self) -> None:
        """A delivery slower than the timeout counts as failed."""

        async def _hang(recipient_id: str, message: str) -> None:
            await asyncio.sleep(1)

        notifier = AsyncMock()
        notifier.notify = AsyncMock(side_effect=_hang)
        service = NocNotificationService(
            notifier, config=NocWorkflowConfig(notification_timeout_seconds=0.05)
        )

        assert await service.notify_transition(_verified()) == 0
        notifier.notify.assert_awaited_once()
