"""NOC notification service.

Tells students (and the verifying warden, on approval) what happened to
a request.

Rules:
1. Best-effort - a failed or slow delivery never fails the workflow
   operation that triggered it
2. Failures are logged with the request id and recipient
3. Each delivery is bounded by the notification timeout
"""

from __future__ import annotations

import asyncio

from hostel_noc.application.ports.notifier import NotifierProtocol
from hostel_noc.application.services.base import LoggingMixin
from hostel_noc.config.noc_config import DEFAULT_NOC_WORKFLOW_CONFIG, NocWorkflowConfig
from hostel_noc.domain.models.noc_request import NocRequest, NocStatus


class NocNotificationService(LoggingMixin):
    """Builds and delivers notifications for committed transitions.

    Example:
        >>> service = NocNotificationService(notifier)
        >>> await service.notify_transition(approved_request)
    """

    def __init__(
        self,
        notifier: NotifierProtocol,
        config: NocWorkflowConfig | None = None,
    ) -> None:
        """Initialize the notification service.

        Args:
            notifier: Delivery channel.
            config: Workflow configuration (notification timeout).
        """
        self._notifier = notifier
        self._config = config or DEFAULT_NOC_WORKFLOW_CONFIG
        self._init_logger(component="notification")

    async def notify_transition(self, request: NocRequest) -> int:
        """Notify the parties interested in the request's current status.

        Args:
            request: The request as just committed.

        Returns:
            Number of deliveries that succeeded.
        """
        delivered = 0
        for recipient_id, message in self._messages_for(request):
            if await self._send(request, recipient_id, message):
                delivered += 1
        return delivered

    def _messages_for(self, request: NocRequest) -> list[tuple[str, str]]:
        student = request.student_id
        if request.status == NocStatus.WARDEN_VERIFIED:
            return [
                (
                    student,
                    "Your NOC request has been verified by the warden "
                    "and forwarded for admin approval.",
                )
            ]
        if request.status == NocStatus.SENT_FOR_CORRECTION:
            return [
                (student, f"Your NOC request was sent for correction: {request.admin_remarks}")
            ]
        if request.status == NocStatus.REJECTED:
            return [(student, f"Your NOC request was rejected: {request.rejection_reason}")]
        if request.status == NocStatus.APPROVED:
            messages = [
                (
                    student,
                    "Your NOC request has been approved. "
                    "Your hostel account has been deactivated.",
                )
            ]
            if request.verified_by is not None:
                messages.append(
                    (
                        request.verified_by,
                        f"NOC request for {request.student.name} "
                        f"({request.student.roll_number}) was approved and the "
                        "student's account deactivated.",
                    )
                )
            return messages
        return []

    async def _send(self, request: NocRequest, recipient_id: str, message: str) -> bool:
        log = self._log_operation(
            "notify",
            request_id=str(request.id),
            recipient_id=recipient_id,
            status=request.status.value,
        )
        try:
            await asyncio.wait_for(
                self._notifier.notify(recipient_id, message),
                timeout=self._config.notification_timeout_seconds,
            )
        except Exception as e:
            # Best-effort: the transition is already committed
            log.warning("notification_failed", error=str(e) or type(e).__name__)
            return False
        log.debug("notification_sent")
        return True
