"""Approval coordinator.

Orchestrates the APPROVED transition and its irreversible side effect,
the deactivation of the student's account.

Ordering (deactivate, then persist):
1. If the request is already APPROVED, return it unchanged
   (replayed approve after success; no second deactivation call)
2. Guard the APPROVE transition without writing anything
3. Call the deactivation capability, bounded by a timeout
   - success: persist APPROVED + student_deactivated in one write
   - failure/timeout: persist nothing, raise DependencyFailureError;
     the request stays reviewable and approve can be retried
4. Notify student and warden (best-effort)

The account is therefore never left active while the request claims
APPROVED. The cost is a possible second deactivation call when a retry
follows a failed write; the deactivation capability is idempotent.
"""

from __future__ import annotations

from uuid import UUID

import structlog

from hostel_noc.application.ports.account_deactivation import (
    AccountDeactivationProtocol,
)
from hostel_noc.application.ports.noc_request_repository import (
    NocRequestRepositoryProtocol,
)
from hostel_noc.application.services.base import LoggingMixin
from hostel_noc.application.services.dependency_calls import call_dependency
from hostel_noc.application.services.noc_notification_service import (
    NocNotificationService,
)
from hostel_noc.config.noc_config import DEFAULT_NOC_WORKFLOW_CONFIG, NocWorkflowConfig
from hostel_noc.domain.errors.concurrent_modification import ConcurrencyConflictError
from hostel_noc.domain.errors.dependency import DependencyFailureError
from hostel_noc.domain.errors.not_found import NocRequestNotFoundError
from hostel_noc.domain.models.actor import Actor, ActorRole
from hostel_noc.domain.models.noc_request import NocAction, NocRequest, NocStatus
from hostel_noc.domain.services.noc_transition_engine import NocTransitionEngine

DEACTIVATION_DEPENDENCY = "deactivate_account"


class ApprovalCoordinator(LoggingMixin):
    """Coordinates final approval with exactly-once account deactivation.

    Callers must serialize approve() per request (NocWorkflowService holds
    a per-request lock around it); the revision check on the final write
    catches writers outside that lock.

    Example:
        >>> coordinator = ApprovalCoordinator(repo, deactivation, notifications, engine)
        >>> approved = await coordinator.approve(request_id, admin, "All dues cleared")
        >>> approved.student_deactivated
        True
    """

    def __init__(
        self,
        request_repo: NocRequestRepositoryProtocol,
        deactivation: AccountDeactivationProtocol,
        notifications: NocNotificationService,
        engine: NocTransitionEngine,
        config: NocWorkflowConfig | None = None,
    ) -> None:
        """Initialize the approval coordinator.

        Args:
            request_repo: NOC request storage.
            deactivation: External account deactivation capability.
            notifications: Best-effort notification delivery.
            engine: Transition rules.
            config: Workflow configuration (deactivation timeout).
        """
        self._request_repo = request_repo
        self._deactivation = deactivation
        self._notifications = notifications
        self._engine = engine
        self._config = config or DEFAULT_NOC_WORKFLOW_CONFIG
        self._init_logger(component="approval")

    async def approve(
        self,
        request_id: UUID,
        actor: Actor,
        admin_remarks: str | None = None,
    ) -> NocRequest:
        """Approve a verified request and deactivate the student's account.

        Args:
            request_id: The request to approve.
            actor: The approving admin.
            admin_remarks: Optional approval notes.

        Returns:
            The stored APPROVED request.

        Raises:
            NocRequestNotFoundError: Request doesn't exist.
            InvalidTransitionError: Not WARDEN_VERIFIED/SENT_FOR_CORRECTION,
                or actor is not an admin.
            DependencyFailureError: Deactivation failed or timed out.
                Nothing was written; safe to retry.
            ConcurrencyConflictError: Request changed since it was read.
        """
        log = self._log_operation(
            "approve", request_id=str(request_id), actor_id=actor.actor_id
        )

        request = await self._request_repo.get(request_id)
        if request is None:
            raise NocRequestNotFoundError(request_id)

        # Step 1: replayed approve
        if (
            actor.role == ActorRole.ADMIN
            and request.status == NocStatus.APPROVED
            and request.student_deactivated
        ):
            log.info("approval_already_applied", revision=request.revision)
            return request

        # Step 2: guard only, nothing persisted yet
        self._engine.check(request, actor, NocAction.APPROVE)

        # Step 3: side effect, then a single write
        await self._deactivate(request, log)
        approved = self._engine.approve(request, actor, admin_remarks)
        try:
            stored = await self._request_repo.update_cas(
                approved, expected_revision=request.revision
            )
        except ConcurrencyConflictError:
            log.error(
                "approval_persist_conflict_after_deactivation",
                student_id=request.student_id,
                expected_revision=request.revision,
            )
            raise

        log.info(
            "noc_request_approved",
            student_id=stored.student_id,
            revision=stored.revision,
        )

        # Step 4: best-effort
        await self._notifications.notify_transition(stored)
        return stored

    async def _deactivate(self, request: NocRequest, log: structlog.BoundLogger) -> None:
        log.info("deactivation_requested", student_id=request.student_id)
        try:
            succeeded = await call_dependency(
                DEACTIVATION_DEPENDENCY,
                self._deactivation.deactivate_account(request.student_id),
                timeout_seconds=self._config.deactivation_timeout_seconds,
            )
        except DependencyFailureError as e:
            log.warning(
                "deactivation_failed",
                student_id=request.student_id,
                reason=e.reason,
                timed_out=e.timed_out,
            )
            raise
        if not succeeded:
            log.warning(
                "deactivation_failed",
                student_id=request.student_id,
                reason="collaborator reported failure",
                timed_out=False,
            )
            raise DependencyFailureError(
                dependency=DEACTIVATION_DEPENDENCY,
                reason="collaborator reported failure",
            )
        log.info("deactivation_confirmed", student_id=request.student_id)
