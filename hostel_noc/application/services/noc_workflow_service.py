"""NOC workflow service - the facade callers use.

Every operation a student, warden or admin can perform on the
exit-clearance workflow goes through this class. It authorizes the
actor, serializes writers per request, and delegates to the engine,
the verification recorder and the approval coordinator.

Check order for a transition on an existing request:
1. Request exists (NocRequestNotFoundError)
2. Actor may act for the request's student (UnauthorizedActorError)
3. Status and role permit the action (InvalidTransitionError)
4. Input is well-formed (ValidationError)
5. Write, with a revision check (ConcurrencyConflictError)

Create has no stored request: role, then authorization for the target
student, then reason validation, then the student lookup, then the write.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import Sequence
from datetime import date
from uuid import UUID, uuid4

from hostel_noc.application.ports.authorization_policy import (
    AuthorizationPolicyProtocol,
)
from hostel_noc.application.ports.noc_request_repository import (
    NocRequestRepositoryProtocol,
)
from hostel_noc.application.ports.student_directory import (
    StudentDirectoryProtocol,
    StudentRecord,
)
from hostel_noc.application.services.approval_coordinator import ApprovalCoordinator
from hostel_noc.application.services.base import LoggingMixin
from hostel_noc.application.services.checklist_config_service import (
    ChecklistConfigService,
)
from hostel_noc.application.services.dependency_calls import call_dependency
from hostel_noc.application.services.noc_notification_service import (
    NocNotificationService,
)
from hostel_noc.application.services.verification_recorder import VerificationRecorder
from hostel_noc.config.noc_config import DEFAULT_NOC_WORKFLOW_CONFIG, NocWorkflowConfig
from hostel_noc.domain.errors.authorization import UnauthorizedActorError
from hostel_noc.domain.errors.not_found import (
    NocRequestNotFoundError,
    StudentNotFoundError,
)
from hostel_noc.domain.errors.state_transition import InvalidTransitionError
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.models.actor import Actor, ActorRole
from hostel_noc.domain.models.checklist_item import ChecklistItem
from hostel_noc.domain.models.noc_request import (
    ChecklistResponseDraft,
    NocAction,
    NocRequest,
    NocStatus,
)
from hostel_noc.domain.models.noc_statistics import NocStatistics
from hostel_noc.domain.services.noc_transition_engine import (
    TRANSITION_RULES,
    NocTransitionEngine,
)

LOOKUP_DEPENDENCY = "lookup_student"
SEARCH_DEPENDENCY = "list_eligible_students"


class NocWorkflowService(LoggingMixin):
    """Facade over the NOC exit-clearance workflow.

    Attributes:
        _request_locks: One asyncio.Lock per request id. Every mutation of a
            request runs under its lock, so two transitions of the same
            request never interleave. Reads take no lock. An entry lives
            only while some coroutine holds or awaits its lock.
    """

    def __init__(
        self,
        request_repo: NocRequestRepositoryProtocol,
        checklist_service: ChecklistConfigService,
        verification_recorder: VerificationRecorder,
        approval_coordinator: ApprovalCoordinator,
        notification_service: NocNotificationService,
        student_directory: StudentDirectoryProtocol,
        authorization: AuthorizationPolicyProtocol,
        engine: NocTransitionEngine,
        config: NocWorkflowConfig | None = None,
    ) -> None:
        """Initialize the workflow service.

        Args:
            request_repo: NOC request storage.
            checklist_service: Checklist configuration.
            verification_recorder: Records VERIFY with its checklist snapshot.
            approval_coordinator: Runs APPROVE and the account deactivation.
            notification_service: Best-effort notifications.
            student_directory: Student lookup and search.
            authorization: Ownership and warden cohort checks.
            engine: Transition rules.
            config: Workflow configuration.
        """
        self._request_repo = request_repo
        self._checklist = checklist_service
        self._verification = verification_recorder
        self._approval = approval_coordinator
        self._notifications = notification_service
        self._students = student_directory
        self._authorization = authorization
        self._engine = engine
        self._config = config or DEFAULT_NOC_WORKFLOW_CONFIG
        self._request_locks: weakref.WeakValueDictionary[UUID, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._init_logger(component="noc")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _lock_for(self, request_id: UUID) -> asyncio.Lock:
        lock = self._request_locks.get(request_id)
        if lock is None:
            lock = asyncio.Lock()
            self._request_locks[request_id] = lock
        return lock

    async def _authorize(self, actor: Actor, student_id: str) -> None:
        if not await self._authorization.can_act_for_student(actor, student_id):
            raise UnauthorizedActorError(
                actor.actor_id,
                f"{actor.role.value} may not act for student {student_id}",
            )

    async def _load(self, request_id: UUID) -> NocRequest:
        request = await self._request_repo.get(request_id)
        if request is None:
            raise NocRequestNotFoundError(request_id)
        return request

    async def _load_authorized(self, actor: Actor, request_id: UUID) -> NocRequest:
        request = await self._load(request_id)
        await self._authorize(actor, request.student_id)
        return request

    def _require_admin(self, actor: Actor, operation: str) -> None:
        if actor.role != ActorRole.ADMIN:
            raise UnauthorizedActorError(actor.actor_id, f"only admins may {operation}")

    # -------------------------------------------------------------------------
    # Request lifecycle
    # -------------------------------------------------------------------------

    async def create_request(
        self,
        actor: Actor,
        reason: str | None,
        student_id: str | None = None,
        vacating_date: date | None = None,
    ) -> NocRequest:
        """Open a new PENDING request.

        A student creates a request for themselves; a warden creates one on
        behalf of a student and must name that student.

        Raises:
            InvalidTransitionError: Actor is an admin.
            ValidationError: Reason out of bounds, or a warden gave no student.
            UnauthorizedActorError: Actor may not act for the student.
            StudentNotFoundError: The student directory has no such student.
            DependencyFailureError: The student directory failed or timed out.
        """
        rule = TRANSITION_RULES[NocAction.CREATE]
        if actor.role not in rule.roles:
            raise InvalidTransitionError(
                current_status=None,
                action=NocAction.CREATE,
                actor_role=actor.role,
                required_roles=rule.roles,
            )

        if actor.role == ActorRole.STUDENT:
            target_id = student_id or actor.actor_id
        else:
            if not student_id or not student_id.strip():
                raise ValidationError(
                    "A warden must name the student the request is for",
                    field="student_id",
                )
            target_id = student_id.strip()

        log = self._log_operation(
            "create_request",
            actor_id=actor.actor_id,
            role=actor.role.value,
            student_id=target_id,
        )

        await self._authorize(actor, target_id)
        self._engine.validate_reason(reason)

        profile = await call_dependency(
            LOOKUP_DEPENDENCY,
            self._students.lookup_student(target_id),
            timeout_seconds=self._config.lookup_timeout_seconds,
        )
        if profile is None:
            raise StudentNotFoundError(target_id)

        request = self._engine.open_request(
            request_id=uuid4(),
            actor=actor,
            student_id=target_id,
            student=profile,
            reason=reason,
            vacating_date=vacating_date,
        )
        await self._request_repo.save(request)

        log.info(
            "noc_request_created",
            request_id=str(request.id),
            raised_by=request.raised_by.value,
        )
        return request

    async def delete_request(self, actor: Actor, request_id: UUID) -> None:
        """Withdraw a PENDING request (owning student only).

        Raises:
            NocRequestNotFoundError: Request doesn't exist.
            UnauthorizedActorError: Request belongs to another student.
            InvalidTransitionError: Request left PENDING or actor is not a student.
            ConcurrencyConflictError: Request changed since it was read.
        """
        log = self._log_operation(
            "delete_request", request_id=str(request_id), actor_id=actor.actor_id
        )
        async with self._lock_for(request_id):
            request = await self._load_authorized(actor, request_id)
            self._engine.check_delete(request, actor)
            await self._request_repo.delete_cas(request_id, request.revision)
        log.info("noc_request_deleted", student_id=request.student_id)

    async def verify_request(
        self,
        actor: Actor,
        request_id: UUID,
        responses: Sequence[ChecklistResponseDraft],
        remarks: str | None = None,
    ) -> NocRequest:
        """Record the warden's checklist verification (PENDING -> WARDEN_VERIFIED)."""
        async with self._lock_for(request_id):
            await self._load_authorized(actor, request_id)
            verified = await self._verification.record_verification(
                request_id, actor, responses, remarks
            )
        await self._notifications.notify_transition(verified)
        return verified

    async def warden_reject(
        self, actor: Actor, request_id: UUID, rejection_reason: str | None
    ) -> NocRequest:
        """Reject a PENDING request as its warden (PENDING -> REJECTED)."""
        log = self._log_operation(
            "warden_reject", request_id=str(request_id), actor_id=actor.actor_id
        )
        async with self._lock_for(request_id):
            request = await self._load_authorized(actor, request_id)
            rejected = self._engine.warden_reject(request, actor, rejection_reason)
            stored = await self._request_repo.update_cas(rejected, request.revision)
        log.info("noc_request_rejected", rejected_by_role=actor.role.value)
        await self._notifications.notify_transition(stored)
        return stored

    async def approve_request(
        self, actor: Actor, request_id: UUID, admin_remarks: str | None = None
    ) -> NocRequest:
        """Approve and deactivate the student's account.

        Replaying approve on an already-APPROVED request returns it as
        stored, without a second deactivation.

        Raises:
            DependencyFailureError: Deactivation failed or timed out; the
                request is unchanged and approve may be retried.
        """
        async with self._lock_for(request_id):
            await self._load_authorized(actor, request_id)
            return await self._approval.approve(request_id, actor, admin_remarks)

    async def send_for_correction(
        self, actor: Actor, request_id: UUID, admin_remarks: str | None
    ) -> NocRequest:
        """Ask for corrections (-> SENT_FOR_CORRECTION). Remarks are required."""
        log = self._log_operation(
            "send_for_correction", request_id=str(request_id), actor_id=actor.actor_id
        )
        async with self._lock_for(request_id):
            request = await self._load_authorized(actor, request_id)
            updated = self._engine.send_for_correction(request, actor, admin_remarks)
            stored = await self._request_repo.update_cas(updated, request.revision)
        log.info("noc_request_sent_for_correction", revision=stored.revision)
        await self._notifications.notify_transition(stored)
        return stored

    async def admin_reject(
        self, actor: Actor, request_id: UUID, rejection_reason: str | None
    ) -> NocRequest:
        """Reject a reviewable request as an admin (-> REJECTED)."""
        log = self._log_operation(
            "admin_reject", request_id=str(request_id), actor_id=actor.actor_id
        )
        async with self._lock_for(request_id):
            request = await self._load_authorized(actor, request_id)
            rejected = self._engine.admin_reject(request, actor, rejection_reason)
            stored = await self._request_repo.update_cas(rejected, request.revision)
        log.info("noc_request_rejected", rejected_by_role=actor.role.value)
        await self._notifications.notify_transition(stored)
        return stored

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_request(self, actor: Actor, request_id: UUID) -> NocRequest:
        """Get one request the actor is allowed to see."""
        return await self._load_authorized(actor, request_id)

    async def available_actions(self, actor: Actor, request_id: UUID) -> list[NocAction]:
        """List the actions the actor could apply to the request right now."""
        request = await self._load_authorized(actor, request_id)
        return self._engine.available_actions(request, actor.role)

    async def list_by_student(self, actor: Actor, student_id: str) -> list[NocRequest]:
        """List one student's requests, newest first."""
        await self._authorize(actor, student_id)
        return await self._request_repo.list_by_student(student_id)

    async def list_for_actor(
        self, actor: Actor, status: NocStatus | None = None
    ) -> list[NocRequest]:
        """List the requests visible to the actor, newest first.

        Students see their own requests, wardens the requests of students
        they are responsible for, admins everything.
        """
        if actor.role == ActorRole.STUDENT:
            requests = await self._request_repo.list_by_student(actor.actor_id)
            if status is not None:
                requests = [r for r in requests if r.status == status]
            return requests

        requests = await self._request_repo.list_all(status=status)
        if actor.role == ActorRole.ADMIN:
            return requests

        visible: list[NocRequest] = []
        allowed: dict[str, bool] = {}
        for request in requests:
            if request.student_id not in allowed:
                allowed[request.student_id] = await self._authorization.can_act_for_student(
                    actor, request.student_id
                )
            if allowed[request.student_id]:
                visible.append(request)
        return visible

    async def get_statistics(self, actor: Actor) -> NocStatistics:
        """Counts for the admin dashboard (admin only)."""
        self._require_admin(actor, "view NOC statistics")
        return NocStatistics.from_requests(await self._request_repo.list_all())

    async def search_eligible_students(self, actor: Actor, query: str) -> list[StudentRecord]:
        """Find students a warden may raise a request for (warden only).

        Raises:
            UnauthorizedActorError: Actor is not a warden.
            ValidationError: Empty query.
            DependencyFailureError: The student directory failed or timed out.
        """
        if actor.role != ActorRole.WARDEN:
            raise UnauthorizedActorError(actor.actor_id, "only wardens may search students")
        if not query or not query.strip():
            raise ValidationError("Search query is required", field="query")

        records = await call_dependency(
            SEARCH_DEPENDENCY,
            self._students.list_eligible_students(query.strip()),
            timeout_seconds=self._config.lookup_timeout_seconds,
        )
        return [
            record
            for record in records
            if await self._authorization.can_act_for_student(actor, record.student_id)
        ]

    # -------------------------------------------------------------------------
    # Checklist configuration
    # -------------------------------------------------------------------------

    async def create_checklist_item(self, actor: Actor, description: str) -> ChecklistItem:
        """Append a checklist item (admin only)."""
        self._require_admin(actor, "configure the checklist")
        return await self._checklist.create(description)

    async def update_checklist_item(
        self,
        actor: Actor,
        item_id: UUID,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> ChecklistItem:
        """Edit a checklist item (admin only)."""
        self._require_admin(actor, "configure the checklist")
        return await self._checklist.update(item_id, description=description, is_active=is_active)

    async def delete_checklist_item(self, actor: Actor, item_id: UUID) -> None:
        """Delete a checklist item (admin only)."""
        self._require_admin(actor, "configure the checklist")
        await self._checklist.delete(item_id)

    async def reorder_checklist(
        self, actor: Actor, ordered_ids: Sequence[UUID]
    ) -> list[ChecklistItem]:
        """Reorder the whole checklist (admin only)."""
        self._require_admin(actor, "configure the checklist")
        return await self._checklist.reorder(ordered_ids)

    async def list_checklist(
        self, actor: Actor, active_only: bool = False
    ) -> list[ChecklistItem]:
        """List checklist items in order. Any role may read the checklist."""
        return await self._checklist.list_items(active_only=active_only)

    async def get_checklist_item(self, actor: Actor, item_id: UUID) -> ChecklistItem:
        """Get one checklist item. Any role may read the checklist."""
        return await self._checklist.get(item_id)
