"""Unit tests for NocWorkflowService.

Tests cover:
- the full student -> warden -> admin lifecycle
- creation by students and wardens, with its check order
- ownership and warden cohort authorization
- rejections, corrections and deletion
- role-scoped listing, statistics and eligible-student search
- admin-only checklist configuration
- illegal edges leaving the stored request untouched
- the per-request lock registry
"""

import asyncio
import gc
from collections.abc import Awaitable, Callable
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from hostel_noc.domain.errors.authorization import UnauthorizedActorError
from hostel_noc.domain.errors.dependency import DependencyFailureError
from hostel_noc.domain.errors.not_found import (
    ChecklistItemNotFoundError,
    NocRequestNotFoundError,
    StudentNotFoundError,
)
from hostel_noc.domain.errors.state_transition import InvalidTransitionError
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.models.actor import Actor, ActorRole
from hostel_noc.domain.models.noc_request import (
    ChecklistResponseDraft,
    NocAction,
    NocRequest,
    NocStatus,
    RaisedBy,
)
from hostel_noc.domain.services.noc_transition_engine import TRANSITION_RULES
from tests.helpers.noc_factories import (
    ADMIN,
    OTHER_STUDENT,
    OTHER_STUDENT_ID,
    STUDENT,
    STUDENT_ID,
    VALID_REASON,
    WARDEN,
    WorkflowHarness,
)


async def _create(
    harness: WorkflowHarness, actor: Actor = STUDENT, student_id: str | None = None
) -> NocRequest:
    return await harness.service.create_request(actor, VALID_REASON, student_id=student_id)


_ACTORS = {ActorRole.STUDENT: STUDENT, ActorRole.WARDEN: WARDEN, ActorRole.ADMIN: ADMIN}

Mutation = Callable[[WorkflowHarness, Actor, UUID], Awaitable[object]]

_MUTATIONS: dict[NocAction, Mutation] = {
    NocAction.DELETE: lambda h, actor, rid: h.service.delete_request(actor, rid),
    NocAction.VERIFY: lambda h, actor, rid: h.service.verify_request(actor, rid, []),
    NocAction.WARDEN_REJECT: lambda h, actor, rid: h.service.warden_reject(
        actor, rid, VALID_REASON
    ),
    NocAction.APPROVE: lambda h, actor, rid: h.service.approve_request(actor, rid),
    NocAction.SEND_FOR_CORRECTION: lambda h, actor, rid: h.service.send_for_correction(
        actor, rid, "Please attach the fee receipt"
    ),
    NocAction.ADMIN_REJECT: lambda h, actor, rid: h.service.admin_reject(
        actor, rid, VALID_REASON
    ),
}


def _illegal_edges() -> list[tuple[NocStatus, NocAction, ActorRole]]:
    """Every (status, action, role) outside the action table.

    Approve by an admin on an APPROVED request is a replay, not an error.
    """
    edges: list[tuple[NocStatus, NocAction, ActorRole]] = []
    for status in NocStatus:
        for action in _MUTATIONS:
            rule = TRANSITION_RULES[action]
            for role in ActorRole:
                if status in rule.allowed_from and role in rule.roles:
                    continue
                if (status, action, role) == (
                    NocStatus.APPROVED,
                    NocAction.APPROVE,
                    ActorRole.ADMIN,
                ):
                    continue
                edges.append((status, action, role))
    return edges


async def _request_in(harness: WorkflowHarness, status: NocStatus) -> NocRequest:
    """Drive a new request to the given status through the facade."""
    created = await _create(harness)
    if status == NocStatus.PENDING:
        return created
    if status == NocStatus.REJECTED:
        return await harness.service.warden_reject(WARDEN, created.id, VALID_REASON)
    verified = await harness.service.verify_request(WARDEN, created.id, [])
    if status == NocStatus.WARDEN_VERIFIED:
        return verified
    if status == NocStatus.APPROVED:
        return await harness.service.approve_request(ADMIN, created.id)
    return await harness.service.send_for_correction(
        ADMIN, created.id, "Please attach the fee receipt"
    )


class TestLifecycle:
    """End-to-end flow through the facade."""

    @pytest.mark.asyncio
    async def test_student_to_approval(self, harness: WorkflowHarness) -> None:
        """Create, verify with two checklist lines, approve, replay approve."""
        item_a = await harness.service.create_checklist_item(ADMIN, "Room inventory")
        item_b = await harness.service.create_checklist_item(ADMIN, "Library books")

        created = await harness.service.create_request(
            STUDENT, "Need to vacate due to job offer"
        )
        assert created.status == NocStatus.PENDING
        assert created.student.name == "Asha Verma"

        verified = await harness.service.verify_request(
            WARDEN,
            created.id,
            [
                ChecklistResponseDraft(item_a.id, amount=Decimal("500")),
                ChecklistResponseDraft(item_b.id, amount=Decimal("0")),
            ],
            "Room cleared",
        )
        assert verified.status == NocStatus.WARDEN_VERIFIED
        assert verified.warden_remarks == "Room cleared"
        assert len(verified.checklist_responses) == 2

        approved = await harness.service.approve_request(ADMIN, created.id)
        assert approved.status == NocStatus.APPROVED
        assert approved.student_deactivated is True
        assert harness.deactivation.call_count == 1

        await harness.service.approve_request(ADMIN, created.id)
        assert harness.deactivation.call_count == 1

        actions = [entry.action for entry in approved.history]
        assert actions == [NocAction.CREATE, NocAction.VERIFY, NocAction.APPROVE]

    @pytest.mark.asyncio
    async def test_notifications_follow_transitions(self, harness: WorkflowHarness) -> None:
        """The student is told about verification and approval."""
        created = await _create(harness)
        await harness.service.verify_request(WARDEN, created.id, [])
        await harness.service.approve_request(ADMIN, created.id)

        assert len(harness.notifier.messages_for(STUDENT_ID)) == 2
        assert len(harness.notifier.messages_for(WARDEN.actor_id)) == 1

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_transition(
        self, harness: WorkflowHarness
    ) -> None:
        """A broken notifier does not undo or block the verification."""
        created = await _create(harness)
        harness.notifier.set_failure(ConnectionError("mail relay down"))

        verified = await harness.service.verify_request(WARDEN, created.id, [])

        assert verified.status == NocStatus.WARDEN_VERIFIED
        stored = await harness.requests.get(created.id)
        assert stored is not None
        assert stored.status == NocStatus.WARDEN_VERIFIED


class TestCreateRequest:
    """Tests for create_request()."""

    @pytest.mark.asyncio
    async def test_student_creates_for_self(self, harness: WorkflowHarness) -> None:
        """A student's request targets their own id."""
        created = await _create(harness)

        assert created.student_id == STUDENT_ID
        assert created.raised_by == RaisedBy.STUDENT
        assert await harness.requests.get(created.id) == created

    @pytest.mark.asyncio
    async def test_warden_creates_on_behalf(self, harness: WorkflowHarness) -> None:
        """A warden names the student and is recorded as the creator."""
        created = await _create(harness, WARDEN, student_id=OTHER_STUDENT_ID)

        assert created.student_id == OTHER_STUDENT_ID
        assert created.raised_by == RaisedBy.WARDEN
        assert created.raised_by_id == WARDEN.actor_id
        assert created.student.name == "Ravi Kumar"

    @pytest.mark.asyncio
    async def test_warden_must_name_student(self, harness: WorkflowHarness) -> None:
        """A warden without student_id gets a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            await _create(harness, WARDEN)

        assert exc_info.value.field == "student_id"

    @pytest.mark.asyncio
    async def test_admin_cannot_create(self, harness: WorkflowHarness) -> None:
        """Admins have no CREATE rule."""
        with pytest.raises(InvalidTransitionError):
            await _create(harness, ADMIN, student_id=STUDENT_ID)

    @pytest.mark.asyncio
    async def test_student_cannot_create_for_another(self, harness: WorkflowHarness) -> None:
        """Naming another student is an authorization failure."""
        with pytest.raises(UnauthorizedActorError):
            await _create(harness, STUDENT, student_id=OTHER_STUDENT_ID)

    @pytest.mark.asyncio
    async def test_warden_outside_cohort(self, harness: WorkflowHarness) -> None:
        """A warden may only raise requests for their own cohort."""
        harness.authorization.assign_students(WARDEN.actor_id, {OTHER_STUDENT_ID})

        with pytest.raises(UnauthorizedActorError):
            await _create(harness, WARDEN, student_id=STUDENT_ID)

    @pytest.mark.parametrize("length", [10, 500])
    @pytest.mark.asyncio
    async def test_reason_boundaries_accepted(
        self, harness: WorkflowHarness, length: int
    ) -> None:
        """Reasons of exactly 10 and 500 characters are accepted."""
        created = await harness.service.create_request(STUDENT, "r" * length)

        assert len(created.reason) == length

    @pytest.mark.parametrize("length", [9, 501])
    @pytest.mark.asyncio
    async def test_reason_out_of_bounds_skips_lookup(
        self, harness: WorkflowHarness, length: int
    ) -> None:
        """An invalid reason is rejected before the student directory is asked."""
        with pytest.raises(ValidationError):
            await harness.service.create_request(STUDENT, "r" * length)

        assert harness.directory.lookup_count == 0
        assert await harness.requests.list_all() == []

    @pytest.mark.asyncio
    async def test_unknown_student(self, harness: WorkflowHarness) -> None:
        """A student missing from the directory cannot get a request."""
        with pytest.raises(StudentNotFoundError):
            await _create(harness, WARDEN, student_id="stu-9999")

    @pytest.mark.asyncio
    async def test_directory_failure(self, harness: WorkflowHarness) -> None:
        """Directory errors surface as retryable dependency failures."""
        harness.directory.set_failure(ConnectionError("ldap unreachable"))

        with pytest.raises(DependencyFailureError) as exc_info:
            await _create(harness)

        assert exc_info.value.dependency == "lookup_student"
        assert await harness.requests.list_all() == []

    @pytest.mark.asyncio
    async def test_directory_timeout(self, harness: WorkflowHarness) -> None:
        """A slow directory times out."""
        harness.directory.set_delay(1.0)

        with pytest.raises(DependencyFailureError) as exc_info:
            await _create(harness)

        assert exc_info.value.timed_out is True


class TestTransitions:
    """Rejections, corrections and deletion."""

    @pytest.mark.asyncio
    async def test_send_for_correction_on_pending(self, harness: WorkflowHarness) -> None:
        """Correction is only possible after verification."""
        created = await _create(harness)

        with pytest.raises(InvalidTransitionError):
            await harness.service.send_for_correction(ADMIN, created.id, "Fix it")

    @pytest.mark.asyncio
    async def test_warden_reject_requires_reason(self, harness: WorkflowHarness) -> None:
        """A missing reason leaves the request PENDING."""
        created = await _create(harness)

        with pytest.raises(ValidationError):
            await harness.service.warden_reject(WARDEN, created.id, None)

        stored = await harness.requests.get(created.id)
        assert stored is not None
        assert stored.status == NocStatus.PENDING

    @pytest.mark.asyncio
    async def test_warden_reject(self, harness: WorkflowHarness) -> None:
        """A warden rejection is terminal and notifies the student."""
        created = await _create(harness)

        rejected = await harness.service.warden_reject(WARDEN, created.id, "Hostel dues unpaid")

        assert rejected.status == NocStatus.REJECTED
        assert rejected.rejection_reason == "Hostel dues unpaid"
        assert harness.notifier.messages_for(STUDENT_ID) == [
            "Your NOC request was rejected: Hostel dues unpaid"
        ]
        with pytest.raises(InvalidTransitionError):
            await harness.service.verify_request(WARDEN, created.id, [])

    @pytest.mark.asyncio
    async def test_admin_reject_after_correction(self, harness: WorkflowHarness) -> None:
        """Corrections can be followed by an admin rejection."""
        created = await _create(harness)
        await harness.service.verify_request(WARDEN, created.id, [])
        await harness.service.send_for_correction(ADMIN, created.id, "Attach receipt")
        await harness.service.send_for_correction(ADMIN, created.id, "Receipt is unreadable")

        rejected = await harness.service.admin_reject(ADMIN, created.id, "No valid receipt")

        assert rejected.status == NocStatus.REJECTED
        assert rejected.revision == 5
        assert harness.deactivation.call_count == 0

    @pytest.mark.asyncio
    async def test_wrong_warden_cannot_verify(self, harness: WorkflowHarness) -> None:
        """Authorization is checked before the transition."""
        created = await _create(harness)
        harness.authorization.assign_students(WARDEN.actor_id, {OTHER_STUDENT_ID})

        with pytest.raises(UnauthorizedActorError):
            await harness.service.verify_request(WARDEN, created.id, [])

    @pytest.mark.asyncio
    async def test_student_cannot_verify_own_request(self, harness: WorkflowHarness) -> None:
        """The owner is authorized but has no VERIFY rule."""
        created = await _create(harness)

        with pytest.raises(InvalidTransitionError):
            await harness.service.verify_request(STUDENT, created.id, [])

    @pytest.mark.asyncio
    async def test_unknown_request(self, harness: WorkflowHarness) -> None:
        """Every transition on a missing request is a not-found error."""
        with pytest.raises(NocRequestNotFoundError):
            await harness.service.admin_reject(ADMIN, uuid4(), "Whatever reason")

    @pytest.mark.asyncio
    async def test_student_deletes_pending(self, harness: WorkflowHarness) -> None:
        """The owner may withdraw a PENDING request."""
        created = await _create(harness)

        await harness.service.delete_request(STUDENT, created.id)

        with pytest.raises(NocRequestNotFoundError):
            await harness.service.get_request(STUDENT, created.id)

    @pytest.mark.asyncio
    async def test_other_student_cannot_delete(self, harness: WorkflowHarness) -> None:
        """Only the owning student may delete."""
        created = await _create(harness)

        with pytest.raises(UnauthorizedActorError):
            await harness.service.delete_request(OTHER_STUDENT, created.id)

    @pytest.mark.asyncio
    async def test_cannot_delete_after_verification(self, harness: WorkflowHarness) -> None:
        """A verified request is no longer deletable."""
        created = await _create(harness)
        await harness.service.verify_request(WARDEN, created.id, [])

        with pytest.raises(InvalidTransitionError):
            await harness.service.delete_request(STUDENT, created.id)


class TestReads:
    """Listing, actions, statistics and search."""

    @pytest.mark.asyncio
    async def test_available_actions(self, harness: WorkflowHarness) -> None:
        """Actions depend on role and status."""
        created = await _create(harness)

        assert await harness.service.available_actions(STUDENT, created.id) == [
            NocAction.DELETE
        ]
        assert await harness.service.available_actions(ADMIN, created.id) == []

    @pytest.mark.asyncio
    async def test_other_student_cannot_read(self, harness: WorkflowHarness) -> None:
        """A student can't see someone else's request."""
        created = await _create(harness)

        with pytest.raises(UnauthorizedActorError):
            await harness.service.get_request(OTHER_STUDENT, created.id)

    @pytest.mark.asyncio
    async def test_list_for_actor_scopes_by_role(self, harness: WorkflowHarness) -> None:
        """Students see their own, cohort wardens a subset, admins all."""
        mine = await _create(harness)
        theirs = await _create(harness, OTHER_STUDENT)
        harness.authorization.assign_students(WARDEN.actor_id, {OTHER_STUDENT_ID})

        assert [r.id for r in await harness.service.list_for_actor(STUDENT)] == [mine.id]
        assert [r.id for r in await harness.service.list_for_actor(WARDEN)] == [theirs.id]
        assert {r.id for r in await harness.service.list_for_actor(ADMIN)} == {
            mine.id,
            theirs.id,
        }

    @pytest.mark.asyncio
    async def test_list_for_actor_status_filter(self, harness: WorkflowHarness) -> None:
        """A status filter narrows the listing."""
        first = await _create(harness)
        await _create(harness)
        await harness.service.verify_request(WARDEN, first.id, [])

        verified = await harness.service.list_for_actor(ADMIN, NocStatus.WARDEN_VERIFIED)
        pending = await harness.service.list_for_actor(STUDENT, NocStatus.PENDING)

        assert [r.id for r in verified] == [first.id]
        assert len(pending) == 1

    @pytest.mark.asyncio
    async def test_list_by_student_requires_authorization(
        self, harness: WorkflowHarness
    ) -> None:
        """Listing another student's requests is refused."""
        await _create(harness)

        assert len(await harness.service.list_by_student(ADMIN, STUDENT_ID)) == 1
        with pytest.raises(UnauthorizedActorError):
            await harness.service.list_by_student(OTHER_STUDENT, STUDENT_ID)

    @pytest.mark.asyncio
    async def test_statistics(self, harness: WorkflowHarness) -> None:
        """Admins get per-status counts and the deactivation count."""
        created = await _create(harness)
        await _create(harness, OTHER_STUDENT)
        await harness.service.verify_request(WARDEN, created.id, [])
        await harness.service.approve_request(ADMIN, created.id)

        stats = await harness.service.get_statistics(ADMIN)

        assert stats.total == 2
        assert stats.by_status[NocStatus.APPROVED] == 1
        assert stats.by_status[NocStatus.PENDING] == 1
        assert stats.deactivated_students == 1

    @pytest.mark.asyncio
    async def test_statistics_admin_only(self, harness: WorkflowHarness) -> None:
        """Wardens can't read the dashboard counts."""
        with pytest.raises(UnauthorizedActorError):
            await harness.service.get_statistics(WARDEN)

    @pytest.mark.asyncio
    async def test_search_eligible_students(self, harness: WorkflowHarness) -> None:
        """Search matches name or roll number, case-insensitively."""
        by_name = await harness.service.search_eligible_students(WARDEN, "asha")
        by_roll = await harness.service.search_eligible_students(WARDEN, "21me")

        assert [r.student_id for r in by_name] == [STUDENT_ID]
        assert [r.student_id for r in by_roll] == [OTHER_STUDENT_ID]

    @pytest.mark.asyncio
    async def test_search_respects_cohort(self, harness: WorkflowHarness) -> None:
        """Students outside the warden's cohort are filtered out."""
        harness.authorization.assign_students(WARDEN.actor_id, {OTHER_STUDENT_ID})

        results = await harness.service.search_eligible_students(WARDEN, "21")

        assert [r.student_id for r in results] == [OTHER_STUDENT_ID]

    @pytest.mark.asyncio
    async def test_search_rules(self, harness: WorkflowHarness) -> None:
        """Only wardens search, and the query must be non-empty."""
        with pytest.raises(UnauthorizedActorError):
            await harness.service.search_eligible_students(ADMIN, "asha")
        with pytest.raises(ValidationError):
            await harness.service.search_eligible_students(WARDEN, "  ")


class TestChecklistConfiguration:
    """Checklist management through the facade."""

    @pytest.mark.asyncio
    async def test_only_admins_configure(self, harness: WorkflowHarness) -> None:
        """Wardens and students can read but not edit the checklist."""
        item = await harness.service.create_checklist_item(ADMIN, "Room inventory")

        with pytest.raises(UnauthorizedActorError):
            await harness.service.create_checklist_item(WARDEN, "Another item")
        with pytest.raises(UnauthorizedActorError):
            await harness.service.delete_checklist_item(STUDENT, item.id)

        assert [i.id for i in await harness.service.list_checklist(WARDEN)] == [item.id]

    @pytest.mark.asyncio
    async def test_admin_manages_items(self, harness: WorkflowHarness) -> None:
        """Create, deactivate, reorder and delete through the facade."""
        first = await harness.service.create_checklist_item(ADMIN, "Room inventory")
        second = await harness.service.create_checklist_item(ADMIN, "Library books")

        await harness.service.update_checklist_item(ADMIN, first.id, is_active=False)
        reordered = await harness.service.reorder_checklist(ADMIN, [second.id, first.id])
        active = await harness.service.list_checklist(STUDENT, active_only=True)
        await harness.service.delete_checklist_item(ADMIN, second.id)

        assert [i.id for i in reordered] == [second.id, first.id]
        assert [i.id for i in active] == [second.id]
        remaining = await harness.service.list_checklist(ADMIN)
        assert [(i.id, i.order) for i in remaining] == [(first.id, 0)]

    @pytest.mark.asyncio
    async def test_any_role_reads_one_item(self, harness: WorkflowHarness) -> None:
        item = await harness.service.create_checklist_item(ADMIN, "Room inventory")

        assert await harness.service.get_checklist_item(WARDEN, item.id) == item
        with pytest.raises(ChecklistItemNotFoundError):
            await harness.service.get_checklist_item(STUDENT, uuid4())


class TestIllegalTransitions:
    """Edges outside the action table."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "action", "role"),
        _illegal_edges(),
        ids=lambda value: value.name.lower(),
    )
    async def test_illegal_edge_leaves_request_unchanged(
        self,
        harness: WorkflowHarness,
        status: NocStatus,
        action: NocAction,
        role: ActorRole,
    ) -> None:
        """The attempt fails and the stored request is exactly as before."""
        request = await _request_in(harness, status)
        before = await harness.requests.get(request.id)

        with pytest.raises(InvalidTransitionError):
            await _MUTATIONS[action](harness, _ACTORS[role], request.id)

        assert await harness.requests.get(request.id) == before

    def test_table_leaves_most_edges_illegal(self) -> None:
        """Nine legal edges plus the approve replay out of ninety."""
        assert len(_illegal_edges()) == 80


class TestRequestLocks:
    """The per-request lock registry."""

    @pytest.mark.asyncio
    async def test_no_locks_kept_after_terminal_transitions(
        self, harness: WorkflowHarness
    ) -> None:
        """Rejected and approved requests leave nothing in the registry."""
        for _ in range(25):
            await _request_in(harness, NocStatus.REJECTED)
        for _ in range(25):
            await _request_in(harness, NocStatus.APPROVED)
        gc.collect()

        assert len(harness.service._request_locks) == 0

    @pytest.mark.asyncio
    async def test_failed_transition_keeps_no_lock(self, harness: WorkflowHarness) -> None:
        created = await _create(harness)

        with pytest.raises(InvalidTransitionError):
            await harness.service.approve_request(ADMIN, created.id)
        gc.collect()

        assert len(harness.service._request_locks) == 0

    @pytest.mark.asyncio
    async def test_lock_shared_while_held(self, harness: WorkflowHarness) -> None:
        """Concurrent writers of one request wait on the same lock."""
        created = await _create(harness)
        lock = harness.service._lock_for(created.id)

        async with lock:
            task = asyncio.create_task(
                harness.service.warden_reject(WARDEN, created.id, VALID_REASON)
            )
            await asyncio.sleep(0)
            assert harness.service._lock_for(created.id) is lock
            assert not task.done()

        rejected = await task
        assert rejected.status == NocStatus.REJECTED
