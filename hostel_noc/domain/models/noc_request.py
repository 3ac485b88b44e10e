"""NOC request domain model.

This module defines the exit-clearance request that moves through the
student -> warden -> admin approval pipeline.

State Machine:
    PENDING -> WARDEN_VERIFIED (warden verifies the checklist)
    PENDING -> REJECTED (warden rejects)
    WARDEN_VERIFIED -> APPROVED (admin approves, student deactivated)
    WARDEN_VERIFIED -> SENT_FOR_CORRECTION (admin asks for correction)
    WARDEN_VERIFIED -> REJECTED (admin rejects)
    SENT_FOR_CORRECTION -> APPROVED | SENT_FOR_CORRECTION | REJECTED

Terminal States:
    APPROVED and REJECTED. No further transitions are permitted.

Invariants:
    - rejection_reason is non-empty whenever status is REJECTED
    - student_deactivated is only ever True on an APPROVED request
    - checklist_responses are empty until the request leaves PENDING
    - revision increases by exactly one per committed write
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from hostel_noc.domain.models.actor import Actor, ActorRole


class NocStatus(Enum):
    """Status in the NOC request lifecycle.

    Values match the labels the hostel UI displays.
    """

    PENDING = "Pending"
    WARDEN_VERIFIED = "Warden Verified"
    SENT_FOR_CORRECTION = "Sent for Correction"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    def is_terminal(self) -> bool:
        """Check if this status is terminal (APPROVED or REJECTED)."""
        return self in TERMINAL_STATUSES

    def valid_transitions(self) -> frozenset[NocStatus]:
        """Get the statuses reachable from this status in one step.

        Returns:
            Frozenset of target statuses. Empty for terminal statuses.
        """
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


class RaisedBy(Enum):
    """Who created the request."""

    STUDENT = "student"
    WARDEN = "warden"


class NocAction(Enum):
    """Actions that can be applied to a NOC request."""

    CREATE = "create"
    DELETE = "delete"
    VERIFY = "verify"
    WARDEN_REJECT = "warden_reject"
    APPROVE = "approve"
    SEND_FOR_CORRECTION = "send_for_correction"
    ADMIN_REJECT = "admin_reject"


TERMINAL_STATUSES: frozenset[NocStatus] = frozenset(
    {NocStatus.APPROVED, NocStatus.REJECTED}
)

STATUS_TRANSITION_MATRIX: dict[NocStatus, frozenset[NocStatus]] = {
    NocStatus.PENDING: frozenset({NocStatus.WARDEN_VERIFIED, NocStatus.REJECTED}),
    NocStatus.WARDEN_VERIFIED: frozenset(
        {NocStatus.APPROVED, NocStatus.SENT_FOR_CORRECTION, NocStatus.REJECTED}
    ),
    # Re-entrant: an admin may ask for correction again
    NocStatus.SENT_FOR_CORRECTION: frozenset(
        {NocStatus.APPROVED, NocStatus.SENT_FOR_CORRECTION, NocStatus.REJECTED}
    ),
    NocStatus.APPROVED: frozenset(),
    NocStatus.REJECTED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class StudentSnapshot:
    """Student profile fields copied onto the request at creation.

    Copied so the request history survives later profile edits.
    """

    name: str
    roll_number: str
    course: str
    branch: str
    year: int
    academic_year: str


@dataclass(frozen=True, eq=True)
class ChecklistResponseDraft:
    """A warden's answer to one checklist item, before it is snapshotted.

    Attributes:
        checklist_item_id: The checklist item being answered.
        amount: Optional amount due for the item (e.g. damages).
        remarks: Optional free-text remarks.
    """

    checklist_item_id: UUID
    amount: Decimal | None = None
    remarks: str | None = None


@dataclass(frozen=True, eq=True)
class ChecklistResponse:
    """Snapshotted checklist answer stored on a verified request.

    The description is copied from the checklist item at verification
    time; later edits, deactivation or deletion of the item do not change
    this record.
    """

    checklist_item_id: UUID
    description: str
    amount: Decimal | None = None
    remarks: str | None = None


@dataclass(frozen=True, eq=True)
class NocHistoryEntry:
    """One committed step in a request's audit trail.

    Attributes:
        action: The action applied.
        actor_id: Who applied it.
        actor_role: Role the actor acted in.
        from_status: Status before the action (None for creation).
        to_status: Status after the action.
        remarks: Remarks, correction notes or rejection reason given.
        at: When the action was committed (UTC).
    """

    action: NocAction
    actor_id: str
    actor_role: ActorRole
    from_status: NocStatus | None
    to_status: NocStatus
    remarks: str | None = None
    at: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True, eq=True)
class NocRequest:
    """A student's hostel exit-clearance request.

    Attributes:
        id: UUID of the request.
        student_id: Student the request is for (owned by the student directory).
        student: Profile snapshot captured at creation.
        reason: Why the student is leaving (length checked on creation).
        status: Current lifecycle status.
        raised_by: Whether the student or a warden created the request.
        raised_by_id: Actor id of the creator.
        vacating_date: Optional planned vacating date.
        warden_remarks: Remarks given when the warden verified.
        admin_remarks: Latest admin remarks (correction notes or approval notes).
        rejection_reason: Reason given on rejection (warden or admin).
        checklist_responses: Snapshot written once, at verification.
        student_deactivated: True once the student's account was deactivated.
        verified_by / verified_at: Verifying warden and time.
        approved_by / approved_at: Approving admin and time.
        rejected_by / rejected_by_role / rejected_at: Who rejected, as what, when.
        correction_requested_at: Time of the latest correction request.
        deactivated_at: Time the deactivation was confirmed.
        history: Append-only audit trail, one entry per committed action.
        revision: Optimistic concurrency token, bumped on every write.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    student_id: str
    student: StudentSnapshot
    reason: str
    status: NocStatus = field(default=NocStatus.PENDING)
    raised_by: RaisedBy = field(default=RaisedBy.STUDENT)
    raised_by_id: str | None = field(default=None)
    vacating_date: date | None = field(default=None)
    warden_remarks: str | None = field(default=None)
    admin_remarks: str | None = field(default=None)
    rejection_reason: str | None = field(default=None)
    checklist_responses: tuple[ChecklistResponse, ...] = field(default=())
    student_deactivated: bool = field(default=False)
    verified_by: str | None = field(default=None)
    verified_at: datetime | None = field(default=None)
    approved_by: str | None = field(default=None)
    approved_at: datetime | None = field(default=None)
    rejected_by: str | None = field(default=None)
    rejected_by_role: ActorRole | None = field(default=None)
    rejected_at: datetime | None = field(default=None)
    correction_requested_at: datetime | None = field(default=None)
    deactivated_at: datetime | None = field(default=None)
    history: tuple[NocHistoryEntry, ...] = field(default=())
    revision: int = field(default=1)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Enforce the request invariants."""
        if self.revision < 1:
            raise ValueError(f"revision must be >= 1, got {self.revision}")
        if self.status == NocStatus.REJECTED and not (
            self.rejection_reason and self.rejection_reason.strip()
        ):
            raise ValueError("A rejected request must carry a rejection reason")
        if self.student_deactivated and self.status != NocStatus.APPROVED:
            raise ValueError(
                "student_deactivated can only be set on an approved request, "
                f"status is {self.status.value}"
            )
        if self.status == NocStatus.PENDING and self.checklist_responses:
            raise ValueError("A pending request cannot carry checklist responses")

    @classmethod
    def open(
        cls,
        request_id: UUID,
        student_id: str,
        student: StudentSnapshot,
        reason: str,
        raised_by: Actor,
        vacating_date: date | None = None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Create a new PENDING request with its creation history entry.

        Args:
            request_id: UUID for the new request.
            student_id: Student the request is for.
            student: Profile snapshot from the student directory.
            reason: Already-validated reason text.
            raised_by: The student themselves or a warden acting for them.
            vacating_date: Optional planned vacating date.
            at: Creation time; defaults to now.

        Returns:
            A new NocRequest at revision 1.
        """
        created_at = at or _utc_now()
        entry = NocHistoryEntry(
            action=NocAction.CREATE,
            actor_id=raised_by.actor_id,
            actor_role=raised_by.role,
            from_status=None,
            to_status=NocStatus.PENDING,
            remarks=None,
            at=created_at,
        )
        return cls(
            id=request_id,
            student_id=student_id,
            student=student,
            reason=reason,
            status=NocStatus.PENDING,
            raised_by=(
                RaisedBy.WARDEN if raised_by.role == ActorRole.WARDEN else RaisedBy.STUDENT
            ),
            raised_by_id=raised_by.actor_id,
            vacating_date=vacating_date,
            history=(entry,),
            revision=1,
            created_at=created_at,
            updated_at=created_at,
        )

    def with_transition(
        self,
        action: NocAction,
        actor: Actor,
        to_status: NocStatus,
        remarks: str | None = None,
        at: datetime | None = None,
        **changes: Any,
    ) -> NocRequest:
        """Create the next revision of this request after an action.

        Since NocRequest is frozen, returns a new instance carrying the
        field changes, the new status, an appended history entry and the
        bumped revision. Either all of that is in the new instance or,
        if a check fails, nothing is produced.

        Args:
            action: The action being applied.
            actor: The actor applying it.
            to_status: Target status.
            remarks: Remarks recorded in the history entry.
            at: Commit time; defaults to now.
            **changes: Additional field writes for this action.

        Returns:
            New NocRequest with updated fields.

        Raises:
            InvalidTransitionError: If to_status is not reachable from
                the current status.
        """
        from hostel_noc.domain.errors.state_transition import InvalidTransitionError

        if to_status not in self.status.valid_transitions():
            raise InvalidTransitionError(
                current_status=self.status,
                action=action,
                actor_role=actor.role,
                required_statuses=[
                    s for s, targets in STATUS_TRANSITION_MATRIX.items() if to_status in targets
                ],
            )

        committed_at = at or _utc_now()
        entry = NocHistoryEntry(
            action=action,
            actor_id=actor.actor_id,
            actor_role=actor.role,
            from_status=self.status,
            to_status=to_status,
            remarks=remarks,
            at=committed_at,
        )
        return replace(
            self,
            status=to_status,
            history=self.history + (entry,),
            revision=self.revision + 1,
            updated_at=committed_at,
            **changes,
        )

    @property
    def is_terminal(self) -> bool:
        """True once the request is APPROVED or REJECTED."""
        return self.status.is_terminal()
