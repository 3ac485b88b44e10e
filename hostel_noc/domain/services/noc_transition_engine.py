"""NOC request transition engine.

Pure decision logic for the exit-clearance workflow: given a request,
an actor and an action, decide whether the action is legal and build the
next revision of the request. Nothing here touches storage; callers
persist the returned request with a revision check.

Every transition follows the same order of checks:
1. Status and role must match a rule in TRANSITION_RULES
   (InvalidTransitionError otherwise)
2. Required input must be present and well-formed
   (ValidationError otherwise)
3. Only then is the new request built, in one step

Rules:
    CREATE              -                      student, warden -> PENDING
    DELETE              PENDING                student         -> (removed)
    VERIFY              PENDING                warden          -> WARDEN_VERIFIED
    WARDEN_REJECT       PENDING                warden          -> REJECTED
    APPROVE             WARDEN_VERIFIED, SFC   admin           -> APPROVED
    SEND_FOR_CORRECTION WARDEN_VERIFIED, SFC   admin           -> SENT_FOR_CORRECTION
    ADMIN_REJECT        WARDEN_VERIFIED, SFC   admin           -> REJECTED
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from uuid import UUID

from hostel_noc.domain.errors.state_transition import InvalidTransitionError
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.models.actor import Actor, ActorRole
from hostel_noc.domain.models.noc_request import (
    ChecklistResponse,
    NocAction,
    NocRequest,
    NocStatus,
    StudentSnapshot,
)

MIN_REASON_LENGTH: int = 10
MAX_REASON_LENGTH: int = 500


@dataclass(frozen=True)
class TransitionRule:
    """One row of the workflow's action table.

    Attributes:
        action: The action this rule governs.
        allowed_from: Statuses the action may be applied from. Empty for
            CREATE, which has no prior status.
        roles: Roles allowed to apply the action.
        target: Resulting status; None for DELETE.
    """

    action: NocAction
    allowed_from: frozenset[NocStatus]
    roles: frozenset[ActorRole]
    target: NocStatus | None


_ADMIN_REVIEWABLE = frozenset({NocStatus.WARDEN_VERIFIED, NocStatus.SENT_FOR_CORRECTION})

TRANSITION_RULES: dict[NocAction, TransitionRule] = {
    NocAction.CREATE: TransitionRule(
        action=NocAction.CREATE,
        allowed_from=frozenset(),
        roles=frozenset({ActorRole.STUDENT, ActorRole.WARDEN}),
        target=NocStatus.PENDING,
    ),
    NocAction.DELETE: TransitionRule(
        action=NocAction.DELETE,
        allowed_from=frozenset({NocStatus.PENDING}),
        roles=frozenset({ActorRole.STUDENT}),
        target=None,
    ),
    NocAction.VERIFY: TransitionRule(
        action=NocAction.VERIFY,
        allowed_from=frozenset({NocStatus.PENDING}),
        roles=frozenset({ActorRole.WARDEN}),
        target=NocStatus.WARDEN_VERIFIED,
    ),
    NocAction.WARDEN_REJECT: TransitionRule(
        action=NocAction.WARDEN_REJECT,
        allowed_from=frozenset({NocStatus.PENDING}),
        roles=frozenset({ActorRole.WARDEN}),
        target=NocStatus.REJECTED,
    ),
    NocAction.APPROVE: TransitionRule(
        action=NocAction.APPROVE,
        allowed_from=_ADMIN_REVIEWABLE,
        roles=frozenset({ActorRole.ADMIN}),
        target=NocStatus.APPROVED,
    ),
    NocAction.SEND_FOR_CORRECTION: TransitionRule(
        action=NocAction.SEND_FOR_CORRECTION,
        allowed_from=_ADMIN_REVIEWABLE,
        roles=frozenset({ActorRole.ADMIN}),
        target=NocStatus.SENT_FOR_CORRECTION,
    ),
    NocAction.ADMIN_REJECT: TransitionRule(
        action=NocAction.ADMIN_REJECT,
        allowed_from=_ADMIN_REVIEWABLE,
        roles=frozenset({ActorRole.ADMIN}),
        target=NocStatus.REJECTED,
    ),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _required_text(value: str | None, field: str, message: str) -> str:
    """Return stripped text, or raise ValidationError if missing/blank."""
    if value is None or not value.strip():
        raise ValidationError(message, field=field)
    return value.strip()


def _optional_text(value: str | None) -> str | None:
    """Return stripped text, or None for missing/blank input."""
    if value is None or not value.strip():
        return None
    return value.strip()


class NocTransitionEngine:
    """Validates and applies NOC workflow actions.

    Stateless apart from the reason length bounds. Each apply method
    returns a new NocRequest; the input request is never modified, so a
    failed check leaves the caller's entity untouched.

    Example:
        >>> engine = NocTransitionEngine()
        >>> verified = engine.verify(request, warden, responses, "Room cleared")
        >>> verified.status
        <NocStatus.WARDEN_VERIFIED: 'Warden Verified'>
    """

    def __init__(
        self,
        reason_min_length: int = MIN_REASON_LENGTH,
        reason_max_length: int = MAX_REASON_LENGTH,
    ) -> None:
        if reason_min_length < 1:
            raise ValueError(f"reason_min_length must be >= 1, got {reason_min_length}")
        if reason_max_length < reason_min_length:
            raise ValueError(
                f"reason_max_length ({reason_max_length}) must be >= "
                f"reason_min_length ({reason_min_length})"
            )
        self._reason_min_length = reason_min_length
        self._reason_max_length = reason_max_length

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------

    def check(self, request: NocRequest, actor: Actor, action: NocAction) -> TransitionRule:
        """Check that actor may apply action to request in its current status.

        Args:
            request: The request as currently stored.
            actor: The acting user.
            action: The attempted action.

        Returns:
            The matching TransitionRule.

        Raises:
            InvalidTransitionError: If status or role does not match the rule.
        """
        rule = TRANSITION_RULES[action]
        if actor.role not in rule.roles or request.status not in rule.allowed_from:
            raise InvalidTransitionError(
                current_status=request.status,
                action=action,
                actor_role=actor.role,
                required_statuses=rule.allowed_from,
                required_roles=rule.roles,
            )
        return rule

    def is_permitted(self, request: NocRequest, role: ActorRole, action: NocAction) -> bool:
        """Return True if a user in role could apply action right now."""
        rule = TRANSITION_RULES[action]
        return role in rule.roles and request.status in rule.allowed_from

    def available_actions(self, request: NocRequest, role: ActorRole) -> list[NocAction]:
        """List the actions a role may currently apply to a request."""
        return [
            action
            for action in TRANSITION_RULES
            if action != NocAction.CREATE and self.is_permitted(request, role, action)
        ]

    def validate_reason(self, reason: str | None) -> str:
        """Validate and normalize a request reason.

        Returns:
            The reason with surrounding whitespace removed.

        Raises:
            ValidationError: If the reason is missing or outside the length bounds.
        """
        text = _required_text(reason, "reason", "Reason is required")
        if len(text) < self._reason_min_length:
            raise ValidationError(
                f"Reason must be at least {self._reason_min_length} characters long, "
                f"got {len(text)}",
                field="reason",
            )
        if len(text) > self._reason_max_length:
            raise ValidationError(
                f"Reason cannot exceed {self._reason_max_length} characters, got {len(text)}",
                field="reason",
            )
        return text

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def open_request(
        self,
        request_id: UUID,
        actor: Actor,
        student_id: str,
        student: StudentSnapshot,
        reason: str | None,
        vacating_date: date | None = None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Build a new PENDING request (CREATE).

        Raises:
            InvalidTransitionError: If the actor is neither student nor warden.
            ValidationError: If the reason is missing or out of bounds.
        """
        rule = TRANSITION_RULES[NocAction.CREATE]
        if actor.role not in rule.roles:
            raise InvalidTransitionError(
                current_status=None,
                action=NocAction.CREATE,
                actor_role=actor.role,
                required_roles=rule.roles,
            )
        text = self.validate_reason(reason)
        return NocRequest.open(
            request_id=request_id,
            student_id=student_id,
            student=student,
            reason=text,
            raised_by=actor,
            vacating_date=vacating_date,
            at=at,
        )

    def check_delete(self, request: NocRequest, actor: Actor) -> None:
        """Check that a request may be deleted (DELETE).

        Raises:
            InvalidTransitionError: If the request left PENDING or the
                actor is not a student.
        """
        self.check(request, actor, NocAction.DELETE)

    def verify(
        self,
        request: NocRequest,
        actor: Actor,
        responses: Sequence[ChecklistResponse],
        warden_remarks: str | None = None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Attach the checklist snapshot and mark the request verified (VERIFY).

        Args:
            request: Request in PENDING.
            actor: Verifying warden.
            responses: Snapshotted checklist answers.
            warden_remarks: Optional remarks.
            at: Commit time; defaults to now.

        Raises:
            InvalidTransitionError: Wrong status or role.
            ValidationError: Duplicate checklist items or negative amounts.
        """
        self.check(request, actor, NocAction.VERIFY)

        seen: set[UUID] = set()
        for response in responses:
            if response.checklist_item_id in seen:
                raise ValidationError(
                    f"Checklist item {response.checklist_item_id} answered more than once",
                    field="checklist_responses",
                )
            seen.add(response.checklist_item_id)
            if response.amount is not None and response.amount < 0:
                raise ValidationError(
                    f"Amount for checklist item {response.checklist_item_id} "
                    f"cannot be negative, got {response.amount}",
                    field="checklist_responses",
                )

        committed_at = at or _utc_now()
        remarks = _optional_text(warden_remarks)
        return request.with_transition(
            NocAction.VERIFY,
            actor,
            NocStatus.WARDEN_VERIFIED,
            remarks=remarks,
            at=committed_at,
            checklist_responses=tuple(responses),
            warden_remarks=remarks,
            verified_by=actor.actor_id,
            verified_at=committed_at,
        )

    def warden_reject(
        self,
        request: NocRequest,
        actor: Actor,
        rejection_reason: str | None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Reject a pending request on the warden's side (WARDEN_REJECT).

        Raises:
            InvalidTransitionError: Wrong status or role.
            ValidationError: Missing rejection reason.
        """
        self.check(request, actor, NocAction.WARDEN_REJECT)
        return self._reject(request, actor, NocAction.WARDEN_REJECT, rejection_reason, at)

    def approve(
        self,
        request: NocRequest,
        actor: Actor,
        admin_remarks: str | None = None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Give final approval and record the confirmed deactivation (APPROVE).

        Only call this after the account deactivation has been confirmed;
        the returned request carries student_deactivated=True.

        Raises:
            InvalidTransitionError: Wrong status or role.
        """
        self.check(request, actor, NocAction.APPROVE)
        committed_at = at or _utc_now()
        remarks = _optional_text(admin_remarks)
        return request.with_transition(
            NocAction.APPROVE,
            actor,
            NocStatus.APPROVED,
            remarks=remarks,
            at=committed_at,
            admin_remarks=remarks if remarks is not None else request.admin_remarks,
            approved_by=actor.actor_id,
            approved_at=committed_at,
            student_deactivated=True,
            deactivated_at=committed_at,
        )

    def send_for_correction(
        self,
        request: NocRequest,
        actor: Actor,
        admin_remarks: str | None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Ask for corrections on a verified request (SEND_FOR_CORRECTION).

        The previous admin remarks stay in the history; admin_remarks on
        the request holds the latest ones.

        Raises:
            InvalidTransitionError: Wrong status or role.
            ValidationError: Missing admin remarks.
        """
        self.check(request, actor, NocAction.SEND_FOR_CORRECTION)
        remarks = _required_text(
            admin_remarks,
            "admin_remarks",
            "Admin remarks are required when sending a request for correction",
        )
        committed_at = at or _utc_now()
        return request.with_transition(
            NocAction.SEND_FOR_CORRECTION,
            actor,
            NocStatus.SENT_FOR_CORRECTION,
            remarks=remarks,
            at=committed_at,
            admin_remarks=remarks,
            correction_requested_at=committed_at,
        )

    def admin_reject(
        self,
        request: NocRequest,
        actor: Actor,
        rejection_reason: str | None,
        at: datetime | None = None,
    ) -> NocRequest:
        """Reject a verified request on the admin's side (ADMIN_REJECT).

        Raises:
            InvalidTransitionError: Wrong status or role.
            ValidationError: Missing rejection reason.
        """
        self.check(request, actor, NocAction.ADMIN_REJECT)
        return self._reject(request, actor, NocAction.ADMIN_REJECT, rejection_reason, at)

    def _reject(
        self,
        request: NocRequest,
        actor: Actor,
        action: NocAction,
        rejection_reason: str | None,
        at: datetime | None,
    ) -> NocRequest:
        reason = _required_text(
            rejection_reason, "rejection_reason", "Rejection reason is required"
        )
        committed_at = at or _utc_now()
        return request.with_transition(
            action,
            actor,
            NocStatus.REJECTED,
            remarks=reason,
            at=committed_at,
            rejection_reason=reason,
            rejected_by=actor.actor_id,
            rejected_by_role=actor.role,
            rejected_at=committed_at,
        )
