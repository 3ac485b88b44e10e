"""Verification recorder.

Turns a warden's checklist answers into the immutable snapshot stored on
a request, then applies the VERIFY transition.

Flow:
1. Load the request (NocRequestNotFoundError if missing)
2. Guard: status PENDING and actor is a warden (InvalidTransitionError)
3. Resolve every answered item against the current checklist
   - deleted/unknown ids are rejected (ValidationError)
   - deactivated items are still accepted: the warden may be finishing
     a verification started before the item was switched off
4. Snapshot description, amount and remarks per answer
5. Build the verified request and persist it with a revision check
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from hostel_noc.application.ports.checklist_item_repository import (
    ChecklistItemRepositoryProtocol,
)
from hostel_noc.application.ports.noc_request_repository import (
    NocRequestRepositoryProtocol,
)
from hostel_noc.application.services.base import LoggingMixin
from hostel_noc.domain.errors.not_found import NocRequestNotFoundError
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.models.actor import Actor
from hostel_noc.domain.models.noc_request import (
    ChecklistResponse,
    ChecklistResponseDraft,
    NocAction,
    NocRequest,
)
from hostel_noc.domain.services.noc_transition_engine import NocTransitionEngine


class VerificationRecorder(LoggingMixin):
    """Records a warden's checklist verification on a request."""

    def __init__(
        self,
        request_repo: NocRequestRepositoryProtocol,
        checklist_repo: ChecklistItemRepositoryProtocol,
        engine: NocTransitionEngine,
    ) -> None:
        """Initialize the verification recorder.

        Args:
            request_repo: NOC request storage.
            checklist_repo: Checklist item storage (current configuration).
            engine: Transition rules.
        """
        self._request_repo = request_repo
        self._checklist_repo = checklist_repo
        self._engine = engine
        self._init_logger(component="verification")

    async def record_verification(
        self,
        request_id: UUID,
        actor: Actor,
        responses: Sequence[ChecklistResponseDraft],
        remarks: str | None = None,
    ) -> NocRequest:
        """Snapshot the checklist answers and mark the request verified.

        Args:
            request_id: The request being verified.
            actor: The verifying warden.
            responses: One draft per answered checklist item.
            remarks: Optional warden remarks.

        Returns:
            The stored WARDEN_VERIFIED request.

        Raises:
            NocRequestNotFoundError: Request doesn't exist.
            InvalidTransitionError: Not PENDING, or actor is not a warden.
            ValidationError: Unknown checklist item, duplicate item, or
                negative amount.
            ConcurrencyConflictError: Request changed since it was read.
        """
        log = self._log_operation(
            "record_verification",
            request_id=str(request_id),
            actor_id=actor.actor_id,
            response_count=len(responses),
        )

        request = await self._request_repo.get(request_id)
        if request is None:
            raise NocRequestNotFoundError(request_id)

        self._engine.check(request, actor, NocAction.VERIFY)
        snapshot = await self.build_snapshot(responses)
        verified = self._engine.verify(request, actor, snapshot, remarks)
        stored = await self._request_repo.update_cas(
            verified, expected_revision=request.revision
        )

        log.info("verification_recorded", revision=stored.revision)
        return stored

    async def build_snapshot(
        self, responses: Sequence[ChecklistResponseDraft]
    ) -> tuple[ChecklistResponse, ...]:
        """Resolve drafts against the current checklist into snapshots.

        Raises:
            ValidationError: If a draft names an item that does not exist.
        """
        items = {item.id: item for item in await self._checklist_repo.list_items()}
        snapshot: list[ChecklistResponse] = []
        for draft in responses:
            item = items.get(draft.checklist_item_id)
            if item is None:
                raise ValidationError(
                    f"Checklist item {draft.checklist_item_id} does not exist",
                    field="checklist_responses",
                )
            remarks = draft.remarks.strip() if draft.remarks and draft.remarks.strip() else None
            snapshot.append(
                ChecklistResponse(
                    checklist_item_id=item.id,
                    description=item.description,
                    amount=draft.amount,
                    remarks=remarks,
                )
            )
        return tuple(snapshot)
