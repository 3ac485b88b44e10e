"""Checklist configuration service.

Owns the ordered set of admin-configured verification checklist items.

Rules:
1. ONE WRITER - every mutation runs inside a single store-wide lock, so
   create/update/delete/reorder never interleave
2. WHOLE-SET COMMITS - each mutation computes the complete reindexed item
   set and commits it with one replace_all() call
3. READS ARE UNLOCKED - listing may observe the set just before a commit
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from uuid import UUID, uuid4

from hostel_noc.application.ports.checklist_item_repository import (
    ChecklistItemRepositoryProtocol,
)
from hostel_noc.application.services.base import LoggingMixin
from hostel_noc.domain.errors.not_found import ChecklistItemNotFoundError
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.models.checklist_item import ChecklistItem
from hostel_noc.domain.services.checklist_ordering import (
    append_item,
    apply_permutation,
    remove_item,
    replace_item,
    sort_by_order,
)


class ChecklistConfigService(LoggingMixin):
    """Service for managing verification checklist items.

    Items referenced by historical checklist responses may be edited,
    deactivated or deleted freely: requests store a snapshot, not a
    reference that must stay resolvable.

    Attributes:
        _repository: Checklist item storage.
        _lock: Serializes all checklist mutations.
    """

    def __init__(self, repository: ChecklistItemRepositoryProtocol) -> None:
        """Initialize the checklist configuration service.

        Args:
            repository: Checklist item storage.
        """
        self._repository = repository
        self._lock = asyncio.Lock()
        self._init_logger(component="checklist")

    async def create(self, description: str) -> ChecklistItem:
        """Append a new active item at order = current item count.

        Raises:
            ValidationError: If description is empty.
        """
        text = _require_description(description)
        log = self._log_operation("create_checklist_item")

        async with self._lock:
            items = await self._repository.list_items()
            item = ChecklistItem(id=uuid4(), description=text, order=len(items))
            await self._repository.replace_all(append_item(items, item))

        log.info("checklist_item_created", item_id=str(item.id), order=item.order)
        return item

    async def update(
        self,
        item_id: UUID,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> ChecklistItem:
        """Edit an item's description and/or active flag in place.

        The item's order is preserved.

        Raises:
            ValidationError: If description is given but empty.
            ChecklistItemNotFoundError: If item_id is unknown.
        """
        text = _require_description(description) if description is not None else None
        log = self._log_operation("update_checklist_item", item_id=str(item_id))

        async with self._lock:
            items = await self._repository.list_items()
            current = next((item for item in items if item.id == item_id), None)
            if current is None:
                raise ChecklistItemNotFoundError(item_id)
            updated = current.with_changes(description=text, is_active=is_active)
            await self._repository.replace_all(replace_item(items, updated))

        log.info(
            "checklist_item_updated",
            description_changed=text is not None,
            is_active=updated.is_active,
        )
        return updated

    async def delete(self, item_id: UUID) -> None:
        """Remove an item and compact the order of the items after it.

        Raises:
            ChecklistItemNotFoundError: If item_id is unknown.
        """
        log = self._log_operation("delete_checklist_item", item_id=str(item_id))

        async with self._lock:
            items = await self._repository.list_items()
            remaining = remove_item(items, item_id)
            await self._repository.replace_all(remaining)

        log.info("checklist_item_deleted", remaining_count=len(remaining))

    async def reorder(self, ordered_ids: Sequence[UUID]) -> list[ChecklistItem]:
        """Assign order = position in ordered_ids, all-or-nothing.

        Args:
            ordered_ids: A full permutation of the current item ids.

        Returns:
            All items in their new order.

        Raises:
            ValidationError: If ordered_ids omits, adds or repeats an id.
                No item's order changes in that case.
        """
        log = self._log_operation("reorder_checklist", item_count=len(ordered_ids))

        async with self._lock:
            items = await self._repository.list_items()
            reordered = apply_permutation(items, ordered_ids)
            await self._repository.replace_all(reordered)

        log.info("checklist_reordered")
        return reordered

    async def list_items(self, active_only: bool = False) -> list[ChecklistItem]:
        """List items sorted by order ascending.

        Args:
            active_only: If True, hide inactive items.
        """
        items = sort_by_order(await self._repository.list_items())
        if active_only:
            return [item for item in items if item.is_active]
        return items

    async def get(self, item_id: UUID) -> ChecklistItem:
        """Get one item.

        Raises:
            ChecklistItemNotFoundError: If item_id is unknown.
        """
        item = await self._repository.get(item_id)
        if item is None:
            raise ChecklistItemNotFoundError(item_id)
        return item


def _require_description(description: str | None) -> str:
    if description is None or not description.strip():
        raise ValidationError("Checklist item description is required", field="description")
    return description.strip()
