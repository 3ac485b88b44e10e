"""Checklist item repository stub implementation.

In-memory storage for the admin-configured verification checklist.
replace_all() swaps the whole item set in one assignment, so readers see
either the old set or the new one.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from hostel_noc.application.ports.checklist_item_repository import (
    ChecklistItemRepositoryProtocol,
)
from hostel_noc.domain.models.checklist_item import ChecklistItem
from hostel_noc.domain.services.checklist_ordering import is_dense, sort_by_order


class ChecklistItemRepositoryStub(ChecklistItemRepositoryProtocol):
    """In-memory stub implementation of ChecklistItemRepositoryProtocol.

    Attributes:
        _items: Dictionary mapping item.id to ChecklistItem.
    """

    def __init__(self, items: Sequence[ChecklistItem] = ()) -> None:
        """Initialize the stub, optionally seeded with items."""
        self._items: dict[UUID, ChecklistItem] = {}
        if items:
            self._store(items)

    async def list_items(self) -> list[ChecklistItem]:
        """List items sorted by order."""
        return sort_by_order(list(self._items.values()))

    async def get(self, item_id: UUID) -> ChecklistItem | None:
        """Retrieve an item by ID."""
        return self._items.get(item_id)

    async def replace_all(self, items: Sequence[ChecklistItem]) -> None:
        """Replace the whole item set.

        Raises:
            ValueError: If orders are not exactly 0..n-1 or ids repeat.
        """
        self._store(items)

    def _store(self, items: Sequence[ChecklistItem]) -> None:
        by_id = {item.id: item for item in items}
        if len(by_id) != len(items):
            raise ValueError("Checklist item ids must be unique")
        if not is_dense(items):
            raise ValueError("Checklist item orders must be exactly 0..n-1")
        self._items = by_id

    def clear(self) -> None:
        """Clear all items (for testing)."""
        self._items = {}
