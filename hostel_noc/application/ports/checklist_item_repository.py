"""Checklist item repository port.

Checklist mutations always commit the whole, reindexed item set through
replace_all(), so storage never holds a partially reordered checklist.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from hostel_noc.domain.models.checklist_item import ChecklistItem


class ChecklistItemRepositoryProtocol(Protocol):
    """Protocol for checklist item storage operations."""

    async def list_items(self) -> list[ChecklistItem]:
        """Return all items (active and inactive), sorted by order."""
        ...

    async def get(self, item_id: UUID) -> ChecklistItem | None:
        """Retrieve one item, or None if it does not exist."""
        ...

    async def replace_all(self, items: Sequence[ChecklistItem]) -> None:
        """Atomically replace the stored item set.

        Args:
            items: The complete new item set, orders dense 0..N-1.

        Raises:
            ValueError: If the orders are not dense or ids repeat.
        """
        ...
