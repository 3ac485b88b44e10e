"""Checklist item model for warden verification.

Checklist items are admin-configured physical-verification lines
(e.g. "Room key returned"). Their order values are always dense: for N
items the orders are exactly 0..N-1.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ChecklistItem:
    """An admin-defined verification checklist item.

    Attributes:
        id: UUID of the item.
        description: Admin-authored text shown to wardens.
        order: Zero-based position among all items (active and inactive).
        is_active: Inactive items are hidden from new verifications.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    description: str
    order: int
    is_active: bool = field(default=True)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate checklist item fields."""
        if not self.description.strip():
            raise ValueError("Checklist item description must be non-empty")
        if self.order < 0:
            raise ValueError(f"Checklist item order must be >= 0, got {self.order}")

    def with_order(self, order: int) -> ChecklistItem:
        """Return a copy at a new position. Unchanged positions keep the instance."""
        if order == self.order:
            return self
        return replace(self, order=order, updated_at=_utc_now())

    def with_changes(
        self,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> ChecklistItem:
        """Return a copy with description and/or active flag edited in place.

        The order is never touched here; reordering is a separate batch
        operation.
        """
        return replace(
            self,
            description=description if description is not None else self.description,
            is_active=is_active if is_active is not None else self.is_active,
            updated_at=_utc_now(),
        )
