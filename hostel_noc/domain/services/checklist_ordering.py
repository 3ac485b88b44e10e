"""Checklist ordering domain service.

Every checklist mutation is expressed as "old item set -> new item set"
with order values reassigned densely. A new set is either complete and
valid or not produced at all, so no two items ever share an order value.

Invariant:
    For N items the order values are exactly 0..N-1.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from hostel_noc.domain.errors.not_found import ChecklistItemNotFoundError
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.models.checklist_item import ChecklistItem


def sort_by_order(items: Sequence[ChecklistItem]) -> list[ChecklistItem]:
    """Return items sorted by order ascending."""
    return sorted(items, key=lambda item: item.order)


def is_dense(items: Sequence[ChecklistItem]) -> bool:
    """Check the 0..N-1 order invariant."""
    return sorted(item.order for item in items) == list(range(len(items)))


def reindex(items: Sequence[ChecklistItem]) -> list[ChecklistItem]:
    """Assign order = position for an already-ordered sequence."""
    return [item.with_order(position) for position, item in enumerate(items)]


def append_item(
    items: Sequence[ChecklistItem], new_item: ChecklistItem
) -> list[ChecklistItem]:
    """Add new_item at the end (order = current count).

    Raises:
        ValueError: If new_item's order is not the current count or its
            id is already taken.
    """
    if new_item.order != len(items):
        raise ValueError(
            f"New checklist item must be appended at order {len(items)}, "
            f"got {new_item.order}"
        )
    if any(item.id == new_item.id for item in items):
        raise ValueError(f"Checklist item {new_item.id} already exists")
    return sort_by_order(items) + [new_item]


def replace_item(
    items: Sequence[ChecklistItem], updated: ChecklistItem
) -> list[ChecklistItem]:
    """Swap in an edited item, keeping every order value.

    Raises:
        ChecklistItemNotFoundError: If no item has updated.id.
    """
    result: list[ChecklistItem] = []
    found = False
    for item in sort_by_order(items):
        if item.id == updated.id:
            if updated.order != item.order:
                raise ValueError("Editing an item must not change its order")
            result.append(updated)
            found = True
        else:
            result.append(item)
    if not found:
        raise ChecklistItemNotFoundError(updated.id)
    return result


def remove_item(items: Sequence[ChecklistItem], item_id: UUID) -> list[ChecklistItem]:
    """Remove an item and compact the order of everything after it.

    Raises:
        ChecklistItemNotFoundError: If item_id is unknown.
    """
    ordered = sort_by_order(items)
    remaining = [item for item in ordered if item.id != item_id]
    if len(remaining) == len(ordered):
        raise ChecklistItemNotFoundError(item_id)
    return reindex(remaining)


def apply_permutation(
    items: Sequence[ChecklistItem], ordered_ids: Sequence[UUID]
) -> list[ChecklistItem]:
    """Reorder items so that order = position in ordered_ids.

    ordered_ids must be a full permutation of the current item ids: no
    omissions, no extras, no duplicates.

    Raises:
        ValidationError: If ordered_ids is not exactly a permutation of
            the current ids.
    """
    by_id = {item.id: item for item in items}
    if len(set(ordered_ids)) != len(ordered_ids):
        raise ValidationError(
            "Reorder list contains duplicate checklist item ids", field="ordered_ids"
        )
    requested = set(ordered_ids)
    existing = set(by_id)
    if requested != existing:
        missing = existing - requested
        unknown = requested - existing
        details = []
        if missing:
            details.append(f"missing: {sorted(str(i) for i in missing)}")
        if unknown:
            details.append(f"unknown: {sorted(str(i) for i in unknown)}")
        raise ValidationError(
            "Reorder list must contain exactly the current checklist item ids "
            f"({'; '.join(details)})",
            field="ordered_ids",
        )
    return reindex([by_id[item_id] for item_id in ordered_ids])
