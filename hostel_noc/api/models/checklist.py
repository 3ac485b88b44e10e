"""Checklist configuration API request/response models."""

from uuid import UUID

from pydantic import BaseModel, Field

from hostel_noc.api.models.common import DateTimeWithZ
from hostel_noc.domain.models.checklist_item import ChecklistItem


class CreateChecklistItemRequest(BaseModel):
    """Request to append a checklist item."""

    description: str = Field(..., description="What the warden has to check")


class UpdateChecklistItemRequest(BaseModel):
    """Request to edit a checklist item. Omitted fields are left as they are."""

    description: str | None = Field(default=None, description="New description")
    is_active: bool | None = Field(default=None, description="Show or hide the item")


class ReorderChecklistRequest(BaseModel):
    """Request to reorder the checklist.

    Attributes:
        ordered_ids: Every current item id exactly once, in the new order.
    """

    ordered_ids: list[UUID] = Field(..., description="All item ids in their new order")


class ChecklistItemResponse(BaseModel):
    """A checklist item."""

    id: UUID
    description: str
    order: int
    is_active: bool
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, item: ChecklistItem) -> "ChecklistItemResponse":
        """Build the response from a domain item."""
        return cls(
            id=item.id,
            description=item.description,
            order=item.order,
            is_active=item.is_active,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class ChecklistItemListResponse(BaseModel):
    """Checklist items sorted by order."""

    items: list[ChecklistItemResponse]
