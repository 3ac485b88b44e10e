"""Checklist configuration API routes.

Admins configure the ordered verification checklist wardens fill in.
Any authenticated role may read it.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from hostel_noc.api.auth.actor_auth import get_current_actor
from hostel_noc.api.dependencies.noc import get_noc_workflow_service
from hostel_noc.api.models.checklist import (
    ChecklistItemListResponse,
    ChecklistItemResponse,
    CreateChecklistItemRequest,
    ReorderChecklistRequest,
    UpdateChecklistItemRequest,
)
from hostel_noc.api.models.common import ProblemDetailResponse
from hostel_noc.api.problem_details import to_http_exception
from hostel_noc.application.services.noc_workflow_service import NocWorkflowService
from hostel_noc.domain.exceptions import HostelNocError
from hostel_noc.domain.models.actor import Actor

router = APIRouter(prefix="/v1/noc/checklist-items", tags=["noc-checklist"])

_ERRORS = {
    400: {"model": ProblemDetailResponse, "description": "Invalid input"},
    401: {"model": ProblemDetailResponse, "description": "Missing actor headers"},
    403: {"model": ProblemDetailResponse, "description": "Admins only"},
    404: {"model": ProblemDetailResponse, "description": "Checklist item not found"},
}


@router.get("", response_model=ChecklistItemListResponse, responses=_ERRORS)
async def list_checklist_items(
    request: Request,
    active_only: bool = Query(default=False, description="Hide inactive items"),
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> ChecklistItemListResponse:
    """List items in checklist order."""
    try:
        items = await service.list_checklist(actor, active_only=active_only)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return ChecklistItemListResponse(
        items=[ChecklistItemResponse.from_domain(item) for item in items]
    )


@router.post(
    "",
    response_model=ChecklistItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def create_checklist_item(
    body: CreateChecklistItemRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> ChecklistItemResponse:
    """Append an active item at the end of the checklist."""
    try:
        item = await service.create_checklist_item(actor, body.description)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return ChecklistItemResponse.from_domain(item)


@router.get("/{item_id}", response_model=ChecklistItemResponse, responses=_ERRORS)
async def get_checklist_item(
    item_id: UUID,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> ChecklistItemResponse:
    """Get one item, active or not."""
    try:
        item = await service.get_checklist_item(actor, item_id)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return ChecklistItemResponse.from_domain(item)


# Declared before /{item_id} so "order" is not parsed as an item id
@router.put("/order", response_model=ChecklistItemListResponse, responses=_ERRORS)
async def reorder_checklist_items(
    body: ReorderChecklistRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> ChecklistItemListResponse:
    """Replace the order of all items at once."""
    try:
        items = await service.reorder_checklist(actor, body.ordered_ids)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return ChecklistItemListResponse(
        items=[ChecklistItemResponse.from_domain(item) for item in items]
    )


@router.patch("/{item_id}", response_model=ChecklistItemResponse, responses=_ERRORS)
async def update_checklist_item(
    item_id: UUID,
    body: UpdateChecklistItemRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> ChecklistItemResponse:
    """Edit description and/or active flag; order is unchanged."""
    try:
        item = await service.update_checklist_item(
            actor, item_id, description=body.description, is_active=body.is_active
        )
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return ChecklistItemResponse.from_domain(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERRORS,
)
async def delete_checklist_item(
    item_id: UUID,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> None:
    """Delete an item; later items move up one place."""
    try:
        await service.delete_checklist_item(actor, item_id)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
