"""NOC request API routes.

FastAPI router for the exit-clearance workflow. The caller's identity
comes from the X-Actor-Id / X-Actor-Role headers; the workflow service
decides what that actor may do.

Error responses are RFC 7807 problem details (see problem_details.py).
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from hostel_noc.api.auth.actor_auth import get_current_actor
from hostel_noc.api.dependencies.noc import get_noc_workflow_service
from hostel_noc.api.models.common import ProblemDetailResponse
from hostel_noc.api.models.noc import (
    ApproveNocRequest,
    AvailableActionsResponse,
    CreateNocRequest,
    EligibleStudentListResponse,
    EligibleStudentResponse,
    NocRequestListResponse,
    NocRequestResponse,
    NocStatisticsResponse,
    RejectNocRequest,
    SendForCorrectionRequest,
    VerifyNocRequest,
)
from hostel_noc.api.problem_details import to_http_exception
from hostel_noc.application.services.noc_workflow_service import NocWorkflowService
from hostel_noc.domain.errors.validation import ValidationError
from hostel_noc.domain.exceptions import HostelNocError
from hostel_noc.domain.models.actor import Actor
from hostel_noc.domain.models.noc_request import (
    ChecklistResponseDraft,
    NocRequest,
    NocStatus,
)

router = APIRouter(prefix="/v1/noc", tags=["noc"])

_ERRORS = {
    400: {"model": ProblemDetailResponse, "description": "Invalid input"},
    401: {"model": ProblemDetailResponse, "description": "Missing actor headers"},
    403: {"model": ProblemDetailResponse, "description": "Actor may not act here"},
    404: {"model": ProblemDetailResponse, "description": "Request not found"},
    409: {"model": ProblemDetailResponse, "description": "Invalid transition or conflict"},
}


def _parse_status(value: str | None) -> NocStatus | None:
    """Accept a status label ("Warden Verified") or name ("WARDEN_VERIFIED")."""
    if value is None or not value.strip():
        return None
    text = value.strip()
    for candidate in NocStatus:
        if text == candidate.value or text.upper() == candidate.name:
            return candidate
    raise ValidationError(f"Unknown NOC status '{text}'", field="status")


def _list_response(requests: list[NocRequest]) -> NocRequestListResponse:
    return NocRequestListResponse(
        requests=[NocRequestResponse.from_domain(r) for r in requests],
        total=len(requests),
    )


# =============================================================================
# Request lifecycle
# =============================================================================


@router.post(
    "/requests",
    response_model=NocRequestResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 503: {"model": ProblemDetailResponse}},
    summary="Raise a NOC request",
    description=(
        "Students raise a request for themselves; wardens raise one on behalf "
        "of a student by naming student_id."
    ),
)
async def create_noc_request(
    body: CreateNocRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """Create a PENDING request."""
    try:
        created = await service.create_request(
            actor,
            reason=body.reason,
            student_id=body.student_id,
            vacating_date=body.vacating_date,
        )
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(created)


@router.get(
    "/requests",
    response_model=NocRequestListResponse,
    responses=_ERRORS,
    summary="List visible NOC requests",
)
async def list_noc_requests(
    request: Request,
    status_filter: str | None = Query(
        default=None, alias="status", description="Status label to filter by"
    ),
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestListResponse:
    """List the caller's requests (students), cohort (wardens) or all (admins)."""
    try:
        requests = await service.list_for_actor(actor, status=_parse_status(status_filter))
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return _list_response(requests)


@router.get(
    "/requests/{request_id}",
    response_model=NocRequestResponse,
    responses=_ERRORS,
    summary="Get a NOC request",
)
async def get_noc_request(
    request_id: UUID,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """Get one request with its history."""
    try:
        noc = await service.get_request(actor, request_id)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(noc)


@router.get(
    "/requests/{request_id}/actions",
    response_model=AvailableActionsResponse,
    responses=_ERRORS,
    summary="List actions the caller may take on a request",
)
async def get_available_actions(
    request_id: UUID,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> AvailableActionsResponse:
    """Drive which buttons the UI shows."""
    try:
        actions = await service.available_actions(actor, request_id)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return AvailableActionsResponse(
        request_id=request_id, actions=[action.value for action in actions]
    )


@router.delete(
    "/requests/{request_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERRORS,
    summary="Withdraw a pending NOC request",
)
async def delete_noc_request(
    request_id: UUID,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> None:
    """Delete a PENDING request (owning student only)."""
    try:
        await service.delete_request(actor, request_id)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None


@router.post(
    "/requests/{request_id}/verify",
    response_model=NocRequestResponse,
    responses=_ERRORS,
    summary="Verify a pending request against the checklist (warden)",
)
async def verify_noc_request(
    request_id: UUID,
    body: VerifyNocRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """PENDING -> WARDEN_VERIFIED."""
    drafts = [
        ChecklistResponseDraft(
            checklist_item_id=r.checklist_item_id, amount=r.amount, remarks=r.remarks
        )
        for r in body.checklist_responses
    ]
    try:
        verified = await service.verify_request(actor, request_id, drafts, body.remarks)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(verified)


@router.post(
    "/requests/{request_id}/warden-reject",
    response_model=NocRequestResponse,
    responses=_ERRORS,
    summary="Reject a pending request (warden)",
)
async def warden_reject_noc_request(
    request_id: UUID,
    body: RejectNocRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """PENDING -> REJECTED."""
    try:
        rejected = await service.warden_reject(actor, request_id, body.rejection_reason)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(rejected)


@router.post(
    "/requests/{request_id}/approve",
    response_model=NocRequestResponse,
    responses={
        **_ERRORS,
        503: {
            "model": ProblemDetailResponse,
            "description": "Account deactivation failed; request unchanged, retry later",
        },
    },
    summary="Approve a verified request and deactivate the student (admin)",
)
async def approve_noc_request(
    request_id: UUID,
    request: Request,
    body: ApproveNocRequest | None = None,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """WARDEN_VERIFIED / SENT_FOR_CORRECTION -> APPROVED.

    Replaying approve on an approved request returns it unchanged.
    """
    remarks = body.admin_remarks if body is not None else None
    try:
        approved = await service.approve_request(actor, request_id, remarks)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(approved)


@router.post(
    "/requests/{request_id}/send-for-correction",
    response_model=NocRequestResponse,
    responses=_ERRORS,
    summary="Send a verified request back for correction (admin)",
)
async def send_noc_request_for_correction(
    request_id: UUID,
    body: SendForCorrectionRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """WARDEN_VERIFIED / SENT_FOR_CORRECTION -> SENT_FOR_CORRECTION."""
    try:
        updated = await service.send_for_correction(actor, request_id, body.admin_remarks)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(updated)


@router.post(
    "/requests/{request_id}/admin-reject",
    response_model=NocRequestResponse,
    responses=_ERRORS,
    summary="Reject a verified request (admin)",
)
async def admin_reject_noc_request(
    request_id: UUID,
    body: RejectNocRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestResponse:
    """WARDEN_VERIFIED / SENT_FOR_CORRECTION -> REJECTED."""
    try:
        rejected = await service.admin_reject(actor, request_id, body.rejection_reason)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocRequestResponse.from_domain(rejected)


# =============================================================================
# Listings and dashboard
# =============================================================================


@router.get(
    "/students/{student_id}/requests",
    response_model=NocRequestListResponse,
    responses=_ERRORS,
    summary="List one student's NOC requests",
)
async def list_student_noc_requests(
    student_id: str,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocRequestListResponse:
    """Newest first."""
    try:
        requests = await service.list_by_student(actor, student_id)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return _list_response(requests)


@router.get(
    "/stats",
    response_model=NocStatisticsResponse,
    responses=_ERRORS,
    summary="NOC counts for the admin dashboard",
)
async def get_noc_statistics(
    request: Request,
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> NocStatisticsResponse:
    """Total, per-status counts and deactivated students (admin only)."""
    try:
        stats = await service.get_statistics(actor)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return NocStatisticsResponse.from_domain(stats)


@router.get(
    "/eligible-students",
    response_model=EligibleStudentListResponse,
    responses={**_ERRORS, 503: {"model": ProblemDetailResponse}},
    summary="Search students a warden may raise a request for",
)
async def search_eligible_students(
    request: Request,
    q: str = Query(default="", description="Name or roll number fragment"),
    actor: Actor = Depends(get_current_actor),
    service: NocWorkflowService = Depends(get_noc_workflow_service),
) -> EligibleStudentListResponse:
    """Warden only."""
    try:
        records = await service.search_eligible_students(actor, q)
    except HostelNocError as e:
        raise to_http_exception(e, request) from None
    return EligibleStudentListResponse(
        students=[EligibleStudentResponse.from_domain(r) for r in records]
    )
