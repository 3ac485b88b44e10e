"""NOC request API request/response models.

Request bodies only check shape (pydantic, 422 on failure). Business
rules such as reason length or required rejection reasons are enforced
by the workflow and come back as 400 problem details.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from hostel_noc.api.models.common import DateTimeWithZ
from hostel_noc.application.ports.student_directory import StudentRecord
from hostel_noc.domain.models.noc_request import (
    ChecklistResponse,
    NocHistoryEntry,
    NocRequest,
    StudentSnapshot,
)
from hostel_noc.domain.models.noc_statistics import NocStatistics


class CreateNocRequest(BaseModel):
    """Request to open a NOC request.

    Attributes:
        reason: Why the student is leaving.
        student_id: Required when a warden raises the request.
        vacating_date: Optional planned vacating date.
    """

    reason: str = Field(..., description="Reason for leaving the hostel")
    student_id: str | None = Field(
        default=None, description="Student the request is for (wardens only)"
    )
    vacating_date: date | None = Field(default=None, description="Planned vacating date")


class ChecklistResponseInput(BaseModel):
    """A warden's answer to one checklist item."""

    checklist_item_id: UUID
    amount: Decimal | None = Field(default=None, description="Amount due, if any")
    remarks: str | None = None


class VerifyNocRequest(BaseModel):
    """Request to verify a pending request."""

    checklist_responses: list[ChecklistResponseInput] = Field(default_factory=list)
    remarks: str | None = Field(default=None, description="Warden remarks")


class RejectNocRequest(BaseModel):
    """Request to reject a request (warden or admin)."""

    rejection_reason: str | None = Field(default=None, description="Why it is rejected")


class ApproveNocRequest(BaseModel):
    """Request to approve a verified request."""

    admin_remarks: str | None = Field(default=None, description="Approval notes")


class SendForCorrectionRequest(BaseModel):
    """Request to send a verified request back for correction."""

    admin_remarks: str | None = Field(default=None, description="What must be corrected")


class StudentProfileResponse(BaseModel):
    """Student profile fields."""

    name: str
    roll_number: str
    course: str
    branch: str
    year: int
    academic_year: str

    @classmethod
    def from_domain(cls, student: StudentSnapshot) -> "StudentProfileResponse":
        return cls(
            name=student.name,
            roll_number=student.roll_number,
            course=student.course,
            branch=student.branch,
            year=student.year,
            academic_year=student.academic_year,
        )


class ChecklistResponseOutput(BaseModel):
    """Snapshotted checklist answer."""

    checklist_item_id: UUID
    description: str
    amount: Decimal | None
    remarks: str | None

    @classmethod
    def from_domain(cls, response: ChecklistResponse) -> "ChecklistResponseOutput":
        return cls(
            checklist_item_id=response.checklist_item_id,
            description=response.description,
            amount=response.amount,
            remarks=response.remarks,
        )


class NocHistoryEntryResponse(BaseModel):
    """One audit trail entry."""

    action: str
    actor_id: str
    actor_role: str
    from_status: str | None
    to_status: str
    remarks: str | None
    at: DateTimeWithZ

    @classmethod
    def from_domain(cls, entry: NocHistoryEntry) -> "NocHistoryEntryResponse":
        return cls(
            action=entry.action.value,
            actor_id=entry.actor_id,
            actor_role=entry.actor_role.value,
            from_status=entry.from_status.value if entry.from_status else None,
            to_status=entry.to_status.value,
            remarks=entry.remarks,
            at=entry.at,
        )


class NocRequestResponse(BaseModel):
    """A NOC request as shown to students, wardens and admins."""

    id: UUID
    student_id: str
    student: StudentProfileResponse
    reason: str
    status: str
    raised_by: str
    raised_by_id: str | None
    vacating_date: date | None
    warden_remarks: str | None
    admin_remarks: str | None
    rejection_reason: str | None
    checklist_responses: list[ChecklistResponseOutput]
    student_deactivated: bool
    verified_by: str | None
    verified_at: DateTimeWithZ | None
    approved_by: str | None
    approved_at: DateTimeWithZ | None
    rejected_by: str | None
    rejected_by_role: str | None
    rejected_at: DateTimeWithZ | None
    correction_requested_at: DateTimeWithZ | None
    deactivated_at: DateTimeWithZ | None
    history: list[NocHistoryEntryResponse]
    revision: int
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, request: NocRequest) -> "NocRequestResponse":
        """Build the response from a domain request."""
        return cls(
            id=request.id,
            student_id=request.student_id,
            student=StudentProfileResponse.from_domain(request.student),
            reason=request.reason,
            status=request.status.value,
            raised_by=request.raised_by.value,
            raised_by_id=request.raised_by_id,
            vacating_date=request.vacating_date,
            warden_remarks=request.warden_remarks,
            admin_remarks=request.admin_remarks,
            rejection_reason=request.rejection_reason,
            checklist_responses=[
                ChecklistResponseOutput.from_domain(r) for r in request.checklist_responses
            ],
            student_deactivated=request.student_deactivated,
            verified_by=request.verified_by,
            verified_at=request.verified_at,
            approved_by=request.approved_by,
            approved_at=request.approved_at,
            rejected_by=request.rejected_by,
            rejected_by_role=(
                request.rejected_by_role.value if request.rejected_by_role else None
            ),
            rejected_at=request.rejected_at,
            correction_requested_at=request.correction_requested_at,
            deactivated_at=request.deactivated_at,
            history=[NocHistoryEntryResponse.from_domain(e) for e in request.history],
            revision=request.revision,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


class NocRequestListResponse(BaseModel):
    """Requests visible to the caller, newest first."""

    requests: list[NocRequestResponse]
    total: int


class NocStatisticsResponse(BaseModel):
    """Admin dashboard counts. by_status is keyed by status label."""

    total: int
    by_status: dict[str, int]
    deactivated_students: int

    @classmethod
    def from_domain(cls, stats: NocStatistics) -> "NocStatisticsResponse":
        return cls(
            total=stats.total,
            by_status={status.value: count for status, count in stats.by_status.items()},
            deactivated_students=stats.deactivated_students,
        )


class EligibleStudentResponse(BaseModel):
    """A student a warden may raise a request for."""

    student_id: str
    profile: StudentProfileResponse

    @classmethod
    def from_domain(cls, record: StudentRecord) -> "EligibleStudentResponse":
        return cls(
            student_id=record.student_id,
            profile=StudentProfileResponse.from_domain(record.profile),
        )


class EligibleStudentListResponse(BaseModel):
    """Eligible-student search results."""

    students: list[EligibleStudentResponse]


class AvailableActionsResponse(BaseModel):
    """Actions the caller could apply to a request right now."""

    request_id: UUID
    actions: list[str]
