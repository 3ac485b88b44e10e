"""
API models (Pydantic DTOs) for the NOC workflow.

This module contains all Pydantic request/response models
used by API endpoints.
"""

from hostel_noc.api.models.checklist import (
    ChecklistItemListResponse,
    ChecklistItemResponse,
    CreateChecklistItemRequest,
    ReorderChecklistRequest,
    UpdateChecklistItemRequest,
)
from hostel_noc.api.models.common import ProblemDetailResponse
from hostel_noc.api.models.health import HealthResponse
from hostel_noc.api.models.noc import (
    ApproveNocRequest,
    AvailableActionsResponse,
    CreateNocRequest,
    EligibleStudentListResponse,
    NocRequestListResponse,
    NocRequestResponse,
    NocStatisticsResponse,
    RejectNocRequest,
    SendForCorrectionRequest,
    VerifyNocRequest,
)

__all__: list[str] = [
    "ApproveNocRequest",
    "AvailableActionsResponse",
    "ChecklistItemListResponse",
    "ChecklistItemResponse",
    "CreateChecklistItemRequest",
    "CreateNocRequest",
    "EligibleStudentListResponse",
    "HealthResponse",
    "NocRequestListResponse",
    "NocRequestResponse",
    "NocStatisticsResponse",
    "ProblemDetailResponse",
    "RejectNocRequest",
    "ReorderChecklistRequest",
    "SendForCorrectionRequest",
    "UpdateChecklistItemRequest",
    "VerifyNocRequest",
]
