"""Application services for the NOC workflow.

Available services:
- NocWorkflowService: Facade for every student, warden and admin operation
- ChecklistConfigService: Ordered checklist item configuration
- VerificationRecorder: Checklist snapshot and VERIFY transition
- ApprovalCoordinator: APPROVE transition with account deactivation
- NocNotificationService: Best-effort notifications after transitions
"""

from hostel_noc.application.services.approval_coordinator import ApprovalCoordinator
from hostel_noc.application.services.checklist_config_service import (
    ChecklistConfigService,
)
from hostel_noc.application.services.noc_notification_service import (
    NocNotificationService,
)
from hostel_noc.application.services.noc_workflow_service import NocWorkflowService
from hostel_noc.application.services.verification_recorder import VerificationRecorder

__all__: list[str] = [
    "ApprovalCoordinator",
    "ChecklistConfigService",
    "NocNotificationService",
    "NocWorkflowService",
    "VerificationRecorder",
]
