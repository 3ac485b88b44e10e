"""Factories for NOC workflow tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from hostel_noc.application.services.approval_coordinator import ApprovalCoordinator
from hostel_noc.application.services.checklist_config_service import (
    ChecklistConfigService,
)
from hostel_noc.application.services.noc_notification_service import (
    NocNotificationService,
)
from hostel_noc.application.services.noc_workflow_service import NocWorkflowService
from hostel_noc.application.services.verification_recorder import VerificationRecorder
from hostel_noc.config.noc_config import NocWorkflowConfig
from hostel_noc.domain.models.actor import Actor, ActorRole
from hostel_noc.domain.models.noc_request import NocRequest, StudentSnapshot
from hostel_noc.domain.services.noc_transition_engine import NocTransitionEngine
from hostel_noc.infrastructure.stubs import (
    AccountDeactivationStub,
    AuthorizationPolicyStub,
    ChecklistItemRepositoryStub,
    NocRequestRepositoryStub,
    NotifierStub,
    StudentDirectoryStub,
)

STUDENT_ID = "stu-1001"
OTHER_STUDENT_ID = "stu-2002"
VALID_REASON = "Completed my course and leaving hostel"

STUDENT = Actor(actor_id=STUDENT_ID, role=ActorRole.STUDENT)
OTHER_STUDENT = Actor(actor_id=OTHER_STUDENT_ID, role=ActorRole.STUDENT)
WARDEN = Actor(actor_id="warden-1", role=ActorRole.WARDEN)
ADMIN = Actor(actor_id="admin-1", role=ActorRole.ADMIN)


def make_snapshot(name: str = "Asha Verma", roll_number: str = "21CS1001") -> StudentSnapshot:
    """Build a student profile snapshot."""
    return StudentSnapshot(
        name=name,
        roll_number=roll_number,
        course="B.Tech",
        branch="CSE",
        year=4,
        academic_year="2025-26",
    )


def make_request(
    student_id: str = STUDENT_ID,
    raised_by: Actor = STUDENT,
    reason: str = VALID_REASON,
    request_id: UUID | None = None,
    at: datetime | None = None,
) -> NocRequest:
    """Build a PENDING request at revision 1."""
    return NocRequest.open(
        request_id=request_id or uuid4(),
        student_id=student_id,
        student=make_snapshot(),
        reason=reason,
        raised_by=raised_by,
        at=at,
    )


@dataclass
class WorkflowHarness:
    """A workflow service wired to in-memory stubs, with the stubs exposed."""

    service: NocWorkflowService
    requests: NocRequestRepositoryStub
    checklist: ChecklistItemRepositoryStub
    directory: StudentDirectoryStub
    deactivation: AccountDeactivationStub
    notifier: NotifierStub
    authorization: AuthorizationPolicyStub
    engine: NocTransitionEngine
    config: NocWorkflowConfig


def build_harness(config: NocWorkflowConfig | None = None) -> WorkflowHarness:
    """Wire a NocWorkflowService the way the bootstrap module does.

    Timeouts default to 0.2s so timeout tests stay fast.
    """
    config = config or NocWorkflowConfig(
        deactivation_timeout_seconds=0.2,
        lookup_timeout_seconds=0.2,
        notification_timeout_seconds=0.2,
    )
    requests = NocRequestRepositoryStub()
    checklist = ChecklistItemRepositoryStub()
    directory = StudentDirectoryStub()
    directory.add_student(STUDENT_ID, make_snapshot())
    directory.add_student(OTHER_STUDENT_ID, make_snapshot("Ravi Kumar", "21ME2002"))
    deactivation = AccountDeactivationStub()
    notifier = NotifierStub()
    authorization = AuthorizationPolicyStub()
    engine = NocTransitionEngine(config.reason_min_length, config.reason_max_length)
    notifications = NocNotificationService(notifier, config=config)

    service = NocWorkflowService(
        request_repo=requests,
        checklist_service=ChecklistConfigService(checklist),
        verification_recorder=VerificationRecorder(requests, checklist, engine),
        approval_coordinator=ApprovalCoordinator(
            requests, deactivation, notifications, engine, config=config
        ),
        notification_service=notifications,
        student_directory=directory,
        authorization=authorization,
        engine=engine,
        config=config,
    )
    return WorkflowHarness(
        service=service,
        requests=requests,
        checklist=checklist,
        directory=directory,
        deactivation=deactivation,
        notifier=notifier,
        authorization=authorization,
        engine=engine,
        config=config,
    )
