"""Bootstrap wiring for NOC workflow dependencies.

Builds one process-wide instance of every port implementation and
service. Collaborators owned outside the workflow (student directory,
account deactivation, notifications, cohort authorization) are wired to
their in-memory stubs.
"""

from __future__ import annotations

from structlog import get_logger

from hostel_noc.application.ports.authorization_policy import (
    AuthorizationPolicyProtocol,
)
from hostel_noc.application.ports.checklist_item_repository import (
    ChecklistItemRepositoryProtocol,
)
from hostel_noc.application.ports.noc_request_repository import (
    NocRequestRepositoryProtocol,
)
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
from hostel_noc.domain.services.noc_transition_engine import NocTransitionEngine
from hostel_noc.infrastructure.stubs.account_deactivation_stub import (
    AccountDeactivationStub,
)
from hostel_noc.infrastructure.stubs.authorization_policy_stub import (
    AuthorizationPolicyStub,
)
from hostel_noc.infrastructure.stubs.checklist_item_repository_stub import (
    ChecklistItemRepositoryStub,
)
from hostel_noc.infrastructure.stubs.noc_request_repository_stub import (
    NocRequestRepositoryStub,
)
from hostel_noc.infrastructure.stubs.notifier_stub import NotifierStub
from hostel_noc.infrastructure.stubs.student_directory_stub import StudentDirectoryStub

logger = get_logger()

_config: NocWorkflowConfig | None = None
_request_repository: NocRequestRepositoryProtocol | None = None
_checklist_repository: ChecklistItemRepositoryProtocol | None = None
_student_directory: StudentDirectoryStub | None = None
_account_deactivation: AccountDeactivationStub | None = None
_notifier: NotifierStub | None = None
_authorization: AuthorizationPolicyProtocol | None = None
_workflow_service: NocWorkflowService | None = None


def get_noc_config() -> NocWorkflowConfig:
    """Get workflow configuration, loaded from the environment once."""
    global _config
    if _config is None:
        _config = NocWorkflowConfig.from_environment()
    return _config


def get_noc_request_repository() -> NocRequestRepositoryProtocol:
    """Get NOC request repository instance (in-memory stub)."""
    global _request_repository
    if _request_repository is None:
        _request_repository = NocRequestRepositoryStub()
        logger.warning(
            "noc_repository_initialized",
            repository_type="in-memory",
            message="Requests are not persisted across restarts",
        )
    return _request_repository


def get_checklist_item_repository() -> ChecklistItemRepositoryProtocol:
    """Get checklist item repository instance (in-memory stub)."""
    global _checklist_repository
    if _checklist_repository is None:
        _checklist_repository = ChecklistItemRepositoryStub()
    return _checklist_repository


def get_student_directory() -> StudentDirectoryStub:
    """Get student directory instance (in-memory stub)."""
    global _student_directory
    if _student_directory is None:
        _student_directory = StudentDirectoryStub()
    return _student_directory


def get_account_deactivation() -> AccountDeactivationStub:
    """Get account deactivation instance (in-memory stub)."""
    global _account_deactivation
    if _account_deactivation is None:
        _account_deactivation = AccountDeactivationStub()
    return _account_deactivation


def get_notifier() -> NotifierStub:
    """Get notifier instance (in-memory stub)."""
    global _notifier
    if _notifier is None:
        _notifier = NotifierStub()
    return _notifier


def get_authorization_policy() -> AuthorizationPolicyProtocol:
    """Get authorization policy instance (in-memory stub)."""
    global _authorization
    if _authorization is None:
        _authorization = AuthorizationPolicyStub()
    return _authorization


def get_noc_workflow_service() -> NocWorkflowService:
    """Get the workflow service, wired to the instances above."""
    global _workflow_service
    if _workflow_service is None:
        config = get_noc_config()
        engine = NocTransitionEngine(
            reason_min_length=config.reason_min_length,
            reason_max_length=config.reason_max_length,
        )
        request_repo = get_noc_request_repository()
        checklist_repo = get_checklist_item_repository()
        notifications = NocNotificationService(get_notifier(), config=config)
        _workflow_service = NocWorkflowService(
            request_repo=request_repo,
            checklist_service=ChecklistConfigService(checklist_repo),
            verification_recorder=VerificationRecorder(request_repo, checklist_repo, engine),
            approval_coordinator=ApprovalCoordinator(
                request_repo,
                get_account_deactivation(),
                notifications,
                engine,
                config=config,
            ),
            notification_service=notifications,
            student_directory=get_student_directory(),
            authorization=get_authorization_policy(),
            engine=engine,
            config=config,
        )
    return _workflow_service


def reset_noc_dependencies() -> None:
    """Reset all singleton instances for testing.

    Call this in test fixtures to ensure clean state between tests.
    """
    global _config
    global _request_repository
    global _checklist_repository
    global _student_directory
    global _account_deactivation
    global _notifier
    global _authorization
    global _workflow_service

    _config = None
    _request_repository = None
    _checklist_repository = None
    _student_directory = None
    _account_deactivation = None
    _notifier = None
    _authorization = None
    _workflow_service = None


def set_noc_config(config: NocWorkflowConfig) -> None:
    """Set custom configuration for testing."""
    global _config, _workflow_service
    _config = config
    _workflow_service = None  # Force service recreation


def set_authorization_policy(policy: AuthorizationPolicyProtocol) -> None:
    """Set custom authorization policy for testing."""
    global _authorization, _workflow_service
    _authorization = policy
    _workflow_service = None  # Force service recreation
