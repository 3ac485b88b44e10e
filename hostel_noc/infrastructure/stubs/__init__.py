"""In-memory stub implementations of the application ports.

Used by the API's default wiring and by the tests. Not for production.
"""

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
from hostel_noc.infrastructure.stubs.notifier_stub import NotifierStub, SentNotification
from hostel_noc.infrastructure.stubs.student_directory_stub import StudentDirectoryStub

__all__: list[str] = [
    "AccountDeactivationStub",
    "AuthorizationPolicyStub",
    "ChecklistItemRepositoryStub",
    "NocRequestRepositoryStub",
    "NotifierStub",
    "SentNotification",
    "StudentDirectoryStub",
]
