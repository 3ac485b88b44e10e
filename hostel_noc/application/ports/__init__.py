"""Application ports - abstract interfaces for storage and collaborators.

Available ports:
- NocRequestRepositoryProtocol: NOC request persistence with revision checks
- ChecklistItemRepositoryProtocol: Checklist persistence with atomic replace
- StudentDirectoryProtocol: Student lookup and eligible-student search
- AccountDeactivationProtocol: Irreversible account deactivation
- NotifierProtocol: Best-effort user notifications
- AuthorizationPolicyProtocol: Ownership and warden cohort checks
"""

from hostel_noc.application.ports.account_deactivation import AccountDeactivationProtocol
from hostel_noc.application.ports.authorization_policy import AuthorizationPolicyProtocol
from hostel_noc.application.ports.checklist_item_repository import (
    ChecklistItemRepositoryProtocol,
)
from hostel_noc.application.ports.noc_request_repository import (
    NocRequestRepositoryProtocol,
)
from hostel_noc.application.ports.notifier import NotifierProtocol
from hostel_noc.application.ports.student_directory import (
    StudentDirectoryProtocol,
    StudentRecord,
)

__all__: list[str] = [
    "AccountDeactivationProtocol",
    "AuthorizationPolicyProtocol",
    "ChecklistItemRepositoryProtocol",
    "NocRequestRepositoryProtocol",
    "NotifierProtocol",
    "StudentDirectoryProtocol",
    "StudentRecord",
]
