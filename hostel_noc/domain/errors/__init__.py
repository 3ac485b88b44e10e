"""Domain errors for the NOC workflow.

Every error raised by the workflow core inherits from HostelNocError.
Callers branch on the concrete class, the api layer maps each class to
an HTTP status.
"""

from hostel_noc.domain.errors.authorization import UnauthorizedActorError
from hostel_noc.domain.errors.concurrent_modification import ConcurrencyConflictError
from hostel_noc.domain.errors.dependency import DependencyFailureError
from hostel_noc.domain.errors.not_found import (
    ChecklistItemNotFoundError,
    NocRequestNotFoundError,
    NotFoundError,
    StudentNotFoundError,
)
from hostel_noc.domain.errors.state_transition import InvalidTransitionError
from hostel_noc.domain.errors.validation import ValidationError

__all__: list[str] = [
    "ChecklistItemNotFoundError",
    "ConcurrencyConflictError",
    "DependencyFailureError",
    "InvalidTransitionError",
    "NocRequestNotFoundError",
    "NotFoundError",
    "StudentNotFoundError",
    "UnauthorizedActorError",
    "ValidationError",
]
