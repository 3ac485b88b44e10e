"""RFC 7807 problem details for workflow errors.

Each domain error class maps to one HTTP status and one error URN.
Routes catch HostelNocError and raise the HTTPException built here.

| Error                     | Status |
|---------------------------|--------|
| ValidationError           | 400    |
| UnauthorizedActorError    | 403    |
| NotFoundError             | 404    |
| InvalidTransitionError    | 409    |
| ConcurrencyConflictError  | 409    |
| DependencyFailureError    | 503    |
"""

from fastapi import HTTPException, Request

from hostel_noc.domain.errors import (
    ConcurrencyConflictError,
    DependencyFailureError,
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedActorError,
    ValidationError,
)
from hostel_noc.domain.exceptions import HostelNocError

DEPENDENCY_RETRY_AFTER_SECONDS = 5

# (error class, status, URN suffix, title); first match wins
_PROBLEM_TYPES: list[tuple[type[HostelNocError], int, str, str]] = [
    (ValidationError, 400, "validation", "Validation Failed"),
    (UnauthorizedActorError, 403, "unauthorized-actor", "Not Permitted"),
    (NotFoundError, 404, "not-found", "Not Found"),
    (InvalidTransitionError, 409, "invalid-transition", "Invalid Transition"),
    (ConcurrencyConflictError, 409, "concurrency-conflict", "Concurrent Modification"),
    (DependencyFailureError, 503, "dependency-failure", "Dependency Unavailable"),
]


def to_http_exception(error: HostelNocError, request: Request) -> HTTPException:
    """Build the HTTPException for a workflow error.

    Args:
        error: The raised workflow error.
        request: Current request, used for the problem "instance".

    Returns:
        HTTPException carrying an RFC 7807 body.
    """
    status_code, slug, title = 500, "internal", "Internal Error"
    for error_class, code, urn, label in _PROBLEM_TYPES:
        if isinstance(error, error_class):
            status_code, slug, title = code, urn, label
            break

    detail: dict[str, object] = {
        "type": f"urn:hostel-noc:error:{slug}",
        "title": title,
        "status": status_code,
        "detail": str(error),
        "instance": str(request.url),
    }
    headers: dict[str, str] | None = None

    if isinstance(error, ValidationError) and error.field:
        detail["field"] = error.field
    elif isinstance(error, InvalidTransitionError):
        detail["current_status"] = error.current_status.value if error.current_status else None
        detail["action"] = error.action.value
    elif isinstance(error, DependencyFailureError):
        detail["dependency"] = error.dependency
        headers = {"Retry-After": str(DEPENDENCY_RETRY_AFTER_SECONDS)}

    return HTTPException(status_code=status_code, detail=detail, headers=headers)
