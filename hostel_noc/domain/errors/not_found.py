"""Not-found errors for requests, checklist items and students."""

from __future__ import annotations

from uuid import UUID

from hostel_noc.domain.exceptions import HostelNocError


class NotFoundError(HostelNocError):
    """Base error for a referenced entity that does not exist.

    No mutation happens when this is raised.
    """

    pass


class NocRequestNotFoundError(NotFoundError):
    """Raised when a NOC request cannot be found.

    Attributes:
        request_id: The request ID that was not found.
    """

    def __init__(self, request_id: UUID) -> None:
        self.request_id = request_id
        super().__init__(f"NOC request not found: {request_id}")


class ChecklistItemNotFoundError(NotFoundError):
    """Raised when a checklist item cannot be found.

    Attributes:
        item_id: The checklist item ID that was not found.
    """

    def __init__(self, item_id: UUID) -> None:
        self.item_id = item_id
        super().__init__(f"Checklist item not found: {item_id}")


class StudentNotFoundError(NotFoundError):
    """Raised when the student directory has no record for a student.

    Attributes:
        student_id: The student ID that was not found.
    """

    def __init__(self, student_id: str) -> None:
        self.student_id = student_id
        super().__init__(f"Student not found: {student_id}")
