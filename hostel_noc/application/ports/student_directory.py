"""Student directory port.

The student/account entity is owned outside the NOC workflow. The
workflow only reads it: to snapshot profile fields onto a new request,
and to let wardens find students to raise a request for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from hostel_noc.domain.models.noc_request import StudentSnapshot


@dataclass(frozen=True)
class StudentRecord:
    """A student as returned by an eligible-student search.

    Attributes:
        student_id: Directory identifier of the student.
        profile: The student's current profile fields.
    """

    student_id: str
    profile: StudentSnapshot


class StudentDirectoryProtocol(Protocol):
    """Protocol for student lookup operations."""

    async def lookup_student(self, student_id: str) -> StudentSnapshot | None:
        """Return the student's profile, or None if unknown.

        Raises:
            Exception: Any collaborator failure; the caller wraps it as
                DependencyFailureError.
        """
        ...

    async def list_eligible_students(self, query: str) -> list[StudentRecord]:
        """Search active students by name or roll number."""
        ...
