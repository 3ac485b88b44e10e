"""Student directory stub implementation.

In-memory student directory for development and testing. Supports
failure and delay injection so callers' timeout handling can be tested.
"""

from __future__ import annotations

import asyncio

from hostel_noc.application.ports.student_directory import (
    StudentDirectoryProtocol,
    StudentRecord,
)
from hostel_noc.domain.models.noc_request import StudentSnapshot


class StudentDirectoryStub(StudentDirectoryProtocol):
    """In-memory stub implementation of StudentDirectoryProtocol.

    Attributes:
        _students: Map of student_id to profile.
        _fail_with: Exception raised by every call when set.
        _delay_seconds: Sleep before answering (timeout testing).
        lookup_count: Number of lookup_student calls.
    """

    def __init__(self) -> None:
        """Initialize the stub with no students."""
        self._students: dict[str, StudentSnapshot] = {}
        self._fail_with: Exception | None = None
        self._delay_seconds = 0.0
        self.lookup_count = 0

    def add_student(self, student_id: str, profile: StudentSnapshot) -> None:
        """Register a student (for testing)."""
        self._students[student_id] = profile

    def set_failure(self, error: Exception | None) -> None:
        """Make every call raise error; None restores normal behavior."""
        self._fail_with = error

    def set_delay(self, seconds: float) -> None:
        """Delay every call by seconds."""
        self._delay_seconds = seconds

    async def lookup_student(self, student_id: str) -> StudentSnapshot | None:
        """Return the student's profile, or None if unknown."""
        self.lookup_count += 1
        await self._simulate_io()
        return self._students.get(student_id)

    async def list_eligible_students(self, query: str) -> list[StudentRecord]:
        """Case-insensitive substring search on name and roll number."""
        await self._simulate_io()
        needle = query.strip().lower()
        return [
            StudentRecord(student_id=student_id, profile=profile)
            for student_id, profile in sorted(self._students.items())
            if needle in profile.name.lower() or needle in profile.roll_number.lower()
        ]

    async def _simulate_io(self) -> None:
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        if self._fail_with is not None:
            raise self._fail_with

    def clear(self) -> None:
        """Reset students and injected behavior (for testing)."""
        self._students.clear()
        self._fail_with = None
        self._delay_seconds = 0.0
        self.lookup_count = 0
