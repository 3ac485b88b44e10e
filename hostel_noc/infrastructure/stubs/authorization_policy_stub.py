"""Authorization policy stub implementation.

Students may act only for themselves and admins for everyone. Wardens
act for the students assigned to them; a warden with no assignment
registered covers every student, which suits single-hostel setups and
most tests.
"""

from __future__ import annotations

from hostel_noc.application.ports.authorization_policy import (
    AuthorizationPolicyProtocol,
)
from hostel_noc.domain.models.actor import Actor, ActorRole


class AuthorizationPolicyStub(AuthorizationPolicyProtocol):
    """In-memory stub implementation of AuthorizationPolicyProtocol.

    Attributes:
        _warden_students: Map of warden actor_id to the student ids in
            that warden's cohort.
    """

    def __init__(self, warden_students: dict[str, set[str]] | None = None) -> None:
        """Initialize the stub.

        Args:
            warden_students: Optional cohort assignments per warden.
        """
        self._warden_students: dict[str, set[str]] = {
            warden_id: set(students) for warden_id, students in (warden_students or {}).items()
        }

    def assign_students(self, warden_id: str, student_ids: set[str]) -> None:
        """Set the cohort of a warden (for testing)."""
        self._warden_students[warden_id] = set(student_ids)

    async def can_act_for_student(self, actor: Actor, student_id: str) -> bool:
        """Return True if actor may act on requests of student_id."""
        if actor.role == ActorRole.ADMIN:
            return True
        if actor.role == ActorRole.STUDENT:
            return actor.actor_id == student_id
        cohort = self._warden_students.get(actor.actor_id)
        return cohort is None or student_id in cohort

    def clear(self) -> None:
        """Remove all cohort assignments (for testing)."""
        self._warden_students.clear()
