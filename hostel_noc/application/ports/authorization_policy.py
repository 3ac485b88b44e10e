"""Authorization policy port.

Which warden is responsible for which student depends on the hostel's
cohort assignment (hostel block, gender). That knowledge lives outside
the workflow and is asked for through this port before delegating to
the transition engine.
"""

from __future__ import annotations

from typing import Protocol

from hostel_noc.domain.models.actor import Actor


class AuthorizationPolicyProtocol(Protocol):
    """Protocol for ownership and cohort authorization."""

    async def can_act_for_student(self, actor: Actor, student_id: str) -> bool:
        """Return True if actor may act on requests of student_id.

        Expected semantics:
        - student: only their own student_id
        - warden: students in the warden's cohort
        - admin: every student
        """
        ...
