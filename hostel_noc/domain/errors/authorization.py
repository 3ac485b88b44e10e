"""Authorization errors for ownership and cohort checks."""

from __future__ import annotations

from hostel_noc.domain.exceptions import HostelNocError


class UnauthorizedActorError(HostelNocError):
    """Raised when an actor may not act on a given student or resource.

    Distinct from InvalidTransitionError: the role may be right for the
    action, but this particular actor does not own the request or is not
    responsible for the student's cohort.

    Attributes:
        actor_id: ID of the rejected actor.
        reason: Why the actor was rejected.
    """

    def __init__(self, actor_id: str, reason: str) -> None:
        self.actor_id = actor_id
        self.reason = reason
        super().__init__(f"Actor {actor_id} is not authorized: {reason}")
