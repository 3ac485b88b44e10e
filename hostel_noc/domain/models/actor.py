"""Acting user identity and role."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActorRole(Enum):
    """Role of the user performing a workflow action."""

    STUDENT = "student"
    WARDEN = "warden"
    ADMIN = "admin"


@dataclass(frozen=True, eq=True)
class Actor:
    """An authenticated user acting on the workflow.

    Attributes:
        actor_id: Opaque user identifier. For students this is the
            student id used by the student directory.
        role: The role the user acts in.
    """

    actor_id: str
    role: ActorRole

    def __post_init__(self) -> None:
        if not self.actor_id:
            raise ValueError("actor_id must be non-empty")
