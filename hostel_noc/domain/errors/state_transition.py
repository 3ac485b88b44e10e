"""Invalid transition errors for the NOC request state machine.

Raised when an action is attempted from a status that does not permit
it, or by a role the action is not assigned to. The message always
names the current status, the attempted action, the acting role and the
status(es) the action requires.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from hostel_noc.domain.exceptions import HostelNocError

if TYPE_CHECKING:
    from hostel_noc.domain.models.actor import ActorRole
    from hostel_noc.domain.models.noc_request import NocAction, NocStatus


class InvalidTransitionError(HostelNocError):
    """Raised when an action is not permitted from the current status or role.

    Attributes:
        current_status: Status of the request when the action was attempted
            (None for creation, which has no prior status).
        action: The attempted action.
        actor_role: Role of the acting user.
        required_statuses: Statuses from which the action is permitted.
        required_roles: Roles the action is assigned to.
    """

    def __init__(
        self,
        current_status: NocStatus | None,
        action: NocAction,
        actor_role: ActorRole,
        required_statuses: Iterable[NocStatus] = (),
        required_roles: Iterable[ActorRole] = (),
    ) -> None:
        self.current_status = current_status
        self.action = action
        self.actor_role = actor_role
        self.required_statuses = sorted(required_statuses, key=lambda s: s.value)
        self.required_roles = sorted(required_roles, key=lambda r: r.value)

        status_str = current_status.value if current_status is not None else "none"
        required_str = (
            ", ".join(s.value for s in self.required_statuses)
            if self.required_statuses
            else "none"
        )
        role_str = (
            f" Required role: {', '.join(r.value for r in self.required_roles)}."
            if self.required_roles
            else ""
        )
        super().__init__(
            f"Invalid transition: cannot {action.value} a request in status "
            f"'{status_str}' as {actor_role.value}. "
            f"Required status: {required_str}.{role_str}"
        )
