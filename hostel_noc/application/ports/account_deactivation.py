"""Account deactivation port.

Deactivating a student's account is irreversible. Implementations must
be safe to call again for an already-deactivated student.
"""

from __future__ import annotations

from typing import Protocol


class AccountDeactivationProtocol(Protocol):
    """Protocol for the account deactivation capability."""

    async def deactivate_account(self, student_id: str) -> bool:
        """Deactivate the student's account.

        Returns:
            True on success, False if the collaborator refused.

        Raises:
            Exception: Transport or collaborator errors. The caller treats
                these, a False result and a timeout alike.
        """
        ...
