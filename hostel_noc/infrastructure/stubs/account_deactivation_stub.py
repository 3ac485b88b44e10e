"""Account deactivation stub implementation.

Records deactivated student ids in memory. Deactivating an already
deactivated account succeeds again without changing anything, as the
real capability must.
"""

from __future__ import annotations

import asyncio

from hostel_noc.application.ports.account_deactivation import (
    AccountDeactivationProtocol,
)


class AccountDeactivationStub(AccountDeactivationProtocol):
    """In-memory stub implementation of AccountDeactivationProtocol.

    Attributes:
        deactivated: Student ids whose accounts are deactivated.
        call_count: Number of deactivate_account calls, successful or not.
    """

    def __init__(self) -> None:
        """Initialize the stub with no deactivated accounts."""
        self.deactivated: set[str] = set()
        self.call_count = 0
        self._report_failure = False
        self._fail_with: Exception | None = None
        self._delay_seconds = 0.0

    def set_report_failure(self, report_failure: bool) -> None:
        """Make calls return False instead of deactivating."""
        self._report_failure = report_failure

    def set_failure(self, error: Exception | None) -> None:
        """Make calls raise error; None restores normal behavior."""
        self._fail_with = error

    def set_delay(self, seconds: float) -> None:
        """Delay every call by seconds (timeout testing)."""
        self._delay_seconds = seconds

    async def deactivate_account(self, student_id: str) -> bool:
        """Deactivate the student's account.

        Returns:
            True on success, False when failure reporting is switched on.
        """
        self.call_count += 1
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        if self._fail_with is not None:
            raise self._fail_with
        if self._report_failure:
            return False
        self.deactivated.add(student_id)
        return True

    def is_deactivated(self, student_id: str) -> bool:
        """Check whether the student's account was deactivated."""
        return student_id in self.deactivated

    def clear(self) -> None:
        """Reset state and injected behavior (for testing)."""
        self.deactivated.clear()
        self.call_count = 0
        self._report_failure = False
        self._fail_with = None
        self._delay_seconds = 0.0
