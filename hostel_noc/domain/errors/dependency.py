"""Errors for failed calls to external collaborators."""

from __future__ import annotations

from hostel_noc.domain.exceptions import HostelNocError


class DependencyFailureError(HostelNocError):
    """Raised when an external collaborator call fails or times out.

    The workflow state is left untouched, so the same operation is safe
    to retry.

    Attributes:
        dependency: Name of the collaborator capability that failed.
        reason: Short description of the failure.
        timed_out: True if the call exceeded its timeout.
    """

    def __init__(self, dependency: str, reason: str, timed_out: bool = False) -> None:
        self.dependency = dependency
        self.reason = reason
        self.timed_out = timed_out
        super().__init__(f"Dependency '{dependency}' failed: {reason}. Safe to retry.")
