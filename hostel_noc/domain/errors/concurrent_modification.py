"""Concurrency conflict error for optimistic revision checks.

This error is raised when a compare-and-swap write finds that the stored
request no longer has the revision the writer read. Another operation
won the race; the caller should re-read the request and decide whether
to retry.
"""

from __future__ import annotations

from uuid import UUID

from hostel_noc.domain.exceptions import HostelNocError


class ConcurrencyConflictError(HostelNocError):
    """Raised when a competing transition won the race on the same request.

    Attributes:
        request_id: UUID of the request that was being modified.
        expected_revision: The revision the writer expected to replace.
        operation: Description of the operation that failed.
    """

    def __init__(
        self,
        request_id: UUID,
        expected_revision: int,
        operation: str = "transition",
    ) -> None:
        self.request_id = request_id
        self.expected_revision = expected_revision
        self.operation = operation
        super().__init__(
            f"Concurrent modification detected for NOC request {request_id} "
            f"during {operation}. Expected revision: {expected_revision}. "
            "Re-read the request and retry."
        )
