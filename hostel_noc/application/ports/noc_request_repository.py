"""NOC request repository port.

This module defines the abstract interface for NOC request storage.

Rules for implementations:
1. FAIL LOUD - raise on errors, never drop a write
2. CAS FOR WRITES - every update or delete names the revision it replaces
3. READS ARE UNSYNCHRONIZED - list/get may return slightly stale data
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from hostel_noc.domain.models.noc_request import NocRequest, NocStatus


class NocRequestRepositoryProtocol(Protocol):
    """Protocol for NOC request storage operations.

    Methods:
        save: Store a new request
        get: Retrieve a request by ID
        update_cas: Replace a request if its stored revision matches
        delete_cas: Remove a request if its stored revision matches
        list_by_student: Requests for one student
        list_all: All requests, optionally filtered by status
    """

    async def save(self, request: NocRequest) -> None:
        """Save a new request.

        Raises:
            ValueError: If request.id already exists.
        """
        ...

    async def get(self, request_id: UUID) -> NocRequest | None:
        """Retrieve a request by ID, or None if it does not exist."""
        ...

    async def update_cas(self, updated: NocRequest, expected_revision: int) -> NocRequest:
        """Atomically replace a stored request (compare-and-swap on revision).

        The write succeeds only if the stored request still has
        expected_revision; updated.revision must be expected_revision + 1.

        Args:
            updated: The next revision of the request.
            expected_revision: Revision the caller read before deciding.

        Returns:
            The stored request.

        Raises:
            NocRequestNotFoundError: If the request no longer exists.
            ConcurrencyConflictError: If the stored revision differs.
        """
        ...

    async def delete_cas(self, request_id: UUID, expected_revision: int) -> None:
        """Atomically delete a request if its stored revision matches.

        Raises:
            NocRequestNotFoundError: If the request no longer exists.
            ConcurrencyConflictError: If the stored revision differs.
        """
        ...

    async def list_by_student(self, student_id: str) -> list[NocRequest]:
        """List a student's requests, newest first."""
        ...

    async def list_all(self, status: NocStatus | None = None) -> list[NocRequest]:
        """List all requests, newest first, optionally filtered by status."""
        ...
