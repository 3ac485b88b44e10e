"""NOC request repository stub implementation.

This module provides an in-memory stub implementation of
NocRequestRepositoryProtocol for development and testing purposes.

Writes to an existing request are compare-and-swap on its revision,
simulated with a lock.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from hostel_noc.application.ports.noc_request_repository import (
    NocRequestRepositoryProtocol,
)
from hostel_noc.domain.errors.concurrent_modification import ConcurrencyConflictError
from hostel_noc.domain.errors.not_found import NocRequestNotFoundError
from hostel_noc.domain.models.noc_request import NocRequest, NocStatus


class NocRequestRepositoryStub(NocRequestRepositoryProtocol):
    """In-memory stub implementation of NocRequestRepositoryProtocol.

    This stub stores requests in memory for development and testing.
    It is NOT suitable for production use.

    Attributes:
        _requests: Dictionary mapping request.id to NocRequest.
        _cas_lock: Makes the revision check and the write one step.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._requests: dict[UUID, NocRequest] = {}
        self._cas_lock = asyncio.Lock()

    async def save(self, request: NocRequest) -> None:
        """Save a new request.

        Raises:
            ValueError: If request.id already exists.
        """
        async with self._cas_lock:
            if request.id in self._requests:
                raise ValueError(f"NOC request already exists: {request.id}")
            self._requests[request.id] = request

    async def get(self, request_id: UUID) -> NocRequest | None:
        """Retrieve a request by ID."""
        return self._requests.get(request_id)

    async def update_cas(self, updated: NocRequest, expected_revision: int) -> NocRequest:
        """Replace a request if its stored revision matches.

        Raises:
            NocRequestNotFoundError: If the request doesn't exist.
            ConcurrencyConflictError: If the stored revision differs.
            ValueError: If updated is not exactly the next revision.
        """
        if updated.revision != expected_revision + 1:
            raise ValueError(
                f"Updated revision must be {expected_revision + 1}, got {updated.revision}"
            )
        async with self._cas_lock:
            current = self._requests.get(updated.id)
            if current is None:
                raise NocRequestNotFoundError(updated.id)
            if current.revision != expected_revision:
                raise ConcurrencyConflictError(
                    request_id=updated.id,
                    expected_revision=expected_revision,
                    operation="update",
                )
            self._requests[updated.id] = updated
            return updated

    async def delete_cas(self, request_id: UUID, expected_revision: int) -> None:
        """Delete a request if its stored revision matches.

        Raises:
            NocRequestNotFoundError: If the request doesn't exist.
            ConcurrencyConflictError: If the stored revision differs.
        """
        async with self._cas_lock:
            current = self._requests.get(request_id)
            if current is None:
                raise NocRequestNotFoundError(request_id)
            if current.revision != expected_revision:
                raise ConcurrencyConflictError(
                    request_id=request_id,
                    expected_revision=expected_revision,
                    operation="delete",
                )
            del self._requests[request_id]

    async def list_by_student(self, student_id: str) -> list[NocRequest]:
        """List a student's requests, newest first."""
        matching = [r for r in self._requests.values() if r.student_id == student_id]
        matching.sort(key=lambda r: r.created_at, reverse=True)
        return matching

    async def list_all(self, status: NocStatus | None = None) -> list[NocRequest]:
        """List all requests, newest first, optionally filtered by status."""
        matching = [
            r for r in self._requests.values() if status is None or r.status == status
        ]
        matching.sort(key=lambda r: r.created_at, reverse=True)
        return matching

    def clear(self) -> None:
        """Clear all requests (for testing)."""
        self._requests.clear()
