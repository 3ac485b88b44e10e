"""Bounded calls to external collaborators.

Every call leaving the workflow core (student lookup, account
deactivation) goes through call_dependency(): it is bounded by a timeout,
and any failure, timeout included, surfaces as DependencyFailureError so
the caller can retry the whole operation.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from hostel_noc.domain.errors.dependency import DependencyFailureError

T = TypeVar("T")


async def call_dependency(
    dependency: str,
    awaitable: Awaitable[T],
    timeout_seconds: float,
) -> T:
    """Await a collaborator call with a timeout.

    Args:
        dependency: Capability name, used in the error message.
        awaitable: The pending collaborator call.
        timeout_seconds: Upper bound on the call.

    Returns:
        The collaborator's result.

    Raises:
        DependencyFailureError: On timeout or on any collaborator exception.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise DependencyFailureError(
            dependency=dependency,
            reason=f"timed out after {timeout_seconds}s",
            timed_out=True,
        ) from e
    except DependencyFailureError:
        raise
    except Exception as e:
        raise DependencyFailureError(dependency=dependency, reason=str(e) or type(e).__name__) from e
