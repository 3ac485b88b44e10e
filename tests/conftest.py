"""
Pytest configuration and shared fixtures for hostel NOC tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator spying
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from hostel_noc.domain.models.actor import Actor
from tests.helpers.noc_factories import (
    ADMIN,
    OTHER_STUDENT,
    STUDENT,
    WARDEN,
    WorkflowHarness,
    build_harness,
)


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from hostel_noc import __version__

    return __version__


@pytest.fixture
def student() -> Actor:
    return STUDENT


@pytest.fixture
def other_student() -> Actor:
    return OTHER_STUDENT


@pytest.fixture
def warden() -> Actor:
    return WARDEN


@pytest.fixture
def admin() -> Actor:
    return ADMIN


@pytest.fixture
def harness() -> WorkflowHarness:
    """Fresh workflow service and stubs for each test."""
    return build_harness()
