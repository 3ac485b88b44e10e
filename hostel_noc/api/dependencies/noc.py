"""NOC API dependencies.

Thin FastAPI-facing accessors over the composition root. Tests reset
state between cases with reset_noc_dependencies().
"""

from hostel_noc.application.services.noc_workflow_service import NocWorkflowService
from hostel_noc.bootstrap.noc import get_noc_workflow_service as _get_workflow_service
from hostel_noc.bootstrap.noc import reset_noc_dependencies as _reset


def get_noc_workflow_service() -> NocWorkflowService:
    """Get the NOC workflow service instance."""
    return _get_workflow_service()


def reset_noc_dependencies() -> None:
    """Reset all singleton instances for testing."""
    _reset()
