"""Configuration for the NOC workflow."""

from hostel_noc.config.noc_config import (
    DEFAULT_NOC_WORKFLOW_CONFIG,
    NocWorkflowConfig,
    get_app_environment,
)

__all__: list[str] = [
    "DEFAULT_NOC_WORKFLOW_CONFIG",
    "NocWorkflowConfig",
    "get_app_environment",
]
