"""NOC workflow configuration.

This module defines the tunable limits of the exit-clearance workflow
with environment variable overrides.

Environment Variables:
- NOC_REASON_MIN_LENGTH: Minimum request reason length (default: 10)
- NOC_REASON_MAX_LENGTH: Maximum request reason length (default: 500)
- NOC_DEACTIVATION_TIMEOUT_SECONDS: Bound on the account deactivation call (default: 10.0)
- NOC_LOOKUP_TIMEOUT_SECONDS: Bound on student directory calls (default: 5.0)
- NOC_NOTIFICATION_TIMEOUT_SECONDS: Bound on each notification delivery (default: 2.0)
- APP_ENVIRONMENT: "production" (JSON logs) or "development" (console logs)
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

APP_ENVIRONMENT_ENV = "APP_ENVIRONMENT"
DEFAULT_APP_ENVIRONMENT = "production"


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Non-finite values such as "nan" or "inf" fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) else default


def get_app_environment() -> str:
    """Return the deployment environment name, lower-cased."""
    return os.environ.get(APP_ENVIRONMENT_ENV, DEFAULT_APP_ENVIRONMENT).strip().lower()


@dataclass(frozen=True)
class NocWorkflowConfig:
    """Configuration for the NOC exit-clearance workflow.

    Attributes:
        reason_min_length: Minimum characters in a request reason.
        reason_max_length: Maximum characters in a request reason.
        deactivation_timeout_seconds: Timeout for the account deactivation
            call. A timeout is a retryable dependency failure.
        lookup_timeout_seconds: Timeout for student directory calls.
        notification_timeout_seconds: Timeout for one notification delivery.
            Notifications are best-effort; a timeout is logged, not raised.
    """

    reason_min_length: int = 10
    reason_max_length: int = 500
    deactivation_timeout_seconds: float = 10.0
    lookup_timeout_seconds: float = 5.0
    notification_timeout_seconds: float = 2.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.reason_min_length < 1:
            raise ValueError(
                f"reason_min_length must be positive, got {self.reason_min_length}"
            )
        if self.reason_max_length < self.reason_min_length:
            raise ValueError(
                f"reason_max_length ({self.reason_max_length}) must be at least "
                f"reason_min_length ({self.reason_min_length})"
            )
        for field in (
            "deactivation_timeout_seconds",
            "lookup_timeout_seconds",
            "notification_timeout_seconds",
        ):
            seconds = getattr(self, field)
            if not (math.isfinite(seconds) and seconds > 0):
                raise ValueError(f"{field} must be positive and finite, got {seconds}")

    @classmethod
    def from_environment(cls) -> NocWorkflowConfig:
        """Create config from environment variables with defaults.

        Unparseable values fall back to the defaults.
        """
        return cls(
            reason_min_length=_get_int_env("NOC_REASON_MIN_LENGTH", 10),
            reason_max_length=_get_int_env("NOC_REASON_MAX_LENGTH", 500),
            deactivation_timeout_seconds=_get_float_env(
                "NOC_DEACTIVATION_TIMEOUT_SECONDS", 10.0
            ),
            lookup_timeout_seconds=_get_float_env("NOC_LOOKUP_TIMEOUT_SECONDS", 5.0),
            notification_timeout_seconds=_get_float_env(
                "NOC_NOTIFICATION_TIMEOUT_SECONDS", 2.0
            ),
        )


DEFAULT_NOC_WORKFLOW_CONFIG = NocWorkflowConfig()
