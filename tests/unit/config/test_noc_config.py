"""Unit tests for NocWorkflowConfig.

Tests for NOC workflow configuration including:
- Default values
- Environment variable loading
- Input validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from hostel_noc.config.noc_config import (
    DEFAULT_NOC_WORKFLOW_CONFIG,
    NocWorkflowConfig,
    get_app_environment,
)


class TestNocWorkflowConfig:
    """Tests for the NocWorkflowConfig dataclass."""

    class TestDefaults:
        """Tests for default configuration values."""

        def test_default_values(self) -> None:
            config = NocWorkflowConfig()
            assert config.reason_min_length == 10
            assert config.reason_max_length == 500
            assert config.deactivation_timeout_seconds == 10.0
            assert config.lookup_timeout_seconds == 5.0
            assert config.notification_timeout_seconds == 2.0

        def test_default_constant_matches(self) -> None:
            assert DEFAULT_NOC_WORKFLOW_CONFIG == NocWorkflowConfig()

        def test_config_is_frozen(self) -> None:
            with pytest.raises(AttributeError):
                DEFAULT_NOC_WORKFLOW_CONFIG.reason_min_length = 1  # type: ignore[misc]

    class TestValidation:
        """Tests for __post_init__ validation."""

        def test_min_length_must_be_positive(self) -> None:
            with pytest.raises(ValueError, match="reason_min_length must be positive"):
                NocWorkflowConfig(reason_min_length=0)

        def test_max_below_min_rejected(self) -> None:
            with pytest.raises(ValueError, match="reason_max_length"):
                NocWorkflowConfig(reason_min_length=20, reason_max_length=19)

        @pytest.mark.parametrize(
            "field",
            [
                "deactivation_timeout_seconds",
                "lookup_timeout_seconds",
                "notification_timeout_seconds",
            ],
        )
        def test_timeouts_must_be_positive(self, field: str) -> None:
            with pytest.raises(ValueError, match=field):
                NocWorkflowConfig(**{field: 0})

        @pytest.mark.parametrize("value", [float("nan"), float("inf")])
        def test_timeouts_must_be_finite(self, value: float) -> None:
            with pytest.raises(ValueError, match="positive and finite"):
                NocWorkflowConfig(deactivation_timeout_seconds=value)

    class TestFromEnvironment:
        """Tests for loading from environment variables."""

        def test_defaults_without_env(self) -> None:
            with patch.dict(os.environ, {}, clear=True):
                assert NocWorkflowConfig.from_environment() == NocWorkflowConfig()

        def test_env_overrides(self) -> None:
            env = {
                "NOC_REASON_MIN_LENGTH": "5",
                "NOC_REASON_MAX_LENGTH": "200",
                "NOC_DEACTIVATION_TIMEOUT_SECONDS": "3.5",
                "NOC_LOOKUP_TIMEOUT_SECONDS": "1",
                "NOC_NOTIFICATION_TIMEOUT_SECONDS": "0.5",
            }
            with patch.dict(os.environ, env, clear=True):
                config = NocWorkflowConfig.from_environment()

            assert config.reason_min_length == 5
            assert config.reason_max_length == 200
            assert config.deactivation_timeout_seconds == 3.5
            assert config.lookup_timeout_seconds == 1.0
            assert config.notification_timeout_seconds == 0.5

        def test_unparseable_values_fall_back(self) -> None:
            env = {
                "NOC_REASON_MIN_LENGTH": "ten",
                "NOC_DEACTIVATION_TIMEOUT_SECONDS": "soon",
            }
            with patch.dict(os.environ, env, clear=True):
                config = NocWorkflowConfig.from_environment()

            assert config.reason_min_length == 10
            assert config.deactivation_timeout_seconds == 10.0

        def test_non_finite_timeouts_fall_back(self) -> None:
            env = {
                "NOC_DEACTIVATION_TIMEOUT_SECONDS": "nan",
                "NOC_LOOKUP_TIMEOUT_SECONDS": "inf",
                "NOC_NOTIFICATION_TIMEOUT_SECONDS": "-inf",
            }
            with patch.dict(os.environ, env, clear=True):
                config = NocWorkflowConfig.from_environment()

            assert config.deactivation_timeout_seconds == 10.0
            assert config.lookup_timeout_seconds == 5.0
            assert config.notification_timeout_seconds == 2.0

        def test_invalid_combination_raises(self) -> None:
            env = {"NOC_REASON_MIN_LENGTH": "600"}
            with patch.dict(os.environ, env, clear=True), pytest.raises(ValueError):
                NocWorkflowConfig.from_environment()


class TestAppEnvironment:
    """Tests for get_app_environment()."""

    def test_defaults_to_production(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert get_app_environment() == "production"

    def test_lower_cased(self) -> None:
        with patch.dict(os.environ, {"APP_ENVIRONMENT": " Development "}, clear=True):
            assert get_app_environment() == "development"
