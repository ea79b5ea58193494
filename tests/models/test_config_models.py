"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from license_graph.constants import DEFAULT_MAX_PATH_DEPTH, DEFAULT_SEARCH_LIMIT
from license_graph.models.config import EngineConfig, RiskWeights
from license_graph.models.license import EffortLevel


class TestEngineConfig:
    """Tests for EngineConfig model."""

    def test_defaults(self) -> None:
        """Test the default configuration."""
        config = EngineConfig()
        assert config.max_path_depth == DEFAULT_MAX_PATH_DEPTH
        assert config.search_limit == DEFAULT_SEARCH_LIMIT
        assert config.recommendation_effort_threshold == EffortLevel.HIGH
        assert config.risk_weights == RiskWeights()

    def test_depth_must_be_positive(self) -> None:
        """Test max_path_depth below 1 is rejected."""
        with pytest.raises(ValidationError):
            EngineConfig(max_path_depth=0)

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown keys are rejected."""
        with pytest.raises(ValidationError):
            EngineConfig.model_validate({"allowed_licenses": ["MIT"]})

    def test_partial_weights(self) -> None:
        """Test unspecified weights keep their defaults."""
        config = EngineConfig.model_validate({"risk_weights": {"blocking_conflict": 0.5}})
        assert config.risk_weights.blocking_conflict == 0.5
        assert config.risk_weights.review_conflict == 0.1


class TestRiskWeights:
    """Tests for RiskWeights model."""

    def test_negative_weight_rejected(self) -> None:
        """Test weights cannot be negative."""
        with pytest.raises(ValidationError):
            RiskWeights(unknown_license=-0.1)

    def test_defaults(self) -> None:
        """Test default weights."""
        weights = RiskWeights()
        assert weights.blocking_conflict == 0.3
        assert weights.very_high_effort_obligation == 0.15
        assert weights.high_effort_obligation == 0.08
