"""Configuration Pydantic models for license-graph."""
from __future__ import annotations

from pydantic import BaseModel, Field

from license_graph.constants import DEFAULT_MAX_PATH_DEPTH, DEFAULT_SEARCH_LIMIT
from license_graph.models.license import EffortLevel


class RiskWeights(BaseModel):
    """Weights of the dependency tree risk score.

    The score is the weighted sum of the counts below, clamped to [0, 1].
    """

    model_config = {"extra": "forbid"}

    blocking_conflict: float = Field(default=0.3, ge=0)
    review_conflict: float = Field(default=0.1, ge=0)
    very_high_effort_obligation: float = Field(default=0.15, ge=0)
    high_effort_obligation: float = Field(default=0.08, ge=0)
    strong_copyleft_license: float = Field(
        default=0.05,
        ge=0,
        description="Per strong or network copyleft license in the tree",
    )
    unknown_license: float = Field(
        default=0.05,
        ge=0,
        description="Per license id missing from the graph",
    )


class EngineConfig(BaseModel):
    """Configuration for license-graph.

    All fields have defaults so a partial (or empty) file is valid.
    """

    model_config = {"extra": "forbid"}

    max_path_depth: int = Field(
        default=DEFAULT_MAX_PATH_DEPTH,
        ge=1,
        description="Maximum number of hops explored by path search.",
    )
    search_limit: int = Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=1,
        description="Maximum number of results returned by license search.",
    )
    recommendation_effort_threshold: EffortLevel = Field(
        default=EffortLevel.HIGH,
        description="Obligations at or above this effort get a recommendation.",
    )
    risk_weights: RiskWeights = Field(default_factory=RiskWeights)
