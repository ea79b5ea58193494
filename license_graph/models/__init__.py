"""Pydantic data models for license-graph."""

from license_graph.models.analysis import (
    AggregatedObligation,
    AggregatedObligations,
    ComplianceRecommendation,
    ComplianceStatus,
    ConflictSeverity,
    DependencyLicense,
    DependencyTreeAnalysis,
    DistributionScope,
    DominantLicenseInfo,
    GraphStatistics,
    LicenseConflict,
    LicenseDetails,
    ObligationSource,
    ObligationWithDistribution,
    RecommendationPriority,
    RecommendationType,
)
from license_graph.models.compatibility import (
    CompatibilityDirection,
    CompatibilityEdge,
    CompatibilityLevel,
    CompatibilityMatrix,
    CompatibilityPath,
    CompatibilityResult,
    CompatibilityStep,
)
from license_graph.models.config import EngineConfig, RiskWeights
from license_graph.models.license import (
    CopyleftStrength,
    EffortLevel,
    LicenseCategory,
    LicenseNode,
    Obligation,
    ObligationAssignment,
    ObligationScope,
    ObligationWithScope,
    Right,
    RightAssignment,
    RightScope,
    TriggerCondition,
)

__all__ = [
    "AggregatedObligation",
    "AggregatedObligations",
    "CompatibilityDirection",
    "CompatibilityEdge",
    "CompatibilityLevel",
    "CompatibilityMatrix",
    "CompatibilityPath",
    "CompatibilityResult",
    "CompatibilityStep",
    "ComplianceRecommendation",
    "ComplianceStatus",
    "ConflictSeverity",
    "CopyleftStrength",
    "DependencyLicense",
    "DependencyTreeAnalysis",
    "DistributionScope",
    "DominantLicenseInfo",
    "EffortLevel",
    "EngineConfig",
    "GraphStatistics",
    "LicenseCategory",
    "LicenseConflict",
    "LicenseDetails",
    "LicenseNode",
    "Obligation",
    "ObligationAssignment",
    "ObligationScope",
    "ObligationSource",
    "ObligationWithDistribution",
    "ObligationWithScope",
    "RecommendationPriority",
    "RecommendationType",
    "Right",
    "RightAssignment",
    "RightScope",
    "RiskWeights",
    "TriggerCondition",
]
