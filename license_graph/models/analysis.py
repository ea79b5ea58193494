"""Analysis result models for license-graph.

Covers obligation aggregation, dependency tree analysis, license detail
views and graph statistics. Every result is created fresh per call.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from license_graph.models.compatibility import (
    CompatibilityDirection,
    CompatibilityLevel,
)
from license_graph.models.license import (
    CopyleftStrength,
    EffortLevel,
    LicenseCategory,
    LicenseNode,
    ObligationScope,
    ObligationWithScope,
    Right,
    TriggerCondition,
)


class DependencyLicense(BaseModel):
    """A dependency with its single, already resolved license."""

    dependency_id: str = Field(description="Unique dependency identifier")
    dependency_name: str = Field(description="Package name")
    dependency_version: str = Field(description="Package version")
    license_id: str = Field(description="Resolved license identifier")

    model_config = {"extra": "forbid"}


# ---------------------------------------------------------------------------
# Obligation aggregation
# ---------------------------------------------------------------------------


class ObligationSource(BaseModel):
    """A license that contributes an obligation to an aggregation."""

    license_id: str
    license_name: Optional[str] = None
    scope: ObligationScope
    trigger: TriggerCondition

    model_config = {"extra": "forbid"}


class AggregatedObligation(BaseModel):
    """One obligation merged across every license that imposes it."""

    obligation_id: str
    obligation_name: str
    description: str
    effort: EffortLevel
    sources: list[ObligationSource] = Field(default_factory=list)
    most_restrictive_scope: ObligationScope
    examples: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def source_license_ids(self) -> list[str]:
        """Ids of the licenses that triggered this obligation."""
        return [source.license_id for source in self.sources]


class AggregatedObligations(BaseModel):
    """Union of the obligations of a set of licenses."""

    obligations: list[AggregatedObligation] = Field(default_factory=list)
    total_licenses: int = Field(ge=0, description="Distinct licenses considered")
    highest_effort: Optional[EffortLevel] = None

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unique_obligation_count(self) -> int:
        """Number of distinct obligations."""
        return len(self.obligations)

    def get(self, obligation_id: str) -> Optional[AggregatedObligation]:
        """Find the aggregated record for an obligation id."""
        for obligation in self.obligations:
            if obligation.obligation_id == obligation_id:
                return obligation
        return None


class DistributionScope(Enum):
    """How the combined software reaches its users."""

    INTERNAL = "internal"
    BINARY = "binary"
    SOURCE = "source"
    SAAS = "saas"
    EMBEDDED = "embedded"


class ObligationWithDistribution(BaseModel):
    """An obligation filtered and re-weighted for a distribution scope."""

    obligation: ObligationWithScope
    distribution_scope: DistributionScope
    adjusted_effort: EffortLevel
    applicability_reason: str

    model_config = {"extra": "forbid"}


# ---------------------------------------------------------------------------
# Dependency tree analysis
# ---------------------------------------------------------------------------


class ConflictSeverity(Enum):
    """Severity of a pairwise license conflict."""

    REVIEW = "review"
    BLOCKING = "blocking"


class ComplianceStatus(Enum):
    """Coarse verdict for a dependency tree's license mix."""

    COMPLIANT = "compliant"
    REVIEW_REQUIRED = "review_required"
    BLOCKED = "blocked"


class RecommendationType(Enum):
    """Kind of remediation recommended."""

    RESOLVE_CONFLICT = "resolve_conflict"
    FULFILL_OBLIGATION = "fulfill_obligation"
    LEGAL_REVIEW = "legal_review"


class RecommendationPriority(Enum):
    """Recommendation priority, LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        """Ordinal priority level."""
        return list(RecommendationPriority).index(self)


class LicenseConflict(BaseModel):
    """A license pair that blocks the tree or needs review."""

    license_a: str
    license_b: str
    severity: ConflictSeverity
    level: CompatibilityLevel
    reason: str
    dependencies_a: list[str] = Field(
        default_factory=list,
        description="Dependencies licensed under license_a",
    )
    dependencies_b: list[str] = Field(
        default_factory=list,
        description="Dependencies licensed under license_b",
    )
    suggestions: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class DominantLicenseInfo(BaseModel):
    """The most restrictive license present in a tree."""

    license_id: str
    license_name: str
    category: LicenseCategory
    copyleft_strength: CopyleftStrength
    reason: str
    dependency_count: int = Field(ge=0)

    model_config = {"extra": "forbid"}


class ComplianceRecommendation(BaseModel):
    """A prioritized remediation step."""

    type: RecommendationType
    priority: RecommendationPriority
    title: str
    description: str
    actions: list[str] = Field(default_factory=list)
    affected: list[str] = Field(
        default_factory=list,
        description="Licenses or dependencies the recommendation concerns",
    )
    obligation_id: Optional[str] = None
    estimated_effort: Optional[EffortLevel] = None

    model_config = {"extra": "forbid"}


class DependencyTreeAnalysis(BaseModel):
    """License analysis of a flat list of dependencies."""

    total_dependencies: int = Field(ge=0)
    unique_licenses: list[str] = Field(default_factory=list)
    license_distribution: dict[str, int] = Field(default_factory=dict)
    category_distribution: dict[str, int] = Field(default_factory=dict)
    conflicts: list[LicenseConflict] = Field(default_factory=list)
    dominant_license: Optional[DominantLicenseInfo] = None
    aggregated_obligations: AggregatedObligations
    compliance_status: ComplianceStatus
    risk_score: float = Field(ge=0.0, le=1.0)
    recommendations: list[ComplianceRecommendation] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def blocking_conflicts(self) -> int:
        """Number of BLOCKING conflicts."""
        return sum(
            1 for c in self.conflicts if c.severity == ConflictSeverity.BLOCKING
        )

    @property
    def has_issues(self) -> bool:
        """True unless the tree is compliant."""
        return self.compliance_status != ComplianceStatus.COMPLIANT


# ---------------------------------------------------------------------------
# License details and statistics
# ---------------------------------------------------------------------------


class CompatibleLicenseSummary(BaseModel):
    """A license reachable through a compatible direct edge."""

    license_id: str
    license_name: str
    level: CompatibilityLevel
    direction: CompatibilityDirection
    conditions: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class IncompatibleLicenseSummary(BaseModel):
    """A license linked through an INCOMPATIBLE direct edge."""

    license_id: str
    license_name: str
    reason: str

    model_config = {"extra": "forbid"}


class LicenseDetails(BaseModel):
    """Composite view of one license and its relations."""

    license: LicenseNode
    obligations: list[ObligationWithScope] = Field(default_factory=list)
    rights: list[Right] = Field(default_factory=list)
    compatible_with: list[CompatibleLicenseSummary] = Field(default_factory=list)
    incompatible_with: list[IncompatibleLicenseSummary] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def related_license_ids(self) -> list[str]:
        """Ids reachable via any direct compatibility edge."""
        ids = [s.license_id for s in self.compatible_with]
        ids.extend(s.license_id for s in self.incompatible_with)
        return sorted(set(ids))


class GraphStatistics(BaseModel):
    """Counts describing a license graph."""

    total_licenses: int = Field(ge=0)
    total_obligations: int = Field(ge=0)
    total_rights: int = Field(ge=0)
    total_edges: int = Field(ge=0, description="Authored compatibility edges")
    total_obligation_assignments: int = Field(ge=0)
    total_right_assignments: int = Field(ge=0)
    license_families: list[str] = Field(default_factory=list)
    licenses_by_category: dict[str, int] = Field(default_factory=dict)
    frozen: bool = False

    model_config = {"extra": "forbid"}
