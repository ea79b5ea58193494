"""Compatibility models for license-graph.

Compatibility edges are the license-to-license relations of the graph;
results, paths and matrices are what the compatibility resolver returns.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class CompatibilityLevel(Enum):
    """Verdict for combining two licenses."""

    FULL = "full"
    ONE_WAY = "one_way"
    CONDITIONAL = "conditional"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"

    @property
    def is_compatible(self) -> bool:
        """True if the combination may proceed (possibly with conditions)."""
        return self in (
            CompatibilityLevel.FULL,
            CompatibilityLevel.ONE_WAY,
            CompatibilityLevel.CONDITIONAL,
        )

    @property
    def strength(self) -> int:
        """Rank of the verdict; the weakest link of a path has the lowest."""
        return _LEVEL_STRENGTH[self]


_LEVEL_STRENGTH: dict[CompatibilityLevel, int] = {
    CompatibilityLevel.INCOMPATIBLE: 0,
    CompatibilityLevel.UNKNOWN: 1,
    CompatibilityLevel.CONDITIONAL: 2,
    CompatibilityLevel.ONE_WAY: 3,
    CompatibilityLevel.FULL: 4,
}


class CompatibilityDirection(Enum):
    """Whether an edge can be looked up from both endpoints."""

    BIDIRECTIONAL = "bidirectional"
    ONE_WAY = "one_way"


class CompatibilityEdge(BaseModel):
    """A directed or bidirectional relation between two licenses.

    For ONE_WAY edges the source can be incorporated into the target;
    the reverse pair has no implicit edge.
    """

    id: str = Field(description="Edge identifier")
    source_id: str = Field(description="Canonical source license id")
    target_id: str = Field(description="Canonical target license id")
    level: CompatibilityLevel = Field(description="Compatibility verdict")
    direction: CompatibilityDirection = Field(
        default=CompatibilityDirection.BIDIRECTIONAL,
        description="Lookup direction",
    )
    dominant_license_id: Optional[str] = Field(
        default=None,
        description="License whose terms govern the combination",
    )
    conditions: list[str] = Field(
        default_factory=list,
        description="Conditions that must hold for the combination",
    )
    notes: list[str] = Field(default_factory=list, description="Free-text notes")
    sources: list[str] = Field(
        default_factory=list,
        description="Legal references backing the relation",
    )

    model_config = {"extra": "forbid", "frozen": True}


class CompatibilityResult(BaseModel):
    """Result of a compatibility check between two licenses."""

    license_a: str = Field(description="First license identifier")
    license_b: str = Field(description="Second license identifier")
    level: CompatibilityLevel = Field(description="Compatibility verdict")
    reason: str = Field(description="Explanation of the verdict")
    dominant_license: Optional[str] = Field(
        default=None,
        description="License whose terms govern the combined work",
    )
    requires_review: bool = Field(
        default=False,
        description="True if a human should review the verdict",
    )
    conditions: list[str] = Field(default_factory=list)
    path: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    inferred_rule: Optional[str] = Field(
        default=None,
        description="Inference rule applied when no edge matched",
    )

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def compatible(self) -> bool:
        """True if the licenses can be combined."""
        return self.level.is_compatible


class CompatibilityStep(BaseModel):
    """One traversed edge of a compatibility path."""

    from_license: str = Field(description="Edge start")
    to_license: str = Field(description="Edge end")
    level: CompatibilityLevel = Field(description="Edge verdict")
    conditions: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class CompatibilityPath(BaseModel):
    """A chain of compatibility edges between two licenses."""

    source_license: str
    target_license: str
    licenses: list[str] = Field(description="Licenses visited, source first")
    steps: list[CompatibilityStep] = Field(default_factory=list)
    overall_compatibility: CompatibilityLevel = Field(
        description="Weakest level among the traversed edges",
    )
    all_conditions: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hops(self) -> int:
        """Number of edges traversed."""
        return len(self.steps)


class CompatibilityMatrix(BaseModel):
    """Matrix representation of pairwise license compatibility."""

    licenses: list[str] = Field(
        description="Ordered list of unique licenses (row/column headers)"
    )
    matrix: list[list[CompatibilityLevel]] = Field(
        description="2D matrix of compatibility levels [row][col]"
    )
    issues: list[CompatibilityResult] = Field(
        default_factory=list,
        description="Pairs whose verdict is not FULL",
    )

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_issues(self) -> bool:
        """True if any pair is incompatible or needs review."""
        return any(
            not issue.compatible or issue.requires_review for issue in self.issues
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size(self) -> int:
        """Number of unique licenses in the matrix."""
        return len(self.licenses)

    def get_level(self, license_a: str, license_b: str) -> CompatibilityLevel:
        """Get the compatibility level between two licenses.

        Args:
            license_a: First (canonical) license identifier.
            license_b: Second (canonical) license identifier.

        Returns:
            CompatibilityLevel for the pair.

        Raises:
            ValueError: If either license is not in the matrix.
        """
        try:
            row_idx = self.licenses.index(license_a)
            col_idx = self.licenses.index(license_b)
            return self.matrix[row_idx][col_idx]
        except ValueError as e:
            raise ValueError(f"License not in matrix: {e}") from e
