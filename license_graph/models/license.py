"""Reference data models for the license knowledge graph.

Licenses, obligations and rights are the nodes of the graph; obligation
and right assignments link a license to the duties it imposes and the
permissions it grants. All reference models are frozen once built.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class LicenseCategory(Enum):
    """Categories of licenses by restriction level."""

    PUBLIC_DOMAIN = "public_domain"
    PERMISSIVE = "permissive"
    WEAK_COPYLEFT = "weak_copyleft"
    STRONG_COPYLEFT = "strong_copyleft"
    NETWORK_COPYLEFT = "network_copyleft"
    PROPRIETARY = "proprietary"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Human readable category name."""
        return self.value.replace("_", " ").title()

    @property
    def restrictiveness(self) -> int:
        """Rank used to pick the dominant license of a combination."""
        return _CATEGORY_RESTRICTIVENESS[self]

    @property
    def risk_level(self) -> int:
        """Relative compliance risk of the category."""
        return _CATEGORY_RISK[self]


_CATEGORY_RESTRICTIVENESS: dict[LicenseCategory, int] = {
    LicenseCategory.PUBLIC_DOMAIN: 0,
    LicenseCategory.UNKNOWN: 0,
    LicenseCategory.PERMISSIVE: 1,
    LicenseCategory.WEAK_COPYLEFT: 2,
    LicenseCategory.PROPRIETARY: 3,
    LicenseCategory.STRONG_COPYLEFT: 3,
    LicenseCategory.NETWORK_COPYLEFT: 3,
}

_CATEGORY_RISK: dict[LicenseCategory, int] = {
    LicenseCategory.PUBLIC_DOMAIN: 0,
    LicenseCategory.PERMISSIVE: 1,
    LicenseCategory.WEAK_COPYLEFT: 2,
    LicenseCategory.STRONG_COPYLEFT: 3,
    LicenseCategory.NETWORK_COPYLEFT: 4,
    LicenseCategory.PROPRIETARY: 5,
    LicenseCategory.UNKNOWN: 6,
}

# Categories that impose copyleft terms on a combined work
COPYLEFT_CATEGORIES: frozenset[LicenseCategory] = frozenset(
    {
        LicenseCategory.WEAK_COPYLEFT,
        LicenseCategory.STRONG_COPYLEFT,
        LicenseCategory.NETWORK_COPYLEFT,
    }
)


class CopyleftStrength(Enum):
    """How far a license's copyleft terms propagate."""

    NONE = "none"
    WEAK = "weak"
    STRONG = "strong"
    NETWORK = "network"

    @property
    def propagation_level(self) -> int:
        """Ordinal propagation level (NONE=0 ... NETWORK=3)."""
        return _PROPAGATION[self]


_PROPAGATION: dict[CopyleftStrength, int] = {
    CopyleftStrength.NONE: 0,
    CopyleftStrength.WEAK: 1,
    CopyleftStrength.STRONG: 2,
    CopyleftStrength.NETWORK: 3,
}


class ObligationScope(Enum):
    """Extent of the work an obligation applies to.

    Declared from least to most restrictive; compare with ``restrictiveness``.
    """

    FILE_LEVEL = "file_level"
    DISTRIBUTION = "distribution"
    DERIVATIVE_WORK = "derivative_work"
    NETWORK_USE = "network_use"

    @property
    def restrictiveness(self) -> int:
        """Position in the FILE_LEVEL < ... < NETWORK_USE ordering."""
        return list(ObligationScope).index(self)


class TriggerCondition(Enum):
    """Activity that triggers an obligation."""

    ALWAYS = "always"
    ON_DISTRIBUTION = "on_distribution"
    ON_MODIFICATION = "on_modification"
    ON_DERIVATIVE = "on_derivative"
    ON_NETWORK_USE = "on_network_use"


class EffortLevel(Enum):
    """Effort needed to fulfil an obligation."""

    TRIVIAL = "trivial"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"

    @property
    def level(self) -> int:
        """Ordinal effort level (TRIVIAL=0 ... VERY_HIGH=4)."""
        return list(EffortLevel).index(self)

    def raised(self) -> "EffortLevel":
        """One step more effort, saturating at VERY_HIGH."""
        members = list(EffortLevel)
        return members[min(self.level + 1, len(members) - 1)]

    def lowered(self) -> "EffortLevel":
        """One step less effort, saturating at TRIVIAL."""
        members = list(EffortLevel)
        return members[max(self.level - 1, 0)]


class RightScope(Enum):
    """Extent of a granted right."""

    UNLIMITED = "unlimited"
    LIMITED = "limited"


class LicenseNode(BaseModel):
    """A single SPDX-style license definition.

    ``id`` is the canonical (uppercase) key; ``spdx_id`` keeps the
    SPDX spelling for display.
    """

    id: str = Field(description="Canonical uppercase license identifier")
    spdx_id: str = Field(description="SPDX spelling of the identifier")
    display_name: str = Field(description="Full license name")
    category: LicenseCategory = Field(description="License category")
    copyleft_strength: CopyleftStrength = Field(
        default=CopyleftStrength.NONE,
        description="Copyleft propagation strength",
    )
    family: Optional[str] = Field(
        default=None,
        description="Grouping label, e.g. GPL",
    )
    version: Optional[str] = Field(default=None, description="License version")
    osi_approved: bool = Field(default=False, description="OSI approved")
    fsf_free: bool = Field(default=False, description="FSF free/libre")
    deprecated: bool = Field(default=False, description="Deprecated identifier")

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def is_or_later(self) -> bool:
        """True for "or later" variants such as GPL-2.0-or-later."""
        return self.spdx_id.lower().endswith("-or-later")


class Obligation(BaseModel):
    """A named legal duty imposed by one or more licenses."""

    id: str = Field(description="Obligation identifier, e.g. ATTRIBUTION")
    name: str = Field(description="Short obligation name")
    description: str = Field(description="What the obligation requires")
    trigger: TriggerCondition = Field(
        default=TriggerCondition.ON_DISTRIBUTION,
        description="Default activity that triggers the obligation",
    )
    effort: EffortLevel = Field(
        default=EffortLevel.LOW,
        description="Effort needed to fulfil the obligation",
    )
    examples: list[str] = Field(
        default_factory=list,
        description="Concrete ways to fulfil the obligation",
    )

    model_config = {"extra": "forbid", "frozen": True}


class Right(BaseModel):
    """A permission granted by a license."""

    id: str = Field(description="Right identifier, e.g. COMMERCIAL_USE")
    name: str = Field(description="Short right name")
    description: str = Field(description="What the right permits")
    scope: RightScope = Field(default=RightScope.UNLIMITED, description="Right scope")

    model_config = {"extra": "forbid", "frozen": True}


class ObligationAssignment(BaseModel):
    """Links a license to an obligation at a given scope."""

    license_id: str = Field(description="Canonical license identifier")
    obligation_id: str = Field(description="Obligation identifier")
    scope: ObligationScope = Field(description="Extent of the obligation")
    trigger: TriggerCondition = Field(
        default=TriggerCondition.ON_DISTRIBUTION,
        description="Activity that triggers the obligation for this license",
    )

    model_config = {"extra": "forbid", "frozen": True}


class RightAssignment(BaseModel):
    """Links a license to a right it grants."""

    license_id: str = Field(description="Canonical license identifier")
    right_id: str = Field(description="Right identifier")

    model_config = {"extra": "forbid", "frozen": True}


class ObligationWithScope(BaseModel):
    """An obligation as imposed by one particular license."""

    obligation: Obligation = Field(description="The obligation")
    scope: ObligationScope = Field(description="Scope under this license")
    trigger: TriggerCondition = Field(description="Trigger under this license")

    model_config = {"extra": "forbid"}
