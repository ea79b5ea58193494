"""Curated reference data for the license knowledge graph.

Licenses, obligations, rights, the obligations and rights each license
carries, and the documented compatibility relations between licenses.
This module only declares data; ``license_graph.graph.loader`` loads and
validates it.
"""

from license_graph.models.compatibility import (
    CompatibilityDirection,
    CompatibilityEdge,
    CompatibilityLevel,
)
from license_graph.models.license import (
    CopyleftStrength,
    EffortLevel,
    LicenseCategory,
    LicenseNode,
    Obligation,
    ObligationScope,
    Right,
    RightScope,
    TriggerCondition,
)

# Obligation ids
ATTRIBUTION = "ATTRIBUTION"
SOURCE_DISCLOSURE = "SOURCE_DISCLOSURE"
STATE_CHANGES = "STATE_CHANGES"
SAME_LICENSE = "SAME_LICENSE"
NETWORK_DISCLOSURE = "NETWORK_DISCLOSURE"
PATENT_GRANT = "PATENT_GRANT"
NOTICE_FILE = "NOTICE_FILE"
INCLUDE_LICENSE = "INCLUDE_LICENSE"
INCLUDE_COPYRIGHT = "INCLUDE_COPYRIGHT"
DISCLOSE_MODIFIED_FILES = "DISCLOSE_MODIFIED_FILES"

# Right ids
COMMERCIAL_USE = "COMMERCIAL_USE"
MODIFY = "MODIFY"
DISTRIBUTE = "DISTRIBUTE"
PRIVATE_USE = "PRIVATE_USE"
PATENT_USE = "PATENT_USE"
SUBLICENSE = "SUBLICENSE"

GNU_FAQ = "https://www.gnu.org/licenses/gpl-faq.html#AllCompatibility"
APACHE_GPL = "https://www.apache.org/licenses/GPL-compatibility.html"


OBLIGATIONS: tuple[Obligation, ...] = (
    Obligation(
        id=ATTRIBUTION,
        name="Attribution",
        description="Include copyright notice and license text in distributions",
        trigger=TriggerCondition.ON_DISTRIBUTION,
        effort=EffortLevel.LOW,
        examples=[
            "Include LICENSE file in distribution",
            "Add copyright notice in documentation",
            "Display attribution in 'About' dialog or credits",
            "Include attribution in README",
        ],
    ),
    Obligation(
        id=SOURCE_DISCLOSURE,
        name="Source Code Disclosure",
        description="Make source code available to recipients of the software",
        trigger=TriggerCondition.ON_DISTRIBUTION,
        effort=EffortLevel.HIGH,
        examples=[
            "Provide source alongside binary distribution",
            "Offer source via written offer for 3 years",
            "Host source on public repository",
            "Include source in downloadable archive",
        ],
    ),
    Obligation(
        id=STATE_CHANGES,
        name="State Changes",
        description="Document modifications made to the original code",
        trigger=TriggerCondition.ON_MODIFICATION,
        effort=EffortLevel.MEDIUM,
        examples=[
            "Add modification notice to changed files",
            "Maintain changelog of modifications",
            "Include modification date and description",
        ],
    ),
    Obligation(
        id=SAME_LICENSE,
        name="Same License (Copyleft)",
        description="Derivative works must be distributed under the same license",
        trigger=TriggerCondition.ON_DERIVATIVE,
        effort=EffortLevel.VERY_HIGH,
        examples=[
            "Release the entire application under the copyleft license",
            "Do not combine with incompatible licenses",
            "Apply the same terms to all linked code",
        ],
    ),
    Obligation(
        id=NETWORK_DISCLOSURE,
        name="Network Source Disclosure",
        description="Provide source to users interacting with the software over a network",
        trigger=TriggerCondition.ON_NETWORK_USE,
        effort=EffortLevel.VERY_HIGH,
        examples=[
            "Provide a source download link in the service",
            "Include source access in terms of service",
            "Offer source code to all network users",
        ],
    ),
    Obligation(
        id=PATENT_GRANT,
        name="Patent Grant",
        description="Grant a patent license to users of the software",
        trigger=TriggerCondition.ALWAYS,
        effort=EffortLevel.TRIVIAL,
        examples=[
            "Contributions carry an express patent license",
            "Patent litigation terminates the grant",
        ],
    ),
    Obligation(
        id=NOTICE_FILE,
        name="NOTICE File Preservation",
        description="Include the NOTICE file if present in the original distribution",
        trigger=TriggerCondition.ON_DISTRIBUTION,
        effort=EffortLevel.LOW,
        examples=[
            "Copy NOTICE file to distribution",
            "Include NOTICE content in attribution",
        ],
    ),
    Obligation(
        id=INCLUDE_LICENSE,
        name="Include License Text",
        description="Include the full license text with the distribution",
        trigger=TriggerCondition.ON_DISTRIBUTION,
        effort=EffortLevel.LOW,
        examples=["Include LICENSE file", "Include license in package metadata"],
    ),
    Obligation(
        id=INCLUDE_COPYRIGHT,
        name="Include Copyright Notice",
        description="Preserve and include original copyright notices",
        trigger=TriggerCondition.ON_DISTRIBUTION,
        effort=EffortLevel.LOW,
        examples=[
            "Keep copyright headers in source files",
            "Include copyright in documentation",
        ],
    ),
    Obligation(
        id=DISCLOSE_MODIFIED_FILES,
        name="Disclose Modified Files",
        description="Disclose source for modified files only (file-level copyleft)",
        trigger=TriggerCondition.ON_MODIFICATION,
        effort=EffortLevel.MEDIUM,
        examples=[
            "Provide source for modified files",
            "New files may stay under other terms",
        ],
    ),
)


RIGHTS: tuple[Right, ...] = (
    Right(
        id=COMMERCIAL_USE,
        name="Commercial Use",
        description="Use the software for commercial purposes",
    ),
    Right(
        id=MODIFY,
        name="Modify",
        description="Make changes and modifications to the source code",
    ),
    Right(
        id=DISTRIBUTE,
        name="Distribute",
        description="Distribute copies of the software",
    ),
    Right(
        id=PRIVATE_USE,
        name="Private Use",
        description="Use the software privately without any obligations",
    ),
    Right(
        id=PATENT_USE,
        name="Patent Use",
        description="Use patents covered by the license",
        scope=RightScope.LIMITED,
    ),
    Right(
        id=SUBLICENSE,
        name="Sublicense",
        description="Grant sublicenses to others",
        scope=RightScope.LIMITED,
    ),
)


def _license(
    spdx_id: str,
    display_name: str,
    category: LicenseCategory,
    copyleft: CopyleftStrength = CopyleftStrength.NONE,
    family: str | None = None,
    version: str | None = None,
    osi: bool = True,
) -> LicenseNode:
    return LicenseNode(
        id=spdx_id.upper(),
        spdx_id=spdx_id,
        display_name=display_name,
        category=category,
        copyleft_strength=copyleft,
        family=family,
        version=version,
        osi_approved=osi,
        fsf_free=True,
    )


_PD = LicenseCategory.PUBLIC_DOMAIN
_PERM = LicenseCategory.PERMISSIVE
_WEAK = LicenseCategory.WEAK_COPYLEFT
_STRONG = LicenseCategory.STRONG_COPYLEFT
_NETWORK = LicenseCategory.NETWORK_COPYLEFT

LICENSES: tuple[LicenseNode, ...] = (
    # Public domain
    _license("CC0-1.0", "Creative Commons Zero v1.0 Universal", _PD, family="CC", version="1.0", osi=False),
    _license("Unlicense", "The Unlicense", _PD),
    _license("WTFPL", "Do What The F*ck You Want To Public License", _PD, osi=False),
    _license("0BSD", "BSD Zero Clause License", _PD, family="BSD"),
    # Permissive
    _license("MIT", "MIT License", _PERM, family="MIT"),
    _license("Apache-2.0", "Apache License 2.0", _PERM, family="Apache", version="2.0"),
    _license("BSD-2-Clause", 'BSD 2-Clause "Simplified" License', _PERM, family="BSD"),
    _license("BSD-3-Clause", 'BSD 3-Clause "New" or "Revised" License', _PERM, family="BSD"),
    _license("ISC", "ISC License", _PERM),
    _license("Zlib", "zlib License", _PERM),
    _license("X11", "X11 License", _PERM, osi=False),
    _license("Artistic-2.0", "Artistic License 2.0", _PERM, version="2.0"),
    _license("BSL-1.0", "Boost Software License 1.0", _PERM, version="1.0"),
    # Weak copyleft
    _license("LGPL-2.0-only", "GNU Library General Public License v2 only", _WEAK, CopyleftStrength.WEAK, "LGPL", "2.0"),
    _license("LGPL-2.0-or-later", "GNU Library General Public License v2 or later", _WEAK, CopyleftStrength.WEAK, "LGPL", "2.0"),
    _license("LGPL-2.1-only", "GNU Lesser General Public License v2.1 only", _WEAK, CopyleftStrength.WEAK, "LGPL", "2.1"),
    _license("LGPL-2.1-or-later", "GNU Lesser General Public License v2.1 or later", _WEAK, CopyleftStrength.WEAK, "LGPL", "2.1"),
    _license("LGPL-3.0-only", "GNU Lesser General Public License v3.0 only", _WEAK, CopyleftStrength.WEAK, "LGPL", "3.0"),
    _license("LGPL-3.0-or-later", "GNU Lesser General Public License v3.0 or later", _WEAK, CopyleftStrength.WEAK, "LGPL", "3.0"),
    _license("MPL-1.1", "Mozilla Public License 1.1", _WEAK, CopyleftStrength.WEAK, "MPL", "1.1"),
    _license("MPL-2.0", "Mozilla Public License 2.0", _WEAK, CopyleftStrength.WEAK, "MPL", "2.0"),
    _license("EPL-1.0", "Eclipse Public License 1.0", _WEAK, CopyleftStrength.WEAK, "EPL", "1.0"),
    _license("EPL-2.0", "Eclipse Public License 2.0", _WEAK, CopyleftStrength.WEAK, "EPL", "2.0"),
    _license("CDDL-1.0", "Common Development and Distribution License 1.0", _WEAK, CopyleftStrength.WEAK, "CDDL", "1.0"),
    _license("CDDL-1.1", "Common Development and Distribution License 1.1", _WEAK, CopyleftStrength.WEAK, "CDDL", "1.1", osi=False),
    # Strong copyleft
    _license("GPL-2.0-only", "GNU General Public License v2.0 only", _STRONG, CopyleftStrength.STRONG, "GPL", "2.0"),
    _license("GPL-2.0-or-later", "GNU General Public License v2.0 or later", _STRONG, CopyleftStrength.STRONG, "GPL", "2.0"),
    _license("GPL-3.0-only", "GNU General Public License v3.0 only", _STRONG, CopyleftStrength.STRONG, "GPL", "3.0"),
    _license("GPL-3.0-or-later", "GNU General Public License v3.0 or later", _STRONG, CopyleftStrength.STRONG, "GPL", "3.0"),
    # Network copyleft
    _license("AGPL-3.0-only", "GNU Affero General Public License v3.0 only", _NETWORK, CopyleftStrength.NETWORK, "AGPL", "3.0"),
    _license("AGPL-3.0-or-later", "GNU Affero General Public License v3.0 or later", _NETWORK, CopyleftStrength.NETWORK, "AGPL", "3.0"),
)


# Licenses that combine freely with each other
PERMISSIVE_CORE: tuple[str, ...] = (
    "MIT",
    "APACHE-2.0",
    "BSD-2-CLAUSE",
    "BSD-3-CLAUSE",
    "ISC",
    "CC0-1.0",
    "UNLICENSE",
    "0BSD",
    "WTFPL",
    "ZLIB",
    "BSL-1.0",
)


def _permissive_edges() -> list[CompatibilityEdge]:
    edges: list[CompatibilityEdge] = []
    # i+1 slicing prevents duplicate symmetric pairs
    for i, source in enumerate(PERMISSIVE_CORE):
        for target in PERMISSIVE_CORE[i + 1 :]:
            edges.append(
                CompatibilityEdge(
                    id=f"{source}--{target}",
                    source_id=source,
                    target_id=target,
                    level=CompatibilityLevel.FULL,
                    direction=CompatibilityDirection.BIDIRECTIONAL,
                    conditions=["Maintain attribution notices from both licenses"],
                    notes=["Permissive licenses are fully compatible with each other"],
                    sources=["OSI License Compatibility Guidelines"],
                )
            )
    return edges


_DOCUMENTED_EDGES: tuple[CompatibilityEdge, ...] = (
    CompatibilityEdge(
        id="GPL-2.0-ONLY--GPL-3.0-ONLY",
        source_id="GPL-2.0-ONLY",
        target_id="GPL-3.0-ONLY",
        level=CompatibilityLevel.INCOMPATIBLE,
        direction=CompatibilityDirection.BIDIRECTIONAL,
        notes=[
            "GPL-2.0-only and GPL-3.0-only are not compatible",
            "GPL-3.0 added provisions that GPL-2.0-only code cannot accept",
            "GPL-2.0-or-later code IS compatible with GPL-3.0",
        ],
        sources=[GNU_FAQ],
    ),
    CompatibilityEdge(
        id="GPL-2.0-OR-LATER--GPL-3.0-ONLY",
        source_id="GPL-2.0-OR-LATER",
        target_id="GPL-3.0-ONLY",
        level=CompatibilityLevel.CONDITIONAL,
        direction=CompatibilityDirection.ONE_WAY,
        dominant_license_id="GPL-3.0-ONLY",
        conditions=["Combined work must be GPL-3.0"],
        notes=["GPL-2.0-or-later code can be used under GPL-3.0 terms"],
        sources=[GNU_FAQ],
    ),
    CompatibilityEdge(
        id="APACHE-2.0--GPL-2.0-ONLY",
        source_id="APACHE-2.0",
        target_id="GPL-2.0-ONLY",
        level=CompatibilityLevel.INCOMPATIBLE,
        direction=CompatibilityDirection.BIDIRECTIONAL,
        notes=[
            "Apache-2.0 patent termination clause is incompatible with GPL-2.0",
            "Apache-2.0 IS compatible with GPL-3.0",
        ],
        sources=[APACHE_GPL],
    ),
    CompatibilityEdge(
        id="APACHE-2.0--GPL-3.0-ONLY",
        source_id="APACHE-2.0",
        target_id="GPL-3.0-ONLY",
        level=CompatibilityLevel.ONE_WAY,
        direction=CompatibilityDirection.ONE_WAY,
        dominant_license_id="GPL-3.0-ONLY",
        conditions=["Combined work must be distributed under GPL-3.0"],
        notes=[
            "Apache-2.0 code can be included in GPL-3.0 projects",
            "GPL-3.0 code cannot be relicensed under Apache-2.0",
        ],
        sources=["https://www.gnu.org/licenses/license-list.html#apache2", APACHE_GPL],
    ),
    CompatibilityEdge(
        id="APACHE-2.0--AGPL-3.0-ONLY",
        source_id="APACHE-2.0",
        target_id="AGPL-3.0-ONLY",
        level=CompatibilityLevel.ONE_WAY,
        direction=CompatibilityDirection.ONE_WAY,
        dominant_license_id="AGPL-3.0-ONLY",
        conditions=[
            "Combined work must be distributed under AGPL-3.0",
            "Network disclosure requirements apply",
        ],
        notes=["Apache-2.0 code can be included in AGPL-3.0 projects"],
    ),
    CompatibilityEdge(
        id="LGPL-3.0-ONLY--GPL-3.0-ONLY",
        source_id="LGPL-3.0-ONLY",
        target_id="GPL-3.0-ONLY",
        level=CompatibilityLevel.ONE_WAY,
        direction=CompatibilityDirection.ONE_WAY,
        dominant_license_id="GPL-3.0-ONLY",
        conditions=["Combined work must follow GPL-3.0 terms"],
        notes=["LGPL code can be combined with GPL, result is GPL"],
    ),
    CompatibilityEdge(
        id="MPL-2.0--GPL-3.0-ONLY",
        source_id="MPL-2.0",
        target_id="GPL-3.0-ONLY",
        level=CompatibilityLevel.CONDITIONAL,
        direction=CompatibilityDirection.ONE_WAY,
        dominant_license_id="GPL-3.0-ONLY",
        conditions=[
            "MPL-2.0 code can be relicensed under GPL-3.0",
            "Allowed by the MPL-2.0 secondary license clause (Section 3.3)",
        ],
        notes=["MPL-2.0 is GPL compatible through its secondary license clause"],
        sources=["https://www.mozilla.org/en-US/MPL/2.0/FAQ/"],
    ),
    CompatibilityEdge(
        id="GPL-2.0-ONLY--AGPL-3.0-ONLY",
        source_id="GPL-2.0-ONLY",
        target_id="AGPL-3.0-ONLY",
        level=CompatibilityLevel.INCOMPATIBLE,
        direction=CompatibilityDirection.BIDIRECTIONAL,
        notes=["AGPL-3.0 network copyleft conflicts with GPL-2.0-only"],
        sources=[GNU_FAQ],
    ),
    CompatibilityEdge(
        id="GPL-3.0-ONLY--AGPL-3.0-ONLY",
        source_id="GPL-3.0-ONLY",
        target_id="AGPL-3.0-ONLY",
        level=CompatibilityLevel.CONDITIONAL,
        direction=CompatibilityDirection.BIDIRECTIONAL,
        dominant_license_id="AGPL-3.0-ONLY",
        conditions=["AGPL-3.0 network disclosure applies to the combined work"],
        notes=["GPL-3.0 section 13 permits combination with AGPL-3.0"],
        sources=[GNU_FAQ],
    ),
)


def compatibility_edges() -> list[CompatibilityEdge]:
    """All curated compatibility edges."""
    return _permissive_edges() + list(_DOCUMENTED_EDGES)


# license id -> (obligation id, trigger, scope)
_ObligationSpec = tuple[str, TriggerCondition, ObligationScope]

_DIST = TriggerCondition.ON_DISTRIBUTION
_MOD = TriggerCondition.ON_MODIFICATION
_DERIV = TriggerCondition.ON_DERIVATIVE

_PERMISSIVE_OBLIGATIONS: list[_ObligationSpec] = [
    (ATTRIBUTION, _DIST, ObligationScope.DISTRIBUTION),
    (INCLUDE_COPYRIGHT, _DIST, ObligationScope.DISTRIBUTION),
]

_GPL_OBLIGATIONS: list[_ObligationSpec] = [
    (ATTRIBUTION, _DIST, ObligationScope.DERIVATIVE_WORK),
    (SOURCE_DISCLOSURE, _DIST, ObligationScope.DERIVATIVE_WORK),
    (SAME_LICENSE, _DERIV, ObligationScope.DERIVATIVE_WORK),
    (STATE_CHANGES, _MOD, ObligationScope.FILE_LEVEL),
    (INCLUDE_LICENSE, _DIST, ObligationScope.DERIVATIVE_WORK),
]

_GPL3_OBLIGATIONS: list[_ObligationSpec] = _GPL_OBLIGATIONS + [
    (PATENT_GRANT, TriggerCondition.ALWAYS, ObligationScope.DERIVATIVE_WORK),
]

_AGPL_OBLIGATIONS: list[_ObligationSpec] = _GPL3_OBLIGATIONS + [
    (NETWORK_DISCLOSURE, TriggerCondition.ON_NETWORK_USE, ObligationScope.NETWORK_USE),
]

_LGPL_OBLIGATIONS: list[_ObligationSpec] = [
    (ATTRIBUTION, _DIST, ObligationScope.DISTRIBUTION),
    (SOURCE_DISCLOSURE, _DIST, ObligationScope.DISTRIBUTION),
    (INCLUDE_LICENSE, _DIST, ObligationScope.DISTRIBUTION),
]

_FILE_COPYLEFT_OBLIGATIONS: list[_ObligationSpec] = [
    (ATTRIBUTION, _DIST, ObligationScope.FILE_LEVEL),
    (DISCLOSE_MODIFIED_FILES, _MOD, ObligationScope.FILE_LEVEL),
    (INCLUDE_LICENSE, _DIST, ObligationScope.FILE_LEVEL),
]

_EPL_OBLIGATIONS: list[_ObligationSpec] = _FILE_COPYLEFT_OBLIGATIONS + [
    (PATENT_GRANT, TriggerCondition.ALWAYS, ObligationScope.DISTRIBUTION),
]

_LGPL_IDS = (
    "LGPL-2.0-ONLY",
    "LGPL-2.0-OR-LATER",
    "LGPL-2.1-ONLY",
    "LGPL-2.1-OR-LATER",
    "LGPL-3.0-ONLY",
    "LGPL-3.0-OR-LATER",
)

OBLIGATION_ASSIGNMENTS: dict[str, list[_ObligationSpec]] = {
    "MIT": [
        (ATTRIBUTION, _DIST, ObligationScope.DISTRIBUTION),
        (INCLUDE_LICENSE, _DIST, ObligationScope.DISTRIBUTION),
        (INCLUDE_COPYRIGHT, _DIST, ObligationScope.DISTRIBUTION),
    ],
    "APACHE-2.0": [
        (ATTRIBUTION, _DIST, ObligationScope.DISTRIBUTION),
        (STATE_CHANGES, _MOD, ObligationScope.FILE_LEVEL),
        (NOTICE_FILE, _DIST, ObligationScope.DISTRIBUTION),
        (INCLUDE_LICENSE, _DIST, ObligationScope.DISTRIBUTION),
        (PATENT_GRANT, TriggerCondition.ALWAYS, ObligationScope.DISTRIBUTION),
    ],
    "BSD-2-CLAUSE": list(_PERMISSIVE_OBLIGATIONS),
    "BSD-3-CLAUSE": list(_PERMISSIVE_OBLIGATIONS),
    "ISC": list(_PERMISSIVE_OBLIGATIONS),
    "ZLIB": [(STATE_CHANGES, _MOD, ObligationScope.FILE_LEVEL)],
    "X11": list(_PERMISSIVE_OBLIGATIONS),
    "ARTISTIC-2.0": [
        (ATTRIBUTION, _DIST, ObligationScope.DISTRIBUTION),
        (STATE_CHANGES, _MOD, ObligationScope.FILE_LEVEL),
    ],
    "BSL-1.0": [(INCLUDE_LICENSE, _DIST, ObligationScope.FILE_LEVEL)],
    "GPL-2.0-ONLY": list(_GPL_OBLIGATIONS),
    "GPL-2.0-OR-LATER": list(_GPL_OBLIGATIONS),
    "GPL-3.0-ONLY": list(_GPL3_OBLIGATIONS),
    "GPL-3.0-OR-LATER": list(_GPL3_OBLIGATIONS),
    "AGPL-3.0-ONLY": list(_AGPL_OBLIGATIONS),
    "AGPL-3.0-OR-LATER": list(_AGPL_OBLIGATIONS),
    "MPL-1.1": list(_FILE_COPYLEFT_OBLIGATIONS),
    "MPL-2.0": list(_FILE_COPYLEFT_OBLIGATIONS),
    "EPL-1.0": list(_EPL_OBLIGATIONS),
    "EPL-2.0": list(_EPL_OBLIGATIONS),
    "CDDL-1.0": list(_FILE_COPYLEFT_OBLIGATIONS),
    "CDDL-1.1": list(_FILE_COPYLEFT_OBLIGATIONS),
}
OBLIGATION_ASSIGNMENTS.update({license_id: list(_LGPL_OBLIGATIONS) for license_id in _LGPL_IDS})


_BASIC_RIGHTS = [COMMERCIAL_USE, MODIFY, DISTRIBUTE, PRIVATE_USE]

# Licenses with an express patent grant
_PATENT_LICENSES = frozenset(
    {
        "APACHE-2.0",
        "GPL-3.0-ONLY",
        "GPL-3.0-OR-LATER",
        "AGPL-3.0-ONLY",
        "AGPL-3.0-OR-LATER",
        "LGPL-3.0-ONLY",
        "LGPL-3.0-OR-LATER",
        "MPL-2.0",
        "EPL-1.0",
        "EPL-2.0",
    }
)

# Permissive licenses that explicitly allow sublicensing
_SUBLICENSE_LICENSES = frozenset({"MIT", "APACHE-2.0", "X11", "0BSD", "CC0-1.0", "UNLICENSE", "WTFPL"})


def right_assignments() -> dict[str, list[str]]:
    """Rights granted per license id."""
    result: dict[str, list[str]] = {}
    for node in LICENSES:
        rights = list(_BASIC_RIGHTS)
        if node.id in _PATENT_LICENSES:
            rights.append(PATENT_USE)
        if node.id in _SUBLICENSE_LICENSES:
            rights.append(SUBLICENSE)
        result[node.id] = rights
    return result
