"""License compatibility resolution for license-graph.

Answers "can license A be combined with license B?" from the graph's
documented edges first and falls back to inference rules over license
categories, copyleft strength and family versions. Path search walks
documented edges only.
"""

import logging
from collections import deque
from typing import Optional

from packaging.version import InvalidVersion, Version

from license_graph.graph.normalize import canonical_family
from license_graph.graph.store import LicenseGraph
from license_graph.models.compatibility import (
    CompatibilityEdge,
    CompatibilityLevel,
    CompatibilityMatrix,
    CompatibilityPath,
    CompatibilityResult,
    CompatibilityStep,
)
from license_graph.models.config import EngineConfig
from license_graph.models.license import (
    CopyleftStrength,
    LicenseCategory,
    LicenseNode,
)

logger = logging.getLogger(__name__)

_CONFLICT_SUGGESTIONS = [
    "Replace one dependency with an alternative under a compatible license",
    "Contact upstream for dual-licensing options",
]


def _parse_version(node: LicenseNode) -> Optional[Version]:
    if node.version is None:
        return None
    try:
        return Version(node.version)
    except InvalidVersion:
        return None


class CompatibilityResolver:
    """Pairwise compatibility checks, path search and matrices."""

    def __init__(self, graph: LicenseGraph, config: Optional[EngineConfig] = None):
        self.graph = graph
        self.config = config or EngineConfig()

    # =========================================================================
    # Pairwise checks
    # =========================================================================

    def check_compatibility(
        self, license_a: Optional[str], license_b: Optional[str]
    ) -> CompatibilityResult:
        """Check whether two licenses can be combined.

        Rules, in priority order: identical ids, a documented edge, then
        inference from the two license nodes. Unknown ids yield UNKNOWN
        with ``requires_review`` set; this method never raises.

        Args:
            license_a: First license identifier (any case, aliases allowed).
            license_b: Second license identifier.

        Returns:
            CompatibilityResult for the pair, with canonical ids.
        """
        id_a = self.graph.canonicalize(license_a)
        id_b = self.graph.canonicalize(license_b)
        logger.debug("Checking compatibility: %s <-> %s", id_a, id_b)

        if id_a == id_b:
            return CompatibilityResult(
                license_a=id_a,
                license_b=id_b,
                level=CompatibilityLevel.FULL,
                reason="Same license - fully compatible",
                path=[id_a],
            )

        edge = self.graph.get_edge(id_a, id_b)
        if edge is not None:
            return self._from_edge(id_a, id_b, edge)

        return self._infer(id_a, id_b)

    def check_pair_compatibility(
        self, license_a: Optional[str], license_b: Optional[str]
    ) -> CompatibilityResult:
        """Check an unordered pair of licenses.

        ``check_compatibility`` is directional: a ONE_WAY edge has no
        reverse entry, so the reverse order is answered by inference and
        may differ. Here the documented direction is used when only one
        order has an edge; otherwise the pair is checked in canonical id
        order. The result is the same for both argument orders.

        Args:
            license_a: One license identifier.
            license_b: The other license identifier.

        Returns:
            CompatibilityResult of the chosen direction.
        """
        first, second = sorted(
            (self.graph.canonicalize(license_a), self.graph.canonicalize(license_b))
        )
        if (
            self.graph.get_edge(first, second) is None
            and self.graph.get_edge(second, first) is not None
        ):
            return self.check_compatibility(second, first)
        return self.check_compatibility(first, second)

    def _from_edge(
        self, id_a: str, id_b: str, edge: CompatibilityEdge
    ) -> CompatibilityResult:
        incompatible = edge.level == CompatibilityLevel.INCOMPATIBLE
        return CompatibilityResult(
            license_a=id_a,
            license_b=id_b,
            level=edge.level,
            reason=edge.notes[0] if edge.notes else "Direct compatibility rule",
            dominant_license=edge.dominant_license_id,
            requires_review=edge.level == CompatibilityLevel.UNKNOWN,
            conditions=list(edge.conditions),
            path=[id_a, id_b],
            sources=list(edge.sources),
            suggestions=list(_CONFLICT_SUGGESTIONS) if incompatible else [],
        )

    def _infer(self, id_a: str, id_b: str) -> CompatibilityResult:
        node_a = self.graph.get_license(id_a)
        node_b = self.graph.get_license(id_b)

        if node_a is None or node_b is None:
            missing = [i for i, n in ((id_a, node_a), (id_b, node_b)) if n is None]
            return CompatibilityResult(
                license_a=id_a,
                license_b=id_b,
                level=CompatibilityLevel.UNKNOWN,
                reason=(
                    "License(s) not found in knowledge graph: "
                    + ", ".join(m or "<blank>" for m in missing)
                ),
                requires_review=True,
                suggestions=["Have the license reviewed by legal counsel"],
            )

        def result(level: CompatibilityLevel, reason: str, **kwargs) -> CompatibilityResult:
            return CompatibilityResult(
                license_a=id_a, license_b=id_b, level=level, reason=reason, **kwargs
            )

        cat_a, cat_b = node_a.category, node_b.category
        strength_a, strength_b = node_a.copyleft_strength, node_b.copyleft_strength

        if cat_a == LicenseCategory.PERMISSIVE and cat_b == LicenseCategory.PERMISSIVE:
            return result(
                CompatibilityLevel.FULL,
                "Both licenses are permissive - fully compatible",
                conditions=["Maintain attribution notices from both licenses"],
                inferred_rule="permissive-combination",
            )

        if cat_a == LicenseCategory.PERMISSIVE and strength_b != CopyleftStrength.NONE:
            return result(
                CompatibilityLevel.CONDITIONAL,
                "Permissive license can be combined with copyleft",
                dominant_license=id_b,
                conditions=[
                    f"Combined work must follow {id_b} terms",
                    "Copyleft obligations apply to the derivative work",
                ],
                inferred_rule="permissive-under-copyleft",
            )

        if cat_b == LicenseCategory.PERMISSIVE and strength_a != CopyleftStrength.NONE:
            return result(
                CompatibilityLevel.CONDITIONAL,
                "Copyleft license can incorporate permissive code",
                dominant_license=id_a,
                conditions=[
                    f"Combined work must follow {id_a} terms",
                    "Copyleft obligations apply to the derivative work",
                ],
                inferred_rule="copyleft-over-permissive",
            )

        same_family = bool(node_a.family) and canonical_family(
            node_a.family
        ) == canonical_family(node_b.family)

        if (
            cat_a == LicenseCategory.STRONG_COPYLEFT
            and cat_b == LicenseCategory.STRONG_COPYLEFT
            and not same_family
        ):
            return result(
                CompatibilityLevel.INCOMPATIBLE,
                "Different strong copyleft licenses cannot be combined",
                suggestions=list(_CONFLICT_SUGGESTIONS),
                inferred_rule="copyleft-conflict",
            )

        if LicenseCategory.PUBLIC_DOMAIN in (cat_a, cat_b):
            return result(
                CompatibilityLevel.FULL,
                "Public domain works can be combined with any license",
                inferred_rule="public-domain-combination",
            )

        if same_family and strength_a != CopyleftStrength.NONE:
            return self._check_same_family(node_a, node_b)

        if strength_a == CopyleftStrength.WEAK and strength_b == CopyleftStrength.STRONG:
            return self._weak_under_strong(id_a, id_b, dominant=id_b)
        if strength_b == CopyleftStrength.WEAK and strength_a == CopyleftStrength.STRONG:
            return self._weak_under_strong(id_a, id_b, dominant=id_a)

        if CopyleftStrength.NETWORK in (strength_a, strength_b):
            network_id = id_a if strength_a == CopyleftStrength.NETWORK else id_b
            return result(
                CompatibilityLevel.CONDITIONAL,
                "Network copyleft applies network disclosure requirements",
                dominant_license=network_id,
                requires_review=True,
                conditions=[
                    "Network service users must be able to obtain source code",
                    f"{network_id} obligations extend to network use",
                ],
                inferred_rule="network-copyleft",
            )

        return result(
            CompatibilityLevel.UNKNOWN,
            "Compatibility could not be automatically determined "
            f"({cat_a.display_name} + {cat_b.display_name})",
            requires_review=True,
            suggestions=["Have the combination reviewed by legal counsel"],
        )

    def _weak_under_strong(
        self, id_a: str, id_b: str, dominant: str
    ) -> CompatibilityResult:
        return CompatibilityResult(
            license_a=id_a,
            license_b=id_b,
            level=CompatibilityLevel.CONDITIONAL,
            reason="Weak copyleft can generally be combined with strong copyleft",
            dominant_license=dominant,
            requires_review=True,
            conditions=[
                "Combined work follows strong copyleft terms",
                "Check specific license compatibility requirements",
            ],
            inferred_rule="weak-under-strong-copyleft",
        )

    def _check_same_family(
        self, node_a: LicenseNode, node_b: LicenseNode
    ) -> CompatibilityResult:
        """Version check for two copyleft licenses of one family."""
        version_a = _parse_version(node_a)
        version_b = _parse_version(node_b)

        if version_a is not None and version_a == version_b:
            return CompatibilityResult(
                license_a=node_a.id,
                license_b=node_b.id,
                level=CompatibilityLevel.FULL,
                reason=f"Same license family ({node_a.family}) and version",
                inferred_rule="same-family-version",
            )

        if version_a is not None and version_b is not None:
            lower, higher = (node_a, node_b) if version_a < version_b else (node_b, node_a)
            if lower.is_or_later:
                return CompatibilityResult(
                    license_a=node_a.id,
                    license_b=node_b.id,
                    level=CompatibilityLevel.CONDITIONAL,
                    reason=(
                        f"'Or later' clause of {lower.id} allows use under {higher.id}"
                    ),
                    dominant_license=higher.id,
                    conditions=[f"Combined work uses the terms of {higher.id}"],
                    inferred_rule="or-later-upgrade",
                )

        if node_a.category == LicenseCategory.STRONG_COPYLEFT:
            return CompatibilityResult(
                license_a=node_a.id,
                license_b=node_b.id,
                level=CompatibilityLevel.INCOMPATIBLE,
                reason=(
                    f"{node_a.id} and {node_b.id} are different versions "
                    "without an 'or later' clause"
                ),
                suggestions=[
                    "Check whether the older code allows 'or later' versions",
                    *_CONFLICT_SUGGESTIONS,
                ],
                inferred_rule="version-conflict",
            )

        return CompatibilityResult(
            license_a=node_a.id,
            license_b=node_b.id,
            level=CompatibilityLevel.CONDITIONAL,
            reason=f"Different versions of {node_a.family} need review",
            requires_review=True,
            conditions=["Verify the version compatibility terms of both licenses"],
            inferred_rule="version-review",
        )

    # =========================================================================
    # Path search
    # =========================================================================

    def find_compatibility_path(
        self,
        source: Optional[str],
        target: Optional[str],
        max_depth: Optional[int] = None,
    ) -> Optional[CompatibilityPath]:
        """Find the shortest chain of documented edges between two licenses.

        INCOMPATIBLE edges are never traversed. The overall compatibility
        of a path is the weakest level among its edges.

        Args:
            source: Starting license identifier.
            target: Destination license identifier.
            max_depth: Maximum number of edges; defaults to the configured
                ``max_path_depth``.

        Returns:
            CompatibilityPath, or None if no path exists within the bound.
        """
        source_id = self.graph.canonicalize(source)
        target_id = self.graph.canonicalize(target)
        depth_limit = max_depth if max_depth is not None else self.config.max_path_depth

        if source_id == target_id:
            return CompatibilityPath(
                source_license=source_id,
                target_license=target_id,
                licenses=[source_id],
                overall_compatibility=CompatibilityLevel.FULL,
            )

        if not self.graph.has_license(source_id) or not self.graph.has_license(target_id):
            return None

        # Each queue entry is the chain of edges walked so far
        queue: deque[tuple[str, list[tuple[str, str, CompatibilityEdge]]]] = deque(
            [(source_id, [])]
        )
        visited = {source_id}

        while queue:
            current, trail = queue.popleft()
            if len(trail) >= depth_limit:
                continue
            neighbors = self.graph.get_neighbors(current)
            for neighbor in sorted(neighbors):
                edge = neighbors[neighbor]
                if edge.level == CompatibilityLevel.INCOMPATIBLE or neighbor in visited:
                    continue
                next_trail = trail + [(current, neighbor, edge)]
                if neighbor == target_id:
                    return self._build_path(source_id, target_id, next_trail)
                visited.add(neighbor)
                queue.append((neighbor, next_trail))

        logger.debug(
            "No compatibility path from %s to %s within %d hops",
            source_id,
            target_id,
            depth_limit,
        )
        return None

    @staticmethod
    def _build_path(
        source_id: str,
        target_id: str,
        trail: list[tuple[str, str, CompatibilityEdge]],
    ) -> CompatibilityPath:
        steps = [
            CompatibilityStep(
                from_license=from_id,
                to_license=to_id,
                level=edge.level,
                conditions=list(edge.conditions),
            )
            for from_id, to_id, edge in trail
        ]
        all_conditions: list[str] = []
        for step in steps:
            for condition in step.conditions:
                if condition not in all_conditions:
                    all_conditions.append(condition)
        return CompatibilityPath(
            source_license=source_id,
            target_license=target_id,
            licenses=[source_id] + [step.to_license for step in steps],
            steps=steps,
            overall_compatibility=min(
                (step.level for step in steps), key=lambda level: level.strength
            ),
            all_conditions=all_conditions,
        )

    # =========================================================================
    # Matrix
    # =========================================================================

    def check_compatibility_matrix(self, license_ids: list[str]) -> CompatibilityMatrix:
        """Check every pair of a set of licenses.

        Args:
            license_ids: License identifiers; duplicates and aliases are
                collapsed and the result is ordered by canonical id.

        Returns:
            CompatibilityMatrix with one row and column per unique license
            and the non-FULL pairs listed as issues.
        """
        unique = sorted({self.graph.canonicalize(i) for i in license_ids} - {""})
        matrix: list[list[CompatibilityLevel]] = []
        issues: list[CompatibilityResult] = []

        for row, id_a in enumerate(unique):
            levels = []
            for col, id_b in enumerate(unique):
                check = self.check_compatibility(id_a, id_b)
                levels.append(check.level)
                if col > row and check.level != CompatibilityLevel.FULL:
                    issues.append(check)
            matrix.append(levels)

        return CompatibilityMatrix(licenses=unique, matrix=matrix, issues=issues)
