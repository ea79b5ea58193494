"""Dependency tree license analysis for license-graph.

Takes a flat list of dependencies, each with one resolved license, and
reports pairwise conflicts, the dominant license, aggregated obligations,
a risk score, a compliance status and prioritized recommendations.
"""

import logging
from collections import Counter
from typing import Optional

from license_graph.analysis.compatibility import CompatibilityResolver
from license_graph.analysis.obligations import ObligationAggregator
from license_graph.graph.store import LicenseGraph
from license_graph.models.analysis import (
    AggregatedObligations,
    ComplianceRecommendation,
    ComplianceStatus,
    ConflictSeverity,
    DependencyLicense,
    DependencyTreeAnalysis,
    DominantLicenseInfo,
    LicenseConflict,
    RecommendationPriority,
    RecommendationType,
)
from license_graph.models.compatibility import CompatibilityLevel
from license_graph.models.config import EngineConfig
from license_graph.models.license import CopyleftStrength, EffortLevel, LicenseCategory

logger = logging.getLogger(__name__)

# SPDX marker used for dependencies that arrive without a license id
NO_ASSERTION = "NOASSERTION"


class DependencyTreeAnalyzer:
    """Analyzes the license mix of a dependency tree."""

    def __init__(
        self,
        graph: LicenseGraph,
        config: Optional[EngineConfig] = None,
        resolver: Optional[CompatibilityResolver] = None,
        aggregator: Optional[ObligationAggregator] = None,
    ):
        self.graph = graph
        self.config = config or EngineConfig()
        self.resolver = resolver or CompatibilityResolver(graph, self.config)
        self.aggregator = aggregator or ObligationAggregator(graph)

    def analyze_dependency_tree(
        self, dependencies: list[DependencyLicense]
    ) -> DependencyTreeAnalysis:
        """Analyze a flat list of dependencies.

        Args:
            dependencies: Dependencies with their resolved license ids.

        Returns:
            A new DependencyTreeAnalysis.
        """
        licenses_by_dependency = [
            (dep, self.graph.canonicalize(dep.license_id) or NO_ASSERTION)
            for dep in dependencies
        ]
        distribution = Counter(license_id for _, license_id in licenses_by_dependency)
        unique_licenses = sorted(distribution)

        dependency_names: dict[str, list[str]] = {}
        for dep, license_id in licenses_by_dependency:
            dependency_names.setdefault(license_id, []).append(dep.dependency_name)

        conflicts = self._find_conflicts(unique_licenses, dependency_names)
        unknown = [i for i in unique_licenses if not self.graph.has_license(i)]
        obligations = self.aggregator.aggregate_obligations(unique_licenses)

        if any(c.severity == ConflictSeverity.BLOCKING for c in conflicts):
            status = ComplianceStatus.BLOCKED
        elif conflicts:
            status = ComplianceStatus.REVIEW_REQUIRED
        else:
            status = ComplianceStatus.COMPLIANT

        analysis = DependencyTreeAnalysis(
            total_dependencies=len(dependencies),
            unique_licenses=unique_licenses,
            license_distribution=dict(distribution),
            category_distribution=self._category_distribution(licenses_by_dependency),
            conflicts=conflicts,
            dominant_license=self._find_dominant_license(unique_licenses, distribution),
            aggregated_obligations=obligations,
            compliance_status=status,
            risk_score=self._risk_score(conflicts, obligations, unique_licenses, unknown),
            recommendations=self._recommendations(conflicts, obligations, unknown),
        )
        logger.debug(
            "Analyzed %d dependencies: %d licenses, %d conflicts, status %s",
            analysis.total_dependencies,
            len(unique_licenses),
            len(conflicts),
            status.value,
        )
        return analysis

    def _find_conflicts(
        self, unique_licenses: list[str], dependency_names: dict[str, list[str]]
    ) -> list[LicenseConflict]:
        conflicts = []
        for i, license_a in enumerate(unique_licenses):
            for license_b in unique_licenses[i + 1 :]:
                result = self.resolver.check_pair_compatibility(license_a, license_b)
                if result.level == CompatibilityLevel.INCOMPATIBLE:
                    severity = ConflictSeverity.BLOCKING
                elif result.requires_review and result.level in (
                    CompatibilityLevel.CONDITIONAL,
                    CompatibilityLevel.UNKNOWN,
                ):
                    severity = ConflictSeverity.REVIEW
                else:
                    continue
                conflicts.append(
                    LicenseConflict(
                        license_a=license_a,
                        license_b=license_b,
                        severity=severity,
                        level=result.level,
                        reason=result.reason,
                        dependencies_a=list(dependency_names.get(license_a, [])),
                        dependencies_b=list(dependency_names.get(license_b, [])),
                        suggestions=list(result.suggestions),
                    )
                )
        return conflicts

    def _category_distribution(
        self, licenses_by_dependency: list[tuple[DependencyLicense, str]]
    ) -> dict[str, int]:
        counts: Counter[str] = Counter()
        for _, license_id in licenses_by_dependency:
            node = self.graph.get_license(license_id)
            category = node.category if node else LicenseCategory.UNKNOWN
            counts[category.value] += 1
        return dict(counts)

    def _find_dominant_license(
        self, unique_licenses: list[str], distribution: Counter
    ) -> Optional[DominantLicenseInfo]:
        """Pick the most restrictive known license.

        Ranked by category restrictiveness, then copyleft propagation;
        ties go to the smallest canonical id.
        """
        nodes = [self.graph.get_license(i) for i in sorted(unique_licenses)]
        known = [node for node in nodes if node is not None]
        if not known:
            return None

        dominant = max(
            known,
            key=lambda node: (
                node.category.restrictiveness,
                node.copyleft_strength.propagation_level,
            ),
        )
        return DominantLicenseInfo(
            license_id=dominant.id,
            license_name=dominant.display_name,
            category=dominant.category,
            copyleft_strength=dominant.copyleft_strength,
            reason="Most restrictive license based on category and copyleft strength",
            dependency_count=distribution[dominant.id],
        )

    def _risk_score(
        self,
        conflicts: list[LicenseConflict],
        obligations: AggregatedObligations,
        unique_licenses: list[str],
        unknown: list[str],
    ) -> float:
        weights = self.config.risk_weights
        blocking = sum(1 for c in conflicts if c.severity == ConflictSeverity.BLOCKING)
        review = len(conflicts) - blocking
        efforts = [o.effort for o in obligations.obligations]
        strong = 0
        for license_id in unique_licenses:
            node = self.graph.get_license(license_id)
            if node is not None and node.copyleft_strength in (
                CopyleftStrength.STRONG,
                CopyleftStrength.NETWORK,
            ):
                strong += 1

        score = (
            blocking * weights.blocking_conflict
            + review * weights.review_conflict
            + efforts.count(EffortLevel.VERY_HIGH) * weights.very_high_effort_obligation
            + efforts.count(EffortLevel.HIGH) * weights.high_effort_obligation
            + strong * weights.strong_copyleft_license
            + len(unknown) * weights.unknown_license
        )
        return min(max(score, 0.0), 1.0)

    def _recommendations(
        self,
        conflicts: list[LicenseConflict],
        obligations: AggregatedObligations,
        unknown: list[str],
    ) -> list[ComplianceRecommendation]:
        recommendations = []

        for conflict in conflicts:
            blocking = conflict.severity == ConflictSeverity.BLOCKING
            recommendations.append(
                ComplianceRecommendation(
                    type=RecommendationType.RESOLVE_CONFLICT,
                    priority=(
                        RecommendationPriority.CRITICAL
                        if blocking
                        else RecommendationPriority.HIGH
                    ),
                    title=f"License conflict: {conflict.license_a} vs {conflict.license_b}",
                    description=conflict.reason,
                    actions=list(conflict.suggestions),
                    affected=conflict.dependencies_a + conflict.dependencies_b,
                )
            )

        threshold = self.config.recommendation_effort_threshold
        for obligation in obligations.obligations:
            if obligation.effort.level < threshold.level:
                continue
            recommendations.append(
                ComplianceRecommendation(
                    type=RecommendationType.FULFILL_OBLIGATION,
                    priority=(
                        RecommendationPriority.HIGH
                        if obligation.effort == EffortLevel.VERY_HIGH
                        else RecommendationPriority.MEDIUM
                    ),
                    title=f"High-effort obligation: {obligation.obligation_name}",
                    description=obligation.description,
                    actions=list(obligation.examples),
                    affected=obligation.source_license_ids,
                    obligation_id=obligation.obligation_id,
                    estimated_effort=obligation.effort,
                )
            )

        for license_id in unknown:
            recommendations.append(
                ComplianceRecommendation(
                    type=RecommendationType.LEGAL_REVIEW,
                    priority=RecommendationPriority.HIGH,
                    title=f"Unknown license: {license_id}",
                    description=(
                        f"{license_id} is not in the license knowledge graph; "
                        "its compatibility and obligations could not be assessed"
                    ),
                    actions=[
                        "Verify the license identifier against the SPDX list",
                        "Have the license text reviewed by legal counsel",
                    ],
                    affected=[license_id],
                )
            )

        # sort() is stable, so equal priorities keep their insertion order
        recommendations.sort(key=lambda r: r.priority.level, reverse=True)
        return recommendations
