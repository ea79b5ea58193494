"""Tests for dependency tree license analysis."""

import pytest

from license_graph.analysis.tree import NO_ASSERTION, DependencyTreeAnalyzer
from license_graph.graph.store import LicenseGraph
from license_graph.models.analysis import (
    ComplianceStatus,
    ConflictSeverity,
    RecommendationPriority,
    RecommendationType,
)
from license_graph.models.config import EngineConfig, RiskWeights
from license_graph.models.license import EffortLevel, LicenseCategory


@pytest.fixture(scope="module")
def analyzer(reference_graph: LicenseGraph) -> DependencyTreeAnalyzer:
    """Analyzer over the reference graph with default configuration."""
    return DependencyTreeAnalyzer(reference_graph)


class TestCompliantTrees:
    """Tests for trees without conflicts."""

    def test_all_mit(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test a tree of MIT dependencies is compliant."""
        deps = [make_dependency(name, "MIT") for name in ("click", "rich", "attrs")]
        analysis = analyzer.analyze_dependency_tree(deps)

        assert analysis.total_dependencies == 3
        assert analysis.unique_licenses == ["MIT"]
        assert analysis.license_distribution == {"MIT": 3}
        assert analysis.category_distribution == {"permissive": 3}
        assert analysis.conflicts == []
        assert analysis.compliance_status == ComplianceStatus.COMPLIANT
        assert analysis.risk_score == 0.0
        assert analysis.recommendations == []
        assert analysis.has_issues is False

    def test_dominant_single_license(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test the dominant license of a single-license tree."""
        deps = [make_dependency(name, "MIT") for name in ("click", "rich", "attrs")]
        dominant = analyzer.analyze_dependency_tree(deps).dominant_license
        assert dominant is not None
        assert dominant.license_id == "MIT"
        assert dominant.dependency_count == 3

    def test_permissive_mix(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test permissive licenses combine without risk."""
        deps = [
            make_dependency("click", "BSD-3-Clause"),
            make_dependency("requests", "Apache-2.0"),
            make_dependency("rich", "MIT"),
        ]
        analysis = analyzer.analyze_dependency_tree(deps)
        assert analysis.compliance_status == ComplianceStatus.COMPLIANT
        assert analysis.risk_score == 0.0

    def test_mit_with_gpl3(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test permissive code under GPL is compliant but carries obligations."""
        deps = [make_dependency("rich", "MIT"), make_dependency("readline", "GPL-3.0-only")]
        analysis = analyzer.analyze_dependency_tree(deps)

        assert analysis.conflicts == []
        assert analysis.compliance_status == ComplianceStatus.COMPLIANT
        assert analysis.dominant_license.license_id == "GPL-3.0-ONLY"
        assert analysis.risk_score == pytest.approx(0.28)

        obligation_ids = [r.obligation_id for r in analysis.recommendations]
        assert obligation_ids == ["SAME_LICENSE", "SOURCE_DISCLOSURE"]
        assert analysis.recommendations[0].priority == RecommendationPriority.HIGH
        assert analysis.recommendations[1].priority == RecommendationPriority.MEDIUM

    def test_empty_tree(self, analyzer: DependencyTreeAnalyzer) -> None:
        """Test an empty dependency list."""
        analysis = analyzer.analyze_dependency_tree([])
        assert analysis.total_dependencies == 0
        assert analysis.unique_licenses == []
        assert analysis.dominant_license is None
        assert analysis.compliance_status == ComplianceStatus.COMPLIANT
        assert analysis.risk_score == 0.0


class TestConflicts:
    """Tests for conflict detection."""

    def test_gpl2_gpl3_blocked(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test GPL-2.0-only with GPL-3.0-only blocks the tree."""
        deps = [
            make_dependency("old-lib", "GPL-2.0-only"),
            make_dependency("new-lib", "GPL-3.0-only"),
        ]
        analysis = analyzer.analyze_dependency_tree(deps)

        assert analysis.compliance_status == ComplianceStatus.BLOCKED
        assert analysis.blocking_conflicts == 1
        conflict = analysis.conflicts[0]
        assert conflict.severity == ConflictSeverity.BLOCKING
        assert conflict.dependencies_a == ["old-lib"]
        assert conflict.dependencies_b == ["new-lib"]
        assert conflict.suggestions

    def test_blocked_risk_and_recommendations(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test risk score and recommendation order of a blocked tree."""
        deps = [
            make_dependency("old-lib", "GPL-2.0-only"),
            make_dependency("new-lib", "GPL-3.0-only"),
        ]
        analysis = analyzer.analyze_dependency_tree(deps)

        assert analysis.risk_score == pytest.approx(0.63)
        recommendations = analysis.recommendations
        assert recommendations[0].type == RecommendationType.RESOLVE_CONFLICT
        assert recommendations[0].priority == RecommendationPriority.CRITICAL
        assert recommendations[0].title == "License conflict: GPL-2.0-ONLY vs GPL-3.0-ONLY"
        assert recommendations[0].affected == ["old-lib", "new-lib"]
        priorities = [r.priority.level for r in recommendations]
        assert priorities == sorted(priorities, reverse=True)

    def test_review_conflict(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test a combination needing review."""
        deps = [
            make_dependency("lgpl-lib", "LGPL-2.1-only"),
            make_dependency("gpl-lib", "GPL-2.0-only"),
        ]
        analysis = analyzer.analyze_dependency_tree(deps)
        assert analysis.compliance_status == ComplianceStatus.REVIEW_REQUIRED
        assert analysis.conflicts[0].severity == ConflictSeverity.REVIEW
        assert analysis.blocking_conflicts == 0

    def test_risk_score_clamped(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test many conflicts cap the risk score at 1.0."""
        deps = [
            make_dependency("a", "GPL-2.0-only"),
            make_dependency("b", "GPL-3.0-only"),
            make_dependency("c", "Apache-2.0"),
            make_dependency("d", "AGPL-3.0-only"),
        ]
        analysis = analyzer.analyze_dependency_tree(deps)
        assert analysis.risk_score == 1.0


class TestUnknownLicenses:
    """Tests for licenses missing from the graph."""

    def test_unknown_needs_review(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test an unknown license triggers review and legal review."""
        deps = [make_dependency("rich", "MIT"), make_dependency("vendor", "PROPRIETARY-CORP")]
        analysis = analyzer.analyze_dependency_tree(deps)

        assert analysis.compliance_status == ComplianceStatus.REVIEW_REQUIRED
        assert analysis.category_distribution == {
            LicenseCategory.PERMISSIVE.value: 1,
            LicenseCategory.UNKNOWN.value: 1,
        }
        assert analysis.risk_score == pytest.approx(0.15)

        legal = [
            r for r in analysis.recommendations if r.type == RecommendationType.LEGAL_REVIEW
        ]
        assert len(legal) == 1
        assert legal[0].title == "Unknown license: PROPRIETARY-CORP"
        assert legal[0].priority == RecommendationPriority.HIGH

    def test_dominant_ignores_unknown(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test unknown licenses cannot be dominant."""
        deps = [make_dependency("rich", "MIT"), make_dependency("vendor", "PROPRIETARY-CORP")]
        assert analyzer.analyze_dependency_tree(deps).dominant_license.license_id == "MIT"

    def test_only_unknown_has_no_dominant(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test a tree of unknown licenses has no dominant license."""
        deps = [make_dependency("vendor", "PROPRIETARY-CORP")]
        assert analyzer.analyze_dependency_tree(deps).dominant_license is None

    def test_blank_license(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test a blank license id is reported as NOASSERTION."""
        analysis = analyzer.analyze_dependency_tree([make_dependency("mystery", "  ")])
        assert analysis.unique_licenses == [NO_ASSERTION]
        assert any(
            r.type == RecommendationType.LEGAL_REVIEW for r in analysis.recommendations
        )


class TestAnalysisDetails:
    """Tests for distributions, dominance and configuration."""

    def test_case_variants_merged(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test ids differing in case count as one license."""
        deps = [make_dependency("a", "mit"), make_dependency("b", "MIT")]
        analysis = analyzer.analyze_dependency_tree(deps)
        assert analysis.unique_licenses == ["MIT"]
        assert analysis.license_distribution == {"MIT": 2}

    def test_dominant_tie_breaks_on_id(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test equally restrictive licenses resolve to the smallest id."""
        deps = [
            make_dependency("new-lib", "GPL-3.0-only"),
            make_dependency("old-lib", "GPL-2.0-only"),
        ]
        dominant = analyzer.analyze_dependency_tree(deps).dominant_license
        assert dominant.license_id == "GPL-2.0-ONLY"

    def test_network_copyleft_dominates(
        self, analyzer: DependencyTreeAnalyzer, make_dependency
    ) -> None:
        """Test network copyleft outranks strong copyleft."""
        deps = [
            make_dependency("a", "GPL-3.0-only"),
            make_dependency("b", "AGPL-3.0-only"),
            make_dependency("c", "MIT"),
        ]
        dominant = analyzer.analyze_dependency_tree(deps).dominant_license
        assert dominant.license_id == "AGPL-3.0-ONLY"

    def test_zero_weights(self, reference_graph: LicenseGraph, make_dependency) -> None:
        """Test risk weights come from configuration."""
        weights = RiskWeights(
            blocking_conflict=0,
            review_conflict=0,
            very_high_effort_obligation=0,
            high_effort_obligation=0,
            strong_copyleft_license=0,
            unknown_license=0,
        )
        analyzer = DependencyTreeAnalyzer(
            reference_graph, EngineConfig(risk_weights=weights)
        )
        deps = [make_dependency("a", "GPL-2.0-only"), make_dependency("b", "GPL-3.0-only")]
        assert analyzer.analyze_dependency_tree(deps).risk_score == 0.0

    def test_effort_threshold(self, reference_graph: LicenseGraph, make_dependency) -> None:
        """Test a lower threshold recommends more obligations."""
        analyzer = DependencyTreeAnalyzer(
            reference_graph,
            EngineConfig(recommendation_effort_threshold=EffortLevel.MEDIUM),
        )
        analysis = analyzer.analyze_dependency_tree([make_dependency("lib", "GPL-3.0-only")])
        obligation_ids = {r.obligation_id for r in analysis.recommendations}
        assert "STATE_CHANGES" in obligation_ids

    def test_repeatable(self, analyzer: DependencyTreeAnalyzer, make_dependency) -> None:
        """Test identical input gives identical analyses."""
        deps = [
            make_dependency("a", "LGPL-2.1-only"),
            make_dependency("b", "GPL-2.0-only"),
            make_dependency("c", "NOT-A-LICENSE"),
        ]
        first = analyzer.analyze_dependency_tree(deps)
        second = analyzer.analyze_dependency_tree(deps)
        assert first.model_dump() == second.model_dump()

    @pytest.mark.parametrize(
        "licenses",
        [
            ["MPL-2.0", "GPL-3.0-only"],
            ["LGPL-3.0-only", "GPL-3.0-only"],
            ["Apache-2.0", "AGPL-3.0-only", "MIT"],
            ["LGPL-2.1-only", "GPL-2.0-only", "NOT-A-LICENSE"],
        ],
    )
    def test_input_order_irrelevant(
        self, analyzer: DependencyTreeAnalyzer, make_dependency, licenses: list[str]
    ) -> None:
        """Test a dependency list and its reverse give the same analysis."""
        deps = [make_dependency(f"lib-{i}", license_id) for i, license_id in enumerate(licenses)]
        forward = analyzer.analyze_dependency_tree(deps)
        reverse = analyzer.analyze_dependency_tree(list(reversed(deps)))

        assert forward.compliance_status == reverse.compliance_status
        assert forward.risk_score == reverse.risk_score
        assert forward.model_dump() == reverse.model_dump()

    @pytest.mark.parametrize("weak_license", ["MPL-2.0", "LGPL-3.0-only"])
    def test_documented_one_way_edge_is_compliant(
        self, analyzer: DependencyTreeAnalyzer, make_dependency, weak_license: str
    ) -> None:
        """Test a weak copyleft with a documented GPL-3.0 edge needs no review."""
        deps = [make_dependency("app", "GPL-3.0-only"), make_dependency("lib", weak_license)]
        analysis = analyzer.analyze_dependency_tree(deps)

        assert analysis.conflicts == []
        assert analysis.compliance_status == ComplianceStatus.COMPLIANT
        assert analysis.unique_licenses == sorted(analysis.unique_licenses)
