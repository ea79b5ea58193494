"""Tests for pairwise license compatibility resolution."""

import pytest

from license_graph.analysis.compatibility import CompatibilityResolver
from license_graph.graph.seed import PERMISSIVE_CORE
from license_graph.graph.store import LicenseGraph
from license_graph.models.compatibility import CompatibilityLevel
from license_graph.models.license import CopyleftStrength, LicenseCategory


@pytest.fixture(scope="module")
def resolver(reference_graph: LicenseGraph) -> CompatibilityResolver:
    """Resolver over the reference graph."""
    return CompatibilityResolver(reference_graph)


class TestSameLicense:
    """Tests for identical license ids."""

    def test_mit_mit_full(self, resolver: CompatibilityResolver) -> None:
        """Test MIT + MIT is fully compatible."""
        result = resolver.check_compatibility("MIT", "MIT")
        assert result.level == CompatibilityLevel.FULL
        assert result.compatible is True
        assert "Same license" in result.reason
        assert result.path == ["MIT"]

    def test_case_insensitive(self, resolver: CompatibilityResolver) -> None:
        """Test that ids differing only in case are the same license."""
        result = resolver.check_compatibility("mit", "MIT")
        assert result.level == CompatibilityLevel.FULL
        assert result.license_a == result.license_b == "MIT"

    def test_alias_resolves_to_same_license(self, resolver: CompatibilityResolver) -> None:
        """Test a deprecated SPDX alias matches its current id."""
        result = resolver.check_compatibility("GPL-3.0", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.FULL

    def test_unknown_same_id_full(self, resolver: CompatibilityResolver) -> None:
        """Test that an id is compatible with itself even when unknown."""
        result = resolver.check_compatibility("CUSTOM-1", "custom-1")
        assert result.level == CompatibilityLevel.FULL


class TestDocumentedEdges:
    """Tests for verdicts taken from curated edges."""

    def test_all_permissive_combinations(self, resolver: CompatibilityResolver) -> None:
        """Test every permissive core pair is fully compatible."""
        for i, lic_a in enumerate(PERMISSIVE_CORE):
            for lic_b in PERMISSIVE_CORE[i:]:
                result = resolver.check_compatibility(lic_a, lic_b)
                assert result.level == CompatibilityLevel.FULL, (
                    f"{lic_a} + {lic_b} should be fully compatible"
                )

    def test_mit_bsd_carries_edge_data(self, resolver: CompatibilityResolver) -> None:
        """Test that edge conditions, notes and sources are reported."""
        result = resolver.check_compatibility("MIT", "BSD-3-Clause")
        assert result.level == CompatibilityLevel.FULL
        assert result.reason == "Permissive licenses are fully compatible with each other"
        assert result.conditions == ["Maintain attribution notices from both licenses"]
        assert result.sources == ["OSI License Compatibility Guidelines"]
        assert result.path == ["MIT", "BSD-3-CLAUSE"]
        assert result.inferred_rule is None

    def test_gpl2_only_gpl3_only_incompatible(self, resolver: CompatibilityResolver) -> None:
        """Test GPL-2.0-only + GPL-3.0-only is incompatible."""
        result = resolver.check_compatibility("GPL-2.0-only", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.INCOMPATIBLE
        assert result.compatible is False
        assert "GPL-2.0-only" in result.reason
        assert result.suggestions

    def test_gpl3_gpl2_reverse_incompatible(self, resolver: CompatibilityResolver) -> None:
        """Test the bidirectional edge applies in reverse order too."""
        result = resolver.check_compatibility("GPL-3.0-only", "GPL-2.0-only")
        assert result.level == CompatibilityLevel.INCOMPATIBLE

    def test_apache_gpl2_incompatible(self, resolver: CompatibilityResolver) -> None:
        """Test Apache-2.0 + GPL-2.0-only is incompatible."""
        result = resolver.check_compatibility("Apache-2.0", "GPL-2.0-only")
        assert result.level == CompatibilityLevel.INCOMPATIBLE
        assert "patent" in result.reason.lower()

    def test_apache_into_gpl3_one_way(self, resolver: CompatibilityResolver) -> None:
        """Test Apache-2.0 code can flow into GPL-3.0-only."""
        result = resolver.check_compatibility("Apache-2.0", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.ONE_WAY
        assert result.compatible is True
        assert result.dominant_license == "GPL-3.0-ONLY"
        assert result.requires_review is False

    def test_gpl3_apache_falls_back_to_inference(
        self, resolver: CompatibilityResolver
    ) -> None:
        """Test a one-way edge is not reused for the reverse pair."""
        result = resolver.check_compatibility("GPL-3.0-only", "Apache-2.0")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.inferred_rule == "copyleft-over-permissive"
        assert result.dominant_license == "GPL-3.0-ONLY"

    def test_mpl_gpl3_conditional(self, resolver: CompatibilityResolver) -> None:
        """Test MPL-2.0 + GPL-3.0-only via the secondary license clause."""
        result = resolver.check_compatibility("MPL-2.0", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.dominant_license == "GPL-3.0-ONLY"
        assert result.requires_review is False

    def test_gpl3_agpl_conditional(self, resolver: CompatibilityResolver) -> None:
        """Test GPL-3.0-only + AGPL-3.0-only is conditional with AGPL dominant."""
        result = resolver.check_compatibility("AGPL-3.0-only", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.dominant_license == "AGPL-3.0-ONLY"


class TestInference:
    """Tests for rule-based inference when no edge exists."""

    def test_permissive_pair_full(self, resolver: CompatibilityResolver) -> None:
        """Test two permissive licenses without an edge are fully compatible."""
        result = resolver.check_compatibility("MIT", "X11")
        assert result.level == CompatibilityLevel.FULL
        assert result.inferred_rule == "permissive-combination"

    def test_mit_gpl3_conditional(self, resolver: CompatibilityResolver) -> None:
        """Test MIT + GPL-3.0-only is conditional under GPL terms."""
        result = resolver.check_compatibility("MIT", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.compatible is True
        assert result.dominant_license == "GPL-3.0-ONLY"
        assert result.inferred_rule == "permissive-under-copyleft"
        assert result.requires_review is False

    def test_gpl3_mit_conditional(self, resolver: CompatibilityResolver) -> None:
        """Test GPL-3.0-only + MIT keeps GPL dominant."""
        result = resolver.check_compatibility("GPL-3.0-only", "MIT")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.dominant_license == "GPL-3.0-ONLY"
        assert result.inferred_rule == "copyleft-over-permissive"

    def test_mit_agpl_conditional(self, resolver: CompatibilityResolver) -> None:
        """Test permissive code under network copyleft."""
        result = resolver.check_compatibility("MIT", "AGPL-3.0-only")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.dominant_license == "AGPL-3.0-ONLY"

    def test_public_domain_with_copyleft(self, resolver: CompatibilityResolver) -> None:
        """Test public domain combines with strong copyleft."""
        result = resolver.check_compatibility("CC0-1.0", "GPL-3.0-only")
        assert result.level == CompatibilityLevel.FULL
        assert result.inferred_rule == "public-domain-combination"

    def test_same_family_same_version(self, resolver: CompatibilityResolver) -> None:
        """Test GPL-2.0-only + GPL-2.0-or-later share a version."""
        result = resolver.check_compatibility("GPL-2.0-only", "GPL-2.0-or-later")
        assert result.level == CompatibilityLevel.FULL
        assert result.inferred_rule == "same-family-version"

    def test_or_later_upgrade(self, resolver: CompatibilityResolver) -> None:
        """Test an 'or later' license upgrades to the newer version."""
        result = resolver.check_compatibility("GPL-2.0-or-later", "GPL-3.0-or-later")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.dominant_license == "GPL-3.0-OR-LATER"
        assert result.inferred_rule == "or-later-upgrade"

    def test_strong_version_conflict(self, resolver: CompatibilityResolver) -> None:
        """Test GPL-2.0-only cannot upgrade to GPL-3.0-or-later."""
        result = resolver.check_compatibility("GPL-2.0-only", "GPL-3.0-or-later")
        assert result.level == CompatibilityLevel.INCOMPATIBLE
        assert result.inferred_rule == "version-conflict"

    def test_weak_version_review(self, resolver: CompatibilityResolver) -> None:
        """Test different weak copyleft versions need review."""
        result = resolver.check_compatibility("LGPL-2.1-only", "LGPL-3.0-only")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.requires_review is True
        assert result.inferred_rule == "version-review"

    def test_weak_under_strong(self, resolver: CompatibilityResolver) -> None:
        """Test weak copyleft combined with strong copyleft."""
        result = resolver.check_compatibility("LGPL-2.1-only", "GPL-2.0-only")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.requires_review is True
        assert result.dominant_license == "GPL-2.0-ONLY"
        assert result.inferred_rule == "weak-under-strong-copyleft"

    def test_network_copyleft_review(self, resolver: CompatibilityResolver) -> None:
        """Test weak copyleft combined with network copyleft."""
        result = resolver.check_compatibility("LGPL-3.0-only", "AGPL-3.0-or-later")
        assert result.level == CompatibilityLevel.CONDITIONAL
        assert result.requires_review is True
        assert result.dominant_license == "AGPL-3.0-OR-LATER"
        assert result.inferred_rule == "network-copyleft"

    def test_unrelated_weak_copyleft_unknown(
        self, resolver: CompatibilityResolver
    ) -> None:
        """Test two unrelated weak copyleft licenses are undetermined."""
        result = resolver.check_compatibility("MPL-2.0", "EPL-2.0")
        assert result.level == CompatibilityLevel.UNKNOWN
        assert result.requires_review is True
        assert result.compatible is False

    def test_strong_copyleft_conflict(self, empty_graph: LicenseGraph, make_license) -> None:
        """Test strong copyleft licenses of different families conflict."""
        for license_id, family in (("STRONG-A", "Alpha"), ("STRONG-B", "Beta")):
            empty_graph.add_license(
                make_license(
                    license_id,
                    category=LicenseCategory.STRONG_COPYLEFT,
                    copyleft=CopyleftStrength.STRONG,
                    family=family,
                )
            )
        result = CompatibilityResolver(empty_graph).check_compatibility(
            "STRONG-A", "STRONG-B"
        )
        assert result.level == CompatibilityLevel.INCOMPATIBLE
        assert result.inferred_rule == "copyleft-conflict"


class TestUnknownLicenses:
    """Tests for ids missing from the graph."""

    def test_unknown_license(self, resolver: CompatibilityResolver) -> None:
        """Test an unknown id yields UNKNOWN and requires review."""
        result = resolver.check_compatibility("MIT", "NOT-A-LICENSE")
        assert result.level == CompatibilityLevel.UNKNOWN
        assert result.requires_review is True
        assert result.compatible is False
        assert "NOT-A-LICENSE" in result.reason

    def test_never_raises_on_blank(self, resolver: CompatibilityResolver) -> None:
        """Test that blank input is reported, not raised."""
        result = resolver.check_compatibility("MIT", None)
        assert result.level == CompatibilityLevel.UNKNOWN

    def test_repeated_checks_are_equal(self, resolver: CompatibilityResolver) -> None:
        """Test that the same query gives the same result."""
        first = resolver.check_compatibility("LGPL-2.1-only", "GPL-2.0-only")
        second = resolver.check_compatibility("LGPL-2.1-only", "GPL-2.0-only")
        assert first == second


class TestOneWayEdges:
    """Tests for directional edges and unordered pair checks."""

    def test_reverse_of_one_way_is_inferred(self, resolver: CompatibilityResolver) -> None:
        """Test the reverse order of a ONE_WAY edge falls back to inference."""
        forward = resolver.check_compatibility("MPL-2.0", "GPL-3.0-only")
        reverse = resolver.check_compatibility("GPL-3.0-only", "MPL-2.0")

        assert forward.level == CompatibilityLevel.CONDITIONAL
        assert forward.requires_review is False
        assert forward.inferred_rule is None
        assert reverse.inferred_rule == "weak-under-strong-copyleft"
        assert reverse.requires_review is True

    @pytest.mark.parametrize(
        ("license_a", "license_b"),
        [
            ("MPL-2.0", "GPL-3.0-only"),
            ("GPL-3.0-only", "MPL-2.0"),
            ("LGPL-3.0-only", "GPL-3.0-only"),
            ("GPL-3.0-only", "LGPL-3.0-only"),
            ("GPL-3.0-only", "Apache-2.0"),
        ],
    )
    def test_pair_uses_documented_direction(
        self, resolver: CompatibilityResolver, license_a: str, license_b: str
    ) -> None:
        """Test the pair check picks the direction that has an edge."""
        result = resolver.check_pair_compatibility(license_a, license_b)
        assert result.license_b == "GPL-3.0-ONLY"
        assert result.inferred_rule is None
        assert result.requires_review is False
        assert result.compatible is True

    def test_pair_without_edge_uses_id_order(
        self, resolver: CompatibilityResolver
    ) -> None:
        """Test inferred pairs are checked in canonical id order."""
        forward = resolver.check_pair_compatibility("MIT", "GPL-3.0-only")
        reverse = resolver.check_pair_compatibility("GPL-3.0-only", "MIT")

        assert forward == reverse
        assert (forward.license_a, forward.license_b) == ("GPL-3.0-ONLY", "MIT")

    def test_pair_with_bidirectional_edge(self, resolver: CompatibilityResolver) -> None:
        """Test a bidirectional edge gives the same verdict either way."""
        forward = resolver.check_pair_compatibility("GPL-3.0-only", "GPL-2.0-only")
        reverse = resolver.check_pair_compatibility("GPL-2.0-only", "GPL-3.0-only")

        assert forward == reverse
        assert forward.level == CompatibilityLevel.INCOMPATIBLE


class TestCompatibilityMatrix:
    """Tests for check_compatibility_matrix method."""

    def test_matrix_dedupes_and_sorts(self, resolver: CompatibilityResolver) -> None:
        """Test that aliases and case variants collapse into one entry."""
        matrix = resolver.check_compatibility_matrix(
            ["MIT", "GPL-2.0-only", "GPL-3.0-only", "mit"]
        )
        assert matrix.licenses == ["GPL-2.0-ONLY", "GPL-3.0-ONLY", "MIT"]
        assert matrix.size == 3

    def test_matrix_diagonal_full(self, resolver: CompatibilityResolver) -> None:
        """Test that every license is compatible with itself."""
        matrix = resolver.check_compatibility_matrix(["MIT", "GPL-2.0-only"])
        for i in range(matrix.size):
            assert matrix.matrix[i][i] == CompatibilityLevel.FULL

    def test_matrix_issues(self, resolver: CompatibilityResolver) -> None:
        """Test that non-FULL pairs above the diagonal become issues."""
        matrix = resolver.check_compatibility_matrix(
            ["MIT", "GPL-2.0-only", "GPL-3.0-only"]
        )
        assert matrix.get_level("GPL-2.0-ONLY", "GPL-3.0-ONLY") == (
            CompatibilityLevel.INCOMPATIBLE
        )
        assert len(matrix.issues) == 3
        assert matrix.has_issues is True

    def test_matrix_without_issues(self, resolver: CompatibilityResolver) -> None:
        """Test a permissive-only matrix has no issues."""
        matrix = resolver.check_compatibility_matrix(["MIT", "Apache-2.0", "ISC"])
        assert matrix.issues == []
        assert matrix.has_issues is False

    def test_matrix_drops_blank_ids(self, resolver: CompatibilityResolver) -> None:
        """Test that blank ids are ignored."""
        matrix = resolver.check_compatibility_matrix(["MIT", "  "])
        assert matrix.licenses == ["MIT"]

    def test_get_level_unknown_raises(self, resolver: CompatibilityResolver) -> None:
        """Test that get_level rejects ids outside the matrix."""
        matrix = resolver.check_compatibility_matrix(["MIT"])
        with pytest.raises(ValueError, match="not in matrix"):
            matrix.get_level("MIT", "GPL-3.0-ONLY")
