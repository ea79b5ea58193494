"""License reasoning engine facade.

Bundles a frozen license graph with the resolver, aggregator and tree
analyzer built over it. Every query is read-only, so one engine can be
shared by any number of callers.
"""

from typing import Iterable, Optional

from license_graph.analysis.compatibility import CompatibilityResolver
from license_graph.analysis.details import get_license_details
from license_graph.analysis.obligations import ObligationAggregator
from license_graph.analysis.tree import DependencyTreeAnalyzer
from license_graph.graph.loader import build_reference_graph
from license_graph.graph.store import LicenseGraph
from license_graph.models.analysis import (
    AggregatedObligations,
    DependencyLicense,
    DependencyTreeAnalysis,
    DistributionScope,
    GraphStatistics,
    LicenseDetails,
    ObligationWithDistribution,
)
from license_graph.models.compatibility import (
    CompatibilityMatrix,
    CompatibilityPath,
    CompatibilityResult,
)
from license_graph.models.config import EngineConfig
from license_graph.models.license import (
    LicenseCategory,
    LicenseNode,
    Obligation,
    ObligationWithScope,
    Right,
)


class LicenseEngine:
    """Entry point for license compatibility and obligation queries."""

    def __init__(self, graph: LicenseGraph, config: Optional[EngineConfig] = None):
        self.graph = graph
        self.config = config or EngineConfig()
        self.resolver = CompatibilityResolver(graph, self.config)
        self.aggregator = ObligationAggregator(graph)
        self.analyzer = DependencyTreeAnalyzer(
            graph, self.config, resolver=self.resolver, aggregator=self.aggregator
        )

    @classmethod
    def create(cls, config: Optional[EngineConfig] = None) -> "LicenseEngine":
        """Build an engine over a freshly loaded, frozen reference graph."""
        return cls(build_reference_graph(), config)

    # Graph lookups

    def get_license(self, license_id: Optional[str]) -> Optional[LicenseNode]:
        return self.graph.get_license(license_id)

    def get_all_licenses(self) -> list[LicenseNode]:
        return self.graph.get_all_licenses()

    def get_licenses_by_category(self, category: LicenseCategory) -> list[LicenseNode]:
        return self.graph.get_licenses_by_category(category)

    def get_licenses_by_family(self, family: str) -> list[LicenseNode]:
        return self.graph.get_licenses_by_family(family)

    def search_licenses(self, query: str, limit: Optional[int] = None) -> list[LicenseNode]:
        """Search licenses, capped at the configured search limit by default."""
        return self.graph.search_licenses(
            query, limit if limit is not None else self.config.search_limit
        )

    def get_obligation(self, obligation_id: str) -> Optional[Obligation]:
        return self.graph.get_obligation(obligation_id)

    def get_all_obligations(self) -> list[Obligation]:
        return self.graph.get_all_obligations()

    def get_right(self, right_id: str) -> Optional[Right]:
        return self.graph.get_right(right_id)

    def get_all_rights(self) -> list[Right]:
        return self.graph.get_all_rights()

    def get_rights_for_license(self, license_id: Optional[str]) -> list[Right]:
        return self.graph.get_rights_for_license(license_id)

    def get_statistics(self) -> GraphStatistics:
        return self.graph.get_statistics()

    # Compatibility

    def check_compatibility(
        self, license_a: Optional[str], license_b: Optional[str]
    ) -> CompatibilityResult:
        return self.resolver.check_compatibility(license_a, license_b)

    def find_compatibility_path(
        self,
        source: Optional[str],
        target: Optional[str],
        max_depth: Optional[int] = None,
    ) -> Optional[CompatibilityPath]:
        return self.resolver.find_compatibility_path(source, target, max_depth)

    def check_compatibility_matrix(self, license_ids: list[str]) -> CompatibilityMatrix:
        return self.resolver.check_compatibility_matrix(license_ids)

    # Obligations

    def get_obligations_for_license(
        self, license_id: Optional[str]
    ) -> list[ObligationWithScope]:
        return self.aggregator.get_obligations_for_license(license_id)

    def aggregate_obligations(self, license_ids: Iterable[str]) -> AggregatedObligations:
        return self.aggregator.aggregate_obligations(license_ids)

    def get_obligations_for_distribution(
        self, license_id: Optional[str], distribution_scope: DistributionScope
    ) -> list[ObligationWithDistribution]:
        return self.aggregator.get_obligations_for_distribution(
            license_id, distribution_scope
        )

    # Trees and details

    def analyze_dependency_tree(
        self, dependencies: list[DependencyLicense]
    ) -> DependencyTreeAnalysis:
        return self.analyzer.analyze_dependency_tree(dependencies)

    def get_license_details(self, license_id: Optional[str]) -> Optional[LicenseDetails]:
        return get_license_details(self.graph, license_id, self.aggregator)
