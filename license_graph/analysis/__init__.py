"""Analysis modules for license-graph."""

from license_graph.analysis.compatibility import CompatibilityResolver
from license_graph.analysis.details import get_license_details
from license_graph.analysis.obligations import ObligationAggregator
from license_graph.analysis.tree import DependencyTreeAnalyzer

__all__ = [
    "CompatibilityResolver",
    "DependencyTreeAnalyzer",
    "ObligationAggregator",
    "get_license_details",
]
