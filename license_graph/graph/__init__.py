"""License knowledge graph: store, reference data and loader."""

from license_graph.graph.loader import build_reference_graph, load_reference_data
from license_graph.graph.normalize import canonical_license_id
from license_graph.graph.store import LicenseGraph

__all__ = [
    "LicenseGraph",
    "build_reference_graph",
    "canonical_license_id",
    "load_reference_data",
]
