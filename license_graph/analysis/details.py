"""Composite license detail view for license-graph."""

from typing import Optional

from license_graph.analysis.obligations import ObligationAggregator
from license_graph.graph.store import LicenseGraph
from license_graph.models.analysis import (
    CompatibleLicenseSummary,
    IncompatibleLicenseSummary,
    LicenseDetails,
)
from license_graph.models.compatibility import CompatibilityLevel


def get_license_details(
    graph: LicenseGraph,
    license_id: Optional[str],
    aggregator: Optional[ObligationAggregator] = None,
) -> Optional[LicenseDetails]:
    """Get a license with its obligations, rights and direct relations.

    Args:
        graph: License graph to query.
        license_id: License identifier (any case).
        aggregator: Obligation aggregator to reuse, created if not given.

    Returns:
        LicenseDetails, or None if the license is unknown.
    """
    node = graph.get_license(license_id)
    if node is None:
        return None

    aggregator = aggregator or ObligationAggregator(graph)
    compatible: list[CompatibleLicenseSummary] = []
    incompatible: list[IncompatibleLicenseSummary] = []

    neighbors = graph.get_neighbors(node.id)
    for other_id in sorted(neighbors):
        edge = neighbors[other_id]
        other = graph.get_license(other_id)
        other_name = other.display_name if other else other_id
        if edge.level == CompatibilityLevel.INCOMPATIBLE:
            incompatible.append(
                IncompatibleLicenseSummary(
                    license_id=other_id,
                    license_name=other_name,
                    reason=edge.notes[0] if edge.notes else "Incompatible",
                )
            )
        else:
            compatible.append(
                CompatibleLicenseSummary(
                    license_id=other_id,
                    license_name=other_name,
                    level=edge.level,
                    direction=edge.direction,
                    conditions=list(edge.conditions),
                )
            )

    return LicenseDetails(
        license=node,
        obligations=aggregator.get_obligations_for_license(node.id),
        rights=graph.get_rights_for_license(node.id),
        compatible_with=compatible,
        incompatible_with=incompatible,
    )
