"""Reference data loading for the license knowledge graph."""

import logging
from typing import Optional

from license_graph.exceptions import ReferenceDataError
from license_graph.graph import seed
from license_graph.graph.store import LicenseGraph
from license_graph.models.license import ObligationAssignment, RightAssignment

logger = logging.getLogger(__name__)


def load_reference_data(graph: LicenseGraph) -> LicenseGraph:
    """Populate a graph with the curated reference data.

    Licenses and catalogs are loaded first so that every assignment and
    edge can be checked against them as it is inserted.

    Args:
        graph: Empty, mutable graph.

    Returns:
        The same graph, populated but not frozen.

    Raises:
        ReferenceDataError: If the reference data is inconsistent.
        GraphFrozenError: If the graph is frozen.
    """
    for license_node in seed.LICENSES:
        graph.add_license(license_node)
    for obligation in seed.OBLIGATIONS:
        graph.add_obligation(obligation)
    for right in seed.RIGHTS:
        graph.add_right(right)

    for license_id, specs in seed.OBLIGATION_ASSIGNMENTS.items():
        for obligation_id, trigger, scope in specs:
            graph.assign_obligation(
                ObligationAssignment(
                    license_id=license_id,
                    obligation_id=obligation_id,
                    scope=scope,
                    trigger=trigger,
                )
            )

    for license_id, right_ids in seed.right_assignments().items():
        for right_id in right_ids:
            graph.assign_right(RightAssignment(license_id=license_id, right_id=right_id))

    for edge in seed.compatibility_edges():
        graph.add_edge(edge)

    validate_graph(graph)

    stats = graph.get_statistics()
    logger.info(
        "Loaded license graph: %d licenses, %d obligations, %d rights, %d edges",
        stats.total_licenses,
        stats.total_obligations,
        stats.total_rights,
        stats.total_edges,
    )
    return graph


def validate_graph(graph: LicenseGraph) -> None:
    """Check the referential integrity of a populated graph.

    The store already rejects dangling references on insertion; this
    catches licenses left without any obligation or right.

    Raises:
        ReferenceDataError: If a license has neither obligations nor rights.
    """
    orphans = [
        node.id
        for node in graph.get_all_licenses()
        if not graph.get_obligation_assignments(node.id)
        and not graph.get_rights_for_license(node.id)
    ]
    if orphans:
        raise ReferenceDataError(
            f"Licenses without obligations or rights: {', '.join(orphans)}"
        )


def build_reference_graph(graph: Optional[LicenseGraph] = None) -> LicenseGraph:
    """Build the frozen reference graph.

    Args:
        graph: Optional empty graph to populate. A new one is created
            if not given.

    Returns:
        A populated, frozen LicenseGraph.
    """
    graph = load_reference_data(graph if graph is not None else LicenseGraph())
    return graph.freeze()
