"""In-memory license knowledge graph.

Holds license nodes, the obligation and right catalogs, the assignments
linking licenses to them, and the compatibility edges between licenses.
All lookups are case-insensitive and never raise for unknown input.

A graph is mutable while it is being built and read-only once frozen;
``license_graph.graph.loader.build_reference_graph`` returns a frozen one.
"""

import logging
from collections import defaultdict
from typing import Optional

from license_graph.constants import DEFAULT_SEARCH_LIMIT
from license_graph.exceptions import GraphFrozenError, ReferenceDataError
from license_graph.graph.normalize import canonical_family, canonical_license_id
from license_graph.models.analysis import GraphStatistics
from license_graph.models.compatibility import (
    CompatibilityDirection,
    CompatibilityEdge,
)
from license_graph.models.license import (
    LicenseCategory,
    LicenseNode,
    Obligation,
    ObligationAssignment,
    Right,
    RightAssignment,
)

logger = logging.getLogger(__name__)


def _catalog_key(identifier: str) -> str:
    """Canonical key for obligation and right ids."""
    return identifier.strip().upper()


class LicenseGraph:
    """Indexed store of licenses, obligations, rights and compatibility edges."""

    def __init__(self) -> None:
        self._licenses: dict[str, LicenseNode] = {}
        self._obligations: dict[str, Obligation] = {}
        self._rights: dict[str, Right] = {}

        self._obligation_assignments: dict[str, list[ObligationAssignment]] = (
            defaultdict(list)
        )
        self._right_assignments: dict[str, list[RightAssignment]] = defaultdict(list)

        # Authored edges, in insertion order
        self._edges: list[CompatibilityEdge] = []
        # (from, to) -> edge; bidirectional edges are indexed under both keys
        self._edge_index: dict[tuple[str, str], CompatibilityEdge] = {}
        # from -> {to: edge}, the traversable neighborhood of a license
        self._adjacency: dict[str, dict[str, CompatibilityEdge]] = defaultdict(dict)

        self._family_index: dict[str, set[str]] = defaultdict(set)
        self._category_index: dict[LicenseCategory, set[str]] = defaultdict(set)

        self._frozen = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def frozen(self) -> bool:
        """True once the graph no longer accepts mutations."""
        return self._frozen

    def freeze(self) -> "LicenseGraph":
        """Make the graph read-only and return it."""
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphFrozenError("License graph is frozen and cannot be modified")

    # =========================================================================
    # Licenses
    # =========================================================================

    def add_license(self, license_node: LicenseNode) -> LicenseNode:
        """Add a license node, storing it under its canonical id.

        Args:
            license_node: License to add. Its id is canonicalized.

        Returns:
            The stored node.

        Raises:
            GraphFrozenError: If the graph is frozen.
            ReferenceDataError: If the id is blank or already present.
        """
        self._check_mutable()
        normalized_id = canonical_license_id(license_node.id)
        if not normalized_id:
            raise ReferenceDataError("License id must not be blank")
        if normalized_id in self._licenses:
            raise ReferenceDataError(f"Duplicate license id: {normalized_id}")

        stored = license_node.model_copy(update={"id": normalized_id})
        self._licenses[normalized_id] = stored

        if stored.family:
            self._family_index[canonical_family(stored.family)].add(normalized_id)
        self._category_index[stored.category].add(normalized_id)

        logger.debug("Added license: %s (%s)", normalized_id, stored.display_name)
        return stored

    def get_license(self, license_id: Optional[str]) -> Optional[LicenseNode]:
        """Get a license by id (case-insensitive), or None if unknown."""
        return self._licenses.get(canonical_license_id(license_id))

    def has_license(self, license_id: Optional[str]) -> bool:
        """True if the id names a license in the graph."""
        return canonical_license_id(license_id) in self._licenses

    def get_all_licenses(self) -> list[LicenseNode]:
        """Get all licenses, ordered by id."""
        return [self._licenses[key] for key in sorted(self._licenses)]

    def get_licenses_by_category(self, category: LicenseCategory) -> list[LicenseNode]:
        """Get all licenses of a category (empty list if none)."""
        return [self._licenses[i] for i in sorted(self._category_index.get(category, ()))]

    def get_licenses_by_family(self, family: str) -> list[LicenseNode]:
        """Get all licenses of a family, matched case-insensitively."""
        ids = self._family_index.get(canonical_family(family), ())
        return [self._licenses[i] for i in sorted(ids)]

    def search_licenses(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[LicenseNode]:
        """Search licenses by id, SPDX id or display name.

        Args:
            query: Case-insensitive substring to look for.
            limit: Maximum number of results.

        Returns:
            Matching licenses ordered by id, at most ``limit`` of them.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        matches = [
            node
            for node in self.get_all_licenses()
            if needle in node.id.lower()
            or needle in node.spdx_id.lower()
            or needle in node.display_name.lower()
        ]
        return matches[:limit]

    def canonicalize(self, license_id: Optional[str]) -> str:
        """Canonical form of an id, whether or not the graph knows it."""
        return canonical_license_id(license_id)

    # =========================================================================
    # Obligations and rights
    # =========================================================================

    def add_obligation(self, obligation: Obligation) -> None:
        """Add an obligation to the catalog."""
        self._check_mutable()
        key = _catalog_key(obligation.id)
        if key in self._obligations:
            raise ReferenceDataError(f"Duplicate obligation id: {key}")
        self._obligations[key] = obligation.model_copy(update={"id": key})
        logger.debug("Added obligation: %s (%s)", obligation.id, obligation.name)

    def get_obligation(self, obligation_id: str) -> Optional[Obligation]:
        """Get an obligation by id, or None."""
        return self._obligations.get(_catalog_key(obligation_id))

    def get_all_obligations(self) -> list[Obligation]:
        """Get the full obligation catalog, ordered by id."""
        return [self._obligations[key] for key in sorted(self._obligations)]

    def add_right(self, right: Right) -> None:
        """Add a right to the catalog."""
        self._check_mutable()
        key = _catalog_key(right.id)
        if key in self._rights:
            raise ReferenceDataError(f"Duplicate right id: {key}")
        self._rights[key] = right.model_copy(update={"id": key})
        logger.debug("Added right: %s (%s)", right.id, right.name)

    def get_right(self, right_id: str) -> Optional[Right]:
        """Get a right by id, or None."""
        return self._rights.get(_catalog_key(right_id))

    def get_all_rights(self) -> list[Right]:
        """Get the full right catalog, ordered by id."""
        return [self._rights[key] for key in sorted(self._rights)]

    def assign_obligation(self, assignment: ObligationAssignment) -> None:
        """Attach an obligation to a license.

        Raises:
            GraphFrozenError: If the graph is frozen.
            ReferenceDataError: If the license or obligation is unknown.
        """
        self._check_mutable()
        license_id = canonical_license_id(assignment.license_id)
        if license_id not in self._licenses:
            raise ReferenceDataError(
                f"Obligation assignment references unknown license: {license_id}"
            )
        obligation_id = _catalog_key(assignment.obligation_id)
        if obligation_id not in self._obligations:
            raise ReferenceDataError(
                f"Obligation assignment references unknown obligation: {obligation_id}"
            )
        self._obligation_assignments[license_id].append(
            assignment.model_copy(
                update={"license_id": license_id, "obligation_id": obligation_id}
            )
        )

    def assign_right(self, assignment: RightAssignment) -> None:
        """Attach a right to a license.

        Raises:
            GraphFrozenError: If the graph is frozen.
            ReferenceDataError: If the license or right is unknown.
        """
        self._check_mutable()
        license_id = canonical_license_id(assignment.license_id)
        if license_id not in self._licenses:
            raise ReferenceDataError(
                f"Right assignment references unknown license: {license_id}"
            )
        right_id = _catalog_key(assignment.right_id)
        if right_id not in self._rights:
            raise ReferenceDataError(
                f"Right assignment references unknown right: {right_id}"
            )
        self._right_assignments[license_id].append(
            assignment.model_copy(update={"license_id": license_id, "right_id": right_id})
        )

    def get_obligation_assignments(
        self, license_id: Optional[str]
    ) -> list[ObligationAssignment]:
        """Obligation assignments of a license, in insertion order."""
        return list(self._obligation_assignments.get(canonical_license_id(license_id), ()))

    def get_rights_for_license(self, license_id: Optional[str]) -> list[Right]:
        """Rights granted by a license (empty list if none or unknown)."""
        assignments = self._right_assignments.get(canonical_license_id(license_id), ())
        return [self._rights[a.right_id] for a in assignments]

    # =========================================================================
    # Compatibility edges
    # =========================================================================

    def add_edge(self, edge: CompatibilityEdge) -> CompatibilityEdge:
        """Add a compatibility edge.

        Endpoints are canonicalized. Bidirectional edges are indexed under
        both (source, target) and (target, source); one-way edges only
        under (source, target).

        Raises:
            GraphFrozenError: If the graph is frozen.
            ReferenceDataError: If an endpoint is unknown, or an edge
                already covers the same lookup key.
        """
        self._check_mutable()
        source_id = canonical_license_id(edge.source_id)
        target_id = canonical_license_id(edge.target_id)
        for endpoint in (source_id, target_id):
            if endpoint not in self._licenses:
                raise ReferenceDataError(
                    f"Edge {edge.id} references unknown license: {endpoint}"
                )
        dominant = edge.dominant_license_id
        if dominant is not None:
            dominant = canonical_license_id(dominant)
            if dominant not in (source_id, target_id):
                raise ReferenceDataError(
                    f"Edge {edge.id} dominant license {dominant} is not an endpoint"
                )

        stored = edge.model_copy(
            update={
                "source_id": source_id,
                "target_id": target_id,
                "dominant_license_id": dominant,
            }
        )

        keys = [(source_id, target_id)]
        if stored.direction == CompatibilityDirection.BIDIRECTIONAL:
            keys.append((target_id, source_id))
        for key in keys:
            if key in self._edge_index:
                raise ReferenceDataError(
                    f"Edge {edge.id} duplicates {self._edge_index[key].id} "
                    f"for {key[0]} -> {key[1]}"
                )

        for from_id, to_id in keys:
            self._edge_index[(from_id, to_id)] = stored
            self._adjacency[from_id][to_id] = stored
        self._edges.append(stored)

        logger.debug(
            "Added edge: %s %s -> %s (%s, %s)",
            stored.id,
            source_id,
            target_id,
            stored.level.value,
            stored.direction.value,
        )
        return stored

    def get_edge(
        self, from_id: Optional[str], to_id: Optional[str]
    ) -> Optional[CompatibilityEdge]:
        """Direct edge usable from ``from_id`` towards ``to_id``, or None."""
        key = (canonical_license_id(from_id), canonical_license_id(to_id))
        return self._edge_index.get(key)

    def get_neighbors(self, license_id: Optional[str]) -> dict[str, CompatibilityEdge]:
        """Licenses reachable from ``license_id`` through one edge."""
        return dict(self._adjacency.get(canonical_license_id(license_id), {}))

    def get_all_edges(self) -> list[CompatibilityEdge]:
        """All authored edges, in insertion order."""
        return list(self._edges)

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_statistics(self) -> GraphStatistics:
        """Get counts describing the graph."""
        families = {
            node.family for node in self._licenses.values() if node.family
        }
        return GraphStatistics(
            total_licenses=len(self._licenses),
            total_obligations=len(self._obligations),
            total_rights=len(self._rights),
            total_edges=len(self._edges),
            total_obligation_assignments=sum(
                len(v) for v in self._obligation_assignments.values()
            ),
            total_right_assignments=sum(
                len(v) for v in self._right_assignments.values()
            ),
            license_families=sorted(families),
            licenses_by_category={
                category.value: len(ids)
                for category, ids in sorted(
                    self._category_index.items(), key=lambda item: item[0].value
                )
                if ids
            },
            frozen=self._frozen,
        )
