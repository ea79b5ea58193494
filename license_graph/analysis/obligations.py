"""Obligation aggregation for license-graph.

Merges the obligations of several licenses into one record per
obligation, and filters a license's obligations for a distribution
scope (internal use, binary or source distribution, SaaS, embedded).
"""

import logging
from typing import Iterable, Optional

from license_graph.graph.store import LicenseGraph
from license_graph.models.analysis import (
    AggregatedObligation,
    AggregatedObligations,
    DistributionScope,
    ObligationSource,
    ObligationWithDistribution,
)
from license_graph.models.license import (
    CopyleftStrength,
    EffortLevel,
    LicenseNode,
    ObligationScope,
    ObligationWithScope,
    TriggerCondition,
)

logger = logging.getLogger(__name__)

# Triggers that apply regardless of the license, per distribution scope
_SCOPE_TRIGGERS: dict[DistributionScope, frozenset[TriggerCondition]] = {
    DistributionScope.INTERNAL: frozenset({TriggerCondition.ALWAYS}),
    DistributionScope.BINARY: frozenset(
        {TriggerCondition.ALWAYS, TriggerCondition.ON_DISTRIBUTION}
    ),
    DistributionScope.SOURCE: frozenset(
        {
            TriggerCondition.ALWAYS,
            TriggerCondition.ON_DISTRIBUTION,
            TriggerCondition.ON_MODIFICATION,
            TriggerCondition.ON_DERIVATIVE,
        }
    ),
    DistributionScope.SAAS: frozenset(
        {TriggerCondition.ALWAYS, TriggerCondition.ON_NETWORK_USE}
    ),
    DistributionScope.EMBEDDED: frozenset(TriggerCondition),
}

_SCOPE_LABELS: dict[DistributionScope, str] = {
    DistributionScope.INTERNAL: "internal use",
    DistributionScope.BINARY: "binary distribution",
    DistributionScope.SOURCE: "source distribution",
    DistributionScope.SAAS: "SaaS/cloud service",
    DistributionScope.EMBEDDED: "embedded/device distribution",
}


def _unique_canonical(graph: LicenseGraph, license_ids: Iterable[str]) -> list[str]:
    """Canonical ids in order of first appearance, blanks dropped."""
    seen: dict[str, None] = {}
    for license_id in license_ids:
        canonical = graph.canonicalize(license_id)
        if canonical:
            seen.setdefault(canonical, None)
    return list(seen)


class ObligationAggregator:
    """Obligation queries over a license graph."""

    def __init__(self, graph: LicenseGraph):
        self.graph = graph

    def get_obligations_for_license(
        self, license_id: Optional[str]
    ) -> list[ObligationWithScope]:
        """Get the obligations a license imposes, with their scope.

        Args:
            license_id: License identifier (any case).

        Returns:
            Obligations in assignment order; empty for unknown licenses.
        """
        result = []
        for assignment in self.graph.get_obligation_assignments(license_id):
            obligation = self.graph.get_obligation(assignment.obligation_id)
            if obligation is None:
                continue
            result.append(
                ObligationWithScope(
                    obligation=obligation,
                    scope=assignment.scope,
                    trigger=assignment.trigger,
                )
            )
        return result

    def aggregate_obligations(self, license_ids: Iterable[str]) -> AggregatedObligations:
        """Merge the obligations of a set of licenses.

        Each obligation appears once, listing every license that imposes
        it and the most restrictive scope among them. Duplicate and
        aliased ids count once.

        Args:
            license_ids: License identifiers, possibly repeated.

        Returns:
            AggregatedObligations ordered by effort, highest first. Ties
            keep the order in which obligations were first encountered.
        """
        unique_ids = _unique_canonical(self.graph, license_ids)
        sources: dict[str, list[ObligationSource]] = {}
        scopes: dict[str, ObligationScope] = {}

        for license_id in unique_ids:
            node = self.graph.get_license(license_id)
            for entry in self.get_obligations_for_license(license_id):
                obligation_id = entry.obligation.id
                sources.setdefault(obligation_id, []).append(
                    ObligationSource(
                        license_id=license_id,
                        license_name=node.display_name if node else None,
                        scope=entry.scope,
                        trigger=entry.trigger,
                    )
                )
                current = scopes.get(obligation_id)
                if current is None or entry.scope.restrictiveness > current.restrictiveness:
                    scopes[obligation_id] = entry.scope

        aggregated = []
        for obligation_id, obligation_sources in sources.items():
            obligation = self.graph.get_obligation(obligation_id)
            if obligation is None:
                continue
            aggregated.append(
                AggregatedObligation(
                    obligation_id=obligation.id,
                    obligation_name=obligation.name,
                    description=obligation.description,
                    effort=obligation.effort,
                    sources=obligation_sources,
                    most_restrictive_scope=scopes[obligation_id],
                    examples=list(obligation.examples),
                )
            )
        aggregated.sort(key=lambda item: item.effort.level, reverse=True)

        logger.debug(
            "Aggregated %d obligations from %d licenses",
            len(aggregated),
            len(unique_ids),
        )
        return AggregatedObligations(
            obligations=aggregated,
            total_licenses=len(unique_ids),
            highest_effort=aggregated[0].effort if aggregated else None,
        )

    def get_obligations_for_distribution(
        self, license_id: Optional[str], distribution_scope: DistributionScope
    ) -> list[ObligationWithDistribution]:
        """Get the obligations of a license that apply to a distribution scope.

        Args:
            license_id: License identifier (any case).
            distribution_scope: How the software reaches its users.

        Returns:
            Applicable obligations with adjusted effort and a reason;
            empty for unknown licenses.
        """
        node = self.graph.get_license(license_id)
        if node is None:
            return []

        network = node.copyleft_strength == CopyleftStrength.NETWORK
        result = []
        for entry in self.get_obligations_for_license(node.id):
            applies = entry.trigger in _SCOPE_TRIGGERS[distribution_scope] or (
                distribution_scope == DistributionScope.SAAS and network
            )
            if not applies:
                continue
            result.append(
                ObligationWithDistribution(
                    obligation=entry,
                    distribution_scope=distribution_scope,
                    adjusted_effort=_adjust_effort(
                        entry.obligation.effort, distribution_scope, node
                    ),
                    applicability_reason=_applicability_reason(
                        entry.trigger, distribution_scope, node
                    ),
                )
            )
        return result


def _adjust_effort(
    effort: EffortLevel, distribution_scope: DistributionScope, node: LicenseNode
) -> EffortLevel:
    if distribution_scope == DistributionScope.INTERNAL:
        if effort in (EffortLevel.HIGH, EffortLevel.VERY_HIGH):
            return effort.lowered()
        return effort
    if (
        distribution_scope == DistributionScope.SAAS
        and node.copyleft_strength == CopyleftStrength.NETWORK
    ):
        return EffortLevel.VERY_HIGH
    if (
        distribution_scope == DistributionScope.EMBEDDED
        and node.copyleft_strength != CopyleftStrength.NONE
        and effort in (EffortLevel.MEDIUM, EffortLevel.HIGH)
    ):
        return effort.raised()
    return effort


def _applicability_reason(
    trigger: TriggerCondition, distribution_scope: DistributionScope, node: LicenseNode
) -> str:
    if distribution_scope == DistributionScope.INTERNAL:
        return "Applies to internal use (no distribution)"
    if (
        distribution_scope == DistributionScope.SAAS
        and node.copyleft_strength == CopyleftStrength.NETWORK
    ):
        return "Network copyleft: SaaS users must be able to obtain the source code"
    if (
        distribution_scope == DistributionScope.EMBEDDED
        and node.copyleft_strength == CopyleftStrength.STRONG
    ):
        return "Copyleft applies to embedded devices: provide source or a written offer"
    if trigger == TriggerCondition.ON_DISTRIBUTION:
        return f"Triggered by {_SCOPE_LABELS[distribution_scope]}"
    return "Standard license obligation"
