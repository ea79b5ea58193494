"""Markdown output formatter for dependency tree analyses."""

from datetime import datetime, timezone

from license_graph.constants import LEGAL_DISCLAIMER
from license_graph.models.analysis import (
    ComplianceStatus,
    DependencyTreeAnalysis,
)

_BADGE_COLORS = {
    ComplianceStatus.COMPLIANT: "green",
    ComplianceStatus.REVIEW_REQUIRED: "yellow",
    ComplianceStatus.BLOCKED: "red",
}


class AnalysisMarkdownFormatter:
    """Format a dependency tree analysis as Markdown.

    Suitable for legal review and pull request comments.
    """

    def format_analysis(self, analysis: DependencyTreeAnalysis) -> str:
        """Format an analysis as a Markdown string.

        Args:
            analysis: The analysis to format.

        Returns:
            Markdown report.
        """
        lines: list[str] = []

        lines.append("# License Compliance Report")
        lines.append("")
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines.append(f"*Generated: {timestamp}*")
        lines.append("")

        lines.extend(self._format_summary(analysis))
        lines.append("")
        lines.extend(self._format_disclaimer())
        lines.append("")

        if analysis.total_dependencies == 0:
            lines.append("*No dependencies found.*")
            return "\n".join(lines)

        lines.extend(self._format_distribution(analysis))
        lines.append("")

        if analysis.conflicts:
            lines.extend(self._format_conflicts(analysis))
            lines.append("")

        if analysis.aggregated_obligations.obligations:
            lines.extend(self._format_obligations(analysis))
            lines.append("")

        if analysis.recommendations:
            lines.extend(self._format_recommendations(analysis))
            lines.append("")

        return "\n".join(lines)

    def _format_summary(self, analysis: DependencyTreeAnalysis) -> list[str]:
        status = analysis.compliance_status
        label = status.value.replace("_", "%20")
        dominant = (
            analysis.dominant_license.license_id if analysis.dominant_license else "n/a"
        )
        return [
            "## Summary",
            "",
            f"![Status](https://img.shields.io/badge/License%20Compliance-{label}-"
            f"{_BADGE_COLORS[status]})",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Dependencies | {analysis.total_dependencies} |",
            f"| Unique Licenses | {len(analysis.unique_licenses)} |",
            f"| Conflicts | {len(analysis.conflicts)} |",
            f"| Blocking Conflicts | {analysis.blocking_conflicts} |",
            f"| Dominant License | {dominant} |",
            f"| Risk Score | {analysis.risk_score:.2f} |",
            f"| Status | {status.value} |",
        ]

    def _format_disclaimer(self) -> list[str]:
        return [
            "> **Disclaimer:** " + LEGAL_DISCLAIMER,
        ]

    def _format_distribution(self, analysis: DependencyTreeAnalysis) -> list[str]:
        lines = [
            "## Licenses",
            "",
            "| License | Dependencies |",
            "|---------|--------------|",
        ]
        for license_id in analysis.unique_licenses:
            lines.append(f"| {license_id} | {analysis.license_distribution[license_id]} |")
        return lines

    def _format_conflicts(self, analysis: DependencyTreeAnalysis) -> list[str]:
        lines = [
            "## Conflicts",
            "",
            "| License A | License B | Severity | Reason |",
            "|-----------|-----------|----------|--------|",
        ]
        for conflict in analysis.conflicts:
            lines.append(
                f"| {conflict.license_a} | {conflict.license_b} | "
                f"{conflict.severity.value} | {conflict.reason} |"
            )
        return lines

    def _format_obligations(self, analysis: DependencyTreeAnalysis) -> list[str]:
        lines = [
            "## Obligations",
            "",
            "| Obligation | Effort | Scope | Licenses |",
            "|------------|--------|-------|----------|",
        ]
        for obligation in analysis.aggregated_obligations.obligations:
            lines.append(
                f"| {obligation.obligation_name} | {obligation.effort.value} | "
                f"{obligation.most_restrictive_scope.value} | "
                f"{', '.join(obligation.source_license_ids)} |"
            )
        return lines

    def _format_recommendations(self, analysis: DependencyTreeAnalysis) -> list[str]:
        lines = ["## Recommendations", ""]
        for rec in analysis.recommendations:
            lines.append(f"### {rec.title}")
            lines.append("")
            lines.append(f"*Priority: {rec.priority.value}*")
            lines.append("")
            lines.append(rec.description)
            if rec.actions:
                lines.append("")
                lines.extend(f"- {action}" for action in rec.actions)
            lines.append("")
        return lines
