"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from license_graph.constants import LEGAL_DISCLAIMER_SHORT
from license_graph.models.analysis import (
    AggregatedObligations,
    ComplianceStatus,
    ConflictSeverity,
    DependencyTreeAnalysis,
    GraphStatistics,
    LicenseDetails,
    ObligationWithDistribution,
)
from license_graph.models.compatibility import (
    CompatibilityLevel,
    CompatibilityPath,
    CompatibilityResult,
)
from license_graph.models.license import LicenseNode, ObligationWithScope

# Color per compatibility level
LEVEL_COLORS = {
    CompatibilityLevel.FULL: "green",
    CompatibilityLevel.ONE_WAY: "cyan",
    CompatibilityLevel.CONDITIONAL: "yellow",
    CompatibilityLevel.INCOMPATIBLE: "red",
    CompatibilityLevel.UNKNOWN: "magenta",
}

STATUS_COLORS = {
    ComplianceStatus.COMPLIANT: "green",
    ComplianceStatus.REVIEW_REQUIRED: "yellow",
    ComplianceStatus.BLOCKED: "red",
}


def _level_markup(level: CompatibilityLevel) -> str:
    color = LEVEL_COLORS[level]
    return f"[{color}]{level.name}[/{color}]"


class TerminalFormatter:
    """Format engine results for terminal display using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def _print_disclaimer(self) -> None:
        """Print the legal disclaimer panel."""
        panel = Panel(
            LEGAL_DISCLAIMER_SHORT,
            title="[bold yellow]NOT LEGAL ADVICE[/bold yellow]",
            border_style="yellow",
        )
        self._console.print(panel)
        self._console.print("")

    # Compatibility

    def format_compatibility(self, result: CompatibilityResult) -> None:
        """Display a pairwise compatibility verdict."""
        self._print_disclaimer()
        verdict = "COMPATIBLE" if result.compatible else "NOT COMPATIBLE"
        color = LEVEL_COLORS[result.level]
        lines = [
            f"{result.license_a} + {result.license_b}",
            "",
            f"Verdict: [{color}]{verdict}[/{color}] ({_level_markup(result.level)})",
            f"Reason: {result.reason}",
        ]
        if result.dominant_license:
            lines.append(f"Dominant license: {result.dominant_license}")
        if result.requires_review:
            lines.append("[yellow]Requires review[/yellow]")
        if result.inferred_rule:
            lines.append(f"Inferred rule: {result.inferred_rule}")
        self._console.print(
            Panel("\n".join(lines), title="[bold]Compatibility[/bold]", border_style=color)
        )

        self._print_list("Conditions", result.conditions)
        self._print_list("Suggestions", result.suggestions)
        self._print_list("Sources", result.sources)

    def format_path(self, path: Optional[CompatibilityPath], source: str, target: str) -> None:
        """Display a compatibility path, or the absence of one."""
        if path is None:
            self._console.print(
                f"[yellow]No compatibility path from {source} to {target}[/yellow]"
            )
            return

        self._console.print(
            f"[bold]Path:[/bold] {' -> '.join(path.licenses)} "
            f"({path.hops} hop(s), overall {_level_markup(path.overall_compatibility)})"
        )
        if path.steps:
            table = Table(title="Compatibility Path")
            table.add_column("From", style="cyan")
            table.add_column("To", style="cyan")
            table.add_column("Level")
            for step in path.steps:
                table.add_row(step.from_license, step.to_license, _level_markup(step.level))
            self._console.print(table)
        self._print_list("Conditions", path.all_conditions)

    # Obligations

    def format_obligations(
        self, license_id: str, obligations: list[ObligationWithScope]
    ) -> None:
        """Display the obligations of a single license."""
        if not obligations:
            self._console.print(f"[yellow]No obligations recorded for {license_id}[/yellow]")
            return

        table = Table(title=f"Obligations: {license_id}")
        table.add_column("Obligation", style="cyan")
        table.add_column("Scope")
        table.add_column("Trigger")
        table.add_column("Effort")
        for entry in obligations:
            table.add_row(
                entry.obligation.name,
                entry.scope.value,
                entry.trigger.value,
                entry.obligation.effort.value,
            )
        self._console.print(table)

    def format_distribution_obligations(
        self, license_id: str, obligations: list[ObligationWithDistribution]
    ) -> None:
        """Display obligations filtered for a distribution scope."""
        if not obligations:
            self._console.print(
                f"[green]No obligations of {license_id} apply to this distribution[/green]"
            )
            return

        scope = obligations[0].distribution_scope.value
        table = Table(title=f"Obligations: {license_id} ({scope})")
        table.add_column("Obligation", style="cyan")
        table.add_column("Effort")
        table.add_column("Reason")
        for entry in obligations:
            table.add_row(
                entry.obligation.obligation.name,
                entry.adjusted_effort.value,
                entry.applicability_reason,
            )
        self._console.print(table)

    def format_aggregated_obligations(self, aggregated: AggregatedObligations) -> None:
        """Display obligations merged across licenses."""
        if not aggregated.obligations:
            self._console.print("[green]No obligations[/green]")
            return

        table = Table(title=f"Obligations across {aggregated.total_licenses} license(s)")
        table.add_column("Obligation", style="cyan")
        table.add_column("Effort")
        table.add_column("Scope")
        table.add_column("Licenses")
        for obligation in aggregated.obligations:
            table.add_row(
                obligation.obligation_name,
                obligation.effort.value,
                obligation.most_restrictive_scope.value,
                ", ".join(obligation.source_license_ids),
            )
        self._console.print(table)

    # Tree analysis

    def format_analysis(self, analysis: DependencyTreeAnalysis) -> None:
        """Display a dependency tree analysis."""
        self._print_summary(analysis)
        self._print_disclaimer()

        if analysis.total_dependencies == 0:
            self._console.print("[yellow]No dependencies found[/yellow]")
            return

        table = Table(title="License Distribution")
        table.add_column("License", style="cyan")
        table.add_column("Dependencies", justify="right")
        for license_id in analysis.unique_licenses:
            table.add_row(license_id, str(analysis.license_distribution[license_id]))
        self._console.print(table)

        if analysis.conflicts:
            self._console.print()
            self._console.print("[bold]Conflicts:[/bold]")
            for conflict in analysis.conflicts:
                marker = (
                    "[red]✗[/red]"
                    if conflict.severity == ConflictSeverity.BLOCKING
                    else "[yellow]?[/yellow]"
                )
                self._console.print(
                    f"  {marker} {conflict.license_a} + {conflict.license_b}: "
                    f"{conflict.reason}"
                )

        if analysis.recommendations:
            self._console.print()
            self._console.print("[bold]Recommendations:[/bold]")
            for rec in analysis.recommendations:
                self._console.print(f"  {rec.priority.value.upper()}: {rec.title}")

    def _print_summary(self, analysis: DependencyTreeAnalysis) -> None:
        """Print the executive summary panel."""
        color = STATUS_COLORS[analysis.compliance_status]
        status = analysis.compliance_status.value.replace("_", " ").upper()
        lines = [
            f"Total Dependencies: {analysis.total_dependencies}",
            f"Unique Licenses: {len(analysis.unique_licenses)}",
            f"Conflicts: {len(analysis.conflicts)} "
            f"({analysis.blocking_conflicts} blocking)",
            f"Risk Score: {analysis.risk_score:.2f}",
        ]
        if analysis.dominant_license:
            lines.append(f"Dominant License: {analysis.dominant_license.license_id}")
        lines.extend(["", f"Status: [{color}]{status}[/{color}]"])
        self._console.print(
            Panel(
                "\n".join(lines),
                title="[bold]EXECUTIVE SUMMARY[/bold]",
                border_style=color,
            )
        )
        self._console.print("")

    # Licenses

    def format_license_details(self, details: LicenseDetails) -> None:
        """Display a license with its obligations, rights and relations."""
        node = details.license
        lines = [
            f"SPDX: {node.spdx_id}",
            f"Category: {node.category.display_name}",
            f"Copyleft: {node.copyleft_strength.value}",
        ]
        if node.family:
            lines.append(f"Family: {node.family}")
        if node.version:
            lines.append(f"Version: {node.version}")
        lines.append(f"OSI approved: {'yes' if node.osi_approved else 'no'}")
        self._console.print(
            Panel("\n".join(lines), title=f"[bold]{node.display_name}[/bold]")
        )

        self.format_obligations(node.id, details.obligations)
        self._print_list("Rights", [right.name for right in details.rights])
        self._print_list(
            "Compatible with",
            [f"{s.license_id} ({s.level.name})" for s in details.compatible_with],
        )
        self._print_list(
            "Incompatible with",
            [f"{s.license_id}: {s.reason}" for s in details.incompatible_with],
        )

    def format_license_list(self, licenses: list[LicenseNode]) -> None:
        """Display licenses as a table."""
        if not licenses:
            self._console.print("[yellow]No licenses found[/yellow]")
            return

        table = Table(title="Licenses")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Category", style="green")
        for node in licenses:
            table.add_row(node.id, node.display_name, node.category.display_name)
        self._console.print(table)

    def format_statistics(self, stats: GraphStatistics) -> None:
        """Display graph statistics."""
        table = Table(title="License Graph Statistics", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Licenses", str(stats.total_licenses))
        table.add_row("Obligations", str(stats.total_obligations))
        table.add_row("Rights", str(stats.total_rights))
        table.add_row("Compatibility edges", str(stats.total_edges))
        table.add_row("Obligation assignments", str(stats.total_obligation_assignments))
        table.add_row("Right assignments", str(stats.total_right_assignments))
        for category, count in stats.licenses_by_category.items():
            table.add_row(f"  {category}", str(count))
        self._console.print(table)
        self._print_list("Families", stats.license_families)

    def _print_list(self, title: str, items: list[str]) -> None:
        if not items:
            return
        self._console.print(f"[bold]{title}:[/bold]")
        for item in items:
            self._console.print(f"  - {item}")
