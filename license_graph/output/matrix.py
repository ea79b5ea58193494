"""Matrix formatters for license compatibility visualization."""
import json
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from license_graph.models.compatibility import CompatibilityLevel, CompatibilityMatrix


class MatrixFormatter:
    """Format a compatibility matrix for terminal display using Rich.

    Cells are color-coded by compatibility level; row/column headers are
    the canonical license ids.
    """

    # Cell indicators per level
    LEVEL_DISPLAY = {
        CompatibilityLevel.FULL: "[green]✓[/green]",
        CompatibilityLevel.ONE_WAY: "[cyan]→[/cyan]",
        CompatibilityLevel.CONDITIONAL: "[yellow]~[/yellow]",
        CompatibilityLevel.INCOMPATIBLE: "[red]✗[/red]",
        CompatibilityLevel.UNKNOWN: "[magenta]?[/magenta]",
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console if console is not None else Console()

    def format_matrix(self, matrix: CompatibilityMatrix) -> None:
        """Format and display a compatibility matrix.

        Args:
            matrix: The compatibility matrix to display.
        """
        if matrix.size == 0:
            self._console.print("[yellow]No licenses found to display.[/yellow]")
            return

        table = Table(
            title="License Compatibility Matrix",
            show_header=True,
            header_style="bold",
        )
        table.add_column("", style="bold")
        for license_id in matrix.licenses:
            table.add_column(self._truncate_license(license_id), justify="center")

        for i, row_license in enumerate(matrix.licenses):
            row_data = [self._truncate_license(row_license)]
            row_data.extend(self.LEVEL_DISPLAY[level] for level in matrix.matrix[i])
            table.add_row(*row_data)

        self._console.print(table)
        self._print_legend()

        self._console.print()
        self._console.print(f"[bold]Total licenses:[/bold] {matrix.size}")
        incompatible = sum(
            1 for issue in matrix.issues if issue.level == CompatibilityLevel.INCOMPATIBLE
        )
        color = "red" if incompatible else "green"
        self._console.print(f"[bold {color}]Incompatible pairs:[/bold {color}] {incompatible}")

        if matrix.issues:
            self._console.print()
            self._console.print("[bold]Compatibility Issues:[/bold]")
            for issue in matrix.issues:
                self._console.print(
                    f"  {self.LEVEL_DISPLAY[issue.level]} "
                    f"{issue.license_a} + {issue.license_b}: {issue.reason}"
                )

    def _truncate_license(self, license_id: str, max_len: int = 12) -> str:
        """Truncate a license id for column headers."""
        if len(license_id) <= max_len:
            return license_id
        return license_id[: max_len - 2] + ".."

    def _print_legend(self) -> None:
        """Print the symbol legend."""
        self._console.print()
        self._console.print("[bold]Legend:[/bold]")
        for level, indicator in self.LEVEL_DISPLAY.items():
            self._console.print(f"  {indicator} {level.name.replace('_', ' ').title()}")


class MatrixJsonFormatter:
    """Format a compatibility matrix as JSON."""

    def format_matrix(self, matrix: CompatibilityMatrix) -> str:
        """Format a compatibility matrix as a JSON string."""
        return json.dumps(self._build_output(matrix), indent=2)

    def _build_output(self, matrix: CompatibilityMatrix) -> dict[str, Any]:
        return {
            "licenses": matrix.licenses,
            "matrix": [[level.value for level in row] for row in matrix.matrix],
            "summary": {
                "total_licenses": matrix.size,
                "has_issues": matrix.has_issues,
                "incompatible_pairs": sum(
                    1
                    for issue in matrix.issues
                    if issue.level == CompatibilityLevel.INCOMPATIBLE
                ),
                "review_pairs": sum(1 for issue in matrix.issues if issue.requires_review),
            },
            "issues": [
                {
                    "license_a": issue.license_a,
                    "license_b": issue.license_b,
                    "level": issue.level.value,
                    "reason": issue.reason,
                }
                for issue in matrix.issues
            ],
        }
