"""CLI entry point for license-graph."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from license_graph import __version__
from license_graph.config import load_config
from license_graph.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_graph.dependencies import load_dependency_file
from license_graph.engine import LicenseEngine
from license_graph.exceptions import ConfigurationError, LicenseGraphError
from license_graph.models.analysis import ComplianceStatus, DistributionScope
from license_graph.output.analysis_json import AnalysisJsonFormatter
from license_graph.output.analysis_markdown import AnalysisMarkdownFormatter
from license_graph.output.matrix import MatrixFormatter, MatrixJsonFormatter
from license_graph.output.terminal import TerminalFormatter

# Module-level console for consistent output
_console = Console()

_FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format (default: terminal).",
)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    envvar="LICENSE_GRAPH_CONFIG",
    help="Path to configuration file (env: LICENSE_GRAPH_CONFIG).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose_flag: bool) -> None:
    """License Graph - Reason about license compatibility and obligations.

    Queries a curated knowledge graph of open source licenses: pairwise
    compatibility, obligations, and compliance of a dependency list.

    \b
    Examples:
        license-graph check MIT GPL-3.0-only
        license-graph path MIT GPL-3.0-only
        license-graph obligations MIT Apache-2.0
        license-graph analyze dependencies.json --format markdown
    """
    if verbose_flag:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    ctx.obj = LicenseEngine.create(config)


@main.command()
@click.argument("license_a")
@click.argument("license_b")
@_FORMAT_OPTION
@click.pass_obj
def check(engine: LicenseEngine, license_a: str, license_b: str, output_format: str) -> None:
    """Check whether two licenses can be combined.

    Exits with 1 if the licenses are not compatible.
    """
    result = engine.check_compatibility(license_a, license_b)
    if output_format.lower() == "json":
        click.echo(result.model_dump_json(indent=2))
    else:
        TerminalFormatter(console=_console).format_compatibility(result)
    sys.exit(EXIT_SUCCESS if result.compatible else EXIT_ISSUES)


@main.command()
@click.argument("source")
@click.argument("target")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of hops (default: from configuration).",
)
@_FORMAT_OPTION
@click.pass_obj
def path(
    engine: LicenseEngine,
    source: str,
    target: str,
    max_depth: int | None,
    output_format: str,
) -> None:
    """Find a chain of documented compatibility edges between two licenses.

    Exits with 1 if no path exists.
    """
    result = engine.find_compatibility_path(source, target, max_depth)
    if output_format.lower() == "json":
        click.echo(result.model_dump_json(indent=2) if result else "null")
    else:
        TerminalFormatter(console=_console).format_path(result, source, target)
    sys.exit(EXIT_SUCCESS if result is not None else EXIT_ISSUES)


@main.command()
@click.argument("licenses", nargs=-1, required=True)
@click.option(
    "--distribution",
    type=click.Choice([s.value for s in DistributionScope], case_sensitive=False),
    default=None,
    help="Filter a single license's obligations for a distribution scope.",
)
@_FORMAT_OPTION
@click.pass_obj
def obligations(
    engine: LicenseEngine,
    licenses: tuple[str, ...],
    distribution: str | None,
    output_format: str,
) -> None:
    """Show the obligations imposed by one or more licenses.

    \b
    Examples:
        license-graph obligations GPL-3.0-only
        license-graph obligations MIT Apache-2.0 GPL-3.0-only
        license-graph obligations AGPL-3.0-only --distribution saas
    """
    as_json = output_format.lower() == "json"
    formatter = TerminalFormatter(console=_console)

    if distribution is not None:
        if len(licenses) != 1:
            raise click.UsageError("--distribution takes exactly one license.")
        scoped = engine.get_obligations_for_distribution(
            licenses[0], DistributionScope(distribution.lower())
        )
        if as_json:
            click.echo(_dump_list(scoped))
        else:
            formatter.format_distribution_obligations(licenses[0], scoped)
    elif len(licenses) == 1:
        entries = engine.get_obligations_for_license(licenses[0])
        if as_json:
            click.echo(_dump_list(entries))
        else:
            formatter.format_obligations(licenses[0], entries)
    else:
        aggregated = engine.aggregate_obligations(licenses)
        if as_json:
            click.echo(aggregated.model_dump_json(indent=2))
        else:
            formatter.format_aggregated_obligations(aggregated)
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("dependency_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "markdown", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for the report (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.pass_obj
def analyze(
    engine: LicenseEngine,
    dependency_file: str,
    output_format: str,
    output_path: str | None,
) -> None:
    """Analyze the licenses of a dependency list.

    DEPENDENCY_FILE is a JSON or YAML list of records with dependency_id,
    dependency_name, dependency_version and license_id.

    Exits with 1 if the analysis is blocked or requires review.
    """
    format_value = output_format.lower()
    try:
        dependencies = load_dependency_file(Path(dependency_file))
        analysis = engine.analyze_dependency_tree(dependencies)

        if format_value == "json":
            content = AnalysisJsonFormatter().format_analysis(analysis)
        elif format_value == "markdown" or output_path:
            # Terminal format to file uses markdown instead
            content = AnalysisMarkdownFormatter().format_analysis(analysis)
        else:
            TerminalFormatter(console=_console).format_analysis(analysis)
            content = None

        if content is not None:
            if output_path:
                _write_output_to_file(content, output_path)
            else:
                click.echo(content)

    except LicenseGraphError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    if analysis.compliance_status != ComplianceStatus.COMPLIANT:
        sys.exit(EXIT_ISSUES)
    sys.exit(EXIT_SUCCESS)


@main.command(name="license")
@click.argument("license_id")
@_FORMAT_OPTION
@click.pass_obj
def license_command(engine: LicenseEngine, license_id: str, output_format: str) -> None:
    """Show a license with its obligations, rights and relations."""
    details = engine.get_license_details(license_id)
    if details is None:
        click.echo(f"Unknown license: {license_id}", err=True)
        sys.exit(EXIT_ISSUES)

    if output_format.lower() == "json":
        click.echo(details.model_dump_json(indent=2))
    else:
        TerminalFormatter(console=_console).format_license_details(details)
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("query")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of results (default: from configuration).",
)
@_FORMAT_OPTION
@click.pass_obj
def search(
    engine: LicenseEngine, query: str, limit: int | None, output_format: str
) -> None:
    """Search licenses by id or name."""
    results = engine.search_licenses(query, limit)
    if output_format.lower() == "json":
        click.echo(_dump_list(results))
    else:
        TerminalFormatter(console=_console).format_license_list(results)
    sys.exit(EXIT_SUCCESS)


@main.command()
@_FORMAT_OPTION
@click.pass_obj
def stats(engine: LicenseEngine, output_format: str) -> None:
    """Show statistics about the license graph."""
    statistics = engine.get_statistics()
    if output_format.lower() == "json":
        click.echo(statistics.model_dump_json(indent=2))
    else:
        TerminalFormatter(console=_console).format_statistics(statistics)
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("licenses", nargs=-1, required=True)
@_FORMAT_OPTION
@click.pass_obj
def matrix(engine: LicenseEngine, licenses: tuple[str, ...], output_format: str) -> None:
    """Show the pairwise compatibility matrix of a set of licenses.

    Exits with 1 if any pair is incompatible or needs review.
    """
    result = engine.check_compatibility_matrix(list(licenses))
    if output_format.lower() == "json":
        click.echo(MatrixJsonFormatter().format_matrix(result))
    else:
        MatrixFormatter(console=_console).format_matrix(result)
    sys.exit(EXIT_ISSUES if result.has_issues else EXIT_SUCCESS)


def _dump_list(items: list) -> str:
    """Serialize a list of pydantic models as a JSON array."""
    body = ",\n".join(item.model_dump_json(indent=2) for item in items)
    return f"[\n{body}\n]" if items else "[]"


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to a file.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    file_path = Path(path)
    try:
        if file_path.exists():
            _console.print(f"[yellow]Warning: Overwriting existing file: {path}[/yellow]")
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_error(error: LicenseGraphError) -> None:
    """Write an error message to stderr.

    Plain text, since messages may quote YAML or pydantic output that
    Rich would read as markup.
    """
    click.echo(f"Error: {type(error).__name__}: {error}", err=True)


if __name__ == "__main__":
    main()
