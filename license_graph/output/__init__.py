"""Output formatters for license-graph."""

from license_graph.output.analysis_json import AnalysisJsonFormatter
from license_graph.output.analysis_markdown import AnalysisMarkdownFormatter
from license_graph.output.matrix import MatrixFormatter, MatrixJsonFormatter
from license_graph.output.terminal import TerminalFormatter

__all__ = [
    "AnalysisJsonFormatter",
    "AnalysisMarkdownFormatter",
    "MatrixFormatter",
    "MatrixJsonFormatter",
    "TerminalFormatter",
]
