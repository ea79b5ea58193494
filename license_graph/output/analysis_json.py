"""JSON output formatter for dependency tree analyses."""

import json
from datetime import datetime, timezone
from typing import Any

from license_graph import __version__
from license_graph.constants import LEGAL_DISCLAIMER
from license_graph.models.analysis import DependencyTreeAnalysis


class AnalysisJsonFormatter:
    """Format a dependency tree analysis as JSON.

    The payload is the analysis model dumped in JSON mode, plus a
    ``metadata`` block carrying the legal disclaimer.
    """

    def format_analysis(self, analysis: DependencyTreeAnalysis) -> str:
        """Format an analysis as a JSON string.

        Args:
            analysis: The analysis to format.

        Returns:
            JSON string with ``metadata`` and ``analysis`` keys.
        """
        output = {
            "metadata": self._build_metadata(),
            "analysis": analysis.model_dump(mode="json"),
        }
        return json.dumps(output, indent=2)

    def _build_metadata(self) -> dict[str, Any]:
        """Build report metadata, including the legal disclaimer."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
            "disclaimer": LEGAL_DISCLAIMER,
            "disclaimer_type": "informational",
        }
