"""License compatibility and obligation reasoning over a license knowledge graph."""

__version__ = "0.1.0"
