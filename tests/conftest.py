"""Shared fixtures for license-graph tests."""

import pytest
from click.testing import CliRunner

from license_graph.engine import LicenseEngine
from license_graph.graph.loader import build_reference_graph
from license_graph.graph.store import LicenseGraph
from license_graph.models.analysis import DependencyLicense
from license_graph.models.license import (
    CopyleftStrength,
    LicenseCategory,
    LicenseNode,
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(scope="session")
def reference_graph() -> LicenseGraph:
    """The frozen reference graph, shared across the session."""
    return build_reference_graph()


@pytest.fixture(scope="session")
def engine(reference_graph: LicenseGraph) -> LicenseEngine:
    """Engine over the shared reference graph with default configuration."""
    return LicenseEngine(reference_graph)


@pytest.fixture
def empty_graph() -> LicenseGraph:
    """A fresh, mutable graph."""
    return LicenseGraph()


def _make_license(
    license_id: str,
    category: LicenseCategory = LicenseCategory.PERMISSIVE,
    copyleft: CopyleftStrength = CopyleftStrength.NONE,
    family: str | None = None,
    version: str | None = None,
) -> LicenseNode:
    """Build a license node for ad hoc graphs."""
    return LicenseNode(
        id=license_id,
        spdx_id=license_id,
        display_name=f"{license_id} License",
        category=category,
        copyleft_strength=copyleft,
        family=family,
        version=version,
    )


def _make_dependency(name: str, license_id: str, version: str = "1.0.0") -> DependencyLicense:
    """Build a dependency record."""
    return DependencyLicense(
        dependency_id=f"pypi:{name}",
        dependency_name=name,
        dependency_version=version,
        license_id=license_id,
    )


@pytest.fixture
def make_license():
    """Factory for license nodes."""
    return _make_license


@pytest.fixture
def make_dependency():
    """Factory for dependency records."""
    return _make_dependency
