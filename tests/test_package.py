"""Basic package tests for license-graph."""


def test_package_imports() -> None:
    """Test that the main package can be imported."""
    import license_graph

    assert license_graph.__version__ == "0.1.0"


def test_cli_imports() -> None:
    """Test that the CLI module can be imported."""
    from license_graph.cli import main

    assert main is not None


def test_exceptions_imports() -> None:
    """Test that the exceptions module can be imported."""
    from license_graph.exceptions import LicenseGraphError

    assert issubclass(LicenseGraphError, Exception)


def test_subpackages_import() -> None:
    """Test that all subpackages can be imported."""
    import license_graph.analysis
    import license_graph.config
    import license_graph.graph
    import license_graph.models
    import license_graph.output

    # Verify modules exist (avoiding F401 by using the imports)
    assert license_graph.analysis is not None
    assert license_graph.config is not None
    assert license_graph.graph is not None
    assert license_graph.models is not None
    assert license_graph.output is not None
