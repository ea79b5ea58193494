"""Custom exceptions for license-graph."""


class LicenseGraphError(Exception):
    """Base exception for all license-graph errors."""

    pass


class ConfigurationError(LicenseGraphError):
    """Exception raised when configuration is invalid."""

    pass


class ReferenceDataError(LicenseGraphError):
    """Exception raised when the reference data set is malformed.

    Raised at load time only, e.g. for an edge that references a license
    id that was never loaded.
    """

    pass


class GraphFrozenError(LicenseGraphError):
    """Exception raised when a frozen graph is mutated."""

    pass


class DependencyInputError(LicenseGraphError):
    """Exception raised when a dependency list cannot be read or validated."""

    pass
