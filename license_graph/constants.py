"""Constants for license-graph."""

# Exit codes
EXIT_SUCCESS = 0  # Compliant / compatible
EXIT_ISSUES = 1  # Conflicts, review required, or incompatible pair
EXIT_ERROR = 2  # Command failed due to error

# Legal disclaimer, attached to every report
LEGAL_DISCLAIMER = (
    "This tool provides license compatibility information for informational "
    "purposes only. It does not constitute legal advice. Consult a qualified "
    "attorney for legal guidance on license compliance."
)

# Short disclaimer for terminal display (concise for readability)
LEGAL_DISCLAIMER_SHORT = (
    "This tool provides license information for informational purposes only. "
    "It does not constitute legal advice."
)

# Query defaults
DEFAULT_MAX_PATH_DEPTH = 3
DEFAULT_SEARCH_LIMIT = 20
