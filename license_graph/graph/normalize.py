"""License identifier canonicalization.

Every id entering the graph, at insertion and at lookup, goes through
``canonical_license_id`` so that comparisons are plain string equality.
SPDX aliases (e.g. ``GPL-2.0`` for ``GPL-2.0-only``) are resolved with the
license-expression library; anything it does not recognize is kept as is.
"""

from functools import lru_cache
from typing import Optional

from license_expression import ExpressionError, get_spdx_licensing

# Initialize SPDX licensing for parsing
_licensing = get_spdx_licensing()


def _resolve_spdx_key(license_id: str) -> Optional[str]:
    """Resolve an SPDX identifier or alias to its SPDX key.

    Args:
        license_id: Stripped, non-empty license identifier.

    Returns:
        The SPDX key for simple identifiers, or None for unknown ids and
        compound expressions.
    """
    try:
        parsed = _licensing.parse(license_id, validate=True)
    except ExpressionError:
        return None
    # Compound expressions (AND/OR/WITH) have no single key
    if parsed is not None and hasattr(parsed, "key"):
        return str(parsed.key)
    return None


@lru_cache(maxsize=2048)
def canonical_license_id(license_id: Optional[str]) -> str:
    """Canonicalize a license identifier.

    Trims whitespace, resolves SPDX aliases and uppercases the result.

    Args:
        license_id: License identifier in any case, or None.

    Returns:
        Canonical uppercase id, or an empty string for None/blank input.
    """
    if license_id is None:
        return ""
    stripped = license_id.strip()
    if not stripped:
        return ""
    resolved = _resolve_spdx_key(stripped)
    return (resolved or stripped).upper()


def canonical_family(family: Optional[str]) -> str:
    """Canonicalize a license family label for index lookups."""
    if family is None:
        return ""
    return family.strip().upper()
