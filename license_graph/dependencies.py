"""Dependency list loading for license-graph.

Reads the flat dependency/license list produced by an upstream
discovery pipeline. JSON files are parsed with the json module, anything
else as YAML; the root must be a list of records or a mapping with a
``dependencies`` list.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from license_graph.exceptions import DependencyInputError
from license_graph.models.analysis import DependencyLicense

_DEPENDENCY_LIST = TypeAdapter(list[DependencyLicense])


def parse_dependencies(data: Any, source: str = "<input>") -> list[DependencyLicense]:
    """Validate already-parsed dependency data.

    Args:
        data: A list of dependency records, or a mapping holding one
            under ``dependencies``.
        source: Name used in error messages.

    Returns:
        Validated DependencyLicense records.

    Raises:
        DependencyInputError: If the data has the wrong shape.
    """
    if isinstance(data, dict) and "dependencies" in data:
        data = data["dependencies"]
    if data is None:
        return []
    if not isinstance(data, list):
        raise DependencyInputError(
            f"Invalid dependency list in '{source}': "
            f"expected a list of dependencies, got {type(data).__name__}"
        )

    try:
        return _DEPENDENCY_LIST.validate_python(data)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
            messages.append(f"{loc}: {err['msg']}")
        raise DependencyInputError(
            f"Invalid dependency list in '{source}': {'; '.join(messages)}"
        ) from e


def load_dependency_file(path: Path) -> list[DependencyLicense]:
    """Load a dependency list from a JSON or YAML file.

    Raises:
        DependencyInputError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DependencyInputError(f"Cannot read dependency file '{path}': {e}") from e

    if not content.strip():
        return []

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DependencyInputError(f"Cannot parse dependency file '{path}': {e}") from e

    return parse_dependencies(data, str(path))
