"""Engine configuration loading for license-graph.

Settings come from an explicit file, or from ``.license-graph.yaml`` /
``.license-graph.yml`` in the working directory; with neither the engine
runs on ``EngineConfig`` defaults. Errors name the offending setting, and
unknown keys are matched against the settings of their section so typos
get a suggestion.
"""
from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from license_graph.exceptions import ConfigurationError
from license_graph.models.config import EngineConfig, RiskWeights

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = (".license-graph.yaml", ".license-graph.yml")

# Model validating each nesting level of the file
_SECTIONS: dict[tuple[str, ...], type[BaseModel]] = {
    (): EngineConfig,
    ("risk_weights",): RiskWeights,
}


def discover_config(directory: Path | None = None) -> Path | None:
    """Return the configuration file present in ``directory``, if any.

    ``.yaml`` wins over ``.yml``. The directory defaults to the current
    working directory.
    """
    directory = directory or Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    config_path: str | Path | None = None, directory: Path | None = None
) -> EngineConfig:
    """Build the engine configuration.

    Args:
        config_path: Explicit configuration file. It must exist and be
            valid; discovery is skipped.
        directory: Directory searched for a configuration file when no
            path is given.

    Returns:
        The validated EngineConfig. Missing settings keep their defaults.

    Raises:
        ConfigurationError: If the file cannot be read, is not YAML, is
            not a mapping of settings, or holds an invalid setting.
    """
    path = Path(config_path) if config_path is not None else discover_config(directory)
    if path is None:
        return EngineConfig()

    settings = _read_settings(path)
    try:
        config = EngineConfig.model_validate(settings)
    except ValidationError as e:
        problems = "; ".join(_describe(err) for err in e.errors())
        raise ConfigurationError(f"Invalid configuration in '{path}': {problems}") from e

    logger.debug(
        "Configuration from %s overrides: %s", path, ", ".join(sorted(settings)) or "none"
    )
    return config


def _read_settings(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file '{path}': {e}") from e

    try:
        settings = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in '{path}': {e}") from e

    # Empty and comment-only files
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ConfigurationError(
            f"Configuration in '{path}' must map setting names to values, "
            f"got {type(settings).__name__}"
        )
    return settings


def _describe(error: Any) -> str:
    """One ``setting: problem`` line for a pydantic error."""
    loc = tuple(str(part) for part in error["loc"])
    setting = ".".join(loc)

    if error["type"] == "extra_forbidden":
        section = _SECTIONS.get(loc[:-1], EngineConfig)
        known = list(section.model_fields)
        close = difflib.get_close_matches(loc[-1], known, n=1)
        if close:
            return f"{setting}: unknown setting, did you mean '{close[0]}'?"
        return f"{setting}: unknown setting (expected one of: {', '.join(known)})"

    return f"{setting}: {error['msg']} (got {error['input']!r})"
