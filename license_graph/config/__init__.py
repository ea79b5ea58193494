"""Configuration handling for license-graph."""
from __future__ import annotations

from license_graph.config.loader import CONFIG_FILE_NAMES, discover_config, load_config
from license_graph.models.config import EngineConfig, RiskWeights

__all__ = [
    "CONFIG_FILE_NAMES",
    "EngineConfig",
    "RiskWeights",
    "discover_config",
    "load_config",
]
