"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_positive_int
from .errors import ConfigurationError
from .graph import DEFAULT_MAX_ANCESTORS, MAX_ANCESTORS_ENV_VAR, GraphConfig, get_graph_config

__all__ = [
    "DEFAULT_MAX_ANCESTORS",
    "MAX_ANCESTORS_ENV_VAR",
    "ConfigurationError",
    "GraphConfig",
    "get_graph_config",
    "optional_positive_int",
]
