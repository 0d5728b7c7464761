"""Concept graph configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_positive_int
from .errors import ConfigurationError

DEFAULT_MAX_ANCESTORS: Final[int] = 500
MAX_ANCESTORS_ENV_VAR: Final[str] = "SNOMATCH_MAX_ANCESTORS"


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Tunables shared by every concept of one graph store.

    ``max_ancestors`` bounds ancestor traversal; exceeding it means the
    hierarchy is cyclic or malformed.
    """

    max_ancestors: int = DEFAULT_MAX_ANCESTORS

    def __post_init__(self) -> None:
        if self.max_ancestors <= 0:
            raise ConfigurationError(
                f"max_ancestors must be positive, got {self.max_ancestors}"
            )


def get_graph_config() -> GraphConfig:
    return GraphConfig(
        max_ancestors=optional_positive_int(MAX_ANCESTORS_ENV_VAR, DEFAULT_MAX_ANCESTORS)
    )
