"""Domain enums and well-known identifiers (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final

ISA_TYPE_ID: Final[int] = 116680003


class Characteristic(StrEnum):
    """Which of the two graph views a relationship belongs to."""

    STATED = "stated"
    INFERRED = "inferred"
