"""Concept graph domain model."""

from __future__ import annotations

from .concept import Concept
from .enums import ISA_TYPE_ID, Characteristic
from .relationship import Relationship

__all__ = [
    "ISA_TYPE_ID",
    "Characteristic",
    "Concept",
    "Relationship",
]
