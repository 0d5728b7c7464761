"""Public interface for the relationship record adapter."""

from __future__ import annotations

from .schema import (
    INFERRED_CHARACTERISTIC_ID,
    STATED_CHARACTERISTIC_ID,
    RelationshipRecord,
    RelationshipRecordInput,
)
from .translator import LoadResult, RecordValidationError, load_relationships, to_relationship

__all__ = [
    "INFERRED_CHARACTERISTIC_ID",
    "STATED_CHARACTERISTIC_ID",
    "LoadResult",
    "RecordValidationError",
    "RelationshipRecord",
    "RelationshipRecordInput",
    "load_relationships",
    "to_relationship",
]
