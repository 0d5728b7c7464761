"""Relationship facts consumed by the concept graph.

A relationship only knows identifiers. The concepts at either end are resolved
through :class:`snomatch.domain.graph.GraphStore`, which keeps concepts and
relationships free of mutual references.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from .enums import ISA_TYPE_ID, Characteristic

# Fields that place a relationship inside a concept; fixed once assigned.
_KEY_FIELDS: Final = frozenset(
    {"source_id", "destination_id", "type_id", "group", "relationship_id"}
)


@dataclass(slots=True, kw_only=True, eq=False)
class Relationship:
    """One ``source --type--> destination`` fact, optionally grouped."""

    source_id: int
    destination_id: int
    type_id: int
    group: int = 0
    characteristic: Characteristic = Characteristic.INFERRED
    relationship_id: int | None = None
    needs_replacement: bool = False
    is_replacement: bool = False

    def __setattr__(self, name: str, value: object) -> None:
        if name in _KEY_FIELDS and hasattr(self, name):
            raise AttributeError(
                f"{name} is read-only; use as_replacement() to move a relationship"
            )
        object.__setattr__(self, name, value)

    def __post_init__(self) -> None:
        if self.group < 0:
            raise ValueError(f"relationship group must be non-negative, got {self.group}")
        for name in ("source_id", "destination_id", "type_id"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be a positive identifier")

    @property
    def sort_key(self) -> tuple[int, int, int, int, int]:
        """Natural ordering used to iterate a concept's attributes."""
        return (
            self.source_id,
            self.group,
            self.type_id,
            self.destination_id,
            self.relationship_id or 0,
        )

    @property
    def is_isa(self) -> bool:
        return self.type_id == ISA_TYPE_ID

    def is_type(self, type_id: int) -> bool:
        return self.type_id == type_id

    def is_group(self, group: int) -> bool:
        return self.group == group

    @property
    def triple_string(self) -> str:
        return f"{self.source_id}_{self.destination_id}_{self.type_id}"

    def mark_needs_replacement(self) -> None:
        self.needs_replacement = True

    def as_replacement(self, *, group: int, relationship_id: int | None = None) -> Relationship:
        """Return a copy moved to ``group`` and flagged as a replacement."""

        return replace(
            self,
            group=group,
            relationship_id=relationship_id,
            needs_replacement=False,
            is_replacement=True,
        )

    def __lt__(self, other: Relationship) -> bool:
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return (
            f"[{self.relationship_id or '-'}] {self.source_id} "
            f"-{self.type_id}-> {self.destination_id} (group {self.group}, "
            f"{self.characteristic})"
        )
