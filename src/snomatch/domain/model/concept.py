"""Concept nodes of a characteristic graph.

A concept owns its outgoing relationships (``attributes``) and the ISA-derived
``parents`` edges. Equality, hashing and ordering use the concept id only, so a
stated concept and the inferred concept with the same id compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from snomatch.config.graph import DEFAULT_MAX_ANCESTORS
from snomatch.domain.errors import AncestorLimitExceededError
from snomatch.domain.hashing import triples_hash

if TYPE_CHECKING:
    from .enums import Characteristic
    from .relationship import Relationship


log = getLogger(__name__)


@dataclass(eq=False, kw_only=True)
class Concept:
    concept_id: int
    characteristic: Characteristic
    max_ancestors: int = DEFAULT_MAX_ANCESTORS

    _parents: dict[int, Concept] = field(default_factory=dict, repr=False)
    _attributes: dict[tuple[int, ...], Relationship] = field(
        default_factory=dict, repr=False
    )
    _ordered_attributes: tuple[Relationship, ...] | None = field(default=None, repr=False)
    _max_group_id: int = field(default=0, repr=False)
    _replacement_number: int = field(default=0, repr=False)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Concept):
            return self.concept_id == other.concept_id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.concept_id)

    def __lt__(self, other: Concept) -> bool:
        return self.concept_id < other.concept_id

    def __str__(self) -> str:
        marker = " *" if self.has_modified_relationships else ""
        return f"{self.concept_id}{marker}"

    @property
    def parents(self) -> tuple[Concept, ...]:
        return tuple(self._parents[concept_id] for concept_id in sorted(self._parents))

    @property
    def attributes(self) -> tuple[Relationship, ...]:
        if self._ordered_attributes is None:
            self._ordered_attributes = tuple(
                self._attributes[key] for key in sorted(self._attributes)
            )
        return self._ordered_attributes

    @property
    def max_group_id(self) -> int:
        return self._max_group_id

    @property
    def group_ids(self) -> range:
        """Group numbers ``1..max_group_id``; group 0 is the ungrouped bucket."""
        return range(1, self._max_group_id + 1)

    def add_parent(self, parent: Concept) -> None:
        self._parents.setdefault(parent.concept_id, parent)

    def add_attribute(self, relationship: Relationship) -> None:
        key = relationship.sort_key
        if key in self._attributes:
            log.debug("Ignoring duplicate relationship %s on concept %s", relationship, self)
            return
        self._attributes[key] = relationship
        self._ordered_attributes = None
        self._max_group_id = max(self._max_group_id, relationship.group)

    def has_ancestor(self, target: Concept | None, *, limit: int | None = None) -> bool:
        """Return True if ``target`` is reachable by following parent edges.

        The concept itself is not its own ancestor unless the graph loops back
        to it. Traversal is depth first and stops at the first hit.
        """

        if target is None:
            return False
        bound = self.max_ancestors if limit is None else limit
        visited: set[int] = set()
        stack = list(reversed(self.parents))
        while stack:
            candidate = stack.pop()
            if candidate == target:
                return True
            if candidate.concept_id in visited:
                continue
            visited.add(candidate.concept_id)
            if len(visited) > bound:
                log.error(
                    "Ancestor search from %s towards %s exceeded %d concepts",
                    self.concept_id,
                    target.concept_id,
                    bound,
                )
                raise AncestorLimitExceededError(concept_id=self.concept_id, limit=bound)
            stack.extend(reversed(candidate.parents))
        return False

    def collect_all_ancestors(self, *, limit: int | None = None) -> tuple[Concept, ...]:
        """Return the transitive closure of ``parents`` in depth-first discovery order."""

        bound = self.max_ancestors if limit is None else limit
        seen: dict[int, Concept] = {}
        stack = list(reversed(self.parents))
        while stack:
            candidate = stack.pop()
            if candidate.concept_id in seen:
                continue
            seen[candidate.concept_id] = candidate
            if len(seen) > bound:
                log.error(
                    "Ancestors of %s exceeded configured maximum %d", self.concept_id, bound
                )
                raise AncestorLimitExceededError(concept_id=self.concept_id, limit=bound)
            stack.extend(reversed(candidate.parents))
        return tuple(seen.values())

    def triples_hash(self, group: int) -> str:
        return triples_hash(self, group)

    def next_replacement_number(self) -> int:
        self._replacement_number += 1
        return self._replacement_number

    @property
    def has_modified_relationships(self) -> bool:
        return any(
            attribute.needs_replacement or attribute.is_replacement
            for attribute in self.attributes
        )
