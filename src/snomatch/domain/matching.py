"""Relationship matching against a concept's own attributes.

Each query trades exactness for tolerance of added specificity: a more
specific destination (a descendant of the requested one), a more specific
type, or a group that only matches by content. Tolerant passes always resolve
the requested destination and type in the inferred graph, whatever graph the
queried concept lives in.

None of the queries mutate the graph. Absence is an empty list, except for
:meth:`RelationshipMatcher.by_triples_hash`, which returns ``None`` when no
group has the requested content.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .model import Characteristic

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .graph import GraphStore
    from .model import Concept, Relationship


log = getLogger(__name__)


@dataclass(slots=True)
class RelationshipMatcher:
    """Match queries bound to one :class:`GraphStore`."""

    store: GraphStore

    def by_type(self, concept: Concept, type_id: int) -> list[Relationship]:
        return [attribute for attribute in concept.attributes if attribute.is_type(type_id)]

    def by_type_and_destination(
        self, concept: Concept, type_id: int, destination: Concept
    ) -> list[Relationship]:
        """Prefer an exact destination, else accept a more specific one."""

        candidates = self.by_type(concept, type_id)
        matches = [
            attribute
            for attribute in candidates
            if attribute.destination_id == destination.concept_id
        ]
        if matches:
            return matches
        return [
            attribute
            for attribute in candidates
            if self._has_ancestor(self._destination(concept, attribute), destination)
        ]

    def by_type_and_group(self, concept: Concept, type_id: int, group: int) -> list[Relationship]:
        return [
            attribute
            for attribute in concept.attributes
            if attribute.is_type(type_id) and attribute.is_group(group)
        ]

    def by_type_destination_and_group(
        self,
        concept: Concept,
        type_id: int,
        destination_id: int,
        group: int,
        *,
        allow_child_of_destination: bool = False,
        allow_child_of_type: bool = False,
    ) -> list[Relationship]:
        """Cascade from exact to tolerant matching within one group.

        Each tolerant pass only runs when everything before it came up empty.
        Destination tolerance is tried before type tolerance and the two are
        never applied together.
        """

        matches = [
            attribute
            for attribute in concept.attributes
            if attribute.is_group(group)
            and attribute.is_type(type_id)
            and attribute.destination_id == destination_id
        ]
        if matches or not (allow_child_of_destination or allow_child_of_type):
            return matches

        inferred_destination = self._inferred(destination_id)

        if allow_child_of_destination:
            matches = [
                attribute
                for attribute in concept.attributes
                if attribute.is_group(group)
                and attribute.is_type(type_id)
                and self._has_ancestor(self._destination(concept, attribute), inferred_destination)
            ]

        if allow_child_of_type and not matches:
            target_type = self._inferred(type_id)
            matches = [
                attribute
                for attribute in concept.attributes
                if attribute.is_group(group)
                and self._same_concept(self._destination(concept, attribute), inferred_destination)
                and self._has_ancestor(self._inferred(attribute.type_id), target_type)
            ]
        return matches

    def by_type_and_destination_id(
        self,
        concept: Concept,
        type_id: int,
        destination_id: int,
        *,
        allow_child_of_destination: bool = False,
        allow_child_of_type: bool = False,
    ) -> list[Relationship]:
        """Accumulate exact and tolerant matches regardless of group.

        Every enabled pass scans all attributes and appends its hits, so a
        relationship satisfying several passes appears once per pass. Callers
        that need unique results must deduplicate.
        """

        matches = [
            attribute
            for attribute in concept.attributes
            if attribute.is_type(type_id) and attribute.destination_id == destination_id
        ]

        inferred_destination = self._inferred(destination_id)
        target_type = self._inferred(type_id)

        if allow_child_of_type:
            matches.extend(
                attribute
                for attribute in concept.attributes
                if self._same_concept(self._destination(concept, attribute), inferred_destination)
                and self._has_ancestor(self._inferred(attribute.type_id), target_type)
            )

        if allow_child_of_destination:
            matches.extend(
                attribute
                for attribute in concept.attributes
                if attribute.is_type(type_id)
                and self._has_ancestor(self._destination(concept, attribute), inferred_destination)
            )

        if allow_child_of_destination and allow_child_of_type:
            matches.extend(
                attribute
                for attribute in concept.attributes
                if self._has_ancestor(self._inferred(attribute.type_id), target_type)
                and self._has_ancestor(self._destination(concept, attribute), inferred_destination)
            )

        return matches

    def by_group(
        self, concept: Concept, group: int, *, exclude_isa: bool = False
    ) -> list[Relationship]:
        return [
            attribute
            for attribute in concept.attributes
            if attribute.is_group(group) and not (exclude_isa and attribute.is_isa)
        ]

    def by_triples_hash(
        self, concept: Concept, triples_hash: str, relationship: Relationship
    ) -> list[Relationship] | None:
        """Find ``relationship``'s triple inside the group whose content hashes alike.

        Returns ``None`` when no group of ``concept`` has that content hash, and
        an empty list when the group exists but lacks the triple.
        """

        for group in concept.group_ids:
            if concept.triples_hash(group) == triples_hash:
                return self.by_type_destination_and_group(
                    concept, relationship.type_id, relationship.destination_id, group
                )
        log.debug("No group of %s hashes to %s", concept.concept_id, triples_hash)
        return None

    def by_group_types(self, concept: Concept, type_ids: Sequence[int]) -> list[Relationship]:
        """Return whole groups that contain at least one attribute of every type."""

        matches: list[Relationship] = []
        for group in concept.group_ids:
            members = self.by_group(concept, group)
            present = {attribute.type_id for attribute in members}
            if all(type_id in present for type_id in type_ids):
                matches.extend(members)
        return matches

    def by_polymorphic_type(self, concept: Concept, type_id: int) -> list[Relationship]:
        """Match attributes whose type is ``type_id`` or one of its descendants.

        ISA attributes are only matched exactly; nothing is more specific than ISA.
        """

        target_type = self._inferred(type_id)
        matches: list[Relationship] = []
        for attribute in concept.attributes:
            if attribute.is_type(type_id):
                matches.append(attribute)
            elif not attribute.is_isa and self._has_ancestor(
                self._inferred(attribute.type_id), target_type
            ):
                matches.append(attribute)
        return matches

    def exact(self, concept: Concept, relationship: Relationship) -> list[Relationship]:
        return self.by_type_destination_and_group(
            concept, relationship.type_id, relationship.destination_id, relationship.group
        )

    def _inferred(self, concept_id: int) -> Concept | None:
        return self.store.get_concept(concept_id, Characteristic.INFERRED)

    def _destination(self, concept: Concept, attribute: Relationship) -> Concept | None:
        return self.store.destination_concept(attribute, concept.characteristic)

    @staticmethod
    def _has_ancestor(candidate: Concept | None, target: Concept | None) -> bool:
        if candidate is None or target is None:
            return False
        return candidate.has_ancestor(target)

    @staticmethod
    def _same_concept(candidate: Concept | None, target: Concept | None) -> bool:
        return candidate is not None and target is not None and candidate == target
