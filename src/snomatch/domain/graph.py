"""Concept registries for the stated and inferred views of a terminology.

The store is built once and then queried:
- ingestion calls :meth:`GraphStore.register_relationship` for every fact
- concepts are created lazily the first time an id is referenced
- matching and diagnostics only read from the registries afterwards

Registration is not safe to run concurrently with itself or with queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from snomatch.config.graph import GraphConfig

from .model import Characteristic, Concept

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import Relationship


log = getLogger(__name__)


def _new_registries() -> dict[Characteristic, dict[int, Concept]]:
    return {characteristic: {} for characteristic in Characteristic}


@dataclass(slots=True)
class GraphStore:
    """Two independent concept registries, one per characteristic."""

    config: GraphConfig = field(default_factory=GraphConfig)
    _registries: dict[Characteristic, dict[int, Concept]] = field(
        default_factory=_new_registries, repr=False
    )

    def __len__(self) -> int:
        return sum(len(registry) for registry in self._registries.values())

    def register_relationship(
        self, relationship: Relationship, characteristic: Characteristic
    ) -> None:
        """Wire ``relationship`` into the graph of ``characteristic``."""

        source = self._get_or_create(relationship.source_id, characteristic)
        destination = self._get_or_create(relationship.destination_id, characteristic)

        # Only ISA relationships shape the hierarchy; everything is an attribute.
        if relationship.is_isa:
            source.add_parent(destination)
        source.add_attribute(relationship)

    def register_all(
        self, relationships: Iterable[Relationship], characteristic: Characteristic
    ) -> int:
        count = 0
        for relationship in relationships:
            self.register_relationship(relationship, characteristic)
            count += 1
        log.debug("Registered %d %s relationships", count, characteristic)
        return count

    def get_concept(self, concept_id: int, characteristic: Characteristic) -> Concept | None:
        return self._registries[characteristic].get(concept_id)

    def concepts(self, characteristic: Characteristic) -> tuple[Concept, ...]:
        registry = self._registries[characteristic]
        return tuple(registry[concept_id] for concept_id in sorted(registry))

    def source_concept(
        self, relationship: Relationship, characteristic: Characteristic
    ) -> Concept | None:
        return self.get_concept(relationship.source_id, characteristic)

    def destination_concept(
        self, relationship: Relationship, characteristic: Characteristic
    ) -> Concept | None:
        return self.get_concept(relationship.destination_id, characteristic)

    def check_single_root(self, characteristic: Characteristic) -> tuple[Concept, ...]:
        """Return every concept without parents; a sound graph has exactly one."""

        orphans = tuple(
            concept for concept in self.concepts(characteristic) if not concept.parents
        )
        log.debug("The following concepts have no parent in graph %s:", characteristic)
        for concept in orphans:
            log.debug("%s", concept)
        if len(orphans) != 1:
            log.warning(
                "Expected a single root in %s graph, found %d parentless concepts",
                characteristic,
                len(orphans),
            )
        return orphans

    def _get_or_create(self, concept_id: int, characteristic: Characteristic) -> Concept:
        registry = self._registries[characteristic]
        concept = registry.get(concept_id)
        if concept is None:
            concept = Concept(
                concept_id=concept_id,
                characteristic=characteristic,
                max_ancestors=self.config.max_ancestors,
            )
            registry[concept_id] = concept
            log.debug("Created %s concept %s", characteristic, concept_id)
        return concept
