"""Content identity for relationship groups.

A group is identified by a name-based UUID over its triples, so the same group
can be found again after it has been renumbered or copied to another graph.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Final

from .errors import TriplesHashError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model.concept import Concept
    from .model.relationship import Relationship

TRIPLES_NAMESPACE: Final[uuid.UUID] = uuid.uuid5(uuid.NAMESPACE_URL, "http://snomed.info/sct")


def triples_string(relationships: Iterable[Relationship]) -> str:
    """Concatenate triple strings without a separator."""

    return "".join(relationship.triple_string for relationship in relationships)


def name_uuid(name: str) -> str:
    """Deterministic UUID v5 of ``name`` as a hyphenated hex string."""

    return str(uuid.uuid5(TRIPLES_NAMESPACE, name))


def triples_hash(concept: Concept, group: int) -> str:
    """Hash the ordered triples of ``concept``'s relationships in ``group``."""

    members = (attribute for attribute in concept.attributes if attribute.is_group(group))
    try:
        return name_uuid(triples_string(members))
    except UnicodeError as exc:
        raise TriplesHashError(concept_id=concept.concept_id, group=group) from exc
