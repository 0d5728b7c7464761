"""Concept graph, ancestor traversal and relationship matching.

Typical flow:
1) build a :class:`GraphStore` and register stated and inferred relationships
2) look concepts up with :meth:`GraphStore.get_concept`
3) query a concept's attributes through :class:`RelationshipMatcher`
"""

from __future__ import annotations

from .errors import AncestorLimitExceededError, SnomatchError, TriplesHashError
from .graph import GraphStore
from .hashing import triples_hash
from .matching import RelationshipMatcher
from .model import ISA_TYPE_ID, Characteristic, Concept, Relationship

__all__ = [
    "ISA_TYPE_ID",
    "AncestorLimitExceededError",
    "Characteristic",
    "Concept",
    "GraphStore",
    "Relationship",
    "RelationshipMatcher",
    "SnomatchError",
    "TriplesHashError",
    "triples_hash",
]
