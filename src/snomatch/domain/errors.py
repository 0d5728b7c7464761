"""Domain error definitions."""

from __future__ import annotations


class SnomatchError(Exception):
    """Base class for errors raised by the concept graph."""


class AncestorLimitExceededError(SnomatchError):
    """Raised when ancestor traversal visits more concepts than allowed.

    The hierarchy is either cyclic or far deeper than any sane terminology, so
    the traversal is abandoned rather than retried.
    """

    def __init__(self, *, concept_id: int, limit: int) -> None:
        self.concept_id = concept_id
        self.limit = limit
        super().__init__(
            f"Number of ancestors of concept {concept_id} exceeded configured maximum {limit}"
        )


class TriplesHashError(SnomatchError):
    """Raised when the content of a relationship group cannot be hashed."""

    def __init__(self, *, concept_id: int, group: int) -> None:
        self.concept_id = concept_id
        self.group = group
        super().__init__(f"Unable to hash triples of concept {concept_id}, group {group}")
