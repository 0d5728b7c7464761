"""Translate relationship records into domain relationships and load them."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from snomatch.domain.errors import SnomatchError
from snomatch.domain.model import Characteristic, Relationship

from .schema import RelationshipRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from snomatch.domain.graph import GraphStore

    from .schema import RelationshipRecordInput


log = getLogger(__name__)


class RecordValidationError(SnomatchError):
    """Raised when a relationship record cannot be validated."""

    def __init__(self, *, index: int, error: ValidationError) -> None:
        self.index = index
        self.error = error
        super().__init__(f"Invalid relationship record #{index}: {error}")


@dataclass(slots=True)
class LoadResult:
    """Counts of what a load run did, per characteristic."""

    registered: dict[Characteristic, int] = field(
        default_factory=lambda: dict.fromkeys(Characteristic, 0)
    )
    skipped_inactive: int = 0

    @property
    def total(self) -> int:
        return sum(self.registered.values())


def _ensure_record(record: RelationshipRecordInput) -> RelationshipRecord:
    if isinstance(record, RelationshipRecord):
        return record
    return RelationshipRecord.model_validate(record)


def to_relationship(record: RelationshipRecordInput) -> Relationship:
    parsed = _ensure_record(record)
    return Relationship(
        relationship_id=parsed.relationship_id,
        source_id=parsed.source_id,
        destination_id=parsed.destination_id,
        type_id=parsed.type_id,
        group=parsed.group,
        characteristic=parsed.characteristic,
    )


def load_relationships(
    store: GraphStore, records: Iterable[RelationshipRecordInput]
) -> LoadResult:
    """Validate every record and register the active ones with ``store``."""

    result = LoadResult()
    for index, record in enumerate(records):
        try:
            parsed = _ensure_record(record)
        except ValidationError as exc:
            log.exception("Error validating relationship record #%d", index)
            raise RecordValidationError(index=index, error=exc) from exc
        if not parsed.active:
            result.skipped_inactive += 1
            continue
        relationship = to_relationship(parsed)
        store.register_relationship(relationship, relationship.characteristic)
        result.registered[relationship.characteristic] += 1

    log.info(
        "Loaded relationships: stated=%d, inferred=%d, skipped_inactive=%d",
        result.registered[Characteristic.STATED],
        result.registered[Characteristic.INFERRED],
        result.skipped_inactive,
    )
    return result
