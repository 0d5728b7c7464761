"""Pydantic models describing relationship records handed to the loader.

Records use the RF2 column names. Identifiers may arrive as strings and are
coerced to integers; the characteristic accepts either the SNOMED CT
characteristic type id or the plain name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from snomatch.domain.model import Characteristic

STATED_CHARACTERISTIC_ID: Final[str] = "900000000000010007"
INFERRED_CHARACTERISTIC_ID: Final[str] = "900000000000011006"

_CHARACTERISTIC_ALIASES: Final[dict[str, Characteristic]] = {
    STATED_CHARACTERISTIC_ID: Characteristic.STATED,
    INFERRED_CHARACTERISTIC_ID: Characteristic.INFERRED,
    "stated": Characteristic.STATED,
    "inferred": Characteristic.INFERRED,
}

RelationshipRecordInput: TypeAlias = "RelationshipRecord | Mapping[str, object]"


class RecordBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class RelationshipRecord(RecordBaseModel):
    relationship_id: PositiveInt | None = Field(default=None, alias="id")
    active: bool = True
    source_id: PositiveInt = Field(alias="sourceId")
    destination_id: PositiveInt = Field(alias="destinationId")
    group: int = Field(default=0, ge=0, alias="relationshipGroup")
    type_id: PositiveInt = Field(alias="typeId")
    characteristic: Characteristic = Field(alias="characteristicTypeId")

    @field_validator("relationship_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("characteristic", mode="before")
    @classmethod
    def _parse_characteristic(cls, value: object) -> object:
        if isinstance(value, Characteristic):
            return value
        key = str(value).strip().lower()
        try:
            return _CHARACTERISTIC_ALIASES[key]
        except KeyError:
            raise ValueError(f"unknown characteristic type {value!r}") from None
