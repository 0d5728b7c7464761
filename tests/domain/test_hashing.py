from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from snomatch.domain import Characteristic, TriplesHashError, hashing, triples_hash
from tests.support.graphs import (
    EXCISION,
    HEART_VALVE,
    METHOD,
    MITRAL_VALVE,
    PROCEDURE_SITE_DIRECT,
    VALVE_EXCISION,
    build_store,
    rel,
)

if TYPE_CHECKING:
    from snomatch.domain import Concept


def _concept_with_groups(
    characteristic: Characteristic, *groups: list[tuple[int, int]]
) -> Concept:
    relationships = [
        rel(VALVE_EXCISION, type_id, destination, number, characteristic=characteristic)
        for number, members in enumerate(groups, start=1)
        for type_id, destination in members
    ]
    store = build_store(*relationships)
    concept = store.get_concept(VALVE_EXCISION, characteristic)
    assert concept is not None
    return concept


def test_hash_is_invariant_to_group_number_and_characteristic() -> None:
    members = [(METHOD, EXCISION), (PROCEDURE_SITE_DIRECT, MITRAL_VALVE)]
    stated = _concept_with_groups(Characteristic.STATED, members)
    inferred = _concept_with_groups(
        Characteristic.INFERRED, [(PROCEDURE_SITE_DIRECT, HEART_VALVE)], members
    )

    assert stated.triples_hash(1) == inferred.triples_hash(2)
    assert stated.triples_hash(1) != inferred.triples_hash(1)


def test_hash_changes_when_a_destination_changes() -> None:
    original = _concept_with_groups(
        Characteristic.INFERRED, [(METHOD, EXCISION), (PROCEDURE_SITE_DIRECT, MITRAL_VALVE)]
    )
    changed = _concept_with_groups(
        Characteristic.INFERRED, [(METHOD, EXCISION), (PROCEDURE_SITE_DIRECT, HEART_VALVE)]
    )

    assert original.triples_hash(1) != changed.triples_hash(1)


def test_hash_is_a_name_based_uuid_of_concatenated_triples() -> None:
    concept = _concept_with_groups(
        Characteristic.INFERRED, [(METHOD, EXCISION), (PROCEDURE_SITE_DIRECT, MITRAL_VALVE)]
    )
    expected_name = (
        f"{VALVE_EXCISION}_{EXCISION}_{METHOD}"
        f"{VALVE_EXCISION}_{MITRAL_VALVE}_{PROCEDURE_SITE_DIRECT}"
    )

    result = triples_hash(concept, 1)

    assert result == str(uuid.uuid5(hashing.TRIPLES_NAMESPACE, expected_name))
    assert uuid.UUID(result).version == 5
    assert concept.triples_hash(1) == result


def test_hash_of_empty_group_is_stable() -> None:
    concept = _concept_with_groups(Characteristic.INFERRED, [(METHOD, EXCISION)])

    assert concept.triples_hash(7) == hashing.name_uuid("")


def test_hash_failure_is_reported_distinctly(monkeypatch: pytest.MonkeyPatch) -> None:
    concept = _concept_with_groups(Characteristic.INFERRED, [(METHOD, EXCISION)])
    monkeypatch.setattr(hashing, "triples_string", lambda _members: "\ud800")

    with pytest.raises(TriplesHashError) as exc:
        concept.triples_hash(1)

    assert exc.value.group == 1
    assert isinstance(exc.value.__cause__, UnicodeError)
