from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING

import pytest

from snomatch import main as main_module
from snomatch.adapters import INFERRED_CHARACTERISTIC_ID, STATED_CHARACTERISTIC_ID
from snomatch.domain import ISA_TYPE_ID
from snomatch.domain.hashing import TRIPLES_NAMESPACE
from tests.support.graphs import HEART, METHOD, PROCEDURE, ROOT, VALVE_EXCISION

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    levels: list[int] = []

    def fake_configure_logging(*, level: int, force: bool = False) -> None:
        levels.append(level)

    monkeypatch.setattr(main_module, "configure_logging", fake_configure_logging)
    return levels


def _row(
    source: int,
    type_id: int,
    destination: int,
    group: int = 0,
    characteristic: str = INFERRED_CHARACTERISTIC_ID,
) -> str:
    return json.dumps(
        {
            "active": "1",
            "sourceId": str(source),
            "destinationId": str(destination),
            "relationshipGroup": str(group),
            "typeId": str(type_id),
            "characteristicTypeId": characteristic,
        }
    )


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    path = tmp_path / "relationships.jsonl"
    lines = [
        _row(PROCEDURE, ISA_TYPE_ID, ROOT),
        _row(VALVE_EXCISION, ISA_TYPE_ID, PROCEDURE),
        _row(VALVE_EXCISION, METHOD, HEART, 1),
        "",
        _row(VALVE_EXCISION, ISA_TYPE_ID, PROCEDURE, characteristic=STATED_CHARACTERISTIC_ID),
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_main_cli_lists_roots(records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main_module.main([str(records_file), "roots"])

    out = capsys.readouterr().out.splitlines()
    assert out == [f"stated: {PROCEDURE}", f"inferred: {HEART} {ROOT}"]


def test_main_cli_lists_ancestors(records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main_module.main([str(records_file), "ancestors", str(VALVE_EXCISION)])

    assert capsys.readouterr().out.splitlines() == [str(PROCEDURE), str(ROOT)]


def test_main_cli_prints_group_hash(
    records_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(records_file), "hash", str(VALVE_EXCISION), "1"])

    expected = uuid.uuid5(TRIPLES_NAMESPACE, f"{VALVE_EXCISION}_{HEART}_{METHOD}")
    assert capsys.readouterr().out.strip() == str(expected)


def test_main_cli_verbose_enables_debug(records_file: Path, quiet_logging: list[int]) -> None:
    main_module.main([str(records_file), "--verbose", "roots"])

    assert quiet_logging == [logging.DEBUG]


def test_main_cli_unknown_concept_exits_with_usage_error(
    records_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [str(records_file), "ancestors", str(HEART), "--characteristic", "stated"]
        )

    assert excinfo.value.code == 2
    assert "not found in stated graph" in capsys.readouterr().err


def test_main_cli_invalid_json_exits_with_usage_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.jsonl"
    path.write_text("{not json}\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(path), "roots"])

    assert excinfo.value.code == 2


def test_main_cli_ancestor_limit_exits_with_runtime_error(
    records_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [str(records_file), "--max-ancestors", "1", "ancestors", str(VALVE_EXCISION)]
        )

    assert excinfo.value.code == 1
    assert "exceeded configured maximum 1" in capsys.readouterr().err
