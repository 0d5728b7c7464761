#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from snomatch.adapters import RecordValidationError, load_relationships
from snomatch.common.logging import configure_logging
from snomatch.config import ConfigurationError, GraphConfig, get_graph_config
from snomatch.domain import Characteristic, GraphStore, SnomatchError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from types import FrameType

    from snomatch.domain import Concept


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Inspect stated and inferred concept graphs built from relationship records"
    )
    parser.add_argument(
        "records",
        type=Path,
        help="JSON-lines file with one relationship record per line",
    )
    parser.add_argument(
        "--max-ancestors",
        type=int,
        help="Abort ancestor traversal beyond this many concepts (default: from environment)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("roots", help="List parentless concepts per characteristic")

    ancestors = commands.add_parser("ancestors", help="List every ancestor of a concept")
    ancestors.add_argument("concept_id", type=int)
    _add_characteristic_option(ancestors)

    triples = commands.add_parser("hash", help="Print the triples hash of a relationship group")
    triples.add_argument("concept_id", type=int)
    triples.add_argument("group", type=int)
    _add_characteristic_option(triples)

    return parser.parse_args(list(argv))


def _add_characteristic_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--characteristic",
        type=Characteristic,
        choices=list(Characteristic),
        default=Characteristic.INFERRED,
        help="Graph to query (default: %(default)s)",
    )


def _read_records(path: Path) -> Iterator[dict[str, object]]:
    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{path}:{line_number}: {exc.msg}") from exc


def _build_config(args: argparse.Namespace) -> GraphConfig:
    if args.max_ancestors is not None:
        return GraphConfig(max_ancestors=args.max_ancestors)
    return get_graph_config()


def _require_concept(
    store: GraphStore, concept_id: int, characteristic: Characteristic
) -> Concept:
    concept = store.get_concept(concept_id, characteristic)
    if concept is None:
        raise ValueError(f"Concept {concept_id} not found in {characteristic} graph")
    return concept


def run(args: argparse.Namespace) -> None:
    store = GraphStore(config=_build_config(args))
    load_relationships(store, _read_records(args.records))

    if args.command == "roots":
        for characteristic in Characteristic:
            orphans = store.check_single_root(characteristic)
            print(f"{characteristic}: {' '.join(str(concept) for concept in orphans) or '-'}")
    elif args.command == "ancestors":
        concept = _require_concept(store, args.concept_id, args.characteristic)
        for ancestor in concept.collect_all_ancestors():
            print(ancestor)
    elif args.command == "hash":
        concept = _require_concept(store, args.concept_id, args.characteristic)
        print(concept.triples_hash(args.group))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    try:
        run(parsed_args)
    except (ValueError, ConfigurationError, RecordValidationError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except SnomatchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def cli() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    cli()
