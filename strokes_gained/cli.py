"""Score shot records from a JSON or JSONL file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, TextIO

from pydantic import ValidationError

from .baseline import UnknownBaselineSourceError
from .config import SGConfig
from .engine import StrokesGainedEngine


def load_shot_records(path: Path) -> List[Any]:
    """Read a JSON array of shots, or one JSON object per line."""

    text = path.read_text(encoding="utf-8")
    stripped = text.lstrip()
    if stripped.startswith("["):
        data = json.loads(stripped)
        return list(data)
    records: List[Any] = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            records.append(json.loads(line))
    return records


def _build_engine(precision: Optional[int]) -> StrokesGainedEngine:
    if precision is None:
        return StrokesGainedEngine(SGConfig())
    return StrokesGainedEngine(SGConfig(rounding_precision=precision))


def _write_summary(
    engine: StrokesGainedEngine, records: List[Any], out: TextIO
) -> None:
    summary = engine.calculate_summary(records)
    payload = summary.model_dump(by_alias=True)
    payload["shots_submitted"] = len(records)
    payload["min_shots_met"] = engine.has_minimum_shots(summary)
    out.write(json.dumps(payload, sort_keys=True) + "\n")


def _write_shots(engine: StrokesGainedEngine, records: List[Any], out: TextIO) -> None:
    for record in records:
        outcome = engine.calculate_single_shot(record)
        out.write(json.dumps(outcome.model_dump(mode="json"), sort_keys=True) + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strokes-gained", description=__doc__.strip()
    )
    parser.add_argument("--precision", type=int, default=None, help="Decimal digits")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)
    summary = sub.add_parser("summary", help="Aggregate strokes gained by category")
    summary.add_argument("path", type=Path)
    shots = sub.add_parser("shots", help="Print the result for every shot")
    shots.add_argument("path", type=Path)
    return parser


def main(argv: Optional[Sequence[str]] = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    out = out or sys.stdout

    try:
        records = load_shot_records(args.path)
    except (OSError, ValueError) as exc:
        print(f"cannot read {args.path}: {exc}", file=sys.stderr)
        return 2

    try:
        engine = _build_engine(args.precision)
    except (ValidationError, UnknownBaselineSourceError) as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.command == "summary":
        _write_summary(engine, records, out)
    else:
        _write_shots(engine, records, out)
    return 0


__all__ = ["build_parser", "load_shot_records", "main"]
