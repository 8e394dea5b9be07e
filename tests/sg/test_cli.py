from __future__ import annotations

import io
import json

import pytest

from strokes_gained.cli import load_shot_records, main

SHOTS = [
    {"startDistance": 400, "startLie": "tee", "outcome": {"endDistance": 150, "endLie": "fairway"}},
    {"startDistance": 150, "startLie": "fairway", "outcome": {"endDistance": 10, "endLie": "green"}},
    {"startDistance": 10, "startLie": "green", "outcome": {"endDistance": 0, "endLie": "green", "holed": True}},
    {"startDistance": 100, "startLie": "fairway", "outcome": {"endDistance": 200, "endLie": "rough"}},
]


@pytest.fixture
def shots_file(tmp_path):
    path = tmp_path / "round.json"
    path.write_text(json.dumps(SHOTS), encoding="utf-8")
    return path


def test_load_json_and_jsonl(tmp_path, shots_file) -> None:
    jsonl = tmp_path / "round.jsonl"
    jsonl.write_text("\n".join(json.dumps(s) for s in SHOTS) + "\n\n", encoding="utf-8")
    assert load_shot_records(shots_file) == SHOTS
    assert load_shot_records(jsonl) == SHOTS


def test_summary_command(shots_file) -> None:
    out = io.StringIO()
    assert main(["summary", str(shots_file)], out=out) == 0

    payload = json.loads(out.getvalue())
    assert payload["shots_analyzed"] == 3
    assert payload["shots_submitted"] == 4
    assert payload["min_shots_met"] is True
    assert payload["PUTT"] == pytest.approx(0.41)
    assert payload["total"] == payload["OTT"] + payload["APP"] + payload["ARG"] + payload["PUTT"]


def test_shots_command_with_precision(shots_file) -> None:
    out = io.StringIO()
    assert main(["--precision", "1", "shots", str(shots_file)], out=out) == 0

    lines = [json.loads(line) for line in out.getvalue().splitlines()]
    assert [line["kind"] for line in lines] == ["result", "result", "result", "error"]
    assert lines[2]["strokes_gained"] == pytest.approx(0.4)
    assert lines[3]["code"] == "INVALID_SHOT_DATA"


def test_unreadable_input(tmp_path, capsys) -> None:
    missing = tmp_path / "missing.json"
    assert main(["summary", str(missing)], out=io.StringIO()) == 2
    assert "cannot read" in capsys.readouterr().err

    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    assert main(["summary", str(broken)], out=io.StringIO()) == 2


@pytest.mark.parametrize("precision", ["11", "-1"])
def test_out_of_range_precision_is_rejected(shots_file, capsys, precision) -> None:
    out = io.StringIO()
    assert main(["--precision", precision, "summary", str(shots_file)], out=out) == 2
    assert "invalid configuration" in capsys.readouterr().err
    assert out.getvalue() == ""


def test_reserved_baseline_source_from_env(shots_file, capsys, monkeypatch) -> None:
    monkeypatch.setenv("SG_BASELINE_SOURCE", "scratch")
    assert main(["summary", str(shots_file)], out=io.StringIO()) == 2
    assert "scratch" in capsys.readouterr().err


def test_malformed_env_setting(shots_file, capsys, monkeypatch) -> None:
    monkeypatch.setenv("SG_MIN_SHOTS_FOR_CALCULATION", "lots")
    assert main(["shots", str(shots_file)], out=io.StringIO()) == 2
    assert "invalid configuration" in capsys.readouterr().err
