from __future__ import annotations

import json
from pathlib import Path

from tictac.engine.match import MatchController
from tictac.services.telemetry import TelemetryService


def _records(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_log_appends_jsonl(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "telemetry.jsonl"
    tel = TelemetryService(path)
    tel.log("boot", {"ok": True})
    tel.log("boot", {"ok": False, "error": "boom"})
    recs = _records(path)
    assert [r["type"] for r in recs] == ["boot", "boot"]
    assert recs[1]["payload"] == {"ok": False, "error": "boom"}
    assert isinstance(recs[0]["ts"], str)


def test_engine_events_are_forwarded(tmp_path: Path) -> None:
    match = MatchController("Ada", seed=2)
    match.play_round(lambda board: board.unmarked_positions()[0])
    assert match.round is not None

    tel = TelemetryService(tmp_path / "telemetry.jsonl")
    tel.log_events(match.round.event_log)
    tel.log_events(match.event_log)

    recs = _records(tmp_path / "telemetry.jsonl")
    types = [r["type"] for r in recs]
    assert types[0] == "move_played"
    assert "round_ended" in types
    assert types[-2:] == ["round_started", "round_scored"]
    first = recs[0]["payload"]
    assert first == {"player": "Ada", "marker": "X", "position": 1}
