from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from tictac.engine.match import MatchConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str_list(obj: Mapping[str, object], key: str) -> tuple[str, ...]:
    v = obj.get(key)
    if not isinstance(v, list) or not all(isinstance(s, str) for s in v):
        raise ContentError(f"Expected list of strings for {key}")
    return tuple(v)


def parse_match_config(raw: object) -> MatchConfig:
    if not isinstance(raw, dict):
        raise ContentError("game.json must be an object")
    markers = _require_str_list(raw, "markers")
    if len(markers) != 2:
        raise ContentError("markers must hold exactly two symbols")
    target = raw.get("target_score")
    if not isinstance(target, int) or isinstance(target, bool):
        raise ContentError("Expected int for target_score")
    center = raw.get("center_priority", True)
    if not isinstance(center, bool):
        raise ContentError("Expected bool for center_priority")
    return MatchConfig(
        markers=(markers[0], markers[1]),
        target_score=target,
        computer_names=_require_str_list(raw, "computer_names"),
        center_priority=center,
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_match_config(self) -> MatchConfig:
        path = self._data_dir / "game.json"
        schema = _load_schema(self._schema_dir / "game.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        return parse_match_config(raw)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_match_config()
