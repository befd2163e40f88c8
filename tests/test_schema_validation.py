from __future__ import annotations

import json
from pathlib import Path

import pytest

from tictac.engine.match import MatchConfig
from tictac.paths import get_paths
from tictac.services.content import ContentError, ContentService


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_shipped_config_matches_defaults() -> None:
    paths = get_paths()
    cfg = ContentService(paths.data_dir, paths.schema_dir).load_match_config()
    assert cfg == MatchConfig()


def _service_with(tmp_path: Path, raw: object) -> ContentService:
    (tmp_path / "game.json").write_text(json.dumps(raw), encoding="utf-8")
    return ContentService(tmp_path, get_paths().schema_dir)


def test_custom_config_is_loaded(tmp_path: Path) -> None:
    raw = {"markers": ["A", "B"], "target_score": 3, "computer_names": ["Deep Blue"], "center_priority": False}
    cfg = _service_with(tmp_path, raw).load_match_config()
    assert cfg == MatchConfig(markers=("A", "B"), target_score=3, computer_names=("Deep Blue",), center_priority=False)


@pytest.mark.parametrize(
    "raw",
    [
        {"markers": ["X", "X"], "target_score": 5, "computer_names": ["Hal"], "center_priority": True},
        {"markers": ["X"], "target_score": 5, "computer_names": ["Hal"], "center_priority": True},
        {"markers": ["XX", "O"], "target_score": 5, "computer_names": ["Hal"], "center_priority": True},
        {"markers": ["X", "O"], "target_score": 0, "computer_names": ["Hal"], "center_priority": True},
        {"markers": ["X", "O"], "target_score": 5, "computer_names": [], "center_priority": True},
        {"markers": ["X", "O"], "target_score": 5, "computer_names": ["Hal"]},
    ],
)
def test_bad_config_is_rejected(tmp_path: Path, raw: object) -> None:
    with pytest.raises(ContentError) as exc:
        _service_with(tmp_path, raw).load_match_config()
    assert "Schema validation failed" in str(exc.value)


def test_missing_and_malformed_files(tmp_path: Path) -> None:
    service = ContentService(tmp_path, get_paths().schema_dir)
    with pytest.raises(ContentError, match="Missing content file"):
        service.load_match_config()
    (tmp_path / "game.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError, match="Invalid JSON"):
        service.load_match_config()
