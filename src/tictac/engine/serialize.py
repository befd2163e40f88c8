from __future__ import annotations

from .match import MatchController
from .round import RoundState
from .types import Player


def _player_to_dict(p: Player) -> dict[str, object]:
    return {"name": p.name, "marker": p.marker}


def round_snapshot(state: RoundState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of one round."""
    return {
        "board": state.board.markers(),
        "current_marker": state.current_marker,
        "phase": state.phase,
        "outcome": state.outcome,
        "moves": [[marker, pos] for marker, pos in state.move_log],
    }


def match_snapshot(match: MatchController) -> dict[str, object]:
    return {
        "seed": match.seed,
        "human": _player_to_dict(match.human),
        "computer": _player_to_dict(match.computer),
        "first_marker": match.first_marker,
        "human_score": match.human_score,
        "computer_score": match.computer_score,
        "rounds_played": match.rounds_played,
        "target_score": match.config.target_score,
        "round": round_snapshot(match.round) if match.round is not None else None,
        "winner": match.overall_winner,
    }
