from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from .board import CENTER, Board
from .types import InvalidMove, Marker, Position

Rule = Callable[[Board, Marker, Marker, random.Random], "Position | None"]


@dataclass(frozen=True)
class AISpec:
    """Computer opponent tuning.

    center_priority:
      when False the center rule is skipped and the fallback picks at random
    """

    center_priority: bool = True


def offense(board: Board, me: Marker, opponent: Marker, rng: random.Random) -> Position | None:
    return board.find_two_in_a_row(me)


def defense(board: Board, me: Marker, opponent: Marker, rng: random.Random) -> Position | None:
    return board.find_two_in_a_row(opponent)


def center(board: Board, me: Marker, opponent: Marker, rng: random.Random) -> Position | None:
    return CENTER if board.center_is_empty() else None


def fallback(board: Board, me: Marker, opponent: Marker, rng: random.Random) -> Position | None:
    free = board.unmarked_positions()
    if not free:
        return None
    return rng.choice(free)


# Highest priority first.
RULES: tuple[tuple[str, Rule], ...] = (
    ("offense", offense),
    ("defense", defense),
    ("center", center),
    ("fallback", fallback),
)


def rules_for(spec: AISpec) -> tuple[tuple[str, Rule], ...]:
    if spec.center_priority:
        return RULES
    return tuple((name, rule) for name, rule in RULES if name != "center")


def choose_move(
    board: Board,
    me: Marker,
    opponent: Marker,
    rng: random.Random,
    spec: AISpec | None = None,
) -> tuple[str, Position]:
    """Return (rule name, position) from the first rule that yields a move.

    The fallback draws from `rng`, so a seeded RNG keeps play deterministic.
    """
    spec = spec or AISpec()
    for name, rule in rules_for(spec):
        pos = rule(board, me, opponent, rng)
        if pos is not None:
            return name, pos
    raise InvalidMove("No empty squares left for the computer.")
