from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Marker = str
Position = int

Phase = Literal["human_turn", "computer_turn", "round_over"]
RoundOutcome = Literal["human_won", "computer_won", "tie"]


class EngineError(RuntimeError):
    pass


class InvalidMove(EngineError):
    pass


class InvalidMarkerAssignment(EngineError):
    pass


class RoundInProgress(EngineError):
    pass


class MatchOver(EngineError):
    pass


class BoardAnomaly(EngineError):
    """Two different markers both own a completed line."""


@dataclass
class Cell:
    marker: Marker | None = None

    def is_empty(self) -> bool:
        return self.marker is None

    def mark(self, marker: Marker) -> None:
        if self.marker is not None:
            raise InvalidMove(f"Square already holds {self.marker}.")
        self.marker = marker

    def clear(self) -> None:
        self.marker = None


@dataclass
class Player:
    name: str
    marker: Marker
