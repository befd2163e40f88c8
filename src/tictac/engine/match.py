from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Literal

from .ai import AISpec
from .board import Board
from .round import Event, RoundState, new_round, play_computer_turn, play_human_turn
from .types import (
    InvalidMarkerAssignment,
    InvalidMove,
    Marker,
    MatchOver,
    Player,
    Position,
    RoundInProgress,
    RoundOutcome,
)

HumanMoveSource = Callable[[Board], Position]
Side = Literal["human", "computer"]


@dataclass(frozen=True)
class MatchConfig:
    markers: tuple[Marker, Marker] = ("X", "O")
    target_score: int = 5
    computer_names: tuple[str, ...] = ("R2D2", "C3PO", "Hal")
    center_priority: bool = True

    def other_marker(self, marker: Marker) -> Marker:
        a, b = self.markers
        if marker == a:
            return b
        if marker == b:
            return a
        raise InvalidMarkerAssignment(f"Marker must be {a} or {b}, got {marker!r}.")


def _check_config(cfg: MatchConfig) -> None:
    a, b = cfg.markers
    if a == b:
        raise InvalidMarkerAssignment(f"Both markers are {a!r}.")
    if cfg.target_score < 1:
        raise ValueError("target_score must be at least 1.")
    if not cfg.computer_names:
        raise ValueError("computer_names must not be empty.")


class MatchController:
    """Plays rounds against the computer until one side reaches the target score.

    Scores survive between rounds and are only cleared by `reset_scores()`.
    The controller never restarts a finished match on its own.
    """

    def __init__(self, human_name: str, config: MatchConfig | None = None, seed: int | None = None) -> None:
        if not human_name.strip():
            raise ValueError("Human player needs a name.")
        self.config = config or MatchConfig()
        _check_config(self.config)

        self.seed = seed if seed is not None else random.randrange(1, 2**31 - 1)
        self.rng = random.Random(self.seed)
        self.ai_spec = AISpec(center_priority=self.config.center_priority)

        human_marker, computer_marker = self.config.markers
        self.board = Board()
        self.human = Player(name=human_name.strip(), marker=human_marker)
        self.computer = Player(name=self.rng.choice(self.config.computer_names), marker=computer_marker)
        self.first_marker: Marker = self.human.marker

        self._human_score = 0
        self._computer_score = 0
        self._rounds_played = 0
        self.round: RoundState | None = None
        self._round_scored = False
        self.event_log: list[Event] = []

    @property
    def human_score(self) -> int:
        return self._human_score

    @property
    def computer_score(self) -> int:
        return self._computer_score

    @property
    def rounds_played(self) -> int:
        return self._rounds_played

    @property
    def round_in_progress(self) -> bool:
        return self.round is not None and not self.round.is_over

    @property
    def is_over(self) -> bool:
        target = self.config.target_score
        return self._human_score >= target or self._computer_score >= target

    @property
    def overall_winner(self) -> Side | None:
        target = self.config.target_score
        if self._human_score >= target:
            return "human"
        if self._computer_score >= target:
            return "computer"
        return None

    def begin_round(self) -> RoundState:
        if self.round_in_progress:
            raise RoundInProgress("Finish the current round first.")
        if self.round is not None and not self._round_scored:
            raise RoundInProgress("Score the finished round first.")
        if self.is_over:
            raise MatchOver("Match already decided; reset scores to play again.")
        self.round = new_round(self.board, self.human, self.computer, self.first_marker)
        self._round_scored = False
        self.event_log.append(
            {"type": "ROUND_STARTED", "round": self._rounds_played + 1, "first_marker": self.first_marker}
        )
        return self.round

    def human_move(self, position: Position) -> None:
        play_human_turn(self._active_round(), position)

    def computer_move(self) -> Position:
        return play_computer_turn(self._active_round(), self.rng, self.ai_spec)

    def _active_round(self) -> RoundState:
        if self.round is None or self.round.is_over:
            raise InvalidMove("No round in progress.")
        return self.round

    def finish_round(self) -> RoundOutcome:
        state = self.round
        if state is None or state.outcome is None:
            raise RoundInProgress("Round has not finished yet.")
        if self._round_scored:
            raise RoundInProgress("Round was already scored.")
        self._round_scored = True
        if state.outcome == "human_won":
            self._human_score += 1
        elif state.outcome == "computer_won":
            self._computer_score += 1
        self._rounds_played += 1
        self.event_log.append(
            {
                "type": "ROUND_SCORED",
                "outcome": state.outcome,
                "human_score": self._human_score,
                "computer_score": self._computer_score,
            }
        )
        winner = self.overall_winner
        if winner is not None:
            self.event_log.append({"type": "MATCH_WON", "winner": winner})
        return state.outcome

    def play_round(self, human_moves: HumanMoveSource) -> RoundOutcome:
        """Run one full round, asking `human_moves` for each human turn.

        `human_moves` receives the board and must return one of
        `board.unmarked_positions()`.
        """
        state = self.begin_round()
        while not state.is_over:
            if state.phase == "human_turn":
                self.human_move(human_moves(self.board))
            else:
                self.computer_move()
        return self.finish_round()

    def reassign_markers(self, human_choice: Marker) -> None:
        if self.round_in_progress:
            raise InvalidMarkerAssignment("Markers can only change between rounds.")
        computer_marker = self.config.other_marker(human_choice)
        self.human.marker = human_choice
        self.computer.marker = computer_marker
        self.first_marker = human_choice
        self.event_log.append(
            {"type": "MARKERS_REASSIGNED", "human": human_choice, "computer": computer_marker}
        )

    def reset_scores(self) -> None:
        if self.round_in_progress:
            raise RoundInProgress("Cannot reset the match mid-round.")
        self._human_score = 0
        self._computer_score = 0
        self._rounds_played = 0
        self.round = None
        self.board.reset()
        self.event_log.append({"type": "SCORES_RESET"})
