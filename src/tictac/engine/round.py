from __future__ import annotations

import random
from dataclasses import dataclass, field

from .ai import AISpec, choose_move
from .board import Board
from .types import InvalidMove, Marker, Phase, Player, Position, RoundOutcome

Event = dict[str, object]


@dataclass
class RoundState:
    board: Board
    human: Player
    computer: Player
    current_marker: Marker
    phase: Phase
    outcome: RoundOutcome | None = None
    move_log: list[tuple[Marker, Position]] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.phase == "round_over"

    def player_for(self, marker: Marker) -> Player:
        return self.human if marker == self.human.marker else self.computer


def _phase_for(state: RoundState, marker: Marker) -> Phase:
    return "human_turn" if marker == state.human.marker else "computer_turn"


def _resolve_outcome(state: RoundState) -> RoundOutcome:
    winner = state.board.winning_marker()
    if winner == state.human.marker:
        return "human_won"
    if winner == state.computer.marker:
        return "computer_won"
    return "tie"


def _apply(state: RoundState, position: Position, rule: str | None = None) -> None:
    marker = state.current_marker
    state.board.place(position, marker)
    state.move_log.append((marker, position))
    ev: Event = {
        "type": "MOVE_PLAYED",
        "player": state.player_for(marker).name,
        "marker": marker,
        "position": position,
    }
    if rule is not None:
        ev["rule"] = rule
    state.event_log.append(ev)

    if state.board.has_winner() or state.board.is_full():
        state.phase = "round_over"
        state.outcome = _resolve_outcome(state)
        state.event_log.append({"type": "ROUND_ENDED", "outcome": state.outcome})
        return

    nxt = state.computer.marker if marker == state.human.marker else state.human.marker
    state.current_marker = nxt
    state.phase = _phase_for(state, nxt)


def new_round(board: Board, human: Player, computer: Player, first_marker: Marker) -> RoundState:
    board.reset()
    state = RoundState(
        board=board,
        human=human,
        computer=computer,
        current_marker=first_marker,
        phase="human_turn",
    )
    state.phase = _phase_for(state, first_marker)
    return state


def play_human_turn(state: RoundState, position: Position) -> Phase:
    """Play an already-validated human move and return the new phase."""
    if state.phase != "human_turn":
        raise InvalidMove(f"Not the human's turn ({state.phase}).")
    if position not in state.board.unmarked_positions():
        raise InvalidMove(f"Square {position!r} is not available.")
    _apply(state, position)
    return state.phase


def play_computer_turn(state: RoundState, rng: random.Random, spec: AISpec | None = None) -> Position:
    if state.phase != "computer_turn":
        raise InvalidMove(f"Not the computer's turn ({state.phase}).")
    rule, position = choose_move(
        state.board,
        me=state.computer.marker,
        opponent=state.human.marker,
        rng=rng,
        spec=spec,
    )
    _apply(state, position, rule=rule)
    return position
