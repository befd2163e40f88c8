from __future__ import annotations

import pytest

from tictac.engine.board import Board
from tictac.engine.match import MatchConfig, MatchController
from tictac.engine.types import InvalidMarkerAssignment, InvalidMove, MatchOver, RoundInProgress


def _human_wins_round(match: MatchController) -> str:
    state = match.begin_round()
    h, c = match.human.marker, match.computer.marker
    for pos, marker in ((1, h), (4, c), (2, h), (7, c)):
        match.board.place(pos, marker)
    match.human_move(3)
    assert state.outcome == "human_won"
    return match.finish_round()


def _computer_wins_round(match: MatchController) -> str:
    state = match.begin_round()
    h, c = match.human.marker, match.computer.marker
    for pos, marker in ((4, c), (5, c), (1, h), (9, h)):
        match.board.place(pos, marker)
    match.human_move(3)
    assert match.computer_move() == 6
    assert state.outcome == "computer_won"
    return match.finish_round()


def _tied_round(match: MatchController) -> str:
    match.begin_round()
    h, c = match.human.marker, match.computer.marker
    for pos, marker in zip(range(1, 9), (h, c, h, h, c, c, c, h)):
        match.board.place(pos, marker)
    match.human_move(9)
    return match.finish_round()


def test_defaults() -> None:
    match = MatchController("Ada", seed=1)
    assert match.human.name == "Ada"
    assert match.human.marker == "X"
    assert match.computer.marker == "O"
    assert match.computer.name in ("R2D2", "C3PO", "Hal")
    assert match.first_marker == "X"
    assert (match.human_score, match.computer_score) == (0, 0)
    assert not match.is_over
    assert match.overall_winner is None


def test_blank_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        MatchController("   ")


def test_equal_markers_are_rejected() -> None:
    with pytest.raises(InvalidMarkerAssignment):
        MatchController("Ada", config=MatchConfig(markers=("X", "X")))


def test_three_human_wins_then_reset() -> None:
    match = MatchController("Ada", seed=3)
    for _ in range(3):
        assert _human_wins_round(match) == "human_won"
    assert match.human_score == 3
    assert match.computer_score == 0
    assert match.rounds_played == 3

    match.reset_scores()
    assert (match.human_score, match.computer_score) == (0, 0)
    assert match.rounds_played == 0
    assert match.board.unmarked_positions() == list(range(1, 10))


def test_computer_win_and_tie_scoring() -> None:
    match = MatchController("Ada", seed=3)
    assert _computer_wins_round(match) == "computer_won"
    assert _tied_round(match) == "tie"
    assert (match.human_score, match.computer_score) == (0, 1)
    assert match.rounds_played == 2


def test_scores_persist_across_rounds_and_marker_changes() -> None:
    match = MatchController("Ada", seed=3)
    _human_wins_round(match)
    match.reassign_markers("O")
    _human_wins_round(match)
    assert match.human_score == 2


def test_reassign_markers() -> None:
    match = MatchController("Ada", seed=5)
    match.reassign_markers("O")
    assert match.human.marker == "O"
    assert match.computer.marker == "X"
    assert match.human.marker != match.computer.marker
    assert match.first_marker == "O"
    state = match.begin_round()
    assert state.phase == "human_turn"

    with pytest.raises(InvalidMarkerAssignment):
        match.reassign_markers("X")
    assert match.human.marker == "O"


def test_unknown_marker_is_rejected() -> None:
    match = MatchController("Ada", seed=5)
    with pytest.raises(InvalidMarkerAssignment):
        match.reassign_markers("Z")
    assert (match.human.marker, match.computer.marker) == ("X", "O")


def test_round_lifecycle_guards() -> None:
    match = MatchController("Ada", seed=5)
    with pytest.raises(InvalidMove):
        match.human_move(1)

    match.begin_round()
    with pytest.raises(RoundInProgress):
        match.begin_round()
    with pytest.raises(RoundInProgress):
        match.finish_round()
    with pytest.raises(RoundInProgress):
        match.reset_scores()


def test_finished_round_is_scored_exactly_once() -> None:
    match = MatchController("Ada", seed=5)
    state = match.begin_round()
    for pos, marker in ((1, "X"), (4, "O"), (2, "X"), (7, "O")):
        match.board.place(pos, marker)
    match.human_move(3)
    assert state.is_over
    with pytest.raises(RoundInProgress):
        match.begin_round()
    match.finish_round()
    with pytest.raises(RoundInProgress):
        match.finish_round()
    assert match.human_score == 1


def test_match_ends_at_target_without_restarting() -> None:
    match = MatchController("Ada", config=MatchConfig(target_score=2), seed=9)
    _human_wins_round(match)
    assert not match.is_over
    _human_wins_round(match)
    assert match.is_over
    assert match.overall_winner == "human"
    assert match.event_log[-1] == {"type": "MATCH_WON", "winner": "human"}
    with pytest.raises(MatchOver):
        match.begin_round()

    match.reset_scores()
    assert not match.is_over
    match.begin_round()


def test_computer_reaching_target_wins_match() -> None:
    match = MatchController("Ada", config=MatchConfig(target_score=1), seed=9)
    _computer_wins_round(match)
    assert match.overall_winner == "computer"


def test_play_round_asks_for_human_moves_only_on_human_turns() -> None:
    match = MatchController("Ada", seed=11)
    asked: list[list[int]] = []

    def first_free(board: Board) -> int:
        free = board.unmarked_positions()
        asked.append(free)
        return free[0]

    outcome = match.play_round(first_free)
    state = match.round
    assert state is not None and state.is_over
    assert outcome == state.outcome
    human_moves = [p for m, p in state.move_log if m == match.human.marker]
    assert len(human_moves) == len(asked)
    assert match.rounds_played == 1
    assert match.human_score + match.computer_score == (0 if outcome == "tie" else 1)


def test_play_rounds_until_match_over() -> None:
    match = MatchController("Ada", config=MatchConfig(target_score=3), seed=21)
    rounds = 0
    while not match.is_over and rounds < 200:
        match.play_round(lambda board: board.unmarked_positions()[-1])
        rounds += 1
    assert match.is_over
    # human always takes the highest free square, so it never blocks 3-5-7
    assert rounds == 3
    assert (match.human_score, match.computer_score) == (0, 3)
    assert match.overall_winner == "computer"
