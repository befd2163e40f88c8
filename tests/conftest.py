from __future__ import annotations

from tictac.engine.board import Board


def board_from(layout: str) -> Board:
    """Build a board from 9 characters, row-major; '.' is an empty square."""
    assert len(layout) == 9
    board = Board()
    for pos, ch in enumerate(layout, start=1):
        if ch != ".":
            board.place(pos, ch)
    return board
