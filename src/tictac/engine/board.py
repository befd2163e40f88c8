from __future__ import annotations

from .types import BoardAnomaly, Cell, InvalidMove, Marker, Position

POSITIONS: tuple[Position, ...] = tuple(range(1, 10))
CENTER: Position = 5

Line = tuple[Position, Position, Position]

# Scan order matters: two-in-a-row ties resolve to the first line listed.
WINNING_LINES: tuple[Line, ...] = (
    # rows
    (1, 2, 3),
    (4, 5, 6),
    (7, 8, 9),
    # columns
    (1, 4, 7),
    (2, 5, 8),
    (3, 6, 9),
    # diagonals
    (1, 5, 9),
    (3, 5, 7),
)


class Board:
    """3x3 grid of cells addressed 1-9, row-major."""

    def __init__(self) -> None:
        self._cells: dict[Position, Cell] = {p: Cell() for p in POSITIONS}

    def reset(self) -> None:
        for c in self._cells.values():
            c.clear()

    def _cell(self, position: Position) -> Cell:
        c = self._cells.get(position)
        if c is None:
            raise InvalidMove(f"No square {position!r}; choose 1-9.")
        return c

    def marker_at(self, position: Position) -> Marker | None:
        return self._cell(position).marker

    def markers(self) -> list[Marker | None]:
        return [self._cells[p].marker for p in POSITIONS]

    def unmarked_positions(self) -> list[Position]:
        return [p for p in POSITIONS if self._cells[p].is_empty()]

    def place(self, position: Position, marker: Marker) -> None:
        self._cell(position).mark(marker)

    def is_full(self) -> bool:
        return not self.unmarked_positions()

    def center_is_empty(self) -> bool:
        return self._cells[CENTER].is_empty()

    def _line_markers(self, line: Line) -> list[Marker | None]:
        return [self._cells[p].marker for p in line]

    def _completed_lines(self) -> list[tuple[Line, Marker]]:
        done: list[tuple[Line, Marker]] = []
        for line in WINNING_LINES:
            a, b, c = self._line_markers(line)
            if a is not None and a == b == c:
                done.append((line, a))
        return done

    def winning_marker(self) -> Marker | None:
        """Marker that completed a line, or None.

        Raises BoardAnomaly if lines are completed by both markers, a state
        alternating play cannot reach.
        """
        done = self._completed_lines()
        if not done:
            return None
        winners = {m for _, m in done}
        if len(winners) > 1:
            raise BoardAnomaly(f"Completed lines for several markers: {sorted(winners)}")
        return done[0][1]

    def winning_line(self) -> Line | None:
        done = self._completed_lines()
        return done[0][0] if done else None

    def has_winner(self) -> bool:
        return self.winning_marker() is not None

    def find_two_in_a_row(self, marker: Marker) -> Position | None:
        for line in WINNING_LINES:
            markers = self._line_markers(line)
            if markers.count(marker) == 2 and markers.count(None) == 1:
                return line[markers.index(None)]
        return None
