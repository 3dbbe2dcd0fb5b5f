from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .errors import CellOccupiedError, GameOverError, OutOfBoundsError
from .types import Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5
CENTER = Point(BOARD_SIZE // 2, BOARD_SIZE // 2)

# Column labels: A-O, rows are numbered 1-15 from the top
COL_LABELS = "ABCDEFGHIJKLMNO"

# Four axes: horizontal, vertical, diagonal, anti-diagonal
DIRECTIONS = [(1, 0), (0, 1), (1, 1), (1, -1)]


def parse_coordinate(text: str) -> Optional[Point]:
    """Parse a coordinate string like 'H8' or 'A15' into a Point.

    Column is a letter A-O, row is a number 1-15.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= BOARD_SIZE):
        return None
    return Point(COL_LABELS.index(col_char), row - 1)


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'H8'."""
    return f"{COL_LABELS[point.x]}{point.y + 1}"


def is_on_grid(point: Point) -> bool:
    return 0 <= point.x < BOARD_SIZE and 0 <= point.y < BOARD_SIZE


@dataclass
class Move:
    point: Point
    player: Player
    ply: int
    elapsed: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class Board:
    """15x15 board of cell states, indexed as grid[x][y]."""

    def __init__(self) -> None:
        self._grid: list[list[Optional[Player]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._count = 0

    def place(self, point: Point, player: Player) -> None:
        if not is_on_grid(point):
            raise OutOfBoundsError(point)
        if self._grid[point.x][point.y] is not None:
            raise CellOccupiedError(point, format_point(point))
        self._grid[point.x][point.y] = player
        self._count += 1

    def remove(self, point: Point) -> None:
        if not is_on_grid(point):
            raise OutOfBoundsError(point)
        if self._grid[point.x][point.y] is not None:
            self._grid[point.x][point.y] = None
            self._count -= 1

    @contextmanager
    def stone(self, point: Point, player: Player) -> Iterator[Point]:
        """Place a stone for the duration of the block, then retract it.

        The retract runs on every exit path, including exceptions raised by
        the search and early returns from inside the ``with`` block.
        """
        self.place(point, player)
        try:
            yield point
        finally:
            self.remove(point)

    def get(self, point: Point) -> Optional[Player]:
        return self._grid[point.x][point.y]

    def at(self, x: int, y: int) -> Optional[Player]:
        """Like get(), but returns None for off-board coordinates."""
        if 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE:
            return self._grid[x][y]
        return None

    def is_empty(self, point: Point) -> bool:
        return self._grid[point.x][point.y] is None

    def is_on_grid(self, point: Point) -> bool:
        return is_on_grid(point)

    @property
    def occupied_count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == BOARD_SIZE * BOARD_SIZE

    def stones(self) -> Iterator[tuple[Point, Player]]:
        for y in range(BOARD_SIZE):
            for x in range(BOARD_SIZE):
                player = self._grid[x][y]
                if player is not None:
                    yield Point(x, y), player

    def empty_points(self) -> Iterator[Point]:
        """Empty cells in row-major order (top row first, left to right)."""
        for y in range(BOARD_SIZE):
            for x in range(BOARD_SIZE):
                if self._grid[x][y] is None:
                    yield Point(x, y)

    def has_neighbor(self, point: Point, distance: int = 2) -> bool:
        """True if any stone lies within Chebyshev distance of `point`."""
        grid = self._grid
        x0, y0 = point
        for x in range(max(0, x0 - distance), min(BOARD_SIZE, x0 + distance + 1)):
            column = grid[x]
            for y in range(max(0, y0 - distance), min(BOARD_SIZE, y0 + distance + 1)):
                if column[y] is not None and (x != x0 or y != y0):
                    return True
        return False

    def winning_line(self, point: Point, player: Player) -> Optional[list[Point]]:
        """Return the run of `player` stones through `point` if it is 5 or longer.

        Runs longer than five also count. The returned line is ordered from
        one end to the other.
        """
        for dx, dy in DIRECTIONS:
            line = [point]
            x, y = point.x + dx, point.y + dy
            while self.at(x, y) is player:
                line.append(Point(x, y))
                x += dx
                y += dy
            x, y = point.x - dx, point.y - dy
            while self.at(x, y) is player:
                line.insert(0, Point(x, y))
                x -= dx
                y -= dy
            if len(line) >= WIN_LENGTH:
                return line
        return None

    def is_win(self, point: Point, player: Player) -> bool:
        return self.winning_line(point, player) is not None

    def cells(self) -> tuple[tuple[Optional[Player], ...], ...]:
        """Immutable snapshot of every cell, for exact before/after comparison."""
        return tuple(tuple(column) for column in self._grid)

    def copy(self) -> Board:
        other = Board()
        other._grid = [list(column) for column in self._grid]
        other._count = self._count
        return other

    def __str__(self) -> str:
        symbols = {None: ".", Player.BLACK: "X", Player.WHITE: "O"}
        rows = [
            " ".join(symbols[self._grid[x][y]] for x in range(BOARD_SIZE))
            for y in range(BOARD_SIZE)
        ]
        return "\n".join(rows)


class GomokuGameState:
    """Match session: one board, the side to move and the move history."""

    def __init__(self) -> None:
        self.board = Board()
        self.current_player = Player.BLACK
        self.moves: list[Move] = []
        self._winner: Optional[Player] = None
        self._winning_line: list[Point] = []
        self._is_over = False

    @classmethod
    def from_moves(cls, points: Sequence[Point]) -> GomokuGameState:
        """Replay `points` alternately, starting with Black."""
        game = cls()
        for point in points:
            game.apply_move(point)
        return game

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def winning_line(self) -> list[Point]:
        return list(self._winning_line)

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    @property
    def ply(self) -> int:
        return len(self.moves)

    def apply_move(self, point: Point, elapsed: Optional[float] = None) -> Move:
        """Place a stone for the current player and advance the turn."""
        if self._is_over:
            raise GameOverError()

        player = self.current_player
        self.board.place(point, player)
        move = Move(point=point, player=player, ply=len(self.moves), elapsed=elapsed)
        self.moves.append(move)

        line = self.board.winning_line(point, player)
        if line is not None:
            self._winner = player
            self._winning_line = line
            self._is_over = True
        elif self.board.is_full:
            self._is_over = True

        self.current_player = player.other
        return move

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.player
        self._winner = None
        self._winning_line = []
        self._is_over = False
        return move

    def resign(self, player: Player) -> None:
        self._winner = player.other
        self._winning_line = []
        self._is_over = True
