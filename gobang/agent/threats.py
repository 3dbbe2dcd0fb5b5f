"""Per-point threat evaluation and whole-board threat scans."""

from __future__ import annotations

from typing import NamedTuple, Optional

from gobang.agent.patterns import (
    BLOCKED,
    EMPTY,
    OWN,
    PATTERN_SCORES,
    PatternKind,
    classify,
)
from gobang.game.board import BOARD_SIZE, DIRECTIONS, Board
from gobang.game.types import Player, Point

# ---------------------------------------------------------------------------
# Compound-threat bonuses (added on top of the per-axis sum)
# ---------------------------------------------------------------------------

DOUBLE_FOUR_BONUS = 60_000    # two fours on different axes: cannot block both
FOUR_THREE_BONUS = 40_000     # a four plus an open three
DOUBLE_THREE_BONUS = 20_000   # two open threes

FOUR_KINDS = (PatternKind.OPEN_FOUR, PatternKind.SIMPLE_FOUR)
THREE_KINDS = (PatternKind.BROKEN_THREE, PatternKind.OPEN_THREE)


class PointEvaluation(NamedTuple):
    score: int
    level: PatternKind
    fours: int    # axes reaching a four (open or simple)
    threes: int   # axes reaching an open or broken three

    @property
    def is_double_four(self) -> bool:
        return self.fours >= 2

    @property
    def is_four_three(self) -> bool:
        return self.fours >= 1 and self.threes >= 1

    @property
    def is_double_three(self) -> bool:
        return self.threes >= 2

    @property
    def is_compound(self) -> bool:
        return self.is_double_four or self.is_four_three or self.is_double_three


class Threat(NamedTuple):
    point: Point
    level: PatternKind
    score: int


EMPTY_EVALUATION = PointEvaluation(0, PatternKind.NONE, 0, 0)


def line_window(board: Board, point: Point, dx: int, dy: int, player: Player) -> tuple[int, ...]:
    """The 9 cells along (dx, dy) centred on `point`, relative to `player`.

    Off-board cells are BLOCKED, exactly like opponent stones.
    """
    cells = []
    for step in range(-4, 5):
        x, y = point.x + dx * step, point.y + dy * step
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            cells.append(BLOCKED)
            continue
        stone = board.at(x, y)
        if stone is None:
            cells.append(EMPTY)
        elif stone is player:
            cells.append(OWN)
        else:
            cells.append(BLOCKED)
    return tuple(cells)


def evaluate_line(board: Board, point: Point, dx: int, dy: int, player: Player) -> PatternKind:
    return classify(line_window(board, point, dx, dy, player)).kind


def evaluate_point(board: Board, point: Point, player: Player) -> PointEvaluation:
    """Score `point` for `player`: the 4-axis pattern sum plus compound bonuses.

    An occupied point always scores zero.
    """
    if not board.is_empty(point):
        return EMPTY_EVALUATION

    score = 0
    level = PatternKind.NONE
    fours = threes = 0
    for dx, dy in DIRECTIONS:
        kind = evaluate_line(board, point, dx, dy, player)
        score += PATTERN_SCORES[kind]
        if kind > level:
            level = kind
        if kind in FOUR_KINDS:
            fours += 1
        elif kind in THREE_KINDS:
            threes += 1

    if fours >= 2:
        score += DOUBLE_FOUR_BONUS
    if fours >= 1 and threes >= 1:
        score += FOUR_THREE_BONUS
    if threes >= 2:
        score += DOUBLE_THREE_BONUS

    return PointEvaluation(score, level, fours, threes)


# ---------------------------------------------------------------------------
# Whole-board scans (row-major order; first hit wins)
# ---------------------------------------------------------------------------

def live_points(board: Board, distance: int = 2) -> list[Point]:
    """Empty cells within `distance` of a stone, in row-major order."""
    return [p for p in board.empty_points() if board.has_neighbor(p, distance)]


def find_critical_threats(
    board: Board, player: Player, min_level: PatternKind
) -> list[Threat]:
    """All live cells where `player` reaches at least `min_level`.

    Sorted by (level, score) descending; equal keys keep scan order.
    """
    threats = []
    for point in live_points(board):
        ev = evaluate_point(board, point, player)
        if ev.level >= min_level:
            threats.append(Threat(point, ev.level, ev.score))
    threats.sort(key=lambda t: (t.level, t.score), reverse=True)
    return threats


def _first_point(board: Board, player: Player, test) -> Optional[Point]:
    for point in live_points(board):
        if test(evaluate_point(board, point, player)):
            return point
    return None


def find_immediate_win(board: Board, player: Player) -> Optional[Point]:
    """First cell where `player` completes five (or more) in a row."""
    return _first_point(board, player, lambda ev: ev.level is PatternKind.FIVE)


def winning_points(board: Board, player: Player) -> list[Point]:
    """Every cell where `player` would complete five, in scan order."""
    return [
        point for point in live_points(board)
        if evaluate_point(board, point, player).level is PatternKind.FIVE
    ]


def find_open_four(board: Board, player: Player) -> Optional[Point]:
    return _first_point(board, player, lambda ev: ev.level is PatternKind.OPEN_FOUR)


def find_double_simple_four(board: Board, player: Player) -> Optional[Point]:
    return _first_point(
        board, player, lambda ev: ev.level < PatternKind.FIVE and ev.is_double_four
    )


def find_four_three_combo(board: Board, player: Player) -> Optional[Point]:
    return _first_point(
        board, player, lambda ev: ev.level < PatternKind.FIVE and ev.is_four_three
    )


def find_double_open_three(board: Board, player: Player) -> Optional[Point]:
    return _first_point(
        board, player, lambda ev: ev.level < PatternKind.FIVE and ev.is_double_three
    )


def find_compound_threat(board: Board, player: Player) -> Optional[Point]:
    """Strongest compound shape available: double four, then four-three, then double three."""
    return (
        find_double_simple_four(board, player)
        or find_four_three_combo(board, player)
        or find_double_open_three(board, player)
    )
