"""Candidate generation: live cells ranked by attack and defense value."""

from __future__ import annotations

from typing import NamedTuple, Optional

from gobang.agent.patterns import PatternKind
from gobang.agent.threats import evaluate_point, live_points
from gobang.game.board import CENTER, Board
from gobang.game.types import Player, Point

ATTACK_WEIGHT = 1.0
DEFENSE_WEIGHT = 1.2   # blocking outranks extending
CENTER_WEIGHT = 2      # per step closer to the centre (Manhattan)

# Forced moves must survive any top-N slice
FOUR_ATTACK_BONUS = 2_000_000
FOUR_DEFENSE_BONUS = 1_500_000
THREE_ATTACK_BONUS = 60_000
THREE_DEFENSE_BONUS = 50_000


class Candidate(NamedTuple):
    point: Point
    score: float
    attack: int
    defense: int
    attack_level: PatternKind
    defense_level: PatternKind


def center_bonus(point: Point) -> int:
    return CENTER_WEIGHT * (2 * CENTER.x - abs(point.x - CENTER.x) - abs(point.y - CENTER.y))


def _forcing_bonus(level: PatternKind, four_bonus: int, three_bonus: int) -> int:
    if level >= PatternKind.SIMPLE_FOUR:
        return four_bonus
    if level >= PatternKind.OPEN_THREE:
        return three_bonus
    return 0


def score_point(board: Board, point: Point, player: Player) -> Candidate:
    attack = evaluate_point(board, point, player)
    defense = evaluate_point(board, point, player.other)
    score = (
        ATTACK_WEIGHT * attack.score
        + DEFENSE_WEIGHT * defense.score
        + center_bonus(point)
        + _forcing_bonus(attack.level, FOUR_ATTACK_BONUS, THREE_ATTACK_BONUS)
        + _forcing_bonus(defense.level, FOUR_DEFENSE_BONUS, THREE_DEFENSE_BONUS)
    )
    return Candidate(point, score, attack.score, defense.score, attack.level, defense.level)


def scored_candidates(board: Board, player: Player, limit: Optional[int] = None) -> list[Candidate]:
    """Live cells scored from `player`'s point of view, best first.

    Ties keep row-major scan order. Returns everything when `limit` is None.
    """
    scored = [score_point(board, point, player) for point in live_points(board)]
    scored.sort(key=lambda c: c.score, reverse=True)
    if limit is not None:
        return scored[:limit]
    return scored


def generate_candidates(board: Board, player: Player, limit: Optional[int] = None) -> list[Point]:
    """Ordered candidate points for `player`; empty list if the board has none."""
    return [c.point for c in scored_candidates(board, player, limit)]
