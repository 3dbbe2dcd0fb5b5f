"""Static board evaluation from the computer player's point of view."""

from __future__ import annotations

from gobang.agent.patterns import PatternKind
from gobang.agent.threats import THREE_KINDS, evaluate_point, live_points
from gobang.game.board import BOARD_SIZE, CENTER, DIRECTIONS, Board
from gobang.game.types import Player, Point

RESIDUAL_ATTACK_WEIGHT = 0.8
CENTRALITY_WEIGHT = 1

# (open four, simple four, open three) weights for the threat-count terms.
# The opponent's unanswered threats cost more than our own unplayed ones.
OWN_THREAT_WEIGHTS = (30_000, 6_000, 3_000)
OPPONENT_THREAT_WEIGHTS = (60_000, 12_000, 6_000)


def position_value(board: Board, point: Point, player: Player) -> int:
    """Value of the stone at `point`: sum over axes of count^2 * (2 - blocked ends)."""
    value = 0
    for dx, dy in DIRECTIONS:
        count = 1
        blocked = 0
        for sign in (1, -1):
            for step in range(1, 5):
                x, y = point.x + sign * dx * step, point.y + sign * dy * step
                if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
                    blocked += 1
                    break
                stone = board.at(x, y)
                if stone is player:
                    count += 1
                    continue
                if stone is not None:
                    blocked += 1
                break
        if blocked < 2:
            value += count * count * (2 - blocked)
    return value


def centrality(point: Point) -> int:
    return CENTRALITY_WEIGHT * (2 * CENTER.x - abs(point.x - CENTER.x) - abs(point.y - CENTER.y))


def _threat_term(counts: list[int], weights: tuple[int, int, int]) -> int:
    return sum(c * w for c, w in zip(counts, weights))


def evaluate_board(board: Board, player: Player, threat_terms: bool = False) -> float:
    """Positive when `player` stands better.

    Stones contribute their position value and centrality, signed by owner.
    Live empty cells contribute `0.8 * attack - defense`. With
    `threat_terms`, the number of open fours, simple fours and open threes
    each side could make is weighted in as well.
    """
    opponent = player.other
    score = 0.0

    for point, owner in board.stones():
        value = position_value(board, point, owner) + centrality(point)
        score += value if owner is player else -value

    own_counts = [0, 0, 0]
    opp_counts = [0, 0, 0]
    for point in live_points(board):
        attack = evaluate_point(board, point, player)
        defense = evaluate_point(board, point, opponent)
        score += RESIDUAL_ATTACK_WEIGHT * attack.score - defense.score
        if threat_terms:
            _tally(own_counts, attack.level)
            _tally(opp_counts, defense.level)

    if threat_terms:
        score += _threat_term(own_counts, OWN_THREAT_WEIGHTS)
        score -= _threat_term(opp_counts, OPPONENT_THREAT_WEIGHTS)

    return score


def _tally(counts: list[int], level: PatternKind) -> None:
    if level is PatternKind.OPEN_FOUR:
        counts[0] += 1
    elif level is PatternKind.SIMPLE_FOUR:
        counts[1] += 1
    elif level in THREE_KINDS:
        counts[2] += 1
