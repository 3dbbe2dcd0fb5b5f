"""Forcing-sequence search: VCF (continuous fours) and VCT (continuous threats).

Both return the first move of a forced win, or None when none is found
within the depth and branching bounds. None is an ordinary answer, not an
error; callers fall through to their next policy step.
"""

from __future__ import annotations

import logging
from typing import Optional

from gobang.agent.patterns import PatternKind
from gobang.agent.search import SearchBudget, SearchBudgetExceeded, SearchStats
from gobang.agent.threats import (
    evaluate_point,
    find_critical_threats,
    find_immediate_win,
    winning_points,
)
from gobang.game.board import Board
from gobang.game.types import Player, Point

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 10


def _forcing_moves(board: Board, attacker: Player, min_level: PatternKind, branch: int) -> list[Point]:
    """Moves reaching `min_level` (but not five), most forcing first."""
    threats = find_critical_threats(board, attacker, min_level)
    return [t.point for t in threats if t.level < PatternKind.FIVE][:branch]


def _count(stats: Optional[SearchStats], budget: SearchBudget) -> None:
    if stats is not None:
        stats.nodes += 1
    budget.charge()


# ---------------------------------------------------------------------------
# VCF
# ---------------------------------------------------------------------------

def find_vcf(
    board: Board,
    attacker: Player,
    depth: int,
    branch: int = DEFAULT_BRANCH,
    stats: Optional[SearchStats] = None,
    budget: Optional[SearchBudget] = None,
) -> Optional[Point]:
    """First move of a win forced purely by fours, searching `depth` attacker moves."""
    if depth <= 0:
        return None
    if budget is None:
        budget = SearchBudget()

    win = find_immediate_win(board, attacker)
    if win is not None:
        return win

    defender = attacker.other
    for move in _forcing_moves(board, attacker, PatternKind.SIMPLE_FOUR, branch):
        _count(stats, budget)
        with board.stone(move, attacker):
            if board.is_win(move, attacker):
                return move
            # A four is no threat if the defender simply wins first
            if find_immediate_win(board, defender) is not None:
                continue
            blocks = winning_points(board, attacker)
            if not blocks:
                continue
            if len(blocks) >= 2:
                return move
            if _wins_against_every_block(board, attacker, blocks, depth, branch, stats, budget):
                return move
    return None


def _wins_against_every_block(
    board: Board,
    attacker: Player,
    blocks: list[Point],
    depth: int,
    branch: int,
    stats: Optional[SearchStats],
    budget: SearchBudget,
) -> bool:
    defender = attacker.other
    for block in blocks:
        _count(stats, budget)
        with board.stone(block, defender):
            if board.is_win(block, defender):
                return False
            if find_vcf(board, attacker, depth - 1, branch, stats, budget) is None:
                return False
    return True


# ---------------------------------------------------------------------------
# VCT
# ---------------------------------------------------------------------------

def find_vct(
    board: Board,
    attacker: Player,
    depth: int,
    branch: int = DEFAULT_BRANCH,
    stats: Optional[SearchStats] = None,
    budget: Optional[SearchBudget] = None,
) -> Optional[Point]:
    """First move of a win forced by threes and fours.

    A move succeeds at once if it forms an open four, a double four, a
    four-three or a double open three. A plain three or four succeeds only
    if the attacker still wins after every reply that stops it. A three is
    never forcing while the defender can make a four of its own.
    """
    if depth <= 0:
        return None
    if budget is None:
        budget = SearchBudget()

    win = find_immediate_win(board, attacker)
    if win is not None:
        return win

    defender = attacker.other
    for move in _forcing_moves(board, attacker, PatternKind.OPEN_THREE, branch):
        _count(stats, budget)
        shape = evaluate_point(board, move, attacker)
        with board.stone(move, attacker):
            if find_immediate_win(board, defender) is not None:
                continue
            fives = winning_points(board, attacker)
            if len(fives) >= 2:
                return move
            # Without a five threat pending, the defender may answer with a four
            if not fives and _can_make_four(board, defender):
                continue
            if shape.is_compound:
                return move
            if depth > 1 and _wins_against_every_defense(
                board, attacker, fives, depth, branch, stats, budget
            ):
                return move
    return None


def _can_make_four(board: Board, player: Player) -> bool:
    return bool(find_critical_threats(board, player, PatternKind.SIMPLE_FOUR))


def _defenses(board: Board, attacker: Player, fives: list[Point]) -> list[Point]:
    """Replies that stop the attacker's last threat.

    A pending five has to be blocked where it completes. A three can be
    stopped on any cell where the attacker would reach a four.
    """
    if fives:
        return fives
    return [t.point for t in find_critical_threats(board, attacker, PatternKind.SIMPLE_FOUR)]


def _wins_against_every_defense(
    board: Board,
    attacker: Player,
    fives: list[Point],
    depth: int,
    branch: int,
    stats: Optional[SearchStats],
    budget: SearchBudget,
) -> bool:
    defender = attacker.other
    defenses = _defenses(board, attacker, fives)
    if not defenses:
        return False
    for reply in defenses:
        _count(stats, budget)
        with board.stone(reply, defender):
            if board.is_win(reply, defender):
                return False
            if find_vct(board, attacker, depth - 1, branch, stats, budget) is None:
                return False
    return True


def find_forced_win(
    board: Board,
    attacker: Player,
    vcf_depth: int,
    vct_depth: int,
    branch: int = DEFAULT_BRANCH,
    stats: Optional[SearchStats] = None,
    budget: Optional[SearchBudget] = None,
) -> Optional[Point]:
    """VCF first (cheaper and exact within its bounds), then VCT.

    Each search gets a fresh run of `budget`; running out counts as "no
    forced win found".
    """
    if budget is None:
        budget = SearchBudget()
    for name, search, depth in (("VCF", find_vcf, vcf_depth), ("VCT", find_vct, vct_depth)):
        budget.start()
        try:
            move = search(board, attacker, depth, branch, stats, budget)
        except SearchBudgetExceeded as exc:
            logger.debug("%s search gave up: %s", name, exc)
            continue
        if move is not None:
            logger.debug("%s found %s for %s", name, move, attacker)
            return move
    return None
