"""Minimax with alpha-beta pruning over ranked candidates.

The board is explored in place: every child is visited inside
``board.stone(...)``, so the position is restored on every exit path,
including pruning breaks and budget aborts.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from gobang.agent.candidates import scored_candidates
from gobang.agent.evaluation import evaluate_board
from gobang.agent.patterns import PATTERN_SCORES, PatternKind
from gobang.game.board import Board
from gobang.game.types import Player, Point

logger = logging.getLogger(__name__)

WIN_SCORE = PATTERN_SCORES[PatternKind.FIVE] * 100
INF = math.inf


@dataclass
class SearchStats:
    """Counters for the UI. Never consulted by the search itself."""

    nodes: int = 0
    candidates: int = 0
    depth: int = 0
    elapsed: float = 0.0
    step: str = ""

    def reset(self) -> None:
        self.nodes = 0
        self.candidates = 0
        self.depth = 0
        self.elapsed = 0.0
        self.step = ""


class SearchBudgetExceeded(Exception):
    """Raised inside the tree when the node or time budget runs out."""


class SearchBudget:
    def __init__(self, max_nodes: Optional[int] = None, time_limit: Optional[float] = None) -> None:
        self.max_nodes = max_nodes
        self.time_limit = time_limit
        self._deadline: Optional[float] = None
        self._nodes = 0

    def start(self) -> None:
        self._nodes = 0
        self._deadline = (
            time.monotonic() + self.time_limit if self.time_limit is not None else None
        )

    def charge(self) -> None:
        self._nodes += 1
        if self.max_nodes is not None and self._nodes > self.max_nodes:
            raise SearchBudgetExceeded(f"node budget {self.max_nodes} exhausted")
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchBudgetExceeded(f"time budget {self.time_limit}s exhausted")


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    ai_player: Player,
    last_move: Optional[Point],
    search_limit: int,
    threat_terms: bool = False,
    stats: Optional[SearchStats] = None,
    budget: Optional[SearchBudget] = None,
) -> float:
    """Score the position for `ai_player` with `depth` plies left to search.

    `maximizing` is True when `ai_player` is to move. `last_move` is the
    stone just played, used to detect a completed five.
    """
    if stats is not None:
        stats.nodes += 1
    if budget is None:
        budget = SearchBudget()
    budget.charge()

    mover = ai_player if maximizing else ai_player.other

    # Terminal: the previous move completed five
    if last_move is not None and board.is_win(last_move, mover.other):
        return -WIN_SCORE - depth if maximizing else WIN_SCORE + depth

    scored = scored_candidates(board, mover)

    # Terminal: the side to move completes five next
    if any(c.attack_level is PatternKind.FIVE for c in scored):
        return WIN_SCORE + depth if maximizing else -WIN_SCORE - depth

    if depth == 0 or not scored:
        return evaluate_board(board, ai_player, threat_terms)

    children = scored[:search_limit]
    if stats is not None:
        stats.candidates += len(children)

    if maximizing:
        best = -INF
        for child in children:
            with board.stone(child.point, mover):
                score = minimax(board, depth - 1, alpha, beta, False, ai_player,
                                child.point, search_limit, threat_terms, stats, budget)
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = INF
    for child in children:
        with board.stone(child.point, mover):
            score = minimax(board, depth - 1, alpha, beta, True, ai_player,
                            child.point, search_limit, threat_terms, stats, budget)
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def search_best_move(
    board: Board,
    ai_player: Player,
    depth: int,
    candidate_limit: int,
    search_limit: int,
    threat_terms: bool = False,
    stats: Optional[SearchStats] = None,
    budget: Optional[SearchBudget] = None,
    candidates: Optional[Sequence[Point]] = None,
) -> Optional[Point]:
    """Best root move for `ai_player`, or None if there is nothing to search.

    Root moves are searched in candidate order; the first move with the
    highest score wins, so identical inputs always give the same move. If
    the budget runs out, the best move completed so far is returned.
    """
    if candidates is None:
        candidates = [c.point for c in scored_candidates(board, ai_player, candidate_limit)]
    if not candidates:
        return None

    if budget is None:
        budget = SearchBudget()
    budget.start()
    if stats is not None:
        stats.depth = depth + 1
        stats.candidates += len(candidates)

    best_move: Optional[Point] = None
    best_score = -INF
    try:
        for move in candidates:
            with board.stone(move, ai_player):
                if board.is_win(move, ai_player):
                    return move
                score = minimax(board, depth, best_score, INF, False, ai_player,
                                move, search_limit, threat_terms, stats, budget)
            if score > best_score:
                best_score = score
                best_move = move
    except SearchBudgetExceeded as exc:
        logger.warning("Search stopped early (%s); keeping best move so far", exc)

    if best_move is None:
        best_move = candidates[0]
    logger.debug("minimax picked %s (score=%s, depth=%d)", best_move, best_score, depth)
    return best_move
