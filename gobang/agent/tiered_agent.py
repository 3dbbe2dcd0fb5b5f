"""Move selection for the four difficulty tiers.

Every tier runs the same ordered cascade; a tier only switches steps on or
off and scales the search behind them. First match wins:

  1. complete our own five
  2. block the opponent's five
  3. make an open four                      (Medium+)
  4. block the opponent's open four point   (Medium+)
  5. make a double four / four-three / double three (Hard+)
  6. block the opponent's compound point    (Hard+)
  7. VCF, then VCT forced win               (Hell)
  8. minimax over ranked candidates, or greedy scoring for Easy
"""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from gobang.agent.base import Agent
from gobang.agent.config import OPENING_BOOK, TierConfig, tier_config
from gobang.agent.forcing import find_forced_win
from gobang.agent.search import SearchBudget, SearchStats, search_best_move
from gobang.agent.threats import (
    evaluate_point,
    find_compound_threat,
    find_immediate_win,
    find_open_four,
    live_points,
)
from gobang.game.board import CENTER, Board, GomokuGameState
from gobang.game.types import Difficulty, Player, Point

logger = logging.getLogger(__name__)

# Easy tier scoring: attack + 0.8 * defense
EASY_DEFENSE_WEIGHT = 0.8


class TieredAgent(Agent):
    """Computer opponent for one difficulty tier."""

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.HARD,
        config: Optional[TierConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.difficulty = difficulty
        self.config = config if config is not None else tier_config(difficulty)
        self.rng = random.Random(seed)
        self.last_stats = SearchStats()

    @property
    def name(self) -> str:
        return f"{self.difficulty} AI"

    def select_move(self, game_state: GomokuGameState) -> Point:
        stats = self.last_stats
        stats.reset()
        t0 = time.perf_counter()

        move, step = self._decide(game_state, stats)

        stats.step = step
        stats.elapsed = time.perf_counter() - t0
        logger.debug(
            "%s plays %s via %s (nodes=%d, %.3fs)",
            self.name, move, step, stats.nodes, stats.elapsed,
        )
        return move

    # ------------------------------------------------------------------
    # Cascade
    # ------------------------------------------------------------------

    def _decide(self, game_state: GomokuGameState, stats: SearchStats) -> tuple[Point, str]:
        cfg = self.config
        # Work on a private copy so the caller's board is never touched
        board = game_state.board.copy()
        me = game_state.current_player
        opponent = me.other

        if board.occupied_count == 0:
            return CENTER, "opening"

        if cfg.opening_book and game_state.ply == 1:
            reply = OPENING_BOOK.get(game_state.moves[0].point)
            if reply is not None and board.is_empty(reply):
                return reply, "opening-book"

        steps = [
            (True, "win", lambda: find_immediate_win(board, me)),
            (True, "block-five", lambda: find_immediate_win(board, opponent)),
            (cfg.take_open_four, "open-four", lambda: find_open_four(board, me)),
            (cfg.block_open_four, "block-open-four", lambda: find_open_four(board, opponent)),
            (cfg.take_compound, "compound", lambda: find_compound_threat(board, me)),
            (cfg.block_compound, "block-compound", lambda: find_compound_threat(board, opponent)),
            (cfg.forcing_search, "forced-win", lambda: self._forced_win(board, me, stats)),
        ]
        for enabled, step, find in steps:
            if not enabled:
                continue
            move = find()
            if move is not None:
                return move, step

        if cfg.greedy_only:
            move = self._greedy_move(board, me, stats)
            step = "greedy"
        else:
            budget = SearchBudget(cfg.max_nodes, cfg.time_limit)
            move = search_best_move(
                board, me,
                depth=cfg.search_depth,
                candidate_limit=cfg.candidate_limit,
                search_limit=cfg.search_limit,
                threat_terms=cfg.threat_terms,
                stats=stats,
                budget=budget,
            )
            step = "minimax"

        if move is None:
            return _fallback(board), "fallback"
        return move, step

    def _forced_win(self, board: Board, me: Player, stats: SearchStats) -> Optional[Point]:
        cfg = self.config
        return find_forced_win(
            board, me,
            vcf_depth=cfg.vcf_depth,
            vct_depth=cfg.vct_depth,
            branch=cfg.forcing_branch,
            stats=stats,
            budget=SearchBudget(cfg.forcing_nodes),
        )

    def _greedy_move(self, board: Board, me: Player, stats: SearchStats) -> Optional[Point]:
        """Highest attack + 0.8 * defense, sometimes a random pick from the top few."""
        scored = []
        for point in live_points(board):
            stats.nodes += 1
            attack = evaluate_point(board, point, me).score
            defense = evaluate_point(board, point, me.other).score
            scored.append((attack + EASY_DEFENSE_WEIGHT * defense, point))
        if not scored:
            return None
        stats.candidates = len(scored)
        scored.sort(key=lambda item: item[0], reverse=True)
        if self.rng.random() < self.config.random_chance:
            top = scored[: self.config.random_top_n]
            return self.rng.choice(top)[1]
        return scored[0][1]


def _fallback(board: Board) -> Point:
    """Centre if free, otherwise the first empty cell; centre on a full board."""
    if board.is_empty(CENTER):
        return CENTER
    return next(board.empty_points(), CENTER)
