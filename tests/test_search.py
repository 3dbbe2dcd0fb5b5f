"""Tests for minimax with alpha-beta and the search budget."""

import pytest

from gobang.agent import search
from gobang.agent.search import (
    INF,
    WIN_SCORE,
    SearchBudget,
    SearchBudgetExceeded,
    SearchStats,
    minimax,
    search_best_move,
)
from gobang.game.board import Board
from gobang.game.types import Player, Point

B, W = Player.BLACK, Player.WHITE


def board_with(black=(), white=()) -> Board:
    board = Board()
    for xy in black:
        board.place(Point(*xy), B)
    for xy in white:
        board.place(Point(*xy), W)
    return board


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

class TestSearchBudget:
    def test_node_limit(self):
        budget = SearchBudget(max_nodes=2)
        budget.start()
        budget.charge()
        budget.charge()
        with pytest.raises(SearchBudgetExceeded):
            budget.charge()

    def test_start_resets_the_count(self):
        budget = SearchBudget(max_nodes=1)
        budget.start()
        budget.charge()
        budget.start()
        budget.charge()

    def test_expired_deadline(self):
        budget = SearchBudget(time_limit=-1.0)
        budget.start()
        with pytest.raises(SearchBudgetExceeded):
            budget.charge()

    def test_unbounded(self):
        budget = SearchBudget()
        budget.start()
        for _ in range(1000):
            budget.charge()

    def test_stats_reset(self):
        stats = SearchStats(nodes=5, candidates=3, depth=2, elapsed=1.5, step="minimax")
        stats.reset()
        assert stats == SearchStats()

    def test_no_module_level_budget(self):
        assert not any(isinstance(value, SearchBudget) for value in vars(search).values())
        board = board_with(black=[(7, 7)], white=[(8, 8)])
        scores = [minimax(board, 1, -INF, INF, True, B, Point(8, 8), 6) for _ in range(2)]
        assert scores[0] == scores[1]


# ---------------------------------------------------------------------------
# Minimax
# ---------------------------------------------------------------------------

class TestMinimax:
    def test_completed_five_is_terminal(self):
        board = board_with(black=[(3, 7), (4, 7), (5, 7), (6, 7), (7, 7)])
        stats = SearchStats()
        score = minimax(board, 2, -INF, INF, False, B, Point(7, 7), 8, stats=stats)
        assert score == WIN_SCORE + 2
        assert stats.nodes == 1

    def test_completed_five_against_us(self):
        board = board_with(white=[(3, 7), (4, 7), (5, 7), (6, 7), (7, 7)])
        score = minimax(board, 1, -INF, INF, True, B, Point(7, 7), 8)
        assert score == -WIN_SCORE - 1

    def test_side_to_move_with_five_wins(self):
        board = board_with(black=[(4, 7), (5, 7), (6, 7), (7, 7)], white=[(0, 0)])
        assert minimax(board, 1, -INF, INF, True, B, None, 8) == WIN_SCORE + 1
        assert minimax(board, 1, -INF, INF, False, W, None, 8) == -WIN_SCORE - 1

    def test_depth_zero_is_static(self):
        board = board_with(black=[(7, 7)], white=[(8, 8)])
        score = minimax(board, 0, -INF, INF, True, B, None, 8)
        assert -WIN_SCORE < score < WIN_SCORE

    def test_restores_board(self):
        board = board_with(black=[(7, 7), (8, 7)], white=[(7, 8), (8, 8)])
        before = board.cells()
        minimax(board, 2, -INF, INF, True, B, None, 4)
        assert board.cells() == before


# ---------------------------------------------------------------------------
# Root search
# ---------------------------------------------------------------------------

class TestSearchBestMove:
    def test_empty_board_returns_none(self):
        assert search_best_move(Board(), B, depth=1, candidate_limit=10, search_limit=8) is None

    def test_takes_the_win(self):
        board = board_with(black=[(4, 7), (5, 7), (6, 7), (7, 7)], white=[(3, 7), (7, 8), (6, 8)])
        move = search_best_move(board, B, depth=1, candidate_limit=10, search_limit=8)
        assert move == Point(8, 7)

    def test_blocks_a_four(self):
        board = board_with(black=[(3, 5), (9, 9), (10, 10)], white=[(4, 5), (5, 5), (6, 5), (7, 5)])
        move = search_best_move(board, B, depth=1, candidate_limit=10, search_limit=8)
        assert move == Point(8, 5)

    def test_deterministic_and_side_effect_free(self):
        board = board_with(black=[(7, 7), (8, 8)], white=[(7, 8), (6, 6)])
        before = board.cells()
        first = search_best_move(board, W, depth=1, candidate_limit=8, search_limit=6)
        second = search_best_move(board, W, depth=1, candidate_limit=8, search_limit=6)
        assert first == second
        assert board.is_empty(first)
        assert board.cells() == before

    def test_exhausted_budget_falls_back_to_first_candidate(self):
        board = board_with(black=[(7, 7)], white=[(8, 8)])
        before = board.cells()
        candidates = [Point(6, 6), Point(9, 9)]
        move = search_best_move(
            board, B, depth=2, candidate_limit=10, search_limit=8,
            budget=SearchBudget(max_nodes=0), candidates=candidates,
        )
        assert move == Point(6, 6)
        assert board.cells() == before

    def test_stats_are_filled(self):
        board = board_with(black=[(7, 7)], white=[(8, 8)])
        stats = SearchStats()
        search_best_move(board, B, depth=1, candidate_limit=5, search_limit=4, stats=stats)
        assert stats.nodes > 0
        assert stats.depth == 2
        assert stats.candidates >= 5
