"""Tests for the four-tier move selector."""

import pytest

from gobang.agent.config import OPENING_BOOK, TIER_CONFIGS, tier_config
from gobang.agent.tiered_agent import TieredAgent, _fallback
from gobang.game.board import BOARD_SIZE, CENTER, Board, GomokuGameState
from gobang.game.types import Difficulty, Player, Point

ALL_TIERS = list(Difficulty)
CORNERS = [(0, 0), (14, 0), (0, 14), (14, 14)]


def position(black, white) -> GomokuGameState:
    """Replay Black and White stones alternately; Black must not be behind."""
    assert len(black) in (len(white), len(white) + 1)
    points = []
    for i, b in enumerate(black):
        points.append(Point(*b))
        if i < len(white):
            points.append(Point(*white[i]))
    return GomokuGameState.from_moves(points)


def fast_agent(difficulty: Difficulty, **overrides) -> TieredAgent:
    """Agent with a shallow search so tests stay quick."""
    overrides.setdefault("search_depth", 1)
    return TieredAgent(difficulty, config=tier_config(difficulty, **overrides), seed=0)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:
    def test_every_tier_has_a_preset(self):
        assert set(TIER_CONFIGS) == set(Difficulty)

    def test_tiers_only_add_steps(self):
        easy, medium, hard, hell = (TIER_CONFIGS[d] for d in ALL_TIERS)
        assert easy.greedy_only and not medium.greedy_only
        assert medium.take_open_four and not medium.take_compound
        assert hard.take_compound and not hard.forcing_search
        assert hell.forcing_search and hell.opening_book
        assert medium.search_depth <= hard.search_depth <= hell.search_depth

    def test_overrides(self):
        cfg = tier_config(Difficulty.HELL, search_depth=1)
        assert cfg.search_depth == 1
        assert cfg.forcing_search
        assert TIER_CONFIGS[Difficulty.HELL].search_depth != 1

    def test_unknown_override_rejected(self):
        with pytest.raises(TypeError):
            tier_config(Difficulty.EASY, no_such_field=1)

    def test_opening_book_replies_are_legal(self):
        for first, reply in OPENING_BOOK.items():
            assert first != reply
            assert 0 <= reply.x < BOARD_SIZE and 0 <= reply.y < BOARD_SIZE


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

class TestCascade:
    def test_opening_move_is_center(self):
        for difficulty in ALL_TIERS:
            agent = fast_agent(difficulty)
            assert agent.select_move(GomokuGameState()) == CENTER
            assert agent.last_stats.step == "opening"

    @pytest.mark.parametrize("difficulty", ALL_TIERS)
    def test_every_tier_takes_the_win(self, difficulty):
        game = position(
            black=[(5, 7), (6, 7), (7, 7), (8, 7), (10, 12)],
            white=[(4, 7), (0, 0), (1, 0), (2, 0), (3, 0)],
        )
        agent = fast_agent(difficulty)
        assert agent.select_move(game) == Point(9, 7)
        assert agent.last_stats.step == "win"

    @pytest.mark.parametrize("difficulty", ALL_TIERS)
    def test_every_tier_blocks_five(self, difficulty):
        game = position(
            black=[(5, 7), (6, 7), (10, 12), (12, 12)],
            white=[(0, 0), (1, 0), (2, 0), (3, 0)],
        )
        agent = fast_agent(difficulty)
        assert agent.select_move(game) == Point(4, 0)
        assert agent.last_stats.step == "block-five"

    def test_medium_makes_open_four(self):
        game = position(black=[(6, 7), (7, 7), (8, 7)], white=CORNERS[:3])
        agent = fast_agent(Difficulty.MEDIUM)
        assert agent.select_move(game) == Point(5, 7)
        assert agent.last_stats.step == "open-four"

    def test_medium_blocks_open_four(self):
        game = position(black=CORNERS[:3], white=[(6, 7), (7, 7), (8, 7)])
        agent = fast_agent(Difficulty.MEDIUM)
        assert agent.select_move(game) == Point(5, 7)
        assert agent.last_stats.step == "block-open-four"

    def test_hard_makes_compound(self):
        game = position(black=[(5, 7), (6, 7), (7, 5), (7, 6)], white=CORNERS)
        agent = fast_agent(Difficulty.HARD)
        assert agent.select_move(game) == Point(7, 7)
        assert agent.last_stats.step == "compound"

    def test_hard_blocks_compound(self):
        game = position(black=CORNERS, white=[(5, 7), (6, 7), (7, 5), (7, 6)])
        agent = fast_agent(Difficulty.HARD)
        assert agent.select_move(game) == Point(7, 7)
        assert agent.last_stats.step == "block-compound"

    def test_medium_has_no_compound_step(self):
        game = position(black=[(5, 7), (6, 7), (7, 5), (7, 6)], white=CORNERS)
        agent = fast_agent(Difficulty.MEDIUM)
        agent.select_move(game)
        assert agent.last_stats.step == "minimax"

    def test_hell_forced_win(self):
        game = position(
            black=[(5, 7), (6, 7), (7, 7), (8, 8), (8, 9)],
            white=[(4, 7)] + CORNERS,
        )
        agent = fast_agent(Difficulty.HELL, take_compound=False, block_compound=False)
        assert agent.select_move(game) == Point(8, 7)
        assert agent.last_stats.step == "forced-win"

    def test_hell_opening_book(self):
        agent = fast_agent(Difficulty.HELL)
        assert agent.select_move(position([(3, 3)], [])) == Point(4, 4)
        assert agent.last_stats.step == "opening-book"
        assert agent.select_move(position([(7, 7)], [])) == Point(8, 8)

    def test_book_only_for_hell(self):
        agent = fast_agent(Difficulty.HARD)
        agent.select_move(position([(3, 3)], []))
        assert agent.last_stats.step == "minimax"


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

class TestContract:
    @pytest.mark.parametrize("difficulty", ALL_TIERS)
    def test_legal_and_side_effect_free(self, difficulty):
        game = position(black=[(7, 7), (8, 8)], white=[(7, 8), (6, 6)])
        before = game.board.cells()
        move = fast_agent(difficulty).select_move(game)
        assert game.board.is_empty(move)
        assert game.board.cells() == before
        assert game.ply == 4

    def test_search_never_writes_to_the_game_board(self, monkeypatch):
        game = position(black=[(5, 7), (6, 7), (7, 7), (8, 8), (8, 9)], white=[(4, 7)] + CORNERS)

        def refuse(*args):
            raise AssertionError("game board modified during search")

        monkeypatch.setattr(game.board, "place", refuse)
        monkeypatch.setattr(game.board, "remove", refuse)
        agent = fast_agent(Difficulty.HELL, take_compound=False, block_compound=False)
        assert agent.select_move(game) == Point(8, 7)

    def test_deterministic_above_easy(self):
        game = position(black=[(7, 7), (8, 8)], white=[(7, 8)])
        first = fast_agent(Difficulty.HARD).select_move(game)
        second = fast_agent(Difficulty.HARD).select_move(game)
        assert first == second

    def test_seeded_easy_is_reproducible(self):
        game = position(black=[(7, 7), (8, 8)], white=[(7, 8)])
        picks_a = [TieredAgent(Difficulty.EASY, seed=7).select_move(game) for _ in range(3)]
        picks_b = [TieredAgent(Difficulty.EASY, seed=7).select_move(game) for _ in range(3)]
        assert picks_a == picks_b

    def test_easy_without_randomness_plays_best_greedy(self):
        game = position(black=[(7, 7), (8, 8)], white=[(7, 8)])
        agent = fast_agent(Difficulty.EASY, random_chance=0.0)
        move = agent.select_move(game)
        assert agent.last_stats.step == "greedy"
        assert agent.select_move(game) == move

    def test_stats_recorded(self):
        game = position(black=[(7, 7)], white=[(8, 8)])
        agent = fast_agent(Difficulty.MEDIUM)
        agent.select_move(game)
        stats = agent.last_stats
        assert stats.step == "minimax"
        assert stats.nodes > 0
        assert stats.elapsed >= 0.0

    def test_name(self):
        assert TieredAgent(Difficulty.HELL).name == "Hell AI"


class TestFallback:
    def test_center_when_free(self):
        assert _fallback(Board()) == CENTER

    def test_first_empty_cell(self):
        board = Board()
        board.place(CENTER, Player.BLACK)
        assert _fallback(board) == Point(0, 0)

    def test_full_board(self):
        board = Board()
        for x in range(BOARD_SIZE):
            for y in range(BOARD_SIZE):
                board.place(Point(x, y), Player.BLACK if (x + y) % 2 else Player.WHITE)
        assert _fallback(board) == CENTER
