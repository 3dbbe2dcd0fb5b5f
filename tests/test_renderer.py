from gobang.game.board import BOARD_SIZE, GomokuGameState
from gobang.game.types import Point
from gobang.ui.board_component import BANNER_DRAW, BANNER_LOSS, BANNER_WIN, WIN_COLOR, render_board_svg


def black_wins() -> GomokuGameState:
    g = GomokuGameState()
    for i in range(4):
        g.apply_move(Point(i + 1, 1))
        g.apply_move(Point(i + 1, 2))
    g.apply_move(Point(5, 1))  # Black wins
    return g


def test_empty_board_svg():
    g = GomokuGameState()
    html = render_board_svg(g)
    assert "<svg" in html
    assert "</svg>" in html
    assert "gomoku-board" in html
    # Click targets for all 225 intersections
    assert html.count('class="board-click"') == BOARD_SIZE * BOARD_SIZE


def test_svg_with_stones():
    g = GomokuGameState()
    g.apply_move(Point(5, 5))  # Black
    g.apply_move(Point(5, 6))  # White
    html = render_board_svg(g)
    assert html.count('class="board-click"') == BOARD_SIZE * BOARD_SIZE - 2
    assert 'data-coord="F6"' not in html
    assert 'data-coord="H8"' in html


def test_labels_use_letters_and_numbers():
    html = render_board_svg(GomokuGameState())
    assert ">A</text>" in html
    assert ">O</text>" in html
    assert ">15</text>" in html


def test_svg_not_clickable_when_game_over():
    html = render_board_svg(black_wins())
    assert html.count('class="board-click"') == 0


def test_svg_not_clickable_when_disabled():
    html = render_board_svg(GomokuGameState(), clickable=False)
    assert html.count('class="board-click"') == 0


def test_winning_run_highlighted():
    html = render_board_svg(black_wins())
    assert html.count(f'stroke="{WIN_COLOR}" stroke-width="2"') == 5
    assert 'stroke-width="4"' in html


def test_game_over_banner_displayed():
    html = render_board_svg(black_wins(), game_over_message="You win!")
    assert "You win!" in html
    assert BANNER_WIN in html


def test_game_over_banner_ai_wins():
    html = render_board_svg(GomokuGameState(), game_over_message="AI wins!")
    assert BANNER_LOSS in html


def test_game_over_banner_draw():
    html = render_board_svg(GomokuGameState(), game_over_message="Draw!")
    assert "Draw!" in html
    assert BANNER_DRAW in html
