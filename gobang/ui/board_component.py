"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from gobang.game.board import BOARD_SIZE, CENTER, COL_LABELS, GomokuGameState, format_point
from gobang.game.types import Player, Point

# Layout constants
CELL_SIZE = 38
MARGIN = 30
BOARD_PX = MARGIN * 2 + CELL_SIZE * (BOARD_SIZE - 1)
STONE_RADIUS = 16
CLICK_RADIUS = 18  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
WIN_COLOR = "#E74C3C"
BANNER_WIN = "#4ADE80"
BANNER_LOSS = "#F87171"
BANNER_DRAW = "#FFFFFF"

# Star points: centre and the four 3-3 points
STAR_POINTS = [CENTER, Point(3, 3), Point(11, 3), Point(3, 11), Point(11, 11)]


def _coord(point: Point) -> tuple[int, int]:
    """Convert board coordinates to SVG pixel coordinates (row 0 at the top)."""
    return MARGIN + point.x * CELL_SIZE, MARGIN + point.y * CELL_SIZE


def _banner(message: str) -> list[str]:
    if "win" in message.lower() and "AI" not in message:
        color = BANNER_WIN
    elif "draw" in message.lower():
        color = BANNER_DRAW
    else:
        color = BANNER_LOSS
    mid = BOARD_PX // 2
    return [
        f'<rect x="{mid - 110}" y="{mid - 28}" width="220" height="56" rx="8" '
        f'fill="rgba(0,0,0,0.7)"/>',
        f'<text x="{mid}" y="{mid + 9}" text-anchor="middle" font-size="26" '
        f'font-family="sans-serif" font-weight="bold" fill="{color}">{message}</text>',
    ]


def render_board_svg(
    game_state: GomokuGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="gomoku-board">'
    )
    parts.append(
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="4"/>'
    )

    # Grid lines
    far = MARGIN + (BOARD_SIZE - 1) * CELL_SIZE
    for i in range(BOARD_SIZE):
        pos = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{pos}" y1="{MARGIN}" x2="{pos}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{pos}" x2="{far}" y2="{pos}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    for star in STAR_POINTS:
        cx, cy = _coord(star)
        parts.append(f'<circle cx="{cx}" cy="{cy}" r="3" fill="{LINE_COLOR}"/>')

    # Column labels along the top, row labels down the left
    for i in range(BOARD_SIZE):
        x, _ = _coord(Point(i, 0))
        parts.append(
            f'<text x="{x}" y="{MARGIN - 14}" text-anchor="middle" '
            f'font-size="11" font-family="monospace" fill="{LINE_COLOR}">'
            f'{COL_LABELS[i]}</text>'
        )
        _, y = _coord(Point(0, i))
        parts.append(
            f'<text x="{MARGIN - 18}" y="{y + 4}" text-anchor="middle" '
            f'font-size="11" font-family="monospace" fill="{LINE_COLOR}">'
            f'{i + 1}</text>'
        )

    # Stones
    last_point: Optional[Point] = None
    if game_state.moves:
        last_point = game_state.moves[-1].point
    winning = set(game_state.winning_line)

    for point, player in game_state.board.stones():
        x, y = _coord(point)
        fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
        stroke = "none" if player is Player.BLACK else WHITE_STROKE
        if point in winning:
            stroke = WIN_COLOR
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
        )
        if highlight_last and point == last_point:
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="4" fill="{WIN_COLOR}" opacity="0.9"/>'
            )

    # Line through the winning run
    line = game_state.winning_line
    if line:
        x1, y1 = _coord(line[0])
        x2, y2 = _coord(line[-1])
        parts.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="{WIN_COLOR}" stroke-width="4" stroke-linecap="round" opacity="0.8"/>'
        )

    # Clickable intersection targets (invisible circles)
    if clickable and not game_state.is_over:
        for point in game_state.board.empty_points():
            x, y = _coord(point)
            coord_str = format_point(point)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></circle>'
            )

    if game_over_message:
        parts.extend(_banner(game_over_message))

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
