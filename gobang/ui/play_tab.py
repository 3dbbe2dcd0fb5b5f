"""Play tab: Human vs AI (or two players) with interactive SVG board."""

from __future__ import annotations

import logging
import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from gobang.agent.base import Agent
from gobang.agent.tiered_agent import TieredAgent
from gobang.game.board import GomokuGameState, format_point, parse_coordinate
from gobang.game.errors import GobangError
from gobang.game.types import Difficulty, Player
from gobang.ui.board_component import render_board_svg

logger = logging.getLogger(__name__)

TWO_PLAYERS = "Two players"

OPPONENT_CHOICES: dict[str, Optional[Difficulty]] = {
    "Easy": Difficulty.EASY,
    "Medium": Difficulty.MEDIUM,
    "Hard": Difficulty.HARD,
    "Hell": Difficulty.HELL,
    TWO_PLAYERS: None,
}


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GomokuGameState = field(default_factory=GomokuGameState)
    agent: Optional[Agent] = field(default_factory=lambda: TieredAgent(Difficulty.EASY))
    human_player: Player = field(default=Player.BLACK)
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = GomokuGameState()
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def vs_ai(self) -> bool:
        return self.agent is not None

    @property
    def ai_to_move(self) -> bool:
        return (
            self.vs_ai
            and not self.game.is_over
            and self.game.current_player != self.human_player
        )

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.is_draw:
            return "Draw!"
        if not self.vs_ai:
            return f"{g.winner} wins!"
        if g.winner == self.human_player:
            return "You win!"
        return "AI wins!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                return f"Game over: {self.game_over_banner} ({g.winner} by five in a row)"
            return "Game over: Draw!"
        if not self.vs_ai:
            return f"{g.current_player} to move"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI is thinking... ({g.current_player})"

    @property
    def stats_text(self) -> str:
        stats = self.agent.last_stats if self.agent is not None else None
        if stats is None or not stats.step:
            return ""
        return (
            f"Step: {stats.step}  Depth: {stats.depth}\n"
            f"Nodes: {stats.nodes:,}  Candidates: {stats.candidates}\n"
            f"Time: {stats.elapsed:.2f}s"
        )

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for move in self.game.moves:
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(move.ply + 1), str(move.player), format_point(move.point), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = not session.game.is_over and not session.ai_to_move
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session.stats_text,
        session,
    )


def _ai_reply(session: GameSession) -> None:
    """Let the AI move if it is its turn."""
    if not session.ai_to_move:
        return
    t0 = _time.time()
    ai_move = session.agent.select_move(session.game)
    session.game.apply_move(ai_move, elapsed=_time.time() - t0)
    session.mark_turn_start()


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.ai_to_move:
        return _outputs(session, "Wait, it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like H8.") + ("",)

    try:
        session.game.apply_move(point, elapsed=session.elapsed_since_turn_start())
    except GobangError as exc:
        return _outputs(session, str(exc)) + ("",)
    session.mark_turn_start()

    _ai_reply(session)
    return _outputs(session) + ("",)


def _new_game_with_color(color_choice: str, opponent_choice: str, session: GameSession):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    difficulty = OPPONENT_CHOICES.get(opponent_choice, Difficulty.EASY)
    session.agent = TieredAgent(difficulty) if difficulty is not None else None
    session.reset(human_player=human)
    logger.info("New game: human=%s opponent=%s", human, opponent_choice)

    # If the human is White, the AI (Black) opens
    _ai_reply(session)

    assigned = "Black" if human is Player.BLACK else "White"
    return _outputs(session) + (f"You are {assigned}.",)


def _undo_move(session: GameSession):
    """Undo the AI reply and the human move before it (one move in two-player mode)."""
    if not session.game.moves:
        return _outputs(session, "Nothing to undo.")

    last = session.game.moves[-1]
    if session.vs_ai and last.player != session.human_player:
        session.game.undo_move()
    if session.game.moves:
        session.game.undo_move()
    # Undoing the AI's opening move would leave it to move again
    _ai_reply(session)
    session.mark_turn_start()
    return _outputs(session)


def _resign(session: GameSession):
    if not session.game.is_over:
        loser = session.human_player if session.vs_ai else session.game.current_player
        session.game.resign(loser)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState()),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"],
                value="Black",
                label="Play as",
            )
            opponent_choice = gr.Dropdown(
                choices=list(OPPONENT_CHOICES.keys()),
                value="Easy",
                label="Opponent",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)",
                placeholder="H8",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button("Submit Move", elem_id="coord-submit")

            stats_box = gr.Textbox(label="AI stats", interactive=False, lines=3)

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    board_outputs = [board_html, status_text, move_table, stats_box, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, opponent_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(fn=_undo_move, inputs=[session_state], outputs=board_outputs)
    resign_btn.click(fn=_resign, inputs=[session_state], outputs=board_outputs)
