"""Gobang: Gradio web app entry point."""

import logging

import gradio as gr

from gobang.ui.board_component import BOARD_CLICK_JS
from gobang.ui.play_tab import build_play_tab

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

with gr.Blocks(title="Gobang") as demo:
    gr.Markdown("# Gobang")
    gr.Markdown("15x15 board, five in a row to win. Four computer tiers: Easy, Medium, Hard, Hell.")

    with gr.Tab("Play"):
        build_play_tab()

    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
