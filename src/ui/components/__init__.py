"""UI components for Destino."""

from src.ui.components.board import build_board_html, render_board
from src.ui.components.config_wizard import render_config_wizard
from src.ui.components.history import render_history

__all__ = [
    "build_board_html",
    "render_board",
    "render_config_wizard",
    "render_history",
]
