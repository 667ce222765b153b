"""Mystic theme for Destino."""

from src.ui.themes.animations import (
    load_css,
    render_elimination_popup,
    render_reveal_animation,
)

__all__ = [
    "load_css",
    "render_elimination_popup",
    "render_reveal_animation",
]
