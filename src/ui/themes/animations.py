"""CSS injection and HTML animation helpers for the mystic theme."""

from html import escape
from pathlib import Path

import streamlit as st


def load_css() -> None:
    """Inject the mystic CSS theme into the Streamlit app."""
    css_path = Path(__file__).parent / "mystic.css"
    css_text = css_path.read_text(encoding="utf-8")
    st.markdown(f"<style>{css_text}</style>", unsafe_allow_html=True)


def render_reveal_animation(name: str | None) -> None:
    """Render the destiny reveal overlay with glow animation."""
    title = f"O destino de {escape(name)}" if name else "Seu destino"
    st.markdown(
        '<div class="reveal-overlay">'
        '<span class="crystal">&#128302;</span>'
        f"<h1>{title}</h1>"
        "<p>As estrelas falaram.</p>"
        "</div>",
        unsafe_allow_html=True,
    )


def render_elimination_popup(value: str) -> None:
    """Render an animated popup naming the option just eliminated."""
    st.markdown(
        f'<div class="elimination-popup">&#10007; {escape(value)}</div>',
        unsafe_allow_html=True,
    )
