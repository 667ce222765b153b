"""Results page: the revealed destiny and replay options."""

from __future__ import annotations

import streamlit as st

from src.engine.round import RoundController
from src.ui.components.config_wizard import render_cycle_picker, reset_wizard
from src.ui.labels import get_wealth_label
from src.ui.themes.animations import render_reveal_animation
from src.ui.views.game import abandon_game


def render_results_page() -> None:
    """Render the results page."""
    ss = st.session_state
    controller: RoundController | None = ss.get("controller")
    result = controller.get_results() if controller is not None else None

    if result is None:
        ss["page"] = "home"
        st.rerun()
        return

    wizard = ss.get("wizard", {})
    render_reveal_animation(wizard.get("player_name") or None)

    items = (
        ("Profissão", result.profession),
        ("Vai casar com", result.partner),
        ("Idade do casamento", f"{controller.state.cycle_number} anos"),
        ("Filhos", str(result.children)),
        ("Fortuna", get_wealth_label(result.wealth)),
    )
    for label, value in items:
        st.markdown(f"**{label}:** {value}")

    st.divider()

    with st.expander("Jogar novamente com as mesmas opções"):
        cycle_number = render_cycle_picker(wizard.get("player_age", 0), key="replay")
        if st.button("Novo destino", type="primary", use_container_width=True):
            _play_again(controller, cycle_number)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Novo jogo", use_container_width=True):
            _new_game()
    with col2:
        if st.button("Início", use_container_width=True):
            _return_home()


def _play_again(controller: RoundController, cycle_number: int) -> None:
    """Same options, new cycle number, fresh wealth side."""
    ss = st.session_state
    controller.restart_with_same_data(cycle_number)
    ss.pop("_last_eliminated_value", None)
    ss.pop("_result_saved", None)
    ss["page"] = "game"
    st.rerun()


def _new_game() -> None:
    """Start the wizard again, keeping the player's profile."""
    ss = st.session_state
    abandon_game()
    reset_wizard()
    ss["page"] = "game"
    st.rerun()


def _return_home() -> None:
    abandon_game()
    reset_wizard()
    st.session_state["page"] = "home"
    st.rerun()
