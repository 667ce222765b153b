"""Game page: config wizard, then the board and the round button."""

from __future__ import annotations

import logging
import time
from typing import Callable

import streamlit as st

from src.config.settings import get_settings
from src.database.client import db_retry, get_supabase_client
from src.database.history import GameHistoryManager
from src.database.user_settings import UserSettingsManager
from src.engine.base import GameConfig
from src.engine.events import EventPayload, RoundEvent
from src.engine.round import RoundController
from src.engine.scheduler import VirtualClock
from src.ui.components.board import render_board
from src.ui.components.config_wizard import render_config_wizard
from src.ui.labels import get_option_label
from src.ui.themes.animations import render_elimination_popup

logger = logging.getLogger(__name__)

_SESSION_KEYS = (
    "controller",
    "clock",
    "_board_slot",
    "_last_eliminated_value",
    "_result_saved",
)


def render_game_page() -> None:
    """Render the game page."""
    ss = st.session_state
    controller: RoundController | None = ss.get("controller")

    if st.button("Sair", key="btn_exit"):
        abandon_game()
        ss["page"] = "home"
        st.rerun()
        return

    if controller is None:
        config = render_config_wizard()
        if config is not None:
            start_game(config)
            st.rerun()
        return

    if controller.is_finished:
        ss["page"] = "results"
        st.rerun()
        return

    slot = st.empty()
    ss["_board_slot"] = slot
    render_board(controller.snapshot(), slot)

    if controller.is_round_in_progress:
        # A click during the count stopped the previous script run
        st.caption("Continuando a contagem...")
        _finish_round(controller)
        return

    eliminated = ss.get("_last_eliminated_value")
    if eliminated:
        render_elimination_popup(eliminated)

    state = controller.state
    label = "Contando..." if state.is_playing else "Iniciar rodada"
    if st.button(
        label,
        key="btn_play_round",
        type="primary",
        disabled=state.is_playing or state.is_finished,
        use_container_width=True,
    ):
        if controller.play_round():
            _finish_round(controller)
        st.rerun()

    st.caption(
        "Clique no botão para iniciar a contagem. Quando o ciclo terminar, "
        "uma opção será eliminada até restar apenas uma de cada lado."
    )


def start_game(config: GameConfig) -> RoundController:
    """Create the session's controller from a finished wizard."""
    ss = st.session_state
    clock = VirtualClock()
    controller = RoundController.from_config(
        config,
        clock,
        settle_delay_ms=get_settings().settle_delay_ms,
        on_event=_on_round_event,
    )
    ss["controller"] = controller
    ss["clock"] = clock
    ss.pop("_last_eliminated_value", None)
    ss.pop("_result_saved", None)
    logger.info(
        "New game: %d options per side, cycle %d",
        config.option_count,
        config.cycle_number,
    )
    return controller


def abandon_game() -> None:
    """Stop any round in progress and forget the game without saving it."""
    ss = st.session_state
    controller: RoundController | None = ss.get("controller")
    if controller is not None:
        controller.cancel()
    for key in _SESSION_KEYS:
        ss.pop(key, None)


def drive_round(
    controller: RoundController,
    clock: VirtualClock,
    sleep: Callable[[float], None] | None = time.sleep,
) -> None:
    """Run the round in progress to its end on the session clock.

    Picks up where an interrupted run stopped. A round with nothing left
    scheduled can never resolve, so it is cancelled instead.
    """
    if not controller.is_round_in_progress:
        return
    if clock.time_until_next() is None:
        logger.warning("Round in progress with nothing scheduled, cancelling it")
        controller.cancel()
        return
    clock.run_until_idle(sleep=sleep)


def _finish_round(controller: RoundController) -> None:
    """Animate the round in place, then rerun to refresh the page."""
    ss = st.session_state
    # Ticks redraw the board through _on_round_event while we sleep
    drive_round(controller, ss["clock"])

    if controller.is_finished:
        save_finished_game(controller)
        ss["page"] = "results"
    st.rerun()


def _on_round_event(payload: EventPayload) -> None:
    ss = st.session_state
    slot = ss.get("_board_slot")
    if slot is not None and payload.event in (RoundEvent.TICK, RoundEvent.OPTION_ELIMINATED):
        render_board(payload.snapshot, slot)

    if payload.event == RoundEvent.OPTION_ELIMINATED and payload.position is not None:
        side = payload.snapshot.sides[payload.position.side_index]
        ss["_last_eliminated_value"] = get_option_label(side, payload.position.option_index)


def save_finished_game(controller: RoundController) -> None:
    """Hand the final result to the history store (once per game)."""
    ss = st.session_state
    if ss.get("_result_saved"):
        return

    result = controller.get_results()
    if result is None:
        return

    anonymous_name = get_settings().anonymous_player_name
    try:
        player_name = db_retry(
            lambda: UserSettingsManager(get_supabase_client()).display_name(anonymous_name)
        )
        db_retry(
            lambda: GameHistoryManager(get_supabase_client()).save_result(
                result, controller.state.cycle_number, player_name
            )
        )
        ss["_result_saved"] = True
    except Exception as exc:
        logger.exception("Could not save game result")
        st.error(f"Não foi possível salvar o resultado. ({type(exc).__name__})")
