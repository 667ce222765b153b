"""Home page: title, how to play, and the history of past destinies."""

from __future__ import annotations

import logging

import streamlit as st

from src.database.client import db_retry, get_supabase_client
from src.database.history import GameHistoryManager
from src.database.models import UserProfile
from src.database.user_settings import UserSettingsManager
from src.ui.components.history import render_history

logger = logging.getLogger(__name__)

_HISTORY_LIMIT = 20


def render_home_page() -> None:
    """Render the home / landing page."""
    st.title("Destino")
    st.caption("Descubra seu destino neste jogo místico")

    profile = _load_profile()
    if profile is not None and not profile.is_anonymous:
        st.markdown(f"Bem-vindo(a) de volta, **{profile.player_name}** ({profile.player_age} anos)")
        if st.button("Esquecer meu perfil", key="btn_forget_profile"):
            _forget_profile()
            st.rerun()

    if st.button("Começar", type="primary", use_container_width=True):
        st.session_state["page"] = "game"
        st.rerun()

    with st.expander("Como jogar"):
        st.markdown(
            """
**Escolha as opções de cada lado do tabuleiro:**

- **Profissões**, **filhos** e **casamento** são suas escolhas
- A **fortuna** (Pobre, Rico, Milionário) é sorteada pelo destino

**A contagem:**
- O número no centro é a idade do casamento
- A cada rodada a contagem percorre o tabuleiro no sentido horário
- A opção onde a contagem para é eliminada
- Um lado com apenas uma opção fica travado e sai da contagem

O jogo termina quando resta uma opção em cada lado: esse é o seu destino!
"""
        )

    st.divider()
    st.subheader("Histórico")

    try:
        records = db_retry(
            lambda: GameHistoryManager(get_supabase_client()).list_history(limit=_HISTORY_LIMIT)
        )
    except Exception as exc:
        logger.exception("Could not load game history")
        st.error(f"Não foi possível carregar o histórico. ({type(exc).__name__})")
        return

    render_history(records)

    if records and st.button("Limpar histórico", key="btn_clear_history"):
        try:
            db_retry(lambda: GameHistoryManager(get_supabase_client()).clear())
        except Exception as exc:
            logger.exception("Could not clear game history")
            st.error(f"Não foi possível limpar o histórico. ({type(exc).__name__})")
            return
        st.rerun()


def _load_profile() -> UserProfile | None:
    try:
        return db_retry(lambda: UserSettingsManager(get_supabase_client()).get())
    except Exception:
        logger.exception("Could not load player profile")
        return None


def _forget_profile() -> None:
    try:
        db_retry(lambda: UserSettingsManager(get_supabase_client()).clear())
    except Exception as exc:
        logger.exception("Could not clear player profile")
        st.error(f"Não foi possível apagar o perfil. ({type(exc).__name__})")
        return
    st.session_state.pop("wizard", None)
