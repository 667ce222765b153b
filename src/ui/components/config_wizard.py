"""Config wizard component: builds a validated GameConfig step by step."""

from __future__ import annotations

import logging

import streamlit as st

from src.config.settings import get_settings
from src.database.client import db_retry, get_supabase_client
from src.database.user_settings import AppSettingsManager, UserSettingsManager
from src.engine.base import GameConfig
from src.engine.mash import MAX_MARRIAGE_AGE, MIN_PLAYER_AGE, MashEngine
from src.engine.validators import MAX_OPTIONS, MIN_OPTIONS

logger = logging.getLogger(__name__)

OPTION_COUNT_KEY = "option_count"

_STEP_TITLES = (
    "Quem é você?",
    "Modo de jogo",
    "Quantidade de filhos",
    "Profissões",
    "Casamento",
    "Idade do casamento",
)


def _wizard() -> dict:
    ss = st.session_state
    if "wizard" not in ss:
        profile = _load_profile()
        ss["wizard"] = {
            "step": 0,
            "player_name": profile.player_name if profile and not profile.is_anonymous else "",
            "player_age": profile.player_age if profile else 0,
            "option_count": _load_option_count(),
            "random_children": False,
        }
    return ss["wizard"]


def _load_profile():
    try:
        return db_retry(lambda: UserSettingsManager(get_supabase_client()).get())
    except Exception:
        logger.exception("Could not load player profile")
        return None


def _save_profile(name: str, age: int) -> None:
    try:
        db_retry(
            lambda: UserSettingsManager(get_supabase_client()).save(
                name, age, anonymous_name=get_settings().anonymous_player_name
            )
        )
    except Exception:
        logger.exception("Could not save player profile")
        st.warning("Não foi possível salvar seu perfil.")


def _load_option_count() -> int:
    """Options per side from the last game, or the configured default."""
    default = get_settings().default_option_count
    try:
        stored = db_retry(
            lambda: AppSettingsManager(get_supabase_client()).get(OPTION_COUNT_KEY)
        )
    except Exception:
        logger.exception("Could not load remembered option count")
        return default
    return parse_option_count(stored, default)


def parse_option_count(stored: str | None, default: int) -> int:
    """Read a stored option count, falling back to *default* when unusable."""
    try:
        count = int(stored) if stored is not None else default
    except ValueError:
        logger.warning("Ignoring stored option count %r", stored)
        return default
    return count if MIN_OPTIONS <= count <= MAX_OPTIONS else default


def _save_option_count(count: int) -> None:
    try:
        db_retry(
            lambda: AppSettingsManager(get_supabase_client()).set(OPTION_COUNT_KEY, str(count))
        )
    except Exception:
        logger.exception("Could not remember option count")


def reset_wizard() -> None:
    """Forget wizard progress."""
    st.session_state.pop("wizard", None)


def render_config_wizard() -> GameConfig | None:
    """Render the current wizard step.

    Returns:
        A validated GameConfig once the last step is confirmed, else None.
    """
    wiz = _wizard()
    step = wiz["step"]
    st.progress((step + 1) / len(_STEP_TITLES), text=_STEP_TITLES[step])

    if step == 0:
        _render_player_step(wiz)
    elif step == 1:
        _render_mode_step(wiz)
    elif step == 2:
        _render_children_step(wiz)
    elif step == 3:
        _render_options_step(wiz, "professions", "Profissão")
    elif step == 4:
        _render_options_step(wiz, "partners", "Parceiro(a)")
    else:
        return _render_cycle_step(wiz)
    return None


def render_cycle_picker(player_age: int, key: str) -> int | None:
    """Ask for a new cycle number (used when replaying with the same data)."""
    destiny = st.toggle("Deixar o destino decidir", value=True, key=f"{key}_destiny")
    if destiny:
        return MashEngine.generate_random_cycle(max(player_age, MIN_PLAYER_AGE))

    low = max(player_age, MIN_PLAYER_AGE)
    return int(st.number_input(
        f"Idade de casamento ({low}-{MAX_MARRIAGE_AGE} anos)",
        min_value=low,
        max_value=MAX_MARRIAGE_AGE,
        value=low,
        key=f"{key}_cycle",
    ))


# === Steps ===


def _nav(wiz: dict, can_proceed: bool = True) -> bool:
    """Back/Next buttons. Returns True when Next was pressed."""
    col_back, col_next = st.columns(2)
    with col_back:
        if wiz["step"] > 0 and st.button("Voltar", use_container_width=True):
            wiz["step"] -= 1
            st.rerun()
    with col_next:
        return st.button(
            "Próximo",
            type="primary",
            disabled=not can_proceed,
            use_container_width=True,
        )


def _render_player_step(wiz: dict) -> None:
    ages = list(range(MIN_PLAYER_AGE, MAX_MARRIAGE_AGE + 1))
    age = st.selectbox(
        "Sua idade *",
        options=ages,
        index=ages.index(wiz["player_age"]) if wiz["player_age"] in ages else None,
        format_func=lambda a: f"{a} anos",
        placeholder="Selecione sua idade",
    )
    name = st.text_input("Seu nome (opcional)", value=wiz["player_name"], max_chars=60)

    if name.strip():
        st.caption(f"O destino será revelado para {name.strip()}")
    else:
        st.caption(f"Se não preencher, continuará como {get_settings().anonymous_player_name}")

    if _nav(wiz, can_proceed=age is not None):
        wiz["player_name"] = name.strip()
        wiz["player_age"] = age
        _save_profile(name, age)
        wiz["step"] = 1
        st.rerun()


def _render_mode_step(wiz: dict) -> None:
    custom = st.radio(
        "Como você quer jogar?",
        options=[False, True],
        format_func=lambda c: "Personalizado (até 7 opções)" if c else "Clássico (3 opções)",
        index=1 if wiz["option_count"] != MIN_OPTIONS else 0,
        horizontal=True,
    )
    count = MIN_OPTIONS
    if custom:
        count = st.select_slider(
            "Quantas opções por lado?",
            options=list(range(MIN_OPTIONS, MAX_OPTIONS + 1)),
            value=max(wiz["option_count"], MIN_OPTIONS),
        )

    if _nav(wiz):
        if count != wiz["option_count"] or "professions" not in wiz:
            wiz["professions"] = [""] * count
            wiz["partners"] = [""] * count
        wiz["option_count"] = count
        _save_option_count(count)
        wiz["step"] = 2
        st.rerun()


def _render_children_step(wiz: dict) -> None:
    random_children = st.radio(
        "Como definir as opções de filhos?",
        options=[False, True],
        format_func=lambda r: "Aleatório (1 a 12)" if r else "Sequencial (1, 2, 3...)",
        index=1 if wiz["random_children"] else 0,
    )

    if _nav(wiz):
        count = wiz["option_count"]
        wiz["random_children"] = random_children
        wiz["children"] = list(
            MashEngine.generate_random_children(count)
            if random_children
            else MashEngine.generate_sequential_children(count)
        )
        wiz["step"] = 3
        st.rerun()


def _render_options_step(wiz: dict, field: str, label: str) -> None:
    values = list(wiz[field])
    for i in range(wiz["option_count"]):
        values[i] = st.text_input(
            f"{label} {i + 1}",
            value=values[i],
            max_chars=40,
            key=f"wizard_{field}_{i}",
        )
    wiz[field] = values

    if _nav(wiz, can_proceed=all(v.strip() for v in values)):
        wiz["step"] += 1
        st.rerun()


def _render_cycle_step(wiz: dict) -> GameConfig | None:
    st.markdown("Com quantos anos você acha que vai casar?")
    cycle_number = render_cycle_picker(wiz["player_age"], key="wizard")

    col_back, col_go = st.columns(2)
    with col_back:
        if st.button("Voltar", use_container_width=True):
            wiz["step"] -= 1
            st.rerun()
    with col_go:
        start = st.button("Revelar destino", type="primary", use_container_width=True)

    if not start:
        return None

    try:
        return GameConfig(
            professions=tuple(wiz["professions"]),
            children=tuple(wiz["children"]),
            partners=tuple(wiz["partners"]),
            cycle_number=cycle_number,
        )
    except ValueError as exc:
        st.error(str(exc))
        return None
