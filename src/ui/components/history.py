"""History component: list of previously revealed destinies."""

from __future__ import annotations

from html import escape

import streamlit as st

from src.database.models import GameRecord
from src.ui.labels import get_wealth_label


def render_history(records: list[GameRecord]) -> None:
    """Render saved games, most recent first.

    Args:
        records: Saved games as returned by ``GameHistoryManager.list_history``.
    """
    if not records:
        st.caption("Nenhum destino revelado ainda.")
        return

    html = ['<div class="history">']
    for record in records:
        html.append(
            '<div class="history-row">'
            f'<span class="date">{record.created_at:%d/%m/%Y}</span>'
            f'<span class="name">{escape(record.player_name)}</span>'
            f'<span class="destiny">{escape(record.profession)} · {escape(record.partner)} · '
            f"{record.children} filho(s) · {get_wealth_label(record.wealth)} · "
            f"casa aos {record.cycle_number}</span>"
            "</div>"
        )
    html.append("</div>")
    st.markdown("".join(html), unsafe_allow_html=True)
