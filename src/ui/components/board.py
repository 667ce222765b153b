"""
Destino board component.

Draws the four sides around the cycle number: children on top, partners on
the right, wealth at the bottom, professions on the left. Purely reactive;
it only reads a BoardSnapshot.
"""

from html import escape

import streamlit as st

from src.engine.base import BoardSnapshot, Position, Side
from src.ui.labels import get_option_label


def build_board_html(snapshot: BoardSnapshot) -> str:
    """
    Build the board markup for a snapshot.

    Args:
        snapshot: Board state to draw

    Returns:
        HTML string for ``st.markdown(..., unsafe_allow_html=True)``
    """
    professions, children, partners, wealth = snapshot.sides

    def side_html(side: Side, side_index: int, vertical: bool) -> str:
        boxes = "".join(
            _option_html(side, side_index, i, snapshot) for i in range(len(side.options))
        )
        direction = "vertical" if vertical else "horizontal"
        return (
            f'<div class="board-side side-{side.id.value} {direction}">'
            f'<span class="side-label">{escape(side.label)}</span>'
            f'<div class="side-options">{boxes}</div>'
            "</div>"
        )

    centre_class = "board-centre counting" if snapshot.is_playing else "board-centre"
    return (
        '<div class="destino-board">'
        f'<div class="board-top">{side_html(children, 1, vertical=False)}</div>'
        '<div class="board-middle">'
        f"{side_html(professions, 0, vertical=True)}"
        f'<div class="{centre_class}"><span class="cycle-number">{snapshot.cycle_number}</span></div>'
        f"{side_html(partners, 2, vertical=True)}"
        "</div>"
        f'<div class="board-bottom">{side_html(wealth, 3, vertical=False)}</div>'
        "</div>"
    )


def _option_html(
    side: Side,
    side_index: int,
    option_index: int,
    snapshot: BoardSnapshot,
) -> str:
    option = side.options[option_index]
    position = Position(side_index, option_index)

    classes = ["option-box"]
    if option.eliminated:
        classes.append("eliminated")
    if position == snapshot.highlighted_position and not option.eliminated:
        classes.append("active")
    if position == snapshot.last_eliminated_position:
        classes.append("eliminating")

    value = get_option_label(side, option_index)
    return f'<div class="{" ".join(classes)}">{escape(value)}</div>'


def render_board(snapshot: BoardSnapshot, slot=None) -> None:
    """
    Render the board.

    Args:
        snapshot: Board state to draw
        slot: Optional ``st.empty()`` placeholder to redraw in place
    """
    target = slot if slot is not None else st
    target.markdown(build_board_html(snapshot), unsafe_allow_html=True)
