"""
Destino - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from dataclasses import replace
from typing import Any

import pytest

from src.engine.base import GameConfig, GameState, Position
from src.engine.mash import MashEngine


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def basic_config() -> GameConfig:
    """Three options per side, cycle number 5."""
    return GameConfig(
        professions=("A", "B", "C"),
        children=(1, 2, 3),
        partners=("X", "Y", "Z"),
        cycle_number=5,
    )


@pytest.fixture
def seven_option_config() -> GameConfig:
    """The largest board allowed."""
    return GameConfig(
        professions=("Chef", "Pilot", "Nurse", "Judge", "Baker", "Actor", "Coder"),
        children=(1, 2, 3, 4, 5, 6, 7),
        partners=("Ana", "Bia", "Caio", "Davi", "Eva", "Fabio", "Gil"),
        cycle_number=13,
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================

@pytest.fixture
def fresh_state(basic_config) -> GameState:
    """Initial board for basic_config (wealth is always P, R, M for 3 options)."""
    return MashEngine.create_game_state(basic_config)


@pytest.fixture
def basic_elimination_order() -> tuple[Position, ...]:
    """
    Eliminations for basic_config, worked out by hand.

    Y, Z (partners), R, P (wealth), B, A (professions), 2, 1 (children)
    """
    return (
        Position(2, 1),
        Position(2, 2),
        Position(3, 1),
        Position(3, 0),
        Position(0, 1),
        Position(0, 0),
        Position(1, 1),
        Position(1, 0),
    )


@pytest.fixture
def eliminate_all():
    """Apply several eliminations in order."""
    def _apply(state: GameState, *positions: Position) -> GameState:
        for position in positions:
            state = MashEngine.eliminate(state, position)
        return state
    return _apply


@pytest.fixture
def locked_state(fresh_state) -> GameState:
    """Every side down to its first option, but not flagged finished."""
    state = fresh_state
    sides = tuple(
        replace(
            side,
            options=tuple(
                replace(opt, eliminated=i != 0) for i, opt in enumerate(side.options)
            ),
        )
        for side in state.sides
    )
    return replace(state, sides=sides, is_finished=False)


@pytest.fixture
def game_record_row() -> dict[str, Any]:
    """A `games` table row as returned by Supabase."""
    return {
        "id": 1,
        "player_name": "Ana",
        "profession": "C",
        "children": 3,
        "partner": "X",
        "wealth": "M",
        "cycle_number": 5,
        "created_at": "2026-10-18T12:00:00+00:00",
    }
