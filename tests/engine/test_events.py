"""
Destino - Round Event Tests
"""

import pytest
from src.engine.base import BoardSnapshot, Position
from src.engine.events import EventPayload, RoundEvent


class TestEventPayload:
    """Tests for EventPayload."""

    @pytest.mark.parametrize("event,terminal", [
        (RoundEvent.ROUND_STARTED, False),
        (RoundEvent.TICK, False),
        (RoundEvent.OPTION_ELIMINATED, True),
        (RoundEvent.GAME_FINISHED, True),
        (RoundEvent.ROUND_CANCELLED, True),
    ])
    def test_is_terminal(self, fresh_state, event, terminal):
        payload = EventPayload(event=event, snapshot=BoardSnapshot.from_state(fresh_state))
        assert payload.is_terminal is terminal

    def test_position_defaults_to_none(self, fresh_state):
        payload = EventPayload(
            event=RoundEvent.ROUND_STARTED,
            snapshot=BoardSnapshot.from_state(fresh_state),
        )
        assert payload.position is None

    def test_carries_position(self, fresh_state):
        payload = EventPayload(
            event=RoundEvent.TICK,
            snapshot=BoardSnapshot.from_state(fresh_state),
            position=Position(1, 2),
        )
        assert payload.position == Position(1, 2)
