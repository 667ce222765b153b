"""
Destino - Round Event Definitions

Event types and payloads emitted while a round is played.
"""

from dataclasses import dataclass
from enum import Enum, auto

from src.engine.base import BoardSnapshot, Position


class RoundEvent(Enum):
    """Events that can occur during a round."""

    ROUND_STARTED = auto()
    TICK = auto()
    OPTION_ELIMINATED = auto()
    GAME_FINISHED = auto()
    ROUND_CANCELLED = auto()


@dataclass(frozen=True)
class EventPayload:
    """Wrapper for round event data."""

    event: RoundEvent
    snapshot: BoardSnapshot
    position: Position | None = None

    @property
    def is_terminal(self) -> bool:
        """True for events after which no more ticks follow in this round."""
        return self.event in _TERMINAL_EVENTS


_TERMINAL_EVENTS = frozenset({
    RoundEvent.OPTION_ELIMINATED,
    RoundEvent.GAME_FINISHED,
    RoundEvent.ROUND_CANCELLED,
})
