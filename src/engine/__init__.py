"""
Destino Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles board construction, clockwise counting, elimination and pacing.
"""

from src.engine.base import (
    BoardSnapshot,
    FinalResult,
    GameConfig,
    GameState,
    Option,
    Position,
    Side,
    SideId,
    WealthCode,
)
from src.engine.events import EventPayload, RoundEvent
from src.engine.mash import MashEngine, RoundOutcome
from src.engine.round import RoundController, RoundPhase
from src.engine.scheduler import ThreadingClock, VirtualClock

__all__ = [
    # Data Classes
    "BoardSnapshot",
    "FinalResult",
    "GameConfig",
    "GameState",
    "Option",
    "Position",
    "RoundOutcome",
    "Side",
    # Enums
    "RoundPhase",
    "SideId",
    "WealthCode",
    # Events
    "EventPayload",
    "RoundEvent",
    # Engine
    "MashEngine",
    "RoundController",
    # Scheduling
    "ThreadingClock",
    "VirtualClock",
]
