"""
Destino - Round Controller

Plays rounds over time: the counter moves one option per tick at the pace
given by the cycle number, lands on the cycle-number-th option, and after a
short settle delay that option is eliminated.

States: IDLE -> COUNTING -> RESOLVING -> IDLE (or FINISHED)
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import replace
from enum import Enum, auto
from functools import partial
from typing import Callable

from src.engine.base import BoardSnapshot, FinalResult, GameConfig, GameState, Position
from src.engine.events import EventPayload, RoundEvent
from src.engine.mash import MashEngine
from src.engine.scheduler import Scheduler, TimerHandle
from src.engine.validators import validate_cycle_number

logger = logging.getLogger(__name__)

# Pause between landing and elimination so the landing can be seen
SETTLE_DELAY_MS = 500


class RoundPhase(Enum):
    """Where the controller is in the round cycle."""

    IDLE = auto()
    COUNTING = auto()
    RESOLVING = auto()
    FINISHED = auto()


class RoundController:
    """Drives rounds of one game session with a scheduler.

    The only mutable object of a session: it swaps its immutable GameState
    for a new one after each elimination. Every scheduled callback carries
    the token of the round that scheduled it, so callbacks left over from a
    cancelled round do nothing.
    """

    def __init__(
        self,
        state: GameState,
        scheduler: Scheduler,
        *,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        pacing: Callable[[int], int] | None = None,
        on_event: Callable[[EventPayload], None] | None = None,
    ) -> None:
        if settle_delay_ms < 0:
            raise ValueError(f"Settle delay cannot be negative, got {settle_delay_ms}.")

        self._state = state
        self._scheduler = scheduler
        self._settle_delay_ms = settle_delay_ms
        self._pacing = pacing or MashEngine.calculate_game_speed
        self._on_event = on_event
        self._lock = threading.RLock()

        self._phase = RoundPhase.FINISHED if state.is_finished else RoundPhase.IDLE
        self._traversal: tuple[Position, ...] = ()
        self._tick = 0
        self._interval_ms = 0
        self._highlighted: Position | None = None
        self._last_eliminated: Position | None = None
        self._timer: TimerHandle | None = None
        self._round_token = 0

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        scheduler: Scheduler,
        *,
        rng: random.Random | None = None,
        **kwargs,
    ) -> "RoundController":
        """Create a controller for a fresh game."""
        return cls(MashEngine.create_game_state(config, rng), scheduler, **kwargs)

    # -- Queries ---------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def highlighted_position(self) -> Position | None:
        return self._highlighted

    @property
    def last_eliminated_position(self) -> Position | None:
        return self._last_eliminated

    @property
    def traversal(self) -> tuple[Position, ...]:
        """Counting order of the round in progress (empty when idle)."""
        return self._traversal

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def is_round_in_progress(self) -> bool:
        """True from play_round until the round resolves or is cancelled."""
        return self._phase in (RoundPhase.COUNTING, RoundPhase.RESOLVING)

    def snapshot(self) -> BoardSnapshot:
        """Current board for rendering."""
        with self._lock:
            return BoardSnapshot.from_state(
                self._state,
                highlighted_position=self._highlighted,
                last_eliminated_position=self._last_eliminated,
                tick=self._tick,
            )

    def get_results(self) -> FinalResult | None:
        """Final results, or None while the game is still running."""
        if not self._state.is_finished:
            return None
        return MashEngine.get_final_results(self._state.sides)

    # -- Commands --------------------------------------------------------

    def play_round(self) -> bool:
        """Start a round.

        Ignored while a round is in progress or once the game is finished.

        Returns:
            True if counting started
        """
        with self._lock:
            if self._state.is_playing or self._state.is_finished:
                logger.debug("Round request ignored (phase=%s)", self._phase.name)
                return False

            traversal = MashEngine.get_active_options(self._state.sides)
            if not traversal:
                self._state = replace(self._state, is_playing=False, is_finished=True)
                self._phase = RoundPhase.FINISHED
                self._emit(RoundEvent.GAME_FINISHED)
                return False

            self._round_token += 1
            self._traversal = traversal
            self._tick = 0
            self._highlighted = None
            self._last_eliminated = None
            self._interval_ms = self._pacing(self._state.cycle_number)
            self._state = replace(self._state, is_playing=True)
            self._phase = RoundPhase.COUNTING

            logger.debug(
                "Round %d started: %d active options, target %d, %d ms per tick",
                self._round_token,
                len(traversal),
                self._state.cycle_number,
                self._interval_ms,
            )
            self._timer = self._scheduler.call_later(
                self._interval_ms, partial(self._on_tick, self._round_token)
            )
            self._emit(RoundEvent.ROUND_STARTED)
            return True

    def cancel(self) -> bool:
        """Abandon the round in progress without eliminating anything.

        Returns:
            True if a round was cancelled
        """
        with self._lock:
            if not self.is_round_in_progress:
                return False
            self._discard_round()
            self._emit(RoundEvent.ROUND_CANCELLED)
            logger.info("Round cancelled")
            return True

    def update_cycle_number(self, cycle_number: int) -> bool:
        """Change the counting target between rounds.

        Returns:
            False (and changes nothing) while a round is in progress
        """
        validate_cycle_number(cycle_number)
        with self._lock:
            if self._state.is_playing:
                logger.debug("Cycle number change ignored while counting")
                return False
            self._state = replace(self._state, cycle_number=cycle_number)
            return True

    def restart_with_same_data(
        self,
        cycle_number: int,
        rng: random.Random | None = None,
    ) -> GameState:
        """Start over with the same options and a new cycle number.

        The wealth side is regenerated.
        """
        with self._lock:
            if self.is_round_in_progress:
                self._discard_round()
                self._emit(RoundEvent.ROUND_CANCELLED)

            config = MashEngine.config_from_state(self._state, cycle_number)
            self._state = MashEngine.create_game_state(config, rng)
            self._traversal = ()
            self._tick = 0
            self._highlighted = None
            self._last_eliminated = None
            self._phase = RoundPhase.IDLE
            return self._state

    # -- Scheduled callbacks ---------------------------------------------

    def _on_tick(self, token: int) -> None:
        with self._lock:
            if token != self._round_token or self._phase is not RoundPhase.COUNTING:
                return

            self._tick += 1
            position = self._traversal[(self._tick - 1) % len(self._traversal)]
            self._highlighted = position

            # Schedule before emitting so a listener that aborts the caller
            # leaves the round resumable
            if self._tick >= self._state.cycle_number:
                self._phase = RoundPhase.RESOLVING
                self._timer = self._scheduler.call_later(
                    self._settle_delay_ms, partial(self._on_resolve, token, position)
                )
            else:
                self._timer = self._scheduler.call_later(
                    self._interval_ms, partial(self._on_tick, token)
                )
            self._emit(RoundEvent.TICK, position)

    def _on_resolve(self, token: int, position: Position) -> None:
        with self._lock:
            if token != self._round_token or self._phase is not RoundPhase.RESOLVING:
                return

            self._state = MashEngine.eliminate(self._state, position)
            self._last_eliminated = position
            self._highlighted = None
            self._traversal = ()
            self._timer = None

            side = self._state.sides[position.side_index]
            logger.info(
                "Eliminated %r from %s (%d options left)",
                side.options[position.option_index].value,
                side.id.value,
                self._state.remaining_options,
            )

            self._phase = RoundPhase.FINISHED if self._state.is_finished else RoundPhase.IDLE
            self._emit(RoundEvent.OPTION_ELIMINATED, position)
            if self._state.is_finished:
                logger.info("Game finished after round %d", self._round_token)
                self._emit(RoundEvent.GAME_FINISHED)

    # -- Helpers ---------------------------------------------------------

    def _discard_round(self) -> None:
        """Stop the timer and drop in-flight round state. Caller holds the lock."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._round_token += 1
        self._traversal = ()
        self._tick = 0
        self._highlighted = None
        self._state = replace(self._state, is_playing=False)
        self._phase = RoundPhase.IDLE

    def _emit(self, event: RoundEvent, position: Position | None = None) -> None:
        if self._on_event is None:
            return
        payload = EventPayload(event=event, snapshot=self.snapshot(), position=position)
        try:
            self._on_event(payload)
        except Exception:
            logger.exception("Round event listener failed for %s", event.name)
