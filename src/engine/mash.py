"""
Destino - Elimination Engine

The MASH-style elimination count around the four sides of the board.

Game Rules:
- Four sides: professions, children, partners, wealth (wealth is generated)
- Each round counts clockwise over the active options up to the cycle number
- The option the count lands on is eliminated
- A side with one option left is locked and skipped by the count
- The game ends when every side is locked; the survivors are the destiny

All methods are stateless class methods operating on immutable data.
"""

import random
from dataclasses import dataclass, replace
from typing import ClassVar

from src.engine.base import (
    FinalResult,
    GameConfig,
    GameState,
    Position,
    Side,
    SideId,
    WealthCode,
)
from src.engine.validators import validate_cycle_number

MIN_PLAYER_AGE = 10
MAX_MARRIAGE_AGE = 110


@dataclass(frozen=True)
class RoundOutcome:
    """
    Result of one synchronous round.

    Attributes:
        state: Game state after the round
        eliminated: Option removed this round (None if the game was already over)
        traversal: Counting order used for the round
    """
    state: GameState
    eliminated: Position | None
    traversal: tuple[Position, ...]


class MashEngine:
    """Stateless engine for the elimination game."""

    WEALTH_SYMBOLS: ClassVar[tuple[str, ...]] = tuple(code.value for code in WealthCode)

    # Clockwise layout: (side index, reversed?)
    # top (children) left to right, right (partners) top to bottom,
    # bottom (wealth) right to left, left (professions) bottom to top
    CLOCKWISE_ORDER: ClassVar[tuple[tuple[int, bool], ...]] = (
        (1, False),
        (2, False),
        (3, True),
        (0, True),
    )

    BASE_SPEED_MS: ClassVar[int] = 1000
    SPEED_DECREASE_MS: ClassVar[int] = 300
    AGE_BRACKET: ClassVar[int] = 20
    MIN_SPEED_MS: ClassVar[int] = 150

    MAX_RANDOM_CHILDREN: ClassVar[int] = 12
    DESTINY_CYCLE_SPAN: ClassVar[int] = 25

    # === Construction ===

    @classmethod
    def generate_wealth_options(
        cls,
        count: int,
        rng: random.Random | None = None,
    ) -> tuple[str, ...]:
        """
        Generate the wealth side.

        The first three values are always P, R, M so every symbol appears
        when count >= 3. Each later value is picked from the two symbols
        that differ from the previous one, so no two neighbours repeat.

        Args:
            count: Number of wealth options
            rng: Random source with a ``choice`` method (defaults to ``random``)

        Returns:
            Tuple of wealth codes

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Wealth option count cannot be negative, got {count}.")

        chooser = rng if rng is not None else random
        result: list[str] = list(cls.WEALTH_SYMBOLS[:count])

        while len(result) < count:
            previous = result[-1]
            available = [s for s in cls.WEALTH_SYMBOLS if s != previous]
            result.append(chooser.choice(available))

        return tuple(result)

    @classmethod
    def generate_sequential_children(cls, count: int) -> tuple[int, ...]:
        """Children options 1, 2, ..., count."""
        return tuple(range(1, count + 1))

    @classmethod
    def generate_random_children(
        cls,
        count: int,
        rng: random.Random | None = None,
    ) -> tuple[int, ...]:
        """Children options drawn uniformly from 1-12."""
        chooser = rng if rng is not None else random
        return tuple(chooser.randint(1, cls.MAX_RANDOM_CHILDREN) for _ in range(count))

    @classmethod
    def generate_random_cycle(
        cls,
        min_age: int = 13,
        rng: random.Random | None = None,
    ) -> int:
        """
        Let destiny pick the cycle number (the marriage age).

        Args:
            min_age: Lowest possible cycle number, usually the player's age
            rng: Random source with a ``randint`` method

        Returns:
            A cycle number in [min_age, min_age + 25]
        """
        validate_cycle_number(min_age)
        chooser = rng if rng is not None else random
        return chooser.randint(min_age, min_age + cls.DESTINY_CYCLE_SPAN)

    @classmethod
    def create_game_state(
        cls,
        config: GameConfig,
        rng: random.Random | None = None,
    ) -> GameState:
        """
        Build the initial board from a validated config.

        Args:
            config: Validated game configuration
            rng: Random source for the wealth side

        Returns:
            A fresh GameState that is neither playing nor finished
        """
        wealth = cls.generate_wealth_options(len(config.professions), rng)
        return GameState(
            sides=(
                Side.from_values(SideId.PROFESSIONS, config.professions),
                Side.from_values(SideId.CHILDREN, config.children),
                Side.from_values(SideId.PARTNERS, config.partners),
                Side.from_values(SideId.WEALTH, wealth),
            ),
            cycle_number=config.cycle_number,
        )

    @classmethod
    def config_from_state(cls, state: GameState, cycle_number: int) -> GameConfig:
        """
        Rebuild a config from a board so the same options can be replayed.

        The wealth side is not part of the config; it is regenerated.
        """
        professions, children, partners, _ = state.sides
        return GameConfig(
            professions=tuple(o.value for o in professions.options),
            children=tuple(int(o.value) for o in children.options),
            partners=tuple(o.value for o in partners.options),
            cycle_number=cycle_number,
        )

    # === Traversal ===

    @classmethod
    def get_active_options(cls, sides: tuple[Side, ...]) -> tuple[Position, ...]:
        """
        Compute the clockwise counting order over active options.

        Locked sides (one active option or fewer) are skipped entirely.

        Args:
            sides: The four sides in board order

        Returns:
            Positions in counting order; empty when every side is locked
        """
        result: list[Position] = []

        for side_index, reverse in cls.CLOCKWISE_ORDER:
            side = sides[side_index]
            if side.is_locked:
                continue

            indices = side.active_indices
            if reverse:
                indices = tuple(reversed(indices))

            result.extend(Position(side_index, i) for i in indices)

        return tuple(result)

    @classmethod
    def landing_position(
        cls,
        traversal: tuple[Position, ...],
        cycle_number: int,
    ) -> Position:
        """
        Position reached after counting ``cycle_number`` steps.

        Raises:
            ValueError: If the traversal is empty
        """
        if not traversal:
            raise ValueError("Cannot count over an empty traversal.")
        return traversal[(cycle_number - 1) % len(traversal)]

    # === Elimination ===

    @classmethod
    def is_game_finished(cls, sides: tuple[Side, ...]) -> bool:
        """True when every side has exactly one active option."""
        return all(side.active_count == 1 for side in sides)

    @classmethod
    def eliminate(cls, state: GameState, position: Position) -> GameState:
        """
        Eliminate one option and recompute the finished flag.

        Args:
            state: Current game state
            position: Option to eliminate

        Returns:
            New GameState with the option eliminated and is_playing cleared

        Raises:
            ValueError: If the game is finished, the position is invalid,
                the option is already eliminated, or its side is locked
        """
        if state.is_finished:
            raise ValueError("Game is already finished.")
        if not (0 <= position.side_index < len(state.sides)):
            raise ValueError(f"Side index must be 0-3, got {position.side_index}.")

        side = state.sides[position.side_index]
        if side.is_locked:
            raise ValueError(f"Side {side.id.value} is locked and cannot lose options.")

        sides = list(state.sides)
        sides[position.side_index] = side.with_option_eliminated(position.option_index)
        new_sides = tuple(sides)

        return replace(
            state,
            sides=new_sides,
            is_playing=False,
            is_finished=cls.is_game_finished(new_sides),
        )

    @classmethod
    def play_round(cls, state: GameState) -> RoundOutcome:
        """
        Play one round without any timing.

        Args:
            state: Current game state

        Returns:
            RoundOutcome with the new state and the eliminated position

        Raises:
            ValueError: If the game is already finished
        """
        if state.is_finished:
            raise ValueError("Game is already finished.")

        traversal = cls.get_active_options(state.sides)
        if not traversal:
            return RoundOutcome(
                state=replace(state, is_playing=False, is_finished=True),
                eliminated=None,
                traversal=traversal,
            )

        position = cls.landing_position(traversal, state.cycle_number)
        return RoundOutcome(
            state=cls.eliminate(state, position),
            eliminated=position,
            traversal=traversal,
        )

    @classmethod
    def play_until_finished(
        cls,
        state: GameState,
    ) -> tuple[GameState, tuple[Position, ...]]:
        """
        Play rounds until the game is finished.

        Returns:
            Tuple of (final_state, eliminated positions in order)
        """
        eliminated: list[Position] = []
        while not state.is_finished:
            outcome = cls.play_round(state)
            state = outcome.state
            if outcome.eliminated is not None:
                eliminated.append(outcome.eliminated)
        return state, tuple(eliminated)

    # === Pacing ===

    @classmethod
    def calculate_game_speed(cls, cycle_number: int) -> int:
        """
        Milliseconds per counting tick.

        Every full bracket of 20 above 1 speeds the count up by 300 ms,
        never going below 150 ms.

        Examples:
            1 -> 1000, 20 -> 1000, 21 -> 700, 41 -> 400, 200 -> 150
        """
        brackets = max(0, (cycle_number - 1) // cls.AGE_BRACKET)
        speed = cls.BASE_SPEED_MS - brackets * cls.SPEED_DECREASE_MS
        return max(speed, cls.MIN_SPEED_MS)

    # === Results ===

    @classmethod
    def get_final_results(cls, sides: tuple[Side, ...]) -> FinalResult:
        """
        Extract the surviving option of every side.

        Raises:
            ValueError: If any side does not have exactly one active option
        """
        if not cls.is_game_finished(sides):
            raise ValueError("Results are only available once the game is finished.")

        survivors = [side.options[side.active_indices[0]].value for side in sides]
        profession, children, partner, wealth = survivors

        return FinalResult(
            profession=profession,
            children=int(children),
            partner=partner,
            wealth=wealth,
        )
