"""
Destino - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses); eliminating an
option produces a new GameState instead of changing the old one.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Sequence

from src.engine.validators import (
    validate_children_counts,
    validate_cycle_number,
    validate_option_values,
)


class SideId(Enum):
    """Identity of each side of the board, in board order."""
    PROFESSIONS = "professions"
    CHILDREN = "children"
    PARTNERS = "partners"
    WEALTH = "wealth"


class WealthCode(Enum):
    """Symbols used on the wealth side."""
    POOR = "P"
    RICH = "R"
    MILLIONAIRE = "M"


# Fixed side order of GameState.sides
SIDE_ORDER: tuple[SideId, ...] = (
    SideId.PROFESSIONS,
    SideId.CHILDREN,
    SideId.PARTNERS,
    SideId.WEALTH,
)

SIDE_LABELS: dict[SideId, str] = {
    SideId.PROFESSIONS: "Profissão",
    SideId.CHILDREN: "Filhos",
    SideId.PARTNERS: "Casamento",
    SideId.WEALTH: "Fortuna",
}


@dataclass(frozen=True)
class Position:
    """
    Stable coordinates of an option on the board.

    Attributes:
        side_index: Index into GameState.sides (0-3)
        option_index: Index into the side's options
    """
    side_index: int
    option_index: int

    def to_dict(self) -> dict[str, int]:
        return {"side_index": self.side_index, "option_index": self.option_index}


@dataclass(frozen=True)
class Option:
    """
    A single candidate value within a side.

    Attributes:
        value: Display value (children counts are stored as strings)
        eliminated: Whether the option has been crossed out
    """
    value: str
    eliminated: bool = False

    def eliminate(self) -> "Option":
        """Return the eliminated version of this option."""
        if self.eliminated:
            raise ValueError(f"Option {self.value!r} is already eliminated.")
        return replace(self, eliminated=True)


@dataclass(frozen=True)
class Side:
    """
    One category of the board.

    Attributes:
        id: Which category this side holds
        label: Display label for the presentation layer
        options: Options in creation order (never reordered)
    """
    id: SideId
    label: str
    options: tuple[Option, ...]

    @classmethod
    def from_values(
        cls,
        side_id: SideId,
        values: Sequence[Any],
        label: str | None = None,
    ) -> "Side":
        """Create a side with every option active."""
        return cls(
            id=side_id,
            label=label if label is not None else SIDE_LABELS[side_id],
            options=tuple(Option(value=str(v)) for v in values),
        )

    @property
    def active_indices(self) -> tuple[int, ...]:
        """Indices of options not yet eliminated."""
        return tuple(i for i, opt in enumerate(self.options) if not opt.eliminated)

    @property
    def active_count(self) -> int:
        return len(self.active_indices)

    @property
    def is_locked(self) -> bool:
        """A side with a single option left no longer takes part in counting."""
        return self.active_count <= 1

    def with_option_eliminated(self, option_index: int) -> "Side":
        """Return a copy of this side with one option eliminated."""
        if not (0 <= option_index < len(self.options)):
            raise ValueError(
                f"Option index {option_index} is out of range for side "
                f"{self.id.value} ({len(self.options)} options)."
            )
        options = list(self.options)
        options[option_index] = options[option_index].eliminate()
        return replace(self, options=tuple(options))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "label": self.label,
            "options": [
                {"value": opt.value, "eliminated": opt.eliminated}
                for opt in self.options
            ],
        }


@dataclass(frozen=True)
class GameState:
    """
    Complete state of one game session.

    Attributes:
        sides: The four sides in board order (professions, children, partners, wealth)
        cycle_number: Counting target of every round
        is_playing: True only while a round is counting
        is_finished: True once every side has exactly one active option
    """
    sides: tuple[Side, Side, Side, Side]
    cycle_number: int
    is_playing: bool = False
    is_finished: bool = False

    def __post_init__(self) -> None:
        """Validate side layout."""
        if len(self.sides) != len(SIDE_ORDER):
            raise ValueError(f"Game state must have exactly {len(SIDE_ORDER)} sides.")
        for side, expected in zip(self.sides, SIDE_ORDER):
            if side.id != expected:
                raise ValueError(
                    f"Expected side {expected.value}, got {side.id.value}."
                )
        validate_cycle_number(self.cycle_number)

    def side(self, side_id: SideId) -> Side:
        """Look up a side by identity."""
        return self.sides[SIDE_ORDER.index(side_id)]

    @property
    def total_options(self) -> int:
        return sum(len(side.options) for side in self.sides)

    @property
    def remaining_options(self) -> int:
        return sum(side.active_count for side in self.sides)


@dataclass(frozen=True)
class GameConfig:
    """
    Validated configuration for a game session.

    Attributes:
        professions: Profession options (3-7 non-empty strings)
        children: Children counts, same length as professions
        partners: Partner options, same length as professions
        cycle_number: Counting target for every round
    """
    professions: tuple[str, ...]
    children: tuple[int, ...]
    partners: tuple[str, ...]
    cycle_number: int

    def __post_init__(self) -> None:
        """Validate configuration."""
        # Normalize lists to tuples so the config stays hashable
        object.__setattr__(
            self, "professions", validate_option_values(self.professions, "professions")
        )
        object.__setattr__(self, "children", validate_children_counts(self.children))
        object.__setattr__(
            self, "partners", validate_option_values(self.partners, "partners")
        )
        validate_cycle_number(self.cycle_number)

        count = len(self.professions)
        if len(self.children) != count or len(self.partners) != count:
            raise ValueError(
                "Professions, children and partners must have the same number of "
                f"options (got {count}, {len(self.children)}, {len(self.partners)})."
            )

    @property
    def option_count(self) -> int:
        return len(self.professions)


@dataclass(frozen=True)
class FinalResult:
    """
    The surviving option of every side.

    Attributes:
        profession: Surviving profession
        children: Surviving children count
        partner: Surviving partner
        wealth: Surviving wealth code ("P", "R" or "M")
    """
    profession: str
    children: int
    partner: str
    wealth: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "profession": self.profession,
            "children": self.children,
            "partner": self.partner,
            "wealth": self.wealth,
        }


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Everything the presentation layer needs to draw the board.

    Attributes:
        sides: Current sides
        cycle_number: Counting target shown in the board centre
        is_playing: Whether a round is counting
        is_finished: Whether the game is over
        highlighted_position: Option the counter is on, if counting
        last_eliminated_position: Option removed by the last round
    """
    sides: tuple[Side, ...]
    cycle_number: int
    is_playing: bool = False
    is_finished: bool = False
    highlighted_position: Position | None = None
    last_eliminated_position: Position | None = None
    tick: int = 0

    @classmethod
    def from_state(
        cls,
        state: GameState,
        highlighted_position: Position | None = None,
        last_eliminated_position: Position | None = None,
        tick: int = 0,
    ) -> "BoardSnapshot":
        return cls(
            sides=state.sides,
            cycle_number=state.cycle_number,
            is_playing=state.is_playing,
            is_finished=state.is_finished,
            highlighted_position=highlighted_position,
            last_eliminated_position=last_eliminated_position,
            tick=tick,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for rendering."""
        return {
            "sides": [side.to_dict() for side in self.sides],
            "cycle_number": self.cycle_number,
            "is_playing": self.is_playing,
            "is_finished": self.is_finished,
            "highlighted_position": (
                self.highlighted_position.to_dict()
                if self.highlighted_position else None
            ),
            "last_eliminated_position": (
                self.last_eliminated_position.to_dict()
                if self.last_eliminated_position else None
            ),
            "tick": self.tick,
        }
