"""
Destino - Base Classes Tests

Tests for dataclasses, enums, and validation utilities.
"""

from dataclasses import FrozenInstanceError, replace

import pytest
from src.engine.base import (
    SIDE_LABELS,
    SIDE_ORDER,
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
from src.engine.validators import (
    validate_children_counts,
    validate_cycle_number,
    validate_option_count,
    validate_option_values,
    validate_player_age,
)


class TestEnums:
    """Tests for SideId and WealthCode."""

    def test_side_order(self):
        assert [s.value for s in SIDE_ORDER] == [
            "professions", "children", "partners", "wealth",
        ]

    def test_every_side_has_a_label(self):
        assert set(SIDE_LABELS) == set(SideId)

    def test_wealth_codes(self):
        assert [c.value for c in WealthCode] == ["P", "R", "M"]


class TestOption:
    """Tests for Option dataclass."""

    def test_defaults_to_active(self):
        assert Option("A").eliminated is False

    def test_eliminate_returns_new_option(self):
        opt = Option("A")
        gone = opt.eliminate()
        assert gone.eliminated is True
        assert opt.eliminated is False

    def test_cannot_eliminate_twice(self):
        with pytest.raises(ValueError, match="already eliminated"):
            Option("A", eliminated=True).eliminate()

    def test_immutability(self):
        opt = Option("A")
        with pytest.raises(FrozenInstanceError):
            opt.eliminated = True


class TestSide:
    """Tests for Side dataclass."""

    def test_from_values_stringifies(self):
        side = Side.from_values(SideId.CHILDREN, [1, 2, 3])
        assert [o.value for o in side.options] == ["1", "2", "3"]
        assert side.label == "Filhos"

    def test_custom_label(self):
        side = Side.from_values(SideId.PARTNERS, ["X"], label="Spouse")
        assert side.label == "Spouse"

    def test_active_indices(self):
        side = Side.from_values(SideId.PROFESSIONS, ["A", "B", "C"])
        side = side.with_option_eliminated(1)
        assert side.active_indices == (0, 2)
        assert side.active_count == 2
        assert side.is_locked is False

    def test_locked_with_one_active(self):
        side = Side.from_values(SideId.PROFESSIONS, ["A", "B", "C"])
        side = side.with_option_eliminated(0).with_option_eliminated(2)
        assert side.is_locked is True

    def test_option_order_kept(self):
        side = Side.from_values(SideId.PROFESSIONS, ["C", "A", "B"])
        side = side.with_option_eliminated(1)
        assert [o.value for o in side.options] == ["C", "A", "B"]

    def test_out_of_range_index(self):
        side = Side.from_values(SideId.PROFESSIONS, ["A", "B", "C"])
        with pytest.raises(ValueError, match="out of range"):
            side.with_option_eliminated(3)

    def test_to_dict(self):
        side = Side.from_values(SideId.WEALTH, ["P", "R"]).with_option_eliminated(0)
        assert side.to_dict() == {
            "id": "wealth",
            "label": "Fortuna",
            "options": [
                {"value": "P", "eliminated": True},
                {"value": "R", "eliminated": False},
            ],
        }


class TestGameState:
    """Tests for GameState dataclass."""

    def test_fresh_state_flags(self, fresh_state):
        assert fresh_state.is_playing is False
        assert fresh_state.is_finished is False
        assert fresh_state.cycle_number == 5

    def test_side_lookup(self, fresh_state):
        assert fresh_state.side(SideId.PARTNERS).options[0].value == "X"

    def test_option_counts(self, fresh_state):
        assert fresh_state.total_options == 12
        assert fresh_state.remaining_options == 12

    def test_requires_four_sides(self, fresh_state):
        with pytest.raises(ValueError, match="exactly 4 sides"):
            GameState(sides=fresh_state.sides[:3], cycle_number=5)

    def test_requires_side_order(self, fresh_state):
        swapped = (fresh_state.sides[1], fresh_state.sides[0]) + fresh_state.sides[2:]
        with pytest.raises(ValueError, match="Expected side professions"):
            GameState(sides=swapped, cycle_number=5)

    def test_rejects_zero_cycle(self, fresh_state):
        with pytest.raises(ValueError, match="positive"):
            replace(fresh_state, cycle_number=0)


class TestGameConfig:
    """Tests for GameConfig validation."""

    def test_lists_become_tuples(self):
        config = GameConfig(
            professions=["A", "B", "C"],
            children=[1, 2, 3],
            partners=["X", "Y", "Z"],
            cycle_number=5,
        )
        assert config.professions == ("A", "B", "C")
        assert config.children == (1, 2, 3)
        assert config.option_count == 3

    def test_strips_whitespace(self):
        config = GameConfig(
            professions=(" A ", "B", "C"),
            children=(1, 2, 3),
            partners=("X", "Y ", "Z"),
            cycle_number=5,
        )
        assert config.professions[0] == "A"
        assert config.partners[1] == "Y"

    def test_mismatched_lengths(self):
        with pytest.raises(ValueError, match="same number"):
            GameConfig(
                professions=("A", "B", "C", "D"),
                children=(1, 2, 3),
                partners=("X", "Y", "Z"),
                cycle_number=5,
            )

    @pytest.mark.parametrize("count", [2, 8])
    def test_option_count_range(self, count):
        with pytest.raises(ValueError, match="between 3 and 7"):
            GameConfig(
                professions=tuple("ABCDEFGH"[:count]),
                children=tuple(range(1, count + 1)),
                partners=tuple("STUVWXYZ"[:count]),
                cycle_number=5,
            )

    def test_blank_profession(self):
        with pytest.raises(ValueError, match="must not be empty"):
            GameConfig(
                professions=("A", "  ", "C"),
                children=(1, 2, 3),
                partners=("X", "Y", "Z"),
                cycle_number=5,
            )

    def test_zero_children(self):
        with pytest.raises(ValueError, match="must be positive"):
            GameConfig(
                professions=("A", "B", "C"),
                children=(0, 2, 3),
                partners=("X", "Y", "Z"),
                cycle_number=5,
            )

    def test_equality(self, basic_config):
        same = GameConfig(
            professions=["A", "B", "C"],
            children=[1, 2, 3],
            partners=["X", "Y", "Z"],
            cycle_number=5,
        )
        assert same == basic_config


class TestSnapshots:
    """Tests for FinalResult and BoardSnapshot."""

    def test_final_result_to_dict(self):
        result = FinalResult(profession="C", children=3, partner="X", wealth="M")
        assert result.to_dict() == {
            "profession": "C", "children": 3, "partner": "X", "wealth": "M",
        }

    def test_snapshot_from_state(self, fresh_state):
        snap = BoardSnapshot.from_state(
            fresh_state, highlighted_position=Position(1, 0), tick=1
        )
        assert snap.sides == fresh_state.sides
        assert snap.cycle_number == 5
        assert snap.highlighted_position == Position(1, 0)
        assert snap.last_eliminated_position is None

    def test_snapshot_to_dict(self, fresh_state):
        snap = BoardSnapshot.from_state(
            fresh_state, last_eliminated_position=Position(2, 1)
        )
        data = snap.to_dict()
        assert data["highlighted_position"] is None
        assert data["last_eliminated_position"] == {"side_index": 2, "option_index": 1}
        assert len(data["sides"]) == 4
        assert data["is_playing"] is False


class TestValidators:
    """Tests for validation functions."""

    @pytest.mark.parametrize("count", [3, 5, 7])
    def test_valid_option_count(self, count):
        assert validate_option_count(count) == count

    def test_option_count_rejects_bool(self):
        with pytest.raises(ValueError, match="integer"):
            validate_option_count(True)

    def test_option_values_rejects_plain_string(self):
        with pytest.raises(ValueError, match="single string"):
            validate_option_values("ABC", "professions")

    def test_option_values_rejects_non_strings(self):
        with pytest.raises(ValueError, match="index 1 must be a string"):
            validate_option_values(["A", 2, "C"], "partners")

    def test_children_rejects_floats(self):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_children_counts([1, 2.5, 3])

    @pytest.mark.parametrize("value", [0, -3])
    def test_cycle_number_must_be_positive(self, value):
        with pytest.raises(ValueError, match="positive"):
            validate_cycle_number(value)

    def test_cycle_number_rejects_bool(self):
        with pytest.raises(ValueError, match="integer"):
            validate_cycle_number(True)

    def test_cycle_number_valid(self):
        assert validate_cycle_number(110) == 110

    def test_player_age_range(self):
        assert validate_player_age(20, 10, 110) == 20
        with pytest.raises(ValueError, match="between 10 and 110"):
            validate_player_age(9, 10, 110)
