"""
Destino - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence

MIN_OPTIONS = 3
MAX_OPTIONS = 7
DEFAULT_OPTIONS = 3


def validate_option_count(count: int) -> int:
    """
    Validate the number of options per side.

    Args:
        count: Number of options on each side

    Returns:
        Validated count

    Raises:
        ValueError: If count is not between MIN_OPTIONS and MAX_OPTIONS
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"Option count must be an integer, got {type(count).__name__}.")

    if not (MIN_OPTIONS <= count <= MAX_OPTIONS):
        raise ValueError(
            f"Option count must be between {MIN_OPTIONS} and {MAX_OPTIONS}, got {count}."
        )

    return count


def validate_option_values(values: Sequence[str], name: str = "options") -> tuple[str, ...]:
    """
    Validate and normalize the text options of a side.

    Args:
        values: Sequence of option strings
        name: Side name used in error messages

    Returns:
        Stripped values as a tuple

    Raises:
        ValueError: If the count is out of range or any value is blank
    """
    if isinstance(values, str):
        raise ValueError(f"{name} must be a sequence of strings, not a single string.")

    values_tuple = tuple(values)
    validate_option_count(len(values_tuple))

    cleaned = []
    for i, value in enumerate(values_tuple):
        if not isinstance(value, str):
            raise ValueError(
                f"{name} value at index {i} must be a string, got {type(value).__name__}."
            )
        if not value.strip():
            raise ValueError(f"{name} value at index {i} must not be empty.")
        cleaned.append(value.strip())

    return tuple(cleaned)


def validate_children_counts(values: Sequence[int]) -> tuple[int, ...]:
    """
    Validate the children counts side.

    Args:
        values: Sequence of positive integers

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If the count is out of range or any value is not a positive integer
    """
    values_tuple = tuple(values)
    validate_option_count(len(values_tuple))

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(
                f"Children count at index {i} must be an integer, got {type(value).__name__}."
            )
        if value < 1:
            raise ValueError(f"Children count at index {i} must be positive, got {value}.")

    return values_tuple


def validate_cycle_number(cycle_number: int) -> int:
    """
    Validate the cycle number.

    Args:
        cycle_number: Counting target of every round

    Returns:
        Validated cycle number

    Raises:
        ValueError: If the cycle number is not a positive integer
    """
    if not isinstance(cycle_number, int) or isinstance(cycle_number, bool):
        raise ValueError(
            f"Cycle number must be an integer, got {type(cycle_number).__name__}."
        )

    if cycle_number < 1:
        raise ValueError(f"Cycle number must be positive, got {cycle_number}.")

    return cycle_number


def validate_player_age(age: int, min_age: int, max_age: int) -> int:
    """
    Validate a player's age against the allowed range.

    Raises:
        ValueError: If age is not an integer within [min_age, max_age]
    """
    if not isinstance(age, int) or isinstance(age, bool):
        raise ValueError(f"Age must be an integer, got {type(age).__name__}.")

    if not (min_age <= age <= max_age):
        raise ValueError(f"Age must be between {min_age} and {max_age}, got {age}.")

    return age
