"""
Zehntausend - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Iterable, Sequence

from src.engine.base import DICE_FACES


def validate_faces(values: Iterable[int]) -> tuple[int, ...]:
    """
    Validate and normalize die face values.

    Args:
        values: Face values to validate

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If a value is not an integer between 1 and 6
    """
    values_tuple = tuple(values)

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= DICE_FACES):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {DICE_FACES}."
            )

    return values_tuple


def validate_dice_count(count: int, num_dice: int) -> int:
    """
    Validate how many dice are about to be rolled.

    Args:
        count: Number of dice to roll
        num_dice: Size of the dice pool

    Returns:
        Validated count

    Raises:
        ValueError: If count is outside 1..num_dice
    """
    if not isinstance(count, int):
        raise ValueError(f"Dice count must be an integer, got {type(count).__name__}.")

    if not (1 <= count <= num_dice):
        raise ValueError(f"Dice count must be between 1 and {num_dice}, got {count}.")

    return count


def validate_player_names(names: Sequence[str]) -> tuple[str, ...]:
    """
    Validate the names of the players of a game.

    Args:
        names: Player names in turn order

    Returns:
        Validated names as a tuple

    Raises:
        ValueError: If there are no players or names repeat
    """
    if not names:
        raise ValueError("At least one player is required.")

    names_tuple = tuple(names)
    for name in names_tuple:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Player name must be a non-empty string, got {name!r}.")

    if len(set(names_tuple)) != len(names_tuple):
        raise ValueError(f"Player names must be unique, got {list(names_tuple)}.")

    return names_tuple
