"""
Zehntausend - Player Decisions

The interface bots implement. The engine calls into it and never implements
it; any object with these methods can play.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

from src.engine.base import Dice, GameRuleViolation, RoundAdoptionState

if TYPE_CHECKING:
    from src.engine.player import PlayerView


class AdoptAction(Enum):
    """Answer to the adoption offer at the start of a turn."""
    ADOPT = "adopt"
    IGNORE = "ignore"


@dataclass(frozen=True)
class DiceAction:
    """
    Answer to a roll.

    Attributes:
        dice_to_keep: Dice set aside for points
        continue_turn: Roll the remaining dice again (False banks the turn)
    """
    dice_to_keep: tuple[Dice, ...]
    continue_turn: bool

    @classmethod
    def keep(cls, dice: Sequence[Dice | int], continue_turn: bool) -> "DiceAction":
        """Build an action from dice or plain face values."""
        return cls(
            dice_to_keep=tuple(d if isinstance(d, Dice) else Dice(d) for d in dice),
            continue_turn=continue_turn,
        )


@runtime_checkable
class PlayerDecision(Protocol):
    """Callbacks a player implementation provides."""

    def on_game_start(self, players: tuple[PlayerView, ...], self_player: PlayerView) -> None:
        ...

    def on_turn_start(self, adoption_state: RoundAdoptionState) -> AdoptAction:
        ...

    def on_turn_dice_rolled(self, dice: tuple[Dice, ...], points_so_far: int) -> DiceAction:
        ...

    def on_turn_end(self, successful: bool, points_delta: int) -> None:
        ...

    def on_game_end(self, players: tuple[PlayerView, ...], winners: tuple[PlayerView, ...]) -> None:
        ...

    def on_error(self, violation: GameRuleViolation) -> None:
        ...
