"""
Zehntausend - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Value types are immutable (frozen dataclasses) so they can be
handed to player decision code without copying.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.engine.scoring import ScoringTable


DICE_FACES = 6


class ScoringCategory(Enum):
    """Categories of scoring combinations."""
    SINGLE_ONE = auto()
    SINGLE_FIVE = auto()
    SINGLE_OTHER = auto()      # lone die of a custom single value
    THREE_OF_A_KIND = auto()
    FOUR_OF_A_KIND = auto()
    FIVE_OF_A_KIND = auto()
    SIX_OF_A_KIND = auto()
    LOW_STRAIGHT = auto()      # 1-2-3-4-5
    HIGH_STRAIGHT = auto()     # 2-3-4-5-6
    FULL_STRAIGHT = auto()     # 1-2-3-4-5-6


class TurnOutcome(Enum):
    """Terminal outcome of a single turn."""
    SUCCESS = "success"
    FAILURE = "failure"


class TurnPhase(Enum):
    """States of the per-turn state machine."""
    AWAITING_ADOPTION_DECISION = auto()
    ROLLING = auto()
    AWAITING_KEEP_DECISION = auto()
    SETTLED = auto()


class ViolationReason(Enum):
    """Game rules a player can break."""
    ADOPTION_UNAVAILABLE = "Adoption only possible if the previous player got points"
    ADOPTION_NOT_AFFORDABLE = "Adoption only possible if enough points"
    EMPTY_KEEP = "At least one dice must be kept"
    NON_SCORING_KEEP = "Not all dice to keep were worth something"
    NOT_ROLLED = "Dice that were not rolled were selected to keep"
    ENTRY_THRESHOLD = "Enter game threshold not reached"
    ROUND_THRESHOLD = "Round point threshold not reached"


@dataclass(frozen=True, order=True)
class Dice:
    """
    A single rolled six-sided die.

    Attributes:
        face: Face value (1-6)
    """
    face: int

    def __post_init__(self) -> None:
        """Validate the face is within range."""
        if not isinstance(self.face, int) or isinstance(self.face, bool):
            raise ValueError(f"Die face must be an integer, got {type(self.face).__name__}.")
        if not (1 <= self.face <= DICE_FACES):
            raise ValueError(
                f"Invalid die face {self.face}. Must be between 1 and {DICE_FACES}."
            )

    def __int__(self) -> int:
        return self.face

    def __str__(self) -> str:
        return str(self.face)

    @classmethod
    def roll(cls, rng: random.Random | None = None) -> "Dice":
        """Roll one fresh die."""
        source = rng if rng is not None else random
        return cls(source.randint(1, DICE_FACES))

    @classmethod
    def roll_sorted(cls, count: int, rng: random.Random | None = None) -> tuple["Dice", ...]:
        """
        Roll `count` fresh dice.

        Args:
            count: Number of dice to roll
            rng: Optional random source (module-level random if omitted)

        Returns:
            Tuple of dice sorted by face value
        """
        if count < 0:
            raise ValueError(f"Cannot roll a negative number of dice, got {count}.")
        return tuple(sorted(cls.roll(rng) for _ in range(count)))


def faces_of(dice: "tuple[Dice, ...] | list[Dice]") -> tuple[int, ...]:
    """Face values of a sequence of dice."""
    return tuple(d.face for d in dice)


@dataclass(frozen=True)
class ScoringBreakdown:
    """
    A single scoring component within a group of dice.

    Attributes:
        category: The type of scoring combination
        faces: The dice faces that contributed to this score
        points: Points awarded for this combination
        description: Human-readable description
    """
    category: ScoringCategory
    faces: tuple[int, ...]
    points: int
    description: str


@dataclass(frozen=True)
class ScoringResult:
    """
    Complete scoring result for a group of dice.

    Attributes:
        points: Total points scored
        breakdown: Individual scoring components
        scoring_dice_indices: Indices of dice that scored
        dice_count: Number of dice evaluated
    """
    points: int
    breakdown: tuple[ScoringBreakdown, ...]
    scoring_dice_indices: frozenset[int]
    dice_count: int

    @property
    def has_scoring_dice(self) -> bool:
        """Returns True if at least one die scored."""
        return len(self.scoring_dice_indices) > 0

    @property
    def is_bust(self) -> bool:
        """Returns True if no die scored."""
        return not self.has_scoring_dice

    @property
    def all_dice_score(self) -> bool:
        """Returns True if every evaluated die is part of a combination."""
        return self.dice_count > 0 and len(self.scoring_dice_indices) == self.dice_count

    def __str__(self) -> str:
        if self.is_bust:
            return "BUST! No scoring dice."
        lines = [f"Total: {self.points} points"]
        for item in self.breakdown:
            lines.append(f"  - {item.description}: {item.points}")
        return "\n".join(lines)


@dataclass(frozen=True)
class RoundAdoptionState:
    """
    What the next player may adopt from the turn that just ended.

    Only a successful turn makes adoption available. The engine replaces the
    state after every turn; it is never mutated.

    Attributes:
        adopted_points: Points the previous player finished with
        adopted_dice_remaining: Dice the previous player left unrolled
        adoption_available: Whether adopting is allowed at all
    """
    adopted_points: int = 0
    adopted_dice_remaining: int = 0
    adoption_available: bool = False

    def __post_init__(self) -> None:
        if self.adopted_points < 0:
            raise ValueError(f"Adopted points cannot be negative, got {self.adopted_points}.")
        if self.adopted_dice_remaining < 0:
            raise ValueError(
                f"Adopted dice count cannot be negative, got {self.adopted_dice_remaining}."
            )

    def is_adoption_available(self) -> bool:
        return self.adoption_available

    @classmethod
    def no_adoption(cls) -> "RoundAdoptionState":
        return NO_ADOPTION

    @classmethod
    def from_successful_turn(cls, points: int, dice_remaining: int) -> "RoundAdoptionState":
        """Adoption state left behind by a successful turn."""
        return cls(
            adopted_points=points,
            adopted_dice_remaining=dice_remaining,
            adoption_available=points > 0,
        )


NO_ADOPTION = RoundAdoptionState()


@dataclass(frozen=True)
class GameRuleViolation:
    """
    An illegal action attributed to one player.

    Violations are returned as data from the turn state machine and handed
    to the offending player's `on_error`; they never abort the game.

    Attributes:
        player_name: Name of the offending player
        reason: Which rule was broken
        detail: Optional extra context (e.g. threshold numbers)
    """
    player_name: str
    reason: ViolationReason
    detail: str = ""

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.reason.value} ({self.detail})"
        return self.reason.value

    def __str__(self) -> str:
        return f"{self.player_name}: {self.message}"


def _default_scoring_table() -> "ScoringTable":
    from src.engine.scoring import ScoringTable

    return ScoringTable()


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        num_dice: Size of the dice pool
        win_threshold: Points needed to win
        enter_game_threshold: Points a single turn must reach to enter the game
        round_threshold: Minimum points of any successful turn
        scoring_table: Point values of the scoring combinations
        max_turns: Optional turn cap; the game is aborted when it is reached
    """
    num_dice: int = 5
    win_threshold: int = 10000
    enter_game_threshold: int = 350
    round_threshold: int = 300
    scoring_table: "ScoringTable" = field(default_factory=_default_scoring_table)
    max_turns: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.num_dice <= DICE_FACES:
            raise ValueError(f"Number of dice must be between 1 and {DICE_FACES}.")
        if self.win_threshold <= 0:
            raise ValueError("Win threshold must be positive.")
        if self.enter_game_threshold < 0:
            raise ValueError("Enter game threshold cannot be negative.")
        if self.round_threshold < 0:
            raise ValueError("Round threshold cannot be negative.")
        if self.max_turns is not None and self.max_turns <= 0:
            raise ValueError("Max turns must be positive when set.")
