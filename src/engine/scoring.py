"""
Zehntausend - Dice Scoring

Scoring and validity rules for groups of dice. The point values live in a
`ScoringTable` so rule variants can be swapped without touching the engine.

Default scoring table:
    - Single 1: 100 points
    - Single 5: 50 points
    - Three 1s: 1,000 points
    - Three of X (2-6): X × 100 points
    - Four+ of a kind: Previous tier × 2
    - 1-2-3-4-5 (Low Straight): 500 points
    - 2-3-4-5-6 (High Straight): 750 points
    - 1-2-3-4-5-6 (Full Straight): 1,500 points
"""

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

from src.engine.base import (
    Dice,
    ScoringBreakdown,
    ScoringCategory,
    ScoringResult,
)
from src.engine.validators import validate_faces

LOW_STRAIGHT = (1, 2, 3, 4, 5)
HIGH_STRAIGHT = (2, 3, 4, 5, 6)
FULL_STRAIGHT = (1, 2, 3, 4, 5, 6)

_SET_CATEGORIES = {
    3: ScoringCategory.THREE_OF_A_KIND,
    4: ScoringCategory.FOUR_OF_A_KIND,
    5: ScoringCategory.FIVE_OF_A_KIND,
    6: ScoringCategory.SIX_OF_A_KIND,
}

_SINGLE_CATEGORIES = {
    1: ScoringCategory.SINGLE_ONE,
    5: ScoringCategory.SINGLE_FIVE,
}


def _default_single_values() -> dict[int, int]:
    return {1: 100, 5: 50}


def _default_triple_values() -> dict[int, int]:
    return {1: 1000, 2: 200, 3: 300, 4: 400, 5: 500, 6: 600}


@dataclass(frozen=True)
class ScoringTable:
    """
    Point values of every scoring combination.

    Attributes:
        single_values: Points for a lone die of a face (faces not listed score 0)
        triple_values: Points for three of a kind per face
        extra_die_multiplier: Factor applied per die beyond three of a kind
        low_straight: Points for 1-2-3-4-5 (0 disables)
        high_straight: Points for 2-3-4-5-6 (0 disables)
        full_straight: Points for 1-2-3-4-5-6 (0 disables)
    """
    single_values: Mapping[int, int] = field(default_factory=_default_single_values)
    triple_values: Mapping[int, int] = field(default_factory=_default_triple_values)
    extra_die_multiplier: int = 2
    low_straight: int = 500
    high_straight: int = 750
    full_straight: int = 1500

    def __post_init__(self) -> None:
        # Read-only copies so the table stays a hashable value
        object.__setattr__(self, "single_values", MappingProxyType(dict(self.single_values)))
        object.__setattr__(self, "triple_values", MappingProxyType(dict(self.triple_values)))
        for face in (*self.single_values, *self.triple_values):
            if not 1 <= face <= 6:
                raise ValueError(f"Scoring table face {face} must be between 1 and 6.")
        if any(points < 0 for points in (*self.single_values.values(), *self.triple_values.values())):
            raise ValueError("Scoring table points cannot be negative.")
        if self.extra_die_multiplier < 1:
            raise ValueError("Extra die multiplier must be at least 1.")

    def __hash__(self) -> int:
        return hash((
            tuple(sorted(self.single_values.items())),
            tuple(sorted(self.triple_values.items())),
            self.extra_die_multiplier,
            self.low_straight,
            self.high_straight,
            self.full_straight,
        ))

    def set_points(self, face: int, count: int) -> int:
        """Points for `count` (>= 3) dice showing `face`."""
        points = self.triple_values.get(face, 0)
        for _ in range(count - 3):
            points *= self.extra_die_multiplier
        return points


class DiceScoring:
    """
    Pure scoring rules over groups of dice.

    Every method accepts dice (`Dice`) or plain face values and never
    mutates its input.
    """

    def __init__(self, table: ScoringTable | None = None) -> None:
        self.table = table if table is not None else ScoringTable()

    def has_scoring_value(self, dice: Sequence[Dice | int]) -> bool:
        """True if at least one die in the group scores."""
        return self.evaluate(dice).has_scoring_dice

    def all_have_scoring_value(self, subset: Sequence[Dice | int]) -> bool:
        """True if the group is non-empty and every die is part of a combination."""
        return self.evaluate(subset).all_dice_score

    def is_subset_of_rolled(
        self,
        rolled: Sequence[Dice | int],
        claimed: Sequence[Dice | int]
    ) -> bool:
        """
        True if every claimed die is matched by a distinct rolled die.

        A face can be claimed at most as often as it was rolled, so the
        claim can never be larger than the roll.
        """
        rolled_counts = Counter(_faces(rolled))
        claimed_counts = Counter(_faces(claimed))
        return all(rolled_counts[face] >= count for face, count in claimed_counts.items())

    def points_for(self, subset: Sequence[Dice | int]) -> int:
        """Total points of the group."""
        return self.evaluate(subset).points

    def scoring_dice(self, dice: Sequence[Dice | int]) -> tuple[Dice, ...]:
        """The dice of the group that take part in a scoring combination."""
        values = _faces(dice)
        result = self.evaluate(values)
        return tuple(Dice(values[i]) for i in sorted(result.scoring_dice_indices))

    def evaluate(self, dice: Sequence[Dice | int]) -> ScoringResult:
        """
        Score a group of dice.

        Straights are checked before sets, and sets before singles, so a
        combination never shares a die with another one.

        Args:
            dice: Dice (or face values) to score

        Returns:
            ScoringResult with total points, breakdown, and scoring indices
        """
        values = _faces(dice)
        if not values:
            return ScoringResult(
                points=0,
                breakdown=tuple(),
                scoring_dice_indices=frozenset(),
                dice_count=0,
            )

        breakdown: list[ScoringBreakdown] = []
        used: set[int] = set()

        straight = self._check_straights(values)
        if straight:
            breakdown.append(straight[0])
            used.update(straight[1])

        for item, indices in self._check_sets(values, used):
            breakdown.append(item)
            used.update(indices)

        for item, indices in self._check_singles(values, used):
            breakdown.append(item)
            used.update(indices)

        return ScoringResult(
            points=sum(item.points for item in breakdown),
            breakdown=tuple(breakdown),
            scoring_dice_indices=frozenset(used),
            dice_count=len(values),
        )

    def _check_straights(
        self,
        values: tuple[int, ...]
    ) -> tuple[ScoringBreakdown, set[int]] | None:
        """
        Check for straight combinations.

        Straights are mutually exclusive - only one can be scored.
        Full straight takes precedence, then high, then low.
        """
        candidates = (
            (FULL_STRAIGHT, self.table.full_straight, ScoringCategory.FULL_STRAIGHT, "Full Straight"),
            (HIGH_STRAIGHT, self.table.high_straight, ScoringCategory.HIGH_STRAIGHT, "High Straight"),
            (LOW_STRAIGHT, self.table.low_straight, ScoringCategory.LOW_STRAIGHT, "Low Straight"),
        )
        for straight, points, category, name in candidates:
            if points <= 0:
                continue
            indices = _find_indices_for_values(values, straight)
            if len(indices) == len(straight):
                return (
                    ScoringBreakdown(
                        category=category,
                        faces=straight,
                        points=points,
                        description=f"{name} ({'-'.join(map(str, straight))})"
                    ),
                    indices
                )
        return None

    def _check_sets(
        self,
        values: tuple[int, ...],
        used: set[int]
    ) -> list[tuple[ScoringBreakdown, set[int]]]:
        """Check for three or more of a kind among the unused dice."""
        found = []
        remaining = Counter(v for i, v in enumerate(values) if i not in used)

        for face in range(1, 7):
            count = remaining[face]
            if count < 3:
                continue
            points = self.table.set_points(face, count)
            if points <= 0:
                continue
            found.append((
                ScoringBreakdown(
                    category=_SET_CATEGORIES.get(count, ScoringCategory.SIX_OF_A_KIND),
                    faces=tuple([face] * count),
                    points=points,
                    description=f"{count}x {face}s"
                ),
                _find_indices_for_value(values, face, count, exclude=used),
            ))
        return found

    def _check_singles(
        self,
        values: tuple[int, ...],
        used: set[int]
    ) -> list[tuple[ScoringBreakdown, set[int]]]:
        """Check for remaining single dice that score on their own."""
        found = []
        remaining = Counter(v for i, v in enumerate(values) if i not in used)

        for face, single_points in sorted(self.table.single_values.items()):
            count = remaining[face]
            if count == 0 or single_points <= 0:
                continue
            category = _SINGLE_CATEGORIES.get(face, ScoringCategory.SINGLE_OTHER)
            found.append((
                ScoringBreakdown(
                    category=category,
                    faces=tuple([face] * count),
                    points=count * single_points,
                    description=f"{count}x Single {face}{'s' if count > 1 else ''}"
                ),
                _find_indices_for_value(values, face, count, exclude=used),
            ))
        return found


def _faces(dice: Sequence[Dice | int]) -> tuple[int, ...]:
    return validate_faces(d.face if isinstance(d, Dice) else d for d in dice)


def _find_indices_for_values(values: tuple[int, ...], targets: Sequence[int]) -> set[int]:
    """Find one index for each target value."""
    indices: set[int] = set()
    needed = list(targets)

    for i, v in enumerate(values):
        if v in needed:
            needed.remove(v)
            indices.add(i)

    return indices


def _find_indices_for_value(
    values: tuple[int, ...],
    target: int,
    count: int,
    exclude: set[int] | None = None
) -> set[int]:
    """Find `count` indices with the target value."""
    indices: set[int] = set()
    exclude = exclude or set()

    for i, v in enumerate(values):
        if v == target and i not in exclude and len(indices) < count:
            indices.add(i)

    return indices
