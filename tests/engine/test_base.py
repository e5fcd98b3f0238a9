"""
Zehntausend - Base Classes Tests

Tests for dataclasses, enums, and validation utilities.
"""

import random

import pytest

from src.engine.base import (
    NO_ADOPTION,
    Dice,
    GameConfig,
    GameRuleViolation,
    RoundAdoptionState,
    ScoringResult,
    ViolationReason,
    faces_of,
)
from src.engine.scoring import ScoringTable
from src.engine.validators import (
    validate_dice_count,
    validate_faces,
    validate_player_names,
)


class TestDice:
    """Tests for the Dice value type."""

    @pytest.mark.parametrize("face", [1, 2, 3, 4, 5, 6])
    def test_valid_faces(self, face: int):
        assert Dice(face).face == face

    @pytest.mark.parametrize("face", [0, 7, -1])
    def test_invalid_faces(self, face: int):
        with pytest.raises(ValueError, match="Invalid die face"):
            Dice(face)

    def test_non_integer_face(self):
        with pytest.raises(ValueError, match="must be an integer"):
            Dice("3")

    def test_immutable(self):
        die = Dice(3)
        with pytest.raises(AttributeError):
            die.face = 4

    def test_equality_by_face(self):
        assert Dice(5) == Dice(5)
        assert Dice(5) != Dice(1)

    def test_roll_range(self):
        """Roll 200 times; every value should be 1-6."""
        for _ in range(200):
            assert 1 <= Dice.roll().face <= 6

    def test_roll_sorted(self):
        dice = Dice.roll_sorted(5, random.Random(7))
        assert len(dice) == 5
        assert list(dice) == sorted(dice)

    def test_roll_sorted_is_seedable(self):
        assert Dice.roll_sorted(6, random.Random(3)) == Dice.roll_sorted(6, random.Random(3))

    def test_roll_sorted_negative(self):
        with pytest.raises(ValueError, match="negative"):
            Dice.roll_sorted(-1)

    def test_faces_of(self):
        assert faces_of((Dice(2), Dice(6))) == (2, 6)


class TestRoundAdoptionState:
    """Tests for RoundAdoptionState."""

    def test_no_adoption(self):
        state = RoundAdoptionState.no_adoption()
        assert state is NO_ADOPTION
        assert not state.is_adoption_available()
        assert state.adopted_points == 0

    def test_from_successful_turn(self):
        state = RoundAdoptionState.from_successful_turn(400, 2)
        assert state.is_adoption_available()
        assert state.adopted_points == 400
        assert state.adopted_dice_remaining == 2

    def test_zero_points_not_available(self):
        assert not RoundAdoptionState.from_successful_turn(0, 3).is_adoption_available()

    def test_immutable(self):
        state = RoundAdoptionState.from_successful_turn(400, 2)
        with pytest.raises(AttributeError):
            state.adopted_points = 0

    def test_negative_points_rejected(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            RoundAdoptionState(adopted_points=-50)


class TestGameRuleViolation:
    """Tests for GameRuleViolation."""

    def test_message_without_detail(self):
        violation = GameRuleViolation("Anna", ViolationReason.EMPTY_KEEP)
        assert violation.message == "At least one dice must be kept"

    def test_message_with_detail(self):
        violation = GameRuleViolation("Anna", ViolationReason.ENTRY_THRESHOLD, "200 of 350")
        assert violation.message == "Enter game threshold not reached (200 of 350)"
        assert str(violation).startswith("Anna: ")


class TestScoringResult:
    """Tests for ScoringResult properties."""

    def test_bust(self):
        result = ScoringResult(points=0, breakdown=(), scoring_dice_indices=frozenset(), dice_count=3)
        assert result.is_bust
        assert not result.all_dice_score
        assert str(result) == "BUST! No scoring dice."


class TestGameConfig:
    """Tests for GameConfig."""

    def test_defaults(self):
        config = GameConfig()
        assert config.num_dice == 5
        assert config.win_threshold == 10000
        assert config.max_turns is None
        assert isinstance(config.scoring_table, ScoringTable)

    @pytest.mark.parametrize("num_dice", [0, 7])
    def test_invalid_num_dice(self, num_dice: int):
        with pytest.raises(ValueError, match="Number of dice"):
            GameConfig(num_dice=num_dice)

    def test_invalid_win_threshold(self):
        with pytest.raises(ValueError, match="Win threshold"):
            GameConfig(win_threshold=0)

    def test_invalid_thresholds(self):
        with pytest.raises(ValueError, match="Enter game threshold"):
            GameConfig(enter_game_threshold=-1)
        with pytest.raises(ValueError, match="Round threshold"):
            GameConfig(round_threshold=-1)

    def test_invalid_max_turns(self):
        with pytest.raises(ValueError, match="Max turns"):
            GameConfig(max_turns=0)

    def test_hashable(self):
        assert hash(GameConfig()) == hash(GameConfig())
        assert len({GameConfig(), GameConfig(), GameConfig(num_dice=6)}) == 2


class TestValidators:
    """Tests for validation utilities."""

    def test_validate_faces(self):
        assert validate_faces([1, 5, 6]) == (1, 5, 6)

    def test_validate_faces_out_of_range(self):
        with pytest.raises(ValueError, match="index 1"):
            validate_faces([1, 9])

    def test_validate_faces_rejects_bool(self):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_faces([True])

    def test_validate_dice_count(self):
        assert validate_dice_count(3, 5) == 3
        with pytest.raises(ValueError, match="between 1 and 5"):
            validate_dice_count(0, 5)
        with pytest.raises(ValueError, match="between 1 and 5"):
            validate_dice_count(6, 5)

    def test_validate_player_names(self):
        assert validate_player_names(["a", "b"]) == ("a", "b")

    def test_validate_player_names_empty(self):
        with pytest.raises(ValueError, match="At least one player"):
            validate_player_names([])

    def test_validate_player_names_duplicates(self):
        with pytest.raises(ValueError, match="unique"):
            validate_player_names(["a", "a"])

    def test_validate_player_names_blank(self):
        with pytest.raises(ValueError, match="non-empty"):
            validate_player_names(["a", " "])
