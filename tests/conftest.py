"""
Zehntausend - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from src.engine.base import GameConfig
from src.engine.scoring import DiceScoring


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def scoring() -> DiceScoring:
    """Scoring rules with the default table."""
    return DiceScoring()


@pytest.fixture
def config() -> GameConfig:
    """Default rules with small thresholds so short scripts reach them."""
    return GameConfig(
        num_dice=5,
        win_threshold=1000,
        enter_game_threshold=0,
        round_threshold=0,
    )


@pytest.fixture
def d6_scoring_rolls() -> dict[str, tuple[tuple[int, ...], int, str]]:
    """
    Common roll patterns with expected scores.

    Returns:
        Dict mapping name to (dice_values, expected_points, description)
    """
    return {
        # Singles
        "single_one": ((1,), 100, "Single 1"),
        "single_five": ((5,), 50, "Single 5"),
        "two_ones": ((1, 1), 200, "Two 1s"),
        "one_and_five": ((1, 5), 150, "One 1 and one 5"),

        # Three of a kind
        "three_ones": ((1, 1, 1), 1000, "Three 1s"),
        "three_twos": ((2, 2, 2), 200, "Three 2s"),
        "three_sixes": ((6, 6, 6), 600, "Three 6s"),

        # Four or more of a kind
        "four_ones": ((1, 1, 1, 1), 2000, "Four 1s"),
        "four_fours": ((4, 4, 4, 4), 800, "Four 4s"),
        "five_fours": ((4, 4, 4, 4, 4), 1600, "Five 4s"),

        # Straights
        "low_straight": ((1, 2, 3, 4, 5), 500, "Low straight 1-5"),
        "high_straight": ((2, 3, 4, 5, 6), 750, "High straight 2-6"),
        "full_straight": ((1, 2, 3, 4, 5, 6), 1500, "Full straight 1-6"),

        # Mixed combinations
        "three_ones_plus_five": ((1, 1, 1, 5), 1050, "Three 1s + single 5"),
        "three_fours_plus_one": ((4, 4, 4, 1), 500, "Three 4s + single 1"),
        "partial_roll": ((1, 2, 3, 6), 100, "Single 1 among dead dice"),
        "bust_roll": ((2, 3, 4, 6), 0, "Bust roll"),
    }


@pytest.fixture
def d6_bust_rolls() -> list[tuple[int, ...]]:
    """Rolls without any scoring die."""
    return [
        (2,),
        (3,),
        (4,),
        (6,),
        (2, 3),
        (4, 6),
        (2, 3, 4),
        (2, 4, 6),
        (3, 4, 6),
        (2, 3, 4, 6),
        (2, 2, 3, 3, 4),
        (6, 6, 4, 4, 3),
    ]
