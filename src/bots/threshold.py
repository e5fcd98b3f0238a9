"""
Zehntausend - Threshold Bot

Keeps every scoring die and banks once the turn is worth enough. Adopts the
previous player's turn when it can afford it and enough dice are left.
"""

import logging

from src.engine.base import Dice, GameConfig, GameRuleViolation, RoundAdoptionState
from src.engine.decisions import AdoptAction, DiceAction
from src.engine.player import PlayerView
from src.engine.scoring import DiceScoring

logger = logging.getLogger(__name__)


class ThresholdBot:
    """
    Bank-at-threshold strategy.

    Args:
        stop_at: Turn total at which the bot stops rolling
        min_adopt_dice: Fewest remaining dice worth adopting
        config: Rules of the game the bot plays in
    """

    def __init__(
        self,
        stop_at: int = 350,
        min_adopt_dice: int = 3,
        config: GameConfig | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.scoring = DiceScoring(self.config.scoring_table)
        self.stop_at = stop_at
        self.min_adopt_dice = min_adopt_dice
        self.me: PlayerView | None = None
        self.turn_deltas: list[int] = []
        self.errors: list[GameRuleViolation] = []
        self.won: bool | None = None

    def on_game_start(self, players: tuple[PlayerView, ...], self_player: PlayerView) -> None:
        self.me = self_player
        self.turn_deltas = []
        self.errors = []
        self.won = None

    def on_turn_start(self, adoption_state: RoundAdoptionState) -> AdoptAction:
        if (
            adoption_state.is_adoption_available()
            and self.me is not None
            and self.me.total_points >= adoption_state.adopted_points
            and adoption_state.adopted_dice_remaining >= self.min_adopt_dice
        ):
            return AdoptAction.ADOPT
        return AdoptAction.IGNORE

    def on_turn_dice_rolled(self, dice: tuple[Dice, ...], points_so_far: int) -> DiceAction:
        keep = self.scoring.scoring_dice(dice)
        total = points_so_far + self.scoring.points_for(keep)
        return DiceAction(dice_to_keep=keep, continue_turn=total < self._target())

    def on_turn_end(self, successful: bool, points_delta: int) -> None:
        self.turn_deltas.append(points_delta)

    def on_game_end(self, players: tuple[PlayerView, ...], winners: tuple[PlayerView, ...]) -> None:
        self.won = self.me is not None and any(w.name == self.me.name for w in winners)

    def on_error(self, violation: GameRuleViolation) -> None:
        logger.debug("Threshold bot violation: %s", violation)
        self.errors.append(violation)

    def _target(self) -> int:
        target = max(self.stop_at, self.config.round_threshold)
        if self.me is None or not self.me.has_entered_game:
            target = max(target, self.config.enter_game_threshold)
        return target
