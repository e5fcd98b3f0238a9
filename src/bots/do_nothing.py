"""
Zehntausend - Do Nothing Bot

Never adopts and always keeps every rolled die while continuing. Almost
every turn ends in a bust or a rule violation; useful as an opponent that
never scores.
"""

from src.engine.base import Dice, GameRuleViolation, RoundAdoptionState
from src.engine.decisions import AdoptAction, DiceAction
from src.engine.player import PlayerView


class DoNothingBot:
    """Bot that makes no useful decisions."""

    def on_game_start(self, players: tuple[PlayerView, ...], self_player: PlayerView) -> None:
        pass

    def on_turn_start(self, adoption_state: RoundAdoptionState) -> AdoptAction:
        return AdoptAction.IGNORE

    def on_turn_dice_rolled(self, dice: tuple[Dice, ...], points_so_far: int) -> DiceAction:
        # Keeping everything is invalid unless every die scores
        return DiceAction(dice_to_keep=tuple(dice), continue_turn=True)

    def on_turn_end(self, successful: bool, points_delta: int) -> None:
        pass

    def on_game_end(self, players: tuple[PlayerView, ...], winners: tuple[PlayerView, ...]) -> None:
        pass

    def on_error(self, violation: GameRuleViolation) -> None:
        # Violations are expected from this bot
        pass
