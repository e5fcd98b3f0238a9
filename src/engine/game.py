"""
Zehntausend - Game Engine

Drives a complete game: round-robin turns, the per-turn rolling state
machine, scoring validation, the adoption mechanic and win detection.

Turn state machine:
    AWAITING_ADOPTION_DECISION -> ROLLING -> AWAITING_KEEP_DECISION
        -> ROLLING (continue) | SETTLED (stop, bust or rule violation)

Rule violations are carried through the turn as data so settlement always
runs before the offending player is told about the violation. A player's
total only changes in settlement.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from src.engine.base import (
    NO_ADOPTION,
    Dice,
    GameConfig,
    GameRuleViolation,
    RoundAdoptionState,
    TurnOutcome,
    TurnPhase,
    ViolationReason,
    faces_of,
)
from src.engine.decisions import AdoptAction, DiceAction, PlayerDecision
from src.engine.events import EventLog, GameEvent
from src.engine.player import Player, PlayerView
from src.engine.scoring import DiceScoring
from src.engine.validators import validate_dice_count, validate_faces, validate_player_names

logger = logging.getLogger(__name__)

DiceRoller = Callable[[int], Sequence[Dice]]


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one settled turn.

    Attributes:
        turn_index: Index of the turn within the game
        player_name: Player who took the turn
        outcome: SUCCESS or FAILURE
        points: Points of the turn when it ended (adopted points included)
        points_delta: Net change of the player's total over the whole turn
        adopted_points: Points taken over from the previous turn (0 if none)
        dice_remaining: Dice left unrolled when the turn ended
        rolls: Number of rolls made
        is_bust: Whether the turn ended with a roll without scoring dice
        violation: Rule the player broke, if any
    """
    turn_index: int
    player_name: str
    outcome: TurnOutcome
    points: int
    points_delta: int
    adopted_points: int
    dice_remaining: int
    rolls: int
    is_bust: bool = False
    violation: GameRuleViolation | None = None

    @property
    def successful(self) -> bool:
        return self.outcome == TurnOutcome.SUCCESS


@dataclass(frozen=True)
class GameResult:
    """
    Final result of a game.

    Attributes:
        winners: Players tied at the best total at or above the win threshold
        standings: (name, total points) in turn order
        turns_played: Number of turns taken
        rounds_played: Number of complete rounds
        aborted: True if the turn cap ended the game without a winner
    """
    winners: tuple[PlayerView, ...]
    standings: tuple[tuple[str, int], ...]
    turns_played: int
    rounds_played: int
    aborted: bool = False

    @property
    def winner_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.winners)


@dataclass
class _TurnProgress:
    """Mutable bookkeeping of the turn in flight."""
    points: int = 0
    dice_remaining: int = 0
    adopted_points: int = 0
    rolls: int = 0
    is_bust: bool = False
    violation: GameRuleViolation | None = None

    @property
    def failed(self) -> bool:
        return self.is_bust or self.violation is not None


class GameEngine:
    """
    Runs one game of Zehntausend for a fixed set of players.

    The engine owns every `Player` and the current `RoundAdoptionState`;
    decision code only receives `PlayerView`s and immutable values.
    """

    def __init__(
        self,
        players: Sequence[Player],
        config: GameConfig | None = None,
        roller: DiceRoller | None = None,
        rng: random.Random | None = None,
    ) -> None:
        validate_player_names([p.name for p in players])
        self.players: tuple[Player, ...] = tuple(players)
        self.config = config if config is not None else GameConfig()
        self.scoring = DiceScoring(self.config.scoring_table)
        self._rng = rng if rng is not None else random.Random()
        self._roller = roller if roller is not None else self._roll_random
        self.current_turn_index = 0
        self.previous_round_adoption_state: RoundAdoptionState = NO_ADOPTION
        self.phase = TurnPhase.SETTLED
        self.events = EventLog()
        self.history: list[TurnResult] = []

    @classmethod
    def create(
        cls,
        decisions: Mapping[str, PlayerDecision],
        config: GameConfig | None = None,
        roller: DiceRoller | None = None,
        rng: random.Random | None = None,
    ) -> "GameEngine":
        """Build an engine from player names mapped to their decision code."""
        players = [Player(name, decision) for name, decision in decisions.items()]
        return cls(players, config=config, roller=roller, rng=rng)

    # ------------------------------------------------------------------
    # Game loop
    # ------------------------------------------------------------------

    @property
    def views(self) -> tuple[PlayerView, ...]:
        return tuple(p.view for p in self.players)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_turn_index % len(self.players)]

    @property
    def is_round_complete(self) -> bool:
        return self.current_turn_index % len(self.players) == 0

    def run_game(self) -> GameResult:
        """
        Play turns until a round finishes with a player at the win threshold.

        Returns:
            GameResult with winners and final standings
        """
        views = self.views
        for player in self.players:
            player.decision.on_game_start(views, player.view)
        self.events.record(
            GameEvent.GAME_STARTED,
            self.current_turn_index,
            players=[p.name for p in self.players],
        )

        aborted = False
        while not self.has_a_player_won() or not self.is_round_complete:
            if self._turn_cap_reached():
                aborted = True
                break
            self.play_turn()

        winners = () if aborted else self.get_won_players()
        winner_views = tuple(p.view for p in winners)
        for player in self.players:
            player.decision.on_game_end(views, winner_views)

        if aborted:
            logger.warning(
                "Game aborted after %d turns without a winner", self.current_turn_index
            )
            self.events.record(GameEvent.GAME_ABORTED, self.current_turn_index)
        else:
            logger.info(
                "Game won by %s after %d turns",
                ", ".join(p.name for p in winners),
                self.current_turn_index,
            )
            self.events.record(
                GameEvent.GAME_WON,
                self.current_turn_index,
                winners=[p.name for p in winners],
            )

        return GameResult(
            winners=winner_views,
            standings=tuple((p.name, p.total_points) for p in self.players),
            turns_played=self.current_turn_index,
            rounds_played=self.current_turn_index // len(self.players),
            aborted=aborted,
        )

    def play_turn(self) -> TurnResult:
        """Play the current player's turn and advance to the next player."""
        player = self.current_player
        result = self._play_player_turn(player)
        self.history.append(result)
        self.current_turn_index += 1
        return result

    def has_a_player_won(self) -> bool:
        return any(p.total_points >= self.config.win_threshold for p in self.players)

    def get_won_players(self) -> tuple[Player, ...]:
        """All players tied at the best total among those at the win threshold."""
        qualified = [p for p in self.players if p.total_points >= self.config.win_threshold]
        if not qualified:
            return ()
        best = max(p.total_points for p in qualified)
        return tuple(p for p in qualified if p.total_points == best)

    def _turn_cap_reached(self) -> bool:
        max_turns = self.config.max_turns
        return (
            max_turns is not None
            and self.current_turn_index >= max_turns
            and self.is_round_complete
        )

    # ------------------------------------------------------------------
    # Turn state machine
    # ------------------------------------------------------------------

    def _play_player_turn(self, player: Player) -> TurnResult:
        adoption_state = self.previous_round_adoption_state
        progress = _TurnProgress()
        self.events.record(GameEvent.TURN_STARTED, self.current_turn_index, player.name)

        self.phase = TurnPhase.AWAITING_ADOPTION_DECISION
        adopt_action = player.decision.on_turn_start(adoption_state)
        if adopt_action == AdoptAction.ADOPT:
            progress.violation = self._check_adoption(player, adoption_state)
            if progress.violation is None:
                self._adopt(player, adoption_state, progress)

        if not progress.failed:
            self._roll_loop(player, progress)

        if not progress.failed:
            progress.violation = self._check_thresholds(player, progress.points)

        return self._settle(player, progress)

    def _check_adoption(
        self,
        player: Player,
        adoption_state: RoundAdoptionState
    ) -> GameRuleViolation | None:
        if not adoption_state.is_adoption_available():
            return GameRuleViolation(player.name, ViolationReason.ADOPTION_UNAVAILABLE)
        if adoption_state.adopted_points > player.total_points:
            return GameRuleViolation(
                player.name,
                ViolationReason.ADOPTION_NOT_AFFORDABLE,
                f"{player.total_points} of {adoption_state.adopted_points}",
            )
        return None

    def _adopt(
        self,
        player: Player,
        adoption_state: RoundAdoptionState,
        progress: _TurnProgress
    ) -> None:
        """Seed the turn with the adopted points and dice."""
        progress.points = adoption_state.adopted_points
        progress.dice_remaining = adoption_state.adopted_dice_remaining
        progress.adopted_points = adoption_state.adopted_points
        self.events.record(
            GameEvent.POINTS_ADOPTED,
            self.current_turn_index,
            player.name,
            points=progress.adopted_points,
            dice_remaining=progress.dice_remaining,
        )

    def _roll_loop(self, player: Player, progress: _TurnProgress) -> None:
        """Roll and keep dice until the player stops, busts or breaks a rule."""
        while True:
            self.phase = TurnPhase.ROLLING

            # All dice used up: every die goes back in
            if progress.dice_remaining == 0:
                progress.dice_remaining = self.config.num_dice

            dice = self._roll(progress.dice_remaining)
            progress.rolls += 1
            self.events.record(
                GameEvent.DICE_ROLLED,
                self.current_turn_index,
                player.name,
                faces=list(faces_of(dice)),
            )

            if not self.scoring.has_scoring_value(dice):
                progress.is_bust = True
                self.events.record(GameEvent.PLAYER_BUST, self.current_turn_index, player.name)
                return

            self.phase = TurnPhase.AWAITING_KEEP_DECISION
            action = player.decision.on_turn_dice_rolled(dice, progress.points)

            progress.violation = self._check_kept_dice(player, dice, action)
            if progress.violation is not None:
                return

            kept = action.dice_to_keep
            gained = self.scoring.points_for(kept)
            progress.points += gained
            progress.dice_remaining -= len(kept)
            self.events.record(
                GameEvent.DICE_KEPT,
                self.current_turn_index,
                player.name,
                faces=[int(d) for d in kept],
                points=gained,
            )

            if not action.continue_turn:
                return

    def _check_kept_dice(
        self,
        player: Player,
        rolled: tuple[Dice, ...],
        action: DiceAction
    ) -> GameRuleViolation | None:
        kept = action.dice_to_keep
        if len(kept) == 0:
            return GameRuleViolation(player.name, ViolationReason.EMPTY_KEEP)
        try:
            validate_faces(d.face if isinstance(d, Dice) else d for d in kept)
        except ValueError as exc:
            return GameRuleViolation(player.name, ViolationReason.NOT_ROLLED, str(exc))
        if not self.scoring.all_have_scoring_value(kept):
            return GameRuleViolation(
                player.name,
                ViolationReason.NON_SCORING_KEEP,
                f"kept {[int(d) for d in kept]}",
            )
        if not self.scoring.is_subset_of_rolled(rolled, kept):
            return GameRuleViolation(
                player.name,
                ViolationReason.NOT_ROLLED,
                f"rolled {list(faces_of(rolled))}, kept {[int(d) for d in kept]}",
            )
        return None

    def _check_thresholds(self, player: Player, points: int) -> GameRuleViolation | None:
        enter_threshold = self.config.enter_game_threshold
        if not player.has_entered_game and not player.is_enter_game_threshold_reached(
            points, enter_threshold
        ):
            return GameRuleViolation(
                player.name,
                ViolationReason.ENTRY_THRESHOLD,
                f"{points} of {enter_threshold}",
            )
        if points < self.config.round_threshold:
            return GameRuleViolation(
                player.name,
                ViolationReason.ROUND_THRESHOLD,
                f"{points} of {self.config.round_threshold}",
            )
        return None

    def _settle(self, player: Player, progress: _TurnProgress) -> TurnResult:
        """Apply the turn's outcome to the player and the adoption state."""
        self.phase = TurnPhase.SETTLED

        if not progress.failed:
            self._apply_points(
                player,
                progress.points,
                GameEvent.TURN_SUCCEEDED,
                points=progress.points,
                adopted_points=progress.adopted_points,
            )
            self.previous_round_adoption_state = RoundAdoptionState.from_successful_turn(
                progress.points, progress.dice_remaining
            )
            logger.debug(
                "%s scored %d points (%d dice left)",
                player.name, progress.points, progress.dice_remaining,
            )
            player.decision.on_turn_end(True, progress.points)
            return self._result(player, progress, TurnOutcome.SUCCESS, progress.points)

        # Adopted points are lost along with the rest of the turn
        lost = -progress.adopted_points
        self._apply_points(
            player,
            0,
            GameEvent.TURN_FAILED,
            points=progress.points,
            adopted_points=progress.adopted_points,
        )
        self.previous_round_adoption_state = NO_ADOPTION
        logger.debug(
            "%s failed the turn%s", player.name, " (bust)" if progress.is_bust else ""
        )
        player.decision.on_turn_end(False, lost)

        if progress.violation is not None:
            logger.info("Rule violation by %s", progress.violation)
            self.events.record(
                GameEvent.RULE_VIOLATED,
                self.current_turn_index,
                player.name,
                reason=progress.violation.reason.name,
                message=progress.violation.message,
            )
            player.decision.on_error(progress.violation)

        return self._result(player, progress, TurnOutcome.FAILURE, 0)

    def _apply_points(self, player: Player, delta: int, event: GameEvent, **data) -> None:
        if delta:
            player.apply_points(delta, self.config.enter_game_threshold)
        self.events.record(event, self.current_turn_index, player.name, points_delta=delta, **data)

    def _result(
        self,
        player: Player,
        progress: _TurnProgress,
        outcome: TurnOutcome,
        points_delta: int
    ) -> TurnResult:
        return TurnResult(
            turn_index=self.current_turn_index,
            player_name=player.name,
            outcome=outcome,
            points=progress.points,
            points_delta=points_delta,
            adopted_points=progress.adopted_points,
            dice_remaining=progress.dice_remaining,
            rolls=progress.rolls,
            is_bust=progress.is_bust,
            violation=progress.violation,
        )

    # ------------------------------------------------------------------
    # Dice
    # ------------------------------------------------------------------

    def _roll(self, count: int) -> tuple[Dice, ...]:
        validate_dice_count(count, self.config.num_dice)
        dice = tuple(self._roller(count))
        if len(dice) != count:
            raise ValueError(f"Dice roller returned {len(dice)} dice, expected {count}.")
        return dice

    def _roll_random(self, count: int) -> tuple[Dice, ...]:
        return Dice.roll_sorted(count, self._rng)
