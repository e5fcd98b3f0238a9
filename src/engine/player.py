"""
Zehntausend - Players

`Player` is the engine-owned score keeper of one participant. Decision code
only ever sees a `PlayerView`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.engine.decisions import PlayerDecision


class Player:
    """
    Mutable accumulator of a player's points and game-entry status.

    Holds no game logic. Only the engine calls `apply_points`.
    """

    def __init__(self, name: str, decision: PlayerDecision) -> None:
        self.name = name
        self.decision = decision
        self._total_points = 0
        self._has_entered_game = False
        self.view = PlayerView(self)

    @property
    def total_points(self) -> int:
        return self._total_points

    @property
    def has_entered_game(self) -> bool:
        return self._has_entered_game

    def is_enter_game_threshold_reached(self, points: int, enter_game_threshold: int) -> bool:
        return points >= enter_game_threshold

    def apply_points(self, delta: int, enter_game_threshold: int) -> None:
        """Add `delta` (possibly negative) and update the entry flag."""
        self._total_points += delta
        if not self._has_entered_game and delta > 0:
            self._has_entered_game = self._total_points >= enter_game_threshold

    def __repr__(self) -> str:
        return f"Player(name={self.name!r}, total_points={self._total_points})"


class PlayerView:
    """Live read-only view of a `Player`."""

    __slots__ = ("_player",)

    def __init__(self, player: Player) -> None:
        self._player = player

    @property
    def name(self) -> str:
        return self._player.name

    @property
    def total_points(self) -> int:
        return self._player.total_points

    @property
    def has_entered_game(self) -> bool:
        return self._player.has_entered_game

    def __repr__(self) -> str:
        return f"PlayerView(name={self.name!r}, total_points={self.total_points})"
