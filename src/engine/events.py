"""
Zehntausend - Game Event Definitions

Event types and payloads recorded by the engine while a game runs. The log
doubles as the points ledger: every change to a player's total is recorded
as an event carrying its `points_delta`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    TURN_STARTED = auto()
    POINTS_ADOPTED = auto()
    DICE_ROLLED = auto()
    DICE_KEPT = auto()
    PLAYER_BUST = auto()
    RULE_VIOLATED = auto()
    TURN_SUCCEEDED = auto()
    TURN_FAILED = auto()
    GAME_WON = auto()
    GAME_ABORTED = auto()


@dataclass(frozen=True)
class EventPayload:
    """One entry of the game log."""

    event: GameEvent
    turn_index: int
    player_name: str | None = None
    points_delta: int = 0
    data: dict[str, Any] = field(default_factory=dict)


class EventLog:
    """Ordered game log with optional listeners."""

    def __init__(self) -> None:
        self._events: list[EventPayload] = []
        self._listeners: list[Callable[[EventPayload], None]] = []

    def subscribe(self, listener: Callable[[EventPayload], None]) -> None:
        """Call `listener` for every event recorded from now on."""
        self._listeners.append(listener)

    def record(
        self,
        event: GameEvent,
        turn_index: int,
        player_name: str | None = None,
        points_delta: int = 0,
        **data: Any,
    ) -> EventPayload:
        payload = EventPayload(
            event=event,
            turn_index=turn_index,
            player_name=player_name,
            points_delta=points_delta,
            data=data,
        )
        self._events.append(payload)
        for listener in self._listeners:
            listener(payload)
        return payload

    def of_type(self, event: GameEvent) -> list[EventPayload]:
        return [e for e in self._events if e.event == event]

    def points_by_player(self) -> dict[str, int]:
        """Sum of recorded point deltas per player."""
        totals: dict[str, int] = {}
        for payload in self._events:
            if payload.player_name is not None and payload.points_delta:
                totals[payload.player_name] = totals.get(payload.player_name, 0) + payload.points_delta
        return totals

    def __iter__(self):
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)
