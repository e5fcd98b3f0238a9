"""
Zehntausend Game Engine.

Pure Python game logic with no UI or persistence dependencies.
Handles dice rolling, scoring, the adoption mechanic and the turn loop.
"""

from src.engine.base import (
    NO_ADOPTION,
    Dice,
    GameConfig,
    GameRuleViolation,
    RoundAdoptionState,
    ScoringBreakdown,
    ScoringCategory,
    ScoringResult,
    TurnOutcome,
    TurnPhase,
    ViolationReason,
)
from src.engine.decisions import AdoptAction, DiceAction, PlayerDecision
from src.engine.events import EventLog, EventPayload, GameEvent
from src.engine.game import GameEngine, GameResult, TurnResult
from src.engine.player import Player, PlayerView
from src.engine.scoring import DiceScoring, ScoringTable

__all__ = [
    # Data Classes
    "Dice",
    "DiceAction",
    "EventPayload",
    "GameConfig",
    "GameResult",
    "GameRuleViolation",
    "RoundAdoptionState",
    "ScoringBreakdown",
    "ScoringResult",
    "ScoringTable",
    "TurnResult",
    "NO_ADOPTION",
    # Enums
    "AdoptAction",
    "GameEvent",
    "ScoringCategory",
    "TurnOutcome",
    "TurnPhase",
    "ViolationReason",
    # Players
    "Player",
    "PlayerDecision",
    "PlayerView",
    # Engines
    "DiceScoring",
    "EventLog",
    "GameEngine",
]
