"""
Zehntausend Bots.

Reference implementations of the player decision interface.
"""

from src.bots.do_nothing import DoNothingBot
from src.bots.threshold import ThresholdBot

__all__ = ["DoNothingBot", "ThresholdBot"]
