"""
Zehntausend - Application Settings

Loads game rules and logging options from environment variables using
Pydantic Settings. Variables use the `ZEHNTAUSEND_` prefix and may also be
placed in a `.env` file.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from src.engine.base import GameConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game rules
    num_dice: int = Field(default=5, ge=1, le=6)
    win_threshold: int = Field(default=10000, gt=0)
    enter_game_threshold: int = Field(default=350, ge=0)
    round_threshold: int = Field(default=300, ge=0)
    max_turns: int | None = Field(default=None, gt=0)

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "ZEHNTAUSEND_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def to_game_config(self) -> GameConfig:
        """Game rules as an engine configuration."""
        return GameConfig(
            num_dice=self.num_dice,
            win_threshold=self.win_threshold,
            enter_game_threshold=self.enter_game_threshold,
            round_threshold=self.round_threshold,
            max_turns=self.max_turns,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from the settings (DEBUG when `debug` is set)."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
