"""Tests for src/config/settings.py: environment driven settings."""

import logging

import pytest
from pydantic import ValidationError

from src.config.settings import Settings, configure_logging, get_settings
from src.engine.base import GameConfig


class TestSettings:
    def test_defaults_match_game_config(self, monkeypatch):
        monkeypatch.delenv("ZEHNTAUSEND_WIN_THRESHOLD", raising=False)
        settings = Settings(_env_file=None)
        config = settings.to_game_config()
        assert config == GameConfig()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ZEHNTAUSEND_WIN_THRESHOLD", "5000")
        monkeypatch.setenv("ZEHNTAUSEND_NUM_DICE", "6")
        monkeypatch.setenv("ZEHNTAUSEND_MAX_TURNS", "200")
        config = Settings(_env_file=None).to_game_config()
        assert config.win_threshold == 5000
        assert config.num_dice == 6
        assert config.max_turns == 200

    def test_rejects_invalid_dice_count(self, monkeypatch):
        monkeypatch.setenv("ZEHNTAUSEND_NUM_DICE", "9")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestConfigureLogging:
    def test_debug_forces_debug_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        configure_logging(Settings(_env_file=None, debug=True))
        assert calls["level"] == logging.DEBUG

    def test_uses_log_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        configure_logging(Settings(_env_file=None, log_level="warning"))
        assert calls["level"] == "WARNING"
