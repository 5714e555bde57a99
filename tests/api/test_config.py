"""Tests for configuration classes."""

import os
import pytest
from dataclasses import FrozenInstanceError
from unittest.mock import patch

from config import (
    AppConfig,
    CORSConfig,
    GameConfig,
    RateLimitConfig,
    RedisConfig,
    SecurityConfig,
    _parse_cors_origins,
)


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = GameConfig()

        assert config.hand_size == 8
        assert config.opponent_delay_ms == 1500
        assert config.auto_opponent is True

    def test_from_env(self):
        env = {"HAND_SIZE": "5", "OPPONENT_DELAY_MS": "0", "AUTO_OPPONENT": "FALSE"}
        with patch.dict(os.environ, env, clear=True):
            config = GameConfig()

        assert config.hand_size == 5
        assert config.opponent_delay_ms == 0
        assert config.auto_opponent is False

    @pytest.mark.parametrize("hand_size", [0, 24, 26])
    def test_hand_size_must_leave_a_playable_deck(self, hand_size):
        with pytest.raises(ValueError, match="hand_size"):
            GameConfig(hand_size=hand_size)

    def test_largest_hand_size_accepted(self):
        assert GameConfig(hand_size=23).hand_size == 23

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError, match="opponent_delay_ms"):
            GameConfig(opponent_delay_ms=-1)

    def test_frozen(self):
        config = GameConfig()
        with pytest.raises(FrozenInstanceError):
            config.hand_size = 7  # type: ignore


class TestCORSConfig:

    def test_default_origin(self):
        with patch.dict(os.environ, {}, clear=True):
            assert CORSConfig().allowed_origins == ["http://localhost:8000"]

    def test_origins_are_split_and_stripped(self):
        with patch.dict(os.environ, {"CORS_ORIGINS": " http://a.test , http://b.test ,"}):
            assert _parse_cors_origins() == ["http://a.test", "http://b.test"]


class TestRateLimitConfig:

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = RateLimitConfig()

        assert config.enabled is True
        assert config.requests_per_minute == 120

    @pytest.mark.parametrize("value", ["false", "False", "0", "no"])
    def test_disabled(self, value):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": value}):
            assert RateLimitConfig().enabled is False


class TestSecurityConfig:

    def test_secret_key_from_env(self):
        with patch.dict(os.environ, {"SECRET_KEY": "hunter2"}):
            assert SecurityConfig().secret_key == "hunter2"

    def test_generated_keys_differ(self):
        with patch.dict(os.environ, {}, clear=True):
            assert SecurityConfig().secret_key != SecurityConfig().secret_key


class TestRedisConfig:

    def test_url_without_password(self):
        config = RedisConfig(host="cache", port=6380, db=2, password=None)
        assert config.url == "redis://cache:6380/2"

    def test_url_with_password(self):
        config = RedisConfig(host="cache", port=6379, db=0, password="pw")
        assert config.url == "redis://:pw@cache:6379/0"


class TestAppConfig:

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig()

        assert config.debug is False
        assert config.port == 8000
        assert config.log_level == "INFO"
        assert config.session_ttl == 3600
        assert isinstance(config.game, GameConfig)

    def test_log_level_is_upper_cased(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert AppConfig().log_level == "DEBUG"
