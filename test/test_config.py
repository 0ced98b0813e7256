"""
Tests for settings and chart options.
"""

import os
from unittest.mock import patch

import pytest

from openrank_racing.config.options import RacingBarOptions
from openrank_racing.config.settings import Settings, configure, get_settings, reset_settings
from openrank_racing.core.errors import InvalidConfig


class TestSettings:
    """Test environment-driven settings."""

    def test_env_overrides(self):
        """Environment variables override dataclass defaults."""
        env = {
            "OPENRANK_BASE_URL": "https://mirror.test",
            "OPENRANK_REPO": "owner/name",
            "OPENRANK_TIMEOUT": "5",
            "RACING_BAR_SPEED": "2.5",
            "RACING_BAR_MAX_BARS": "15",
            "RACING_BAR_ANIMATION": "false",
            "RACING_BAR_THEME": "dark",
            "SWEEP_CONCURRENCY": "4",
            "MAX_SWEEP_MONTHS": "24",
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        assert settings.openrank_base_url == "https://mirror.test"
        assert settings.openrank_repo == "owner/name"
        assert settings.request_timeout == 5.0
        assert settings.default_speed == 2.5
        assert settings.default_max_bars == 15
        assert settings.enable_animation is False
        assert settings.default_theme == "dark"
        assert settings.sweep_concurrency == 4
        assert settings.max_sweep_months == 24

    def test_default_options(self, settings):
        options = settings.default_options()
        assert options == RacingBarOptions(speed=1.0, max_bars=10, enable_animation=True)

    def test_invalid_default_options(self, settings):
        """Out-of-range configured defaults fail when used."""
        settings.default_speed = 0
        with pytest.raises(InvalidConfig):
            settings.default_options()

    def test_to_dict(self, settings):
        data = settings.to_dict()
        assert data["default_max_bars"] == 10
        assert data["sweep_concurrency"] == 1


class TestGlobalSettings:
    """Test the settings singleton."""

    def setup_method(self):
        reset_settings()

    def teardown_method(self):
        reset_settings()

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_configure(self):
        settings = configure(default_max_bars=3, unknown_key="ignored")

        assert settings is get_settings()
        assert settings.default_max_bars == 3
        assert not hasattr(settings, "unknown_key")

    def test_reset(self):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first


class TestRacingBarOptions:
    """Test option validation."""

    def test_defaults_valid(self):
        assert RacingBarOptions().validate() == RacingBarOptions()

    @pytest.mark.parametrize("kwargs", [
        {"speed": 0},
        {"speed": -2},
        {"speed": float("nan")},
        {"max_bars": 0},
        {"max_bars": 3.0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidConfig):
            RacingBarOptions(**kwargs).validate()

    def test_from_dict_accepts_camel_case(self):
        options = RacingBarOptions.from_dict({"speed": 3, "maxBars": 4, "enableAnimation": False})

        assert options.speed == 3
        assert options.max_bars == 4
        assert options.enable_animation is False

    def test_from_dict_defaults(self):
        assert RacingBarOptions.from_dict({}) == RacingBarOptions()

    def test_to_dict(self):
        assert RacingBarOptions(speed=2).to_dict() == {
            "speed": 2,
            "max_bars": 10,
            "enable_animation": True,
        }
