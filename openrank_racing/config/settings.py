"""
Global configuration settings for the racing bar service.

Loads configuration from environment variables and provides
typed access to all system settings.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from openrank_racing.config.options import RacingBarOptions

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Global settings for the racing bar service."""

    # OpenDigger feed
    openrank_base_url: str = "https://oss.x-lab.info/open_digger/github"
    openrank_repo: str = "X-lab2017/open-digger"
    request_timeout: float = 30.0

    # Avatars
    avatar_base_url: str = "https://avatars.githubusercontent.com"
    avatar_size: int = 48

    # Chart defaults
    default_speed: float = 1.0
    default_max_bars: int = 10
    enable_animation: bool = True
    default_theme: str = "light"

    # Sweep
    sweep_concurrency: int = 1   # 1 = one month at a time
    max_sweep_months: int = 120

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Load settings from environment variables."""
        self.openrank_base_url = os.getenv("OPENRANK_BASE_URL", self.openrank_base_url)
        self.openrank_repo = os.getenv("OPENRANK_REPO", self.openrank_repo)
        self.avatar_base_url = os.getenv("AVATAR_BASE_URL", self.avatar_base_url)
        self.default_theme = os.getenv("RACING_BAR_THEME", self.default_theme)
        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.enable_animation = _env_bool("RACING_BAR_ANIMATION", self.enable_animation)

        # Numeric settings
        if os.getenv("OPENRANK_TIMEOUT"):
            self.request_timeout = float(os.getenv("OPENRANK_TIMEOUT"))
        if os.getenv("RACING_BAR_SPEED"):
            self.default_speed = float(os.getenv("RACING_BAR_SPEED"))
        if os.getenv("RACING_BAR_MAX_BARS"):
            self.default_max_bars = int(os.getenv("RACING_BAR_MAX_BARS"))
        if os.getenv("SWEEP_CONCURRENCY"):
            self.sweep_concurrency = int(os.getenv("SWEEP_CONCURRENCY"))
        if os.getenv("MAX_SWEEP_MONTHS"):
            self.max_sweep_months = int(os.getenv("MAX_SWEEP_MONTHS"))

    def default_options(self) -> RacingBarOptions:
        """
        Build validated chart options from the configured defaults.

        Raises:
            InvalidConfig: If the configured defaults are out of range
        """
        return RacingBarOptions(
            speed=self.default_speed,
            max_bars=self.default_max_bars,
            enable_animation=self.enable_animation,
        ).validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "openrank_base_url": self.openrank_base_url,
            "openrank_repo": self.openrank_repo,
            "request_timeout": self.request_timeout,
            "avatar_base_url": self.avatar_base_url,
            "avatar_size": self.avatar_size,
            "default_speed": self.default_speed,
            "default_max_bars": self.default_max_bars,
            "enable_animation": self.enable_animation,
            "default_theme": self.default_theme,
            "sweep_concurrency": self.sweep_concurrency,
            "max_sweep_months": self.max_sweep_months,
            "log_level": self.log_level,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**kwargs) -> Settings:
    """
    Configure global settings.

    Args:
        **kwargs: Settings fields to override (unknown keys are ignored)

    Returns:
        Configured Settings instance
    """
    settings = get_settings()

    for key, value in kwargs.items():
        if hasattr(settings, key):
            setattr(settings, key, value)

    return settings


def reset_settings() -> None:
    """Drop the global settings instance so the next call re-reads the environment."""
    global _settings
    _settings = None
