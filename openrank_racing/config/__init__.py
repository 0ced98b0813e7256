"""
Configuration module for the racing bar package.

Provides settings management and chart playback options.
"""

from openrank_racing.config.options import RacingBarOptions
from openrank_racing.config.settings import (
    Settings,
    get_settings,
    configure,
    reset_settings,
)

__all__ = [
    "RacingBarOptions",
    "Settings",
    "get_settings",
    "configure",
    "reset_settings",
]
