"""
Chart configuration for the racing bar visualization.
"""

from openrank_racing.chart.theme import (
    DARK_TEXT_COLOR,
    ThemeMode,
)
from openrank_racing.chart.composer import (
    DEFAULT_FREQUENCY,
    avatar_rich_key,
    compose,
    format_entity_label,
    frame_interval,
)

__all__ = [
    "DARK_TEXT_COLOR",
    "ThemeMode",
    "DEFAULT_FREQUENCY",
    "avatar_rich_key",
    "compose",
    "format_entity_label",
    "frame_interval",
]
