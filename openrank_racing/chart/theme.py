"""
Theme modes and their text colors.
"""

from enum import Enum
from typing import Optional

from openrank_racing.core.errors import InvalidConfig

DARK_TEXT_COLOR = "rgba(230, 237, 243, 0.9)"
LIGHT_WATERMARK_COLOR = "rgba(100, 100, 100, 0.3)"


class ThemeMode(str, Enum):
    """Ambient page theme."""
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value) -> "ThemeMode":
        """
        Coerce a string or ThemeMode.

        Raises:
            InvalidConfig: For anything other than light or dark
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidConfig("theme_mode", value, f"Theme must be light or dark, got {value!r}")

    @property
    def text_color(self) -> Optional[str]:
        """Axis/label text color (None means renderer default)."""
        return None if self is ThemeMode.LIGHT else DARK_TEXT_COLOR

    @property
    def watermark_color(self) -> str:
        return LIGHT_WATERMARK_COLOR if self is ThemeMode.LIGHT else DARK_TEXT_COLOR
