"""
Playback options for the racing bar chart.
"""

from dataclasses import dataclass
from typing import Any, Dict

from openrank_racing.utils.validation import validate_max_bars, validate_speed


@dataclass
class RacingBarOptions:
    """Recognized tunables for one chart."""
    speed: float = 1.0              # Playback multiplier, > 0
    max_bars: int = 10              # Visible rank slots, > 0
    enable_animation: bool = True   # Transition smoothing on/off

    def validate(self) -> "RacingBarOptions":
        """
        Validate all fields.

        Returns:
            self, for chaining

        Raises:
            InvalidConfig: If speed or max_bars is out of range
        """
        validate_speed(self.speed)
        validate_max_bars(self.max_bars)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "speed": self.speed,
            "max_bars": self.max_bars,
            "enable_animation": self.enable_animation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RacingBarOptions":
        """Create from dictionary, using defaults for missing keys."""
        defaults = cls()
        return cls(
            speed=data.get("speed", defaults.speed),
            max_bars=data.get("max_bars", data.get("maxBars", defaults.max_bars)),
            enable_animation=data.get(
                "enable_animation", data.get("enableAnimation", defaults.enable_animation)
            ),
        )
