"""
Input validation utilities.

Every check raises InvalidConfig instead of clamping.
"""

import math
from typing import Any

from openrank_racing.core.errors import InvalidConfig


def is_finite_number(value: Any) -> bool:
    """
    Check for a real, finite number (booleans are rejected).

    Integers too large to convert to a float count as non-finite.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def validate_speed(speed: Any) -> float:
    """
    Validate a playback speed multiplier.

    Args:
        speed: Candidate speed

    Returns:
        Speed as float

    Raises:
        InvalidConfig: If speed is not a finite number > 0
    """
    if not is_finite_number(speed) or speed <= 0:
        raise InvalidConfig("speed", speed, f"Speed must be a positive number, got {speed!r}")
    return float(speed)


def validate_max_bars(max_bars: Any) -> int:
    """
    Validate the number of visible rank slots.

    Raises:
        InvalidConfig: If max_bars is not an integer > 0
    """
    if isinstance(max_bars, bool) or not isinstance(max_bars, int) or max_bars <= 0:
        raise InvalidConfig(
            "max_bars", max_bars, f"max_bars must be a positive integer, got {max_bars!r}"
        )
    return max_bars
