"""
Utility module for the racing bar package.

Provides logging configuration, period key helpers and validation.
"""

from openrank_racing.utils.logger_config import setup_logging
from openrank_racing.utils.periods import (
    format_period_key,
    parse_period_key,
    iter_periods,
    month_range,
)
from openrank_racing.utils.validation import (
    is_finite_number,
    validate_speed,
    validate_max_bars,
)

__all__ = [
    "setup_logging",
    "format_period_key",
    "parse_period_key",
    "iter_periods",
    "month_range",
    "is_finite_number",
    "validate_speed",
    "validate_max_bars",
]
