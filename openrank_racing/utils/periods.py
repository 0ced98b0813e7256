"""
Period key helpers.

A period key is a "YYYY-MM" string identifying one month of the feed.
"""

import re
from typing import Iterable, List, Tuple

from openrank_racing.core.errors import InvalidConfig

PERIOD_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def format_period_key(year, month) -> str:
    """
    Build a period key from a year and month.

    Args:
        year: Four-digit year (str or int)
        month: Month number 1-12 (str or int, zero padding optional)

    Returns:
        "YYYY-MM" string
    """
    y, m = normalize_year_month(year, month)
    return f"{y}-{m}"


def normalize_year_month(year, month) -> Tuple[str, str]:
    """
    Normalize a year/month pair to ("YYYY", "MM") strings.

    Raises:
        InvalidConfig: If either part is not a valid year or month
    """
    year_str = str(year).strip()
    month_str = str(month).strip()

    if not year_str.isdigit() or len(year_str) != 4:
        raise InvalidConfig("year", year, f"Year must be four digits, got {year!r}")
    if not month_str.isdigit() or not 1 <= int(month_str) <= 12:
        raise InvalidConfig("month", month, f"Month must be 1-12, got {month!r}")

    return year_str, f"{int(month_str):02d}"


def parse_period_key(period_key: str) -> Tuple[str, str]:
    """
    Split a period key into ("YYYY", "MM").

    Raises:
        InvalidConfig: If the key is not a valid "YYYY-MM" string
    """
    match = PERIOD_KEY_PATTERN.match(period_key or "")
    if not match:
        raise InvalidConfig("period", period_key, f"Period must be YYYY-MM, got {period_key!r}")
    return normalize_year_month(match.group(1), match.group(2))


def iter_periods(years: Iterable, months: Iterable) -> List[Tuple[str, str]]:
    """
    Cartesian product of years and months, years outermost.

    Example:
        >>> iter_periods(["2023"], ["01", "02"])
        [('2023', '01'), ('2023', '02')]
    """
    month_list = list(months)
    return [
        normalize_year_month(year, month)
        for year in years
        for month in month_list
    ]


def month_range(start: str, end: str) -> List[Tuple[str, str]]:
    """
    Inclusive range of months between two period keys.

    Args:
        start: First period key
        end: Last period key

    Returns:
        List of (year, month) tuples in chronological order

    Raises:
        InvalidConfig: If either key is malformed or end precedes start
    """
    start_year, start_month = (int(p) for p in parse_period_key(start))
    end_year, end_month = (int(p) for p in parse_period_key(end))

    first = start_year * 12 + (start_month - 1)
    last = end_year * 12 + (end_month - 1)
    if last < first:
        raise InvalidConfig("end", end, f"End period {end} precedes start period {start}")

    return [
        (f"{index // 12:04d}", f"{index % 12 + 1:02d}")
        for index in range(first, last + 1)
    ]
