"""
Tests for period helpers and logging setup.
"""

import logging

import pytest

from openrank_racing.core.errors import InvalidConfig
from openrank_racing.core.models import is_bot_account
from openrank_racing.utils.logger_config import setup_logging
from openrank_racing.utils.periods import (
    format_period_key,
    iter_periods,
    month_range,
    normalize_year_month,
    parse_period_key,
)


class TestPeriods:
    """Test period key handling."""

    def test_format_pads_month(self):
        assert format_period_key(2023, 1) == "2023-01"
        assert format_period_key("2023", "12") == "2023-12"

    @pytest.mark.parametrize("year,month", [
        ("23", "01"),
        ("2023", "0"),
        ("2023", "13"),
        ("2023", "jan"),
        ("abcd", "01"),
    ])
    def test_invalid_parts(self, year, month):
        with pytest.raises(InvalidConfig):
            normalize_year_month(year, month)

    def test_parse(self):
        assert parse_period_key("2024-02") == ("2024", "02")

    @pytest.mark.parametrize("key", ["2024-2", "2024/02", "", None, "2024-13"])
    def test_parse_invalid(self, key):
        with pytest.raises(InvalidConfig):
            parse_period_key(key)

    def test_iter_periods_years_outermost(self):
        assert iter_periods(["2022", "2023"], ["1", "2"]) == [
            ("2022", "01"), ("2022", "02"), ("2023", "01"), ("2023", "02"),
        ]

    def test_month_range_crosses_year(self):
        assert month_range("2022-11", "2023-02") == [
            ("2022", "11"), ("2022", "12"), ("2023", "01"), ("2023", "02"),
        ]

    def test_month_range_single(self):
        assert month_range("2023-05", "2023-05") == [("2023", "05")]

    def test_month_range_reversed(self):
        with pytest.raises(InvalidConfig):
            month_range("2023-05", "2023-04")


class TestBots:
    def test_bot_suffix(self):
        assert is_bot_account("dependabot[bot]")
        assert not is_bot_account("bot")
        assert not is_bot_account("")


class TestLogging:
    """Test logging configuration."""

    def test_setup_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "racing.log"
        setup_logging("DEBUG")
        logger = setup_logging("WARNING", log_file=str(log_file))

        assert logger.name == "openrank_racing"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2

        logging.getLogger("openrank_racing.sources").warning("feed unavailable")
        for handler in logger.handlers:
            handler.flush()
        assert "feed unavailable" in log_file.read_text()

        setup_logging("INFO")

    def test_http_client_loggers_quieted(self):
        """httpx request logs are hidden unless running at DEBUG."""
        setup_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING

        setup_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.DEBUG

        setup_logging("INFO")
