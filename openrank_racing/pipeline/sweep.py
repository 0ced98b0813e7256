"""
Month sweeps.

Fetches a list of months and folds them into an AggregatedSeries. A failed
month is logged and skipped. With concurrency > 1 the fetches overlap, but
every result is collected first and merged at a single point in the
requested month order, so the series never sees interleaved appends.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from openrank_racing.aggregation.series import AggregatedSeries, ingest
from openrank_racing.core.errors import FetchError, InvalidConfig, SweepCancelled
from openrank_racing.core.models import ExtractedEntry
from openrank_racing.utils.periods import format_period_key, normalize_year_month

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag checked at each fetch boundary."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        """
        Raises:
            SweepCancelled: If cancel() has been called
        """
        if self._cancelled:
            raise SweepCancelled("Sweep cancelled")


@dataclass
class SweepResult:
    """Outcome of a month sweep."""
    series: AggregatedSeries
    fetched: List[str] = field(default_factory=list)
    skipped: Dict[str, FetchError] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        """True when every requested month was fetched."""
        return not self.skipped and not self.cancelled

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "series": self.series.to_dict(),
            "fetched": list(self.fetched),
            "skipped": {key: err.to_dict() for key, err in self.skipped.items()},
            "cancelled": self.cancelled,
        }


async def _fetch_one(
    fetcher,
    year: str,
    month: str,
    cancel_token: Optional[CancellationToken],
    semaphore: Optional[asyncio.Semaphore] = None,
) -> Tuple[Optional[List[ExtractedEntry]], Optional[FetchError]]:
    """Fetch one month, returning (entries, None) or (None, error)."""
    period_key = format_period_key(year, month)

    async def run():
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        try:
            return await fetcher.fetch_entries(year, month), None
        except FetchError as e:
            if not e.period_key:
                e.period_key = period_key
            logger.warning(f"Skipping {period_key}: {e}")
            return None, e

    if semaphore is None:
        return await run()
    async with semaphore:
        return await run()


async def sweep_months(
    fetcher,
    periods: Iterable[Tuple[Any, Any]],
    concurrency: int = 1,
    cancel_token: Optional[CancellationToken] = None,
    series: Optional[AggregatedSeries] = None,
) -> SweepResult:
    """
    Fetch and aggregate a list of months.

    Args:
        fetcher: Object with an async fetch_entries(year, month)
        periods: (year, month) pairs, in the order they should be merged
        concurrency: Maximum overlapping fetches (1 = sequential)
        cancel_token: Optional token; checked before every fetch
        series: Series to extend (not modified; defaults to empty)

    Returns:
        SweepResult with the merged series, fetched and skipped months

    Raises:
        InvalidConfig: If concurrency < 1
    """
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise InvalidConfig("concurrency", concurrency, f"Concurrency must be >= 1, got {concurrency!r}")

    months = [normalize_year_month(year, month) for year, month in periods]
    result = SweepResult(series=series.copy() if series is not None else AggregatedSeries())

    outcomes: List[Tuple[str, str, Optional[List[ExtractedEntry]], Optional[FetchError]]] = []

    if concurrency == 1:
        for year, month in months:
            try:
                entries, error = await _fetch_one(fetcher, year, month, cancel_token)
            except SweepCancelled:
                result.cancelled = True
                break
            outcomes.append((year, month, entries, error))
    else:
        semaphore = asyncio.Semaphore(concurrency)
        gathered = await asyncio.gather(
            *(_fetch_one(fetcher, year, month, cancel_token, semaphore) for year, month in months),
            return_exceptions=True,
        )
        for (year, month), outcome in zip(months, gathered):
            if isinstance(outcome, SweepCancelled):
                result.cancelled = True
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            entries, error = outcome
            outcomes.append((year, month, entries, error))

    # Single merge point, in requested order
    for year, month, entries, error in outcomes:
        period_key = format_period_key(year, month)
        if error is not None:
            result.skipped[period_key] = error
            continue
        result.series = ingest(result.series, year, month, entries)
        result.fetched.append(period_key)

    if result.cancelled:
        logger.info(f"Sweep cancelled after {len(result.fetched)} of {len(months)} months")
    else:
        logger.info(
            f"Sweep complete: {len(result.fetched)} fetched, {len(result.skipped)} skipped"
        )
    return result
