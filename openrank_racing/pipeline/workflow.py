"""
Racing bar workflow.

Wires the fetcher, aggregator, frame builder and composer together:

    1. Sweep a range of months into an AggregatedSeries
    2. Rank any loaded month into a RankedFrame
    3. Compose the chart configuration for that frame
"""

import logging
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Tuple

from openrank_racing.aggregation.series import AggregatedSeries
from openrank_racing.chart.composer import compose
from openrank_racing.chart.theme import ThemeMode
from openrank_racing.colors.store import AvatarColorStore
from openrank_racing.config.options import RacingBarOptions
from openrank_racing.config.settings import Settings, get_settings
from openrank_racing.core.errors import InvalidConfig
from openrank_racing.core.models import RankedFrame
from openrank_racing.pipeline.sweep import CancellationToken, SweepResult, sweep_months
from openrank_racing.ranking.frame_builder import build_frame
from openrank_racing.utils.periods import iter_periods, month_range, parse_period_key

logger = logging.getLogger(__name__)


class RacingBarWorkflow:
    """
    End-to-end racing bar pipeline for one repository.

    Holds the aggregated series for the session; it only grows.
    """

    def __init__(
        self,
        fetcher,
        color_resolver=None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize workflow.

        Args:
            fetcher: MetricFetcher (or any object with async fetch_entries)
            color_resolver: ColorResolver or callable (defaults to a hashed-palette store)
            settings: Settings (defaults to global settings)
        """
        self.fetcher = fetcher
        self.color_resolver = color_resolver or AvatarColorStore()
        self.settings = settings or get_settings()
        self.series = AggregatedSeries()
        self.last_sweep: Optional[SweepResult] = None

    # =========================================================================
    # Loading
    # =========================================================================

    async def load(
        self,
        periods: Iterable[Tuple[Any, Any]],
        concurrency: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> SweepResult:
        """
        Fetch months and merge them into the session series.

        Args:
            periods: (year, month) pairs
            concurrency: Overlapping fetches (defaults to settings.sweep_concurrency)
            cancel_token: Optional cancellation token

        Returns:
            SweepResult of this sweep (its series is the full session series)
        """
        periods = list(periods)
        if len(periods) > self.settings.max_sweep_months:
            raise InvalidConfig(
                "periods",
                len(periods),
                f"At most {self.settings.max_sweep_months} months per sweep, got {len(periods)}",
            )

        result = await sweep_months(
            self.fetcher,
            periods,
            concurrency=self.settings.sweep_concurrency if concurrency is None else concurrency,
            cancel_token=cancel_token,
            series=self.series,
        )
        self.series = result.series
        self.last_sweep = result
        return result

    async def load_range(self, start: str, end: str, **kwargs) -> SweepResult:
        """Load every month from start to end inclusive ("YYYY-MM" keys)."""
        return await self.load(month_range(start, end), **kwargs)

    async def load_years(self, years: Iterable, months: Iterable, **kwargs) -> SweepResult:
        """Load the product of years and months, years outermost."""
        return await self.load(iter_periods(years, months), **kwargs)

    def period_keys(self) -> List[str]:
        """Loaded period keys in chronological order."""
        return sorted(self.series.period_keys())

    # =========================================================================
    # Frames
    # =========================================================================

    def _options(self, options: Optional[RacingBarOptions]) -> RacingBarOptions:
        if options is None:
            return self.settings.default_options()
        return options.validate()

    async def frame(
        self,
        period_key: str,
        options: Optional[RacingBarOptions] = None,
    ) -> RankedFrame:
        """Rank one loaded period."""
        parse_period_key(period_key)
        opts = self._options(options)
        return await build_frame(self.series, period_key, opts.max_bars, self.color_resolver)

    async def frame_config(
        self,
        period_key: str,
        options: Optional[RacingBarOptions] = None,
        theme_mode=None,
    ) -> Dict[str, Any]:
        """
        Build the chart configuration for one period.

        Raises:
            InvalidConfig: If the period, options or theme are invalid
        """
        opts = self._options(options)
        theme = ThemeMode.parse(theme_mode or self.settings.default_theme)

        ranked = await self.frame(period_key, opts)
        return self.compose_frame(ranked, opts, theme)

    def compose_frame(
        self,
        ranked: RankedFrame,
        options: Optional[RacingBarOptions] = None,
        theme_mode=None,
    ) -> Dict[str, Any]:
        """Compose the chart configuration for an already ranked frame."""
        opts = self._options(options)
        theme = ThemeMode.parse(theme_mode or self.settings.default_theme)
        return compose(
            ranked,
            ranked.period_key,
            speed=opts.speed,
            animation_enabled=opts.enable_animation,
            theme_mode=theme,
            avatar_base_url=self.settings.avatar_base_url,
            avatar_size=self.settings.avatar_size,
        )

    async def iter_frame_configs(
        self,
        options: Optional[RacingBarOptions] = None,
        theme_mode=None,
    ) -> AsyncIterator[Tuple[str, Dict[str, Any]]]:
        """Yield (period_key, config) for every loaded period, oldest first."""
        for period_key in self.period_keys():
            yield period_key, await self.frame_config(period_key, options, theme_mode)
