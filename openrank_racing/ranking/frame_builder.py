"""
Per-period ranking.

Ranks one period of an aggregated series by score, keeps the top N and
resolves a color pair for every surviving entity.
"""

import asyncio
import logging
from typing import List, Tuple

from openrank_racing.aggregation.series import AggregatedSeries, ScorePair
from openrank_racing.colors.palette import DEFAULT_COLORS
from openrank_racing.colors.store import call_loader
from openrank_racing.core.models import ColorPair, RankedEntry, RankedFrame, is_bot_account
from openrank_racing.utils.validation import validate_max_bars

logger = logging.getLogger(__name__)


def rank_pairs(pairs: List[ScorePair], max_bars: int) -> List[ScorePair]:
    """
    Sort pairs by score descending and keep the first max_bars.

    sorted() is stable, so equal scores keep their feed order.

    Raises:
        InvalidConfig: If max_bars is not a positive integer
    """
    validate_max_bars(max_bars)
    ordered = sorted(pairs, key=lambda pair: pair[1], reverse=True)
    return ordered[:max_bars]


async def _resolve(color_resolver, entity_id: str) -> ColorPair:
    """Resolve one entity's colors, falling back to the placeholder pair."""
    try:
        return await call_loader(color_resolver, entity_id)
    except Exception as e:
        logger.warning(f"Using default colors for {entity_id}: {e}")
        return DEFAULT_COLORS


async def build_frame(
    series: AggregatedSeries,
    period_key: str,
    max_bars: int,
    color_resolver,
) -> RankedFrame:
    """
    Build the ranked frame for one period.

    A period missing from the series yields an empty frame. Color lookups
    for all ranked entities run concurrently; a failed lookup degrades to
    DEFAULT_COLORS and never fails the frame. Bot accounts stay in the
    ranking and are only flagged.

    Args:
        series: Aggregated series
        period_key: "YYYY-MM" key to rank
        max_bars: Number of rank slots
        color_resolver: ColorResolver, or callable entity_id -> pair (sync or async)

    Returns:
        RankedFrame with at most max_bars entries

    Raises:
        InvalidConfig: If max_bars is not a positive integer
    """
    top = rank_pairs(series.get(period_key), max_bars)

    resolve = getattr(color_resolver, "get_colors", color_resolver)
    colors: Tuple[ColorPair, ...] = tuple(await asyncio.gather(
        *(_resolve(resolve, entity_id) for entity_id, _ in top)
    ))

    entries = tuple(
        RankedEntry(
            rank=rank,
            entity_id=entity_id,
            score=score,
            colors=pair,
            is_bot=is_bot_account(entity_id),
        )
        for rank, ((entity_id, score), pair) in enumerate(zip(top, colors), 1)
    )

    logger.debug(f"Built frame {period_key} with {len(entries)} of {max_bars} bars")
    return RankedFrame(period_key=period_key, max_bars=max_bars, entries=entries)
