"""
Data sources for monthly OpenRank snapshots.
"""

from openrank_racing.sources.data_sources import (
    DEFAULT_BASE_URL,
    DEFAULT_REPO,
    OpenRankSource,
)
from openrank_racing.sources.fetcher import (
    MetricFetcher,
    extract_entries,
    parse_snapshot,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_REPO",
    "OpenRankSource",
    "MetricFetcher",
    "extract_entries",
    "parse_snapshot",
]
