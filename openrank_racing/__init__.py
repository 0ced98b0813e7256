"""
OpenRank Racing Bar - monthly influence rankings as racing bar charts.

Fetches OpenDigger project_openrank_detail snapshots month by month,
derives each contributor's OpenRank (r * v), ranks every month and
composes a declarative racing bar chart configuration per frame.

Pipeline:
- MetricFetcher: one month's snapshot -> scored entries
- ingest / AggregatedSeries: month-keyed (entity, score) pairs
- build_frame: top-N ranking with per-entity color gradients
- compose: chart configuration for one frame
"""

__version__ = "0.1.0"

from openrank_racing.core.errors import (
    FetchError,
    InvalidConfig,
    ResolverError,
    SweepCancelled,
)
from openrank_racing.core.models import ExtractedEntry, RankedFrame, Snapshot
from openrank_racing.sources.fetcher import MetricFetcher, extract_entries
from openrank_racing.aggregation.series import AggregatedSeries, ingest
from openrank_racing.ranking.frame_builder import build_frame
from openrank_racing.chart.composer import compose
from openrank_racing.colors.store import AvatarColorStore
from openrank_racing.pipeline.workflow import RacingBarWorkflow

__all__ = [
    # Errors
    "FetchError",
    "InvalidConfig",
    "ResolverError",
    "SweepCancelled",
    # Models
    "ExtractedEntry",
    "RankedFrame",
    "Snapshot",
    # Pipeline
    "MetricFetcher",
    "extract_entries",
    "AggregatedSeries",
    "ingest",
    "build_frame",
    "compose",
    "AvatarColorStore",
    "RacingBarWorkflow",
]
