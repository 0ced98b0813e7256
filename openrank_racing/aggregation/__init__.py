"""
Aggregation of monthly entries into a period-keyed series.
"""

from openrank_racing.aggregation.series import (
    AggregatedSeries,
    ScorePair,
    group_entries,
    ingest,
)

__all__ = [
    "AggregatedSeries",
    "ScorePair",
    "group_entries",
    "ingest",
]
