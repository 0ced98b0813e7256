"""
Month-keyed aggregation of scored entries.

An AggregatedSeries maps "YYYY-MM" keys to (entity_id, score) pairs.
Keys keep ingestion order and pairs keep fetch order; nothing is sorted
here. Re-ingesting a month appends by default.
"""

from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from openrank_racing.core.models import ExtractedEntry
from openrank_racing.utils.periods import format_period_key

ScorePair = Tuple[str, float]


class AggregatedSeries:
    """
    Ordered mapping from period key to (entity_id, score) pairs.

    Backed by an explicit OrderedDict so key order is part of the contract.
    """

    def __init__(self, data: Optional[Dict[str, Iterable[ScorePair]]] = None):
        self._data: "OrderedDict[str, List[ScorePair]]" = OrderedDict()
        if data:
            for period_key, pairs in data.items():
                self._data[period_key] = [(str(eid), score) for eid, score in pairs]

    def get(self, period_key: str) -> List[ScorePair]:
        """Get a copy of a period's pairs (empty if the period is unknown)."""
        return list(self._data.get(period_key, ()))

    def period_keys(self) -> List[str]:
        """Period keys in ingestion order."""
        return list(self._data.keys())

    def copy(self) -> "AggregatedSeries":
        """Independent copy of this series."""
        return AggregatedSeries(self._data)

    def __contains__(self, period_key: str) -> bool:
        return period_key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AggregatedSeries):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"AggregatedSeries(periods={self.period_keys()})"

    def total_entries(self) -> int:
        """Number of pairs across all periods."""
        return sum(len(pairs) for pairs in self._data.values())

    def to_dict(self) -> Dict[str, List[List]]:
        """Convert to a JSON-friendly dictionary."""
        return {
            period_key: [[eid, score] for eid, score in pairs]
            for period_key, pairs in self._data.items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Iterable[ScorePair]]) -> "AggregatedSeries":
        """Create from dictionary of period key to pairs."""
        return cls(data)

    def _put(self, period_key: str, pairs: List[ScorePair], replace: bool) -> None:
        if replace or period_key not in self._data:
            self._data[period_key] = list(pairs)
        else:
            self._data[period_key].extend(pairs)


def ingest(
    series: AggregatedSeries,
    year,
    month,
    entries: Iterable[ExtractedEntry],
    replace: bool = False,
) -> AggregatedSeries:
    """
    Merge one month's entries into a series.

    The input series is not modified. Re-ingesting a month that is already
    present appends duplicate pairs unless replace is True.

    Args:
        series: Existing series
        year: Four-digit year
        month: Month 1-12
        entries: Entries for that month, in fetch order
        replace: Overwrite the month instead of appending

    Returns:
        New AggregatedSeries containing the merge
    """
    period_key = format_period_key(year, month)
    merged = series.copy()
    merged._put(
        period_key,
        [(entry.entity_id, entry.score) for entry in entries],
        replace,
    )
    return merged


def group_entries(
    entries: Iterable[ExtractedEntry],
    series: Optional[AggregatedSeries] = None,
) -> AggregatedSeries:
    """
    Group a flat list of entries by their own period key.

    Args:
        entries: Entries from any number of months
        series: Optional series to merge into (not modified)

    Returns:
        New AggregatedSeries
    """
    merged = series.copy() if series is not None else AggregatedSeries()
    for entry in entries:
        merged._put(entry.period_key, [(entry.entity_id, entry.score)], replace=False)
    return merged
