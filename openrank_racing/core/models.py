"""
Data model for the racing bar pipeline.

Snapshots and extracted entries are immutable once built; ranked frames
are recomputed on demand from an aggregated series.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

# A resolved two-stop gradient: (primary, secondary)
ColorPair = Tuple[str, str]

BOT_SUFFIX = "[bot]"


def is_bot_account(entity_id: str) -> bool:
    """Check whether an entity id denotes a bot account."""
    return bool(entity_id) and entity_id.endswith(BOT_SUFFIX)


@dataclass(frozen=True)
class SnapshotRecord:
    """One raw node from the monthly feed (fields n, r, v)."""
    name: Any
    rank_weight: Any
    magnitude: Any


@dataclass(frozen=True)
class Snapshot:
    """One month's raw feed."""
    year: str
    month: str
    records: Tuple[SnapshotRecord, ...] = ()

    @property
    def period_key(self) -> str:
        """Get the "YYYY-MM" key for this snapshot."""
        return f"{self.year}-{self.month}"

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class ExtractedEntry:
    """A scored entity for one period."""
    entity_id: str
    score: float
    period_key: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "entity_id": self.entity_id,
            "score": self.score,
            "period_key": self.period_key,
        }


@dataclass(frozen=True)
class RankedEntry:
    """An entity placed in a ranked frame."""
    rank: int
    entity_id: str
    score: float
    colors: ColorPair
    is_bot: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "rank": self.rank,
            "entity_id": self.entity_id,
            "score": self.score,
            "colors": list(self.colors),
            "is_bot": self.is_bot,
        }


@dataclass(frozen=True)
class RankedFrame:
    """Ranked, truncated view of one period."""
    period_key: str
    max_bars: int
    entries: Tuple[RankedEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def max_score(self) -> float:
        """Highest score in the frame (0.0 when empty)."""
        return self.entries[0].score if self.entries else 0.0

    def pairs(self) -> List[Tuple[str, float]]:
        """Get (entity_id, score) pairs in rank order."""
        return [(e.entity_id, e.score) for e in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "period_key": self.period_key,
            "max_bars": self.max_bars,
            "entries": [e.to_dict() for e in self.entries],
        }
