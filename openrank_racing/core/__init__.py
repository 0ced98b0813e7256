"""
Core types for the racing bar pipeline.
"""

from openrank_racing.core.errors import (
    RacingBarError,
    FetchError,
    InvalidConfig,
    ResolverError,
    SweepCancelled,
)
from openrank_racing.core.models import (
    BOT_SUFFIX,
    ColorPair,
    ExtractedEntry,
    RankedEntry,
    RankedFrame,
    Snapshot,
    SnapshotRecord,
    is_bot_account,
)

__all__ = [
    # Errors
    "RacingBarError",
    "FetchError",
    "InvalidConfig",
    "ResolverError",
    "SweepCancelled",
    # Models
    "BOT_SUFFIX",
    "ColorPair",
    "ExtractedEntry",
    "RankedEntry",
    "RankedFrame",
    "Snapshot",
    "SnapshotRecord",
    "is_bot_account",
]
