"""
Ranking module.

Builds ranked, truncated frames from an aggregated series.
"""

from openrank_racing.ranking.frame_builder import (
    build_frame,
    rank_pairs,
)

__all__ = [
    "build_frame",
    "rank_pairs",
]
