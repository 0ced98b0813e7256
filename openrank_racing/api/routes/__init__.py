"""
API routes.

- racing_bar: aggregated series and per-month chart configurations
"""

from openrank_racing.api.routes.racing_bar import router as racing_bar_router

__all__ = [
    "racing_bar_router",
]
