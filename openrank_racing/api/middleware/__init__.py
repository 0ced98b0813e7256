"""
API middleware.
"""

from openrank_racing.api.middleware.logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]
