"""
Shared fixtures and configuration for racing bar tests.
"""

import asyncio
import json
from typing import Dict, List, Optional

import httpx
import pytest

from openrank_racing.core.errors import FetchError
from openrank_racing.core.models import ExtractedEntry


# =============================================================================
# Feed Fixtures
# =============================================================================

@pytest.fixture
def sample_payload():
    """A small project_openrank_detail body."""
    return {
        "nodes": [
            {"id": "u1", "n": "alice", "c": "u", "i": 10, "r": 2, "v": 3},
            {"id": "u2", "n": "bob", "c": "u", "i": 5, "r": 1.5, "v": 4},
            {"id": "u3", "n": "dependabot[bot]", "c": "u", "i": 1, "r": 0.5, "v": 2},
        ],
        "links": [
            {"s": "u1", "t": "u2", "w": 1.0},
        ],
    }


def make_client(routes: Dict[str, httpx.Response], calls: Optional[List[str]] = None) -> httpx.AsyncClient:
    """
    Build an AsyncClient whose requests are answered from a path table.

    Paths not in the table get a 404.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request.url.path)
        for suffix, response in routes.items():
            if request.url.path.endswith(suffix):
                return response
        return httpx.Response(404, text="Not Found")

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def json_response(payload) -> httpx.Response:
    """200 response with a JSON body."""
    return httpx.Response(200, content=json.dumps(payload).encode("utf-8"))


# =============================================================================
# Fetcher / Resolver Fakes
# =============================================================================

class FakeFetcher:
    """
    In-memory fetcher.

    months maps "YYYY-MM" to a list of (entity_id, score) pairs or a
    FetchError to raise. Unknown months raise an HTTP 404 FetchError.
    """

    def __init__(self, months: Dict, delays: Optional[Dict[str, float]] = None):
        self.months = months
        self.delays = delays or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_entries(self, year, month) -> List[ExtractedEntry]:
        key = f"{year}-{month}"
        self.calls.append(key)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(key, 0))
            value = self.months.get(key)
            if value is None:
                raise FetchError(FetchError.HTTP, status=404, period_key=key)
            if isinstance(value, FetchError):
                raise value
            return [ExtractedEntry(entity_id=eid, score=score, period_key=key) for eid, score in value]
        finally:
            self.in_flight -= 1


def fixed_colors(entity_id: str):
    """Deterministic sync resolver."""
    return (f"#{len(entity_id):06x}", "#ffffff")


@pytest.fixture
def fake_fetcher():
    """Fetcher with three months of data and one missing month."""
    return FakeFetcher({
        "2023-01": [("alice", 6.0), ("bob", 6.0), ("carol", 2.0)],
        "2023-02": [("bob", 9.0), ("alice", 7.0)],
        "2023-04": [("carol", 12.0), ("renovate[bot]", 3.0)],
    })


@pytest.fixture
def color_resolver():
    """Deterministic color resolver."""
    return fixed_colors


@pytest.fixture
def settings():
    """Settings with predictable defaults regardless of the environment."""
    from openrank_racing.config.settings import Settings

    s = Settings()
    s.default_speed = 1.0
    s.default_max_bars = 10
    s.enable_animation = True
    s.default_theme = "light"
    s.sweep_concurrency = 1
    s.max_sweep_months = 120
    s.avatar_base_url = "https://avatars.githubusercontent.com"
    s.avatar_size = 48
    return s
