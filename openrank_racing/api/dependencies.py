"""
Dependency wiring for the racing bar API.

Shares one HTTP client and one color store across requests; each request
gets its own workflow, so no series state leaks between repositories.
"""

import logging
from typing import Optional

import httpx

from openrank_racing.colors.extractor import AvatarColorExtractor
from openrank_racing.colors.store import AvatarColorStore
from openrank_racing.config.settings import get_settings
from openrank_racing.pipeline.workflow import RacingBarWorkflow
from openrank_racing.sources.data_sources import OpenRankSource
from openrank_racing.sources.fetcher import MetricFetcher

logger = logging.getLogger(__name__)


_http_client: Optional[httpx.AsyncClient] = None
_color_store: Optional[AvatarColorStore] = None


def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared HTTP client."""
    global _http_client
    if _http_client is None:
        settings = get_settings()
        _http_client = httpx.AsyncClient(timeout=settings.request_timeout, follow_redirects=True)
    return _http_client


def get_color_store() -> AvatarColorStore:
    """Get or create the shared avatar color store."""
    global _color_store
    if _color_store is None:
        settings = get_settings()
        extractor = AvatarColorExtractor(
            client=get_http_client(),
            base_url=settings.avatar_base_url,
            size=settings.avatar_size,
        )
        _color_store = AvatarColorStore(loader=extractor)
    return _color_store


def create_workflow(repo_name: str) -> RacingBarWorkflow:
    """Build a workflow for one repository."""
    settings = get_settings()
    source = OpenRankSource.from_settings(settings, repo_name=repo_name)
    fetcher = MetricFetcher(source=source, client=get_http_client())
    return RacingBarWorkflow(fetcher, color_resolver=get_color_store(), settings=settings)


async def cleanup_async():
    """Close shared clients."""
    global _http_client, _color_store
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
    _color_store = None
    logger.info("API dependencies cleaned up")
