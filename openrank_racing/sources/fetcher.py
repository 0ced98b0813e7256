"""
Monthly snapshot fetcher.

Retrieves one month of project_openrank_detail data and derives the
per-entity influence score (score = r * v). One attempt per call, no
caching and no retry; the caller decides whether a failed month is fatal.
"""

import logging
from collections import OrderedDict
from typing import Any, List, Optional

import httpx

from openrank_racing.core.errors import FetchError
from openrank_racing.core.models import ExtractedEntry, Snapshot, SnapshotRecord
from openrank_racing.sources.data_sources import OpenRankSource
from openrank_racing.utils.periods import format_period_key, normalize_year_month
from openrank_racing.utils.validation import is_finite_number

logger = logging.getLogger(__name__)


def parse_snapshot(payload: Any, year: str, month: str) -> Snapshot:
    """
    Convert a decoded feed body into a Snapshot.

    Only the n, r and v node fields are kept; links and any other node
    fields are ignored.

    Args:
        payload: Decoded JSON body
        year: Four-digit year
        month: Two-digit month

    Returns:
        Snapshot with one record per node

    Raises:
        FetchError: (reason="parse") if the body does not have a nodes list of objects
    """
    period_key = f"{year}-{month}"

    if not isinstance(payload, dict):
        raise FetchError(FetchError.PARSE, period_key=period_key, detail="body is not an object")

    nodes = payload.get("nodes")
    if not isinstance(nodes, list):
        raise FetchError(FetchError.PARSE, period_key=period_key, detail="missing nodes list")

    records = []
    for node in nodes:
        if not isinstance(node, dict):
            raise FetchError(FetchError.PARSE, period_key=period_key, detail="node is not an object")
        records.append(SnapshotRecord(
            name=node.get("n"),
            rank_weight=node.get("r"),
            magnitude=node.get("v"),
        ))

    return Snapshot(year=year, month=month, records=tuple(records))


def extract_entries(snapshot: Snapshot) -> List[ExtractedEntry]:
    """
    Derive scored entries from a snapshot.

    Records with a missing or non-string name, a missing or non-numeric
    factor, or a non-finite product are dropped. If the feed repeats an
    entity id, the last record's score wins and the entity keeps the
    position of its first appearance.

    Args:
        snapshot: Raw monthly snapshot

    Returns:
        Entries in feed order
    """
    period_key = snapshot.period_key
    scores: "OrderedDict[str, float]" = OrderedDict()
    dropped = 0

    for record in snapshot.records:
        name = record.name
        if not isinstance(name, str) or not name:
            dropped += 1
            continue
        if not is_finite_number(record.rank_weight) or not is_finite_number(record.magnitude):
            dropped += 1
            continue

        score = record.rank_weight * record.magnitude
        if not is_finite_number(score):
            dropped += 1
            continue

        scores[name] = score

    if dropped:
        logger.debug(f"Dropped {dropped} unscorable records for {period_key}")

    return [
        ExtractedEntry(entity_id=name, score=score, period_key=period_key)
        for name, score in scores.items()
    ]


class MetricFetcher:
    """
    Fetches monthly OpenRank snapshots over HTTP.

    Can be used as an async context manager; a client passed in by the
    caller is never closed by the fetcher.
    """

    def __init__(
        self,
        source: Optional[OpenRankSource] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize fetcher.

        Args:
            source: Endpoint configuration (defaults to the global settings)
            client: Shared async HTTP client (one is created lazily if None)
        """
        self.source = source or OpenRankSource.from_settings()
        self._client = client
        self._owns_client = client is None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.source.timeout_seconds)
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "MetricFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def fetch_month(self, year, month) -> Snapshot:
        """
        Fetch one month's raw snapshot.

        Args:
            year: Four-digit year
            month: Month 1-12

        Returns:
            Parsed Snapshot

        Raises:
            FetchError: reason "http" for non-success status, "parse" for a
                malformed body, "network" for transport failures
        """
        year, month = normalize_year_month(year, month)
        period_key = format_period_key(year, month)
        url = self.source.url_for(year, month)
        client = self._get_http_client()

        logger.debug(f"Fetching {period_key} from {url}")

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Network error fetching {period_key}: {e}")
            raise FetchError(FetchError.NETWORK, period_key=period_key, detail=str(e)) from e

        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} fetching {period_key}")
            raise FetchError(
                FetchError.HTTP,
                status=response.status_code,
                period_key=period_key,
                detail=response.reason_phrase,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"Malformed body for {period_key}: {e}")
            raise FetchError(FetchError.PARSE, period_key=period_key, detail=str(e)) from e

        snapshot = parse_snapshot(payload, year, month)
        logger.debug(f"Fetched {len(snapshot)} records for {period_key}")
        return snapshot

    async def fetch_entries(self, year, month) -> List[ExtractedEntry]:
        """
        Fetch one month and derive its scored entries.

        Raises:
            FetchError: See fetch_month
        """
        snapshot = await self.fetch_month(year, month)
        return extract_entries(snapshot)
