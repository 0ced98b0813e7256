"""
Caching color resolver keyed by entity id.

The store wraps a loader (any callable returning a color pair or an
awaitable of one), caches successful results in-process and collapses
concurrent lookups for the same entity into one loader call.
"""

import asyncio
import inspect
import logging
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Union

from openrank_racing.colors.palette import hashed_colors
from openrank_racing.core.errors import ResolverError
from openrank_racing.core.models import ColorPair

logger = logging.getLogger(__name__)

ColorLoader = Callable[[str], Union[ColorPair, Awaitable[ColorPair]]]


class ColorResolver(Protocol):
    """Capability that resolves a two-stop gradient for an entity."""

    async def get_colors(self, entity_id: str) -> ColorPair:
        ...


def coerce_color_pair(entity_id: str, value: Any) -> ColorPair:
    """
    Validate a loader result.

    Raises:
        ResolverError: If the value is not a pair of non-empty strings
    """
    if (
        not isinstance(value, (tuple, list))
        or len(value) != 2
        or not all(isinstance(c, str) and c for c in value)
    ):
        raise ResolverError(entity_id, f"Loader returned an invalid color pair: {value!r}")
    return (value[0], value[1])


async def call_loader(loader: ColorLoader, entity_id: str) -> ColorPair:
    """
    Invoke a sync or async loader and validate its result.

    Raises:
        ResolverError: On any loader failure
    """
    try:
        result = loader(entity_id)
        if inspect.isawaitable(result):
            result = await result
    except ResolverError:
        raise
    except Exception as e:
        raise ResolverError(entity_id, f"Color lookup failed for {entity_id!r}: {e}") from e

    return coerce_color_pair(entity_id, result)


class AvatarColorStore:
    """
    In-process color cache implementing ColorResolver.

    Failures are not cached, so a later lookup retries the loader.
    """

    def __init__(self, loader: Optional[ColorLoader] = None, max_size: int = 10000):
        """
        Initialize store.

        Args:
            loader: Color source (defaults to hashed_colors)
            max_size: Maximum cached entities; oldest entries are evicted first
        """
        self._loader = loader or hashed_colors
        self._max_size = max_size
        self._cache: "OrderedDict[str, ColorPair]" = OrderedDict()
        self._pending: Dict[str, asyncio.Task] = {}
        self._metrics = {"hits": 0, "misses": 0, "errors": 0}

    async def get_colors(self, entity_id: str) -> ColorPair:
        """
        Resolve colors for an entity, using the cache when possible.

        Raises:
            ResolverError: If the loader fails
        """
        cached = self._cache.get(entity_id)
        if cached is not None:
            self._metrics["hits"] += 1
            return cached

        task = self._pending.get(entity_id)
        if task is None:
            self._metrics["misses"] += 1
            task = asyncio.ensure_future(self._load(entity_id))
            self._pending[entity_id] = task
            task.add_done_callback(lambda _t, key=entity_id: self._pending.pop(key, None))

        return await asyncio.shield(task)

    async def _load(self, entity_id: str) -> ColorPair:
        try:
            colors = await call_loader(self._loader, entity_id)
        except ResolverError:
            self._metrics["errors"] += 1
            raise

        self._cache[entity_id] = colors
        while len(self._cache) > self._max_size:
            self._cache.popitem(last=False)
        return colors

    def peek(self, entity_id: str) -> Optional[ColorPair]:
        """Get a cached pair without triggering a lookup."""
        return self._cache.get(entity_id)

    def clear(self) -> None:
        """Drop all cached colors."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def get_metrics(self) -> Dict[str, int]:
        """Get cache metrics."""
        return {**self._metrics, "size": len(self._cache)}
