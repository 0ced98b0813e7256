"""
Avatar-derived colors.

Downloads an entity's avatar and reduces it to its two dominant colors,
so each contributor's bar is tinted like their avatar.
"""

import io
import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
from PIL import Image

from openrank_racing.colors.palette import rgb_to_hex
from openrank_racing.core.errors import ResolverError
from openrank_racing.core.models import ColorPair

logger = logging.getLogger(__name__)

DEFAULT_AVATAR_BASE_URL = "https://avatars.githubusercontent.com"
SAMPLE_SIZE = (32, 32)


def avatar_url(
    entity_id: str,
    base_url: str = DEFAULT_AVATAR_BASE_URL,
    size: int = 48,
) -> str:
    """Build the avatar image URL for an entity."""
    return f"{base_url.rstrip('/')}/{quote(entity_id)}?s={size}&v=4"


def dominant_colors(data: bytes, count: int = 2) -> List[str]:
    """
    Extract the most frequent colors of an image.

    Args:
        data: Encoded image bytes
        count: Number of colors to return

    Returns:
        Hex colors ordered by pixel frequency (ties by palette index)

    Raises:
        ValueError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            rgb_image = image.convert("RGB")
    except OSError as e:
        raise ValueError(f"Undecodable image: {e}") from e

    sample = rgb_image.resize(SAMPLE_SIZE)
    quantized = sample.quantize(colors=count)
    palette = quantized.getpalette() or []
    counts = quantized.getcolors() or []

    colors = []
    for _, index in sorted(counts, key=lambda c: (-c[0], c[1]))[:count]:
        r, g, b = palette[index * 3:index * 3 + 3]
        colors.append(rgb_to_hex(r, g, b))
    return colors


class AvatarColorExtractor:
    """
    Color loader backed by the avatar image service.

    Intended as the loader of an AvatarColorStore.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = DEFAULT_AVATAR_BASE_URL,
        size: int = 48,
        timeout: float = 10.0,
    ):
        self._client = client
        self._owns_client = client is None
        self.base_url = base_url
        self.size = size
        self.timeout = timeout

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the HTTP client if this extractor created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __call__(self, entity_id: str) -> ColorPair:
        """
        Resolve the avatar colors of an entity.

        Raises:
            ResolverError: If the avatar cannot be downloaded or decoded
        """
        url = avatar_url(entity_id, self.base_url, self.size)
        client = self._get_http_client()

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise ResolverError(entity_id, f"Avatar download failed for {entity_id!r}: {e}") from e

        if not response.is_success:
            raise ResolverError(
                entity_id,
                f"Avatar download failed for {entity_id!r}: HTTP {response.status_code}",
            )

        try:
            colors = dominant_colors(response.content)
        except ValueError as e:
            raise ResolverError(entity_id, str(e)) from e

        if not colors:
            raise ResolverError(entity_id, f"Avatar for {entity_id!r} has no pixels")
        if len(colors) == 1:
            colors.append(colors[0])

        logger.debug(f"Avatar colors for {entity_id}: {colors[0]}, {colors[1]}")
        return (colors[0], colors[1])
