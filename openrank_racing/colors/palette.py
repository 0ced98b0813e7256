"""
Static and derived color pairs.
"""

import colorsys
import hashlib

from openrank_racing.core.models import ColorPair

# Placeholder gradient used when a lookup fails
DEFAULT_COLORS: ColorPair = ("#8c8c8c", "#d9d9d9")


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format an RGB triple as #rrggbb."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def hashed_colors(entity_id: str) -> ColorPair:
    """
    Derive a stable color pair from an entity id.

    The hue comes from a SHA-256 digest of the id; the secondary stop is a
    lighter shade of the same hue. Usable as an offline loader for
    AvatarColorStore.

    Args:
        entity_id: Entity identifier

    Returns:
        (primary, secondary) hex colors
    """
    digest = hashlib.sha256(entity_id.encode("utf-8")).digest()
    hue = int.from_bytes(digest[:2], "big") / 65535.0
    saturation = 0.45 + (digest[2] / 255.0) * 0.3

    primary = colorsys.hls_to_rgb(hue, 0.45, saturation)
    secondary = colorsys.hls_to_rgb(hue, 0.72, saturation)

    return (
        rgb_to_hex(*(round(c * 255) for c in primary)),
        rgb_to_hex(*(round(c * 255) for c in secondary)),
    )
