"""
Color resolution for ranked entities.

Provides the resolver capability, an in-process caching store and the
loaders it can wrap.
"""

from openrank_racing.colors.palette import (
    DEFAULT_COLORS,
    hashed_colors,
    rgb_to_hex,
)
from openrank_racing.colors.store import (
    AvatarColorStore,
    ColorLoader,
    ColorResolver,
    call_loader,
    coerce_color_pair,
)
from openrank_racing.colors.extractor import (
    AvatarColorExtractor,
    avatar_url,
    dominant_colors,
)

__all__ = [
    # Palette
    "DEFAULT_COLORS",
    "hashed_colors",
    "rgb_to_hex",
    # Store
    "AvatarColorStore",
    "ColorLoader",
    "ColorResolver",
    "call_loader",
    "coerce_color_pair",
    # Extractor
    "AvatarColorExtractor",
    "avatar_url",
    "dominant_colors",
]
