"""
Racing bar chart configuration.

Turns a ranked frame into a self-contained ECharts option dictionary.
The output is plain JSON-serializable data built fresh on every call, so
composing twice from the same inputs yields equal structures.

Because a plain structure cannot carry a closure, the axis label
formatter is materialized as a mapping from every ranked entity id to
its label text.
"""

import hashlib
import re
from typing import Any, Dict, List

from openrank_racing.chart.theme import ThemeMode
from openrank_racing.colors.extractor import DEFAULT_AVATAR_BASE_URL, avatar_url
from openrank_racing.core.models import RankedEntry, RankedFrame
from openrank_racing.utils.validation import validate_max_bars, validate_speed

# Base animation period in milliseconds at speed 1
DEFAULT_FREQUENCY = 2000

AXIS_UPDATE_DURATION = 200
AVATAR_HEIGHT = 20

_RICH_KEY_STRIP = re.compile(r"[^0-9A-Za-z_]")


def avatar_rich_key(entity_id: str) -> str:
    """
    Rich-text style name for an entity's avatar.

    Characters outside [0-9A-Za-z_] are removed. When anything was removed,
    a short digest of the full id is appended so that ids such as "foo-bar"
    and "foobar" keep separate avatars.
    """
    stripped = _RICH_KEY_STRIP.sub("", entity_id)
    if stripped == entity_id:
        return "avatar" + stripped
    digest = hashlib.sha256(entity_id.encode("utf-8")).hexdigest()[:8]
    return f"avatar{stripped}_{digest}"


def format_entity_label(entity: RankedEntry) -> str:
    """Axis label for an entity: id plus inline avatar, bots stay plain."""
    if not entity.entity_id or entity.is_bot:
        return entity.entity_id
    return f"{entity.entity_id} {{{avatar_rich_key(entity.entity_id)}|}}"


def _gradient(entity: RankedEntry) -> Dict[str, Any]:
    primary, secondary = entity.colors
    return {
        "type": "linear",
        "x": 0,
        "y": 0,
        "x2": 1,
        "y2": 0,
        "colorStops": [
            {"offset": 0, "color": primary},
            {"offset": 0.5, "color": secondary},
        ],
        "global": False,
    }


def _themed(style: Dict[str, Any], theme: ThemeMode) -> Dict[str, Any]:
    if theme.text_color is not None:
        style["color"] = theme.text_color
    return style


def compose(
    frame: RankedFrame,
    period_key: str,
    speed: float,
    animation_enabled: bool,
    theme_mode,
    avatar_base_url: str = DEFAULT_AVATAR_BASE_URL,
    avatar_size: int = 48,
) -> Dict[str, Any]:
    """
    Compose the chart configuration for one frame.

    Args:
        frame: Ranked frame to draw
        period_key: Period shown in the watermark
        speed: Playback multiplier (> 0)
        animation_enabled: False collapses every transition duration to 0
        theme_mode: "light" or "dark" (or ThemeMode)
        avatar_base_url: Avatar image service root
        avatar_size: Avatar size requested from the service

    Returns:
        ECharts option dictionary

    Raises:
        InvalidConfig: For non-positive speed, non-positive frame.max_bars or
            an unknown theme; raised before any part of the config is built
    """
    speed = validate_speed(speed)
    max_bars = validate_max_bars(frame.max_bars)
    theme = ThemeMode.parse(theme_mode)

    update_frequency = DEFAULT_FREQUENCY / speed

    rich: Dict[str, Any] = {}
    labels: Dict[str, str] = {}
    bar_data: List[Dict[str, Any]] = []

    for entity in frame.entries:
        if not entity.is_bot:
            rich[avatar_rich_key(entity.entity_id)] = {
                "backgroundColor": {
                    "image": avatar_url(entity.entity_id, avatar_base_url, avatar_size),
                },
                "height": AVATAR_HEIGHT,
            }
        labels[entity.entity_id] = format_entity_label(entity)
        bar_data.append({
            "value": [entity.entity_id, entity.score],
            "itemStyle": {"color": _gradient(entity)},
        })

    return {
        "grid": {
            "top": 10,
            "bottom": 30,
            "left": 160,
            "right": 50,
        },
        "xAxis": {
            "type": "value",
            "max": "dataMax",
            "axisLabel": _themed({"show": True}, theme),
        },
        "yAxis": {
            "type": "category",
            "inverse": True,
            "max": max_bars,
            "axisLabel": _themed({
                "show": True,
                "fontSize": 14,
                "formatter": labels,
                "rich": rich,
            }, theme),
            "axisTick": {"show": False},
            "animationDuration": 0,
            "animationDurationUpdate": AXIS_UPDATE_DURATION if animation_enabled else 0,
        },
        "series": [
            {
                "realtimeSort": True,
                "seriesLayoutBy": "column",
                "type": "bar",
                "data": bar_data,
                "encode": {"x": 1, "y": 0},
                "label": _themed({
                    "show": True,
                    "precision": 1,
                    "position": "right",
                    "valueAnimation": True,
                    "fontFamily": "monospace",
                }, theme),
            }
        ],
        # No initial animation
        "animationDuration": 0,
        "animationDurationUpdate": update_frequency if animation_enabled else 0,
        "animationEasing": "linear",
        "animationEasingUpdate": "linear",
        "graphic": {
            "elements": [
                {
                    "type": "text",
                    "right": 60,
                    "bottom": 60,
                    "style": {
                        "text": period_key,
                        "font": "bolder 60px monospace",
                        "fill": theme.watermark_color,
                    },
                    "z": 100,
                }
            ]
        },
    }


def frame_interval(speed: float) -> float:
    """
    Milliseconds between frames for a speed multiplier.

    Raises:
        InvalidConfig: If speed is not > 0
    """
    return DEFAULT_FREQUENCY / validate_speed(speed)

