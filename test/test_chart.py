"""
Tests for chart configuration composition.
"""

import json
import re

import pytest

from openrank_racing.chart.composer import (
    AXIS_UPDATE_DURATION,
    DEFAULT_FREQUENCY,
    avatar_rich_key,
    compose,
    frame_interval,
)
from openrank_racing.chart.theme import DARK_TEXT_COLOR, LIGHT_WATERMARK_COLOR, ThemeMode
from openrank_racing.core.errors import InvalidConfig
from openrank_racing.core.models import RankedEntry, RankedFrame


def _frame(max_bars=5, entries=None):
    if entries is None:
        entries = (
            RankedEntry(1, "alice", 12.5, ("#111111", "#222222")),
            RankedEntry(2, "dependabot[bot]", 4.0, ("#333333", "#444444"), is_bot=True),
            RankedEntry(3, "bob-smith", 1.0, ("#555555", "#666666")),
        )
    return RankedFrame(period_key="2023-03", max_bars=max_bars, entries=tuple(entries))


# =============================================================================
# Structure Tests
# =============================================================================

class TestCompose:
    """Test the composed option structure."""

    def test_bar_data_in_rank_order(self):
        """One data point per ranked entry, in rank order."""
        option = compose(_frame(), "2023-03", 1, True, "light")
        data = option["series"][0]["data"]

        assert [point["value"] for point in data] == [
            ["alice", 12.5],
            ["dependabot[bot]", 4.0],
            ["bob-smith", 1.0],
        ]

    def test_gradient_stops(self):
        """Bars use a left-to-right gradient with stops at 0 and 0.5."""
        option = compose(_frame(), "2023-03", 1, True, "light")
        gradient = option["series"][0]["data"][0]["itemStyle"]["color"]

        assert gradient["type"] == "linear"
        assert (gradient["x"], gradient["y"], gradient["x2"], gradient["y2"]) == (0, 0, 1, 0)
        assert gradient["colorStops"] == [
            {"offset": 0, "color": "#111111"},
            {"offset": 0.5, "color": "#222222"},
        ]

    def test_axis_capacity_is_max_bars(self):
        """The category axis holds max_bars slots and is inverted."""
        option = compose(_frame(max_bars=7), "2023-03", 1, True, "light")

        assert option["yAxis"]["max"] == 7
        assert option["yAxis"]["inverse"] is True
        assert option["xAxis"]["max"] == "dataMax"

    def test_watermark(self):
        """The period is drawn as a bottom-right watermark."""
        option = compose(_frame(), "2023-03", 1, True, "light")
        element = option["graphic"]["elements"][0]

        assert element["style"]["text"] == "2023-03"
        assert element["style"]["font"] == "bolder 60px monospace"
        assert (element["right"], element["bottom"]) == (60, 60)

    def test_labels_and_avatars(self):
        """Humans get an avatar rich entry, bots a plain label."""
        option = compose(_frame(), "2023-03", 1, True, "light")
        axis_label = option["yAxis"]["axisLabel"]

        assert axis_label["formatter"]["alice"] == "alice {avataralice|}"
        assert axis_label["formatter"]["bob-smith"] == f"bob-smith {{{avatar_rich_key('bob-smith')}|}}"
        assert axis_label["formatter"]["dependabot[bot]"] == "dependabot[bot]"

        assert set(axis_label["rich"]) == {"avataralice", avatar_rich_key("bob-smith")}
        assert axis_label["rich"]["avataralice"] == {
            "backgroundColor": {"image": "https://avatars.githubusercontent.com/alice?s=48&v=4"},
            "height": 20,
        }

    def test_rich_key_plain_id_unchanged(self):
        assert avatar_rich_key("alice_01") == "avataralice_01"

    def test_rich_key_strips_special_characters(self):
        """Stripped ids keep only rich-text safe characters plus a digest."""
        key = avatar_rich_key("a.b-c_d")

        assert key.startswith("avatarabc_d_")
        assert re.fullmatch(r"avatar[0-9A-Za-z_]+", key)

    def test_similar_ids_get_separate_avatars(self):
        """Ids that differ only by stripped characters do not share an avatar."""
        frame = _frame(entries=(
            RankedEntry(1, "foobar", 2.0, ("#111111", "#222222")),
            RankedEntry(2, "foo-bar", 1.0, ("#333333", "#444444")),
        ))
        axis_label = compose(frame, "2023-03", 1, True, "light")["yAxis"]["axisLabel"]

        assert len(axis_label["rich"]) == 2
        assert avatar_rich_key("foobar") != avatar_rich_key("foo-bar")
        for entity_id in ("foobar", "foo-bar"):
            key = avatar_rich_key(entity_id)
            assert axis_label["formatter"][entity_id] == f"{entity_id} {{{key}|}}"
            assert axis_label["rich"][key]["backgroundColor"]["image"].endswith(f"/{entity_id}?s=48&v=4")
        images = {style["backgroundColor"]["image"] for style in axis_label["rich"].values()}
        assert images == {
            "https://avatars.githubusercontent.com/foobar?s=48&v=4",
            "https://avatars.githubusercontent.com/foo-bar?s=48&v=4",
        }

    def test_empty_frame(self):
        """An empty frame composes with zero data points."""
        option = compose(_frame(entries=()), "2023-03", 1, True, "light")

        assert option["series"][0]["data"] == []
        assert option["yAxis"]["axisLabel"]["formatter"] == {}
        assert option["graphic"]["elements"][0]["style"]["text"] == "2023-03"

    def test_deterministic_and_serializable(self):
        """Same inputs give equal, JSON-serializable configs."""
        first = compose(_frame(), "2023-03", 2, True, "dark")
        second = compose(_frame(), "2023-03", 2, True, "dark")

        assert first == second
        assert first is not second
        assert json.loads(json.dumps(first)) == first

    def test_mutating_output_does_not_leak(self):
        """Each call builds a fresh structure."""
        first = compose(_frame(), "2023-03", 1, True, "light")
        first["series"][0]["data"].clear()

        assert len(compose(_frame(), "2023-03", 1, True, "light")["series"][0]["data"]) == 3


# =============================================================================
# Timing Tests
# =============================================================================

class TestAnimation:
    """Test speed and animation handling."""

    def test_speed_scales_update_duration(self):
        """Update duration is DEFAULT_FREQUENCY / speed."""
        option = compose(_frame(), "2023-03", 4, True, "light")

        assert option["animationDurationUpdate"] == DEFAULT_FREQUENCY / 4
        assert option["animationDuration"] == 0
        assert option["yAxis"]["animationDurationUpdate"] == AXIS_UPDATE_DURATION

    def test_disabled_animation(self):
        """Disabling animation zeroes every duration and changes nothing else."""
        animated = compose(_frame(), "2023-03", 1, True, "light")
        static = compose(_frame(), "2023-03", 1, False, "light")

        assert static["animationDurationUpdate"] == 0
        assert static["yAxis"]["animationDurationUpdate"] == 0

        for option in (animated, static):
            option.pop("animationDurationUpdate")
            option["yAxis"].pop("animationDurationUpdate")
        assert animated == static

    @pytest.mark.parametrize("speed", [0, -1, float("nan"), float("inf"), "fast", None, True])
    def test_invalid_speed(self, speed):
        """Non-positive or non-numeric speed fails before composing."""
        with pytest.raises(InvalidConfig) as exc_info:
            compose(_frame(), "2023-03", speed, True, "light")

        assert exc_info.value.field == "speed"

    def test_invalid_max_bars(self):
        """A frame with non-positive max_bars is rejected."""
        with pytest.raises(InvalidConfig):
            compose(_frame(max_bars=0), "2023-03", 1, True, "light")

    def test_frame_interval(self):
        assert frame_interval(1) == DEFAULT_FREQUENCY
        assert frame_interval(0.5) == DEFAULT_FREQUENCY * 2
        with pytest.raises(InvalidConfig):
            frame_interval(0)


# =============================================================================
# Theme Tests
# =============================================================================

class TestTheme:
    """Test light and dark styling."""

    def test_dark_theme_colors_text(self):
        """Dark mode sets text colors on axes, labels and watermark."""
        option = compose(_frame(), "2023-03", 1, True, "dark")

        assert option["xAxis"]["axisLabel"]["color"] == DARK_TEXT_COLOR
        assert option["yAxis"]["axisLabel"]["color"] == DARK_TEXT_COLOR
        assert option["series"][0]["label"]["color"] == DARK_TEXT_COLOR
        assert option["graphic"]["elements"][0]["style"]["fill"] == DARK_TEXT_COLOR

    def test_light_theme_leaves_defaults(self):
        """Light mode omits text colors and uses a translucent watermark."""
        option = compose(_frame(), "2023-03", 1, True, ThemeMode.LIGHT)

        assert "color" not in option["xAxis"]["axisLabel"]
        assert "color" not in option["yAxis"]["axisLabel"]
        assert "color" not in option["series"][0]["label"]
        assert option["graphic"]["elements"][0]["style"]["fill"] == LIGHT_WATERMARK_COLOR

    def test_unknown_theme(self):
        with pytest.raises(InvalidConfig):
            compose(_frame(), "2023-03", 1, True, "sepia")

    def test_parse_is_case_insensitive(self):
        assert ThemeMode.parse("DARK") is ThemeMode.DARK
