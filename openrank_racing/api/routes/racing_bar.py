"""
Racing bar API endpoints.

Serves aggregated OpenRank series and per-month chart configurations
for a GitHub repository.
"""

from typing import Optional

from fastapi import APIRouter, Query

from openrank_racing.api.dependencies import create_workflow
from openrank_racing.api.schemas import (
    FetchErrorSchema,
    FrameResponse,
    RankedEntrySchema,
    SeriesResponse,
)
from openrank_racing.chart.composer import frame_interval
from openrank_racing.chart.theme import ThemeMode
from openrank_racing.config.options import RacingBarOptions
from openrank_racing.config.settings import get_settings
from openrank_racing.utils.periods import month_range, parse_period_key


router = APIRouter(prefix="/racing-bar", tags=["racing-bar"])


@router.get(
    "/{owner}/{repo}/series",
    response_model=SeriesResponse,
    summary="Get aggregated OpenRank series",
    description="Fetch every month from start to end and group scores by month."
)
async def get_series(
    owner: str,
    repo: str,
    start: str = Query(..., description="First month (YYYY-MM)"),
    end: str = Query(..., description="Last month (YYYY-MM)"),
):
    """Get the month-keyed series for a repository."""
    repo_name = f"{owner}/{repo}"
    workflow = create_workflow(repo_name)
    result = await workflow.load(month_range(start, end))

    return SeriesResponse(
        repo=repo_name,
        series=result.series.to_dict(),
        fetched=result.fetched,
        skipped={key: FetchErrorSchema(**err.to_dict()) for key, err in result.skipped.items()},
        cancelled=result.cancelled,
    )


@router.get(
    "/{owner}/{repo}/frames/{period}",
    response_model=FrameResponse,
    summary="Get chart configuration for one month",
)
async def get_frame(
    owner: str,
    repo: str,
    period: str,
    start: Optional[str] = Query(None, description="First month to load (defaults to period)"),
    end: Optional[str] = Query(None, description="Last month to load (defaults to period)"),
    speed: Optional[float] = Query(None, description="Playback multiplier (> 0)"),
    max_bars: Optional[int] = Query(None, description="Visible rank slots (> 0)"),
    enable_animation: Optional[bool] = Query(None),
    theme: Optional[str] = Query(None, description="light or dark"),
):
    """Rank one month and return its chart configuration."""
    settings = get_settings()
    parse_period_key(period)
    theme_mode = ThemeMode.parse(theme or settings.default_theme)

    options = RacingBarOptions(
        speed=settings.default_speed if speed is None else speed,
        max_bars=settings.default_max_bars if max_bars is None else max_bars,
        enable_animation=settings.enable_animation if enable_animation is None else enable_animation,
    ).validate()

    repo_name = f"{owner}/{repo}"
    workflow = create_workflow(repo_name)
    result = await workflow.load(month_range(start or period, end or period))

    ranked = await workflow.frame(period, options)
    option = workflow.compose_frame(ranked, options, theme_mode)

    return FrameResponse(
        repo=repo_name,
        period=period,
        interval_ms=frame_interval(options.speed),
        entries=[RankedEntrySchema(**entry.to_dict()) for entry in ranked.entries],
        skipped=list(result.skipped),
        option=option,
    )
