"""
Pydantic schemas for API responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
    code: str


class FetchErrorSchema(BaseModel):
    """A month skipped during a sweep."""
    reason: str
    status: Optional[int] = None
    period_key: str = ""
    detail: str = ""


class SeriesResponse(BaseModel):
    """Aggregated series for a repository."""
    repo: str
    series: Dict[str, List[List[Any]]] = Field(
        default_factory=dict, description="period -> [[entity_id, score], ...] in fetch order"
    )
    fetched: List[str] = Field(default_factory=list)
    skipped: Dict[str, FetchErrorSchema] = Field(default_factory=dict)
    cancelled: bool = False


class RankedEntrySchema(BaseModel):
    """One ranked bar."""
    rank: int
    entity_id: str
    score: float
    colors: List[str]
    is_bot: bool = False


class FrameResponse(BaseModel):
    """Chart configuration for one period."""
    repo: str
    period: str
    interval_ms: float = Field(..., description="Milliseconds between frames at this speed")
    entries: List[RankedEntrySchema] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    option: Dict[str, Any] = Field(..., description="Declarative chart configuration")
