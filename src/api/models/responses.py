"""Pydantic response models for API endpoints."""

from datetime import date

from pydantic import BaseModel

from models.layout import YearLayout


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    request_log_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CONFIG = "INVALID_CONFIG"
    TOO_MANY_EVENTS = "TOO_MANY_EVENTS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class EventGeometryOut(BaseModel):
    event_id: str
    left: float
    width: float
    top: float
    height: float
    lane: int
    cluster_max_lanes: int
    bar_start: date
    bar_end: date
    rounded_start: bool
    rounded_end: bool


class RejectedEventOut(BaseModel):
    event_id: str | None
    error_message: str


class YearLayoutResponse(BaseModel):
    """Layout of one year row."""

    year: int
    lane_of: dict[str, int]
    cluster_max_lanes: dict[str, int]
    max_lanes_used: int
    lane_overflow: bool
    geometries: list[EventGeometryOut]
    rejected: list[RejectedEventOut]

    @classmethod
    def from_layout(cls, layout: YearLayout, rejected: list | None = None) -> "YearLayoutResponse":
        """Build from a YearLayout, prepending events rejected before layout."""
        all_rejected = list(rejected or []) + list(layout.rejected)
        return cls(
            year=layout.year,
            lane_of=layout.info.lane_of,
            cluster_max_lanes=layout.info.cluster_max_lanes,
            max_lanes_used=layout.info.max_lanes_used,
            lane_overflow=layout.info.lane_overflow,
            geometries=[EventGeometryOut(**vars(g)) for g in layout.geometries],
            rejected=[RejectedEventOut(**vars(r)) for r in all_rejected],
        )


class LayoutRangeResponse(BaseModel):
    layouts: list[YearLayoutResponse]


class GridCellOut(BaseModel):
    year: int
    month: int | None = None
    week: int | None = None
    date: date
    label: str


class GridResponse(BaseModel):
    mode: str  # "month" or "week"
    cells: list[GridCellOut]
