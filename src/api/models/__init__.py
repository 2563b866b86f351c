"""API Pydantic models."""

from .requests import LayoutConfigIn, LayoutRangeRequest, LayoutRequest
from .responses import (
    ErrorCodes,
    ErrorResponse,
    EventGeometryOut,
    GridCellOut,
    GridResponse,
    HealthResponse,
    LayoutRangeResponse,
    RejectedEventOut,
    YearLayoutResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "LayoutConfigIn",
    "LayoutRequest",
    "LayoutRangeRequest",
    "EventGeometryOut",
    "RejectedEventOut",
    "YearLayoutResponse",
    "LayoutRangeResponse",
    "GridCellOut",
    "GridResponse",
]
