"""Pydantic request models for API endpoints."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from core.config import (
    CELL_GAP_PX,
    CELL_WIDTH_PX,
    DEFAULT_UNITS,
    LANE_HEIGHT_PX,
    LANE_TOP_OFFSET_PX,
    MAX_LANES,
    MAX_YEAR,
    MIN_YEAR,
)


class LayoutConfigIn(BaseModel):
    """Rendering dimensions. Range checks happen in LayoutConfig."""

    cell_width: float = CELL_WIDTH_PX
    cell_gap: float = CELL_GAP_PX
    lane_band_height: float = LANE_HEIGHT_PX
    lane_top_offset: float = LANE_TOP_OFFSET_PX
    max_lanes: int = MAX_LANES
    units: Literal["px", "percent"] = DEFAULT_UNITS


class LayoutRequest(BaseModel):
    """
    Layout of one year.

    Events are kept as raw objects so a single malformed event is rejected
    on its own instead of failing the whole request.
    """

    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    events: list[Any] = []
    config: LayoutConfigIn | None = None


class LayoutRangeRequest(BaseModel):
    """Layout of every year from start_year to end_year (inclusive)."""

    start_year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    end_year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    events: list[Any] = []
    config: LayoutConfigIn | None = None
