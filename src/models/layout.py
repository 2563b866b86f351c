"""
Layout configuration and layout result models.

All results are frozen and rebuilt on every call to the layout engine.
"""

import math
from dataclasses import dataclass, field
from datetime import date

from core.config import (
    CELL_GAP_PX,
    CELL_WIDTH_PX,
    DEFAULT_UNITS,
    GEOMETRY_UNITS,
    LANE_HEIGHT_PX,
    LANE_TOP_OFFSET_PX,
    MAX_LANES,
    MONTHS_PER_YEAR,
)
from core.errors import LayoutConfigError


@dataclass(frozen=True)
class LayoutConfig:
    """Rendering dimensions supplied by the rendering layer."""

    cell_width: float = CELL_WIDTH_PX
    cell_gap: float = CELL_GAP_PX
    lane_band_height: float = LANE_HEIGHT_PX
    lane_top_offset: float = LANE_TOP_OFFSET_PX
    max_lanes: int = MAX_LANES
    units: str = DEFAULT_UNITS  # "px" or "percent" (horizontal values only)

    def __post_init__(self):
        errors = []
        # NaN compares False against every bound below
        for name in ("cell_width", "cell_gap", "lane_band_height", "lane_top_offset"):
            if not math.isfinite(getattr(self, name)):
                errors.append(f"{name} must be a finite number, got {getattr(self, name)!r}")
        if errors:
            raise LayoutConfigError("; ".join(errors))

        if not isinstance(self.max_lanes, int) or isinstance(self.max_lanes, bool) or self.max_lanes <= 0:
            errors.append(f"max_lanes must be a positive integer, got {self.max_lanes!r}")
        if self.cell_width <= 0:
            errors.append(f"cell_width must be positive, got {self.cell_width!r}")
        if self.cell_gap < 0:
            errors.append(f"cell_gap cannot be negative, got {self.cell_gap!r}")
        if self.cell_gap >= self.cell_width:
            errors.append("cell_gap must be smaller than cell_width")
        if self.lane_band_height <= 0:
            errors.append(f"lane_band_height must be positive, got {self.lane_band_height!r}")
        if self.lane_top_offset < 0:
            errors.append(f"lane_top_offset cannot be negative, got {self.lane_top_offset!r}")
        if self.units not in GEOMETRY_UNITS:
            errors.append(f"units must be one of {sorted(GEOMETRY_UNITS)}, got {self.units!r}")
        if errors:
            raise LayoutConfigError("; ".join(errors))

    @property
    def cell_total_width(self) -> float:
        return self.cell_width + self.cell_gap

    @property
    def grid_width(self) -> float:
        return MONTHS_PER_YEAR * self.cell_total_width


@dataclass(frozen=True)
class LaneAssignment:
    """Lane index per event id, plus the ids that fell back to lane 0."""

    lanes: dict[str, int]
    overflowed: tuple[str, ...] = ()


@dataclass(frozen=True)
class EventLayoutInfo:
    lane_of: dict[str, int]
    cluster_max_lanes: dict[str, int]
    max_lanes_used: int
    lane_overflow: bool = False


@dataclass(frozen=True)
class EventGeometry:
    """Bar rectangle for one event within one year."""

    event_id: str
    left: float
    width: float
    top: float
    height: float
    lane: int
    cluster_max_lanes: int
    bar_start: date
    bar_end: date
    rounded_start: bool  # bar begins at the event's true start
    rounded_end: bool  # bar ends at the event's true end


@dataclass(frozen=True)
class RejectedEvent:
    """An event skipped from layout, with the reason."""

    event_id: str | None
    error_message: str


@dataclass(frozen=True)
class YearLayout:
    year: int
    info: EventLayoutInfo
    geometries: tuple[EventGeometry, ...] = ()
    rejected: tuple[RejectedEvent, ...] = field(default_factory=tuple)

    def geometry_for(self, event_id: str) -> EventGeometry | None:
        for geometry in self.geometries:
            if geometry.event_id == event_id:
                return geometry
        return None
