"""
Bar geometry for events on a single year row.

Horizontal position comes from the year-clamped date range and day fractions
of the start/end months. Vertical size divides the lane band by the lane count
of the event's own overlap cluster, not by a year-wide maximum.
"""

from datetime import date

from core.dates import get_grid_position, get_month_fraction, get_month_fraction_end
from models.events import Event
from models.layout import EventGeometry, LayoutConfig
from services.overlap import intersects_year


def clamp_to_year(event: Event, year: int) -> tuple[date, date]:
    """Clip the event range to Jan 1 .. Dec 31 of `year`."""
    bar_start = max(event.start_date, date(year, 1, 1))
    bar_end = min(event.end_date, date(year, 12, 31))
    return bar_start, bar_end


def cluster_max_lanes_by_event(
    clusters: list[frozenset[int]], events: list[Event], lanes: dict[str, int]
) -> dict[str, int]:
    """Map every clustered event id to its cluster's lane count (max lane + 1)."""
    result = {}
    for cluster in clusters:
        ids = [events[idx].id for idx in cluster]
        lane_count = max(lanes[event_id] for event_id in ids) + 1
        for event_id in ids:
            result[event_id] = lane_count
    return result


def horizontal_extent(bar_start: date, bar_end: date, config: LayoutConfig) -> tuple[float, float]:
    """
    Compute (left, width) in pixels for a clamped range within one year row.

    Start uses the start-of-day fraction and end the end-of-day fraction, so a
    single-day bar still has positive width. The trailing cell gap is taken
    off the span; a bar narrower than one cell is scaled by
    cell_width / cell_total instead, so it never shrinks to zero or below.
    """
    cell_total = config.cell_total_width
    start_month = get_grid_position(bar_start).month
    end_month = get_grid_position(bar_end).month
    start_fraction = get_month_fraction(bar_start)
    end_fraction = get_month_fraction_end(bar_end)

    left = (start_month - 1) * cell_total + start_fraction * cell_total
    span = (end_month - start_month) * cell_total + (end_fraction - start_fraction) * cell_total
    # Both terms agree at one full cell; the scaled one wins below that
    width = max(span - config.cell_gap, span * config.cell_width / cell_total)
    return left, width


def compute_geometry(
    event: Event, year: int, lane: int, cluster_max_lanes: int, config: LayoutConfig
) -> EventGeometry:
    """
    Compute the bar rectangle for one event in one year.

    Raises:
        ValueError: if the event does not intersect `year`
    """
    if not intersects_year(event, year):
        raise ValueError(f"Event {event.id!r} does not intersect {year}")

    bar_start, bar_end = clamp_to_year(event, year)
    left, width = horizontal_extent(bar_start, bar_end, config)

    if config.units == "percent":
        left = left / config.grid_width * 100
        width = width / config.grid_width * 100

    lane_height = config.lane_band_height / cluster_max_lanes
    top = lane * lane_height + config.lane_top_offset

    return EventGeometry(
        event_id=event.id,
        left=left,
        width=width,
        top=top,
        height=lane_height,
        lane=lane,
        cluster_max_lanes=cluster_max_lanes,
        bar_start=bar_start,
        bar_end=bar_end,
        rounded_start=bar_start == event.start_date,
        rounded_end=bar_end == event.end_date,
    )
