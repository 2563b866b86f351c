"""
Lane assignment for overlapping events.

Greedy interval colouring in start order: each event takes the lowest lane not
used by an earlier event it overlaps. When every lane is taken the event falls
back to lane 0 and is reported as overflowed.
"""

import logging

from core.errors import LayoutConfigError
from models.events import Event
from models.layout import LaneAssignment
from services.overlap import intersects_year

logger = logging.getLogger(__name__)

OVERFLOW_LANE = 0


def lane_sort_key(event: Event):
    """Earlier starts first, then longer events, then id."""
    return (event.start_date, -event.end_date.toordinal(), event.id)


def order_events(events: list[Event], year: int) -> list[Event]:
    """The year's events in deterministic lane-assignment order."""
    return sorted((e for e in events if intersects_year(e, year)), key=lane_sort_key)


def assign_lanes(events: list[Event], year: int, max_lanes: int) -> LaneAssignment:
    """
    Assign each event intersecting `year` a lane in 0..max_lanes-1.

    Overlapping events never share a lane unless all `max_lanes` lanes are
    occupied, in which case the event reuses lane 0.

    Raises:
        LayoutConfigError: if max_lanes is not positive
    """
    if max_lanes <= 0:
        raise LayoutConfigError(f"max_lanes must be a positive integer, got {max_lanes!r}")

    lanes: dict[str, int] = {}
    overflowed = []
    # (end_date, lane) of placed events that may still overlap later ones
    active: list[tuple] = []

    for event in order_events(events, year):
        # Earlier events start no later than this one, so they overlap it
        # exactly when they have not ended before its start
        active = [(end, lane) for end, lane in active if end >= event.start_date]
        occupied = {lane for _, lane in active}

        free = next((lane for lane in range(max_lanes) if lane not in occupied), None)
        if free is None:
            logger.warning(
                "Lane overflow in %d: event %r overlaps %d lanes, reusing lane %d",
                year, event.id, max_lanes, OVERFLOW_LANE,
            )
            free = OVERFLOW_LANE
            overflowed.append(event.id)

        lanes[event.id] = free
        active.append((event.end_date, free))

    return LaneAssignment(lanes=lanes, overflowed=tuple(overflowed))
