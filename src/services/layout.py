"""
Year layout computation: clusters, lanes and bar geometry for a list of events.

compute_layout() is pure. Bad event data is skipped and reported in the result;
only an invalid LayoutConfig raises.
"""

import logging
from datetime import date, datetime

from core.errors import InvariantViolation
from models.events import Event
from models.layout import EventLayoutInfo, LayoutConfig, RejectedEvent, YearLayout
from services.geometry import cluster_max_lanes_by_event, compute_geometry
from services.lanes import assign_lanes, order_events
from services.overlap import cluster_events

logger = logging.getLogger(__name__)


def check_event(event, seen_ids: set[str]) -> None:
    """
    Raise InvariantViolation if the event cannot be laid out.

    Checks:
    1. The item is an Event
    2. Both ends are dates and start_date <= end_date
    3. The id was not already seen
    """
    if not isinstance(event, Event):
        raise InvariantViolation(None, f"Expected Event, got {type(event).__name__}")
    if not isinstance(event.id, str) or not event.id:
        raise InvariantViolation(None, "Event id must be a non-empty string")
    if any(isinstance(d, datetime) or not isinstance(d, date) for d in (event.start_date, event.end_date)):
        raise InvariantViolation(event.id, "Start and end must be dates")
    if event.start_date > event.end_date:
        raise InvariantViolation(
            event.id,
            f"Start date {event.start_date.isoformat()} is after end date {event.end_date.isoformat()}",
        )
    if event.id in seen_ids:
        raise InvariantViolation(event.id, f"Duplicate event id {event.id!r}")


def split_valid_events(events: list) -> tuple[list[Event], list[RejectedEvent]]:
    """Separate layout-ready events from rejected ones, keeping input order."""
    valid: list[Event] = []
    rejected: list[RejectedEvent] = []
    seen_ids: set[str] = set()

    for event in events:
        try:
            check_event(event, seen_ids)
        except InvariantViolation as e:
            logger.warning("Skipping event %r: %s", e.event_id, e)
            rejected.append(RejectedEvent(event_id=e.event_id, error_message=str(e)))
            continue
        seen_ids.add(event.id)
        valid.append(event)

    return valid, rejected


def compute_layout(events: list, year: int, config: LayoutConfig | None = None) -> YearLayout:
    """
    Lay out all events intersecting `year`.

    Args:
        events: Events to lay out (never modified)
        year: Displayed year
        config: Rendering dimensions; defaults from core.config

    Returns:
        YearLayout with lane info, one geometry per event in lane order, and
        the rejected events

    Raises:
        LayoutConfigError: only for invalid configuration
    """
    if config is None:
        config = LayoutConfig()

    valid, rejected = split_valid_events(events)

    clusters = cluster_events(valid, year)
    assignment = assign_lanes(valid, year, config.max_lanes)
    cluster_lanes = cluster_max_lanes_by_event(clusters, valid, assignment.lanes)

    geometries = tuple(
        compute_geometry(
            event,
            year,
            assignment.lanes[event.id],
            cluster_lanes[event.id],
            config,
        )
        for event in order_events(valid, year)
    )

    max_lanes_used = max(assignment.lanes.values(), default=0) + 1
    info = EventLayoutInfo(
        lane_of=dict(assignment.lanes),
        cluster_max_lanes=cluster_lanes,
        max_lanes_used=max_lanes_used,
        lane_overflow=bool(assignment.overflowed),
    )

    logger.debug(
        "Laid out %d events in %d (%d clusters, %d lanes, %d rejected)",
        len(geometries), year, len(clusters), max_lanes_used, len(rejected),
    )

    return YearLayout(year=year, info=info, geometries=geometries, rejected=tuple(rejected))


def compute_layout_range(
    events: list, start_year: int, end_year: int, config: LayoutConfig | None = None
) -> list[YearLayout]:
    """Compute an independent layout for each year in the inclusive range."""
    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")
    if config is None:
        config = LayoutConfig()
    return [compute_layout(events, year, config) for year in range(start_year, end_year + 1)]
