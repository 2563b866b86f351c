"""
Overlap detection and clustering of events within a displayed year.

Overlap is always tested on the full, unclipped event ranges so that lanes stay
stable while scrolling across years.
"""

from models.events import Event


def date_ranges_overlap(a: Event, b: Event) -> bool:
    """True if the two events share at least one day (touching ends count)."""
    return a.start_date <= b.end_date and b.start_date <= a.end_date


def intersects_year(event: Event, year: int) -> bool:
    return event.end_date.year >= year and event.start_date.year <= year


def events_in_year(events: list[Event], year: int) -> list[int]:
    """Indices of the events whose range intersects `year`."""
    return [idx for idx, event in enumerate(events) if intersects_year(event, year)]


def cluster_events(events: list[Event], year: int) -> list[frozenset[int]]:
    """
    Group the year's events into maximal clusters of transitively overlapping events.

    A chain A-B-C where only neighbours overlap is one cluster. Indices refer to
    positions in `events`; clusters are ordered by their smallest index.

    Args:
        events: Events to cluster (read only)
        year: Displayed year; events outside it are ignored

    Returns:
        List of frozensets of event indices
    """
    groups: list[set[int]] = []

    for idx in events_in_year(events, year):
        event = events[idx]
        merged = {idx}
        remaining = []

        # Absorb every existing group that this event touches
        for group in groups:
            if any(date_ranges_overlap(event, events[member]) for member in group):
                merged |= group
            else:
                remaining.append(group)

        remaining.append(merged)
        groups = remaining

    return sorted((frozenset(group) for group in groups), key=min)
