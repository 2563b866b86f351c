"""
Event validation at the input boundary.

Turns raw event dictionaries (as sent by the rendering layer) into Event
records. Each bad event is rejected on its own with an error message; the rest
still get laid out.
"""

from core.dates import parse_iso_date
from core.errors import ParseError
from models.events import Event
from models.layout import RejectedEvent

# Accepted spellings for each field (camelCase from the web client, snake_case otherwise)
FIELD_ALIASES = {
    "start_date": ("startDate", "start_date"),
    "end_date": ("endDate", "end_date"),
    "calendar_id": ("calendarId", "calendar_id"),
}


def _get_field(raw: dict, name: str):
    for key in FIELD_ALIASES.get(name, (name,)):
        if raw.get(key) is not None:
            return raw[key]
    return None


def parse_event(raw: dict) -> Event:
    """
    Build an Event from a raw dictionary.

    Raises:
        ParseError: if a date is not valid YYYY-MM-DD
        ValueError: if a required field is missing or the range is inverted
    """
    errors = []

    event_id = raw.get("id")
    if event_id is None or event_id == "":
        errors.append("Missing event id")

    start_raw = _get_field(raw, "start_date")
    end_raw = _get_field(raw, "end_date")
    if start_raw is None:
        errors.append("Missing start date")
    if end_raw is None:
        errors.append("Missing end date")
    if errors:
        raise ValueError("; ".join(errors))

    start_date = parse_iso_date(start_raw)
    end_date = parse_iso_date(end_raw)
    if start_date > end_date:
        raise ValueError(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )

    return Event(
        id=str(event_id),
        name=raw.get("name") or "",
        start_date=start_date,
        end_date=end_date,
        color=raw.get("color") or "",
        calendar_id=_get_field(raw, "calendar_id"),
        duration=raw.get("duration"),
    )


def build_events(raw_events: list[dict]) -> tuple[list[Event], list[RejectedEvent]]:
    """
    Parse raw event dictionaries, isolating failures per event.

    Returns:
        Tuple of (events, rejected) in input order
    """
    events = []
    rejected = []

    for raw in raw_events:
        if not isinstance(raw, dict):
            rejected.append(RejectedEvent(event_id=None, error_message="Event must be an object"))
            continue
        event_id = str(raw["id"]) if raw.get("id") is not None else None
        try:
            events.append(parse_event(raw))
        except ParseError as e:
            rejected.append(RejectedEvent(event_id=event_id, error_message=f"Parse error: {e}"))
        except ValueError as e:
            rejected.append(RejectedEvent(event_id=event_id, error_message=str(e)))

    return events, rejected
