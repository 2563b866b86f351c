"""
Data models for events and grid cells.

Events are immutable records; the layout engine never modifies them.
"""

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple


@dataclass(frozen=True)
class Event:
    """A calendar event spanning whole days (both ends inclusive)."""

    id: str
    name: str
    start_date: date
    end_date: date
    color: str
    calendar_id: str | None = None
    duration: str | None = None  # display string, e.g. "1.5y", "3m", "1d"

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date


class GridCoordinate(NamedTuple):
    """Month cell a date belongs to."""

    year: int
    month: int  # 1-12


class WeekCoordinate(NamedTuple):
    """ISO week cell a date belongs to."""

    year: int  # ISO year, may differ from the calendar year around Jan 1
    week: int  # 1-53


@dataclass(frozen=True)
class GridCell:
    """A rendered grid cell. `date` is the first day the cell covers."""

    year: int
    date: date
    month: int | None = None
    week: int | None = None
