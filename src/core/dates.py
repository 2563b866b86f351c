"""
Date parsing and grid position arithmetic.

Maps calendar dates to (year, month) or ISO (year, week) grid cells and to
fractional offsets inside a cell. Fractions are relative to their own cell, so
a fraction in February is not comparable with one in March.
"""

import calendar
import re
from datetime import date, datetime

from core.config import MONTHS_PER_YEAR
from core.errors import ParseError
from models.events import GridCell, GridCoordinate, WeekCoordinate

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAYS_PER_WEEK = 7
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


# =============================================================================
# PARSING
# =============================================================================


def parse_iso_date(value) -> date:
    """
    Parse an ISO date string (YYYY-MM-DD) into a date.

    A date is returned unchanged and a datetime is truncated to its date.

    Raises:
        ParseError: if the value is not a valid ISO calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ParseError(value, f"expected a string, got {type(value).__name__}")

    # strptime alone also takes "2025-1-5"
    if not ISO_DATE_PATTERN.fullmatch(value):
        raise ParseError(value)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ParseError(value) from None


def to_iso_date_string(d: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return d.isoformat()


# =============================================================================
# GRID POSITION
# =============================================================================


def get_grid_position(d: date) -> GridCoordinate:
    """Get the (year, month) cell for a date."""
    return GridCoordinate(d.year, d.month)


def get_week_position(d: date) -> WeekCoordinate:
    """Get the ISO (year, week) cell for a date."""
    iso = d.isocalendar()
    return WeekCoordinate(iso[0], iso[1])


def is_date_in_cell(d: date, cell: GridCell) -> bool:
    """Check if a date falls within a month cell, or a week cell for weekly grids."""
    if cell.week is not None:
        return get_week_position(d) == WeekCoordinate(cell.year, cell.week)
    return get_grid_position(d) == GridCoordinate(cell.year, cell.month)


def get_month_start(d: date) -> date:
    return d.replace(day=1)


def get_day_of_month(d: date) -> int:
    return d.day


def get_total_days_in_month(d: date) -> int:
    """Number of days in the month of `d` (28-31, leap years included)."""
    return calendar.monthrange(d.year, d.month)[1]


# =============================================================================
# FRACTIONS
# =============================================================================


def get_month_fraction(d: date) -> float:
    """
    Fraction of the month cell where the START of day `d` falls.

    Jan 1 = 0.0, Jan 31 = 30/31. Never reaches 1.0.
    """
    return (get_day_of_month(d) - 1) / get_total_days_in_month(d)


def get_month_fraction_end(d: date) -> float:
    """
    Fraction of the month cell where the END of day `d` falls (inclusive).

    Jan 1 = 1/31, Jan 31 = 1.0. Always greater than get_month_fraction(d).
    """
    return get_day_of_month(d) / get_total_days_in_month(d)


def get_week_fraction(d: date) -> float:
    """Start-of-day fraction within an ISO week cell (Monday = 0.0)."""
    return (d.isoweekday() - 1) / DAYS_PER_WEEK


def get_week_fraction_end(d: date) -> float:
    """End-of-day fraction within an ISO week cell (Sunday = 1.0)."""
    return d.isoweekday() / DAYS_PER_WEEK


# =============================================================================
# GRID CELLS
# =============================================================================


def generate_grid_cells(start_year: int, end_year: int) -> list[GridCell]:
    """Generate one month cell per month for each year in the inclusive range."""
    cells = []
    for year in range(start_year, end_year + 1):
        for month in range(1, MONTHS_PER_YEAR + 1):
            cells.append(GridCell(year=year, month=month, date=date(year, month, 1)))
    return cells


def generate_week_cells(start_year: int, end_year: int) -> list[GridCell]:
    """
    Generate ISO week cells for each ISO year in the inclusive range.

    ISO years have 52 or 53 weeks; a cell's date is the Monday of its week.
    """
    cells = []
    for year in range(start_year, end_year + 1):
        # Dec 28 is always in the last ISO week of its year
        weeks = date(year, 12, 28).isocalendar()[1]
        for week in range(1, weeks + 1):
            cells.append(GridCell(year=year, week=week, date=date.fromisocalendar(year, week, 1)))
    return cells


def get_month_names() -> list[str]:
    return list(MONTH_NAMES)


def get_month_name(month: int) -> str:
    """Short month name for a month number (1-12), empty string otherwise."""
    if 1 <= month <= MONTHS_PER_YEAR:
        return MONTH_NAMES[month - 1]
    return ""
