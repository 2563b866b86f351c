#!/usr/bin/env python3
"""
Print the event layout of one year from an events JSON file.

The file holds a list of event objects with id, name, startDate, endDate and
color (see tests/fixtures/generate_events.py for a generator).

Usage:
    uv run python src/scripts/layout_year.py --events events.json --year 2025
"""

import argparse
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import MAX_LANES
from core.dates import get_month_name
from core.errors import LayoutConfigError
from core.validation import build_events
from models.layout import LayoutConfig, YearLayout
from services.layout import compute_layout


def load_raw_events(path: Path) -> list[dict]:
    """Read a list of raw event objects from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of events")
    return data


def print_layout(layout: YearLayout, names: dict[str, str]):
    """Print one row per event bar, in lane order."""
    info = layout.info
    print(f"Year {layout.year}: {len(layout.geometries)} event(s), {info.max_lanes_used} lane(s) used")
    if info.lane_overflow:
        print("  Warning: lane overflow, some events share lane 0")

    if layout.geometries:
        print(f"  {'Event':<30} {'From':<7} {'To':<7} {'Lane':>4} {'Left':>9} {'Width':>9} {'Top':>7} {'Height':>7}")
    for g in layout.geometries:
        start_label = f"{get_month_name(g.bar_start.month)} {g.bar_start.day}"
        end_label = f"{get_month_name(g.bar_end.month)} {g.bar_end.day}"
        name = names.get(g.event_id, g.event_id)[:30]
        print(
            f"  {name:<30} {start_label:<7} {end_label:<7} {g.lane:>4} "
            f"{g.left:>9.2f} {g.width:>9.2f} {g.top:>7.2f} {g.height:>7.2f}"
        )


def main(events_path: Path, year: int, units: str, max_lanes: int) -> int:
    """Main entry point."""
    raw_events = load_raw_events(events_path)
    events, rejected = build_events(raw_events)
    print(f"Loaded {len(events)} event(s) from {events_path}")

    try:
        config = LayoutConfig(units=units, max_lanes=max_lanes)
    except LayoutConfigError as e:
        print(f"Error: {e}")
        return 2

    layout = compute_layout(events, year, config)
    print_layout(layout, {e.id: e.name for e in events})

    all_rejected = rejected + list(layout.rejected)
    if all_rejected:
        print(f"\nRejected events: {len(all_rejected)}")
        for item in all_rejected:
            print(f"  {item.event_id or '<no id>'}: {item.error_message}")

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the event layout of one year")
    parser.add_argument("--events", required=True, type=Path, help="Events JSON file")
    parser.add_argument("--year", required=True, type=int, help="Year to lay out")
    parser.add_argument("--units", choices=["px", "percent"], default="px", help="Horizontal units")
    parser.add_argument("--max-lanes", type=int, default=MAX_LANES, help="Maximum lanes per year row")
    args = parser.parse_args()

    sys.exit(main(args.events, args.year, args.units, args.max_lanes))
