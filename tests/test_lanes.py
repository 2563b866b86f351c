"""Tests for lane assignment."""

import logging
from itertools import combinations

import pytest

from conftest import make_event
from core.errors import LayoutConfigError
from core.validation import build_events
from generate_events import generate_events
from services.lanes import assign_lanes, order_events
from services.overlap import date_ranges_overlap


def test_minimal_lane_usage(sample_events):
    assignment = assign_lanes(sample_events, 2025, max_lanes=6)
    assert assignment.lanes == {"A": 0, "B": 1, "C": 0}
    assert assignment.overflowed == ()


def test_sort_order_is_start_then_longest_then_id():
    events = [
        make_event("b-short", "2025-03-01", "2025-03-02"),
        make_event("z-long", "2025-03-01", "2025-03-20"),
        make_event("a-short", "2025-03-01", "2025-03-02"),
        make_event("early", "2025-02-01", "2025-02-02"),
    ]
    ordered = [e.id for e in order_events(events, 2025)]
    assert ordered == ["early", "z-long", "a-short", "b-short"]


def test_longer_event_gets_lower_lane_on_equal_start():
    events = [
        make_event("short", "2025-05-01", "2025-05-03"),
        make_event("long", "2025-05-01", "2025-06-30"),
    ]
    assert assign_lanes(events, 2025, 6).lanes == {"long": 0, "short": 1}


def test_assignment_does_not_depend_on_input_order(sample_events):
    forward = assign_lanes(sample_events, 2025, 6)
    backward = assign_lanes(list(reversed(sample_events)), 2025, 6)
    assert forward == backward


def test_lowest_free_lane_is_reused():
    events = [
        make_event("a", "2025-01-01", "2025-12-31"),
        make_event("b", "2025-01-01", "2025-01-10"),
        make_event("c", "2025-01-05", "2025-01-20"),
        make_event("d", "2025-01-15", "2025-01-16"),
    ]
    # d overlaps a (lane 0) and c (lane 2); b's lane 1 is free again
    assert assign_lanes(events, 2025, 6).lanes == {"a": 0, "b": 1, "c": 2, "d": 1}


def test_overflow_falls_back_to_lane_zero(caplog):
    events = [make_event(f"e{i}", "2025-04-01", "2025-04-10") for i in range(7)]

    with caplog.at_level(logging.WARNING, logger="services.lanes"):
        assignment = assign_lanes(events, 2025, max_lanes=6)

    lanes = [assignment.lanes[e.id] for e in events]
    assert sorted(lanes) == [0, 0, 1, 2, 3, 4, 5]
    assert assignment.overflowed == ("e6",)
    assert "Lane overflow" in caplog.text


def test_no_overlapping_pair_shares_a_lane_within_capacity():
    events = [
        make_event("a", "2025-01-01", "2025-03-01"),
        make_event("b", "2025-02-01", "2025-02-01"),
        make_event("c", "2025-02-15", "2025-04-01"),
        make_event("d", "2025-03-01", "2025-03-01"),
        make_event("e", "2025-03-02", "2025-05-01"),
        make_event("f", "2025-04-01", "2025-04-30"),
    ]
    lanes = assign_lanes(events, 2025, 6).lanes
    for a, b in combinations(events, 2):
        if date_ranges_overlap(a, b):
            assert lanes[a.id] != lanes[b.id], (a.id, b.id)


def test_only_events_in_year_are_assigned():
    events = [
        make_event("old", "2023-01-01", "2023-01-31"),
        make_event("now", "2025-01-01", "2025-01-31"),
    ]
    assert assign_lanes(events, 2025, 6).lanes == {"now": 0}


def test_overlap_outside_year_keeps_lanes_stable_across_years():
    # Both events are visible in 2024 and 2025 but overlap only in 2024
    events = [
        make_event("long", "2024-06-01", "2025-06-01"),
        make_event("bridge", "2024-11-01", "2025-01-15"),
    ]
    lanes_2024 = assign_lanes(events, 2024, 6).lanes
    lanes_2025 = assign_lanes(events, 2025, 6).lanes
    assert lanes_2024 == lanes_2025 == {"long": 0, "bridge": 1}


@pytest.mark.parametrize("max_lanes", [0, -1])
def test_non_positive_max_lanes_is_fatal(sample_events, max_lanes):
    with pytest.raises(LayoutConfigError):
        assign_lanes(sample_events, 2025, max_lanes)


def _full_scan_lanes(events, year, max_lanes):
    """Greedy lanes checking every earlier event, for comparison."""
    ordered = order_events(events, year)
    lanes = {}
    for position, event in enumerate(ordered):
        occupied = {lanes[e.id] for e in ordered[:position] if date_ranges_overlap(e, event)}
        lanes[event.id] = next((lane for lane in range(max_lanes) if lane not in occupied), 0)
    return lanes


@pytest.mark.parametrize("seed,max_lanes", [(4, 3), (5, 6), (6, 50)])
def test_active_interval_scan_matches_full_scan(seed, max_lanes):
    events, _ = build_events(generate_events(120, 2024, 2026, seed=seed))
    assert assign_lanes(events, 2025, max_lanes).lanes == _full_scan_lanes(events, 2025, max_lanes)


def test_touching_events_stay_active_on_the_shared_day():
    events = [
        make_event("a", "2025-01-01", "2025-01-10"),
        make_event("b", "2025-01-10", "2025-01-20"),
        make_event("c", "2025-01-11", "2025-01-12"),
    ]
    # b starts on a's last day; a has ended by the time c starts
    assert assign_lanes(events, 2025, 6).lanes == {"a": 0, "b": 1, "c": 0}
