"""Tests for overlap detection and clustering."""

from conftest import make_event
from services.overlap import cluster_events, date_ranges_overlap, events_in_year


def test_touching_ranges_overlap():
    a = make_event("a", "2025-01-01", "2025-01-05")
    b = make_event("b", "2025-01-05", "2025-01-09")
    assert date_ranges_overlap(a, b)
    assert date_ranges_overlap(b, a)


def test_consecutive_days_do_not_overlap():
    a = make_event("a", "2025-01-01", "2025-01-05")
    b = make_event("b", "2025-01-06", "2025-01-09")
    assert not date_ranges_overlap(a, b)


def test_single_day_events_on_same_day_overlap():
    a = make_event("a", "2025-03-03", "2025-03-03")
    b = make_event("b", "2025-03-03", "2025-03-03")
    assert date_ranges_overlap(a, b)


def test_events_in_year_uses_full_range():
    events = [
        make_event("before", "2023-05-01", "2023-06-01"),
        make_event("spanning", "2023-12-01", "2025-02-01"),
        make_event("inside", "2024-07-01", "2024-07-02"),
        make_event("after", "2025-01-01", "2025-01-02"),
    ]
    assert events_in_year(events, 2024) == [1, 2]


def test_chain_collapses_into_one_cluster():
    # A-B, B-C, C-D overlap; A and D do not
    events = [
        make_event("A", "2025-01-01", "2025-01-10"),
        make_event("B", "2025-01-10", "2025-01-20"),
        make_event("C", "2025-01-20", "2025-01-30"),
        make_event("D", "2025-01-30", "2025-02-10"),
    ]
    assert not date_ranges_overlap(events[0], events[3])
    assert cluster_events(events, 2025) == [frozenset({0, 1, 2, 3})]


def test_chain_bridged_late_merges_existing_groups():
    # A and C are separate until B arrives and bridges them
    events = [
        make_event("A", "2025-01-01", "2025-01-10"),
        make_event("C", "2025-01-20", "2025-01-30"),
        make_event("B", "2025-01-08", "2025-01-22"),
        make_event("X", "2025-06-01", "2025-06-02"),
    ]
    assert cluster_events(events, 2025) == [frozenset({0, 1, 2}), frozenset({3})]


def test_disjoint_events_form_separate_clusters():
    events = [
        make_event("jun", "2025-06-01", "2025-06-05"),
        make_event("jan", "2025-01-01", "2025-01-05"),
    ]
    assert cluster_events(events, 2025) == [frozenset({0}), frozenset({1})]


def test_overlap_outside_displayed_year_still_connects():
    # Both reach into 2025 but only overlap in Dec 2024
    events = [
        make_event("long", "2024-12-01", "2025-03-01"),
        make_event("short", "2024-12-10", "2024-12-20"),
        make_event("later", "2024-12-15", "2025-01-10"),
    ]
    clusters = cluster_events(events, 2025)
    assert clusters == [frozenset({0, 2})]


def test_events_outside_year_are_ignored():
    events = [
        make_event("old", "2020-01-01", "2020-01-31"),
        make_event("new", "2025-01-01", "2025-01-31"),
    ]
    assert cluster_events(events, 2025) == [frozenset({1})]
    assert cluster_events(events, 2022) == []


def test_input_is_not_modified(sample_events):
    before = list(sample_events)
    cluster_events(sample_events, 2025)
    assert sample_events == before
