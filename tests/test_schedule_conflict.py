# tests/test_schedule_conflict.py
"""Tests for the day/period overlap checks."""

import pytest

from kukey_core.core.exceptions import MalformedPeriodError
from kukey_core.services.schedule_conflict import (
    Day,
    TimeSlot,
    conflicts,
    parse_period,
    slots_overlap,
)


def slot(day: str, period: str) -> TimeSlot:
    return TimeSlot.from_catalog(day, period)


@pytest.mark.parametrize(
    ("period", "expected"),
    [("1-3", (1, 3)), ("4", (4, 4)), (" 2 - 5 ", (2, 5)), ("7-7", (7, 7))],
)
def test_parse_period_accepts_catalog_notation(period, expected) -> None:
    assert parse_period(period) == expected


@pytest.mark.parametrize("period", ["", "3-1", "0-2", "a-b", "1-", "1-2-3", "-2"])
def test_parse_period_rejects_malformed_input(period) -> None:
    with pytest.raises(MalformedPeriodError):
        parse_period(period)


def test_unknown_day_is_malformed() -> None:
    with pytest.raises(MalformedPeriodError):
        TimeSlot.from_catalog("Funday", "1-2")


def test_from_catalog_builds_slot() -> None:
    assert slot("Wed", "2-4") == TimeSlot(Day.WED, 2, 4)


def test_overlap_on_shared_boundary_period() -> None:
    """Periods are closed ranges, so 1-3 and 3-4 share period 3."""
    assert slots_overlap(slot("Mon", "1-3"), slot("Mon", "3-4"))


def test_adjacent_periods_do_not_overlap() -> None:
    assert not slots_overlap(slot("Mon", "1-2"), slot("Mon", "3-4"))


def test_different_days_never_overlap() -> None:
    assert not slots_overlap(slot("Mon", "1-3"), slot("Tue", "1-3"))


def test_containment_overlaps() -> None:
    assert slots_overlap(slot("Fri", "1-6"), slot("Fri", "3"))


def test_conflicts_is_symmetric() -> None:
    a = {slot("Mon", "1-3"), slot("Wed", "1-3")}
    b = {slot("Tue", "1-2"), slot("Wed", "3-4")}
    c = {slot("Thu", "5")}
    assert conflicts(a, b) and conflicts(b, a)
    assert not conflicts(a, c) and not conflicts(c, a)


def test_conflicts_with_empty_sides() -> None:
    assert not conflicts([], {slot("Mon", "1")})
    assert not conflicts({slot("Mon", "1")}, [])


def test_conflicts_accepts_generators() -> None:
    existing = (s for s in [slot("Mon", "1-2")])
    assert conflicts(existing, [slot("Mon", "2")])
