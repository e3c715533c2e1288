"""Day/period overlap checks for timetable composition.

Pure functions: no database access and no side effects.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from kukey_core.core.exceptions import MalformedPeriodError

_PERIOD_PATTERN = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)\s*)?$")


class Day(str, Enum):
    """Weekday a course meets on."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"


@dataclass(frozen=True)
class TimeSlot:
    """One weekly meeting: a day and a closed period range [start, end]."""

    day: Day
    start: int
    end: int

    @classmethod
    def from_catalog(cls, day: str, period: str) -> TimeSlot:
        """Build a slot from catalog notation such as ("Mon", "1-3")."""
        try:
            parsed_day = Day(day)
        except ValueError as err:
            raise MalformedPeriodError(f"Unknown day: {day!r}") from err
        start, end = parse_period(period)
        return cls(parsed_day, start, end)


def parse_period(period: str) -> tuple[int, int]:
    """Parse "n" or "a-b" into a closed range.

    Raises:
        MalformedPeriodError: If the string is not a positive ascending range.
    """
    match = _PERIOD_PATTERN.match(period or "")
    if match is None:
        raise MalformedPeriodError(f"Malformed period: {period!r}")
    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) is not None else start
    if start < 1 or end < start:
        raise MalformedPeriodError(f"Malformed period: {period!r}")
    return start, end


def slots_overlap(a: TimeSlot, b: TimeSlot) -> bool:
    """Return True if both slots share a day and at least one period."""
    return a.day == b.day and max(a.start, b.start) <= min(a.end, b.end)


def conflicts(existing: Iterable[TimeSlot], candidate: Iterable[TimeSlot]) -> bool:
    """Return True if any existing slot overlaps any candidate slot."""
    existing_slots = list(existing)
    return any(
        slots_overlap(current, new)
        for new in candidate
        for current in existing_slots
    )
