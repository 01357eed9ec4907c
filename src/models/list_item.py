"""
Shared pieces of the list item variants (Todo and CalendarEvent).

Both variants satisfy the ListItem protocol; there is no common base class.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

from core.timeformat import extract_date, now, seconds_between


class ListItemType(str, Enum):
    TODO = "todo"
    CALENDAR_EVENT = "calendar_event"


@dataclass(frozen=True)
class TimeRange:
    """One timer measurement. ``end`` is None while the timer runs."""

    start: str
    end: Optional[str] = None

    def is_open(self) -> bool:
        return self.end is None

    def duration_seconds(self, clock=None) -> int:
        """Whole seconds covered; an open range runs until now."""
        end = self.end if self.end is not None else now(clock)
        return seconds_between(self.start, end)

    @classmethod
    def from_json(cls, json: dict) -> "TimeRange":
        return cls(start=json["start"], end=json.get("end"))

    def to_json(self) -> dict:
        return {"start": self.start, "end": self.end}


class ListItem(Protocol):
    """Operations every list item variant provides."""

    id: str
    taskcode: str
    text: str
    completed_at: Optional[str]
    created_at: str
    updated_at: str
    time_ranges: tuple[TimeRange, ...]

    @property
    def type(self) -> ListItemType: ...

    def is_completed(self) -> bool: ...

    def set_taskcode(self, taskcode: str, clock=None) -> "ListItem": ...

    def set_text(self, text: str, clock=None) -> "ListItem": ...

    def set_completed(self, completed: bool, clock=None) -> "ListItem": ...

    def toggle_completed(self, clock=None) -> "ListItem": ...

    def start_timer(self, clock=None) -> "ListItem": ...

    def stop_timer(self, clock=None) -> "ListItem": ...

    def is_timer_running(self) -> bool: ...

    def get_total_execution_time_in_minutes(self, clock=None) -> int: ...

    def get_execution_time_for_date(self, date: str, clock=None) -> int: ...

    def to_json(self) -> dict[str, Any]: ...


# =============================================================================
# TIME RANGE HELPERS
# =============================================================================


def time_ranges_from_json(ranges: Optional[list[dict]]) -> tuple[TimeRange, ...]:
    return tuple(TimeRange.from_json(r) for r in ranges or [])


def total_seconds(ranges: tuple[TimeRange, ...], clock=None) -> int:
    return sum(r.duration_seconds(clock) for r in ranges)


def total_seconds_for_date(ranges: tuple[TimeRange, ...], date: str, clock=None) -> int:
    """Seconds from ranges that started on ``date`` (YYYY-MM-DD)."""
    return sum(r.duration_seconds(clock) for r in ranges if extract_date(r.start) == date)


def seconds_to_rounded_minutes(seconds: int) -> int:
    """Round seconds to the nearest minute, halves rounding up."""
    return (seconds + 30) // 60
