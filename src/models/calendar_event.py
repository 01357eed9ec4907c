"""
CalendarEvent entity: an event imported from an external calendar.

Calendar events have no running timer. Their single time range is derived
from the scheduled window when the event is marked completed.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from core.timeformat import foreign_iso_to_canonical, now
from models.events import GoogleCalendarEvent
from models.list_item import (
    ListItemType,
    TimeRange,
    seconds_to_rounded_minutes,
    time_ranges_from_json,
    total_seconds,
    total_seconds_for_date,
)

CALENDAR_ID_PREFIX = "cal-"


# =============================================================================
# DETERMINISTIC IDS
# =============================================================================


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_code_units(text: str) -> list[int]:
    data = text.encode("utf-16-le")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def _rolling_hash(code_units) -> int:
    """32-bit signed ``hash * 31 + unit`` over the given code units."""
    result = 0
    for unit in code_units:
        result = _to_int32((result << 5) - result + unit)
    return result


def generate_calendar_event_id(event: GoogleCalendarEvent) -> str:
    """
    Build a stable id from the event's start and creation timestamps.

    The same source event always yields the same id, so re-importing it
    replaces the earlier copy instead of duplicating it. The layout must stay
    byte-compatible with ids already stored in existing data files.
    """
    start = event.get("start") or {}
    start_time = start.get("dateTime") or start.get("date") or ""
    unique_string = f"{start_time}_{event.get('created', '')}"

    units = _utf16_code_units(unique_string)
    hex1 = format(abs(_rolling_hash(units)), "x").zfill(8)
    hex2 = format(abs(_rolling_hash(reversed(units))), "x").zfill(8)

    return f"{CALENDAR_ID_PREFIX}{hex1}-{hex2[0:4]}-{hex2[4:8]}-{hex1[0:12]}"


def _event_time(value: Optional[dict]) -> Optional[str]:
    """Canonical time of a Google start/end object (dateTime or all-day date)."""
    if not value:
        return None
    raw = value.get("dateTime") or value.get("date")
    return foreign_iso_to_canonical(raw) if raw else None


# =============================================================================
# ENTITY
# =============================================================================


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    taskcode: str
    text: str
    completed_at: Optional[str]
    created_at: str
    updated_at: str
    time_ranges: tuple[TimeRange, ...] = ()
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    @property
    def type(self) -> ListItemType:
        return ListItemType.CALENDAR_EVENT

    def is_completed(self) -> bool:
        return self.completed_at is not None

    def set_taskcode(self, taskcode: str, clock=None) -> "CalendarEvent":
        return replace(self, taskcode=taskcode, updated_at=now(clock))

    def set_text(self, text: str, clock=None) -> "CalendarEvent":
        return replace(self, text=text, updated_at=now(clock))

    def set_completed(self, completed: bool, clock=None) -> "CalendarEvent":
        """
        Completing records the scheduled window as the only time range
        (when both ends are known); un-completing drops all ranges.
        """
        timestamp = now(clock)
        time_ranges: tuple[TimeRange, ...] = ()
        if completed and self.start_time is not None and self.end_time is not None:
            time_ranges = (TimeRange(start=self.start_time, end=self.end_time),)
        return replace(
            self,
            completed_at=timestamp if completed else None,
            updated_at=timestamp,
            time_ranges=time_ranges,
        )

    def toggle_completed(self, clock=None) -> "CalendarEvent":
        return self.set_completed(not self.is_completed(), clock)

    def start_timer(self, clock=None) -> "CalendarEvent":
        return self

    def stop_timer(self, clock=None) -> "CalendarEvent":
        return self

    def is_timer_running(self) -> bool:
        return False

    def get_total_execution_time_in_minutes(self, clock=None) -> int:
        return seconds_to_rounded_minutes(total_seconds(self.time_ranges, clock))

    def get_execution_time_for_date(self, date: str, clock=None) -> int:
        return total_seconds_for_date(self.time_ranges, date, clock)

    @classmethod
    def from_google_calendar_event(
        cls, event: GoogleCalendarEvent, taskcode: str = "", clock=None
    ) -> "CalendarEvent":
        created_at = foreign_iso_to_canonical(event["created"]) if event.get("created") else now(clock)
        updated_at = foreign_iso_to_canonical(event["updated"]) if event.get("updated") else created_at
        return cls(
            id=generate_calendar_event_id(event),
            taskcode=taskcode,
            text=event.get("summary") or "",
            completed_at=None,
            created_at=created_at,
            updated_at=updated_at,
            time_ranges=(),
            start_time=_event_time(event.get("start")),
            end_time=_event_time(event.get("end")),
            location=event.get("location"),
            description=event.get("description"),
        )

    @classmethod
    def from_json(cls, json: dict[str, Any], clock=None) -> "CalendarEvent":
        timestamp = now(clock)
        return cls(
            id=json["id"],
            taskcode=json.get("taskcode") or "",
            text=json.get("text") or "",
            completed_at=json.get("completedAt") or None,
            created_at=json.get("createdAt") or timestamp,
            updated_at=json.get("updatedAt") or timestamp,
            time_ranges=time_ranges_from_json(json.get("timeRanges")),
            start_time=json.get("startTime") or None,
            end_time=json.get("endTime") or None,
            location=json.get("location"),
            description=json.get("description"),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "taskcode": self.taskcode,
            "text": self.text,
            "completedAt": self.completed_at,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "timeRanges": [r.to_json() for r in self.time_ranges],
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "description": self.description,
        }
