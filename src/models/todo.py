"""
Todo entity: a plain task with a start/stop timer history.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from core.timeformat import now
from models.list_item import (
    ListItemType,
    TimeRange,
    seconds_to_rounded_minutes,
    time_ranges_from_json,
    total_seconds,
    total_seconds_for_date,
)


@dataclass(frozen=True)
class Todo:
    """
    Immutable todo item. Every update returns a new instance with a
    refreshed ``updated_at``.
    """

    id: str
    taskcode: str
    text: str
    completed_at: Optional[str]
    created_at: str
    updated_at: str
    time_ranges: tuple[TimeRange, ...] = ()

    @property
    def type(self) -> ListItemType:
        return ListItemType.TODO

    def is_completed(self) -> bool:
        return self.completed_at is not None

    def set_taskcode(self, taskcode: str, clock=None) -> "Todo":
        return replace(self, taskcode=taskcode, updated_at=now(clock))

    def set_text(self, text: str, clock=None) -> "Todo":
        return replace(self, text=text, updated_at=now(clock))

    def set_completed(self, completed: bool, clock=None) -> "Todo":
        timestamp = now(clock)
        return replace(
            self,
            completed_at=timestamp if completed else None,
            updated_at=timestamp,
        )

    def toggle_completed(self, clock=None) -> "Todo":
        return self.set_completed(not self.is_completed(), clock)

    def start_timer(self, clock=None) -> "Todo":
        timestamp = now(clock)
        return replace(
            self,
            time_ranges=self.time_ranges + (TimeRange(start=timestamp),),
            updated_at=timestamp,
        )

    def stop_timer(self, clock=None) -> "Todo":
        """Close the running range. Returns ``self`` if nothing is running."""
        if not self.is_timer_running():
            return self
        timestamp = now(clock)
        closed = replace(self.time_ranges[-1], end=timestamp)
        return replace(
            self,
            time_ranges=self.time_ranges[:-1] + (closed,),
            updated_at=timestamp,
        )

    def is_timer_running(self) -> bool:
        return bool(self.time_ranges) and self.time_ranges[-1].is_open()

    def get_total_execution_time_in_minutes(self, clock=None) -> int:
        return seconds_to_rounded_minutes(total_seconds(self.time_ranges, clock))

    def get_execution_time_for_date(self, date: str, clock=None) -> int:
        """Seconds measured on ``date`` (ranges are bucketed by start date)."""
        return total_seconds_for_date(self.time_ranges, date, clock)

    @classmethod
    def from_json(cls, json: dict[str, Any], clock=None) -> "Todo":
        timestamp = now(clock)
        return cls(
            id=json["id"],
            taskcode=json.get("taskcode") or "",
            text=json.get("text") or "",
            completed_at=json.get("completedAt") or None,
            created_at=json.get("createdAt") or timestamp,
            updated_at=json.get("updatedAt") or timestamp,
            time_ranges=time_ranges_from_json(json.get("timeRanges")),
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
        }
