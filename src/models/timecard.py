"""
Timecard entry: a single check-in ("start") or check-out ("end").
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from core.validation import TimecardValidationError


class TimecardEntryType(str, Enum):
    START = "start"
    END = "end"


class TimecardState(str, Enum):
    """Attendance state of one day."""
    EMPTY = "empty"
    OPEN = "open"  # clocked in
    CLOSED = "closed"  # clocked out


@dataclass(frozen=True)
class TimecardEntry:
    """
    Validated on construction: ``type`` must be "start" or "end" and
    ``time`` a non-empty canonical time string.
    """

    type: TimecardEntryType
    time: str

    def __post_init__(self):
        try:
            entry_type = TimecardEntryType(self.type)
        except ValueError:
            raise TimecardValidationError(
                'type must be "start" or "end"', [f"type: got {self.type!r}"]
            ) from None
        if not isinstance(self.time, str) or not self.time:
            raise TimecardValidationError(
                "time must be a non-empty string", [f"time: got {self.time!r}"]
            )
        # Normalize plain strings to the enum
        object.__setattr__(self, "type", entry_type)

    @property
    def date(self) -> str:
        return self.time[:10]

    def set_time(self, time: str) -> "TimecardEntry":
        return replace(self, time=time)

    def set_type(self, entry_type: TimecardEntryType) -> "TimecardEntry":
        return replace(self, type=entry_type)

    @classmethod
    def from_json(cls, json: Any) -> "TimecardEntry":
        if not isinstance(json, dict):
            raise TimecardValidationError(
                "timecard entry must be an object", [f"got {type(json).__name__}"]
            )
        return cls(type=json.get("type"), time=json.get("time"))

    def to_json(self) -> dict[str, str]:
        return {"type": self.type.value, "time": self.time}
