"""
Timecard (daily attendance) operations.

Data shape: {"2024-10-18": [TimecardEntry("start", "2024-10-18 10:59:00"), ...]}

Entries are appended as-is; alternation (start, end, start, ...) is only
checked when the data is read for reporting.
"""

import json
from typing import Any, Optional

from core.timeformat import extract_date, now, seconds_between
from core.validation import TimecardValidationError, validate_timecard_shape
from models.timecard import TimecardEntry, TimecardEntryType, TimecardState

TimecardData = dict[str, list[TimecardEntry]]


def create_check_in_entry(clock=None) -> TimecardEntry:
    return TimecardEntry(TimecardEntryType.START, now(clock))


def create_check_out_entry(clock=None) -> TimecardEntry:
    return TimecardEntry(TimecardEntryType.END, now(clock))


def _append_entry(data: TimecardData, entry: TimecardEntry, date: Optional[str]) -> TimecardData:
    target_date = date or extract_date(entry.time)
    return {**data, target_date: [*data.get(target_date, []), entry]}


def add_check_in(data: TimecardData, date: Optional[str] = None, clock=None) -> TimecardData:
    """Append a check-in to ``date`` (defaults to today)."""
    return _append_entry(data, create_check_in_entry(clock), date)


def add_check_out(data: TimecardData, date: Optional[str] = None, clock=None) -> TimecardData:
    """Append a check-out to ``date`` (defaults to today)."""
    return _append_entry(data, create_check_out_entry(clock), date)


def delete_entry(data: TimecardData, date: str, index: int) -> TimecardData:
    """Remove one entry; the date key disappears with its last entry."""
    remaining = [entry for i, entry in enumerate(data.get(date, [])) if i != index]
    if not remaining:
        return {d: entries for d, entries in data.items() if d != date}
    return {**data, date: remaining}


def update_entry(data: TimecardData, date: str, index: int, new_entry: TimecardEntry) -> TimecardData:
    entries = [new_entry if i == index else entry for i, entry in enumerate(data.get(date, []))]
    return {**data, date: entries}


def replace_entries_for_date(data: TimecardData, date: str, json_text: str) -> TimecardData:
    """
    Replace all entries of ``date`` with the JSON array in ``json_text``.

    Raises:
        json.JSONDecodeError: if the text is not valid JSON
        TimecardValidationError: if it is not an array of valid entries
    """
    parsed = json.loads(json_text)
    if not isinstance(parsed, list):
        raise TimecardValidationError(
            "timecard entries must be an array", [f"got {type(parsed).__name__}"]
        )
    return {**data, date: [TimecardEntry.from_json(entry) for entry in parsed]}


def get_entries_for_date_as_json(data: TimecardData, date: str) -> list[dict[str, str]]:
    return [entry.to_json() for entry in data.get(date, [])]


def get_sorted_dates(data: TimecardData) -> list[str]:
    """Dates with entries, most recent first."""
    return sorted(data.keys(), reverse=True)


# =============================================================================
# VALIDATION & WORKING TIME
# =============================================================================


def validate_timecard_entries(entries: list[TimecardEntry]) -> bool:
    """
    True for start, end, start, end, ... optionally ending on an open start.

    False for an empty list, a leading end or two adjacent entries of the
    same type.
    """
    if not entries:
        return False
    if entries[0].type == TimecardEntryType.END:
        return False
    return all(a.type != b.type for a, b in zip(entries, entries[1:]))


def get_timecard_state(data: TimecardData, date: str) -> TimecardState:
    """EMPTY without entries, OPEN when the last entry is a check-in, else CLOSED."""
    entries = data.get(date, [])
    if not entries:
        return TimecardState.EMPTY
    if entries[-1].type == TimecardEntryType.START:
        return TimecardState.OPEN
    return TimecardState.CLOSED


def calculate_working_time_for_date(data: TimecardData, date: str, clock=None) -> Optional[int]:
    """
    Worked minutes on ``date``.

    Each start/end pair is floored to whole minutes before summing. A
    trailing check-in counts until now. Returns None when the date has no
    entries or the entries do not alternate; None means the data needs
    correction, not zero.
    """
    entries = data.get(date, [])
    if not validate_timecard_entries(entries):
        return None

    total_minutes = 0
    open_start: Optional[TimecardEntry] = None
    for entry in entries:
        if entry.type == TimecardEntryType.START:
            open_start = entry
        elif open_start is not None:
            total_minutes += seconds_between(open_start.time, entry.time) // 60
            open_start = None

    if open_start is not None:
        total_minutes += seconds_between(open_start.time, now(clock)) // 60

    return total_minutes


# =============================================================================
# SERIALIZATION
# =============================================================================


def from_json(data: Any) -> TimecardData:
    """
    Raises:
        TimecardValidationError: on a bad outer shape or any bad entry
    """
    validate_timecard_shape(data)
    return {date: [TimecardEntry.from_json(entry) for entry in entries] for date, entries in data.items()}


def to_json(data: TimecardData) -> dict[str, list[dict[str, str]]]:
    return {date: [entry.to_json() for entry in entries] for date, entries in data.items()}


def from_json_text(json_text: str) -> TimecardData:
    return from_json(json.loads(json_text))


def to_json_text(data: TimecardData, pretty: bool = True) -> str:
    if pretty:
        return json.dumps(to_json(data), indent=2, ensure_ascii=False)
    return json.dumps(to_json(data), ensure_ascii=False, separators=(",", ":"))
