"""
Data models for external calendar payloads.

TypedDicts describing what the calendar-fetch CLI prints on stdout.
Only the fields the importer reads are required.
"""

from typing import NotRequired, TypedDict


class CalendarEventDateTime(TypedDict, total=False):
    """Start/end of an event. All-day events carry ``date`` only."""
    dateTime: str  # e.g. "2023-11-01T10:00:00+09:00"
    date: str  # e.g. "2023-11-05"
    timeZone: str


class GoogleCalendarEvent(TypedDict):
    """Google Calendar API event resource (subset)."""
    id: NotRequired[str]
    status: NotRequired[str]
    created: str  # e.g. "2023-10-20T09:00:00.000Z"
    updated: NotRequired[str]
    summary: NotRequired[str]
    description: NotRequired[str]
    location: NotRequired[str]
    start: CalendarEventDateTime
    end: CalendarEventDateTime
    iCalUID: NotRequired[str]
    eventType: NotRequired[str]


class CalendarFetchResult(TypedDict):
    """Envelope printed by the calendar-fetch CLI."""
    success: bool
    events: NotRequired[list[GoogleCalendarEvent]]
    error: NotRequired[str]
