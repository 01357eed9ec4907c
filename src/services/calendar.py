"""
Calendar event intake from the external calendar-fetch CLI.

The CLI handles OAuth and the Google API; it prints a JSON envelope
{"success": bool, "events": [...], "error": "..."} on stdout.
"""

import json
import shlex
import subprocess

from core.config import CALENDAR_FETCH_COMMAND
from models.events import CalendarFetchResult, GoogleCalendarEvent


class CalendarFetchError(RuntimeError):
    """The calendar-fetch CLI reported a failure or printed garbage."""


def parse_calendar_fetch_output(output: str) -> list[GoogleCalendarEvent]:
    """
    Extract events from the CLI's JSON envelope.

    Raises:
        json.JSONDecodeError: if the output is not JSON
        CalendarFetchError: if the envelope reports failure or is malformed
    """
    result: CalendarFetchResult = json.loads(output)
    if not isinstance(result, dict) or "success" not in result:
        raise CalendarFetchError("Calendar fetch output is missing the 'success' field")
    if not result["success"]:
        raise CalendarFetchError(result.get("error") or "Calendar fetch failed")

    events = result.get("events")
    if events is None:
        return []
    if not isinstance(events, list):
        raise CalendarFetchError("Calendar fetch 'events' must be an array")
    return events


def fetch_calendar_events(date: str | None = None, command: str = CALENDAR_FETCH_COMMAND) -> list[GoogleCalendarEvent]:
    """
    Run the calendar-fetch CLI for ``date`` (today if None) and return its events.

    Raises:
        CalendarFetchError: if the command fails or reports failure
    """
    args = shlex.split(command)
    if date:
        args.append(date)

    try:
        completed = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as e:
        raise CalendarFetchError(f"Could not run calendar fetch command: {e}") from e

    # The CLI logs to stderr and prints the envelope even on failure
    if not completed.stdout.strip():
        raise CalendarFetchError(
            f"Calendar fetch exited with {completed.returncode}: {completed.stderr.strip()}"
        )
    return parse_calendar_fetch_output(completed.stdout)
