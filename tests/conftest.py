"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Tests assume the reference display timezone (UTC+9)
os.environ["DISPLAY_UTC_OFFSET_HOURS"] = "9"

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.clock import FixedClock  # noqa: E402
from models.list_item import TimeRange  # noqa: E402
from models.todo import Todo  # noqa: E402


@pytest.fixture
def clock():
    """Fixed clock at 2025-01-15 12:34:56 display time (03:34:56 UTC)."""
    return FixedClock(datetime(2025, 1, 15, 3, 34, 56, tzinfo=timezone.utc))


@pytest.fixture
def sample_todo():
    """Incomplete todo without time ranges."""
    return Todo(
        id="todo-1",
        taskcode="DEV-1",
        text="Write report",
        completed_at=None,
        created_at="2025-01-15 09:00:00",
        updated_at="2025-01-15 09:00:00",
    )


@pytest.fixture
def tracked_todo():
    """Todo with one hour tracked on 2025-01-15 and 30 minutes on 2025-01-16."""
    return Todo(
        id="todo-2",
        taskcode="DEV-2",
        text="Review pull requests",
        completed_at=None,
        created_at="2025-01-15 08:00:00",
        updated_at="2025-01-16 10:30:00",
        time_ranges=(
            TimeRange("2025-01-15 09:00:00", "2025-01-15 10:00:00"),
            TimeRange("2025-01-16 10:00:00", "2025-01-16 10:30:00"),
        ),
    )


@pytest.fixture
def google_event():
    """Google Calendar event as printed by the calendar-fetch CLI."""
    return {
        "kind": "calendar#event",
        "etag": '"3123456789012345"',
        "id": "12345abcde67890fghij12345",
        "status": "confirmed",
        "htmlLink": "https://www.google.com/calendar/event?eid=xxxxxxxx",
        "created": "2023-10-20T09:00:00.000Z",
        "updated": "2023-10-20T09:30:00.000Z",
        "summary": "Weekly status meeting",
        "description": "Project A progress check",
        "location": "Online (Zoom)",
        "creator": {"email": "user@example.com", "self": True},
        "organizer": {"email": "user@example.com", "self": True},
        "start": {"dateTime": "2023-11-01T10:00:00+09:00", "timeZone": "Asia/Tokyo"},
        "end": {"dateTime": "2023-11-01T11:00:00+09:00", "timeZone": "Asia/Tokyo"},
        "iCalUID": "12345abcde67890fghij12345@google.com",
        "sequence": 0,
        "eventType": "default",
    }


@pytest.fixture
def all_day_event():
    """All-day Google Calendar event (date only)."""
    return {
        "id": "98765zyxwv43210utsrq98765",
        "created": "2023-10-21T15:00:00.000Z",
        "updated": "2023-10-21T15:00:00.000Z",
        "summary": "Birthday",
        "start": {"date": "2023-11-05"},
        "end": {"date": "2023-11-06"},
    }


@pytest.fixture
def project_definitions_json():
    """Month-keyed project definitions in the wire format."""
    return {
        "2025-01": [
            {
                "projectcode": "ProjectA",
                "color": "red",
                "assign": 0.5,
                "projectname": "Project A",
                "taskcodes": [
                    {"taskcode": "DEV-1", "keywords": ["report", "docs"], "quickTasks": ["standup"]},
                    {"taskcode": "DEV-2"},
                ],
            },
            {
                "projectcode": "ProjectB",
                "color": "#3366ff",
                "taskcodes": [{"taskcode": "OPS-1", "keywords": ["deploy"]}],
            },
        ],
        "2024-12": [
            {"projectcode": "ProjectC", "color": "green", "taskcodes": [{"taskcode": "DEV-1"}]},
        ],
    }
