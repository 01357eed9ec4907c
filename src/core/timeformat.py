"""
Display-timezone time codec.

All persisted timestamps use the canonical form "YYYY-MM-DD HH:MM:SS" in the
fixed display timezone (UTC+9 by default). The offset is applied to the UTC
instant directly, so the host locale never matters.
"""

from datetime import date, datetime, timedelta, timezone
from typing import TypedDict

from core.clock import current_instant
from core.config import (
    CANONICAL_TIME_FORMAT,
    DATE_FORMAT,
    DATE_GROUP_DAYS_BACK,
    DISPLAY_UTC_OFFSET_HOURS,
)

DISPLAY_TZ = timezone(timedelta(hours=DISPLAY_UTC_OFFSET_HOURS))


def now(clock=None) -> str:
    """Current instant in canonical form."""
    return to_canonical(current_instant(clock))


def to_canonical(instant: datetime) -> str:
    """Format an instant as "YYYY-MM-DD HH:MM:SS" in the display timezone."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(DISPLAY_TZ).strftime(CANONICAL_TIME_FORMAT)


def parse_canonical(value: str) -> datetime:
    """
    Parse a canonical time string into an aware UTC instant.

    Raises:
        ValueError: if the string is not "YYYY-MM-DD HH:MM:SS"
    """
    local = datetime.strptime(value, CANONICAL_TIME_FORMAT).replace(tzinfo=DISPLAY_TZ)
    return local.astimezone(timezone.utc)


def foreign_iso_to_canonical(iso: str) -> str:
    """
    Convert an ISO-8601 timestamp from an external system to canonical form.

    Accepts an offset ("2023-11-01T10:00:00+09:00"), UTC ("...Z") or a bare
    date ("2023-11-05"). A bare date is UTC midnight, so it renders as
    09:00:00 in the display timezone.
    """
    value = iso.strip()
    if len(value) == 10:
        parsed = datetime.strptime(value, DATE_FORMAT)
    else:
        if value.endswith("Z") or value.endswith("z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return to_canonical(parsed.replace(microsecond=0))


def extract_date(value: str) -> str:
    """Date part of a canonical string; plain dates pass through unchanged."""
    if " " in value:
        return value[:10]
    return value


def get_month(value: str) -> str:
    """Month prefix (YYYY-MM) of a date or canonical time string."""
    return value[:7]


def compare_dates(a: str, b: str) -> int:
    """Order two "YYYY-MM-DD" strings: -1, 0 or 1."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def seconds_between(start: str, end: str) -> int:
    """Whole seconds from ``start`` to ``end`` (both canonical)."""
    delta = parse_canonical(end) - parse_canonical(start)
    return int(delta.total_seconds())


# =============================================================================
# DATE GROUPS
# =============================================================================


class DateGroup(TypedDict):
    """One day heading in a date-grouped list."""
    date: str
    display_date: str


def format_date_for_display(day: date, days_ago: int) -> str:
    """Label a day relative to today (e.g. "Today (2025-11-24)")."""
    date_str = day.strftime(DATE_FORMAT)
    if days_ago == 0:
        return f"Today ({date_str})"
    if days_ago == 1:
        return f"Yesterday ({date_str})"
    return date_str


def generate_date_groups(days_back: int = DATE_GROUP_DAYS_BACK, clock=None) -> list[DateGroup]:
    """Date groups from today (display timezone) back ``days_back`` days."""
    today = current_instant(clock).astimezone(DISPLAY_TZ).date()
    groups: list[DateGroup] = []
    for days_ago in range(days_back + 1):
        day = today - timedelta(days=days_ago)
        groups.append(
            {
                "date": day.strftime(DATE_FORMAT),
                "display_date": format_date_for_display(day, days_ago),
            }
        )
    return groups
