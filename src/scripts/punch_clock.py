#!/usr/bin/env python3
"""
Record timecard check-ins and check-outs.

Usage:
    uv run python src/scripts/punch_clock.py in
    uv run python src/scripts/punch_clock.py out
    uv run python src/scripts/punch_clock.py status --date 2025-11-07
"""

import argparse
import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import TIMECARD_PATH
from core.storage import load_text, save_text
from core.timeformat import extract_date, now
from models.timecard import TimecardState
from services.reports import format_minutes
from services.timecard import (
    add_check_in,
    add_check_out,
    calculate_working_time_for_date,
    from_json_text,
    get_timecard_state,
    to_json_text,
)


def print_status(data, date: str):
    """Print the day's entries, state and worked time."""
    print(f"Timecard for {date}:")
    for entry in data.get(date, []):
        print(f"  {entry.type.value:<5} {entry.time}")

    state = get_timecard_state(data, date)
    print(f"State: {state.value}")

    minutes = calculate_working_time_for_date(data, date)
    if minutes is None:
        if state != TimecardState.EMPTY:
            print("Worked: entries do not alternate, please correct them")
    else:
        print(f"Worked: {format_minutes(minutes)}")


def main():
    parser = argparse.ArgumentParser(description="Timecard check-in/check-out")
    parser.add_argument("action", choices=["in", "out", "status"])
    parser.add_argument("--date", help="Date (YYYY-MM-DD). Defaults to today.")
    args = parser.parse_args()

    try:
        data = from_json_text(load_text(TIMECARD_PATH, "{}"))
        date = args.date or extract_date(now())

        if args.action == "in":
            data = add_check_in(data, date)
            save_text(TIMECARD_PATH, to_json_text(data))
            print(f"Checked in at {data[date][-1].time}")
        elif args.action == "out":
            data = add_check_out(data, date)
            save_text(TIMECARD_PATH, to_json_text(data))
            print(f"Checked out at {data[date][-1].time}")

        print_status(data, date)
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
