#!/usr/bin/env python3
"""
Import calendar events into the todo list.

Reads the calendar-fetch CLI envelope ({"success": ..., "events": [...]})
from a file, or runs the CLI directly, and merges the events. Re-importing
the same events replaces the earlier copies.

Usage:
    uv run python src/scripts/import_calendar_events.py --date 2025-01-15
    uv run python src/scripts/import_calendar_events.py --file events.json --as-todos
"""

import argparse
import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import PROJECT_DEFINITIONS_PATH, TODOS_PATH
from core.storage import load_text, save_text
from core.timeformat import extract_date
from models.calendar_event import generate_calendar_event_id
from services import list_items, projects
from services.calendar import fetch_calendar_events, parse_calendar_fetch_output


def assign_keyword_taskcodes(items, repo, imported_ids: set[str]):
    """Give imported items without a task code the one their title matches by keyword."""
    for item in items:
        if item.id not in imported_ids or item.taskcode:
            continue
        date = extract_date(getattr(item, "start_time", None) or item.created_at)
        taskcode = projects.find_taskcode_by_keyword(repo, date, item.text)
        if taskcode:
            items = list_items.edit_item_taskcode(items, item.id, taskcode)
            print(f"  {item.text}: task code {taskcode}")
    return items


def main():
    parser = argparse.ArgumentParser(description="Import calendar events into the todo list")
    parser.add_argument("--file", type=Path, help="Saved calendar-fetch output. Runs the CLI if omitted.")
    parser.add_argument("--date", help="Date to fetch (YYYY-MM-DD). Defaults to today.")
    parser.add_argument("--as-todos", action="store_true", help="Import as plain todos instead of calendar events")
    parser.add_argument("--taskcode", default="", help="Task code for imported items")
    args = parser.parse_args()

    try:
        if args.file:
            events = parse_calendar_fetch_output(args.file.read_text(encoding="utf-8"))
        else:
            events = fetch_calendar_events(args.date)
        print(f"Fetched {len(events)} event(s)")

        items = list_items.from_json_text(load_text(TODOS_PATH, "[]"))
        before = len(items)

        if args.as_todos:
            items = list_items.add_todos_from_calendar_events(items, events, args.taskcode)
        else:
            items = list_items.add_calendar_events(items, events, args.taskcode)

        if not args.taskcode:
            repo = projects.from_json_text(load_text(PROJECT_DEFINITIONS_PATH, "{}"))
            items = assign_keyword_taskcodes(items, repo, {generate_calendar_event_id(e) for e in events})

        save_text(TODOS_PATH, list_items.to_json_text(items))
        print(f"Added {len(items) - before} new item(s), {len(items)} total")

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
