#!/usr/bin/env python3
"""
Create the daily work report from the todo, timecard and project files.

Prints tracked time per task and worked time from the timecard, and can
write an Excel workbook.

Usage:
    uv run python src/scripts/create_daily_report.py --date 2025-11-07
    uv run python src/scripts/create_daily_report.py --excel
    uv run python src/scripts/create_daily_report.py --days 7
"""

import argparse
import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR, PROJECT_DEFINITIONS_PATH, TIMECARD_PATH, TODOS_PATH
from core.storage import load_text
from core.timeformat import extract_date, generate_date_groups, now
from services import list_items, projects, timecard
from services.execution_time import calculate_stack_bar_display
from services.reports import create_daily_excel_report, format_daily_summary, format_history


def main(date: str | None = None, excel: bool = False, days: int | None = None):
    """Main entry point."""
    try:
        date = date or extract_date(now())

        items = list_items.from_json_text(load_text(TODOS_PATH, "[]"))
        timecard_data = timecard.from_json_text(load_text(TIMECARD_PATH, "{}"))
        project_repo = projects.from_json_text(load_text(PROJECT_DEFINITIONS_PATH, "{}"))

        visible = list_items.filter_items_by_date(items, date)
        running = list_items.find_running_item(items)
        print(f"{len(visible)} item(s) listed on {date}")
        if running is not None:
            print(f"Timer running: {running.text}")
        print()

        display = calculate_stack_bar_display(items, date, project_repo)
        working_minutes = timecard.calculate_working_time_for_date(timecard_data, date)
        print("\n".join(format_daily_summary(display, working_minutes, date)))

        if excel:
            output_path = OUTPUT_DIR / "reports" / "daily" / f"work_report_{date.replace('-', '_')}.xlsx"
            create_daily_excel_report(items, timecard_data, project_repo, date, output_path)

        if days is not None:
            print(f"\nLast {days} day(s):")
            groups = generate_date_groups(days)
            print("\n".join(format_history(items, timecard_data, project_repo, groups)))

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate daily work report")
    parser.add_argument("--date", help="Report date (YYYY-MM-DD). Defaults to today.")
    parser.add_argument("--excel", action="store_true", help="Also write an Excel workbook")
    parser.add_argument("--days", type=int, help="Also list tracked and worked time for the last N days")
    args = parser.parse_args()

    main(args.date, args.excel, args.days)
