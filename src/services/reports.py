"""
Daily report generation: text summary and Excel workbook.
"""

from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from core.colors import to_argb
from core.config import EXECUTION_HEADERS, TIMECARD_HEADERS
from core.timeformat import DateGroup
from services.execution_time import StackBarDisplay, calculate_stack_bar_display
from services.list_items import ListItem
from services.projects import ProjectDefinitionRepository
from services.timecard import TimecardData, calculate_working_time_for_date


def format_minutes(minutes: int) -> str:
    """Format minutes as H:MM (e.g. 125 -> '2:05')."""
    hours, rest = divmod(minutes, 60)
    return f"{hours}:{rest:02d}"


def format_seconds_as_hours(seconds: int) -> float:
    """Seconds as decimal hours, 2 places."""
    return round(seconds / 3600, 2)


def format_daily_summary(display: StackBarDisplay, working_minutes: Optional[int], date: str) -> list[str]:
    """Text lines summarizing tracked task time and attendance for one day."""
    lines = [f"Work summary - {date}", ""]

    if display.segments:
        lines.append("Tracked tasks:")
        for segment in display.segments:
            lines.append(f"  {format_minutes(segment.seconds // 60):>6}  {segment.item_text}")
        lines.append(f"  {format_minutes(display.total_seconds // 60):>6}  Total")
    else:
        lines.append("No tracked task time.")

    lines.append("")
    if working_minutes is None:
        lines.append("Timecard: no valid check-in/check-out data (needs correction)")
    else:
        lines.append(f"Timecard: {format_minutes(working_minutes)} worked")

    return lines


def format_history(
    items: list[ListItem],
    timecard: TimecardData,
    project_repo: ProjectDefinitionRepository,
    groups: list[DateGroup],
    clock=None,
) -> list[str]:
    """One line per date group: tracked task time and timecard worked time."""
    lines = []
    for group in groups:
        display = calculate_stack_bar_display(items, group["date"], project_repo, clock)
        working_minutes = calculate_working_time_for_date(timecard, group["date"], clock)
        worked = "-" if working_minutes is None else format_minutes(working_minutes)
        lines.append(
            f"{group['display_date']:<24} tracked {format_minutes(display.total_seconds // 60):>6}"
            f"  worked {worked:>6}"
        )
    return lines


# =============================================================================
# EXCEL REPORT GENERATION
# =============================================================================


def write_excel_execution_sheet(ws, items: list[ListItem], display: StackBarDisplay):
    """
    Write the task execution sheet: one row per item with time on the day,
    the color cell filled with the item's project color.
    """
    for col_idx, header in enumerate(EXECUTION_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    taskcodes = {item.id: item.taskcode for item in items}
    for row_idx, segment in enumerate(display.segments, start=2):
        ws.cell(row=row_idx, column=1, value=taskcodes.get(segment.item_id, ""))
        ws.cell(row=row_idx, column=2, value=segment.item_text)
        ws.cell(row=row_idx, column=3, value=format_seconds_as_hours(segment.seconds))
        color_cell = ws.cell(row=row_idx, column=4, value=segment.color)
        argb = to_argb(segment.color)
        color_cell.fill = PatternFill(start_color=argb, end_color=argb, fill_type="solid")

    # Total row with a formula so hand edits stay consistent
    total_row = len(display.segments) + 2
    ws.cell(row=total_row, column=2, value="Total").font = Font(bold=True)
    hours_col = get_column_letter(3)
    ws.cell(row=total_row, column=3, value=f"=SUM({hours_col}2:{hours_col}{total_row - 1})")


def write_excel_timecard_sheet(ws, timecard: TimecardData, date: str, working_minutes: Optional[int]):
    """Write the day's check-in/check-out entries and the worked time."""
    for col_idx, header in enumerate(TIMECARD_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    entries = timecard.get(date, [])
    for row_idx, entry in enumerate(entries, start=2):
        ws.cell(row=row_idx, column=1, value=entry.type.value)
        ws.cell(row=row_idx, column=2, value=entry.time)

    summary_row = len(entries) + 3
    ws.cell(row=summary_row, column=1, value="Worked").font = Font(bold=True)
    if working_minutes is None:
        ws.cell(row=summary_row, column=2, value="needs correction")
    else:
        ws.cell(row=summary_row, column=2, value=format_minutes(working_minutes))


def create_daily_excel_report(
    items: list[ListItem],
    timecard: TimecardData,
    project_repo: ProjectDefinitionRepository,
    date: str,
    output_path: Path,
    clock=None,
):
    """
    Create the daily Excel report.

    Sheet 1: "Task Execution" - time per item on the date
    Sheet 2: "Timecard" - attendance entries and worked time
    """
    display = calculate_stack_bar_display(items, date, project_repo, clock)
    working_minutes = calculate_working_time_for_date(timecard, date, clock)

    wb = Workbook()

    ws_execution = wb.active
    ws_execution.title = "Task Execution"
    write_excel_execution_sheet(ws_execution, items, display)

    ws_timecard = wb.create_sheet(title="Timecard")
    write_excel_timecard_sheet(ws_timecard, timecard, date, working_minutes)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel report to: {output_path}")
