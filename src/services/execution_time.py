"""
Per-day execution time aggregation and the stacked bar display model.
"""

import math
from dataclasses import dataclass, field

from core.config import DEFAULT_ITEM_COLOR, STACK_BAR_BASE_HOURS
from services.list_items import ListItem
from services.projects import ProjectDefinitionRepository, get_color_for_taskcode

SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class TaskExecutionSegment:
    """One item's slice of the stacked bar."""

    item_id: str
    item_text: str
    seconds: int
    color: str

    def to_json(self) -> dict:
        return {
            "itemId": self.item_id,
            "itemText": self.item_text,
            "seconds": self.seconds,
            "color": self.color,
        }


@dataclass(frozen=True)
class StackBarDisplay:
    segments: list[TaskExecutionSegment] = field(default_factory=list)
    total_seconds: int = 0
    display_max_seconds: int = STACK_BAR_BASE_HOURS * SECONDS_PER_HOUR
    hour_markers: list[int] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "segments": [segment.to_json() for segment in self.segments],
            "totalSeconds": self.total_seconds,
            "displayMaxSeconds": self.display_max_seconds,
            "hourMarkers": self.hour_markers,
        }


def calculate_execution_time_for_date(item: ListItem, date: str, clock=None) -> int:
    """Seconds tracked against ``item`` on ``date``."""
    return item.get_execution_time_for_date(date, clock)


def calculate_execution_times_for_date(items: list[ListItem], date: str, clock=None) -> dict[str, int]:
    """Item id -> seconds on ``date``; items without time are left out."""
    times = {}
    for item in items:
        seconds = calculate_execution_time_for_date(item, date, clock)
        if seconds != 0:
            times[item.id] = seconds
    return times


def assign_color_to_item(item: ListItem, date: str, project_repo: ProjectDefinitionRepository) -> str:
    """Project color for the item's task code, or neutral gray."""
    return get_color_for_taskcode(project_repo, date, item.taskcode) or DEFAULT_ITEM_COLOR


def calculate_stack_bar_display(
    items: list[ListItem], date: str, project_repo: ProjectDefinitionRepository, clock=None
) -> StackBarDisplay:
    """
    Build the stacked bar for ``date``.

    The scale is at least STACK_BAR_BASE_HOURS so short days keep their
    proportions; longer days scale to their total.
    """
    segments = []
    for item in items:
        seconds = calculate_execution_time_for_date(item, date, clock)
        if seconds != 0:
            segments.append(
                TaskExecutionSegment(
                    item_id=item.id,
                    item_text=item.text,
                    seconds=seconds,
                    color=assign_color_to_item(item, date, project_repo),
                )
            )

    total_seconds = sum(segment.seconds for segment in segments)
    display_max_seconds = max(total_seconds, STACK_BAR_BASE_HOURS * SECONDS_PER_HOUR)
    total_hours = math.ceil(display_max_seconds / SECONDS_PER_HOUR)

    return StackBarDisplay(
        segments=segments,
        total_seconds=total_seconds,
        display_max_seconds=display_max_seconds,
        hour_markers=list(range(total_hours + 1)),
    )
