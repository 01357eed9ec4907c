"""
Collection-level operations over list items (todos and calendar events).

Every function takes a list and returns a new list; inputs are never mutated.
Operations addressed by id leave the list unchanged when the id is absent.
"""

import json
import uuid
from typing import Any, Callable, Iterable, Optional, Union

from core.timeformat import extract_date, now
from core.validation import ItemIdMismatchError, validate_list_item, validate_list_items
from models.calendar_event import CalendarEvent, generate_calendar_event_id
from models.events import GoogleCalendarEvent
from models.list_item import ListItemType
from models.todo import Todo

ListItem = Union[Todo, CalendarEvent]


# =============================================================================
# CREATION
# =============================================================================


def create_todo(taskcode: str, text: str, clock=None) -> Todo:
    """New todo with a random UUID, current timestamps and no time ranges."""
    timestamp = now(clock)
    return Todo(
        id=str(uuid.uuid4()),
        taskcode=taskcode,
        text=text,
        completed_at=None,
        created_at=timestamp,
        updated_at=timestamp,
    )


def add_todo(items: list[ListItem], taskcode: str, text: str, clock=None) -> list[ListItem]:
    return [*items, create_todo(taskcode, text, clock)]


# =============================================================================
# UPDATES BY ID
# =============================================================================


def _update_item(items: list[ListItem], item_id: str, update: Callable[[ListItem], ListItem]) -> list[ListItem]:
    return [update(item) if item.id == item_id else item for item in items]


def toggle_item(items: list[ListItem], item_id: str, clock=None) -> list[ListItem]:
    return _update_item(items, item_id, lambda item: item.toggle_completed(clock))


def delete_item(items: list[ListItem], item_id: str) -> list[ListItem]:
    return [item for item in items if item.id != item_id]


def edit_item_text(items: list[ListItem], item_id: str, text: str, clock=None) -> list[ListItem]:
    return _update_item(items, item_id, lambda item: item.set_text(text, clock))


def edit_item_taskcode(items: list[ListItem], item_id: str, taskcode: str, clock=None) -> list[ListItem]:
    return _update_item(items, item_id, lambda item: item.set_taskcode(taskcode, clock))


def reorder_items(items: list[ListItem], from_index: int, to_index: int) -> list[ListItem]:
    """Move the item at ``from_index`` to ``to_index``."""
    reordered = list(items)
    if from_index == to_index:
        return reordered
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return reordered


# =============================================================================
# TIMERS
# =============================================================================


def start_item_timer(items: list[ListItem], item_id: str, clock=None) -> list[ListItem]:
    return _update_item(items, item_id, lambda item: item.start_timer(clock))


def stop_item_timer(items: list[ListItem], item_id: str, clock=None) -> list[ListItem]:
    return _update_item(items, item_id, lambda item: item.stop_timer(clock))


def find_running_item(items: list[ListItem]) -> Optional[ListItem]:
    """First item whose timer is running, or None."""
    return next((item for item in items if item.is_timer_running()), None)


def stop_all_running_items(items: list[ListItem], clock=None) -> list[ListItem]:
    return [item.stop_timer(clock) if item.is_timer_running() else item for item in items]


def start_item_timer_exclusive(items: list[ListItem], item_id: str, clock=None) -> list[ListItem]:
    """
    Start the timer of ``item_id`` after stopping every other running timer,
    so at most one timer runs at a time.

    Running timers are stopped even when ``item_id`` is not in the list.
    """
    stopped = stop_all_running_items(items, clock)
    return start_item_timer(stopped, item_id, clock)


# =============================================================================
# DATE FILTERING
# =============================================================================


def should_display_on_date(item: ListItem, date: str) -> bool:
    """
    Todos are shown from their creation date until their completion date
    (forever while incomplete). Calendar events are shown on their start date.
    """
    if item.type == ListItemType.CALENDAR_EVENT:
        if item.start_time is None:
            return False
        return extract_date(item.start_time) == date

    if date < extract_date(item.created_at):
        return False
    if item.completed_at is None:
        return True
    return date <= extract_date(item.completed_at)


def filter_items_by_date(items: list[ListItem], date: str) -> list[ListItem]:
    return [item for item in items if should_display_on_date(item, date)]


# =============================================================================
# SERIALIZATION
# =============================================================================


def list_item_from_json(data: dict[str, Any], clock=None) -> ListItem:
    """Build the right variant from an (already validated) JSON object."""
    if data.get("type") == ListItemType.CALENDAR_EVENT.value:
        return CalendarEvent.from_json(data, clock)
    return Todo.from_json(data, clock)


def from_json_array(data: Any, clock=None) -> list[ListItem]:
    """
    Raises:
        ListItemValidationError: if any element lacks id/taskcode/text/completedAt
    """
    validate_list_items(data)
    return [list_item_from_json(item, clock) for item in data]


def to_json_array(items: list[ListItem]) -> list[dict[str, Any]]:
    return [item.to_json() for item in items]


def from_json_text(json_text: str, clock=None) -> list[ListItem]:
    """
    Raises:
        json.JSONDecodeError: if the text is not valid JSON
        ListItemValidationError: if the JSON has the wrong shape
    """
    return from_json_array(json.loads(json_text), clock)


def to_json_text(items: list[ListItem], pretty: bool = True) -> str:
    data = to_json_array(items)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def get_item_as_json_text(items: list[ListItem], item_id: str) -> Optional[str]:
    """Pretty JSON of one item (for hand editing), or None if absent."""
    for item in items:
        if item.id == item_id:
            return json.dumps(item.to_json(), indent=2, ensure_ascii=False)
    return None


def edit_single_item_from_json(
    items: list[ListItem], item_id: str, json_text: str, clock=None
) -> list[ListItem]:
    """
    Replace one item with the item described by ``json_text``.

    Raises:
        json.JSONDecodeError: if the text is not valid JSON
        ListItemValidationError: if the JSON has the wrong shape
        ItemIdMismatchError: if the JSON's id differs from ``item_id``
    """
    data = json.loads(json_text)
    record = validate_list_item(data)
    if record.id != item_id:
        raise ItemIdMismatchError(item_id, record.id)

    replacement = list_item_from_json(data, clock)
    return [replacement if item.id == item_id else item for item in items]


# =============================================================================
# CALENDAR IMPORT
# =============================================================================


def create_todo_from_calendar_event(
    event: GoogleCalendarEvent, taskcode: str = "", clock=None
) -> Todo:
    """Todo carrying the event's title, with the event's deterministic id."""
    source = CalendarEvent.from_google_calendar_event(event, taskcode, clock)
    return Todo(
        id=generate_calendar_event_id(event),
        taskcode=taskcode,
        text=source.text,
        completed_at=None,
        created_at=source.created_at,
        updated_at=source.updated_at,
    )


def create_todos_from_calendar_events(
    events: Iterable[GoogleCalendarEvent], taskcode: str = "", clock=None
) -> list[Todo]:
    return [create_todo_from_calendar_event(event, taskcode, clock) for event in events]


def merge_items(items: list[ListItem], incoming: list[ListItem]) -> list[ListItem]:
    """
    Replace existing items that share an id with an incoming item (keeping
    their position) and append the rest in order.
    """
    incoming_by_id = {item.id: item for item in incoming}
    existing_ids = {item.id for item in items}

    merged = [incoming_by_id.get(item.id, item) for item in items]
    for item_id, item in incoming_by_id.items():
        if item_id not in existing_ids:
            merged.append(item)
    return merged


def add_todos_from_calendar_events(
    items: list[ListItem], events: Iterable[GoogleCalendarEvent], taskcode: str = "", clock=None
) -> list[ListItem]:
    return merge_items(items, create_todos_from_calendar_events(events, taskcode, clock))


def add_calendar_events(
    items: list[ListItem], events: Iterable[GoogleCalendarEvent], taskcode: str = "", clock=None
) -> list[ListItem]:
    """Same merge as add_todos_from_calendar_events, keeping events as CalendarEvent items."""
    incoming = [CalendarEvent.from_google_calendar_event(event, taskcode, clock) for event in events]
    return merge_items(items, incoming)
