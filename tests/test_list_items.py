"""Tests for collection-level list item operations."""

import json
import re

import pytest

from core.validation import ItemIdMismatchError, ListItemValidationError
from models.calendar_event import CalendarEvent
from models.list_item import TimeRange
from models.todo import Todo
from services import list_items

UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


@pytest.fixture
def items(clock):
    result = []
    for taskcode, text in [("A", "first"), ("B", "second"), ("C", "third")]:
        result = list_items.add_todo(result, taskcode, text, clock)
    return result


# =============================================================================
# CREATION
# =============================================================================


def test_create_todo(clock):
    todo = list_items.create_todo("DEV-1", "Write tests", clock)

    assert re.fullmatch(UUID_PATTERN, todo.id)
    assert todo.taskcode == "DEV-1"
    assert todo.text == "Write tests"
    assert todo.completed_at is None
    assert todo.created_at == todo.updated_at == "2025-01-15 12:34:56"
    assert todo.time_ranges == ()


def test_create_todo_generates_unique_ids(clock):
    assert list_items.create_todo("", "", clock).id != list_items.create_todo("", "", clock).id


def test_add_todo_appends_without_mutating(items, clock):
    updated = list_items.add_todo(items, "D", "fourth", clock)

    assert len(items) == 3
    assert [i.text for i in updated] == ["first", "second", "third", "fourth"]


# =============================================================================
# UPDATES BY ID
# =============================================================================


def test_toggle_item_only_touches_target(items, clock):
    updated = list_items.toggle_item(items, items[1].id, clock)

    assert updated[1].is_completed()
    assert not updated[0].is_completed()
    assert not items[1].is_completed()


def test_delete_item(items):
    updated = list_items.delete_item(items, items[0].id)
    assert [i.text for i in updated] == ["second", "third"]


def test_edit_item_text_and_taskcode(items, clock):
    updated = list_items.edit_item_text(items, items[2].id, "", clock)
    updated = list_items.edit_item_taskcode(updated, items[2].id, "Z", clock)

    assert updated[2].text == ""
    assert updated[2].taskcode == "Z"
    assert updated[:2] == items[:2]


@pytest.mark.parametrize(
    "operation",
    [
        lambda items, clock: list_items.toggle_item(items, "missing", clock),
        lambda items, clock: list_items.delete_item(items, "missing"),
        lambda items, clock: list_items.edit_item_text(items, "missing", "x", clock),
        lambda items, clock: list_items.edit_item_taskcode(items, "missing", "x", clock),
        lambda items, clock: list_items.start_item_timer(items, "missing", clock),
        lambda items, clock: list_items.stop_item_timer(items, "missing", clock),
    ],
)
def test_unknown_id_leaves_list_unchanged(items, clock, operation):
    assert operation(items, clock) == items


def test_operations_on_empty_list(clock):
    assert list_items.toggle_item([], "x", clock) == []
    assert list_items.stop_all_running_items([], clock) == []
    assert list_items.find_running_item([]) is None


@pytest.mark.parametrize(
    "from_index, to_index, expected",
    [
        (0, 2, ["second", "third", "first"]),
        (2, 0, ["third", "first", "second"]),
        (0, 1, ["second", "first", "third"]),
        (1, 1, ["first", "second", "third"]),
    ],
)
def test_reorder_items(items, from_index, to_index, expected):
    reordered = list_items.reorder_items(items, from_index, to_index)

    assert [i.text for i in reordered] == expected
    assert [i.text for i in items] == ["first", "second", "third"]


# =============================================================================
# TIMERS
# =============================================================================


def test_start_and_stop_item_timer(items, clock):
    started = list_items.start_item_timer(items, items[0].id, clock)
    assert list_items.find_running_item(started) == started[0]

    clock.advance(60)
    stopped = list_items.stop_item_timer(started, items[0].id, clock)
    assert list_items.find_running_item(stopped) is None
    assert stopped[0].time_ranges == (TimeRange("2025-01-15 12:34:56", "2025-01-15 12:35:56"),)


def test_start_item_timer_exclusive_stops_others(items, clock):
    running = list_items.start_item_timer(items, items[0].id, clock)
    running = list_items.start_item_timer(running, items[1].id, clock)

    clock.advance(120)
    result = list_items.start_item_timer_exclusive(running, items[2].id, clock)

    assert [i.is_timer_running() for i in result] == [False, False, True]
    assert result[0].time_ranges[-1].end == "2025-01-15 12:36:56"
    assert list_items.find_running_item(result).id == items[2].id


def test_start_item_timer_exclusive_unknown_id_still_stops_timers(items, clock):
    running = list_items.start_item_timer(items, items[0].id, clock)
    result = list_items.start_item_timer_exclusive(running, "missing", clock)

    assert list_items.find_running_item(result) is None


def test_start_item_timer_exclusive_on_running_item_restarts_it(items, clock):
    running = list_items.start_item_timer(items, items[0].id, clock)
    result = list_items.start_item_timer_exclusive(running, items[0].id, clock)

    assert len(result[0].time_ranges) == 2
    assert sum(i.is_timer_running() for i in result) == 1


def test_stop_all_running_items(items, clock):
    running = list_items.start_item_timer(items, items[0].id, clock)
    running = list_items.start_item_timer(running, items[2].id, clock)

    stopped = list_items.stop_all_running_items(running, clock)

    assert not any(i.is_timer_running() for i in stopped)
    assert stopped[1] is running[1]


# =============================================================================
# DATE FILTERING
# =============================================================================


@pytest.mark.parametrize(
    "date, visible",
    [
        ("2025-01-14", False),
        ("2025-01-15", True),
        ("2025-01-17", True),
        ("2025-01-20", True),
        ("2025-01-21", False),
    ],
)
def test_completed_todo_display_window(date, visible):
    todo = Todo("t", "", "done", "2025-01-20 18:00:00", "2025-01-15 09:00:00", "2025-01-20 18:00:00")
    assert list_items.should_display_on_date(todo, date) is visible


def test_incomplete_todo_is_visible_forever(sample_todo):
    assert not list_items.should_display_on_date(sample_todo, "2025-01-14")
    assert list_items.should_display_on_date(sample_todo, "2025-01-15")
    assert list_items.should_display_on_date(sample_todo, "2030-12-31")


def test_calendar_event_is_visible_on_start_date(google_event):
    event = CalendarEvent.from_google_calendar_event(google_event)

    assert list_items.should_display_on_date(event, "2023-11-01")
    assert not list_items.should_display_on_date(event, "2023-10-20")
    assert not list_items.should_display_on_date(event, "2023-11-02")


def test_calendar_event_without_start_is_never_visible():
    event = CalendarEvent("cal-x", "", "floating", None, "2023-11-01 09:00:00", "2023-11-01 09:00:00")
    assert not list_items.should_display_on_date(event, "2023-11-01")


def test_filter_items_by_date_keeps_order(sample_todo, google_event):
    event = CalendarEvent.from_google_calendar_event(google_event)
    old = Todo("old", "", "old", "2025-01-10 10:00:00", "2025-01-01 09:00:00", "2025-01-10 10:00:00")
    items = [sample_todo, event, old]

    assert list_items.filter_items_by_date(items, "2025-01-16") == [sample_todo]
    assert list_items.filter_items_by_date(items, "2025-01-05") == [old]
    assert list_items.filter_items_by_date(items, "2023-11-01") == [event]


# =============================================================================
# SERIALIZATION
# =============================================================================


def test_json_text_round_trip(tracked_todo, google_event, clock):
    event = CalendarEvent.from_google_calendar_event(google_event).toggle_completed(clock)
    items = [tracked_todo, event]

    restored = list_items.from_json_text(list_items.to_json_text(items))

    assert restored == items
    assert isinstance(restored[1], CalendarEvent)


def test_to_json_text_pretty_and_compact(sample_todo):
    pretty = list_items.to_json_text([sample_todo])
    compact = list_items.to_json_text([sample_todo], pretty=False)

    assert "\n  " in pretty
    assert "\n" not in compact
    assert json.loads(pretty) == json.loads(compact)


def test_from_json_array_accepts_legacy_items(clock):
    items = list_items.from_json_array(
        [{"id": "1", "taskcode": "", "text": "legacy", "completedAt": None}], clock
    )

    assert items[0].created_at == "2025-01-15 12:34:56"
    assert items[0].time_ranges == ()


@pytest.mark.parametrize(
    "data",
    [
        [{"taskcode": "", "text": "no id", "completedAt": None}],
        [{"id": "1", "text": "no taskcode", "completedAt": None}],
        [{"id": "1", "taskcode": "", "completedAt": None}],
        [{"id": "1", "taskcode": "", "text": "no completedAt"}],
        [{"id": "1", "taskcode": "", "text": "bad completedAt", "completedAt": 5}],
        [{"id": 1, "taskcode": "", "text": "numeric id", "completedAt": None}],
        [{"id": "1", "taskcode": "", "text": "", "completedAt": None, "timeRanges": [{"start": 1, "end": None}]}],
        {"id": "1"},
        None,
    ],
)
def test_from_json_array_rejects_bad_shapes(data):
    with pytest.raises(ListItemValidationError) as exc_info:
        list_items.from_json_array(data)

    assert "completedAt" in str(exc_info.value)
    assert exc_info.value.details


def test_from_json_array_rejects_snake_case_keys():
    data = [{"id": "a", "taskcode": "", "text": "x", "completed_at": "2025-01-20 10:00:00"}]

    with pytest.raises(ListItemValidationError) as exc_info:
        list_items.from_json_array(data)

    assert any(detail.startswith("0.completedAt") for detail in exc_info.value.details)


def test_validation_error_names_the_bad_element():
    data = [
        {"id": "1", "taskcode": "", "text": "ok", "completedAt": None},
        {"id": "2", "taskcode": "", "completedAt": None},
    ]
    with pytest.raises(ListItemValidationError) as exc_info:
        list_items.from_json_array(data)

    assert any(detail.startswith("1.text") for detail in exc_info.value.details)


def test_from_json_text_raises_parse_error():
    with pytest.raises(json.JSONDecodeError):
        list_items.from_json_text("{not json")


def test_get_item_as_json_text(tracked_todo):
    text = list_items.get_item_as_json_text([tracked_todo], tracked_todo.id)

    assert json.loads(text) == tracked_todo.to_json()
    assert list_items.get_item_as_json_text([tracked_todo], "missing") is None


def test_edit_single_item_from_json(items, clock):
    data = items[1].to_json()
    data["text"] = "edited"
    data["timeRanges"] = [{"start": "2025-01-15 10:00:00", "end": "2025-01-15 11:00:00"}]

    updated = list_items.edit_single_item_from_json(items, items[1].id, json.dumps(data), clock)

    assert updated[1].text == "edited"
    assert updated[1].get_execution_time_for_date("2025-01-15", clock) == 3600
    assert updated[0] == items[0]


def test_edit_single_item_from_json_id_mismatch(items):
    data = dict(items[1].to_json(), id="other")

    with pytest.raises(ItemIdMismatchError):
        list_items.edit_single_item_from_json(items, items[1].id, json.dumps(data))


def test_edit_single_item_from_json_unknown_id(items):
    data = dict(items[0].to_json(), id="missing")
    assert list_items.edit_single_item_from_json(items, "missing", json.dumps(data)) == items


def test_edit_single_item_from_json_invalid(items):
    with pytest.raises(json.JSONDecodeError):
        list_items.edit_single_item_from_json(items, items[0].id, "{")
    with pytest.raises(ListItemValidationError):
        list_items.edit_single_item_from_json(items, items[0].id, json.dumps({"id": items[0].id}))


# =============================================================================
# CALENDAR IMPORT
# =============================================================================


def test_create_todo_from_calendar_event(google_event):
    todo = list_items.create_todo_from_calendar_event(google_event)

    assert isinstance(todo, Todo)
    assert todo.id == CalendarEvent.from_google_calendar_event(google_event).id
    assert todo.text == "Weekly status meeting"
    assert todo.taskcode == ""
    assert todo.completed_at is None
    assert todo.created_at == "2023-10-20 18:00:00"
    assert todo.updated_at == "2023-10-20 18:30:00"
    assert todo.time_ranges == ()


def test_create_todos_from_calendar_events(google_event, all_day_event):
    todos = list_items.create_todos_from_calendar_events([google_event, all_day_event], "MTG")

    assert [t.text for t in todos] == ["Weekly status meeting", "Birthday"]
    assert all(t.taskcode == "MTG" for t in todos)
    assert list_items.create_todos_from_calendar_events([]) == []


def test_add_todos_from_calendar_events_appends(items, google_event):
    updated = list_items.add_todos_from_calendar_events(items, [google_event])

    assert len(updated) == 4
    assert updated[:3] == items
    assert updated[3].text == "Weekly status meeting"


def test_reimport_replaces_instead_of_duplicating(items, google_event):
    first = list_items.add_todos_from_calendar_events(items, [google_event])
    renamed = dict(google_event, summary="Weekly status meeting (moved room)")
    second = list_items.add_todos_from_calendar_events(first, [renamed])

    event_id = first[3].id
    matching = [i for i in second if i.id == event_id]
    assert len(second) == 4
    assert len(matching) == 1
    assert matching[0].text == "Weekly status meeting (moved room)"


def test_reimport_keeps_position(google_event, sample_todo):
    first = list_items.add_todos_from_calendar_events([], [google_event])
    with_more = [*first, sample_todo]

    second = list_items.add_todos_from_calendar_events(with_more, [google_event])

    assert [i.id for i in second] == [i.id for i in with_more]


def test_add_calendar_events(items, google_event, all_day_event):
    updated = list_items.add_calendar_events(items, [google_event, all_day_event])
    again = list_items.add_calendar_events(updated, [google_event])

    assert len(updated) == 5
    assert isinstance(updated[3], CalendarEvent)
    assert len(again) == 5
