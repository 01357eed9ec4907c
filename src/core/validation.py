"""
Wire-format validation for JSON payloads and the validation error types.

The pydantic records below describe the shape of persisted JSON. They only
check structure; entities are built from the validated dicts afterwards.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, StrictStr
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

LIST_ITEM_REQUIREMENT = (
    "Invalid list item JSON: every item requires id, taskcode, text and completedAt "
    "(completedAt must be a string or null)"
)
TIMECARD_REQUIREMENT = (
    "Invalid timecard JSON: expected an object mapping YYYY-MM-DD dates to entry arrays"
)
PROJECT_DEFINITION_REQUIREMENT = (
    "Invalid project definition JSON: expected an object mapping YYYY-MM months to arrays "
    "of {projectcode, color, taskcodes}"
)


# =============================================================================
# ERRORS
# =============================================================================


class ValidationError(ValueError):
    """Input did not match the required shape."""

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message)
        self.details = details or []


class ListItemValidationError(ValidationError):
    pass


class TimecardValidationError(ValidationError):
    pass


class ProjectDefinitionValidationError(ValidationError):
    pass


class ItemIdMismatchError(ValueError):
    """Edited JSON carries a different id than the item being edited."""

    def __init__(self, expected_id: str, actual_id: Any):
        super().__init__(f"Item id mismatch: expected '{expected_id}', got '{actual_id}'")
        self.expected_id = expected_id
        self.actual_id = actual_id


def format_validation_errors(exc: PydanticValidationError, prefix: str = "") -> list[str]:
    """Flatten pydantic errors into "location: message" strings."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        if prefix:
            location = f"{prefix}.{location}" if location else prefix
        details.append(f"{location}: {error['msg']}")
    return details


# =============================================================================
# WIRE RECORDS
# =============================================================================


class WireRecord(BaseModel):
    """Base for camelCase JSON records (wire names only); unknown fields are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class TimeRangeRecord(WireRecord):
    start: StrictStr
    end: Optional[StrictStr]


class ListItemRecord(WireRecord):
    id: StrictStr
    taskcode: StrictStr
    text: StrictStr
    completed_at: Optional[StrictStr]
    type: Literal["todo", "calendar_event"] = "todo"
    created_at: Optional[StrictStr] = None
    updated_at: Optional[StrictStr] = None
    time_ranges: Optional[list[TimeRangeRecord]] = None
    start_time: Optional[StrictStr] = None
    end_time: Optional[StrictStr] = None
    location: Optional[StrictStr] = None
    description: Optional[StrictStr] = None


class TaskcodeRecord(WireRecord):
    taskcode: StrictStr
    keywords: list[StrictStr] = []


class ProjectDefinitionRecord(WireRecord):
    projectcode: StrictStr
    color: StrictStr
    taskcodes: list[TaskcodeRecord] = []


# =============================================================================
# VALIDATORS
# =============================================================================


def validate_list_item(data: Any, prefix: str = "") -> ListItemRecord:
    """
    Validate one list item payload.

    Raises:
        ListItemValidationError: if the payload does not conform
    """
    try:
        return ListItemRecord.model_validate(data)
    except PydanticValidationError as e:
        raise ListItemValidationError(
            LIST_ITEM_REQUIREMENT, format_validation_errors(e, prefix)
        ) from e


def validate_list_items(data: Any) -> list[ListItemRecord]:
    """
    Validate a list item array payload; reports every bad element.

    Raises:
        ListItemValidationError: if data is not an array or any element is invalid
    """
    if not isinstance(data, list):
        raise ListItemValidationError(
            LIST_ITEM_REQUIREMENT, [f"expected an array, got {type(data).__name__}"]
        )

    records = []
    details = []
    for index, item in enumerate(data):
        try:
            records.append(validate_list_item(item, prefix=str(index)))
        except ListItemValidationError as e:
            details.extend(e.details)

    if details:
        raise ListItemValidationError(LIST_ITEM_REQUIREMENT, details)
    return records


def validate_timecard_shape(data: Any) -> dict[str, list]:
    """
    Check the outer timecard structure (entries are validated by TimecardEntry).

    Raises:
        TimecardValidationError: if data is not a mapping of date -> list
    """
    if not isinstance(data, dict):
        raise TimecardValidationError(
            TIMECARD_REQUIREMENT, [f"expected an object, got {type(data).__name__}"]
        )
    details = [
        f"{date}: expected an array, got {type(entries).__name__}"
        for date, entries in data.items()
        if not isinstance(entries, list)
    ]
    if details:
        raise TimecardValidationError(TIMECARD_REQUIREMENT, details)
    return data


def validate_project_definitions(data: Any) -> dict[str, list[ProjectDefinitionRecord]]:
    """
    Validate the month-keyed project definition payload.

    Raises:
        ProjectDefinitionValidationError: if any month or definition is malformed
    """
    if not isinstance(data, dict):
        raise ProjectDefinitionValidationError(
            PROJECT_DEFINITION_REQUIREMENT, [f"expected an object, got {type(data).__name__}"]
        )

    result = {}
    details = []
    for month, definitions in data.items():
        if not isinstance(definitions, list):
            details.append(f"{month}: expected an array, got {type(definitions).__name__}")
            continue
        records = []
        for index, definition in enumerate(definitions):
            try:
                records.append(ProjectDefinitionRecord.model_validate(definition))
            except PydanticValidationError as e:
                details.extend(format_validation_errors(e, f"{month}.{index}"))
        result[month] = records

    if details:
        raise ProjectDefinitionValidationError(PROJECT_DEFINITION_REQUIREMENT, details)
    return result
