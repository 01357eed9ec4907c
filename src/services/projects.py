"""
Month-scoped project definitions: resolve task codes to colors and free text
to task codes.
"""

import json
from dataclasses import dataclass, field
from typing import Optional

from core.timeformat import get_month
from core.validation import validate_project_definitions
from models.project_definition import ProjectDefinition


@dataclass(frozen=True)
class ProjectDefinitionRepository:
    """Project definitions keyed by month ("2025-12" -> [ProjectDefinition, ...])."""

    definitions: dict[str, list[ProjectDefinition]] = field(default_factory=dict)

    def for_date(self, date: str) -> list[ProjectDefinition]:
        """Definitions of the month containing ``date``."""
        return self.definitions.get(get_month(date), [])


def create_empty() -> ProjectDefinitionRepository:
    return ProjectDefinitionRepository({})


def from_json_text(json_text: str) -> ProjectDefinitionRepository:
    """
    Raises:
        json.JSONDecodeError: if the text is not valid JSON
        ProjectDefinitionValidationError: if the JSON has the wrong shape
    """
    records = validate_project_definitions(json.loads(json_text))
    return ProjectDefinitionRepository(
        {
            month: [ProjectDefinition.from_record(record) for record in month_records]
            for month, month_records in records.items()
        }
    )


def to_json_text(repo: ProjectDefinitionRepository) -> str:
    if not repo.definitions:
        return "{}"
    data = {
        month: [definition.to_json() for definition in definitions]
        for month, definitions in repo.definitions.items()
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def get_color_for_taskcode(
    repo: ProjectDefinitionRepository, date: str, taskcode: str
) -> Optional[str]:
    """Color of the first project in ``date``'s month listing ``taskcode``."""
    for definition in repo.for_date(date):
        if taskcode in definition.taskcodes:
            return definition.color
    return None


def find_taskcode_by_keyword(
    repo: ProjectDefinitionRepository, date: str, free_text: str
) -> Optional[str]:
    """
    First task code (project order, then task code order) with a keyword
    contained in ``free_text``. Matching is case-sensitive.
    """
    for definition in repo.for_date(date):
        for taskcode in definition.taskcodes:
            if any(keyword and keyword in free_text for keyword in definition.keywords_for(taskcode)):
                return taskcode
    return None
