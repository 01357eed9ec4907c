"""
Project definition: a project code, its display color and the task codes
that belong to it.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from core.validation import (
    ProjectDefinitionRecord,
    ProjectDefinitionValidationError,
    format_validation_errors,
)


@dataclass(frozen=True)
class ProjectDefinition:
    projectcode: str
    color: str
    taskcodes: tuple[str, ...] = ()
    # (taskcode, keywords) pairs for free-text lookup; taskcodes without keywords are absent
    keywords: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def keywords_for(self, taskcode: str) -> tuple[str, ...]:
        for code, words in self.keywords:
            if code == taskcode:
                return words
        return ()

    @classmethod
    def from_record(cls, record: ProjectDefinitionRecord) -> "ProjectDefinition":
        return cls(
            projectcode=record.projectcode,
            color=record.color,
            taskcodes=tuple(t.taskcode for t in record.taskcodes),
            keywords=tuple((t.taskcode, tuple(t.keywords)) for t in record.taskcodes if t.keywords),
        )

    @classmethod
    def from_json(cls, json: Any) -> "ProjectDefinition":
        """
        Build from the wire format. Fields other than projectcode, color and
        taskcodes[].taskcode/keywords (assign, projectname, quickTasks, ...)
        are ignored.
        """
        try:
            record = ProjectDefinitionRecord.model_validate(json)
        except PydanticValidationError as e:
            raise ProjectDefinitionValidationError(
                "project definition requires projectcode, color and taskcodes",
                format_validation_errors(e),
            ) from e
        return cls.from_record(record)

    def to_json(self) -> dict[str, Any]:
        taskcodes = []
        for taskcode in self.taskcodes:
            entry: dict[str, Any] = {"taskcode": taskcode}
            if self.keywords_for(taskcode):
                entry["keywords"] = list(self.keywords_for(taskcode))
            taskcodes.append(entry)
        return {"projectcode": self.projectcode, "color": self.color, "taskcodes": taskcodes}
