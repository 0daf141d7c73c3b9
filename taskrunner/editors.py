"""Task list output for editor integrations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class EditorLocation:
    """Where a task is defined in a Taskfile."""

    line: int
    column: int
    taskfile: str

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "column": self.column, "taskfile": self.taskfile}


@dataclass
class EditorTask:
    """A single task as seen by an editor."""

    name: str
    desc: str = ""
    summary: str = ""
    up_to_date: bool = False
    location: EditorLocation | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "desc": self.desc,
            "summary": self.summary,
            "up_to_date": self.up_to_date,
            "location": self.location.to_dict() if self.location else None,
        }


@dataclass
class EditorTaskfile:
    """The list of tasks of a Taskfile, as given to editors."""

    tasks: list[EditorTask] = field(default_factory=list)
    location: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the task list."""
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "location": self.location,
        }