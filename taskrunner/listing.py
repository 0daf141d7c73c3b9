"""Options and helpers for listing the tasks of a Taskfile."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TextIO

from taskrunner.errors import TaskError


@dataclass(frozen=True)
class ListOptions:
    """Options that control how tasks are listed."""

    list_only_tasks_with_descriptions: bool = False
    list_all_tasks: bool = False
    format_task_list_as_json: bool = False

    def should_list_tasks(self) -> bool:
        """Tell whether one of the listing options is set."""
        return self.list_only_tasks_with_descriptions or self.list_all_tasks

    def validate(self) -> None:
        """Raise TaskError when the options do not go together."""
        if self.list_only_tasks_with_descriptions and self.list_all_tasks:
            raise TaskError("task: cannot use --list and --list-all at the same time")
        if self.format_task_list_as_json and not self.should_list_tasks():
            raise TaskError("task: --json only applies to --list or --list-all")


def list_task_names(
    tasks: Mapping[str, Any] | Iterable[Any],
    all_tasks: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Print the sorted names and aliases of the tasks, one per line.

    Internal tasks are never printed; tasks without a description only
    when all_tasks is true.
    """
    out = stream if stream is not None else sys.stdout
    items = tasks.values() if isinstance(tasks, Mapping) else tasks
    names: list[str] = []
    for task in items:
        if getattr(task, "internal", False):
            continue
        if not (all_tasks or getattr(task, "desc", "")):
            continue
        names.append(task.task.rstrip(":"))
        names.extend(alias.rstrip(":") for alias in getattr(task, "aliases", None) or [])
    for name in sorted(names):
        out.write(name + "\n")