"""Errors raised by the task runner."""

from __future__ import annotations

import json
from collections.abc import Sequence

from taskrunner.execext import ExitStatusError


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class TaskError(Exception):
    """Base class of task runner errors."""


class TaskfileAlreadyExistsError(TaskError):
    """A Taskfile already exists where a new one was to be created."""

    def __init__(self) -> None:
        super().__init__("task: A Taskfile already exists")


class TaskNotFoundError(TaskError):
    """No task with the requested name exists."""

    def __init__(self, task_name: str, did_you_mean: str = "") -> None:
        self.task_name = task_name
        self.did_you_mean = did_you_mean
        if did_you_mean:
            message = (
                f"task: Task {_quote(task_name)} does not exist. "
                f"Did you mean {_quote(did_you_mean)}?"
            )
        else:
            message = f"task: Task {_quote(task_name)} does not exist"
        super().__init__(message)


class MultipleTasksWithAliasError(TaskError):
    """Several tasks share the requested alias."""

    def __init__(self, alias_name: str, task_names: Sequence[str]) -> None:
        self.alias_name = alias_name
        self.task_names = list(task_names)
        super().__init__(
            f"task: Multiple tasks ({', '.join(self.task_names)}) "
            f"with alias {_quote(alias_name)} found"
        )


class TaskInternalError(TaskError):
    """The requested task is internal and cannot be called directly."""

    def __init__(self, task_name: str) -> None:
        self.task_name = task_name
        super().__init__(f'task: Task "{task_name}" is internal')


class TaskRunError(TaskError):
    """Running a task failed."""

    def __init__(self, task_name: str, err: BaseException) -> None:
        self.task_name = task_name
        self.err = err
        super().__init__(f"task: Failed to run task {_quote(task_name)}: {err}")

    def exit_code(self) -> int:
        """Return the failed command's exit status, or 1."""
        if isinstance(self.err, ExitStatusError):
            return self.err.status
        return 1


class MaximumTaskCallExceededError(TaskError):
    """A task was called too many times, probably through a cycle."""

    def __init__(self, task: str, limit: int) -> None:
        self.task = task
        self.limit = limit
        super().__init__(
            f"task: maximum task call exceeded ({limit}) for task {_quote(task)}: "
            "probably an cyclic dep or infinite loop"
        )