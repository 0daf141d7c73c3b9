"""Hashes that decide whether a task run counts as already done."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from collections.abc import Callable
from typing import Any

from taskrunner.errors import TaskError


def empty(task: Any) -> str:
    """Return an empty hash: the task always runs."""
    return ""


def name(task: Any) -> str:
    """Return the task's name: the task runs once."""
    return task.task


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if hasattr(value, "__dict__"):
        return {k: _plain(v) for k, v in vars(value).items()}
    return repr(value)


def structural_hash(task: Any) -> str:
    """Return the task's name and a hash of its whole structure."""
    encoded = json.dumps(_plain(task), sort_keys=True, default=repr).encode()
    digest = int.from_bytes(hashlib.sha256(encoded).digest()[:8], "big")
    return f"{task.task}:{digest}"


_RUN_HASHES: dict[str, Callable[[Any], str]] = {
    "always": empty,
    "once": name,
    "when_changed": structural_hash,
}


def get_hash(task: Any, default_run: str) -> str:
    """Return the execution hash for the task's run mode."""
    run = getattr(task, "run", "") or default_run
    func = _RUN_HASHES.get(run)
    if func is None:
        raise TaskError(f'task: invalid run "{run}"')
    return func(task)