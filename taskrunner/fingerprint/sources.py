"""Checking whether a task's source files changed since its last run."""

from __future__ import annotations

import glob as _glob
import hashlib
import os
import re
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from taskrunner.errors import TaskError
from taskrunner.execext import expand
from taskrunner.filepathext import smart_join

_FILENAME_INVALID = re.compile(r"[^A-z0-9]")


def normalize_filename(name: str) -> str:
    """Replace characters that are unsafe in file names with "-"."""
    return _FILENAME_INVALID.sub("-", name)


def _task_name(task: Any) -> str:
    return getattr(task, "label", "") or getattr(task, "task", "")


def _list(task: Any, attr: str) -> list[str]:
    return list(getattr(task, attr, None) or [])


def glob_files(directory: str, pattern: str) -> list[str]:
    """Return the files (not directories) matching the pattern under the directory."""
    full = expand(smart_join(directory, pattern))
    files = []
    for path in _glob.glob(full, recursive=True):
        if os.path.isdir(path):
            continue
        os.stat(path)
        files.append(path)
    return files


def _globs(directory: str, patterns: Iterable[str]) -> list[str]:
    files: list[str] = []
    for pattern in patterns:
        try:
            files.extend(glob_files(directory, pattern))
        except (OSError, ValueError):
            continue
    return sorted(files)


class SourcesChecker(ABC):
    """Decides from a task's sources whether it is up to date."""

    kind: str = ""

    @abstractmethod
    def is_up_to_date(self, task: Any) -> bool:
        """Tell whether the task's sources are unchanged."""

    @abstractmethod
    def value(self, task: Any) -> Any:
        """Return the fingerprint of the task's sources."""

    @abstractmethod
    def on_error(self, task: Any) -> None:
        """Forget the stored fingerprint after the task failed."""


class ChecksumChecker(SourcesChecker):
    """Compares an MD5 checksum of the source files with the stored one."""

    kind = "checksum"

    def __init__(self, temp_dir: str, dry: bool = False) -> None:
        self.temp_dir = temp_dir
        self.dry = dry

    def is_up_to_date(self, task: Any) -> bool:
        if not _list(task, "sources"):
            return False

        checksum_file = self._checksum_path(task)
        try:
            with open(checksum_file, encoding="utf-8") as handle:
                old = handle.read().strip()
        except OSError:
            old = ""

        try:
            new = self._checksum(task)
        except OSError:
            return False

        if not self.dry:
            try:
                os.makedirs(smart_join(self.temp_dir, "checksum"), exist_ok=True)
            except OSError:
                pass
            with open(checksum_file, "w", encoding="utf-8") as handle:
                handle.write(new + "\n")

        for pattern in _list(task, "generates"):
            try:
                generated = glob_files(getattr(task, "dir", ""), pattern)
            except FileNotFoundError:
                return False
            if not generated:
                return False

        return old == new

    def value(self, task: Any) -> str:
        return self._checksum(task)

    def on_error(self, task: Any) -> None:
        if not _list(task, "sources"):
            return
        os.remove(self._checksum_path(task))

    def _checksum(self, task: Any) -> str:
        digest = hashlib.md5(usedforsecurity=False)
        for path in _globs(getattr(task, "dir", ""), _list(task, "sources")):
            # The file name is summed too, so renaming a file changes the checksum.
            digest.update(os.path.basename(path).encode())
            with open(path, "rb") as handle:
                for chunk in iter(lambda: handle.read(65536), b""):
                    digest.update(chunk)
        return digest.hexdigest()

    def _checksum_path(self, task: Any) -> str:
        return os.path.join(self.temp_dir, "checksum", normalize_filename(_task_name(task)))


def _max_mtime(files: Iterable[str]) -> int | None:
    latest: int | None = None
    for path in files:
        mtime = os.stat(path).st_mtime_ns
        if latest is None or mtime > latest:
            latest = mtime
    return latest


def _any_newer(files: Iterable[str], reference: int) -> bool:
    return any(os.stat(path).st_mtime_ns > reference for path in files)


class TimestampChecker(SourcesChecker):
    """Compares modification times of sources with those of generated files."""

    kind = "timestamp"

    def __init__(self, temp_dir: str, dry: bool = False) -> None:
        self.temp_dir = temp_dir
        self.dry = dry

    def is_up_to_date(self, task: Any) -> bool:
        if not _list(task, "sources"):
            return False

        directory = getattr(task, "dir", "")
        sources = _globs(directory, _list(task, "sources"))
        generates = _globs(directory, _list(task, "generates"))

        stamp = self._timestamp_path(task)
        if os.path.exists(stamp):
            generates.append(stamp)
        elif not self.dry:
            os.makedirs(os.path.dirname(stamp), exist_ok=True)
            with open(stamp, "w", encoding="utf-8"):
                pass

        task_time = time.time()

        try:
            generated_max = _max_mtime(generates)
        except OSError:
            return False
        if generated_max is None:
            return False

        try:
            should_update = _any_newer(sources, generated_max)
        except OSError:
            return False

        if not self.dry:
            os.utime(stamp, (task_time, task_time))

        return not should_update

    def value(self, task: Any) -> datetime:
        sources = _globs(getattr(task, "dir", ""), _list(task, "sources"))
        latest = _max_mtime(sources)
        if latest is None:
            return datetime.fromtimestamp(0, tz=timezone.utc)
        return datetime.fromtimestamp(latest / 1e9, tz=timezone.utc)

    def on_error(self, task: Any) -> None:
        return None

    def _timestamp_path(self, task: Any) -> str:
        return os.path.join(
            self.temp_dir, "timestamp", normalize_filename(getattr(task, "task", ""))
        )


class NoneChecker(SourcesChecker):
    """Never considers a task up to date."""

    kind = "none"

    def is_up_to_date(self, task: Any) -> bool:
        return False

    def value(self, task: Any) -> str:
        return ""

    def on_error(self, task: Any) -> None:
        return None


def new_sources_checker(method: str, temp_dir: str, dry: bool) -> SourcesChecker:
    """Return the sources checker for the fingerprinting method."""
    if method == "timestamp":
        return TimestampChecker(temp_dir, dry)
    if method == "checksum":
        return ChecksumChecker(temp_dir, dry)
    if method == "none":
        return NoneChecker()
    raise TaskError(f'task: invalid method "{method}"')