"""Version of the task runner."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

_VERSION = ""


def get_version() -> str:
    """Return the configured or installed version, or "unknown"."""
    if _VERSION:
        return _VERSION
    try:
        found = _distribution_version("taskrunner")
    except PackageNotFoundError:
        return "unknown"
    return found or "unknown"