"""Path helpers shared by the task runner."""

from __future__ import annotations

import os


def smart_join(a: str, b: str) -> str:
    """Join two paths, unless the second one is already absolute."""
    if os.path.isabs(b):
        return b
    joined = os.path.join(a, b)
    if not joined:
        return ""
    return os.path.normpath(joined)


def try_abs_to_rel(abs_path: str) -> str:
    """Make an absolute path relative to the working directory when possible."""
    if not os.path.isabs(abs_path):
        return abs_path
    try:
        return os.path.relpath(abs_path, os.getcwd())
    except (OSError, ValueError):
        return abs_path