"""File ownership information."""

from __future__ import annotations

import os

_IS_WINDOWS = os.name == "nt"


def owner(path: str) -> int:
    """Return the user id owning the path, or -1 where that is unavailable."""
    if _IS_WINDOWS:
        return -1
    return os.stat(path).st_uid