"""Helpers for sequences."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import chain
from typing import Any


def unique_join(*args: Iterable[Any]) -> list[Any]:
    """Concatenate the sequences and return the sorted, de-duplicated result."""
    return sorted(set(chain.from_iterable(args)))