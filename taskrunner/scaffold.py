"""Creation of a starter Taskfile."""

from __future__ import annotations

import os
from typing import TextIO

from taskrunner.errors import TaskfileAlreadyExistsError
from taskrunner.filepathext import smart_join

DEFAULT_TASKFILE = """version: '3'

vars:
  GREETING: Hello, World!

tasks:
  default:
    cmds:
      - echo "{{.GREETING}}"
    silent: true
"""

DEFAULT_TASKFILE_NAME = "Taskfile.yml"


def init_taskfile(stream: TextIO, directory: str) -> str:
    """Write a starter Taskfile into the directory and return its path."""
    path = smart_join(directory, DEFAULT_TASKFILE_NAME)
    if os.path.exists(path):
        raise TaskfileAlreadyExistsError()
    with open(path, "w", encoding="utf-8", newline="\n") as handle:
        handle.write(DEFAULT_TASKFILE)
    stream.write(f"{DEFAULT_TASKFILE} created in the current directory\n")
    return path