import io

import pytest

from taskrunner.errors import TaskfileAlreadyExistsError
from taskrunner.scaffold import DEFAULT_TASKFILE, DEFAULT_TASKFILE_NAME, init_taskfile


def test_creates_taskfile(tmp_path):
    out = io.StringIO()
    path = init_taskfile(out, str(tmp_path))
    assert path == str(tmp_path / DEFAULT_TASKFILE_NAME)
    assert (tmp_path / DEFAULT_TASKFILE_NAME).read_text() == DEFAULT_TASKFILE


def test_reports_creation(tmp_path):
    out = io.StringIO()
    init_taskfile(out, str(tmp_path))
    assert out.getvalue() == DEFAULT_TASKFILE + " created in the current directory\n"


def test_existing_taskfile_is_not_overwritten(tmp_path):
    target = tmp_path / DEFAULT_TASKFILE_NAME
    target.write_text("mine")
    with pytest.raises(TaskfileAlreadyExistsError):
        init_taskfile(io.StringIO(), str(tmp_path))
    assert target.read_text() == "mine"


def test_default_taskfile_declares_version_three():
    assert DEFAULT_TASKFILE.startswith("version: '3'\n")