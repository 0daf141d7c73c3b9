from unittest.mock import patch

import pytest

from taskrunner import sysinfo


def test_owner_of_created_file_is_current_user(tmp_path):
    target = tmp_path / "owned"
    target.write_text("x")
    assert sysinfo.owner(str(target)) == tmp_path.stat().st_uid


def test_missing_path_raises(tmp_path):
    with patch.object(sysinfo, "_IS_WINDOWS", False):
        with pytest.raises(FileNotFoundError):
            sysinfo.owner(str(tmp_path / "missing"))


def test_windows_returns_minus_one(tmp_path):
    with patch.object(sysinfo, "_IS_WINDOWS", True):
        assert sysinfo.owner(str(tmp_path / "missing")) == -1