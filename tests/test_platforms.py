import pytest

from taskrunner.platforms import is_known_arch, is_known_os


@pytest.mark.parametrize("name", ["linux", "windows", "darwin", "zos"])
def test_known_os(name):
    assert is_known_os(name) is True


@pytest.mark.parametrize("name", ["beos", "Linux", "", "amd64"])
def test_unknown_os(name):
    assert is_known_os(name) is False


@pytest.mark.parametrize("name", ["amd64", "arm64", "386", "wasm"])
def test_known_arch(name):
    assert is_known_arch(name) is True


@pytest.mark.parametrize("name", ["x86_64", "linux", ""])
def test_unknown_arch(name):
    assert is_known_arch(name) is False