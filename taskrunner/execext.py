"""Running shell commands and expanding shell words."""

from __future__ import annotations

import io
import os
import shlex
import shutil
import subprocess
from collections.abc import Iterable
from typing import IO, Any


class ExitStatusError(Exception):
    """A shell command finished with a non-zero exit status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit status {status}")
        self.status = status


def _shell(need_bash: bool) -> str:
    bash = shutil.which("bash")
    if bash:
        return bash
    if need_bash:
        raise RuntimeError("execext: bash is required to set shell options")
    sh = shutil.which("sh")
    if sh is None:
        raise FileNotFoundError("execext: no POSIX shell found")
    return sh


def _fileno(stream: Any) -> int | None:
    if stream is None:
        return None
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    flush = getattr(stream, "flush", None)
    if callable(flush):
        flush()
    return fd


def _write(stream: IO[Any], data: bytes) -> None:
    if not data:
        return
    if isinstance(stream, io.TextIOBase):
        stream.write(data.decode(errors="replace"))
    else:
        stream.write(data)


def _working_dir(directory: str) -> str | None:
    if not directory:
        return None
    path = os.path.abspath(directory)
    if os.path.isdir(path):
        return path
    if not os.path.exists(path):
        # The directory is created later by whoever runs the task.
        return None
    raise NotADirectoryError(f"execext: {directory!r} is not a directory")


def _environ(env: Iterable[str] | None) -> dict[str, str]:
    entries = list(env or ())
    if not entries:
        return dict(os.environ)
    return dict(entry.split("=", 1) for entry in entries if "=" in entry)


def run_command(
    command: str,
    dir: str = "",
    env: Iterable[str] | None = None,
    posix_opts: Iterable[str] = (),
    bash_opts: Iterable[str] = (),
    stdin: IO[Any] | None = None,
    stdout: IO[Any] | None = None,
    stderr: IO[Any] | None = None,
) -> None:
    """Run a shell command with errexit set; raise ExitStatusError on failure."""
    params: list[str] = []
    for opt in [*posix_opts, "e"]:
        if len(opt) == 1:
            params.append(f"-{opt}")
        else:
            params.extend(["-o", opt])

    bash_opts = list(bash_opts)
    script = command
    if bash_opts:
        script = f"shopt -s {' '.join(bash_opts)}\n{command}"

    kwargs: dict[str, Any] = {
        "cwd": _working_dir(dir),
        "env": _environ(env),
    }

    in_fd = _fileno(stdin)
    if stdin is None:
        kwargs["stdin"] = subprocess.DEVNULL
    elif in_fd is not None:
        kwargs["stdin"] = in_fd
    else:
        data = stdin.read()
        kwargs["input"] = data.encode() if isinstance(data, str) else data

    captured: dict[str, IO[Any]] = {}
    for name, stream in (("stdout", stdout), ("stderr", stderr)):
        fd = _fileno(stream)
        if stream is None:
            kwargs[name] = subprocess.DEVNULL
        elif fd is not None:
            kwargs[name] = fd
        else:
            kwargs[name] = subprocess.PIPE
            captured[name] = stream

    result = subprocess.run(
        [_shell(bool(bash_opts)), *params, "-c", script], check=False, **kwargs
    )

    if "stdout" in captured:
        _write(captured["stdout"], result.stdout)
    if "stderr" in captured:
        _write(captured["stderr"], result.stderr)

    code = result.returncode
    if code < 0:
        code = 128 - code
    if code != 0:
        raise ExitStatusError(code)


def is_exit_error(err: BaseException) -> bool:
    """Tell whether the error is a command's exit status."""
    return isinstance(err, ExitStatusError)


def expand(s: str) -> str:
    """Expand a shell word (tilde and variables) and return its first field."""
    if os.sep != "/":
        s = s.replace(os.sep, "/")
    s = s.replace(" ", "\\ ")
    fields = shlex.split(s)
    if not fields:
        return ""
    return os.path.expandvars(os.path.expanduser(fields[0]))