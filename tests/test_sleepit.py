import os
import signal
import threading

import pytest

from taskrunner.sleepit import main, parse_duration, run


def _kill_later(delay):
    timer = threading.Timer(delay, os.kill, (os.getpid(), signal.SIGINT))
    timer.start()
    return timer


def test_parse_duration_unit_relations():
    assert parse_duration("1h") == 60 * parse_duration("1m")
    assert parse_duration("1m") == 60 * parse_duration("1s")
    assert parse_duration("1s") == pytest.approx(1000 * parse_duration("1ms"))


def test_parse_duration_combined_components():
    assert parse_duration("2h45m") == parse_duration("2h") + parse_duration("45m")


def test_parse_duration_sign_and_zero():
    assert parse_duration("-1.5s") == -parse_duration("1.5s")
    assert parse_duration("0") == 0


@pytest.mark.parametrize("text", ["", "5", "abc", "5x", "-", "1s2"])
def test_parse_duration_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_no_arguments_prints_usage(capsys):
    assert run([]) == 2
    assert "Usage: sleepit <command> [<args>]" in capsys.readouterr().err


def test_unknown_command_prints_usage(capsys):
    assert run(["bogus"]) == 2
    assert "Usage: sleepit" in capsys.readouterr().err


def test_version(capsys):
    assert run(["version"]) == 0
    assert capsys.readouterr().out == "sleepit version unknown\n"


def test_version_rejects_arguments(capsys):
    assert run(["version", "extra"]) == 2
    assert "version: unexpected arguments: [extra]" in capsys.readouterr().err


def test_default_sleeps_and_finishes(capsys):
    assert run(["default", "-sleep=50ms"]) == 0
    out = capsys.readouterr().out
    assert "sleepit: ready\n" in out
    assert "sleepit: work started\n" in out
    assert "sleepit: work done\n" in out
    assert "sleep=50ms" in out
    assert f"PID={os.getpid()}" in out


def test_default_accepts_double_dash_flag(capsys):
    assert run(["default", "--sleep", "50ms"]) == 0
    assert "sleepit: work done\n" in capsys.readouterr().out


def test_default_rejects_arguments(capsys):
    assert run(["default", "extra"]) == 2
    assert "default: unexpected arguments: [extra]" in capsys.readouterr().err


def test_unknown_flag_fails():
    assert run(["default", "-nope"]) == 2


def test_invalid_duration_fails():
    assert run(["default", "-sleep=forever"]) == 2


def test_handle_term_after_one_is_rejected(capsys):
    assert run(["handle", "-term-after=1"]) == 2
    assert "handle: term-after cannot be 1" in capsys.readouterr().err


def test_handle_finishes_without_signal(capsys):
    assert run(["handle", "-sleep=50ms", "-cleanup=50ms"]) == 0
    assert "sleepit: work done\n" in capsys.readouterr().out


def test_handle_signal_runs_cleanup(capsys):
    timer = _kill_later(0.3)
    try:
        code = run(["handle", "-sleep=10s", "-cleanup=50ms"])
    finally:
        timer.cancel()
    out = capsys.readouterr().out
    assert code == 3
    for line in [
        "sleepit: ready\n",
        "sleepit: work started\n",
        "sleepit: got signal=interrupt count=1\n",
        "sleepit: work canceled\n",
        "sleepit: cleanup started\n",
        "sleepit: cleanup done\n",
    ]:
        assert line in out
    assert "sleepit: got signal=interrupt count=2\n" not in out


def test_handle_term_after_two_signals(capsys):
    first = _kill_later(0.3)
    second = _kill_later(0.6)
    try:
        code = run(["handle", "-term-after=2", "-sleep=10s", "-cleanup=10s"])
    finally:
        first.cancel()
        second.cancel()
    out = capsys.readouterr().out
    assert code == 4
    assert "sleepit: got signal=interrupt count=2\n" in out
    assert "sleepit: cleanup canceled\n" in out
    assert "sleepit: cleanup done\n" not in out


def test_main_exits_with_run_status(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["version"])
    assert excinfo.value.code == 0
    assert "sleepit version" in capsys.readouterr().out


def test_main_exits_with_usage_status():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2