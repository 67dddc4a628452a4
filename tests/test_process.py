"""Tests for the bspc process runner."""

import logging

import pytest

from pybspc.process import BspcResult, run_bspc

from .testtools import called_argv, completed


def test_run_captures_output(bspc_run):
    bspc_run.return_value = completed(b'{"a": 1}', stderr=b"")
    result = run_bspc(["query", "-m", "-T"])
    assert result == BspcResult(args=("bspc", "query", "-m", "-T"), returncode=0, stdout=b'{"a": 1}', stderr=b"")
    assert result.ok


def test_run_without_shell_or_check(bspc_run):
    run_bspc(["wm", "-d"])
    assert called_argv(bspc_run) == ["bspc", "wm", "-d"]
    kwargs = bspc_run.call_args.kwargs
    assert kwargs["capture_output"] is True
    assert kwargs["check"] is False
    assert "shell" not in kwargs
    assert "timeout" not in kwargs


def test_command_override(bspc_run):
    run_bspc(["wm", "-d"], command="/usr/local/bin/bspc")
    assert called_argv(bspc_run) == ["/usr/local/bin/bspc", "wm", "-d"]


def test_configured_command(bspc_run, monkeypatch):
    from pybspc import config

    monkeypatch.setattr(config._settings_state, "value", config.Settings(command="my-bspc", debug=True))
    run_bspc(["wm", "-d"])
    assert called_argv(bspc_run)[0] == "my-bspc"


def test_non_zero_exit_is_reported_not_raised(bspc_run, caplog):
    bspc_run.return_value = completed(b"", returncode=1, stderr=b"query -d: No such desktop.\n")
    logger = logging.getLogger("test_process")
    with caplog.at_level(logging.WARNING, logger="test_process"):
        result = run_bspc(["query", "-d", "nope", "-T"], log=logger)
    assert not result.ok
    assert result.error_message == "query -d: No such desktop."
    assert "exited with status 1" in caplog.text


def test_missing_output_streams(bspc_run):
    bspc_run.return_value = completed(b"")
    bspc_run.return_value.stdout = None
    bspc_run.return_value.stderr = None
    result = run_bspc(["wm", "-d"])
    assert result.stdout == b""
    assert result.stderr == b""


@pytest.mark.parametrize("error", [FileNotFoundError(2, "not found"), PermissionError(13, "denied"), OSError(5, "I/O")])
def test_spawn_errors_are_raised_unchanged(bspc_run, error):
    bspc_run.side_effect = error
    with pytest.raises(OSError) as exc_info:
        run_bspc(["wm", "-d"])
    assert exc_info.value is error
