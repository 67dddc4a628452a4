"""Synchronous invocation of the bspwm control program.

Every call spawns one process, blocks until it exits and captures its whole
output. There is no timeout and no retry: a spawn failure is raised as the
original `OSError`, and the exit status is reported, not enforced.
"""

__all__ = ["BspcResult", "run_bspc"]

import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from logging import Logger

from .config import get_settings
from .logging_setup import get_logger


@dataclass(frozen=True)
class BspcResult:
    """Outcome of one run of the control program."""

    args: tuple[str, ...]
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        """Return True if the program exited successfully."""
        return self.returncode == 0

    @property
    def error_message(self) -> str:
        """Return the error output as text."""
        return self.stderr.decode(errors="replace").strip()


def run_bspc(args: Sequence[str], *, command: str | None = None, log: Logger | None = None) -> BspcResult:
    """Run the control program with `args` and capture its output.

    Args:
        args: Arguments passed to the program
        command: Program to run, defaults to the configured one
        log: Logger to use for this operation

    Raises:
        OSError: the program could not be spawned or its output not read
    """
    if log is None:
        log = get_logger("pybspc.process")
    argv = (command or get_settings().command, *args)
    log.debug("run %s", shlex.join(argv))
    try:
        proc = subprocess.run(list(argv), capture_output=True, check=False)  # noqa: S603
    except OSError as e:
        log.error("cannot run %s: %s", argv[0], e)
        raise

    result = BspcResult(args=argv, returncode=proc.returncode, stdout=proc.stdout or b"", stderr=proc.stderr or b"")
    if not result.ok:
        log.warning("%s exited with status %d: %s", shlex.join(argv), result.returncode, result.error_message)
    return result
