"""Small programs for exercising the shell's job control."""

from __future__ import annotations

import os
import re
import signal
import sys
import time
from typing import Optional

_DIGITS = re.compile(r"\s*[+-]?\d+")


def _atoi(text: str) -> int:
    match = _DIGITS.match(text)
    return int(match.group()) if match else 0


def _seconds(program: str, argv) -> Optional[int]:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stderr.write(f"Usage: {program} <n>\n")
        return None
    return _atoi(args[0])


def _sleep(seconds: int) -> None:
    for _ in range(seconds):
        time.sleep(1)


def spin_main(argv=None) -> int:
    """Sleep for n seconds in one-second chunks."""
    seconds = _seconds("myspin", argv)
    if seconds is not None:
        _sleep(seconds)
    return 0


def split_main(argv=None) -> int:
    """Fork a child that sleeps for n seconds and wait for it."""
    seconds = _seconds("mysplit", argv)
    if seconds is None:
        return 0
    pid = os.fork()
    if pid == 0:
        try:
            _sleep(seconds)
        finally:
            os._exit(0)
    os.waitpid(pid, 0)
    return 0


def stop_main(argv=None) -> int:
    """Sleep for n seconds, then send SIGTSTP to this process's group."""
    seconds = _seconds("mystop", argv)
    if seconds is None:
        return 0
    _sleep(seconds)
    try:
        os.kill(-os.getpid(), signal.SIGTSTP)
    except OSError:
        sys.stderr.write("kill (tstp) error")
    return 0


def int_main(argv=None) -> int:
    """Sleep for n seconds, then interrupt this process with SIGINT."""
    seconds = _seconds("myint", argv)
    if seconds is None:
        return 0
    _sleep(seconds)
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    try:
        os.kill(os.getpid(), signal.SIGINT)
    except OSError:
        sys.stderr.write("kill (int) error")
    return 0