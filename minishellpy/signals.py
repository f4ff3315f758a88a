"""Signal handling for the interactive prompt and child exit statuses."""

from __future__ import annotations

import signal
import sys
import threading
from types import FrameType
from typing import TextIO

_INTERRUPT = threading.Event()


def _on_sigint(signum: int, frame: FrameType | None) -> None:
    _INTERRUPT.set()
    sys.stdout.write("\n")
    sys.stdout.flush()
    raise KeyboardInterrupt


def install_prompt_handlers() -> None:
    """Make Ctrl-C abandon the current line and ignore Ctrl-\\ at the prompt."""
    signal.signal(signal.SIGINT, _on_sigint)
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)


def interrupted() -> bool:
    """Return True if Ctrl-C was received since the last clear."""
    return _INTERRUPT.is_set()


def clear_interrupt() -> None:
    """Forget a received Ctrl-C."""
    _INTERRUPT.clear()


def exit_status_from_returncode(returncode: int, stdout: TextIO) -> int:
    """Turn a child's return code into a shell status, reporting fatal signals."""
    if returncode >= 0:
        return returncode
    sig = -returncode
    if sig == signal.SIGINT:
        stdout.write("\n")
    elif sig == getattr(signal, "SIGQUIT", None):
        stdout.write("Quit (core dumped)\n")
    return 128 + sig