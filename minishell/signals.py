"""Signal handling for the prompt, child processes and here-documents."""

from __future__ import annotations

import signal
import sys
from dataclasses import dataclass

INTERRUPTED_STATUS = 130

_MESSAGES = {
    1: "Hangup",
    2: "Interrupt",
    3: "Quit (core dumped)",
    6: "Aborted (core dumped)",
    8: "Floating point exception (core dumped)",
    9: "Killed",
    11: "Segmentation fault (core dumped)",
    13: "Broken pipe",
    14: "Alarm clock",
    15: "Terminated",
}


@dataclass
class _SignalState:
    at_prompt: bool = True
    interrupted: bool = False

    def take_interrupt(self) -> bool:
        """Return whether an interrupt arrived and clear the mark."""
        seen, self.interrupted = self.interrupted, False
        return seen


state = _SignalState()


def signal_message(sig: int) -> str | None:
    """Message a shell shows for a child killed by ``sig``, or None."""
    return _MESSAGES.get(sig)


def _prompt_interrupt(signum, frame) -> None:
    sys.stdout.write("\n")
    sys.stdout.flush()
    state.interrupted = True
    if state.at_prompt:
        raise KeyboardInterrupt


def install_prompt_handlers() -> None:
    """Catch Ctrl-C at the prompt and ignore Ctrl-\\."""
    signal.signal(signal.SIGINT, _prompt_interrupt)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)


def reset_child_handlers() -> None:
    """Give a child process the default interrupt and quit behaviour."""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)


def install_heredoc_handler(shell) -> None:
    """Make Ctrl-C end here-document input with status 130."""

    def _heredoc_interrupt(signum, frame) -> None:
        sys.stdout.write("\n")
        sys.stdout.flush()
        shell.fail(None, INTERRUPTED_STATUS)

    signal.signal(signal.SIGINT, _heredoc_interrupt)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)