"""Shell state, start-up environment and the debug log."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import IO, Iterable

from .environment import Environment
from .strutil import atoi


class ShellExit(Exception):
    """Raised when the shell is to terminate with an exit status."""

    def __init__(self, code: int, message: str | None = None) -> None:
        super().__init__(code)
        self.code = code
        self.message = message


def initial_environment(env: Iterable[str] | None, cwd: str) -> list[str]:
    """Entries the shell starts with: a copy of ``env`` or a minimal default."""
    entries = list(env or [])
    if entries:
        return entries
    return [f"PWD={cwd}", "SHLVL=1", "OLDPWD="]


class Shell:
    """Everything one interactive session keeps between command lines."""

    def __init__(self, env: Iterable[str] | None = None) -> None:
        if env is None:
            env = [f"{key}={value}" for key, value in os.environ.items()]
        self.env = Environment(initial_environment(env, os.getcwd()))
        self.tokens: list = []
        self.commands: list = []
        self.ecode = 0
        self.last_pid = 0
        level = self.env.get("SHLVL")
        new_level = str(atoi(level or "") + 1)
        if self.env.position("SHLVL") is None:
            self.env.export(f"SHLVL={new_level}")
        else:
            self.env.change_value("SHLVL", new_level)

    def fail(self, message: str | None = None, code: int | None = None) -> None:
        """Drop the parsed line, print ``message`` and exit when ``code`` is given."""
        self.commands = []
        self.tokens = []
        if message:
            sys.stdout.write(message)
            sys.stdout.flush()
        if code is not None and code != -1:
            raise ShellExit(code, message)


class DebugLog:
    """Append-only log of the lines the shell was given."""

    HEADER = "\n\nNew programme launched:\n"
    PROMPT = "minishell-> "

    def __init__(self, path: str | os.PathLike = "debug.log") -> None:
        self.path = Path(path)
        self._stream: IO[str] | None = None

    def write(self, line: str) -> None:
        """Record one input line, opening the log with a header on first use."""
        if self._stream is None:
            self._stream = open(self.path, "a", encoding="utf-8")
            self._stream.write(self.HEADER)
        self._stream.write(f"{self.PROMPT}{line}\n\n")
        self._stream.flush()

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "DebugLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()