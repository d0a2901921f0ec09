"""Program lookup and input/output file redirections."""

from __future__ import annotations

import os
from contextlib import suppress

from .strutil import split_char

_OUT_FLAGS = os.O_RDWR | os.O_APPEND | os.O_CREAT
_OUT_MODE = 0o600


class RedirectError(Exception):
    """A redirection or lookup that failed, with the status it leads to."""

    def __init__(self, path: str, reason: str, status: int = 1) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
        self.status = status


def is_relative_path(program: str) -> bool:
    """Whether ``program`` names at least two ``/``-separated components."""
    return len(split_char(program, "/")) > 1


def _search(dirs: list[str], program: str) -> str | None:
    for directory in dirs:
        full = f"{directory}/{program}"
        if os.access(full, os.F_OK | os.X_OK):
            if os.path.isdir(program):
                return None
            return full
    return None


def find_path(program: str, shell) -> str | None:
    """Locate ``program`` through ``PATH``, then through ``PWD``.

    Raises RedirectError with status 21 when the program is a directory
    that no ``PATH`` entry resolves.
    """
    if is_relative_path(program):
        return program if os.access(program, os.F_OK | os.X_OK) else None
    path = shell.env.get("PATH")
    if path is None:
        return None
    dirs = split_char(path, ":")
    if _search(dirs, program) is None:
        dirs = split_char(shell.env.get("PWD") or "", ":")
        if os.path.isdir(program):
            raise RedirectError(program, "Is a directory", 21)
    return _search(dirs, program)


def open_infiles(files: list[str]) -> int | None:
    """Open every input file in order and return a descriptor of the last.

    Earlier descriptors are closed. Raises RedirectError when one cannot be read.
    """
    fd: int | None = None
    for path in files:
        if fd is not None:
            os.close(fd)
            fd = None
        try:
            fd = os.open(path, os.O_RDONLY)
        except OSError as err:
            raise RedirectError(path, err.strerror or str(err)) from err
    return fd


def prepare_outfiles(files: list[str], append: bool) -> int | None:
    """Create every output file and return an appending descriptor of the last.

    Without ``append`` each file is removed first so it starts empty. Raises
    RedirectError when the last file cannot be opened.
    """
    fd: int | None = None
    error: RedirectError | None = None
    for path in files:
        if fd is not None:
            os.close(fd)
            fd = None
        if not append:
            with suppress(OSError):
                os.unlink(path)
        try:
            fd = os.open(path, _OUT_FLAGS, _OUT_MODE)
            error = None
        except OSError as err:
            error = RedirectError(path, err.strerror or str(err))
    if error is not None:
        raise error
    return fd