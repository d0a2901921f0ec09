"""Commands the shell runs itself: echo, cd, pwd, exit, export and env."""

from __future__ import annotations

import os
import re
import sys
from typing import IO, Sequence

from .environment import recover_full_entry
from .strutil import atoi

_ECHO_PIECE = re.compile(
    r"(?P<status>\$\?)|(?P<var>\$[A-Za-z0-9_]+)|(?P<bare>\$)(?=.)|(?P<char>.)",
    re.DOTALL,
)


def _option_count(args: Sequence[str]) -> int:
    count = 1
    for arg in args[1:]:
        if not arg.startswith("-") or any(ch != "n" for ch in arg[1:]):
            break
        count += 1
    return count


def echo(args: Sequence[str], out: IO[str] | None = None) -> None:
    """Print the arguments after ``args[0]``; leading ``-n`` flags drop the newline."""
    out = out if out is not None else sys.stdout
    if len(args) < 2:
        out.write("\n")
        return
    count = _option_count(args)
    out.write(" ".join(args[count:]))
    if count == 1:
        out.write("\n")


def echo_expand(text: str, shell) -> str:
    """Expand ``$NAME`` and ``$?`` in ``text`` outside single quotes, dropping quotes."""
    single = double = False
    result: list[str] = []
    for match in _ECHO_PIECE.finditer(text):
        piece = match.group()
        if piece == "'" and not double:
            single = not single
        elif piece == '"' and not single:
            double = not double
        elif single or match.lastgroup == "char":
            result.append(piece)
        elif match.lastgroup == "status":
            result.append(str(shell.ecode))
        elif match.lastgroup == "var":
            result.append(shell.env.get(piece[1:]) or "")
    return "".join(result)


def _report(name: str, err: OSError) -> None:
    sys.stderr.write(f"{name}: {err.strerror}\n")


def _current_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def _update_pwd(shell, path: str, old: str) -> None:
    try:
        cwd = os.getcwd()
    except OSError as err:
        _report(path, err)
        return
    shell.env.export(f"PWD={cwd}")
    shell.env.export(f"OLDPWD={old}")


def cd(shell, path: str | None = None) -> int:
    """Change directory to ``path`` or to ``$HOME``; return the exit status."""
    old = _current_dir()
    if path is not None:
        try:
            os.chdir(path)
        except OSError as err:
            _report(path, err)
            status = 1
        else:
            _update_pwd(shell, path, old)
            status = 0
    else:
        home = shell.env.get("HOME")
        if home is None:
            sys.stdout.write("cd: HOME not set\n")
            status = 1
        else:
            try:
                os.chdir(home)
            except OSError:
                status = 1
            else:
                _update_pwd(shell, home, old)
                status = 0
    shell.ecode = status
    return status


def pwd(shell, out: IO[str] | None = None) -> int:
    """Print the working directory; return the exit status."""
    out = out if out is not None else sys.stdout
    try:
        cwd = os.getcwd()
    except OSError as err:
        _report("pwd", err)
        shell.ecode = 1
        return 1
    out.write(f"{cwd}\n")
    shell.ecode = 0
    return 0


def exit_builtin(shell, args: Sequence[str]) -> int:
    """Leave the shell, raising ShellExit with the requested status.

    With more than one operand nothing happens and 1 is returned.
    """
    if len(args) > 2:
        sys.stdout.write("Exit: too many arguments\n")
        return 1
    if len(args) > 1:
        arg = args[1]
        if any(ch.isascii() and ch.isalpha() for ch in arg):
            shell.fail("exit\nExit: Numeric argument required\n", 2)
        shell.fail("exit\n", atoi(arg) & 0xFF)
    shell.fail("exit\n", 0)
    return 0


def export_command(shell, args: Sequence[str], start: int = 1) -> None:
    """Export every entry of ``args`` from index ``start`` on.

    ``NAME=$OTHER`` copies the value of ``OTHER``; when that is unset an
    empty ``NAME=`` entry is appended.
    """
    for arg in args[start:]:
        eq = arg.find("=")
        if eq != -1 and arg[eq + 1:eq + 2] == "$":
            entry = recover_full_entry(arg, shell.env.get(arg[eq + 2:]))
            if entry is not None:
                shell.env.export(entry)
            else:
                shell.env.entries.append(recover_full_entry(arg, ""))
        else:
            shell.env.export(arg)
    shell.ecode = 0


def env_command(shell, out: IO[str] | None = None) -> None:
    """Print the variables that carry a value."""
    out = out if out is not None else sys.stdout
    for entry in shell.env.visible_entries():
        out.write(f"{entry}\n")
    shell.ecode = 0