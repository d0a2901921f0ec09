"""Running parsed pipelines: builtins, programs, pipes and redirections."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from contextlib import ExitStack, contextmanager, suppress
from dataclasses import dataclass
from typing import IO, Iterable, Iterator

from .builtins import cd, echo, env_command, exit_builtin, pwd
from .commands import Command
from .heredoc import collect_heredocs
from .redirect import RedirectError, find_path, open_infiles, prepare_outfiles
from .signals import reset_child_handlers, signal_message, state

COMMAND_NOT_FOUND = 127
_QUIT_SIGNAL = 3
_QUIT_STATUS = 131
_CHILD_BUILTINS = {"echo", "export", "env", "cd", "pwd"}


def missing_file_message(cmd: str, file: str, permission: bool = False) -> str:
    """Message for an input file that is missing or cannot be read."""
    reason = "Permission denied" if permission else "No such file or directory"
    return f"{cmd}: {file}: {reason}"


def run_builtin_in_parent(shell, command: Command) -> bool:
    """Run ``unset``, ``cd`` or ``exit`` in the shell itself; return whether it did."""
    args = command.args
    name = args[0] if args else None
    if name == "unset":
        if len(args) > 1:
            shell.env.unset(args[1])
        shell.ecode = 1
        return True
    if name == "cd":
        shell.ecode = cd(shell, args[1] if len(args) > 1 else None)
        return True
    if name == "exit":
        shell.ecode = 0
        exit_builtin(shell, args)
        return True
    return False


@dataclass
class _Finished:
    """A command that completed without a process of its own."""

    returncode: int

    def wait(self) -> int:
        return self.returncode


@contextmanager
def _output(fd: int | None) -> Iterator[IO[str]]:
    if fd is None:
        yield sys.stdout
        sys.stdout.flush()
        return
    with os.fdopen(os.dup(fd), "w", encoding="utf-8") as stream:
        yield stream


def _run_child_builtin(shell, command: Command, out_fd: int | None) -> int | None:
    args = command.args
    name = args[0]
    if name not in _CHILD_BUILTINS:
        return None
    saved = shell.ecode
    with _output(out_fd) as out:
        if name == "echo":
            echo(args, out)
            status = 0
        elif name == "export":
            if len(args) == 1:
                for line in shell.env.sorted_exports():
                    out.write(f"{line}\n")
            status = shell.ecode
        elif name == "env":
            env_command(shell, out)
            status = shell.ecode
        elif name == "pwd":
            pwd(shell, out)
            status = shell.ecode
        else:
            status = shell.ecode
    shell.ecode = saved
    return status


def _env_dict(shell) -> dict[str, str]:
    pairs = (entry.partition("=") for entry in shell.env if "=" in entry)
    return {name: value for name, _, value in pairs}


def _spawn(shell, command: Command, in_fd: int | None, out_fd: int | None):
    status = _run_child_builtin(shell, command, out_fd)
    if status is not None:
        return _Finished(status)
    name = command.args[0]
    try:
        path = find_path(name, shell)
    except RedirectError as err:
        sys.stderr.write(f"{err}\n")
        return _Finished(err.status)
    if path is None:
        sys.stderr.write(f"{name}:command not found\n")
        return _Finished(COMMAND_NOT_FOUND)
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        return subprocess.Popen(
            command.args,
            executable=path,
            stdin=in_fd,
            stdout=out_fd,
            env=_env_dict(shell),
            preexec_fn=reset_child_handlers,
        )
    except OSError:
        return _Finished(1)


def _heredoc_fd(shell, command: Command, stack: ExitStack) -> int:
    text = collect_heredocs(command.limiters, sys.stdin, shell)
    holder = stack.enter_context(tempfile.TemporaryFile())
    holder.write(text.encode("utf-8"))
    holder.seek(0)
    return holder.fileno()


def _infile_fd(command: Command, stack: ExitStack) -> int | None:
    fd = open_infiles(command.infiles)
    if fd is not None:
        stack.callback(os.close, fd)
    return fd


def _command_input(shell, command: Command, stack: ExitStack, inherited: int | None):
    """Input of a command whose here-documents or input files are set.

    The kind of redirection written last decides which one feeds the command.
    """
    fd = inherited
    if command.last == 1:
        error = None
        try:
            _infile_fd(command, stack)
        except RedirectError as err:
            error = err
        if command.limiters:
            fd = _heredoc_fd(shell, command, stack)
        if error is not None:
            raise error
        return fd
    if command.limiters:
        fd = _heredoc_fd(shell, command, stack)
    if command.infiles:
        fd = _infile_fd(command, stack)
    return fd


def _create_all_outfiles(commands: list[Command]) -> None:
    skip = 0
    for command in commands:
        for path in command.outfiles[skip:]:
            with suppress(OSError):
                os.unlink(path)
            with suppress(OSError):
                os.close(os.open(path, os.O_RDWR | os.O_APPEND | os.O_CREAT, 0o600))
        skip = max(skip, len(command.outfiles))


def _record_status(shell, returncode: int) -> None:
    if returncode >= 0:
        shell.ecode = returncode & 0xFF
        return
    shell.ecode = 0
    if -returncode == _QUIT_SIGNAL:
        sys.stdout.write(f"{signal_message(_QUIT_SIGNAL)}\n")
        sys.stdout.flush()
        shell.ecode = _QUIT_STATUS


def execute(shell, commands: Iterable[Command]) -> None:
    """Run a pipeline and store the status of its last started command."""
    commands = list(commands)
    if not commands:
        return
    _create_all_outfiles(commands)
    first = commands[0]
    if first.args and len(commands) == 1 and run_builtin_in_parent(shell, first):
        return
    state.at_prompt = False
    running = []
    last = None
    inherited: int | None = None
    try:
        for index, command in enumerate(commands):
            if not (command.args or command.limiters):
                break
            name = command.args[0] if command.args else None
            with ExitStack() as stack:
                read_end: int | None = None
                out_fd: int | None = None
                if index < len(commands) - 1:
                    read_end, write_end = os.pipe()
                    stack.callback(os.close, write_end)
                    out_fd = write_end
                failed = False
                in_fd = inherited
                try:
                    if command.outfiles:
                        out_fd = prepare_outfiles(command.outfiles, command.append)
                        stack.callback(os.close, out_fd)
                except RedirectError:
                    failed = True
                try:
                    if command.infiles or command.limiters:
                        in_fd = _command_input(shell, command, stack, inherited)
                except RedirectError as err:
                    sys.stderr.write(f"{name}: {err.reason}\n" if name else f"{err.reason}\n")
                    failed = True
                    last = None
                if not command.args or failed:
                    if read_end is not None:
                        os.close(read_end)
                    if not command.args:
                        break
                    continue
                handle = _spawn(shell, command, in_fd, out_fd)
                running.append(handle)
                last = handle
            if inherited is not None:
                os.close(inherited)
            inherited = read_end
    finally:
        if inherited is not None:
            os.close(inherited)
        for handle in running:
            handle.wait()
        state.at_prompt = True
    if last is not None:
        _record_status(shell, last.returncode)