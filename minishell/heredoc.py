"""Here-document input: reading up to a limiter and expanding each line."""

from __future__ import annotations

import re
import sys
from typing import IO, Iterable, Iterator

from .strutil import split_char

HEREDOC_EOF_WARNING = "here-document at line 3 delimited by end-of-file wanted ('"
HEREDOC_PROMPT = "> "

_REFERENCE = re.compile(r"\$(\?|[A-Za-z0-9_]*)")


def expand_line(line: str, shell) -> str:
    """Replace ``$?`` and ``$NAME`` in a here-document line.

    Unset names, and a ``$`` not followed by a name, expand to nothing.
    """

    def _value(match: re.Match) -> str:
        name = match.group(1)
        if name == "?":
            return str(shell.ecode)
        return shell.env.get(name) or ""

    return _REFERENCE.sub(_value, line)


def iter_lines(stream: IO[str]) -> Iterator[str]:
    """Yield the lines of ``stream``, each with its newline when it has one."""
    yield from iter(stream.readline, "")


def read_heredoc(limiter: str, lines: Iterable[str], shell) -> str:
    """Collect expanded lines until one that reads ``limiter``.

    At end of input a warning goes to stderr and EOFError is raised; its
    first argument holds the text collected so far.
    """
    source = iter(lines)
    collected: list[str] = []
    while True:
        sys.stderr.write(HEREDOC_PROMPT)
        sys.stderr.flush()
        line = next(source, None)
        if line is None:
            sys.stderr.write(f"{HEREDOC_EOF_WARNING}{limiter}')\n")
            sys.stderr.flush()
            raise EOFError("".join(collected))
        parts = split_char(line, "\n")
        if parts and parts[0] == limiter:
            return "".join(collected)
        collected.append(expand_line(line, shell))


def collect_heredocs(limiters: list[str], stream: IO[str], shell) -> str:
    """Read every here-document in turn and return the text of the last one.

    Input ending inside a here-document stops the reading: the partial text
    is kept when that was the last one, otherwise nothing is.
    """
    lines = iter_lines(stream)
    text = ""
    for index, limiter in enumerate(limiters):
        is_last = index == len(limiters) - 1
        try:
            body = read_heredoc(limiter, lines, shell)
        except EOFError as eof:
            return eof.args[0] if is_last and eof.args else ""
        if is_last:
            text = body
    return text