"""Grouping of tokens into the commands of a pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .tokens import Token, TokenType


class ParseError(ValueError):
    """Raised when a token sequence does not form a valid pipeline."""


@dataclass
class Command:
    """One command of a pipeline with its redirections.

    ``last`` records which kind of input redirection came last: 1 for a
    here-document, 0 for an input file, -1 when there was neither.
    """

    args: list[str] = field(default_factory=list)
    infiles: list[str] = field(default_factory=list)
    outfiles: list[str] = field(default_factory=list)
    limiters: list[str] = field(default_factory=list)
    append: bool = False
    last: int = -1


def _operand(stream: Iterator[Token], operator: Token) -> str:
    target = next(stream, None)
    if target is None:
        raise ParseError(f"missing operand after {operator.text!r}")
    return target.text


def tokens_to_commands(tokens: Iterable[Token]) -> list[Command]:
    """Build the list of commands described by ``tokens``.

    Raises ParseError for a redirection without a target, a pipe that
    ends the line, or a token that has no place on its own.
    """
    commands: list[Command] = []
    current: Command | None = None
    stream = iter(tokens)
    for token in stream:
        if current is None:
            current = Command()
        kind = token.type
        if kind == TokenType.CMD:
            if current.args:
                current.args[0] = token.text
            else:
                current.args.append(token.text)
        elif kind == TokenType.ARG:
            current.args.append(token.text)
        elif kind in (TokenType.REDOUT, TokenType.APPEND):
            current.outfiles.append(_operand(stream, token))
            current.append = kind == TokenType.APPEND
        elif kind == TokenType.REDIN:
            current.last = 0
            current.infiles.append(_operand(stream, token))
        elif kind == TokenType.HEREDOC:
            current.last = 1
            current.limiters.append(_operand(stream, token))
        elif kind == TokenType.PIPE:
            commands.append(current)
            current = None
        else:
            raise ParseError(f"unexpected token {token.text!r}")
    if current is None:
        if commands:
            raise ParseError("pipe at end of line")
        return commands
    commands.append(current)
    return commands