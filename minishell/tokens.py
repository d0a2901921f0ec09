"""Token model produced by the tokenizer and consumed by the parser."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable


class TokenType(IntEnum):
    """Role of a token on the command line."""

    CMD = 1
    ARG = 2
    PIPE = 3
    FILE = 4
    REDIN = 5
    REDOUT = 6
    APPEND = 7
    HEREDOC = 8


class QuoteType(IntEnum):
    """Quoting that surrounded a token in the input."""

    NONE = 0
    SINGLE = 4
    DOUBLE = 5


@dataclass
class Token:
    """A word of input with its type, quoting and span in the input line."""

    text: str
    type: TokenType
    quote: QuoteType = QuoteType.NONE
    start: int = 0
    end: int = 0


def merge_joined_tokens(tokens: Iterable[Token]) -> list[Token]:
    """Join tokens whose spans touch, such as ``a"b"`` written without a space.

    The merged token keeps the type and quoting of the first part.
    """
    merged: list[Token] = []
    for token in tokens:
        if merged and merged[-1].end == token.start:
            last = merged[-1]
            merged[-1] = replace(last, text=last.text + token.text, end=token.end)
        else:
            merged.append(replace(token))
    return merged