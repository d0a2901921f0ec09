"""Dollar expansion of words and tokens."""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Iterable

from .strutil import split_char, split_spaces
from .tokens import QuoteType, Token, merge_joined_tokens


def _is_name_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def should_expand(token: Token, previous: str | None) -> bool:
    """Whether ``token`` may be expanded given the text of the token before it.

    Single-quoted tokens and here-document limiters are left alone.
    """
    if token.quote == QuoteType.SINGLE:
        return False
    return previous is None or not previous.startswith("<<")


def _lookup(name: str, rest: str, shell) -> str:
    prefix = name + "="
    for entry in shell.env:
        if entry.startswith(prefix):
            return entry[len(prefix):] + rest
    return rest


def dollar_expansion(text: str | None, quote: QuoteType, shell) -> str:
    """Expand a piece that starts with ``$``.

    A piece not starting with ``$`` gives an empty string, a lone ``$`` stays
    as it is, and ``$?`` gives the last exit status, dropping what follows.
    A variable name runs over letters, digits and underscores; the rest of
    the piece is kept after the value. Unset variables expand to nothing.
    """
    if not text or text[0] != "$":
        return ""
    if len(text) == 1:
        return "$"
    if quote == QuoteType.SINGLE:
        return text
    body = text[1:]
    if body.startswith("?"):
        return str(shell.ecode)
    end = next((i for i, ch in enumerate(body) if not _is_name_char(ch)), len(body))
    return _lookup(body[:end], body[end:], shell)


def _expand_dollars(shell, piece: str) -> str:
    parts = split_char(piece, "$")
    if piece.endswith("$"):
        parts.append("")
    if not parts:
        return ""
    first, rest = parts[0], parts[1:]
    if piece.startswith("$"):
        first = dollar_expansion("$" + first, QuoteType.DOUBLE, shell)
    expanded = [dollar_expansion("$" + part, QuoteType.DOUBLE, shell) for part in rest]
    return first + "".join(expanded)


def _expand_piece(shell, piece: str) -> str:
    if piece.startswith("$") and piece.count("$") <= 1:
        return dollar_expansion(piece, QuoteType.DOUBLE, shell)
    if "$" in piece:
        return _expand_dollars(shell, piece)
    return piece


def expand_word(shell, word: str) -> str:
    """Expand every ``$`` reference in ``word``.

    ``$$`` on its own gives the process id. A single trailing space of the
    result is dropped.
    """
    if word == "$$":
        return str(os.getpid())
    joined = "".join(_expand_piece(shell, piece) for piece in split_spaces(word))
    if joined.endswith(" "):
        joined = joined[:-1]
    return joined


def expand_tokens(shell, tokens: Iterable[Token]) -> list[Token]:
    """Expand the tokens that allow it, then join tokens written side by side."""
    result: list[Token] = []
    previous: str | None = None
    for token in tokens:
        if should_expand(token, previous) and "$" in token.text:
            token = replace(token, text=expand_word(shell, token.text))
        result.append(token)
        previous = token.text
    return merge_joined_tokens(result)