"""String helpers shared by the parser and the builtins."""

from __future__ import annotations

import re

_SPACE_CHARS = " \t\n"
_ATOI_SPACES = " \n\t\v\f\r"
_SPACE_SPLIT = re.compile(r"[ \t\n]|[^ \t\n]+")


def _wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way the shell's atoi does.

    Leading whitespace is skipped, one optional ``-`` is honoured and a ``+``
    is accepted only at the start or right after whitespace. Parsing stops
    at the first non-digit. The result wraps like a 32-bit signed int.
    """
    i = 0
    while i < len(text) and text[i] in _ATOI_SPACES:
        i += 1
    sign = 1
    if i < len(text) and text[i] == "-":
        sign = -1
        i += 1
    if i < len(text) and text[i] == "+":
        if i > 0 and text[i - 1] not in _ATOI_SPACES:
            return 0
        i += 1
    value = 0
    while i < len(text) and "0" <= text[i] <= "9":
        value = value * 10 + (ord(text[i]) - ord("0"))
        i += 1
    return _wrap_int32(value * sign)


def split_char(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def is_space(ch: str) -> bool:
    """Return True for a space, tab or newline."""
    return len(ch) == 1 and ch in _SPACE_CHARS


def split_spaces(text: str) -> list[str]:
    """Split ``text`` into words, keeping each whitespace character as its own item."""
    return _SPACE_SPLIT.findall(text)