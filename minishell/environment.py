"""The shell's own copy of the environment, kept as ``NAME=value`` entries."""

from __future__ import annotations

from typing import Iterable, Iterator

from .strutil import split_char


def split_first(entry: str) -> list[str]:
    """Split an entry at its first ``=`` past the first character.

    Without such an ``=`` the entry is split on every ``=``, dropping empty
    pieces, so ``"FOO"`` gives ``["FOO"]``.
    """
    index = entry.find("=", 1)
    if index > 0:
        return [entry[:index], entry[index + 1:]]
    return split_char(entry, "=")


def recover_full_entry(entry: str, value: str | None) -> str | None:
    """Build ``NAME=value`` from the name part of ``entry``; None if no value."""
    if value is None:
        return None
    parts = split_char(entry, "=")
    name = parts[0] if parts else ""
    return f"{name}={value}"


class Environment:
    """An ordered list of environment entries with shell lookup rules."""

    def __init__(self, entries: Iterable[str]) -> None:
        self.entries: list[str] = list(entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str) -> str | None:
        """Return the value of ``name`` or None when it is not set."""
        for entry in self.entries:
            parts = split_char(entry, "=")
            if parts and parts[0] == name:
                return entry[len(name) + 1:]
        return None

    def position(self, name: str) -> int | None:
        """Index of the first entry starting with ``name``, or None."""
        return next(
            (i for i, entry in enumerate(self.entries) if entry.startswith(name)),
            None,
        )

    def export(self, entry: str) -> None:
        """Add ``entry`` or replace the entry with the same name.

        An entry without a value leaves an existing entry untouched.
        """
        parts = split_first(entry)
        if not parts:
            return
        pos = self.position(parts[0])
        if pos is None:
            self.entries.append(entry)
        elif len(parts) > 1:
            self.entries[pos] = entry

    def unset(self, name: str) -> bool:
        """Remove ``name``; return whether an entry was removed."""
        if self.get(name) is None:
            return False
        pos = self.position(name)
        if pos is None:
            return False
        del self.entries[pos]
        return True

    def change_value(self, name: str, value: str | None) -> None:
        """Give the existing variable ``name`` a new value.

        Raises KeyError when no entry starts with ``name``.
        """
        pos = self.position(name)
        if pos is None:
            raise KeyError(name)
        entry = recover_full_entry(self.entries[pos], value)
        if entry is not None:
            self.export(entry)

    def visible_entries(self) -> Iterator[str]:
        """Yield the entries ``env`` shows: those with a value after the first ``=``."""
        for entry in self.entries:
            eq = entry.find("=")
            if eq == -1 or eq == len(entry) - 1:
                continue
            yield entry

    def sorted_exports(self) -> list[str]:
        """Lines printed by ``export`` without arguments, in byte order."""
        return [f"export {entry}" for entry in sorted(self.entries)]