"""Ordered shell environment with support for unset-value entries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def parse_entry(text: str) -> tuple[str, str | None]:
    """Split ``KEY=VALUE`` at the first ``=``; without ``=`` the value is None."""
    key, sep, value = text.partition("=")
    if not sep:
        return text, None
    return key, value


class Environment:
    """Variables kept in insertion order; a value of None means declared only."""

    def __init__(self) -> None:
        self._vars: dict[str, str | None] = {}

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> Environment:
        """Build an environment from ``KEY=VALUE`` strings; the first of duplicates wins."""
        env = cls()
        for entry in envp:
            key, value = parse_entry(entry)
            env._vars.setdefault(key, value)
        return env

    def get(self, key: str) -> str | None:
        """Return the value of *key*, or None when absent or unset."""
        return self._vars.get(key)

    def set(self, key: str, value: str | None) -> None:
        """Assign *value* to *key*, appending the key if it is new."""
        self._vars[key] = value

    def add_entry(self, text: str) -> None:
        """Apply an export-style ``KEY`` or ``KEY=VALUE`` entry.

        A bare key that already exists keeps its value.
        """
        key, value = parse_entry(text)
        if key in self._vars and value is None:
            return
        self._vars[key] = value

    def remove(self, key: str) -> None:
        """Delete *key* if present."""
        self._vars.pop(key, None)

    def copy(self) -> Environment:
        """Return an independent copy."""
        clone = Environment()
        clone._vars = dict(self._vars)
        return clone

    def items(self) -> list[tuple[str, str | None]]:
        """Return the entries in order."""
        return list(self._vars.items())

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)