"""Lookup of external commands through the PATH variable."""

from __future__ import annotations

import os

from minishellpy.environment import Environment


def find_executable(name: str, env: Environment) -> str | None:
    """Return the program to run for *name*, or None when none is found.

    A name that is itself executable is used as given; otherwise each
    non-empty directory of PATH is tried in order.
    """
    if not name:
        return None
    if os.access(name, os.X_OK):
        return name
    search = env.get("PATH")
    if search is None:
        return None
    for directory in filter(None, search.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None