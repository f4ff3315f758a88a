"""Selection and execution of builtin commands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from minishellpy import builtins
from minishellpy.environment import Environment

BUILTINS = frozenset({"cd", "echo", "pwd", "export", "unset", "env", "exit"})


class ShellExit(Exception):
    """Raised by the ``exit`` builtin when the shell must terminate."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


def is_builtin(name: str | None) -> bool:
    """Return True if *name* is run by the shell itself."""
    return bool(name) and name in BUILTINS


def run_builtin(
    args: Sequence[str], env: Environment, stdout: TextIO, stderr: TextIO
) -> int:
    """Run the builtin named by ``args[0]`` and return its status.

    Raises ShellExit when ``exit`` ends the shell, and ValueError when
    ``args[0]`` is not a builtin.
    """
    if not args or not is_builtin(args[0]):
        raise ValueError(f"not a builtin: {args[0] if args else ''!r}")
    name, rest = args[0], list(args[1:])
    if name == "echo":
        return builtins.echo(rest, stdout)
    if name == "cd":
        return builtins.cd(rest, env, stdout, stderr)
    if name == "pwd":
        return builtins.pwd(stdout, stderr)
    if name == "env":
        return builtins.env_command(rest, env, stdout, stderr)
    if name == "exit":
        status, terminate = builtins.exit_command(rest, stdout, stderr)
        if terminate:
            raise ShellExit(status)
        return status
    if name == "export":
        return builtins.export(rest, env, stdout)
    return builtins.unset(rest, env)