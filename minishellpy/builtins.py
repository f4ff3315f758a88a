"""Commands the shell runs itself: echo, cd, pwd, env, exit, export and unset."""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from typing import TextIO

from minishellpy.environment import Environment, parse_entry

LONG_MAX = 2**63 - 1
LONG_MIN = -(2**63)

_SPACES = "\t\n\v\f\r "
_NO_NEWLINE_FLAG = re.compile(r"-n+")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_EXIT_ARGUMENT = re.compile(r"-?[0-9]*")


def parse_long(text: str) -> int:
    """Read a signed decimal number the way ``atol`` does.

    Leading whitespace and one sign are accepted, reading stops at the first
    non-digit. Raises OverflowError when the value does not fit a 64-bit long.
    """
    body = text.lstrip(_SPACES)
    sign = 1
    if body[:1] in ("+", "-"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    digits = re.match(r"[0-9]*", body).group()
    value = sign * int(digits) if digits else 0
    if not LONG_MIN <= value <= LONG_MAX:
        raise OverflowError(f"{text!r} does not fit in a long")
    return value


def is_valid_identifier(text: str) -> bool:
    """Return True if the part of *text* before any ``=`` is a valid variable name."""
    key, _ = parse_entry(text)
    return _IDENTIFIER.fullmatch(key) is not None


def echo(args: Sequence[str], stdout: TextIO) -> int:
    """Print the arguments separated by spaces; leading ``-n`` flags drop the newline."""
    skipped = 0
    for arg in args:
        if not _NO_NEWLINE_FLAG.fullmatch(arg):
            break
        skipped += 1
    stdout.write(" ".join(args[skipped:]))
    if not skipped:
        stdout.write("\n")
    return 0


def _change_directory(env: Environment, path: str, stderr: TextIO) -> bool:
    try:
        current = os.getcwd()
    except OSError as exc:
        stderr.write(f"minishell: cd: error retrieving current directory{exc.strerror}\n")
        return False
    try:
        os.chdir(path)
    except OSError:
        stderr.write(f"minishell: cd: {path}: No such file or directory\n")
        return False
    try:
        new = os.getcwd()
    except OSError as exc:
        stderr.write(f"minishell: cd: {exc.strerror}\n")
        return False
    for key, value in (("OLDPWD", current), ("PWD", new)):
        if key in env:
            env.set(key, value)
    return True


def cd(args: Sequence[str], env: Environment, stdout: TextIO, stderr: TextIO) -> int:
    """Change the working directory and keep PWD and OLDPWD up to date."""
    target = args[0] if args else ""
    if target in ("", "~", "--"):
        home = env.get("HOME")
        if home is None:
            stderr.write("minishell: cd: HOME not set\n")
            return 1
        return 0 if _change_directory(env, home, stderr) else 1
    if target == "-":
        previous = env.get("OLDPWD")
        if previous is None:
            stderr.write("minishell: cd: OLDPWD not set\n")
            return 1
        if not _change_directory(env, previous, stderr):
            return 1
        stdout.write(f"{previous}\n")
        return 0
    return 0 if _change_directory(env, target, stderr) else 1


def pwd(stdout: TextIO, stderr: TextIO) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        stderr.write(
            "minishell: pwd: error retrieving current directory : "
            "getcwd: cannot access parent directories :"
            "No such file or directory\n"
        )
        return 1
    stdout.write(f"{cwd}\n")
    return 0


def env_command(args: Sequence[str], env: Environment, stdout: TextIO, stderr: TextIO) -> int:
    """Print every variable that has a value; any argument is an error."""
    if args:
        stderr.write(f"minishell: env: {args[0]}: No such file or directory\n")
        return 127
    for key, value in env.items():
        if value is not None:
            stdout.write(f"{key}={value}\n")
    return 0


def exit_command(args: Sequence[str], stdout: TextIO, stderr: TextIO) -> tuple[int, bool]:
    """Work out the status for ``exit``.

    Returns the status and whether the shell should actually terminate.
    """
    stdout.write("exit\n")
    if not args:
        return 0, True
    first = args[0]
    if _EXIT_ARGUMENT.fullmatch(first) is None:
        stderr.write(f"minishell: exit: {first}: numeric argument required\n")
        return 2, True
    if len(args) > 2:
        stderr.write(f"minishell: exit: {first}: too many arguments\n")
        return 1, False
    try:
        value = parse_long(first)
    except OverflowError:
        stderr.write(f"minishell: exit: {first}: numeric argument required\n")
        return 2, True
    return value & 0xFF, True


def export(args: Sequence[str], env: Environment, stdout: TextIO) -> int:
    """List the environment, or add and update variables."""
    if not args:
        for key, value in env.items():
            if value is None:
                stdout.write(f"export {key}\n")
            else:
                stdout.write(f'export {key}="{value}"\n')
        return 0
    status = 0
    for arg in args:
        if not is_valid_identifier(arg):
            stdout.write(f"minishell: export: '{arg}': not a valid identifier\n")
            status = 1
            continue
        env.add_entry(arg)
    return status


def unset(args: Sequence[str], env: Environment) -> int:
    """Remove the named variables; invalid or unknown names are ignored."""
    for arg in args:
        if is_valid_identifier(arg) and arg in env:
            env.remove(arg)
    return 0