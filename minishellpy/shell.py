"""Interactive read-eval loop of the shell."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from minishellpy.dispatch import ShellExit
from minishellpy.environment import Environment
from minishellpy.executor import Executor
from minishellpy.lexer import UnmatchedQuoteError
from minishellpy.parser import parse_line
from minishellpy.redirections import Reader
from minishellpy.signals import clear_interrupt, install_prompt_handlers, interrupted
from minishellpy.syntax import ShellSyntaxError

PROMPT = "minishell> "
SYNTAX_ERROR_STATUS = 2
INTERRUPTED_STATUS = 130


class Shell:
    """A shell session: environment, last status and the command executor."""

    def __init__(
        self,
        envp: Iterable[str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        reader: Reader | None = None,
    ) -> None:
        if envp is None:
            envp = [f"{key}={value}" for key, value in os.environ.items()]
        self.env = Environment.from_envp(envp)
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.reader = reader if reader is not None else input
        self.status = 0
        self.executor = Executor(self.env, self.stdout, self.stderr, self.reader)

    def run_line(self, line: str) -> int:
        """Parse and run one line, returning the new status.

        Raises ShellExit when the line ends the shell.
        """
        if not line:
            return self.status
        try:
            commands = parse_line(line, self.env, self.status)
        except (UnmatchedQuoteError, ShellSyntaxError) as exc:
            self.stdout.write(f"{exc}\n")
            self.status = SYNTAX_ERROR_STATUS
            return self.status
        if not commands:
            return self.status
        self.status = self.executor.execute(commands)
        return self.status

    def loop(self) -> int:
        """Read and run lines until end of input or ``exit``; return the exit code."""
        while True:
            try:
                self.stdout.flush()
            except (AttributeError, ValueError, OSError):
                pass
            try:
                line = self.reader(PROMPT)
            except EOFError:
                line = None
            except KeyboardInterrupt:
                clear_interrupt()
                self.status = INTERRUPTED_STATUS
                continue
            if line is None:
                self.stdout.write("exit\n")
                return 0
            if interrupted():
                clear_interrupt()
                self.status = INTERRUPTED_STATUS
            try:
                self.run_line(line)
            except ShellExit as exc:
                return exc.status


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive session; any argument is refused."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        return 1
    try:
        import readline  # noqa: F401  (enables line editing for input())
    except ImportError:
        pass
    install_prompt_handlers()
    return Shell().loop()