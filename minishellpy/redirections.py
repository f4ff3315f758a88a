"""Here-documents and file redirections of a single command."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TextIO

from minishellpy.models import Command, TokenType

Reader = Callable[[str], "str | None"]

HEREDOC_PROMPT = "> "


class HeredocInterrupted(Exception):
    """Raised when reading a here-document is interrupted by the user."""

    status = 130

    def __init__(self) -> None:
        super().__init__("here-document interrupted")


@dataclass
class StreamSet:
    """Streams a command uses instead of the shell's own."""

    stdin: TextIO | None = None
    stdout: TextIO | None = None
    heredoc: str | None = None

    def close(self) -> None:
        """Close every file this set opened."""
        for stream in (self.stdin, self.stdout):
            if stream is not None:
                stream.close()
        self.stdin = None
        self.stdout = None

    def __enter__(self) -> StreamSet:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _replace_stdin(self, stream: TextIO | None, heredoc: str | None) -> None:
        if self.stdin is not None:
            self.stdin.close()
        self.stdin = stream
        self.heredoc = heredoc

    def _replace_stdout(self, stream: TextIO) -> None:
        if self.stdout is not None:
            self.stdout.close()
        self.stdout = stream


def read_heredoc(delimiter: str, reader: Reader, stderr: TextIO) -> str:
    """Read lines until *delimiter* and return them, each ended by a newline.

    *reader* is called with the prompt and returns None (or raises EOFError)
    at end of input; KeyboardInterrupt becomes HeredocInterrupted.
    """
    lines: list[str] = []
    while True:
        try:
            line = reader(HEREDOC_PROMPT)
        except EOFError:
            line = None
        except KeyboardInterrupt:
            raise HeredocInterrupted() from None
        if line is None:
            stderr.write("minishell: warning: ")
            stderr.write(
                f"here-document delimited by end-of-file (wanted '{delimiter}')\n"
            )
            break
        if line == delimiter:
            break
        lines.append(f"{line}\n")
    return "".join(lines)


def collect_heredocs(
    commands: Sequence[Command], reader: Reader, stderr: TextIO
) -> list[str | None]:
    """Read every here-document, in order; each command keeps the body of its last one."""
    bodies: list[str | None] = []
    for command in commands:
        body: str | None = None
        for redirection in command.redirections:
            if redirection.type is TokenType.HEREDOC:
                body = read_heredoc(redirection.file, reader, stderr)
        bodies.append(body)
    return bodies


def _open_output(path: str, append: bool) -> TextIO:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    fd = os.open(path, flags, 0o644)
    return os.fdopen(fd, "a" if append else "w", encoding="utf-8")


def open_redirections(command: Command, heredocs: str | None, stderr: TextIO) -> StreamSet:
    """Apply the command's redirections in order and return the resulting streams.

    *heredocs* is the here-document body collected for this command. A file
    that cannot be opened is reported and leaves the previous stream in place.
    """
    streams = StreamSet()
    for redirection in command.redirections:
        kind = redirection.type
        try:
            if kind in (TokenType.REDIRECT_OUT, TokenType.APPEND):
                streams._replace_stdout(
                    _open_output(redirection.file, kind is TokenType.APPEND)
                )
            elif kind is TokenType.REDIRECT_IN:
                streams._replace_stdin(open(redirection.file, encoding="utf-8"), None)
            elif kind is TokenType.HEREDOC:
                streams._replace_stdin(None, heredocs if heredocs is not None else "")
        except OSError as exc:
            stderr.write(f"{exc.strerror}\n")
    return streams