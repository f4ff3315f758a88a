"""Running parsed commands: builtins in the shell, programs as child processes."""

from __future__ import annotations

import io
import os
import signal
import subprocess
import sys
import tempfile
import threading
from collections.abc import Iterator, Sequence
from contextlib import ExitStack, contextmanager
from typing import IO, Any, TextIO

from minishellpy.dispatch import ShellExit, is_builtin, run_builtin
from minishellpy.environment import Environment
from minishellpy.models import Command
from minishellpy.paths import find_executable
from minishellpy.redirections import (
    HeredocInterrupted,
    Reader,
    StreamSet,
    collect_heredocs,
    open_redirections,
)
from minishellpy.signals import exit_status_from_returncode

NOT_FOUND_STATUS = 127


def _reset_child_signals() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_DFL)


_PREEXEC = _reset_child_signals if os.name == "posix" else None


def _fileno(stream: Any) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _flush(stream: Any) -> None:
    try:
        stream.flush()
    except (AttributeError, ValueError, OSError):
        pass


def _close_fd(fd: Any) -> None:
    if isinstance(fd, int) and fd >= 0:
        os.close(fd)


@contextmanager
def _sink(stream: TextIO) -> Iterator[int | IO[bytes]]:
    """Yield something a child can write to that ends up in *stream*."""
    fd = _fileno(stream)
    if fd is not None:
        _flush(stream)
        yield fd
        return
    with tempfile.TemporaryFile() as buffer:
        yield buffer
        buffer.seek(0)
        stream.write(buffer.read().decode("utf-8", "replace"))


@contextmanager
def _interrupts_ignored() -> Iterator[None]:
    """Ignore Ctrl-C in the shell while children run, where that is possible."""
    try:
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
        installed = True
    except ValueError:
        previous, installed = None, False
    try:
        yield
    finally:
        if installed and previous is not None:
            signal.signal(signal.SIGINT, previous)


def _feed(data: bytes) -> int:
    """Return the read end of a pipe that delivers *data* and then end of file."""
    read_fd, write_fd = os.pipe()

    def pump() -> None:
        try:
            with os.fdopen(write_fd, "wb") as pipe:
                pipe.write(data)
        except BrokenPipeError:
            pass

    threading.Thread(target=pump, daemon=True).start()
    return read_fd


class Executor:
    """Runs the commands of one parsed line against a shared environment."""

    def __init__(
        self,
        env: Environment,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        reader: Reader | None = None,
    ) -> None:
        self.env = env
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.reader = reader if reader is not None else input
        self.status = 0

    def execute(self, commands: Sequence[Command]) -> int:
        """Run a single command or a pipeline and return its status.

        ShellExit from the ``exit`` builtin of a lone command propagates.
        """
        if not commands:
            return self.status
        try:
            heredocs = collect_heredocs(commands, self.reader, self.stderr)
        except HeredocInterrupted as exc:
            self.status = exc.status
            return self.status
        if len(commands) == 1:
            with open_redirections(commands[0], heredocs[0], self.stderr) as streams:
                self.status = self.run_single(commands[0], streams)
        else:
            self.status = self.run_pipeline(commands, heredocs)
        return self.status

    def _child_environment(self) -> dict[str, str]:
        return {key: value for key, value in self.env.items() if value is not None}

    def _spawn(
        self, args: Sequence[str], program: str, stdin: Any, stdout: Any, stderr: Any
    ) -> subprocess.Popen | int:
        try:
            return subprocess.Popen(
                list(args),
                executable=program,
                stdin=stdin,
                stdout=stdout,
                stderr=stderr,
                env=self._child_environment(),
                preexec_fn=_PREEXEC,
            )
        except OSError as exc:
            self.stderr.write(f"execve: {exc.strerror}\n")
            return NOT_FOUND_STATUS

    def run_single(self, command: Command, streams: StreamSet) -> int:
        """Run one command with its redirections already applied in *streams*."""
        args = command.args
        if not args:
            return 0
        target = streams.stdout if streams.stdout is not None else self.stdout
        if is_builtin(args[0]):
            return run_builtin(args, self.env, target, self.stderr)
        program = find_executable(args[0], self.env)
        if program is None:
            self.stdout.write(f"bash: {args[0]}: command not found\n")
            return NOT_FOUND_STATUS
        if streams.heredoc is not None:
            stdin: Any = _feed(streams.heredoc.encode("utf-8"))
        else:
            stdin = streams.stdin
        with _sink(self.stderr) as err, _sink(target) as out, _interrupts_ignored():
            try:
                result = self._spawn(args, program, stdin, out, err)
            finally:
                _close_fd(stdin)
            if isinstance(result, int):
                return result
            returncode = result.wait()
        return exit_status_from_returncode(returncode, self.stdout)

    def run_pipeline(
        self, commands: Sequence[Command], heredocs: Sequence[str | None]
    ) -> int:
        """Run commands connected by pipes and return the status of the last one.

        Builtins run on a copy of the environment, so their changes are lost,
        and ``exit`` only ends its own stage.
        """
        last = len(commands) - 1
        results: list[subprocess.Popen | int] = []
        upstream: Any = None
        with ExitStack() as stack:
            err = stack.enter_context(_sink(self.stderr))
            out = stack.enter_context(_sink(self.stdout))
            stack.enter_context(_interrupts_ignored())
            try:
                for index, (command, body) in enumerate(zip(commands, heredocs)):
                    with open_redirections(command, body, self.stderr) as streams:
                        final_out = out if index == last else None
                        result, upstream = self._run_stage(
                            command, streams, upstream, final_out, err
                        )
                    results.append(result)
            finally:
                _close_fd(upstream)
            for result in results:
                if not isinstance(result, int):
                    result.wait()
        final = results[-1]
        if isinstance(final, int):
            return final
        return exit_status_from_returncode(final.returncode, self.stdout)

    def _run_stage(
        self,
        command: Command,
        streams: StreamSet,
        upstream: Any,
        final_out: Any,
        err: Any,
    ) -> tuple[subprocess.Popen | int, Any]:
        if streams.heredoc is not None:
            _close_fd(upstream)
            stdin: Any = _feed(streams.heredoc.encode("utf-8"))
        elif streams.stdin is not None:
            _close_fd(upstream)
            stdin = streams.stdin
        else:
            stdin = upstream
        try:
            return self._launch_stage(command, streams, stdin, final_out, err)
        finally:
            _close_fd(stdin)

    def _launch_stage(
        self,
        command: Command,
        streams: StreamSet,
        stdin: Any,
        final_out: Any,
        err: Any,
    ) -> tuple[subprocess.Popen | int, Any]:
        args = command.args
        piped = final_out is None and streams.stdout is None
        if not args:
            return 0, subprocess.DEVNULL
        if is_builtin(args[0]):
            buffer = io.StringIO()
            if streams.stdout is not None:
                target: TextIO = streams.stdout
            else:
                target = buffer if piped else self.stdout
            try:
                status = run_builtin(args, self.env.copy(), target, self.stderr)
            except ShellExit as exc:
                status = exc.status
            if piped:
                return status, _feed(buffer.getvalue().encode("utf-8"))
            return status, subprocess.DEVNULL
        program = find_executable(args[0], self.env)
        if program is None:
            return NOT_FOUND_STATUS, subprocess.DEVNULL
        read_fd = write_fd = -1
        if streams.stdout is not None:
            out: Any = streams.stdout
        elif final_out is not None:
            out = final_out
        else:
            read_fd, write_fd = os.pipe()
            out = write_fd
        try:
            result = self._spawn(args, program, stdin, out, err)
        finally:
            _close_fd(write_fd)
        if not piped:
            return result, subprocess.DEVNULL
        if isinstance(result, int):
            os.close(read_fd)
            return result, subprocess.DEVNULL
        return result, read_fd