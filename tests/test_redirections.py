import io

import pytest

from minishellpy.models import Command, Redirection, TokenType
from minishellpy.redirections import (
    HeredocInterrupted,
    StreamSet,
    collect_heredocs,
    open_redirections,
    read_heredoc,
)


def make_reader(lines, prompts=None):
    it = iter(lines)

    def reader(prompt):
        if prompts is not None:
            prompts.append(prompt)
        return next(it, None)

    return reader


def test_read_heredoc_until_delimiter():
    prompts = []
    stderr = io.StringIO()
    body = read_heredoc("EOF", make_reader(["a", "b", "EOF", "c"], prompts), stderr)
    assert body == "a\nb\n"
    assert prompts == ["> ", "> ", "> "]
    assert stderr.getvalue() == ""


def test_read_heredoc_end_of_input_warns():
    stderr = io.StringIO()
    body = read_heredoc("END", make_reader(["line"]), stderr)
    assert body == "line\n"
    assert "here-document delimited by end-of-file (wanted 'END')" in stderr.getvalue()


def test_read_heredoc_eof_error_is_end_of_input():
    def reader(prompt):
        raise EOFError

    stderr = io.StringIO()
    assert read_heredoc("X", reader, stderr) == ""
    assert stderr.getvalue().startswith("minishell: warning: ")


def test_read_heredoc_interrupt():
    def reader(prompt):
        raise KeyboardInterrupt

    with pytest.raises(HeredocInterrupted) as info:
        read_heredoc("X", reader, io.StringIO())
    assert info.value.status == 130


def test_collect_heredocs_last_one_wins():
    commands = [
        Command(
            args=["cat"],
            redirections=[
                Redirection(TokenType.HEREDOC, "A"),
                Redirection(TokenType.HEREDOC, "B"),
            ],
        ),
        Command(args=["wc"]),
        Command(args=["cat"], redirections=[Redirection(TokenType.HEREDOC, "C")]),
    ]
    reader = make_reader(["one", "A", "two", "B", "three", "C"])
    bodies = collect_heredocs(commands, reader, io.StringIO())
    assert bodies == ["two\n", None, "three\n"]


def test_output_truncates(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old content")
    command = Command(["echo"], [Redirection(TokenType.REDIRECT_OUT, str(target))])
    with open_redirections(command, None, io.StringIO()) as streams:
        streams.stdout.write("new")
    assert target.read_text() == "new"


def test_append_keeps_content(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old")
    command = Command(["echo"], [Redirection(TokenType.APPEND, str(target))])
    with open_redirections(command, None, io.StringIO()) as streams:
        streams.stdout.write("+new")
    assert target.read_text() == "old+new"


def test_output_file_mode(tmp_path):
    target = tmp_path / "created.txt"
    command = Command(["echo"], [Redirection(TokenType.REDIRECT_OUT, str(target))])
    open_redirections(command, None, io.StringIO()).close()
    assert target.exists()
    assert target.stat().st_mode & 0o022 == 0


def test_input_file(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("data\n")
    command = Command(["cat"], [Redirection(TokenType.REDIRECT_IN, str(source))])
    with open_redirections(command, None, io.StringIO()) as streams:
        assert streams.stdin.read() == "data\n"
        assert streams.heredoc is None


def test_missing_input_reports_and_continues(tmp_path):
    stderr = io.StringIO()
    target = tmp_path / "out.txt"
    command = Command(
        ["cat"],
        [
            Redirection(TokenType.REDIRECT_IN, str(tmp_path / "missing")),
            Redirection(TokenType.REDIRECT_OUT, str(target)),
        ],
    )
    streams = open_redirections(command, None, stderr)
    assert stderr.getvalue() == "No such file or directory\n"
    assert streams.stdin is None
    assert streams.stdout is not None
    streams.close()
    assert target.exists()


def test_heredoc_replaces_input_file(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("file")
    command = Command(
        ["cat"],
        [
            Redirection(TokenType.REDIRECT_IN, str(source)),
            Redirection(TokenType.HEREDOC, "EOF"),
        ],
    )
    streams = open_redirections(command, "body\n", io.StringIO())
    assert streams.stdin is None
    assert streams.heredoc == "body\n"


def test_later_output_wins_and_earlier_is_created(tmp_path):
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    command = Command(
        ["echo"],
        [
            Redirection(TokenType.REDIRECT_OUT, str(first)),
            Redirection(TokenType.REDIRECT_OUT, str(second)),
        ],
    )
    with open_redirections(command, None, io.StringIO()) as streams:
        streams.stdout.write("x")
    assert first.read_text() == ""
    assert second.read_text() == "x"


def test_close_clears_streams(tmp_path):
    target = tmp_path / "out.txt"
    command = Command(["echo"], [Redirection(TokenType.REDIRECT_OUT, str(target))])
    streams = open_redirections(command, None, io.StringIO())
    handle = streams.stdout
    streams.close()
    assert handle.closed
    assert streams.stdout is None


def test_no_redirections_gives_empty_set():
    streams = open_redirections(Command(["ls"]), None, io.StringIO())
    assert streams == StreamSet()