"""Grouping of tokens into the commands of a pipeline."""

from __future__ import annotations

from itertools import takewhile

from minishellpy.models import Command, Redirection, Token, TokenType


def collect_redirections(tokens: list[Token]) -> list[Redirection]:
    """Return the redirections found before the first pipe, in order."""
    segment = list(takewhile(lambda t: t.type is not TokenType.PIPE, tokens))
    return [
        Redirection(current.type, following.value)
        for current, following in zip(segment, segment[1:])
        if current.type.is_redirection() and following.type is TokenType.REDIRECT_TARGET
    ]


def build_commands(tokens: list[Token]) -> list[Command]:
    """Split tokens at pipes into commands with arguments and redirections."""
    commands: list[Command] = []
    start = 0
    while start < len(tokens):
        end = start
        while end < len(tokens) and tokens[end].type is not TokenType.PIPE:
            end += 1
        segment = tokens[start:end]
        command = Command(
            args=[t.value for t in segment if t.type is TokenType.WORD and t.value],
            redirections=collect_redirections(segment),
        )
        if end < len(tokens):
            command.is_pipe = True
            end += 1
        commands.append(command)
        start = end
    return commands