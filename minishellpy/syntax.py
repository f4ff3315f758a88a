"""Syntax checks on a token stream before it is turned into commands."""

from __future__ import annotations

from minishellpy.models import Token, TokenType

_PIPE_NEIGHBOURS = frozenset({TokenType.WORD, TokenType.REDIRECT_TARGET})


class ShellSyntaxError(ValueError):
    """Raised when a line holds a misplaced pipe or redirection operator."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"minishell: syntax error near unexpected token `{token}'")


def _is_redirection(token: Token | None) -> bool:
    return token is not None and token.type.is_redirection()


def _check_pipe(prev: Token | None, nxt: Token | None) -> None:
    if prev is None or nxt is None or prev.type not in _PIPE_NEIGHBOURS:
        raise ShellSyntaxError("|")


def _check_simple(token: Token, prev: Token | None, nxt: Token | None) -> None:
    if prev is None and nxt is None:
        raise ShellSyntaxError("newline")
    if token.type is TokenType.REDIRECT_IN and _is_redirection(prev):
        raise ShellSyntaxError("<")
    if (
        prev is not None
        and prev.type is TokenType.REDIRECT_IN
        and token.type is TokenType.REDIRECT_OUT
        and nxt is None
    ):
        raise ShellSyntaxError("newline")
    if token.type is TokenType.REDIRECT_OUT and _is_redirection(prev):
        raise ShellSyntaxError(">")
    if nxt is None:
        raise ShellSyntaxError("newline")


def _check_double(token: Token, prev: Token | None, nxt: Token | None) -> None:
    if nxt is None:
        raise ShellSyntaxError("newline")
    if token.type is TokenType.APPEND and _is_redirection(prev):
        raise ShellSyntaxError(">>")
    if token.type is TokenType.HEREDOC and _is_redirection(prev):
        raise ShellSyntaxError("<<")


def validate(tokens: list[Token]) -> list[Token]:
    """Return *tokens* unchanged, or raise ShellSyntaxError on the first bad operator."""
    previous: list[Token | None] = [None, *tokens[:-1]]
    following: list[Token | None] = [*tokens[1:], None]
    for prev, token, nxt in zip(previous, tokens, following):
        if token.type is TokenType.PIPE:
            _check_pipe(prev, nxt)
        elif token.type in (TokenType.REDIRECT_OUT, TokenType.REDIRECT_IN):
            _check_simple(token, prev, nxt)
        elif token.type in (TokenType.APPEND, TokenType.HEREDOC):
            _check_double(token, prev, nxt)
    return tokens