"""Core data types shared by the lexer, parser and executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenType(Enum):
    """Kind of a lexical token."""

    WORD = 0
    PIPE = 1
    REDIRECT_IN = 2
    REDIRECT_OUT = 3
    APPEND = 4
    HEREDOC = 5
    REDIRECT_TARGET = 6

    def is_redirection(self) -> bool:
        """Return True for the four redirection operators."""
        return self in _REDIRECTIONS


_REDIRECTIONS = frozenset(
    {
        TokenType.REDIRECT_IN,
        TokenType.REDIRECT_OUT,
        TokenType.APPEND,
        TokenType.HEREDOC,
    }
)


class QuoteState(Enum):
    """How a word token is enclosed in quotes."""

    NO_QUOTE = 0
    SINGLE_QUOTE = 1
    DOUBLE_QUOTE = 2


@dataclass
class Token:
    """A single token produced by the lexer."""

    type: TokenType
    value: str
    need_expansion: bool = False
    state: QuoteState = QuoteState.NO_QUOTE


@dataclass
class Redirection:
    """A redirection attached to a command."""

    type: TokenType
    file: str


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)
    is_pipe: bool = False