"""Splitting of a command line into tokens."""

from __future__ import annotations

from minishellpy.models import QuoteState, Token, TokenType

_SPACES = frozenset("\t\n\v\f\r ")
_SPECIALS = frozenset("|<>")
_BACKSLASH_SPECIALS = frozenset("\\\"$\n'")
_OPERATORS = (
    ("|", TokenType.PIPE),
    ("<<", TokenType.HEREDOC),
    (">>", TokenType.APPEND),
    ("<", TokenType.REDIRECT_IN),
    (">", TokenType.REDIRECT_OUT),
)


class UnmatchedQuoteError(ValueError):
    """Raised when a line holds an odd number of single or double quotes."""

    def __init__(self) -> None:
        super().__init__("minishell: error quote unmatched")


def is_space(c: str) -> bool:
    """Return True for ASCII whitespace characters."""
    return c in _SPACES and c != ""


def is_special_char(c: str) -> bool:
    """Return True for ``|``, ``<`` and ``>``."""
    return c in _SPECIALS and c != ""


def is_backslash_special(c: str) -> bool:
    """Return True for characters a backslash may escape inside double quotes."""
    return c in _BACKSLASH_SPECIALS and c != ""


def is_name_char(c: str) -> bool:
    """Return True for characters allowed in a variable name."""
    return len(c) == 1 and c.isascii() and (c.isalnum() or c == "_")


def check_quotes(line: str) -> None:
    """Raise UnmatchedQuoteError unless both quote kinds occur an even number of times."""
    if line.count('"') % 2 or line.count("'") % 2:
        raise UnmatchedQuoteError()


def _word_length(line: str, start: int) -> int:
    quote = ""
    pos = start
    while pos < len(line):
        c = line[pos]
        if c in "'\"" and not quote:
            quote = c
        elif quote and c == quote:
            quote = ""
        elif not quote and (is_space(c) or is_special_char(c)):
            break
        pos += 1
    return pos - start


def tokenize(line: str) -> list[Token]:
    """Split *line* into word and operator tokens."""
    check_quotes(line)
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        if is_space(line[pos]):
            pos += 1
            continue
        for text, kind in _OPERATORS:
            if line.startswith(text, pos):
                tokens.append(Token(kind, text))
                pos += len(text)
                break
        else:
            length = _word_length(line, pos)
            tokens.append(Token(TokenType.WORD, line[pos : pos + length]))
            pos += length
    return tokens


def mark_redirect_targets(tokens: list[Token]) -> list[Token]:
    """Retype each word that follows a redirection operator as its target."""
    for current, following in zip(tokens, tokens[1:]):
        if current.type.is_redirection() and following.type is TokenType.WORD:
            following.type = TokenType.REDIRECT_TARGET
    return tokens


def detect_quote_state(value: str) -> QuoteState:
    """Classify a word by its first and last characters."""
    if not value:
        return QuoteState.NO_QUOTE
    if value[0] == '"' and value[-1] == '"':
        return QuoteState.DOUBLE_QUOTE
    if value[0] == "'" and value[-1] == "'":
        return QuoteState.SINGLE_QUOTE
    return QuoteState.NO_QUOTE


def assign_quote_states(tokens: list[Token]) -> list[Token]:
    """Set the quote state of every word token."""
    for token in tokens:
        if token.type is TokenType.WORD:
            token.state = detect_quote_state(token.value)
    return tokens