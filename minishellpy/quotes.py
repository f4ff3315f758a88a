"""Removal of quotes and backslashes from word tokens."""

from __future__ import annotations

from minishellpy.lexer import is_backslash_special
from minishellpy.models import QuoteState, Token, TokenType

_TRIMMED = frozenset({TokenType.WORD, TokenType.REDIRECT_TARGET})


def strip_quotes(text: str) -> str:
    """Drop quote characters that open or close a quoted section."""
    out: list[str] = []
    in_single = in_double = False
    for c in text:
        if c == "'" and not in_double:
            in_single = not in_single
            continue
        if c == '"' and not in_single:
            in_double = not in_double
            continue
        out.append(c)
    return "".join(out)


def remove_backslashes(text: str, state: QuoteState) -> str:
    """Resolve backslash escapes according to how the word was quoted."""
    if state is QuoteState.SINGLE_QUOTE:
        return text
    out: list[str] = []
    pos = 0
    while pos < len(text):
        c = text[pos]
        nxt = text[pos + 1 : pos + 2]
        if c == "\\" and nxt and (state is QuoteState.NO_QUOTE or is_backslash_special(nxt)):
            out.append(nxt)
            pos += 2
        else:
            out.append(c)
            pos += 1
    return "".join(out)


def trim_words(tokens: list[Token]) -> list[Token]:
    """Strip quotes from unexpanded words, then resolve backslashes."""
    for token in tokens:
        if token.type not in _TRIMMED:
            continue
        if not token.need_expansion:
            token.value = strip_quotes(token.value)
        if "\\" in token.value:
            token.value = remove_backslashes(token.value, token.state)
    return tokens