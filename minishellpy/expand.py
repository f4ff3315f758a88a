"""Expansion of ``$NAME`` and ``$?`` inside word tokens."""

from __future__ import annotations

from minishellpy.environment import Environment
from minishellpy.lexer import is_name_char
from minishellpy.models import Token, TokenType


def is_expandable(text: str) -> bool:
    """Return True if *text*, starting at a ``$``, begins a variable reference."""
    if len(text) < 2 or text[1] in " '\"":
        return False
    if text.startswith("$?"):
        return True
    first = text[1]
    return first == "_" or (first.isascii() and first.isalpha())


def mark_expansions(tokens: list[Token]) -> list[Token]:
    """Flag tokens whose first ``$`` starts an expandable reference."""
    for token in tokens:
        pos = token.value.find("$")
        if pos >= 0:
            token.need_expansion = is_expandable(token.value[pos:])
    return tokens


def variable_name_length(text: str) -> int:
    """Length of the ``$`` plus the variable name that follows it."""
    length = 1
    while length < len(text) and is_name_char(text[length]):
        length += 1
    return length


def _lookup(env: Environment, name: str) -> str:
    return env.get(name) or ""


def expand_word(text: str, env: Environment, exit_status: int) -> str:
    """Expand variables outside single quotes, dropping the quotes that pair up."""
    result: list[str] = []
    quote = ""
    pos = 0
    size = len(text)
    while pos < size:
        c = text[pos]
        if c in "'\"" and (pos == 0 or text[pos - 1] != "\\"):
            if not quote:
                quote = c
            elif quote == c:
                quote = ""
            else:
                result.append(c)
            pos += 1
            if pos >= size:
                break
        c = text[pos]
        escaped = pos > 0 and text[pos - 1] == "\\"
        if c == "$" and not escaped and pos + 1 < size and quote != "'":
            if text.startswith("$?", pos):
                result.append(str(exit_status))
                pos += 2
            else:
                length = variable_name_length(text[pos:])
                result.append(_lookup(env, text[pos + 1 : pos + length]))
                pos += length
        else:
            result.append(c)
            pos += 1
    return "".join(result)


def expand_tokens(tokens: list[Token], env: Environment, exit_status: int) -> list[Token]:
    """Expand every flagged word token in place."""
    for token in tokens:
        if token.type is TokenType.WORD and token.need_expansion:
            token.value = expand_word(token.value, env, exit_status)
    return tokens