"""Full parsing of one input line into commands."""

from __future__ import annotations

from minishellpy.commands import build_commands
from minishellpy.environment import Environment
from minishellpy.expand import expand_tokens, mark_expansions
from minishellpy.lexer import assign_quote_states, mark_redirect_targets, tokenize
from minishellpy.models import Command, Token
from minishellpy.quotes import trim_words
from minishellpy.syntax import validate


def strip_leading_dollar(tokens: list[Token]) -> list[Token]:
    """Drop a ``$`` that directly precedes a quote at the start of a token."""
    for token in tokens:
        if token.value[:1] == "$" and token.value[1:2] in ("'", '"') and len(token.value) > 1:
            token.value = token.value[1:]
    return tokens


def parse_line(line: str, env: Environment, exit_status: int) -> list[Command]:
    """Parse *line* into commands.

    Raises UnmatchedQuoteError or ShellSyntaxError on malformed input.
    """
    tokens = mark_redirect_targets(tokenize(line))
    if not tokens:
        return []
    validate(tokens)
    assign_quote_states(tokens)
    mark_expansions(tokens)
    strip_leading_dollar(tokens)
    expand_tokens(tokens, env, exit_status)
    trim_words(tokens)
    return build_commands(tokens)