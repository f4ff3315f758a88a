import pytest

from minishellpy.models import Command, QuoteState, Redirection, Token, TokenType


@pytest.mark.parametrize(
    "kind",
    [TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT, TokenType.APPEND, TokenType.HEREDOC],
)
def test_redirection_types(kind):
    assert kind.is_redirection() is True


@pytest.mark.parametrize("kind", [TokenType.WORD, TokenType.PIPE, TokenType.REDIRECT_TARGET])
def test_non_redirection_types(kind):
    assert kind.is_redirection() is False


def test_token_type_order_matches_operator_numbering():
    ordered = sorted(TokenType, key=lambda t: t.value)
    assert ordered[0] is TokenType.WORD
    assert ordered[1] is TokenType.PIPE
    flags = [TokenType.is_redirection(kind) for kind in ordered]
    assert flags[:2] == [False, False]
    assert flags[2:6] == [True, True, True, True]
    assert not any(flags[6:])


def test_token_defaults():
    token = Token(TokenType.WORD, "ls")
    assert token.need_expansion is False
    assert token.state is QuoteState.NO_QUOTE
    assert token.value == "ls"


def test_command_defaults_are_independent():
    first = Command()
    second = Command()
    first.args.append("echo")
    first.redirections.append(Redirection(TokenType.REDIRECT_OUT, "out"))
    assert second.args == []
    assert second.redirections == []
    assert first.is_pipe is False


def test_redirection_fields():
    redir = Redirection(TokenType.HEREDOC, "EOF")
    assert redir.type is TokenType.HEREDOC
    assert redir.file == "EOF"