import pytest

from minishellpy.environment import Environment
from minishellpy.expand import (
    expand_tokens,
    expand_word,
    is_expandable,
    mark_expansions,
    variable_name_length,
)
from minishellpy.lexer import mark_redirect_targets, tokenize
from minishellpy.models import TokenType


@pytest.fixture
def env():
    return Environment.from_envp(["HOME=/home/user", "USER=bob", "BARE"])


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$HOME", True),
        ("$?", True),
        ("$_x", True),
        ("$", False),
        ("$ x", False),
        ("$'a'", False),
        ('$"a"', False),
        ("$1", False),
        ("$-", False),
    ],
)
def test_is_expandable(text, expected):
    assert is_expandable(text) is expected


def test_variable_name_length_stops_at_non_name_char():
    assert variable_name_length("$HOME/rest") == len("$HOME")
    assert variable_name_length("$_a1 x") == len("$_a1")
    assert variable_name_length("$") == 1


def test_expand_plain_variable(env):
    assert expand_word("$HOME", env, 0) == "/home/user"


def test_expand_exit_status(env):
    assert expand_word("$?", env, 42) == str(42)


def test_undefined_and_bare_variables_are_empty(env):
    assert expand_word("$UNDEFINED", env, 0) == ""
    assert expand_word("$BARE", env, 0) == ""


def test_single_quotes_block_expansion(env):
    assert expand_word("'$HOME'", env, 0) == "$HOME"


def test_double_quotes_allow_expansion(env):
    assert expand_word('"$HOME"', env, 0) == "/home/user"


def test_escaped_dollar_is_kept(env):
    assert expand_word("\\$HOME", env, 0) == "\\$HOME"


def test_variable_followed_by_text(env):
    assert expand_word("$USER-x", env, 0) == "bob" + "-x"


def test_lone_trailing_dollar_is_kept(env):
    assert expand_word("a$", env, 0) == "a$"


def test_mark_expansions_uses_first_dollar():
    tokens = mark_expansions(tokenize("echo $HOME '$' $1"))
    assert [t.need_expansion for t in tokens] == [False, True, False, False]


def test_expand_tokens_skips_redirect_targets(env):
    tokens = mark_redirect_targets(tokenize("echo $HOME > $HOME"))
    mark_expansions(tokens)
    expand_tokens(tokens, env, 0)
    assert tokens[1].value == "/home/user"
    assert tokens[3].type is TokenType.REDIRECT_TARGET
    assert tokens[3].value == "$HOME"


def test_expand_tokens_leaves_unflagged_words(env):
    tokens = tokenize("echo plain")
    expand_tokens(tokens, env, 0)
    assert [t.value for t in tokens] == ["echo", "plain"]