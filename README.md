# minishellpy

A small interactive shell. It reads command lines at a `minishell> ` prompt and
supports:

- pipelines joined with `|`
- redirections `<`, `>`, `>>` and here-documents `<<`
- single and double quotes, backslash escapes
- expansion of `$NAME` and `$?` (not inside single quotes)
- the builtins `echo` (with `-n`), `cd` (with `~`, `--` and `-`), `pwd`,
  `export`, `unset`, `env` and `exit`

Other commands are looked up through `PATH` (or used as given when the name is
itself executable) and run as child processes, with the shell's variables as
their environment.

## Installation

```
pip install .
```

## Running the shell

```
minishellpy
```

The shell takes no arguments; given any, it exits with status 1. Press Ctrl-D
at the prompt to leave, or type `exit` with an optional status:

```
minishell> export GREETING=hello
minishell> echo "$GREETING world" | tr a-z A-Z
HELLO WORLD
minishell> cat << EOF > notes.txt
> first line
> EOF
minishell> exit 3
exit
```

Ctrl-C at the prompt abandons the line and sets `$?` to 130; Ctrl-\ is ignored
there. A child killed by a signal gives the status 128 plus the signal number.

Statuses the shell sets itself:

- `2` for a syntax error or unmatched quote (the message is printed and the
  line is not run)
- `127` when a command is not found
- `130` when a here-document is interrupted with Ctrl-C

## Using it from Python

`minishellpy.shell.Shell` takes an environment as a list of `KEY=VALUE`
strings (the process environment when omitted), the streams to write to, and a
function that reads here-document lines (`input` by default):

```python
import io
from minishellpy.shell import Shell

out = io.StringIO()
shell = Shell(["HOME=/tmp", "PATH=/usr/bin:/bin"], stdout=out)
shell.run_line("echo hello")
print(out.getvalue())   # "hello\n"
```

`Shell.run_line` returns the new status and raises
`minishellpy.dispatch.ShellExit` when the line runs `exit`; `Shell.loop` reads
lines until end of input or `exit` and returns the exit code.

The parsing stages are available on their own. `minishellpy.lexer.tokenize`
splits a line into `Token` objects, and `minishellpy.parser.parse_line` turns a
line into a list of `Command` objects:

```python
from minishellpy.environment import Environment
from minishellpy.parser import parse_line

env = Environment.from_envp(["USER=alice"])
commands = parse_line('echo "$USER" > out.txt', env, 0)
commands[0].args          # ["echo", "alice"]
commands[0].redirections  # [Redirection(type=TokenType.REDIRECT_OUT, file="out.txt")]
```

Malformed lines raise `minishellpy.lexer.UnmatchedQuoteError` or
`minishellpy.syntax.ShellSyntaxError`. The commands can then be run with
`minishellpy.executor.Executor(env).execute(commands)`.

## What it does not do

- No `;`, `&&`, `||`, subshells, background jobs or job control.
- No filename wildcards and no `~` expansion outside `cd`.
- No command history is saved between sessions.
- Builtins inside a pipeline run on a copy of the environment, so `cd`,
  `export` and `unset` there have no lasting effect, and `exit` there does not
  end the shell.

## Running the tests

```
pip install .[test]
pytest
```