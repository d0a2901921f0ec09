# minishell

The parts of a small POSIX-style command shell, written in Python: an
environment store, `$VARIABLE` expansion of tokens, grouping of tokens into
a pipeline of commands, input/output redirections, here-documents, builtins
and an executor that runs the pipeline with real pipes and child processes.

## What is here

- `minishell.strutil`: `atoi`, `split_char`, `is_space`, `split_spaces`.
- `minishell.tokens`: `Token`, `TokenType`, `QuoteType` and
  `merge_joined_tokens`, which joins tokens whose spans touch.
- `minishell.environment`: `Environment`, an ordered list of `NAME=value`
  entries with `get`, `position`, `export`, `unset`, `change_value`,
  `visible_entries` and `sorted_exports`; plus `split_first` and
  `recover_full_entry`.
- `minishell.shell`: `Shell` (environment, last exit status `ecode`),
  `ShellExit`, `initial_environment` and `DebugLog`, an append-only log of
  input lines.
- `minishell.expand`: `expand_tokens`, `expand_word`, `dollar_expansion`,
  `should_expand`. `$NAME`, `$?` and a lone `$$` (the process id) are
  expanded; single-quoted tokens and here-document limiters are not.
- `minishell.commands`: `tokens_to_commands` builds `Command` objects and
  raises `ParseError` for a redirection without a target or a pipe that
  ends the line.
- `minishell.builtins`: `echo` (with `-n`), `echo_expand`, `cd`, `pwd`,
  `exit_builtin`, `export_command`, `env_command`.
- `minishell.signals`: `signal_message`, `install_prompt_handlers`,
  `reset_child_handlers`, `install_heredoc_handler`.
- `minishell.heredoc`: `expand_line`, `iter_lines`, `read_heredoc`,
  `collect_heredocs`.
- `minishell.redirect`: `find_path`, `is_relative_path`, `open_infiles`,
  `prepare_outfiles` and `RedirectError`, which carries the exit status.
- `minishell.executor`: `execute`, `run_builtin_in_parent`,
  `missing_file_message`.

## Examples

```python
from minishell.environment import Environment

env = Environment(["HOME=/tmp", "PATH=/usr/bin:/bin"])
env.export("GREETING=hello")
print(env.get("GREETING"))      # hello
env.unset("GREETING")
print(env.get("GREETING"))      # None
```

```python
from minishell.strutil import split_spaces, atoi

print(split_spaces("a  b"))     # ['a', ' ', ' ', 'b']
print(atoi("  42abc"))          # 42
```

Running a pipeline built from tokens:

```python
from minishell.shell import Shell
from minishell.tokens import Token, TokenType
from minishell.expand import expand_tokens
from minishell.commands import tokens_to_commands
from minishell.executor import execute

shell = Shell(["HOME=/tmp", "PATH=/usr/bin:/bin"])
tokens = [
    Token("echo", TokenType.CMD, start=0, end=4),
    Token("$HOME", TokenType.ARG, start=5, end=10),
]
execute(shell, tokens_to_commands(expand_tokens(shell, tokens)))  # prints /tmp
print(shell.ecode)              # 0
```

`unset`, `cd` and `exit` run in the shell itself when they are the only
command; `echo`, `export`, `env` and `pwd` run as builtins inside the
pipeline; anything else is looked up on `PATH` and started as a process.
A command that is not found gives status 127; a child killed by `SIGQUIT`
gives 131. `exit_builtin` raises `ShellExit`, whose `code` is the status.

## Behaviour notes

- `Shell` with an empty environment starts with `PWD`, `SHLVL=1` and an
  empty `OLDPWD`; `Shell()` with no argument copies the process environment.
  `SHLVL` is raised by one at start.
- `export` with no arguments prints every entry, sorted, as
  `export NAME=value`.
- `env` prints only entries that have a value after the first `=`.
- Output files named in a pipeline are created before any command runs.

## What this package does not do

There is no tokenizer that turns a raw input line into `Token` objects, and
no interactive prompt loop or command to start one. Callers build the token
list themselves and pass the result to `execute`.