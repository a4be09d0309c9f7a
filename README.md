# hsh

A small command interpreter in the spirit of `sh`. It reads commands from
a terminal or from a script file and runs them one line at a time.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Usage

Interactive session (the prompts `$ ` and `> ` are written to standard
error):

```
hsh
$ echo hello
hello
$ exit
```

Run a script:

```
hsh script.sh
```

The same entry point is available as `python -m hsh.shell`.

If the script cannot be opened, `hsh` reports `Can't open <file>` and
exits with status 127. At the end of input the shell exits with the status
of the last command. Pressing Ctrl-C at the prompt prints a fresh prompt
instead of ending the shell.

## Features

- Single quotes, double quotes and backslash escapes. A line that ends
  inside an open quote, or with a backslash before the newline, is
  continued on the next line after a `> ` prompt.
- Commands separated by `;`.
- Comments: a word starting with `#` ends the line.
- Variable expansion: `$NAME`, `$$` (the shell's process id) and `$?`
  (the status of the last command). No expansion takes place inside
  single quotes; an unset variable expands to nothing.
- Aliases. Alias expansion repeats on the first word while it keeps
  changing; an alias whose value ends with a blank also expands the word
  that follows it.
- Commands without a `/` are looked up through `PATH`. An empty `PATH`
  entry stands for the current directory.

## Builtins

| Command                   | Description                                    |
|---------------------------|------------------------------------------------|
| `alias [KEY[=VALUE] ...]` | Define and display aliases                     |
| `cd [DIR]`                | Change directory; `cd -` returns to `OLDPWD`; no argument goes to `HOME` |
| `env`                     | Print the environment                          |
| `exec COMMAND [ARGS ...]` | Replace the shell with COMMAND                 |
| `exit [STATUS]`           | Exit the shell                                 |
| `help [BUILTIN]`          | Describe builtin commands                      |
| `setenv [NAME [VALUE]]`   | Set an environment variable                    |
| `unsetenv NAME ...`       | Remove environment variables                   |

`cd` keeps `PWD` and `OLDPWD` up to date in the shell's environment.

## Exit status

- 126: the command was found but is not executable.
- 127: the command was not found, or the script could not be opened.
- 2: `cd` failed, or `exit` was given an illegal number.
- 1: `alias NAME` for an unknown alias, `help` with no matching topic,
  `setenv` with too many arguments, `unsetenv` with none.

## What it does not do

There are no pipes, redirections, `&&` / `||` lists, background jobs,
globbing or command history. Each line is split on `;` only, and each
command is run in turn.

## Library use

The parsing pieces can be used on their own:

```python
from hsh.quote import tokenize, dequote, split_cmd

tokenize("echo 'a b' c")   # ["echo", "'a b'", "c"]
dequote("'a b'")           # "a b"
split_cmd("ls; pwd")       # ["ls", " pwd"]
```

Other modules:

- `hsh.commands`: `cmd_to_list` and `remove_comments`.
- `hsh.expand`: `expand_aliases`, `expand_alias`, `expand_vars`, `expand_token`.
- `hsh.environ`: `env_to_dict` and `dict_to_env`.
- `hsh.path`: `str_to_list` and `search_path`.
- `hsh.getline`: `LineReader` and `getline` for buffered reads from file descriptors.
- `hsh.errors`: `format_error`, `perrorl`, `perrorl_default`.
- `hsh.info`: `ShellInfo` and `init_info`.
- `hsh.builtins`: `get_builtins`, `get_builtin` and the builtin commands.
- `hsh.shell`: `read_input`, `parse`, `execute` and `main`.