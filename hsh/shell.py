"""The shell's read, parse and execute loop."""

from __future__ import annotations

import os
import signal
import subprocess
import sys

from hsh.builtins import get_builtin
from hsh.commands import cmd_to_list, remove_comments
from hsh.errors import perrorl_default
from hsh.expand import expand_aliases, expand_vars
from hsh.getline import getline
from hsh.info import ShellInfo, init_info
from hsh.path import search_path, str_to_list
from hsh.quote import QuoteState, dequote, quote_state, quote_state_len

_OPENING = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE
_QUOTED = QuoteState.DOUBLE | QuoteState.SINGLE

PROMPT = "$ "
CONTINUATION_PROMPT = "> "


def _write_stderr(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


def _enter_state(line: str, index: int) -> tuple[QuoteState, int]:
    state = quote_state(line[index:index + 1])
    if state & _OPENING:
        index += 1
    return state, index


def _scan_line(line: str, state: QuoteState) -> QuoteState:
    """Return the quote state in force at the end of line."""
    n = len(line)
    index = 0
    if not state & _QUOTED:
        state, index = _enter_state(line, 0)
    while index < n:
        index += quote_state_len(line[index:], state)
        if index >= n:
            break
        if state & _QUOTED:
            index += 1
        state, index = _enter_state(line, index)
    return state


def read_input(info: ShellInfo) -> bool:
    """Read one logical line into info.line; return False at end of input.

    Lines are joined while a quote is left open or the line ends with an
    escaped newline.
    """
    if info.interactive:
        _write_stderr(PROMPT)
    info.lineno += 1
    pieces: list[str] = []
    state = QuoteState.NONE
    while True:
        line = getline(info.fileno)
        if line is None:
            break
        pieces.append(line)
        state = _scan_line(line, state)
        if not state & _OPENING:
            break
        if info.interactive:
            _write_stderr(CONTINUATION_PROMPT)
        info.lineno += 1
    info.line = "".join(pieces) if pieces else None
    return info.line is not None


def parse(info: ShellInfo) -> int:
    """Split info.line into commands, expanding aliases and variables.

    The commands are stored in info.commands; their number is returned.
    """
    commands: list[list[str]] = []
    for tokens in remove_comments(cmd_to_list(info.line or "")):
        if not tokens:
            continue
        tokens = expand_aliases(info.aliases, tokens)
        if not tokens:
            continue
        tokens = expand_vars(info, tokens)
        if not tokens:
            continue
        commands.append([dequote(token) for token in tokens])
    info.commands = commands
    return len(commands)


def _run(info: ShellInfo) -> int:
    argv = list(info.tokens or [])
    exe = info.exe
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        proc = subprocess.run(argv, executable=exe, env=dict(info.env), check=False)
    except OSError as exc:
        _write_stderr(f"{argv[0]}: {exc.strerror or exc}\n")
        info.status = 1
    else:
        # A child killed by a signal has no exit status of its own.
        info.status = proc.returncode if proc.returncode >= 0 else 0
    info.exe = None
    return info.status


def execute(info: ShellInfo) -> int:
    """Run the command in info.tokens and return its status."""
    tokens = info.tokens or []
    if not tokens:
        return info.status
    command = tokens[0]
    builtin = get_builtin(command)
    if builtin is not None:
        return builtin.func(info)
    if "/" not in command:
        info.path = str_to_list(info.env.get("PATH"), ":")
        info.exe = search_path(command, info.path, info.cwd)
    else:
        info.exe = command
    if info.exe is not None and os.access(info.exe, os.X_OK):
        return _run(info)
    arg0 = info.argv[0] if info.argv else None
    if info.exe is not None:
        perrorl_default(arg0, info.lineno, "Permission denied", command)
        info.status = 126
    else:
        perrorl_default(arg0, info.lineno, "not found", command)
        info.status = 127
    info.exe = None
    return info.status


def _sigint(signum, frame) -> None:
    _write_stderr("\n" + PROMPT)


def _exit_code(exc: SystemExit) -> int:
    if exc.code is None:
        return 0
    if isinstance(exc.code, int):
        return exc.code
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the shell on argv[1] if given, else on standard input."""
    try:
        info = init_info(argv)
    except SystemExit as exc:
        return _exit_code(exc)
    try:
        previous = signal.signal(signal.SIGINT, _sigint)
    except ValueError:
        previous = None
    try:
        try:
            while read_input(info):
                parse(info)
                while info.commands:
                    info.tokens = info.commands.pop(0)
                    execute(info)
                    info.tokens = None
                info.line = None
        except SystemExit as exc:
            return _exit_code(exc)
        if info.interactive:
            sys.stdout.write("\n")
        return info.close()
    finally:
        sys.stdout.flush()
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


if __name__ == "__main__":
    raise SystemExit(main())