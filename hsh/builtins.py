"""Commands built into the shell."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Callable

from hsh.errors import perrorl, perrorl_default
from hsh.info import ShellInfo
from hsh.path import search_path, str_to_list
from hsh.quote import is_number

INT_MAX = 2**31 - 1
UINT_MAX = 2**32 - 1

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class ShellExit(SystemExit):
    """Raised to end the shell with the given status."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


@dataclass(frozen=True)
class Builtin:
    """A builtin command with its usage line and description."""

    name: str
    func: Callable[[ShellInfo], int]
    help: str
    desc: tuple[str, ...]


def _out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _arg0(info: ShellInfo) -> str | None:
    return info.argv[0] if info.argv else None


def _args(info: ShellInfo) -> list[str]:
    return list(info.tokens[1:]) if info.tokens else []


def _command(info: ShellInfo) -> str | None:
    return info.tokens[0] if info.tokens else None


def atou(s: str) -> int:
    """Convert a digit string to an unsigned int, saturating at UINT_MAX."""
    number = 0
    for c in s:
        if UINT_MAX // 10 < number:
            return UINT_MAX
        number *= 10
        to_add = (ord(c) - ord("0")) & UINT_MAX
        if UINT_MAX - to_add < number:
            return UINT_MAX
        number += to_add
    return number


def _print_alias(name: str, value: str) -> None:
    _out(f"{name}='{value}'\n")


def builtin_alias(info: ShellInfo) -> int:
    """Define or display aliases."""
    info.status = EXIT_SUCCESS
    args = _args(info)
    if not args:
        for name, value in info.aliases.items():
            _print_alias(name, value)
        return info.status
    for arg in args:
        name, sep, value = arg.partition("=")
        if sep:
            info.aliases[name] = value
        elif arg in info.aliases:
            _print_alias(arg, info.aliases[arg])
        else:
            perrorl("not found", _command(info), arg)
            info.status = EXIT_FAILURE
    return info.status


def _chdir(target: str | None) -> bool:
    if target is None:
        return False
    try:
        os.chdir(target)
    except OSError:
        return False
    return True


def _getcwd() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def _cd_success(info: ShellInfo) -> None:
    info.env["OLDPWD"] = info.cwd or ""
    info.cwd = _getcwd()
    info.env["PWD"] = info.cwd or ""
    info.status = EXIT_SUCCESS


def _cd_error(info: ShellInfo, target: str | None) -> None:
    perrorl_default(_arg0(info), info.lineno, f"can't cd to {target or ''}",
                    _command(info))
    info.status = 2


def builtin_cd(info: ShellInfo) -> int:
    """Change the working directory and update PWD and OLDPWD."""
    info.status = EXIT_SUCCESS
    args = _args(info)
    ok = True
    if args:
        if args[0] == "-":
            target = info.env.get("OLDPWD")
            if target is None:
                target = info.cwd
            ok = _chdir(target)
            if ok:
                _out(f"{target}\n")
        else:
            target = args[0]
            ok = _chdir(target)
    else:
        target = info.env.get("HOME")
        if target is not None:
            ok = _chdir(target)
    if ok:
        _cd_success(info)
    else:
        _cd_error(info, target)
    return info.status


def builtin_env(info: ShellInfo) -> int:
    """Print the environment, one KEY=VALUE per line."""
    info.status = EXIT_SUCCESS
    _out("".join(f"{key}={value}\n" for key, value in info.env.items()))
    return info.status


def builtin_exec(info: ShellInfo) -> int:
    """Replace the shell with the given command.

    Raises ShellExit(126) when the command cannot be run and ShellExit(127)
    when executing it fails.
    """
    args = _args(info)
    if not args:
        info.status = EXIT_SUCCESS
        return info.status
    command = _command(info)
    if "/" not in args[0]:
        info.path = str_to_list(info.env.get("PATH"), ":")
        exe = search_path(args[0], info.path, info.cwd)
    else:
        exe = args[0]
    arg0, lineno = _arg0(info), info.lineno
    if exe is not None and os.access(exe, os.X_OK):
        env = dict(info.env)
        info.close()
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execve(exe, args, env)
        except OSError:
            pass
        perrorl_default(arg0, lineno, "Not found", command, args[0])
        info.status = 127
        raise ShellExit(127)
    perrorl_default(arg0, lineno, "Permission denied", command, args[0])
    info.close()
    info.status = 126
    raise ShellExit(126)


def builtin_exit(info: ShellInfo) -> int:
    """Exit the shell; an invalid status is reported and returns 2."""
    args = _args(info)
    if args:
        if is_number(args[0]) and atou(args[0]) <= INT_MAX:
            info.status = atou(args[0])
        else:
            perrorl_default(_arg0(info), info.lineno, args[0],
                            _command(info), "Illegal number")
            info.status = 2
            return info.status
    raise ShellExit(info.close())


def builtin_help(info: ShellInfo) -> int:
    """Show usage for the given builtins, or list all of them."""
    args = _args(info)
    if not args:
        info.status = EXIT_SUCCESS
        _out("".join(f"{bp.help}\n" for bp in get_builtins()))
        return info.status
    info.status = EXIT_FAILURE
    for arg in args:
        bp = get_builtin(arg)
        if bp is None:
            continue
        lines = [f"{bp.name}: {bp.help}\n"]
        lines.extend(f"    {segment}\n" for segment in bp.desc)
        _out("".join(lines))
        info.status = EXIT_SUCCESS
    if info.status == EXIT_FAILURE:
        perrorl_default(_arg0(info), info.lineno, "No topics match",
                        _command(info), args[-1])
    return info.status


def builtin_setenv(info: ShellInfo) -> int:
    """Set NAME to VALUE, or print the environment when given no NAME."""
    args = _args(info)
    if not args:
        builtin_env(info)
        return info.status
    if len(args) > 2:
        perrorl("Too many arguments.", _command(info))
        info.status = EXIT_FAILURE
        return info.status
    info.env[args[0]] = args[1] if len(args) == 2 else ""
    info.status = EXIT_SUCCESS
    return info.status


def builtin_unsetenv(info: ShellInfo) -> int:
    """Remove each named variable from the environment."""
    args = _args(info)
    if not args:
        perrorl("Too few arguments.", _command(info))
        info.status = EXIT_FAILURE
        return info.status
    for name in args:
        info.env.pop(name, None)
    info.status = EXIT_SUCCESS
    return info.status


_BUILTINS: tuple[Builtin, ...] = (
    Builtin("alias", builtin_alias, "alias [KEY[=VALUE] ...]", (
        "Define and display aliases.\n",
        "If given no arguments, existing alias definitions are displayed.",
        "Otherwise, an alias is defined for each KEY=VALUE pair provided.",
        "For each KEY with no VALUE the corresponding alias is displayed.",
        "If VALUE ends with a space, the following word will be expanded.",
    )),
    Builtin("cd", builtin_cd, "cd [DIR]", (
        "Change the current working directory to DIR.\n",
        "If DIR is omitted, it defaults to the value of the variable HOME.",
        "If DIR is -, the current directory reverts to its previous value.",
    )),
    Builtin("env", builtin_env, "env", (
        "Print the environment.",
    )),
    Builtin("exec", builtin_exec, "exec COMMAND [ARGS ...]", (
        "Replace the shell with the given command.\n",
        "COMMAND is executed, replacing the executing shell.",
        "ARGS are passed as positional arguments to COMMAND.",
        "If the command cannot be executed, the shell exits.",
    )),
    Builtin("exit", builtin_exit, "exit [STATUS]", (
        "Exit the shell with a status of STATUS.\n",
        "If STATUS is omitted, the exit status is that of the last command.",
    )),
    Builtin("help", builtin_help, "help [BUILTIN]", (
        "Display information about builtin commands.\n",
        "If BUILTIN is omitted, the available commands are displayed.",
    )),
    Builtin("setenv", builtin_setenv, "setenv [NAME [VALUE]]", (
        "Set the environment variable NAME to VALUE.\n",
        "If NAME is omitted, the shell execution environment is displayed.",
        "If VALUE is omitted, the value of NAME is set to an empty string.",
    )),
    Builtin("unsetenv", builtin_unsetenv, "unsetenv NAME", (
        "Remove the variable NAME from the environment.",
    )),
)


def get_builtins() -> tuple[Builtin, ...]:
    """Return all builtins in their fixed order."""
    return _BUILTINS


def get_builtin(name: str) -> Builtin | None:
    """Return the builtin with the given name, or None."""
    for builtin in _BUILTINS:
        if builtin.name == name:
            return builtin
    return None