import os

import pytest

from hsh.builtins import (
    ShellExit,
    atou,
    builtin_alias,
    builtin_cd,
    builtin_env,
    builtin_exec,
    builtin_exit,
    builtin_help,
    builtin_setenv,
    builtin_unsetenv,
    get_builtin,
    get_builtins,
)
from hsh.info import ShellInfo


def make_info(tokens, env=None, **kwargs):
    return ShellInfo(argv=["hsh"], tokens=tokens, env=dict(env or {}), **kwargs)


def test_builtin_names_in_order():
    assert [b.name for b in get_builtins()] == [
        "alias", "cd", "env", "exec", "exit", "help", "setenv", "unsetenv",
    ]


def test_get_builtin():
    assert get_builtin("cd").help == "cd [DIR]"
    assert get_builtin("cd").func is builtin_cd
    assert get_builtin("nope") is None


def test_atou():
    assert atou("123") == 123
    assert atou("") == 0
    assert atou("99999999999") == 2**32 - 1


def test_setenv_sets_and_overwrites():
    info = make_info(["setenv", "FOO", "bar"], {"A": "1"})
    assert builtin_setenv(info) == 0
    assert info.env == {"A": "1", "FOO": "bar"}
    info.tokens = ["setenv", "A"]
    assert builtin_setenv(info) == 0
    assert list(info.env.items()) == [("A", ""), ("FOO", "bar")]


def test_setenv_too_many(capsys):
    info = make_info(["setenv", "A", "b", "c"])
    assert builtin_setenv(info) == 1
    assert capsys.readouterr().err == "setenv: Too many arguments.\n"
    assert "A" not in info.env


def test_setenv_without_args_prints_env(capsys):
    info = make_info(["setenv"], {"A": "1", "B": "2"})
    assert builtin_setenv(info) == 0
    assert capsys.readouterr().out == "A=1\nB=2\n"


def test_env_prints(capsys):
    info = make_info(["env"], {"A": "1", "B": ""})
    assert builtin_env(info) == 0
    assert capsys.readouterr().out == "A=1\nB=\n"


def test_unsetenv(capsys):
    info = make_info(["unsetenv", "A", "MISSING"], {"A": "1", "B": "2"})
    assert builtin_unsetenv(info) == 0
    assert info.env == {"B": "2"}
    info.tokens = ["unsetenv"]
    assert builtin_unsetenv(info) == 1
    assert capsys.readouterr().err == "unsetenv: Too few arguments.\n"


def test_alias_define_and_print(capsys):
    info = make_info(["alias", "ll=ls -l", "g=grep"])
    assert builtin_alias(info) == 0
    assert info.aliases == {"ll": "ls -l", "g": "grep"}
    info.tokens = ["alias", "ll"]
    assert builtin_alias(info) == 0
    assert capsys.readouterr().out == "ll='ls -l'\n"
    info.tokens = ["alias"]
    builtin_alias(info)
    assert capsys.readouterr().out == "ll='ls -l'\ng='grep'\n"


def test_alias_not_found(capsys):
    info = make_info(["alias", "nope"])
    assert builtin_alias(info) == 1
    assert capsys.readouterr().err == "alias: nope: not found\n"


def test_exit_with_status():
    info = make_info(["exit", "3"])
    with pytest.raises(ShellExit) as excinfo:
        builtin_exit(info)
    assert excinfo.value.code == 3
    assert excinfo.value.status == 3


def test_exit_uses_last_status():
    info = make_info(["exit"], status=5)
    with pytest.raises(SystemExit) as excinfo:
        builtin_exit(info)
    assert excinfo.value.code == 5


@pytest.mark.parametrize("arg", ["abc", "-1", "99999999999"])
def test_exit_illegal_number(capsys, arg):
    info = make_info(["exit", arg])
    assert builtin_exit(info) == 2
    assert capsys.readouterr().err == f"hsh: 0: exit: Illegal number: {arg}\n"


def test_help_lists_all(capsys):
    info = make_info(["help"])
    assert builtin_help(info) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [b.help for b in get_builtins()]


def test_help_topic(capsys):
    info = make_info(["help", "cd"])
    assert builtin_help(info) == 0
    out = capsys.readouterr().out
    assert out.startswith(
        "cd: cd [DIR]\n    Change the current working directory to DIR.\n\n"
    )
    assert out.count("\n    ") == len(get_builtin("cd").desc)


def test_help_no_match(capsys):
    info = make_info(["help", "nope"])
    assert builtin_help(info) == 1
    assert capsys.readouterr().err == "hsh: 0: help: nope: No topics match\n"


def test_cd_to_directory(tmp_path, monkeypatch):
    start = tmp_path / "start"
    target = tmp_path / "target"
    start.mkdir()
    target.mkdir()
    monkeypatch.chdir(start)
    old = os.getcwd()
    info = make_info(["cd", str(target)], cwd=old)
    assert builtin_cd(info) == 0
    assert os.getcwd() == os.path.realpath(target)
    assert info.env["OLDPWD"] == old
    assert info.env["PWD"] == os.getcwd()
    assert info.cwd == os.getcwd()


def test_cd_dash_returns_and_prints(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    here = os.getcwd()
    other = tmp_path / "other"
    other.mkdir()
    info = make_info(["cd", str(other)], cwd=here)
    builtin_cd(info)
    info.tokens = ["cd", "-"]
    assert builtin_cd(info) == 0
    assert os.getcwd() == here
    assert capsys.readouterr().out == f"{here}\n"


def test_cd_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    info = make_info(["cd"], {"HOME": str(home)}, cwd=os.getcwd())
    assert builtin_cd(info) == 0
    assert os.getcwd() == os.path.realpath(home)


def test_cd_missing_directory(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    missing = str(tmp_path / "missing")
    info = make_info(["cd", missing], cwd=os.getcwd())
    assert builtin_cd(info) == 2
    assert capsys.readouterr().err == f"hsh: 0: cd: can't cd to {missing}\n"
    assert "PWD" not in info.env


def test_exec_without_args():
    info = make_info(["exec"], status=4)
    assert builtin_exec(info) == 0


def test_exec_not_executable(capsys):
    info = make_info(["exec", "/nonexistent/prog"])
    with pytest.raises(ShellExit) as excinfo:
        builtin_exec(info)
    assert excinfo.value.code == 126
    assert capsys.readouterr().err == (
        "hsh: 0: exec: /nonexistent/prog: Permission denied\n"
    )