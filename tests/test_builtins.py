import io
import os

import pytest

from minishell.builtins import (
    cd,
    echo,
    echo_expand,
    env_command,
    exit_builtin,
    export_command,
    pwd,
)
from minishell.shell import Shell, ShellExit


def make_shell(*entries):
    return Shell(list(entries) + ["SHLVL=1"])


def run_echo(args):
    out = io.StringIO()
    echo(args, out)
    return out.getvalue()


def test_echo_without_arguments_prints_newline():
    assert run_echo(["echo"]) == "\n"


def test_echo_joins_with_spaces():
    assert run_echo(["echo", "a", "b"]) == "a b\n"


def test_echo_n_flag_drops_newline():
    assert run_echo(["echo", "-n", "hi"]) == "hi"


def test_echo_repeated_n_flags():
    assert run_echo(["echo", "-nnn", "-n", "a", "b"]) == "a b"


def test_echo_other_flag_is_printed():
    assert run_echo(["echo", "-nx", "a"]) == "-nx a\n"


def test_echo_flag_after_word_is_printed():
    assert run_echo(["echo", "a", "-n"]) == "a -n\n"


def test_echo_expand_variables_and_quotes():
    shell = make_shell("USER=alice")
    assert echo_expand('"$USER"x', shell) == "alicex"
    assert echo_expand("'$USER'", shell) == "$USER"
    assert echo_expand("$MISSING", shell) == ""


def test_echo_expand_status():
    shell = make_shell()
    shell.ecode = 7
    assert echo_expand("$?", shell) == "7"


def test_echo_expand_trailing_dollar_kept():
    shell = make_shell()
    assert echo_expand("a$", shell) == "a$"


def test_cd_updates_pwd_and_oldpwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sub = tmp_path / "sub"
    sub.mkdir()
    shell = make_shell("PWD=x", "OLDPWD=y")
    old = os.getcwd()
    assert cd(shell, str(sub)) == 0
    assert shell.env.get("PWD") == os.getcwd()
    assert shell.env.get("OLDPWD") == old
    assert os.path.samefile(os.getcwd(), sub)


def test_cd_missing_directory_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    shell = make_shell()
    target = str(tmp_path / "nope")
    assert cd(shell, target) == 1
    assert shell.ecode == 1
    assert target in capsys.readouterr().err


def test_cd_without_home(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = make_shell()
    assert cd(shell) == 1
    assert capsys.readouterr().out == "cd: HOME not set\n"


def test_cd_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    shell = make_shell(f"HOME={home}")
    assert cd(shell) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_pwd_prints_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = make_shell()
    out = io.StringIO()
    assert pwd(shell, out) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_exit_too_many_arguments(capsys):
    shell = make_shell()
    assert exit_builtin(shell, ["exit", "1", "2"]) == 1
    assert capsys.readouterr().out == "Exit: too many arguments\n"


def test_exit_with_status():
    shell = make_shell()
    with pytest.raises(ShellExit) as info:
        exit_builtin(shell, ["exit", "42"])
    assert info.value.code == 42


def test_exit_without_argument():
    shell = make_shell()
    with pytest.raises(ShellExit) as info:
        exit_builtin(shell, ["exit"])
    assert info.value.code == 0


def test_exit_non_numeric():
    shell = make_shell()
    with pytest.raises(ShellExit) as info:
        exit_builtin(shell, ["exit", "abc"])
    assert info.value.code == 2


def test_exit_negative_wraps():
    shell = make_shell()
    with pytest.raises(ShellExit) as info:
        exit_builtin(shell, ["exit", "-1"])
    assert info.value.code == 255


def test_export_sets_and_copies():
    shell = make_shell()
    export_command(shell, ["export", "A=1", "B=$A"])
    assert shell.env.get("A") == "1"
    assert shell.env.get("B") == "1"
    assert shell.ecode == 0


def test_export_unset_reference_appends_empty():
    shell = make_shell()
    export_command(shell, ["export", "C=$MISSING"])
    assert "C=" in shell.env.entries


def test_export_replaces_existing():
    shell = make_shell("A=old")
    export_command(shell, ["export", "A=new"])
    assert shell.env.get("A") == "new"
    assert sum(1 for e in shell.env if e.startswith("A=")) == 1


def test_env_shows_only_valued_entries():
    shell = make_shell("A=1", "EMPTY=", "NOVALUE")
    out = io.StringIO()
    env_command(shell, out)
    lines = out.getvalue().splitlines()
    assert "A=1" in lines
    assert "EMPTY=" not in lines
    assert "NOVALUE" not in lines