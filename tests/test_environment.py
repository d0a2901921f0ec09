import pytest

from minishell.environment import Environment, recover_full_entry, split_first


def test_get_returns_value():
    env = Environment(["HOME=/home/user", "PATH=/bin"])
    assert env.get("HOME") == "/home/user"
    assert env.get("PATH") == "/bin"


def test_get_missing_is_none():
    assert Environment(["A=1"]).get("B") is None


def test_get_value_with_equals():
    assert Environment(["A=b=c"]).get("A") == "b=c"


def test_position_is_prefix_match():
    env = Environment(["PATHX=1", "PATH=2"])
    assert env.position("PATH") == 0
    assert env.position("NOPE") is None


def test_export_appends_new_entry():
    env = Environment(["A=1"])
    env.export("NEW=1")
    assert env.entries == ["A=1", "NEW=1"]


def test_export_replaces_existing():
    env = Environment(["FOO=bar", "B=2"])
    env.export("FOO=baz")
    assert env.entries == ["FOO=baz", "B=2"]


def test_export_without_value_keeps_existing():
    env = Environment(["FOO=bar"])
    env.export("FOO")
    assert env.get("FOO") == "bar"
    assert len(env) == 1


def test_export_without_value_adds_new_name():
    env = Environment(["A=1"])
    env.export("FOO")
    assert env.entries[-1] == "FOO"


def test_export_empty_value_replaces():
    env = Environment(["A=1"])
    env.export("A=")
    assert env.entries == ["A="]


def test_unset_removes_entry():
    env = Environment(["A=1", "B=2"])
    assert env.unset("A") is True
    assert env.entries == ["B=2"]


def test_unset_missing_leaves_entries():
    env = Environment(["A=1"])
    assert env.unset("Z") is False
    assert env.entries == ["A=1"]


def test_change_value():
    env = Environment(["X=0", "SHLVL=1"])
    env.change_value("SHLVL", "7")
    assert env.get("SHLVL") == "7"
    assert env.entries[0] == "X=0"


def test_change_value_missing_raises():
    with pytest.raises(KeyError):
        Environment(["A=1"]).change_value("B", "2")


def test_change_value_none_is_noop():
    env = Environment(["A=1"])
    env.change_value("A", None)
    assert env.entries == ["A=1"]


@pytest.mark.parametrize(
    "entry, expected",
    [("A=b=c", ["A", "b=c"]), ("FOO", ["FOO"]), ("=x", ["x"]), ("K=", ["K", ""])],
)
def test_split_first(entry, expected):
    assert split_first(entry) == expected


def test_recover_full_entry():
    assert recover_full_entry("A=old", "new") == "A=new"
    assert recover_full_entry("A=old", None) is None


def test_visible_entries():
    env = Environment(["A=1", "B=", "C", "D=x=", ""])
    assert list(env.visible_entries()) == ["A=1", "D=x="]


def test_sorted_exports_is_sorted_and_non_destructive():
    entries = ["b=2", "a=1", "C=3"]
    env = Environment(entries)
    lines = env.sorted_exports()
    assert lines == sorted(lines)
    assert all(line.startswith("export ") for line in lines)
    assert sorted(line[len("export "):] for line in lines) == sorted(entries)
    assert env.entries == entries


def test_entries_are_copied():
    source = ["A=1"]
    env = Environment(source)
    env.export("B=2")
    assert source == ["A=1"]