from pathlib import Path

import pytest

from filepane.errors import AppError, ErrorKind
from filepane.key_command import (
    Action,
    IoWorkerOptions,
    KeyCommand,
    SelectOption,
    parse_command,
)


@pytest.mark.parametrize(
    "text, action",
    [
        ("bulk_rename", Action.BULK_RENAME),
        ("close_tab", Action.CLOSE_TAB),
        ("copy_files", Action.COPY_FILES),
        ("cut_files", Action.CUT_FILES),
        ("delete_files", Action.DELETE_FILES),
        ("quit", Action.QUIT),
        ("force_quit", Action.FORCE_QUIT),
        ("toggle_hidden", Action.TOGGLE_HIDDEN_FILES),
        ("search_next", Action.SEARCH_NEXT),
        ("new_tab", Action.NEW_TAB),
    ],
)
def test_simple_commands(text, action):
    cmd = parse_command(text)
    assert cmd == KeyCommand(action)
    assert cmd.command() == text
    assert str(cmd) == text


def test_command_line_prefix():
    cmd = parse_command(":search ")
    assert cmd == KeyCommand(Action.COMMAND_LINE, ("search ", ""))
    assert cmd.command() == ":"


@pytest.mark.parametrize(
    "name", ["cursor_move_up", "cursor_move_down", "parent_cursor_move_up", "parent_cursor_move_down"]
)
def test_counted_commands_default_and_value(name):
    assert parse_command(name).args == (1,)
    assert parse_command(f"{name} 7").args == (7,)
    assert parse_command(f"{name}   +4 ").args == (4,)


def test_counted_command_invalid():
    with pytest.raises(AppError) as info:
        parse_command("cursor_move_up abc")
    assert info.value.kind is ErrorKind.PARSE_ERROR
    assert str(info.value) == "invalid digit found in string"


def test_counted_command_negative_rejected():
    with pytest.raises(AppError) as info:
        parse_command("cursor_move_down -1")
    assert info.value.kind is ErrorKind.PARSE_ERROR


def test_cursor_display():
    assert str(parse_command("cursor_move_down 3")) == "cursor_move_down 3"


def test_cd_parent():
    cmd = parse_command("cd ..")
    assert cmd.action is Action.PARENT_DIRECTORY
    assert cmd.command() == "cd .."


def test_cd_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert parse_command("cd") == KeyCommand(Action.CHANGE_DIRECTORY, (tmp_path,))


def test_cd_tilde_expansion(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    cmd = parse_command("cd ~/docs")
    assert cmd.args == (tmp_path / "docs",)


def test_cd_plain_path_display():
    cmd = parse_command("cd /tmp/x")
    assert cmd.args == (Path("/tmp/x"),)
    assert str(cmd) == 'cd "/tmp/x"'


def test_mkdir():
    cmd = parse_command("mkdir newdir")
    assert cmd.args == (Path("newdir"),)
    assert str(cmd) == 'mkdir "newdir"'
    with pytest.raises(AppError) as info:
        parse_command("mkdir")
    assert info.value.kind is ErrorKind.INVALID_PARAMETERS
    assert str(info.value) == "mkdir: missing additional parameter"


def test_rename_requires_argument():
    assert parse_command("rename b.txt").args == (Path("b.txt"),)
    with pytest.raises(AppError) as info:
        parse_command("rename")
    assert str(info.value) == "rename: Expected 1, got 0"


@pytest.mark.parametrize("name", ["search", "search_glob"])
def test_search_commands(name):
    cmd = parse_command(f"{name} foo bar")
    assert cmd.args == ("foo bar",)
    assert str(cmd) == f"{name} foo bar"
    with pytest.raises(AppError) as info:
        parse_command(name)
    assert str(info.value) == f"{name}: Expected 1, got 0"


def test_open_with():
    assert parse_command("open_with").args == (None,)
    assert parse_command("open_with 2").args == (2,)
    with pytest.raises(AppError):
        parse_command("open_with x")


def test_paste_files_options():
    cmd = parse_command("paste_files --overwrite=true --skip_exist=true")
    assert cmd.args == (IoWorkerOptions(overwrite=True, skip_exist=True),)
    assert parse_command("paste_files").args == (IoWorkerOptions(),)
    assert str(cmd) == f"paste_files  {IoWorkerOptions(overwrite=True, skip_exist=True)}"


def test_paste_files_unknown_option():
    with pytest.raises(AppError) as info:
        parse_command("paste_files --bogus")
    assert info.value.kind is ErrorKind.UNRECOGNIZED_ARGUMENT
    assert str(info.value) == "paste_files: unknown option '--bogus'"


def test_select_options_and_pattern():
    cmd = parse_command("select --all=true --deselect=true '*.txt'")
    pattern, options = cmd.args
    assert pattern == "*.txt"
    assert options.all is True
    assert options.reverse is True
    assert options.toggle == SelectOption().toggle


def test_select_no_pattern():
    cmd = parse_command("select --toggle=false")
    assert cmd.args == ("", SelectOption(toggle=False))


def test_select_bad_quote():
    with pytest.raises(AppError) as info:
        parse_command("select 'abc")
    assert info.value.kind is ErrorKind.INVALID_PARAMETERS


def test_shell():
    cmd = parse_command("shell ls -l '%s'")
    assert cmd.args == ("ls", "-l", "%s")
    assert str(cmd) == 'shell ["ls", "-l", "%s"]'
    with pytest.raises(AppError) as info:
        parse_command("shell")
    assert str(info.value) == "sort: args "


def test_sort():
    assert parse_command("sort reverse").action is Action.SORT_REVERSE
    cmd = parse_command("sort natural")
    assert cmd.args == ("natural",)
    assert str(cmd) == "sort natural"
    with pytest.raises(AppError) as info:
        parse_command("sort bogus")
    assert str(info.value) == "sort: Unknown option bogus"


def test_tab_switch():
    assert parse_command("tab_switch -1").args == (-1,)
    assert str(parse_command("tab_switch 1")) == "tab_switch 1"
    with pytest.raises(AppError) as info:
        parse_command("tab_switch")
    assert info.value.kind is ErrorKind.INVALID_PARAMETERS
    assert str(info.value) == "tab_switch: cannot parse integer from empty string"


def test_unknown_command():
    with pytest.raises(AppError) as info:
        parse_command("frobnicate now")
    assert info.value.kind is ErrorKind.UNRECOGNIZED_COMMAND
    assert str(info.value) == "Unknown command: frobnicate"


def test_commands_are_hashable_and_equal():
    first = parse_command("paste_files --overwrite=true")
    second = parse_command("paste_files --overwrite=true")
    assert first == second
    assert len({first, second}) == 1