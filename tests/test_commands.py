import os
import stat
from pathlib import Path

import pytest

from filepane.commands import (
    remove_files,
    rename_append_parts,
    rename_file,
    search_glob_fwd,
    search_glob_rev,
    search_string_fwd,
    search_string_rev,
    select_entries,
    str_to_mode,
)
from filepane.errors import AppError, ErrorKind
from filepane.fs import DirList
from filepane.key_command import SelectOption
from filepane.options import DisplayOption


def make_list(tmp_path: Path, names) -> DirList:
    for name in names:
        (tmp_path / name).write_text("x")
    return DirList(tmp_path, DisplayOption())


def names_of(dirlist):
    return [entry.name for entry in dirlist]


def index_of(dirlist, name):
    return names_of(dirlist).index(name)


def test_search_string_fwd_finds_next_match(tmp_path):
    dl = make_list(tmp_path, ["alpha", "beta", "gamma", "delta"])
    dl.index = index_of(dl, "alpha")
    result = search_string_fwd(dl, "bet")
    assert result == index_of(dl, "beta")


def test_search_string_fwd_wraps_around(tmp_path):
    dl = make_list(tmp_path, ["alpha", "beta", "gamma", "delta"])
    dl.index = len(dl) - 1
    result = search_string_fwd(dl, "alpha")
    assert dl.contents[result].name == "alpha"


def test_search_string_fwd_ends_at_current(tmp_path):
    dl = make_list(tmp_path, ["alpha", "beta", "gamma"])
    dl.index = index_of(dl, "beta")
    assert search_string_fwd(dl, "beta") == dl.index


def test_search_string_ignores_case(tmp_path):
    dl = make_list(tmp_path, ["README", "other"])
    dl.index = index_of(dl, "other")
    assert dl.contents[search_string_fwd(dl, "read")].name == "README"


def test_search_string_no_match(tmp_path):
    dl = make_list(tmp_path, ["alpha", "beta"])
    assert search_string_fwd(dl, "zzz") is None
    assert search_string_rev(dl, "zzz") is None


def test_search_on_empty_list_returns_none(tmp_path):
    dl = DirList(tmp_path, DisplayOption())
    assert dl.index is None
    assert search_string_fwd(dl, "a") is None
    assert search_glob_rev(dl, "*") is None


def test_search_string_rev_goes_backwards(tmp_path):
    dl = make_list(tmp_path, ["a1", "a2", "a3"])
    dl.index = index_of(dl, "a2")
    assert dl.contents[search_string_rev(dl, "a")].name == "a1"
    dl.index = index_of(dl, "a1")
    assert dl.contents[search_string_rev(dl, "a")].name == "a3"


def test_search_glob_fwd_is_case_insensitive(tmp_path):
    dl = make_list(tmp_path, ["a.txt", "b.md", "c.md"])
    dl.index = index_of(dl, "b.md")
    assert dl.contents[search_glob_fwd(dl, "*.TXT")].name == "a.txt"


def test_search_glob_alternation(tmp_path):
    dl = make_list(tmp_path, ["x.md", "y.txt", "z.rs"])
    dl.index = index_of(dl, "x.md")
    assert dl.contents[search_glob_fwd(dl, "*.{txt,rs}")].name == "y.txt"
    assert dl.contents[search_glob_rev(dl, "*.{txt,rs}")].name == "z.rs"


def test_search_glob_character_class(tmp_path):
    dl = make_list(tmp_path, ["file1", "fileA", "file2"])
    dl.index = index_of(dl, "fileA")
    found = search_glob_fwd(dl, "file[0-9]")
    assert dl.contents[found].name in {"file1", "file2"}
    assert search_glob_fwd(dl, "file[!0-9]") == index_of(dl, "fileA")


@pytest.mark.parametrize("pattern", ["[abc", "{a,b", "a}", "{a,{b}}", "abc\\", "[z-a]"])
def test_search_glob_invalid_pattern(tmp_path, pattern):
    dl = make_list(tmp_path, ["a"])
    with pytest.raises(AppError) as info:
        search_glob_fwd(dl, pattern)
    assert info.value.kind is ErrorKind.GLOB


def test_str_to_mode_full():
    expected = stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
    assert str_to_mode("rwxr-xr-x") == expected


def test_str_to_mode_partial_and_empty():
    assert str_to_mode("rw-r--r--") == stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH
    assert str_to_mode("") == 0
    assert str_to_mode("r") == stat.S_IRUSR


def test_str_to_mode_wrong_letter_in_position_is_ignored():
    assert str_to_mode("xxx") == stat.S_IXUSR


def test_str_to_mode_too_long():
    with pytest.raises(ValueError):
        str_to_mode("rwxrwxrwxr")


def test_remove_files_removes_files_and_trees(tmp_path):
    f = tmp_path / "f.txt"
    f.write_text("data")
    d = tmp_path / "dir"
    (d / "sub").mkdir(parents=True)
    (d / "sub" / "inner.txt").write_text("x")
    remove_files([f, d, tmp_path / "missing"])
    assert not f.exists()
    assert not d.exists()


def test_remove_files_symlink_keeps_target(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    (target / "keep.txt").write_text("x")
    link = tmp_path / "link"
    os.symlink(target, link)
    remove_files([link])
    assert not os.path.lexists(link)
    assert (target / "keep.txt").exists()


def test_rename_file_moves(tmp_path):
    src = tmp_path / "old.txt"
    src.write_text("content")
    dest = tmp_path / "new.txt"
    rename_file(src, dest)
    assert not src.exists()
    assert dest.read_text() == "content"


def test_rename_file_refuses_existing(tmp_path):
    src = tmp_path / "old.txt"
    src.write_text("a")
    dest = tmp_path / "new.txt"
    dest.write_text("b")
    with pytest.raises(FileExistsError):
        rename_file(src, dest)
    assert src.read_text() == "a"
    assert dest.read_text() == "b"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("photo.jpg", ("rename photo", ".jpg")),
        ("archive.tar.gz", ("rename archive.tar", ".gz")),
        ("Makefile", ("rename Makefile", "")),
        (".bashrc", ("rename ", ".bashrc")),
    ],
)
def test_rename_append_parts(name, expected):
    assert rename_append_parts(name) == expected


def test_rename_append_parts_round_trip():
    prefix, suffix = rename_append_parts("some.file.name")
    assert prefix[len("rename "):] + suffix == "some.file.name"


def test_select_all_toggles(tmp_path):
    dl = make_list(tmp_path, ["a", "b", "c"])
    select_entries(dl, "", SelectOption(all=True))
    assert all(entry.selected for entry in dl)
    select_entries(dl, "", SelectOption(all=True))
    assert not any(entry.selected for entry in dl)


def test_select_all_reverse_deselects(tmp_path):
    dl = make_list(tmp_path, ["a", "b"])
    for entry in dl:
        entry.selected = True
    select_entries(dl, "", SelectOption(all=True, reverse=True))
    assert not any(entry.selected for entry in dl)


def test_select_current_moves_cursor(tmp_path):
    dl = make_list(tmp_path, ["a", "b", "c"])
    dl.index = 0
    select_entries(dl, "", SelectOption())
    assert dl.contents[0].selected is True
    assert dl.index == 1
    assert [e.selected for e in dl.contents[1:]] == [False, False]


def test_select_current_at_end_stays(tmp_path):
    dl = make_list(tmp_path, ["a", "b"])
    dl.index = len(dl) - 1
    select_entries(dl, "", SelectOption(toggle=False))
    assert dl.index == len(dl) - 1
    assert dl.contents[-1].selected is True


def test_select_with_pattern(tmp_path):
    dl = make_list(tmp_path, ["a.txt", "b.txt", "c.md"])
    select_entries(dl, "*.txt", SelectOption(toggle=False))
    selected = sorted(entry.name for entry in dl.selected_entries())
    assert selected == ["a.txt", "b.txt"]


def test_select_with_pattern_is_case_sensitive(tmp_path):
    dl = make_list(tmp_path, ["a.txt", "b.txt"])
    select_entries(dl, "*.TXT", SelectOption(toggle=False))
    assert list(dl.selected_entries()) == []


def test_select_with_invalid_pattern(tmp_path):
    dl = make_list(tmp_path, ["a"])
    with pytest.raises(AppError) as info:
        select_entries(dl, "[a", SelectOption())
    assert info.value.kind is ErrorKind.GLOB