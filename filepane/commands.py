"""Searching, selecting, renaming, deleting and permission helpers for listings."""

from __future__ import annotations

import errno
import os
import re
import shutil
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import AppError, ErrorKind
from .fs import DirEntry, DirList
from .key_command import SelectOption

_PERMISSION_BITS: tuple[tuple[int, str], ...] = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def _glob_error(pattern: str, reason: str) -> AppError:
    return AppError(ErrorKind.GLOB, f"error parsing glob '{pattern}': {reason}")


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the character class opening at ``start``; return regex and next index."""
    n = len(pattern)
    i = start + 1
    negated = False
    if i < n and pattern[i] in "!^":
        negated = True
        i += 1
    items: list[str] = []
    first = True
    while i < n:
        c = pattern[i]
        if c == "]" and not first:
            body = "".join(items)
            return (f"[^{body}]" if negated else f"[{body}]"), i + 1
        first = False
        if i + 2 < n and pattern[i + 1] == "-" and pattern[i + 2] != "]":
            low, high = c, pattern[i + 2]
            if low > high:
                raise _glob_error(pattern, f"invalid range; '{low}' > '{high}'")
            items.append(f"{re.escape(low)}-{re.escape(high)}")
            i += 3
        else:
            items.append(re.escape(c))
            i += 1
    raise _glob_error(pattern, "unclosed character class; missing ']'")


def _compile_glob(pattern: str, case_insensitive: bool) -> re.Pattern[str]:
    """Compile a shell glob, with ``{a,b}`` alternation, into a whole-name regex."""
    parts: list[str] = []
    in_alternation = False
    n = len(pattern)
    i = 0
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                raise _glob_error(pattern, "dangling '\\'")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if c == "*":
            parts.append(".*")
        elif c == "?":
            parts.append(".")
        elif c == "[":
            regex, i = _translate_class(pattern, i)
            parts.append(regex)
            continue
        elif c == "{":
            if in_alternation:
                raise _glob_error(pattern, "nested alternate groups are not allowed")
            in_alternation = True
            parts.append("(?:")
        elif c == "}":
            if not in_alternation:
                raise _glob_error(
                    pattern,
                    "unopened alternate group; missing '{' (maybe escape '}' with '[}]'?)",
                )
            in_alternation = False
            parts.append(")")
        elif c == "," and in_alternation:
            parts.append("|")
        else:
            parts.append(re.escape(c))
        i += 1
    if in_alternation:
        raise _glob_error(
            pattern,
            "unclosed alternate group; missing '}' (maybe escape '{' with '[{]'?)",
        )
    flags = re.DOTALL | (re.IGNORECASE if case_insensitive else 0)
    return re.compile("".join(parts), flags)


def _as_matcher(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return _compile_glob(pattern, case_insensitive=True)


def _forward_order(dirlist: DirList) -> Iterator[int]:
    if dirlist.index is None:
        return
    n = len(dirlist.contents)
    offset = dirlist.index + 1
    for i in range(n):
        yield (offset + i) % n


def _reverse_order(dirlist: DirList) -> Iterator[int]:
    if dirlist.index is None:
        return
    n = len(dirlist.contents)
    offset = dirlist.index
    for i in reversed(range(n)):
        yield (offset + i) % n


def _first_match(dirlist: DirList, order: Iterable[int], matches) -> int | None:
    return next((i for i in order if matches(dirlist.contents[i].name)), None)


def search_string_fwd(dirlist: DirList, pattern: str) -> int | None:
    """Index of the next entry after the cursor whose name contains ``pattern``.

    Matching ignores case and wraps around, ending at the cursor itself.
    """
    needle = pattern.lower()
    return _first_match(dirlist, _forward_order(dirlist), lambda name: needle in name.lower())


def search_string_rev(dirlist: DirList, pattern: str) -> int | None:
    """Index of the previous entry before the cursor whose name contains ``pattern``."""
    needle = pattern.lower()
    return _first_match(dirlist, _reverse_order(dirlist), lambda name: needle in name.lower())


def search_glob_fwd(dirlist: DirList, pattern: str | re.Pattern[str]) -> int | None:
    """Index of the next entry after the cursor whose name matches the glob.

    A string pattern is matched without regard to case; raises ``AppError``
    of kind ``GLOB`` if it is malformed.
    """
    matcher = _as_matcher(pattern)
    return _first_match(dirlist, _forward_order(dirlist), lambda name: bool(matcher.fullmatch(name)))


def search_glob_rev(dirlist: DirList, pattern: str | re.Pattern[str]) -> int | None:
    """Index of the previous entry before the cursor whose name matches the glob."""
    matcher = _as_matcher(pattern)
    return _first_match(dirlist, _reverse_order(dirlist), lambda name: bool(matcher.fullmatch(name)))


def str_to_mode(s: str) -> int:
    """Convert a permission string such as ``rwxr-xr-x`` to mode bits.

    Each position sets its bit when it holds the expected letter; any other
    character leaves it clear. More than nine characters is an error.
    """
    if len(s) > len(_PERMISSION_BITS):
        raise ValueError(f"permission string too long: {s!r}")
    mode = 0
    for ch, (bit, letter) in zip(s, _PERMISSION_BITS):
        if ch == letter:
            mode |= bit
    return mode


def remove_files(paths: Iterable[str | os.PathLike[str]]) -> None:
    """Delete each path, directories recursively; paths that do not exist are skipped."""
    for path in paths:
        try:
            info = os.lstat(path)
        except OSError:
            continue
        if stat.S_ISDIR(info.st_mode):
            shutil.rmtree(path)
        else:
            os.remove(path)


def rename_file(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Rename ``src`` to ``dest``, refusing to replace an existing file."""
    if os.path.exists(dest):
        raise FileExistsError(errno.EEXIST, "Filename already exists", os.fspath(dest))
    os.rename(src, dest)


def rename_append_parts(file_name: str) -> tuple[str, str]:
    """Command-line prefix and suffix for renaming with the cursor before the extension."""
    dot = file_name.rfind(".")
    if dot == -1:
        return f"rename {file_name}", ""
    return f"rename {file_name[:dot]}", file_name[dot:]


def _apply_selection(entry: DirEntry, options: SelectOption) -> None:
    if options.reverse:
        entry.selected = False
    elif options.toggle:
        entry.selected = not entry.selected
    else:
        entry.selected = True


def select_entries(dirlist: DirList, pattern: str, options: SelectOption) -> None:
    """Select, deselect or toggle entries of a listing.

    With a glob ``pattern`` (case-sensitive) every matching entry is changed.
    Without one, either every entry (``options.all``) or just the current
    entry is changed, and in the latter case the cursor moves down by one.
    """
    if pattern:
        matcher = _compile_glob(pattern, case_insensitive=False)
        for entry in dirlist:
            if matcher.fullmatch(entry.name):
                _apply_selection(entry, options)
        return

    if options.all:
        for entry in dirlist:
            _apply_selection(entry, options)
        return

    current = dirlist.curr_entry()
    if current is None:
        return
    _apply_selection(current, options)
    if dirlist.index is not None and dirlist.contents:
        dirlist.index = min(dirlist.index + 1, len(dirlist.contents) - 1)