"""Commands that can be bound to keys or typed on the command line."""

from __future__ import annotations

import os
import re
import shlex
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import AppError, ErrorKind
from .options import _SORT_METHODS

_USIZE_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass(frozen=True)
class IoWorkerOptions:
    """Options for a paste operation."""

    overwrite: bool = False
    skip_exist: bool = False

    def __str__(self) -> str:
        return f"overwrite={str(self.overwrite).lower()} skip_exist={str(self.skip_exist).lower()}"


@dataclass(frozen=True)
class SelectOption:
    """Options for selecting entries."""

    toggle: bool = True
    all: bool = False
    reverse: bool = False

    def __str__(self) -> str:
        return (
            f"--toggle={str(self.toggle).lower()} "
            f"--all={str(self.all).lower()} "
            f"--deselect={str(self.reverse).lower()}"
        )


class Action(Enum):
    """Every kind of command; the value is its command-line name."""

    BULK_RENAME = "bulk_rename"
    CHANGE_DIRECTORY = "cd"
    COMMAND_LINE = ":"
    CUT_FILES = "cut_files"
    COPY_FILES = "copy_files"
    PASTE_FILES = "paste_files"
    COPY_FILE_NAME = "copy_filename"
    CURSOR_MOVE_UP = "cursor_move_up"
    CURSOR_MOVE_DOWN = "cursor_move_down"
    CURSOR_MOVE_HOME = "cursor_move_home"
    CURSOR_MOVE_END = "cursor_move_end"
    CURSOR_MOVE_PAGE_UP = "cursor_move_page_up"
    CURSOR_MOVE_PAGE_DOWN = "cursor_move_page_down"
    PARENT_CURSOR_MOVE_UP = "parent_cursor_move_up"
    PARENT_CURSOR_MOVE_DOWN = "parent_cursor_move_down"
    DELETE_FILES = "delete_files"
    NEW_DIRECTORY = "mkdir"
    OPEN_FILE = "open"
    OPEN_FILE_WITH = "open_with"
    PARENT_DIRECTORY = "cd .."
    QUIT = "quit"
    FORCE_QUIT = "force_quit"
    RELOAD_DIR_LIST = "reload_dirlist"
    RENAME_FILE = "rename"
    RENAME_FILE_APPEND = "rename_append"
    RENAME_FILE_PREPEND = "rename_prepend"
    SEARCH_GLOB = "search_glob"
    SEARCH_STRING = "search"
    SEARCH_NEXT = "search_next"
    SEARCH_PREV = "search_prev"
    SELECT_FILES = "select"
    SET_MODE = "set_mode"
    SHELL_COMMAND = "shell"
    SHOW_WORKERS = "show_workers"
    TOGGLE_HIDDEN_FILES = "toggle_hidden"
    SORT = "sort"
    SORT_REVERSE = "sort reverse"
    NEW_TAB = "new_tab"
    CLOSE_TAB = "close_tab"
    TAB_SWITCH = "tab_switch"


def _debug_str(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


@dataclass(frozen=True)
class KeyCommand:
    """A command and its arguments."""

    action: Action
    args: tuple[Any, ...] = ()

    def command(self) -> str:
        """The command's name."""
        return self.action.value

    def __str__(self) -> str:
        name = self.command()
        action = self.action
        if action in (Action.CHANGE_DIRECTORY, Action.NEW_DIRECTORY, Action.RENAME_FILE):
            return f"{name} {_debug_str(os.fspath(self.args[0]))}"
        if action is Action.COMMAND_LINE:
            prefix, suffix = self.args
            return f"{name} {prefix} {suffix}"
        if action is Action.PASTE_FILES:
            return f"{name}  {self.args[0]}"
        if action is Action.SELECT_FILES:
            pattern, options = self.args
            return f"{name} {pattern} {options}"
        if action is Action.SHELL_COMMAND:
            words = ", ".join(_debug_str(w) for w in self.args)
            return f"{name} [{words}]"
        if action in (
            Action.CURSOR_MOVE_UP,
            Action.CURSOR_MOVE_DOWN,
            Action.SEARCH_GLOB,
            Action.SEARCH_STRING,
            Action.SORT,
            Action.TAB_SWITCH,
        ):
            return f"{name} {self.args[0]}"
        return name


_SIMPLE = {
    "bulk_rename": Action.BULK_RENAME,
    "close_tab": Action.CLOSE_TAB,
    "copy_files": Action.COPY_FILES,
    "copy_filename": Action.COPY_FILE_NAME,
    "cursor_move_home": Action.CURSOR_MOVE_HOME,
    "cursor_move_end": Action.CURSOR_MOVE_END,
    "cursor_move_page_up": Action.CURSOR_MOVE_PAGE_UP,
    "cursor_move_page_down": Action.CURSOR_MOVE_PAGE_DOWN,
    "cut_files": Action.CUT_FILES,
    "delete_files": Action.DELETE_FILES,
    "force_quit": Action.FORCE_QUIT,
    "new_tab": Action.NEW_TAB,
    "open": Action.OPEN_FILE,
    "quit": Action.QUIT,
    "reload_dirlist": Action.RELOAD_DIR_LIST,
    "rename_append": Action.RENAME_FILE_APPEND,
    "rename_prepend": Action.RENAME_FILE_PREPEND,
    "search_next": Action.SEARCH_NEXT,
    "search_prev": Action.SEARCH_PREV,
    "set_mode": Action.SET_MODE,
    "show_workers": Action.SHOW_WORKERS,
    "toggle_hidden": Action.TOGGLE_HIDDEN_FILES,
}

_COUNTED = {
    "cursor_move_down": Action.CURSOR_MOVE_DOWN,
    "cursor_move_up": Action.CURSOR_MOVE_UP,
    "parent_cursor_move_down": Action.PARENT_CURSOR_MOVE_DOWN,
    "parent_cursor_move_up": Action.PARENT_CURSOR_MOVE_UP,
}

_REQUIRED_TEXT = {
    "search": Action.SEARCH_STRING,
    "search_glob": Action.SEARCH_GLOB,
}

_PASTE_FLAGS = {
    "--overwrite=true": ("overwrite", True),
    "--skip_exist=true": ("skip_exist", True),
    "--overwrite=false": ("overwrite", False),
    "--skip_exist=false": ("skip_exist", False),
}

_SELECT_FLAGS = {
    "--toggle=true": ("toggle", True),
    "--all=true": ("all", True),
    "--toggle=false": ("toggle", False),
    "--all=false": ("all", False),
    "--deselect=true": ("reverse", True),
    "--deselect=false": ("reverse", False),
}


def _parse_integer(text: str, low: int, high: int) -> int:
    """Parse a decimal integer within [low, high]; ValueError carries the reason."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    pattern = r"[+-]?[0-9]+" if low < 0 else r"\+?[0-9]+"
    if not re.fullmatch(pattern, text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > high:
        raise ValueError("number too large to fit in target type")
    if value < low:
        raise ValueError("number too small to fit in target type")
    return value


def _parse_count(arg: str) -> int:
    try:
        return _parse_integer(arg.strip(), 0, _USIZE_MAX)
    except ValueError as err:
        raise AppError(ErrorKind.PARSE_ERROR, str(err)) from None


def _home_dir() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def _expand_tilde(arg: str) -> str:
    if arg == "~" or arg.startswith("~/"):
        home = _home_dir()
        if home is not None:
            return str(home) + arg[1:]
    return arg


def _split_words(arg: str) -> list[str]:
    try:
        return shlex.split(arg)
    except ValueError as err:
        raise AppError(ErrorKind.INVALID_PARAMETERS, f"{arg}: {err}") from None


def parse_command(s: str) -> KeyCommand:
    """Parse a command line such as ``cursor_move_down 3`` into a command."""
    if s.startswith(":"):
        return KeyCommand(Action.COMMAND_LINE, (s[1:], ""))

    command, sep, rest = s.partition(" ")
    arg = (sep + rest).lstrip() if sep else ""

    if command in _SIMPLE:
        return KeyCommand(_SIMPLE[command])

    if command in _COUNTED:
        count = 1 if arg == "" else _parse_count(arg)
        return KeyCommand(_COUNTED[command], (count,))

    if command in _REQUIRED_TEXT:
        if arg == "":
            raise AppError(ErrorKind.INVALID_PARAMETERS, f"{command}: Expected 1, got 0")
        return KeyCommand(_REQUIRED_TEXT[command], (arg,))

    if command == "cd":
        if arg == "":
            home = _home_dir()
            if home is None:
                raise AppError(
                    ErrorKind.ENV_VAR_NOT_PRESENT,
                    f"{command}: Cannot find home directory",
                )
            return KeyCommand(Action.CHANGE_DIRECTORY, (home,))
        if arg == "..":
            return KeyCommand(Action.PARENT_DIRECTORY)
        return KeyCommand(Action.CHANGE_DIRECTORY, (Path(_expand_tilde(arg)),))

    if command == "mkdir":
        if arg == "":
            raise AppError(
                ErrorKind.INVALID_PARAMETERS,
                f"{command}: missing additional parameter",
            )
        return KeyCommand(Action.NEW_DIRECTORY, (Path(arg),))

    if command == "open_with":
        index = None if arg == "" else _parse_count(arg)
        return KeyCommand(Action.OPEN_FILE_WITH, (index,))

    if command == "paste_files":
        options = IoWorkerOptions()
        for word in arg.split():
            if word not in _PASTE_FLAGS:
                raise AppError(
                    ErrorKind.UNRECOGNIZED_ARGUMENT,
                    f"{command}: unknown option '{word}'",
                )
            name, value = _PASTE_FLAGS[word]
            options = replace(options, **{name: value})
        return KeyCommand(Action.PASTE_FILES, (options,))

    if command == "rename":
        if arg == "":
            raise AppError(ErrorKind.INVALID_PARAMETERS, f"{command}: Expected 1, got 0")
        return KeyCommand(Action.RENAME_FILE, (Path(arg),))

    if command == "select":
        options = SelectOption()
        pattern = ""
        for word in _split_words(arg):
            if word in _SELECT_FLAGS:
                name, value = _SELECT_FLAGS[word]
                options = replace(options, **{name: value})
            else:
                pattern = word
        return KeyCommand(Action.SELECT_FILES, (pattern, options))

    if command == "shell":
        words = _split_words(arg)
        if not words:
            raise AppError(ErrorKind.INVALID_PARAMETERS, f"sort: args {arg}")
        return KeyCommand(Action.SHELL_COMMAND, tuple(words))

    if command == "sort":
        if arg == "reverse":
            return KeyCommand(Action.SORT_REVERSE)
        if arg in _SORT_METHODS:
            return KeyCommand(Action.SORT, (arg,))
        raise AppError(ErrorKind.INVALID_PARAMETERS, f"sort: Unknown option {arg}")

    if command == "tab_switch":
        try:
            offset = _parse_integer(arg, _I32_MIN, _I32_MAX)
        except ValueError as err:
            raise AppError(ErrorKind.INVALID_PARAMETERS, f"{command}: {err}") from None
        return KeyCommand(Action.TAB_SWITCH, (offset,))

    raise AppError(ErrorKind.UNRECOGNIZED_COMMAND, f"Unknown command: {command}")