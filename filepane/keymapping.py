"""Key bindings: single keys and key sequences mapped to commands."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Union

from .configfile import read_toml
from .errors import AppError
from .key_command import KeyCommand, parse_command
from .keyparse import Key, MouseEvent, str_to_event

Event = Union[Key, MouseEvent]

_DEFAULT_BINDINGS: tuple[tuple[str, tuple[Event, ...]], ...] = (
    ("cursor_move_up", (Key("up"),)),
    ("cursor_move_down", (Key("down"),)),
    ("cd ..", (Key("left"),)),
    ("open", (Key("right"),)),
    ("open", (Key("char", "\n"),)),
    ("cursor_move_home", (Key("home"),)),
    ("cursor_move_end", (Key("end"),)),
    ("cursor_move_page_up", (Key("page_up"),)),
    ("cursor_move_page_down", (Key("page_down"),)),
    ("cursor_move_up", (Key("char", "k"),)),
    ("cursor_move_down", (Key("char", "j"),)),
    ("cd ..", (Key("char", "h"),)),
    ("open", (Key("char", "l"),)),
    ("new_tab", (Key("char", "T"),)),
    ("new_tab", (Key("ctrl", "t"),)),
    ("close_tab", (Key("char", "W"),)),
    ("close_tab", (Key("ctrl", "w"),)),
    ("close_tab", (Key("char", "q"),)),
    ("force_quit", (Key("char", "Q"),)),
    ("reload_dirlist", (Key("char", "R"),)),
    ("toggle_hidden", (Key("char", "z"), Key("char", "h"))),
    ("tab_switch 1", (Key("char", "\t"),)),
    ("tab_switch -1", (Key("backtab"),)),
    ("open_with", (Key("char", "r"),)),
    ("cut_files", (Key("char", "d"), Key("char", "d"))),
    ("copy_files", (Key("char", "y"), Key("char", "y"))),
    ("paste_files", (Key("char", "p"), Key("char", "p"))),
    ("delete_files", (Key("delete"),)),
    ("delete_files", (Key("char", "D"), Key("char", "d"))),
    ("rename_append", (Key("char", "a"),)),
    ("rename_prepend", (Key("char", "A"),)),
    (":search ", (Key("char", "/"),)),
    ("search_next", (Key("char", "n"),)),
    ("search_prev", (Key("char", "N"),)),
    ("bulk_rename", (Key("char", "b"), Key("char", "b"))),
    ("set_mode", (Key("char", "="),)),
    (":", (Key("char", ";"),)),
    (":mkdir ", (Key("char", "m"), Key("char", "k"))),
    (":rename ", (Key("char", "c"), Key("char", "w"))),
)


def _quoted_list(items: Iterable[str]) -> str:
    return "[" + ", ".join(f'"{item}"' for item in items) + "]"


class KeyMapping:
    """Maps an event to a command, or to a nested mapping for key sequences."""

    def __init__(self) -> None:
        self._map: dict[Event, KeyCommand | KeyMapping] = {}

    def insert(self, command: KeyCommand, events: Sequence[Event]) -> None:
        """Bind ``command`` to the event sequence; raises ValueError if ambiguous."""
        if not events:
            return
        first, rest = events[0], events[1:]
        existing = self._map.get(first)
        if not rest:
            if existing is not None:
                raise ValueError(f"Error: Keybindings ambiguous for {command}")
            self._map[first] = command
            return
        if existing is None:
            nested = KeyMapping()
            nested.insert(command, rest)
            self._map[first] = nested
        elif isinstance(existing, KeyMapping):
            existing.insert(command, rest)
        else:
            raise ValueError(f"Error: Keybindings ambiguous for {command}")

    @classmethod
    def default(cls) -> KeyMapping:
        """The built-in key bindings."""
        mapping = cls()
        try:
            for text, events in _DEFAULT_BINDINGS:
                mapping.insert(parse_command(text), events)
        except ValueError:
            pass
        return mapping

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KeyMapping:
        """Build from a keymap document; bad bindings are reported and skipped."""
        entries = data.get("mapcommand", [])
        if not isinstance(entries, list):
            raise ValueError("`mapcommand` must be an array of tables")
        for item in entries:
            if not isinstance(item, Mapping):
                raise ValueError("`mapcommand` must be an array of tables")
            if not isinstance(item.get("command"), str):
                raise ValueError("missing field `command`")
            keys = item.get("keys")
            if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
                raise ValueError("missing field `keys`")

        mapping = cls()
        for item in entries:
            try:
                command = parse_command(item["command"])
            except AppError as err:
                print(err, file=sys.stderr)
                continue
            keys = item["keys"]
            events = [event for event in map(str_to_event, keys) if event is not None]
            if len(events) != len(keys):
                print(f"Failed to parse events: {_quoted_list(keys)}", file=sys.stderr)
                continue
            try:
                mapping.insert(command, events)
            except ValueError as err:
                print(err, file=sys.stderr)
        return mapping

    @classmethod
    def load(
        cls, file_name: str, directories: Iterable[str | os.PathLike[str]]
    ) -> KeyMapping:
        """Load from the first matching file, falling back to the defaults."""
        data = read_toml(file_name, directories)
        if data is None:
            return cls.default()
        try:
            return cls.from_dict(data)
        except (TypeError, ValueError) as err:
            print(f"Error parsing {file_name} file: {err}", file=sys.stderr)
            return cls.default()

    def get(self, event: Event) -> KeyCommand | KeyMapping | None:
        return self._map.get(event)

    def __getitem__(self, event: Event) -> KeyCommand | KeyMapping:
        return self._map[event]

    def __contains__(self, event: object) -> bool:
        return event in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._map)

    def items(self) -> Iterator[tuple[Event, KeyCommand | KeyMapping]]:
        return iter(self._map.items())

    def __str__(self) -> str:
        return "..."