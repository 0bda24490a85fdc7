"""Parsing of key and mouse names used in keymap configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Key:
    """A keyboard key; ``arg`` holds the character or function-key number."""

    name: str
    arg: str | int | None = None


@dataclass(frozen=True)
class MouseEvent:
    """A mouse button press at a position."""

    button: str
    x: int = 0
    y: int = 0


_SPECIAL_KEYS: dict[str, Key] = {
    "backspace": Key("backspace"),
    "backtab": Key("backtab"),
    "arrow_left": Key("left"),
    "arrow_right": Key("right"),
    "arrow_up": Key("up"),
    "arrow_down": Key("down"),
    "home": Key("home"),
    "end": Key("end"),
    "page_up": Key("page_up"),
    "page_down": Key("page_down"),
    "delete": Key("delete"),
    "insert": Key("insert"),
    "escape": Key("esc"),
    **{f"f{n}": Key("f", n) for n in range(1, 13)},
}

_MOUSE_EVENTS: dict[str, MouseEvent] = {
    "scroll_up": MouseEvent("wheel_up", 0, 0),
    "scroll_down": MouseEvent("wheel_down", 0, 0),
}

_MODIFIER_PREFIXES = (("ctrl+", "ctrl"), ("alt+", "alt"))


def str_to_key(s: str) -> Key | None:
    """Parse a key name such as ``arrow_up``, ``ctrl+t`` or ``q``."""
    if not s:
        return None
    special = _SPECIAL_KEYS.get(s)
    if special is not None:
        return special
    for prefix, name in _MODIFIER_PREFIXES:
        if s.startswith(prefix):
            rest = s[len(prefix):]
            return Key(name, rest[0]) if rest else None
    if len(s.encode("utf-8")) == 1:
        return Key("char", s)
    return None


def str_to_mouse(s: str) -> MouseEvent | None:
    """Parse a mouse event name such as ``scroll_up``."""
    return _MOUSE_EVENTS.get(s)


def str_to_event(s: str) -> Key | MouseEvent | None:
    """Parse a key or mouse event name, keys taking precedence."""
    key = str_to_key(s)
    if key is not None:
        return key
    return str_to_mouse(s)