"""Colours and styles used to draw directory entries."""

from __future__ import annotations

import dataclasses
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Any, ClassVar


@dataclass(frozen=True)
class Color:
    """A terminal colour: a named colour, or ``rgb`` with a channel triple."""

    name: str
    rgb: tuple[int, int, int] | None = None

    RESET: ClassVar[Color]
    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    CYAN: ClassVar[Color]
    GRAY: ClassVar[Color]
    DARK_GRAY: ClassVar[Color]
    LIGHT_RED: ClassVar[Color]
    LIGHT_GREEN: ClassVar[Color]
    LIGHT_YELLOW: ClassVar[Color]
    LIGHT_BLUE: ClassVar[Color]
    LIGHT_MAGENTA: ClassVar[Color]
    LIGHT_CYAN: ClassVar[Color]
    WHITE: ClassVar[Color]


Color.RESET = Color("reset")
Color.BLACK = Color("black")
Color.RED = Color("red")
Color.GREEN = Color("green")
Color.YELLOW = Color("yellow")
Color.BLUE = Color("blue")
Color.MAGENTA = Color("magenta")
Color.CYAN = Color("cyan")
Color.GRAY = Color("gray")
Color.DARK_GRAY = Color("dark_gray")
Color.LIGHT_RED = Color("light_red")
Color.LIGHT_GREEN = Color("light_green")
Color.LIGHT_YELLOW = Color("light_yellow")
Color.LIGHT_BLUE = Color("light_blue")
Color.LIGHT_MAGENTA = Color("light_magenta")
Color.LIGHT_CYAN = Color("light_cyan")
Color.WHITE = Color("white")

_NAMED_COLORS: dict[str, Color] = {
    c.name: c
    for c in (
        Color.BLACK, Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE,
        Color.MAGENTA, Color.CYAN, Color.GRAY, Color.DARK_GRAY,
        Color.LIGHT_RED, Color.LIGHT_GREEN, Color.LIGHT_YELLOW,
        Color.LIGHT_BLUE, Color.LIGHT_MAGENTA, Color.LIGHT_CYAN,
        Color.WHITE, Color.RESET,
    )
}

_RGB_FUNC = re.compile(r"^\s*rgb\s*\(([^,]+),([^,]+),([^)]+)\)\s*$", re.IGNORECASE)
_HEX = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Modifier(Flag):
    """Text attributes; ``Modifier(0)`` is the empty set."""

    BOLD = auto()
    UNDERLINED = auto()
    REVERSED = auto()


def _channel(text: str) -> int:
    value = float(text.strip())
    if math.isnan(value):
        return 0
    return max(0, min(255, int(value)))


def _parse_rgb(s: str) -> tuple[int, int, int] | None:
    match = _RGB_FUNC.match(s)
    if match:
        try:
            r, g, b = (_channel(part) for part in match.groups())
        except ValueError:
            return None
        return (r, g, b)
    match = _HEX.match(s.strip())
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    return None


def str_to_color(s: str) -> Color:
    """Parse a colour name or RGB value; anything unrecognised is ``RESET``."""
    named = _NAMED_COLORS.get(s)
    if named is not None:
        return named
    if not s:
        return Color.RESET
    rgb = _parse_rgb(s)
    if rgb is None:
        return Color.RESET
    return Color("rgb", rgb)


@dataclass(frozen=True)
class AppStyle:
    """Foreground, background and text attributes of a drawn item."""

    fg: Color = Color.RESET
    bg: Color = Color.RESET
    modifier: Modifier = Modifier(0)

    def with_fg(self, fg: Color) -> AppStyle:
        return dataclasses.replace(self, fg=fg)

    def with_bg(self, bg: Color) -> AppStyle:
        return dataclasses.replace(self, bg=bg)

    def with_modifier(self, modifier: Modifier) -> AppStyle:
        """Return a copy with ``modifier`` added to the current attributes."""
        return dataclasses.replace(self, modifier=self.modifier | modifier)


@dataclass
class RawStyle:
    """A style as written in the theme file."""

    fg: str = ""
    bg: str = ""
    bold: bool = False
    underline: bool = False
    invert: bool = False

    def to_style(self) -> AppStyle:
        modifier = Modifier(0)
        if self.bold:
            modifier |= Modifier.BOLD
        if self.underline:
            modifier |= Modifier.UNDERLINED
        if self.invert:
            modifier |= Modifier.REVERSED
        return (
            AppStyle()
            .with_fg(str_to_color(self.fg))
            .with_bg(str_to_color(self.bg))
            .with_modifier(modifier)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawStyle:
        return cls(
            fg=str(data.get("fg", "")),
            bg=str(data.get("bg", "")),
            bold=bool(data.get("bold", False)),
            underline=bool(data.get("underline", False)),
            invert=bool(data.get("invert", False)),
        )


def _bold(fg: Color) -> AppStyle:
    return AppStyle().with_fg(fg).with_modifier(Modifier.BOLD)


@dataclass
class AppTheme:
    """Styles for each kind of directory entry, plus per-extension styles."""

    regular: AppStyle = field(default_factory=lambda: AppStyle().with_fg(Color.WHITE))
    selection: AppStyle = field(default_factory=lambda: _bold(Color.LIGHT_YELLOW))
    directory: AppStyle = field(default_factory=lambda: _bold(Color.LIGHT_BLUE))
    executable: AppStyle = field(default_factory=lambda: _bold(Color.LIGHT_GREEN))
    link: AppStyle = field(default_factory=lambda: _bold(Color.LIGHT_CYAN))
    socket: AppStyle = field(default_factory=lambda: _bold(Color.LIGHT_MAGENTA))
    ext: dict[str, AppStyle] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AppTheme:
        """Build a theme from a theme document; missing sections get a plain style."""

        def style(name: str) -> AppStyle:
            return RawStyle.from_dict(data.get(name, {})).to_style()

        return cls(
            regular=style("regular"),
            selection=style("selection"),
            directory=style("directory"),
            executable=style("executable"),
            link=style("link"),
            socket=style("socket"),
            ext={
                key: RawStyle.from_dict(value).to_style()
                for key, value in data.get("ext", {}).items()
            },
        )