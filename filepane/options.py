"""Application, display, sort and preview settings."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .configfile import read_toml

_SORT_METHODS = ("lexical", "mtime", "natural")
_DEFAULT_SORT_METHOD = "natural"
_DEFAULT_COLUMN_RATIO = (1, 3, 4)
_DIGITS = re.compile(r"(\d+)")


def _field(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    if key not in data:
        return default
    value = data[key]
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"invalid value for `{key}`: {value!r}")
    elif not isinstance(value, kind):
        raise ValueError(f"invalid type for `{key}`: {value!r}")
    return value


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"`{key}` must be a table")
    return value


def _natural_key(name: str) -> tuple[tuple[int, Any], ...]:
    parts = _DIGITS.split(name)
    return tuple(
        (0, int(part)) if part.isdigit() else (1, part) for part in parts if part
    )


def _is_dir(entry: Any) -> bool:
    return os.path.isdir(entry.path)


@dataclass
class SortOption:
    """How directory contents are ordered."""

    directories_first: bool = True
    case_sensitive: bool = False
    reverse: bool = False
    sort_method: str = _DEFAULT_SORT_METHOD

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SortOption:
        """Build from the ``[display.sort]`` table; unknown methods become natural."""
        method = _field(data, "sort_method", str, None)
        if method not in _SORT_METHODS:
            method = _DEFAULT_SORT_METHOD
        return cls(
            directories_first=_field(data, "directories_first", bool, True),
            case_sensitive=_field(data, "case_sensitive", bool, False),
            reverse=_field(data, "reverse", bool, False),
            sort_method=method,
        )

    def _name(self, entry: Any) -> str:
        return entry.name if self.case_sensitive else entry.name.lower()

    def sort_entries(self, entries: Iterable[Any]) -> list[Any]:
        """Return the entries in display order."""
        if self.sort_method == "lexical":
            key = self._name
            descending = False
        elif self.sort_method == "mtime":
            def key(entry: Any) -> int:
                return entry.metadata.modified
            descending = True
        else:
            def key(entry: Any) -> tuple[Any, str]:
                name = self._name(entry)
                return (_natural_key(name), name)
            descending = False
        ordered = sorted(entries, key=key, reverse=descending != self.reverse)
        if self.directories_first:
            ordered.sort(key=lambda entry: not _is_dir(entry))
        return ordered


@dataclass
class DisplayOption:
    """Settings controlling how the panes are drawn and filtered."""

    collapse_preview: bool = True
    column_ratio: tuple[int, int, int] = _DEFAULT_COLUMN_RATIO
    show_borders: bool = True
    show_hidden: bool = False
    show_icons: bool = False
    show_preview: bool = True
    tilde_in_titlebar: bool = True
    sort_options: SortOption = field(default_factory=SortOption)

    @property
    def default_layout(self) -> tuple[tuple[int, int], ...]:
        """Column widths as (numerator, denominator) ratios."""
        left, middle, right = self.column_ratio
        total = left + middle + right
        return ((left, total), (middle, total), (right, total))

    @property
    def no_preview_layout(self) -> tuple[tuple[int, int], ...]:
        """Column widths when the preview column is collapsed."""
        left, middle, right = self.column_ratio
        total = left + middle + right
        return ((left, total), (middle + right, total), (0, total))

    def filter_entry(self, name: str) -> bool:
        """Whether an entry with this file name is shown."""
        return self.show_hidden or not name.startswith(".")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DisplayOption:
        """Build from the ``[display]`` table."""
        ratio = data.get("column_ratio")
        if ratio is None:
            column_ratio = _DEFAULT_COLUMN_RATIO
        else:
            if (
                not isinstance(ratio, (list, tuple))
                or len(ratio) != 3
                or any(isinstance(v, bool) or not isinstance(v, int) or v < 0 for v in ratio)
            ):
                raise ValueError(f"invalid value for `column_ratio`: {ratio!r}")
            column_ratio = (ratio[0], ratio[1], ratio[2])
        return cls(
            collapse_preview=_field(data, "collapse_preview", bool, True),
            column_ratio=column_ratio,
            show_borders=_field(data, "show_borders", bool, True),
            show_hidden=_field(data, "show_hidden", bool, False),
            show_icons=_field(data, "show_icons", bool, False),
            show_preview=_field(data, "show_preview", bool, True),
            tilde_in_titlebar=_field(data, "tilde_in_titlebar", bool, True),
            sort_options=SortOption.from_dict(_table(data, "sort")),
        )


@dataclass
class AppConfig:
    """General application settings."""

    max_preview_size: int = 2 * 1024 * 1024
    scroll_offset: int = 6
    use_trash: bool = True
    xdg_open: bool = False
    display_options: DisplayOption = field(default_factory=DisplayOption)

    @property
    def sort_options(self) -> SortOption:
        return self.display_options.sort_options

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AppConfig:
        defaults = cls()
        return cls(
            max_preview_size=_field(data, "max_preview_size", int, defaults.max_preview_size),
            scroll_offset=_field(data, "scroll_offset", int, defaults.scroll_offset),
            use_trash=_field(data, "use_trash", bool, True),
            xdg_open=_field(data, "xdg_open", bool, False),
            display_options=DisplayOption.from_dict(_table(data, "display")),
        )

    @classmethod
    def load(cls, file_name: str, directories: Iterable[str | os.PathLike[str]]) -> AppConfig:
        """Load from the first matching file, falling back to defaults."""
        data = read_toml(file_name, directories)
        if data is None:
            return cls()
        try:
            return cls.from_dict(data)
        except (TypeError, ValueError) as err:
            print(f"Error parsing {file_name} file: {err}", file=sys.stderr)
            return cls()


@dataclass
class PreviewEntry:
    """A program that produces a preview, with optional arguments."""

    program: str
    args: list[str] | None = None

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> PreviewEntry:
        if not isinstance(data, Mapping) or "program" not in data:
            raise ValueError("missing field `program`")
        program = data["program"]
        if not isinstance(program, str):
            raise ValueError("invalid type for `program`")
        args = data.get("args")
        if args is not None:
            if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
                raise ValueError("invalid type for `args`")
            args = list(args)
        return cls(program=program, args=args)


@dataclass
class PreviewConfig:
    """Preview programs keyed by extension and by mimetype."""

    extension: dict[str, PreviewEntry] = field(default_factory=dict)
    mimetype: dict[str, PreviewEntry] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PreviewConfig:
        return cls(
            extension={
                key: PreviewEntry._from_dict(value)
                for key, value in _table(data, "extension").items()
            },
            mimetype={
                key: PreviewEntry._from_dict(value)
                for key, value in _table(data, "mimetype").items()
            },
        )

    @classmethod
    def load(
        cls, file_name: str, directories: Iterable[str | os.PathLike[str]]
    ) -> PreviewConfig:
        """Load from the first matching file, falling back to an empty config."""
        data = read_toml(file_name, directories)
        if data is None:
            return cls()
        try:
            return cls.from_dict(data)
        except (TypeError, ValueError) as err:
            print(f"Error parsing {file_name} file: {err}", file=sys.stderr)
            return cls()