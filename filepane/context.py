"""Application state shared between commands: tabs and pending file operations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class FileOp(Enum):
    """What a paste does with the remembered paths."""

    CUT = auto()
    COPY = auto()


@dataclass
class LocalState:
    """Paths remembered by a cut or copy, waiting to be pasted."""

    paths: list[Path] = field(default_factory=list)
    file_op: FileOp = FileOp.COPY


@dataclass
class TabContext:
    """The open tabs and which one is current."""

    index: int = 0
    tabs: list[Any] = field(default_factory=list)

    def push_tab(self, tab: Any) -> None:
        """Add a tab and make it current."""
        self.tabs.append(tab)
        self.index = len(self.tabs) - 1

    def pop_tab(self, index: int) -> Any:
        """Remove and return the tab at ``index``."""
        return self.tabs.pop(index)

    def tab_at(self, i: int) -> Any | None:
        """The tab at ``i``, or None when out of range."""
        if 0 <= i < len(self.tabs):
            return self.tabs[i]
        return None

    def curr_tab(self) -> Any:
        """The current tab; raises IndexError when there is none."""
        return self.tabs[self.index]

    def switch(self, offset: int) -> int:
        """Move the current tab by ``offset``, wrapping around; return the new index."""
        if not self.tabs:
            raise IndexError("no tabs open")
        self.index = (self.index + offset) % len(self.tabs)
        return self.index

    def __len__(self) -> int:
        return len(self.tabs)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.tabs)