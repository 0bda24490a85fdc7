"""Directory entries, their metadata and directory listings."""

from __future__ import annotations

import functools
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .options import DisplayOption


class FileType(Enum):
    DIRECTORY = auto()
    SYMLINK = auto()
    FILE = auto()


@dataclass
class Metadata:
    """File information taken without following symbolic links."""

    size: int
    modified: int
    mode: int
    uid: int
    gid: int
    file_type: FileType
    link_target: str = ""

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Metadata:
        """Read metadata for ``path``; ``modified`` is in nanoseconds."""
        info = os.lstat(path)
        link_target = ""
        if stat.S_ISDIR(info.st_mode):
            file_type = FileType.DIRECTORY
        elif stat.S_ISLNK(info.st_mode):
            file_type = FileType.SYMLINK
            try:
                link_target = os.readlink(path)
            except OSError:
                link_target = ""
        else:
            file_type = FileType.FILE
        return cls(
            size=info.st_size,
            modified=info.st_mtime_ns,
            mode=info.st_mode,
            uid=info.st_uid,
            gid=info.st_gid,
            file_type=file_type,
            link_target=link_target,
        )


@functools.total_ordering
@dataclass(eq=False)
class DirEntry:
    """One item of a directory listing; equal and ordered by path."""

    name: str
    label: str
    path: Path
    metadata: Metadata
    selected: bool = False
    marked: bool = False

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], show_icons: bool = False) -> DirEntry:
        path = Path(path)
        metadata = Metadata.from_path(path)
        name = path.name
        return cls(name=name, label=name, path=path, metadata=metadata)

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirEntry):
            return NotImplemented
        return self.path == other.path

    def __lt__(self, other: DirEntry) -> bool:
        if not isinstance(other, DirEntry):
            return NotImplemented
        return self.path < other.path

    def __hash__(self) -> int:
        return hash(self.path)


def _read_dir_list(path: Path, options: DisplayOption) -> list[DirEntry]:
    entries = []
    with os.scandir(path) as it:
        for item in it:
            if not options.filter_entry(item.name):
                continue
            try:
                entries.append(DirEntry.from_path(item.path, options.show_icons))
            except OSError:
                continue
    return options.sort_options.sort_entries(entries)


class DirList:
    """The sorted, filtered contents of a directory with a cursor."""

    def __init__(self, path: str | os.PathLike[str], options: DisplayOption) -> None:
        self.path = Path(path)
        self.contents: list[DirEntry] = _read_dir_list(self.path, options)
        self.index: int | None = 0 if self.contents else None
        self.metadata = Metadata.from_path(self.path)
        self.content_outdated = False

    def __len__(self) -> int:
        return len(self.contents)

    def __iter__(self) -> Iterator[DirEntry]:
        return iter(self.contents)

    def modified(self) -> bool:
        """Whether the directory changed on disk since it was last read."""
        try:
            return os.lstat(self.path).st_mtime_ns > self.metadata.modified
        except OSError:
            return False

    def depreciate(self) -> None:
        """Mark the contents as stale."""
        self.content_outdated = True

    def need_update(self) -> bool:
        return self.content_outdated or self.modified()

    def reload_contents(self, options: DisplayOption) -> None:
        """Re-read the directory, keeping the cursor on the same name if possible."""
        contents = _read_dir_list(self.path, options)
        if not contents:
            index = None
        elif self.index is None:
            index = 0
        elif self.index >= len(contents):
            index = len(contents) - 1
        else:
            index = self.index
            if self.index < len(self.contents):
                old_name = self.contents[self.index].name
                index = next(
                    (i for i, e in enumerate(contents) if e.name == old_name),
                    self.index,
                )
        self.metadata = Metadata.from_path(self.path)
        self.contents = contents
        self.index = index
        self.content_outdated = False

    def selected_entries(self) -> Iterator[DirEntry]:
        return (entry for entry in self.contents if entry.selected)

    def selected_paths(self) -> list[Path]:
        """Paths of selected entries, or of the current entry if none is selected."""
        paths = [entry.path for entry in self.selected_entries()]
        if paths:
            return paths
        current = self.curr_entry()
        return [current.path] if current is not None else []

    def curr_entry(self) -> DirEntry | None:
        if self.index is None or not 0 <= self.index < len(self.contents):
            return None
        return self.contents[self.index]