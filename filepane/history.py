"""Cache of directory listings visited in a tab, keyed by path."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from .fs import DirEntry, DirList

if TYPE_CHECKING:
    from .options import DisplayOption


def _index_of_path(entries: Iterable[DirEntry], target: Path) -> int | None:
    return next((i for i, entry in enumerate(entries) if entry.path == target), None)


class DirectoryHistory(dict[Path, DirList]):
    """Directory listings by path, reused and refreshed as the user moves around."""

    def populate_to_root(self, path: str | os.PathLike[str], options: DisplayOption) -> None:
        """Load ``path`` and every ancestor, pointing each parent's cursor at its child."""
        path = Path(path)
        previous: Path | None = None
        for current in (path, *path.parents):
            dirlist = self.get(current)
            if dirlist is None:
                dirlist = DirList(current, options)
                self[current] = dirlist
            else:
                dirlist.reload_contents(options)
            if previous is not None:
                index = _index_of_path(dirlist.contents, previous)
                if index is not None:
                    dirlist.index = index
            previous = current

    def create_or_soft_update(
        self, path: str | os.PathLike[str], options: DisplayOption
    ) -> None:
        """Load ``path`` if absent, otherwise reload it only when it is stale."""
        path = Path(path)
        dirlist = self.get(path)
        if dirlist is None:
            self[path] = DirList(path, options)
        elif dirlist.need_update():
            dirlist.reload_contents(options)

    def create_or_reload(self, path: str | os.PathLike[str], options: DisplayOption) -> None:
        """Load ``path`` if absent, otherwise reload it, dropping it if that fails."""
        path = Path(path)
        if path in self:
            self.reload(path, options)
        else:
            self[path] = DirList(path, options)

    def reload(self, path: str | os.PathLike[str], options: DisplayOption) -> None:
        """Reload ``path`` if present, dropping it if it can no longer be read."""
        path = Path(path)
        dirlist = self.get(path)
        if dirlist is None:
            return
        try:
            dirlist.reload_contents(options)
        except OSError:
            del self[path]

    def depreciate_all_entries(self) -> None:
        """Mark every cached listing as stale."""
        for dirlist in self.values():
            dirlist.depreciate()

    def depreciate_entry(self, path: str | os.PathLike[str]) -> None:
        """Mark the listing for ``path`` as stale, if it is cached."""
        dirlist = self.get(Path(path))
        if dirlist is not None:
            dirlist.depreciate()