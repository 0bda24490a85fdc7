"""Programs used to open files, keyed by file extension."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class MimetypeEntry:
    """A program, with its arguments and launch flags, for opening files."""

    command: str = ""
    args: list[str] = field(default_factory=list)
    fork: bool = False
    silent: bool = False
    confirm_exit: bool = False

    def add_args(self, args: Iterable[str]) -> MimetypeEntry:
        """Append arguments and return this entry."""
        self.args.extend(str(arg) for arg in args)
        return self

    def execute_with(self, paths: Iterable[str | os.PathLike[str]]) -> None:
        """Run the program on the given paths, waiting unless it forks."""
        argv = [self.command, *self.args, *(os.fspath(p) for p in paths)]
        output = subprocess.DEVNULL if self.silent else None
        process = subprocess.Popen(argv, stdout=output, stderr=output)
        if not self.fork:
            process.wait()
            if self.confirm_exit:
                print(" --- Press ENTER to continue --- ", flush=True)
                sys.stdin.buffer.read(1)

    def __str__(self) -> str:
        parts = [self.command, *(f" {arg}" for arg in self.args), "        "]
        if self.fork:
            parts.append("[fork]")
        if self.silent:
            parts.append("[silent]")
        if self.confirm_exit:
            parts.append("[confirm-exit]")
        return "".join(parts)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MimetypeEntry:
        """Build an entry from a configuration table; ``command`` is required."""
        if "command" not in data:
            raise ValueError("missing field `command`")
        return cls(
            command=str(data["command"]),
            args=[str(arg) for arg in data.get("args", [])],
            fork=bool(data.get("fork", False)),
            silent=bool(data.get("silent", False)),
            confirm_exit=bool(data.get("confirm_exit", False)),
        )


@dataclass
class MimetypeRegistry:
    """Lists of opening programs, keyed by file extension."""

    extension: dict[str, list[MimetypeEntry]] = field(default_factory=dict)

    def entries_for_ext(self, extension: str) -> list[MimetypeEntry]:
        """Return the entries for an extension, or an empty list."""
        return self.extension.get(extension, [])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MimetypeRegistry:
        """Build a registry from a configuration document."""
        return cls(
            extension={
                ext: [MimetypeEntry.from_dict(item) for item in entries]
                for ext, entries in data.get("extension", {}).items()
            }
        )