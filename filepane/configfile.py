"""Locating and reading TOML configuration files."""

from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any


def search_directories(
    filename: str, directories: Iterable[str | os.PathLike[str]]
) -> Path | None:
    """Return the first existing ``directory/filename``, in order of preference."""
    for directory in directories:
        candidate = Path(directory) / filename
        if candidate.exists():
            return candidate
    return None


def read_toml(
    filename: str, directories: Iterable[str | os.PathLike[str]]
) -> dict[str, Any] | None:
    """Find and parse a TOML file.

    Returns ``None`` when no file is found, or when it cannot be read or
    parsed; read and parse failures are reported on standard error.
    """
    file_path = search_directories(filename, directories)
    if file_path is None:
        return None
    try:
        contents = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        print(f"Error reading {filename} file: {err}", file=sys.stderr)
        return None
    try:
        return tomllib.loads(contents)
    except tomllib.TOMLDecodeError as err:
        print(f"Error parsing {filename} file: {err}", file=sys.stderr)
        return None