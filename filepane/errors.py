"""Error type shared by the file manager's commands and configuration."""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    """Broad category of an application error."""

    IO = auto()
    ENV_VAR_NOT_PRESENT = auto()
    PARSE_ERROR = auto()
    CLIPBOARD_ERROR = auto()
    GLOB = auto()
    INVALID_PARAMETERS = auto()
    UNRECOGNIZED_ARGUMENT = auto()
    UNRECOGNIZED_COMMAND = auto()


class AppError(Exception):
    """An error raised by a command, carrying a kind and a human-readable cause."""

    def __init__(self, kind: ErrorKind, cause: str) -> None:
        super().__init__(cause)
        self.kind = kind
        self.cause = cause
        self.errno: int | None = None

    def __str__(self) -> str:
        return self.cause


def from_os_error(err: OSError) -> AppError:
    """Wrap an ``OSError`` as an ``AppError`` of kind ``IO``."""
    error = AppError(ErrorKind.IO, str(err))
    error.errno = err.errno
    error.__cause__ = err
    return error