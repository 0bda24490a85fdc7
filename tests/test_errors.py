import errno

import pytest

from filepane.errors import AppError, ErrorKind, from_os_error


def test_str_is_cause():
    error = AppError(ErrorKind.PARSE_ERROR, "bad number")
    assert str(error) == "bad number"
    assert error.kind is ErrorKind.PARSE_ERROR
    assert error.cause == "bad number"


@pytest.mark.parametrize(
    "kind, cause",
    [
        (ErrorKind.UNRECOGNIZED_COMMAND, "Unknown command: foo"),
        (ErrorKind.INVALID_PARAMETERS, "mkdir: missing additional parameter"),
        (ErrorKind.UNRECOGNIZED_ARGUMENT, "paste_files: unknown option '--x'"),
    ],
)
def test_kind_and_cause_are_kept(kind, cause):
    error = AppError(kind, cause)
    assert error.kind is kind
    assert error.cause == cause
    assert str(error) == cause


def test_from_os_error_keeps_kind_and_message():
    err = FileNotFoundError(errno.ENOENT, "No such file", "missing.txt")
    wrapped = from_os_error(err)
    assert wrapped.kind is ErrorKind.IO
    assert wrapped.errno == errno.ENOENT
    assert str(wrapped) == str(err)
    assert wrapped.__cause__ is err


def test_from_os_error_without_errno():
    wrapped = from_os_error(OSError("plain failure"))
    assert wrapped.errno is None
    assert str(wrapped) == "plain failure"
    assert wrapped.kind is ErrorKind.IO