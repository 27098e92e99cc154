"""
Error taxonomy and exit-code model.

Every failure the tool can report belongs to exactly one of four kinds,
each tied to a fixed process exit code:

    InvalidInput       1   bad arguments, missing input folder, bad paths
    KeyError           2   key file missing, unreadable or not usable
    EncryptionFailure  3   the OpenPGP engine refused to encrypt
    IOError            4   reading sources, writing outputs, creating dirs

Core modules raise the exceptions defined here. Only the CLI turns them
into messages and exit codes, through `classify` and `describe`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Optional

from .config import (
    EXIT_SUCCESS,
    EXIT_INVALID_INPUT,
    EXIT_KEY_ERROR,
    EXIT_ENCRYPTION_ERROR,
    EXIT_IO_ERROR,
)


class ErrorKind(IntEnum):
    INVALID_INPUT = EXIT_INVALID_INPUT
    KEY_ERROR = EXIT_KEY_ERROR
    ENCRYPTION_FAILURE = EXIT_ENCRYPTION_ERROR
    IO_ERROR = EXIT_IO_ERROR

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ErrorKind.INVALID_INPUT: "InvalidInput",
    ErrorKind.KEY_ERROR: "KeyError",
    ErrorKind.ENCRYPTION_FAILURE: "EncryptionFailure",
    ErrorKind.IO_ERROR: "IOError",
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class EncryptorError(Exception):
    """Base class for every classified failure."""

    kind: ErrorKind = ErrorKind.ENCRYPTION_FAILURE

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class InvalidInputError(EncryptorError):
    """Raised for bad arguments or malformed paths."""

    kind = ErrorKind.INVALID_INPUT


class KeyLoadError(EncryptorError):
    """Raised when the recipient key cannot be loaded or used."""

    kind = ErrorKind.KEY_ERROR


class EncryptionFailure(EncryptorError):
    """Raised when the engine fails to encrypt a file's content."""

    kind = ErrorKind.ENCRYPTION_FAILURE


class PipelineIOError(EncryptorError):
    """Raised for filesystem failures on sources, outputs or directories."""

    kind = ErrorKind.IO_ERROR


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def kind_of(error: BaseException) -> ErrorKind:
    """
    Return the error kind for any exception.

    Unclassified exceptions are coerced: an OSError is a filesystem
    failure, anything else surfaced during a run comes from the engine.
    """

    if isinstance(error, EncryptorError):
        return error.kind
    if isinstance(error, OSError):
        return ErrorKind.IO_ERROR
    return ErrorKind.ENCRYPTION_FAILURE


def classify(error: Optional[BaseException]) -> int:
    """Map an error (or None for success) to a process exit code."""
    if error is None:
        return EXIT_SUCCESS
    return int(kind_of(error))


def describe(error: BaseException) -> str:
    """Return a single human-readable line for an error."""
    kind = kind_of(error)
    message = str(error) or error.__class__.__name__
    path = getattr(error, "path", None)

    if path is not None and str(path) not in message:
        return f"[{kind.label}] {path}: {message}"
    return f"[{kind.label}] {message}"


# ---------------------------------------------------------------------------
# Run outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunResult:
    """Terminal outcome of one invocation: success, or a single failure."""

    files_written: int
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        if self.error is None:
            return None
        return kind_of(self.error)

    @property
    def exit_code(self) -> int:
        return classify(self.error)

    @property
    def message(self) -> str:
        if self.error is None:
            return f"Encrypted {self.files_written} file(s)"
        return describe(self.error)

    @classmethod
    def success(cls, files_written: int) -> "RunResult":
        return cls(files_written=files_written)

    @classmethod
    def failure(cls, error: BaseException, files_written: int = 0) -> "RunResult":
        return cls(files_written=files_written, error=error)
