from __future__ import annotations

from pathlib import Path


class FormatError(ValueError):
    """Raised by a format when text does not follow its grammar."""


class LiveFileError(Exception):
    """Base class for pylivefile errors."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(LiveFileError):
    """Raised when the file is missing and ``allow_no_exist`` is false."""


class ParseError(LiveFileError):
    """Raised when a file's content cannot be parsed by its format."""


class ValidationError(LiveFileError):
    """Raised when parsed data is rejected by the validator."""

    def __init__(self, message: str, path: Path | None = None, text: str = "") -> None:
        super().__init__(message, path)
        self.text = text


class WriteError(LiveFileError):
    """Raised when data cannot be serialised or written on close."""


class ClosedError(LiveFileError):
    """Raised when a handle is used after it has been closed."""
