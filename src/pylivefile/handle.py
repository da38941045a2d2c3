from __future__ import annotations

import copy
import logging
from os import PathLike
from pathlib import Path
from types import TracebackType
from typing import Any, Generic, TypeVar

from .config import FileOptions
from .errors import (
    ClosedError,
    NotFoundError,
    ParseError,
    ValidationError,
    WriteError,
)
from .formats.base import BaseFormat

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


class LiveFile(Generic[T]):
    """A file whose parsed content is written back when the handle closes.

    The file is read once, in the constructor.  Missing or blank files and
    documents rejected by a permissive validator leave the handle without
    data, and a handle without data never touches the file.  Use the handle as
    a context manager (or call :meth:`close` from a ``finally`` block) so the
    write happens on every exit path.
    """

    def __init__(
        self,
        path: str | PathLike[str],
        fmt: BaseFormat,
        options: FileOptions | None = None,
    ) -> None:
        self._path = Path(path)
        self._format = fmt
        self._options = options if options is not None else FileOptions()
        self._closed = False
        self._data, self._text = self._read()
        self._original = self._snapshot(self._data)

    # ------------------------------------------------------------------
    # properties
    # ------------------------------------------------------------------
    @property
    def path(self) -> Path:
        return self._path

    @property
    def format(self) -> BaseFormat:
        return self._format

    @property
    def options(self) -> FileOptions:
        return self._options

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_data(self) -> bool:
        self._check_open()
        return self._data is not _MISSING

    @property
    def data(self) -> T | None:
        """The current value, or ``None`` when the handle holds no data."""
        self._check_open()
        if self._data is _MISSING:
            return None
        return self._data

    @data.setter
    def data(self, value: T) -> None:
        self._check_open()
        self._data = value

    @data.deleter
    def data(self) -> None:
        self._check_open()
        self._data = _MISSING

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def __enter__(self) -> LiveFile[T]:
        self._check_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Write the current data back to the file.

        Only the first call writes; later calls do nothing.
        """
        if self._closed:
            return
        self._closed = True
        self._write()

    def _snapshot(self, data: Any) -> Any:
        # preserving formats diff against a copy so in-place mutation of
        # ``data`` still counts as a change
        if data is _MISSING or not self._format.preserves_format:
            return data
        try:
            return copy.deepcopy(data)
        except (TypeError, copy.Error) as exc:
            logger.debug("Cannot copy data loaded from %s (%s); keeping a reference", self._path, exc)
            return data

    def _check_open(self) -> None:
        if self._closed:
            raise ClosedError(f"{self._path} has already been closed", self._path)

    # ------------------------------------------------------------------
    # IO
    # ------------------------------------------------------------------
    def _read(self) -> tuple[Any, str | None]:
        path = self._path
        opts = self._options
        if not path.exists():
            if not opts.allow_no_exist:
                raise NotFoundError(f"File not found: {path}", path)
            logger.debug("%s does not exist; opening without data", path)
            return _MISSING, None

        try:
            text = path.read_text(encoding=opts.encoding)
        except UnicodeDecodeError as exc:
            raise ParseError(f"Failed to decode {path} as {opts.encoding}: {exc}", path) from exc
        if text.strip() == "":
            logger.debug("%s is blank; opening without data", path)
            return _MISSING, text

        try:
            data = self._format.parse(text)
        except ValueError as exc:
            raise ParseError(f"Failed to parse {path}: {exc}", path) from exc

        if opts.validator is not None:
            cause: Exception | None = None
            try:
                valid = bool(opts.validator(data))
            except Exception as exc:
                valid, cause = False, exc
            if not valid:
                if opts.allow_validator_failure:
                    logger.warning("Discarding data from %s rejected by validator", path)
                    return _MISSING, text
                raise ValidationError(f"Invalid data in {path}: {text}", path, text) from cause

        logger.debug("Loaded %s", path)
        return data, text

    def _write(self) -> None:
        path = self._path
        if self._data is _MISSING:
            logger.debug("No data for %s; leaving file untouched", path)
            return
        try:
            if self._text is not None and self._original is not _MISSING:
                content = self._format.preserve_format(self._text, self._original, self._data)
            else:
                content = self._format.stringify(self._data)
            self._write_text(content)
        except Exception as exc:
            raise WriteError(f"Failed to write {path}: {exc}", path) from exc
        logger.debug("Wrote %s", path)

    def _write_text(self, content: str) -> None:
        path = self._path
        encoding = self._options.encoding
        if not self._options.atomic:
            path.write_text(content, encoding=encoding)
            return
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(content, encoding=encoding)
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<{type(self).__name__} {str(self._path)!r} {self._format!r} {state}>"
