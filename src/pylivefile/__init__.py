"""Live structured-data files.

A live file reads and parses a document when opened, exposes the value as
``data`` and writes it back when the ``with`` block exits.
"""
from __future__ import annotations

from .api import (
    open_custom,
    open_file,
    open_json,
    open_jsonc,
    open_text,
    open_toml,
    open_yaml,
)
from .config import FileOptions, resolve_options
from .errors import (
    ClosedError,
    FormatError,
    LiveFileError,
    NotFoundError,
    ParseError,
    ValidationError,
    WriteError,
)
from .formats import BaseFormat, CustomFormat, get_format, register_format
from .handle import LiveFile

__all__ = [
    "BaseFormat",
    "ClosedError",
    "CustomFormat",
    "FileOptions",
    "FormatError",
    "LiveFile",
    "LiveFileError",
    "NotFoundError",
    "ParseError",
    "ValidationError",
    "WriteError",
    "get_format",
    "open_custom",
    "open_file",
    "open_json",
    "open_jsonc",
    "open_text",
    "open_toml",
    "open_yaml",
    "register_format",
    "resolve_options",
]
__version__ = "0.1.0"
