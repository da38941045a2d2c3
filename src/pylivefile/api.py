"""Construction surface for live files."""
from __future__ import annotations

from collections.abc import Callable
from os import PathLike
from typing import Any

from .config import FileOptions, resolve_options
from .formats import (
    BaseFormat,
    CustomFormat,
    JsonFormat,
    JsoncFormat,
    TextFormat,
    TomlFormat,
    YamlFormat,
    get_format,
)
from .handle import LiveFile


def open_file(
    path: str | PathLike[str],
    fmt: BaseFormat | str,
    options: FileOptions | None = None,
    **overrides: Any,
) -> LiveFile[Any]:
    """Open ``path`` as a live file using ``fmt``.

    ``fmt`` is a format instance or the name of a registered format such as
    ``"json"`` or ``"toml"``.  Options come from ``options`` and keyword
    overrides (``validator``, ``allow_no_exist``, ``allow_validator_failure``,
    ``encoding``, ``atomic``).  The file is read immediately; the returned
    handle writes it back when used as a context manager and the block exits.

    Example::

        with open_file("settings.json", "json") as cfg:
            cfg.data = {"hello": "world"}
    """
    if isinstance(fmt, str):
        fmt = get_format(fmt)
    return LiveFile(path, fmt, resolve_options(options, **overrides))


def open_text(path: str | PathLike[str], **options: Any) -> LiveFile[str]:
    return open_file(path, TextFormat(), **options)


def open_json(path: str | PathLike[str], *, indent: int | None = 2, **options: Any) -> LiveFile[Any]:
    return open_file(path, JsonFormat(indent=indent), **options)


def open_jsonc(path: str | PathLike[str], *, indent: int | None = 2, **options: Any) -> LiveFile[Any]:
    """Open a JSON-with-comments file; edits keep comments of untouched keys."""
    return open_file(path, JsoncFormat(indent=indent), **options)


def open_toml(path: str | PathLike[str], **options: Any) -> LiveFile[dict[str, Any]]:
    return open_file(path, TomlFormat(), **options)


def open_yaml(path: str | PathLike[str], **options: Any) -> LiveFile[Any]:
    return open_file(path, YamlFormat(), **options)


def open_custom(
    path: str | PathLike[str],
    parse: Callable[[str], Any],
    stringify: Callable[[Any], str],
    preserve_format: Callable[[str, Any, Any], str] | None = None,
    **options: Any,
) -> LiveFile[Any]:
    """Open ``path`` with a caller-defined codec."""
    fmt = CustomFormat(parse, stringify, preserve_format)
    return open_file(path, fmt, **options)
