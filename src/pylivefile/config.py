from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from typing import Any

Validator = Callable[[Any], bool]


@dataclass(frozen=True)
class FileOptions:
    """Resolved options of a :class:`~pylivefile.handle.LiveFile`.

    ``validator`` only gates the initial read.  ``allow_no_exist`` lets a
    missing file open with no data, and ``allow_validator_failure`` turns a
    rejected document into "no data" instead of an error.  ``atomic`` writes
    through a temporary sibling file which is then renamed over the target.
    """

    validator: Validator | None = None
    allow_no_exist: bool = True
    allow_validator_failure: bool = False
    encoding: str = "utf-8"
    atomic: bool = False


_OPTION_NAMES = frozenset(f.name for f in fields(FileOptions))


def resolve_options(options: FileOptions | None = None, **overrides: Any) -> FileOptions:
    """Return ``options`` (or the defaults) with ``overrides`` applied."""

    unknown = set(overrides) - _OPTION_NAMES
    if unknown:
        names = ", ".join(sorted(unknown))
        raise TypeError(f"unknown option(s): {names}")
    base = options if options is not None else FileOptions()
    if not overrides:
        return base
    return replace(base, **overrides)
