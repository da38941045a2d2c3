"""Format registry and factory."""
from __future__ import annotations

from typing import Any

from .base import BaseFormat

_REGISTRY: dict[str, type[BaseFormat]] = {}


def register_format(fmt: type[BaseFormat]) -> type[BaseFormat]:
    """Register a format class under its ``names`` and return it for decorator use."""
    for name in fmt.names:
        _REGISTRY[name.lower()] = fmt
    return fmt


def get_format(name: str, **kwargs: Any) -> BaseFormat:
    fmt_cls = _REGISTRY.get(name.lower())
    if fmt_cls is None:
        raise ValueError(f"No format named {name!r}")
    return fmt_cls(**kwargs)


def available_formats() -> list[str]:
    return sorted(_REGISTRY)


# register default formats
from . import (  # noqa: F401,E402
    json_format,
    jsonc_format,
    text_format,
    toml_format,
    yaml_format,
)
from .custom_format import CustomFormat  # noqa: E402
from .json_format import JsonFormat  # noqa: E402
from .jsonc_format import JsoncFormat  # noqa: E402
from .text_format import TextFormat  # noqa: E402
from .toml_format import TomlFormat  # noqa: E402
from .yaml_format import YamlFormat  # noqa: E402

__all__ = [
    "BaseFormat",
    "CustomFormat",
    "JsonFormat",
    "JsoncFormat",
    "TextFormat",
    "TomlFormat",
    "YamlFormat",
    "available_formats",
    "get_format",
    "register_format",
]
