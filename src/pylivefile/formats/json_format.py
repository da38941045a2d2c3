from __future__ import annotations

import json
from typing import Any

from ..errors import FormatError
from . import register_format
from .base import BaseFormat


@register_format
class JsonFormat(BaseFormat):
    """Strict JSON via the standard library."""

    names = ("json",)

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def parse(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise FormatError(str(exc)) from exc

    def stringify(self, value: Any) -> str:
        return json.dumps(value, indent=self.indent, ensure_ascii=False) + "\n"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(indent={self.indent!r})"
