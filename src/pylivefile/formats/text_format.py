from __future__ import annotations

from . import register_format
from .base import BaseFormat


@register_format
class TextFormat(BaseFormat):
    """Plain text; the document is the string itself."""

    names = ("text", "txt")

    def parse(self, text: str) -> str:
        return text

    def stringify(self, value: str) -> str:
        if not isinstance(value, str):
            raise TypeError(f"text data must be str, not {type(value).__name__}")
        return value
