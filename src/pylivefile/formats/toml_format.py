from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

try:  # pragma: no cover - Python <3.11
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - fallback
    import tomli as tomllib  # type: ignore

from ..errors import FormatError
from . import register_format
from .base import BaseFormat

logger = logging.getLogger(__name__)


@register_format
class TomlFormat(BaseFormat):
    """TOML read with :mod:`tomllib` and written with ``tomlkit``.

    When the file already had content, only the top-level keys that changed
    are rewritten in the original ``tomlkit`` document, so comments and layout
    around untouched keys survive.
    """

    names = ("toml",)

    def _require_tomlkit(self):
        try:
            import tomlkit  # type: ignore
        except ModuleNotFoundError as exc:
            raise FormatError("tomlkit is required to write TOML") from exc
        return tomlkit

    def parse(self, text: str) -> dict[str, Any]:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise FormatError(str(exc)) from exc

    def stringify(self, value: Mapping[str, Any]) -> str:
        tomlkit = self._require_tomlkit()
        if not isinstance(value, Mapping):
            raise TypeError(f"TOML data must be a mapping, not {type(value).__name__}")
        return tomlkit.dumps(value)

    def preserve_format(
        self, old_text: str, old_value: Any, new_value: Any
    ) -> str:
        if not isinstance(old_value, Mapping) or not isinstance(new_value, Mapping):
            return self.stringify(new_value)
        tomlkit = self._require_tomlkit()
        doc = tomlkit.parse(old_text)
        for key in list(doc.keys()):
            if key not in new_value:
                del doc[key]
        for key, value in new_value.items():
            if key in doc and key in old_value and old_value[key] == value:
                continue
            doc[key] = value
        text = tomlkit.dumps(doc)
        if self.parse(text) != dict(new_value):
            logger.warning("TOML edit did not round-trip; rewriting document")
            return self.stringify(new_value)
        return text
