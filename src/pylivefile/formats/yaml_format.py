from __future__ import annotations

from typing import Any

from ..errors import FormatError
from . import register_format
from .base import BaseFormat


@register_format
class YamlFormat(BaseFormat):
    """YAML via PyYAML's safe loader and dumper."""

    names = ("yaml", "yml")

    def _require_yaml(self):
        try:
            import yaml  # type: ignore
        except ModuleNotFoundError as exc:
            raise FormatError("PyYAML is required for the YAML format") from exc
        return yaml

    def parse(self, text: str) -> Any:
        yaml = self._require_yaml()
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise FormatError(str(exc)) from exc

    def stringify(self, value: Any) -> str:
        yaml = self._require_yaml()
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)
