from __future__ import annotations

import json
import logging
from typing import Any

from .. import jsonc_edit
from ..errors import FormatError
from . import register_format
from .json_format import JsonFormat

logger = logging.getLogger(__name__)


@register_format
class JsoncFormat(JsonFormat):
    """JSON with comments and trailing commas.

    Documents are read with ``pyjson5`` and new files are written as plain
    JSON.  Rewriting an existing document edits its top-level properties in
    place so comments attached to untouched keys are kept.
    """

    names = ("jsonc", "json5")

    def _require_pyjson5(self):
        try:
            import pyjson5  # type: ignore
        except ModuleNotFoundError as exc:
            raise FormatError("pyjson5 is required for the JSONC format") from exc
        return pyjson5

    def parse(self, text: str) -> Any:
        pyjson5 = self._require_pyjson5()
        try:
            return pyjson5.decode(text)
        except Exception as exc:  # JSON5 decoding errors
            raise FormatError(str(exc)) from exc

    def _render_value(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False)

    def _indent_unit(self) -> str:
        return " " * self.indent if self.indent is not None else "  "

    def preserve_format(self, old_text: str, old_value: Any, new_value: Any) -> str:
        try:
            edits = jsonc_edit.compute_edits(old_text, old_value, new_value, self._render_value)
            if edits is None:
                return self.stringify(new_value)
            text = jsonc_edit.apply_edits(old_text, edits)
            text = jsonc_edit.format_text(text, indent=self._indent_unit())
            reparsed = self.parse(text)
        except FormatError as exc:
            logger.warning("Cannot edit JSONC document in place (%s); rewriting document", exc)
            return self.stringify(new_value)
        if reparsed != new_value:
            logger.warning("JSONC edit did not round-trip; rewriting document")
            return self.stringify(new_value)
        return text
