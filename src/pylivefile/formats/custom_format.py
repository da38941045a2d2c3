from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..errors import FormatError
from .base import BaseFormat


class CustomFormat(BaseFormat):
    """Format built from caller-supplied callables.

    ``parse`` may raise any exception for malformed text; it is reported as a
    :class:`~pylivefile.errors.FormatError`.  Without ``preserve_format`` the
    document is always re-serialised with ``stringify``.
    """

    def __init__(
        self,
        parse: Callable[[str], Any],
        stringify: Callable[[Any], str],
        preserve_format: Callable[[str, Any, Any], str] | None = None,
    ) -> None:
        self._parse = parse
        self._stringify = stringify
        self._preserve = preserve_format

    def parse(self, text: str) -> Any:
        try:
            return self._parse(text)
        except FormatError:
            raise
        except Exception as exc:
            raise FormatError(str(exc)) from exc

    def stringify(self, value: Any) -> str:
        return self._stringify(value)

    @property
    def preserves_format(self) -> bool:
        return self._preserve is not None

    def preserve_format(self, old_text: str, old_value: Any, new_value: Any) -> str:
        if self._preserve is None:
            return self.stringify(new_value)
        return self._preserve(old_text, old_value, new_value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parse={self._parse!r}, stringify={self._stringify!r})"
