from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseFormat(ABC):
    """Abstract text codec used by a live file.

    Subclasses implement :meth:`parse` and :meth:`stringify`.  Formats able to
    keep comments and layout of an existing document override
    :meth:`preserve_format`; the default re-serialises from scratch.
    """

    names: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, text: str) -> Any:
        pass

    @abstractmethod
    def stringify(self, value: Any) -> str:
        pass

    @property
    def preserves_format(self) -> bool:
        """Whether :meth:`preserve_format` does more than re-serialise."""
        return type(self).preserve_format is not BaseFormat.preserve_format

    def preserve_format(self, old_text: str, old_value: Any, new_value: Any) -> str:
        return self.stringify(new_value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
