from __future__ import annotations

from pathlib import Path


def has_key(name: str):
    """Return a validator accepting mappings that contain ``name``.

    Mirrors the duck-typed checks callers usually write: any dict carrying the
    key passes, everything else is rejected.
    """

    def validator(data) -> bool:
        return isinstance(data, dict) and name in data

    return validator


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def read(path: Path) -> str:
    return path.read_text(encoding="utf-8")
