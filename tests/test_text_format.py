from __future__ import annotations

from pathlib import Path

import pytest

from pylivefile import WriteError, open_text
from pylivefile.formats import TextFormat
from tests.utils import read, write


def test_text_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    with open_text(path) as text:
        text.data = "Hello, World!"
    assert read(path) == "Hello, World!"
    with open_text(path) as text:
        assert text.data == "Hello, World!"


def test_text_parse_is_identity() -> None:
    fmt = TextFormat()
    assert fmt.parse("{ not json") == "{ not json"
    assert fmt.stringify("abc") == "abc"


def test_text_validator_failure_allowed(tmp_path: Path) -> None:
    path = write(tmp_path / "file.txt", "invalid content")
    with open_text(
        path,
        validator=lambda data: data == "hello world",
        allow_validator_failure=True,
    ) as text:
        assert text.data is None
    assert read(path) == "invalid content"


def test_text_rejects_non_string(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    with pytest.raises(WriteError):
        with open_text(path) as text:
            text.data = 42
    assert not path.exists()
