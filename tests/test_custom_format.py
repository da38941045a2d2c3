from __future__ import annotations

import threading
from pathlib import Path

import pytest

from pylivefile import FormatError, ParseError, open_custom
from pylivefile.formats import CustomFormat
from tests.utils import read, write


def _parse(text: str) -> dict[str, str]:
    pairs = {}
    for line in text.splitlines():
        if line.strip():
            key, value = line.split("=", 1)
            pairs[key.strip()] = value.strip()
    return pairs


def _stringify(data: dict[str, str]) -> str:
    return "".join(f"{k}={v}\n" for k, v in data.items())


def test_custom_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "file.env"
    with open_custom(path, _parse, _stringify) as f:
        f.data = {"A": "1", "B": "two"}
    assert read(path) == "A=1\nB=two\n"
    with open_custom(path, _parse, _stringify) as f:
        assert f.data == {"A": "1", "B": "two"}


def test_custom_parse_error_is_wrapped(tmp_path: Path) -> None:
    path = write(tmp_path / "file.env", "no separator here")
    with pytest.raises(ParseError) as info:
        open_custom(path, _parse, _stringify)
    assert isinstance(info.value.__cause__, FormatError)
    assert isinstance(info.value.__cause__.__cause__, ValueError)


def test_custom_preserve_format_receives_original(tmp_path: Path) -> None:
    path = write(tmp_path / "file.env", "# keep me\nA=1\n")
    calls = []

    def preserve(old_text: str, old_value, new_value) -> str:
        calls.append((old_text, old_value, dict(new_value)))
        return old_text + _stringify({k: v for k, v in new_value.items() if k not in old_value})

    def parse(text: str) -> dict[str, str]:
        return _parse("\n".join(line for line in text.splitlines() if not line.startswith("#")))

    with open_custom(path, parse, _stringify, preserve) as f:
        f.data["B"] = "2"
    assert calls == [("# keep me\nA=1\n", {"A": "1"}, {"A": "1", "B": "2"})]
    assert read(path) == "# keep me\nA=1\nB=2\n"


def test_custom_without_preserve_uses_stringify() -> None:
    fmt = CustomFormat(_parse, _stringify)
    assert fmt.preserve_format("# old\nA=1\n", {"A": "1"}, {"A": "3"}) == "A=3\n"


def _locked(text: str) -> dict:
    return {"lock": threading.Lock(), "t": text}


def test_uncopyable_value_without_preserve(tmp_path: Path) -> None:
    path = write(tmp_path / "file.txt", "old")
    with open_custom(path, _locked, lambda v: v["t"]) as f:
        f.data["t"] = "new"
    assert read(path) == "new"


def test_uncopyable_value_with_preserve(tmp_path: Path) -> None:
    path = write(tmp_path / "file.txt", "old")
    seen = []

    def preserve(old_text: str, old_value, new_value) -> str:
        seen.append(old_text)
        return new_value["t"] + "\n"

    with open_custom(path, _locked, lambda v: v["t"], preserve) as f:
        assert f.format.preserves_format
        f.data["t"] = "new"
    assert seen == ["old"]
    assert read(path) == "new\n"


def test_custom_preserves_format_flag() -> None:
    assert not CustomFormat(_parse, _stringify).preserves_format
    assert CustomFormat(_parse, _stringify, lambda t, o, n: t).preserves_format
