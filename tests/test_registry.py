from __future__ import annotations

from pathlib import Path

import pytest

from pylivefile import formats, open_file
from pylivefile.formats import (
    BaseFormat,
    JsonFormat,
    JsoncFormat,
    TextFormat,
    TomlFormat,
    YamlFormat,
    available_formats,
    get_format,
    register_format,
)
from tests.utils import read


@pytest.mark.parametrize(
    "name, cls",
    [
        ("text", TextFormat),
        ("json", JsonFormat),
        ("jsonc", JsoncFormat),
        ("toml", TomlFormat),
        ("YML", YamlFormat),
    ],
)
def test_get_format(name: str, cls: type) -> None:
    assert type(get_format(name)) is cls


def test_get_format_kwargs() -> None:
    assert get_format("json", indent=4).indent == 4


def test_unknown_format() -> None:
    with pytest.raises(ValueError):
        get_format("ini")


def test_available_formats() -> None:
    assert {"text", "json", "jsonc", "toml", "yaml"} <= set(available_formats())


def test_register_custom_format(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(formats, "_REGISTRY", dict(formats._REGISTRY))

    @register_format
    class UpperFormat(BaseFormat):
        names = ("upper",)

        def parse(self, text: str) -> str:
            return text.lower()

        def stringify(self, value: str) -> str:
            return value.upper()

    path = tmp_path / "shout.txt"
    path.write_text("HELLO", encoding="utf-8")
    with open_file(path, "upper") as f:
        assert f.data == "hello"
        f.data += " world"
    assert read(path) == "HELLO WORLD"


def test_open_file_by_name(tmp_path: Path) -> None:
    path = tmp_path / "file.yaml"
    with open_file(path, "yaml") as f:
        f.data = {"hello": "world"}
    assert read(path) == "hello: world\n"
