"""Comment-preserving edits of JSON-with-comments documents.

The module works on the raw text instead of a parsed value.  A document is
tokenized, scanned into a small layout tree that remembers source offsets,
and top-level properties are then deleted, replaced or appended as text
edits.  :func:`format_text` re-prints the edited text with normalised
indentation and commas while keeping every comment that survived the edits.
"""
from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Union

from .errors import FormatError

_TOKEN_RE = re.compile(
    r"""
      (?P<space>[\s\ufeff]+)
    | (?P<comment>//[^\r\n]*|/\*.*?\*/)
    | (?P<string>"(?:[^"\\\r\n]|\\.)*"|'(?:[^'\\\r\n]|\\.)*')
    | (?P<punct>[{}\[\]:,])
    | (?P<literal>[^\s\ufeff{}\[\]:,"'/]+)
    """,
    re.VERBOSE | re.DOTALL,
)

_CLOSE = {"{": "}", "[": "]"}


class Token(NamedTuple):
    kind: str
    text: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


@dataclass(frozen=True)
class Edit:
    """Replace ``length`` characters at ``offset`` with ``content``."""

    offset: int
    length: int
    content: str


@dataclass
class Scalar:
    text: str
    start: int
    end: int


@dataclass
class Member:
    key: str | None
    value: Node
    start: int
    tail_end: int
    leading: list[str] = field(default_factory=list)
    trailing: str | None = None


@dataclass
class Container:
    open: str
    start: int
    end: int = 0
    members: list[Member] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


Node = Union[Scalar, Container]


@dataclass
class Document:
    value: Node
    leading: list[str]
    trailing: str | None
    comments: list[str]


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise FormatError(f"unexpected character {text[pos]!r} at offset {pos}")
        kind = m.lastgroup
        if kind == "punct":
            kind = m.group()
        tokens.append(Token(kind, m.group(), pos))
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, text: str) -> None:
        self.tokens = tokenize(text)
        self.pos = 0

    def comments(self) -> list[str]:
        found: list[str] = []
        while self.pos < len(self.tokens):
            tok = self.tokens[self.pos]
            if tok.kind == "comment":
                found.append(tok.text)
            elif tok.kind != "space":
                break
            self.pos += 1
        return found

    def next(self) -> Token:
        if self.pos >= len(self.tokens):
            raise FormatError("unexpected end of input")
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def tail(self, end: int) -> tuple[int, str | None]:
        # separator comma and comment on the same line as the value
        comma = False
        while self.pos < len(self.tokens):
            tok = self.tokens[self.pos]
            if tok.kind == "space":
                if "\n" in tok.text or "\r" in tok.text:
                    break
            elif tok.kind == "," and not comma:
                comma = True
                end = tok.end
            elif tok.kind == "comment":
                self.pos += 1
                return tok.end, tok.text
            else:
                break
            self.pos += 1
        return end, None

    def value(self, tok: Token) -> Node:
        if tok.kind in _CLOSE:
            return self.container(tok)
        if tok.kind in ("string", "literal"):
            return Scalar(tok.text, tok.offset, tok.end)
        raise FormatError(f"unexpected {tok.text!r} at offset {tok.offset}")

    def container(self, open_tok: Token) -> Container:
        close = _CLOSE[open_tok.kind]
        node = Container(open_tok.kind, open_tok.offset)
        pending: list[str] = []
        while True:
            pending.extend(self.comments())
            tok = self.next()
            if tok.kind == close:
                node.comments = pending
                node.end = tok.end
                return node
            if tok.kind == ",":
                continue
            start = tok.offset
            key = None
            if close == "}":
                if tok.kind not in ("string", "literal"):
                    raise FormatError(f"expected a property name at offset {tok.offset}")
                key = tok.text
                pending.extend(self.comments())
                colon = self.next()
                if colon.kind != ":":
                    raise FormatError(f"expected ':' at offset {colon.offset}")
                pending.extend(self.comments())
                tok = self.next()
            value = self.value(tok)
            tail_end, trailing = self.tail(value.end)
            node.members.append(Member(key, value, start, tail_end, pending, trailing))
            pending = []


def parse_document(text: str) -> Document:
    """Scan ``text`` into a layout tree with source offsets."""
    parser = _Parser(text)
    leading = parser.comments()
    value = parser.value(parser.next())
    _, trailing = parser.tail(value.end)
    comments = parser.comments()
    if parser.pos < len(parser.tokens):
        tok = parser.tokens[parser.pos]
        raise FormatError(f"unexpected {tok.text!r} at offset {tok.offset}")
    return Document(value, leading, trailing, comments)


def decode_key(raw: str) -> str:
    """Return the property name spelled by the key token ``raw``."""
    if raw[0] == "'":
        inner = raw[1:-1].replace("\\'", "'").replace('"', '\\"')
        raw = f'"{inner}"'
    elif raw[0] != '"':
        if "\\" not in raw:
            return raw
        # identifier with \uXXXX escapes
        raw = f'"{raw}"'
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise FormatError(f"invalid property name {raw}") from exc


def _delete(member: Member) -> Edit:
    return Edit(member.start, member.tail_end - member.start, "")


def compute_edits(
    text: str,
    old_value: Any,
    new_value: Any,
    render: Callable[[Any], str],
) -> list[Edit] | None:
    """Return the edits turning the top level of ``text`` into ``new_value``.

    Keys missing from ``new_value`` are deleted together with their separator
    and same-line comment.  Changed keys have their value span replaced and
    new keys are appended before the closing brace.  ``None`` means the
    document or one of the values is not an object and cannot be edited.
    """
    if not isinstance(old_value, Mapping) or not isinstance(new_value, Mapping):
        return None
    root = parse_document(text).value
    if not isinstance(root, Container) or root.open != "{":
        return None

    by_key: dict[str, list[Member]] = {}
    for member in root.members:
        by_key.setdefault(decode_key(member.key), []).append(member)

    edits: list[Edit] = []
    for key, members in by_key.items():
        if key not in new_value:
            edits.extend(_delete(m) for m in members)
    for key, value in new_value.items():
        members = by_key.get(key)
        if not members:
            name = json.dumps(str(key), ensure_ascii=False)
            edits.append(Edit(root.end - 1, 0, f",{name}: {render(value)}"))
            continue
        *dupes, last = members
        edits.extend(_delete(m) for m in dupes)
        if key in old_value and old_value[key] == value:
            continue
        span = last.value
        edits.append(Edit(span.start, span.end - span.start, render(value)))
    return edits


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Apply a batch of edits computed against the same ``text``."""
    out: list[str] = []
    pos = 0
    for edit in sorted(edits, key=lambda e: e.offset):
        if edit.offset < pos:
            raise ValueError(f"overlapping edit at offset {edit.offset}")
        out.append(text[pos:edit.offset])
        out.append(edit.content)
        pos = edit.offset + edit.length
    out.append(text[pos:])
    return "".join(out)


def _render(node: Node, depth: int, indent: str) -> str:
    if isinstance(node, Scalar):
        return node.text
    close = _CLOSE[node.open]
    if not node.members and not node.comments:
        return node.open + close
    pad = indent * (depth + 1)
    lines: list[str] = []
    last = len(node.members) - 1
    for i, member in enumerate(node.members):
        lines.extend(pad + c for c in member.leading)
        head = f"{member.key}: " if member.key is not None else ""
        line = pad + head + _render(member.value, depth + 1, indent)
        if i < last:
            line += ","
        if member.trailing:
            line += " " + member.trailing
        lines.append(line)
    lines.extend(pad + c for c in node.comments)
    return node.open + "\n" + "\n".join(lines) + "\n" + indent * depth + close


def format_text(text: str, indent: str = "  ") -> str:
    """Re-print ``text`` with one member per line, keeping comments."""
    doc = parse_document(text)
    body = _render(doc.value, 0, indent)
    if doc.trailing:
        body += " " + doc.trailing
    return "\n".join([*doc.leading, body, *doc.comments]) + "\n"
