"""A small markdown syntax tree: block parsing, traversal and serialisation."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

TITLE = "{{title}}"
PROMPT = "{{prompt}}"

_ATX = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_HR = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_QUOTE = re.compile(r"^ {0,3}> ?(.*)$")
_SETEXT = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_MARKER = re.compile(r"^( {0,3})([-*+]|\d{1,9}[.)])(?:([ \t]+)(.*))?$")
_TASK = re.compile(r"^\[([ xX])\][ \t]+(?=\S)")


@dataclass
class Node:
    """A node of the markdown syntax tree."""

    type: str
    children: list[Node] = field(default_factory=list)
    value: str | None = None
    depth: int | None = None
    ordered: bool | None = None
    start: int | None = None
    spread: bool | None = None
    checked: bool | None = None
    lang: str | None = None
    meta: str | None = None

    @classmethod
    def text(cls, value: str) -> Node:
        return cls("text", value=value)

    def walk(self) -> Iterator[Node]:
        """Yield this node and all its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class _Marker:
    symbol: str
    offset: int
    content: str

    @property
    def ordered(self) -> bool:
        return self.symbol[0].isdigit()


def _list_marker(line: str) -> _Marker | None:
    m = _MARKER.match(line)
    if m is None or _HR.match(line):
        return None
    indent, symbol, spaces, content = m[1], m[2], m[3] or "", m[4] or ""
    width = len(indent) + len(symbol)
    if not content.strip():
        return _Marker(symbol, width + 1, "")
    if len(spaces) > 4:
        return _Marker(symbol, width + 1, spaces[1:] + content)
    return _Marker(symbol, width + len(spaces), content)


def _starts_block(line: str) -> bool:
    if any(p.match(line) for p in (_FENCE, _ATX, _HR, _QUOTE)):
        return True
    marker = _list_marker(line)
    return marker is not None and bool(marker.content.strip())


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _heading(depth: int, content: str) -> Node:
    return Node("heading", depth=depth, children=[Node.text(content)] if content else [])


def _parse_blocks(lines: list[str]) -> tuple[list[Node], bool]:
    """Parse block nodes; also report whether blank lines separate any of them."""
    blocks: list[Node] = []
    gap = blank = False
    i = 0
    while i < len(lines):
        if not lines[i].strip():
            blank, i = True, i + 1
            continue
        gap = gap or (bool(blocks) and blank)
        blank = False
        node, i = _parse_block(lines, i)
        blocks.append(node)
    return blocks, gap


def _parse_block(lines: list[str], i: int) -> tuple[Node, int]:
    line = lines[i]
    if m := _FENCE.match(line):
        return _parse_fence(lines, i, m)
    if m := _ATX.match(line):
        return _heading(len(m[1]), (m[2] or "").strip()), i + 1
    if _HR.match(line):
        return Node("thematicBreak"), i + 1
    if _QUOTE.match(line):
        inner = []
        while i < len(lines) and (m := _QUOTE.match(lines[i])):
            inner.append(m[1])
            i += 1
        return Node("blockquote", children=_parse_blocks(inner)[0]), i
    if marker := _list_marker(line):
        return _parse_list(lines, i, marker)
    return _parse_paragraph(lines, i)


def _parse_fence(lines: list[str], i: int, m: re.Match[str]) -> tuple[Node, int]:
    fence = m[1]
    indent = _indent(lines[i])
    closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
    body: list[str] = []
    i += 1
    while i < len(lines):
        line = lines[i]
        i += 1
        if closing.match(line):
            break
        body.append(line[min(indent, _indent(line)):])
    info = m[2].strip().split(maxsplit=1)
    lang = info[0] if info else None
    meta = info[1] if len(info) > 1 else None
    return Node("code", value="\n".join(body), lang=lang, meta=meta), i


def _make_item(lines: list[str]) -> Node:
    children, gap = _parse_blocks(lines)
    checked = None
    if children and children[0].type == "paragraph":
        text = children[0].children[0]
        if m := _TASK.match(text.value or ""):
            checked = m[1] != " "
            text.value = text.value[m.end():]
    return Node("listItem", children=children, spread=gap, checked=checked)


def _parse_list(lines: list[str], i: int, marker: _Marker) -> tuple[Node, int]:
    first = marker
    items: list[Node] = []
    loose = False
    while True:
        body = [marker.content]
        i += 1
        while i < len(lines):
            line = lines[i]
            if not line.strip():
                body.append("")
            elif _indent(line) >= marker.offset:
                body.append(line[marker.offset:])
            elif body[-1].strip() and not _starts_block(line):
                body.append(line.lstrip())
            else:
                break
            i += 1
        trailing = len(body) - 1 - len(list("\n".join(body[1:]).rstrip("\n").split("\n")))
        trailing = 0 if len(body) == 1 else len(body[1:]) - len("\n".join(body[1:]).rstrip("\n").split("\n")) + (
            1 if not "\n".join(body[1:]).rstrip("\n") else 0
        )
        items.append(_make_item(body[: len(body) - trailing]))
        nxt = _list_marker(lines[i]) if i < len(lines) else None
        if nxt is None or nxt.symbol[-1] != marker.symbol[-1] or nxt.ordered != marker.ordered:
            i -= trailing
            break
        loose = loose or trailing > 0
        marker = nxt
    start = int(first.symbol[:-1]) if first.ordered else None
    spread = loose or any(item.spread for item in items)
    return Node("list", children=items, ordered=first.ordered, start=start, spread=spread), i


def _parse_paragraph(lines: list[str], i: int) -> tuple[Node, int]:
    parts = [lines[i].strip()]
    i += 1
    while i < len(lines) and lines[i].strip():
        if m := _SETEXT.match(lines[i]):
            return _heading(1 if m[1][0] == "=" else 2, "\n".join(parts)), i + 1
        if _starts_block(lines[i]):
            break
        parts.append(lines[i].strip())
        i += 1
    return Node("paragraph", children=[Node.text("\n".join(parts))]), i


def parse_markdown(text: str) -> Node:
    """Parse markdown text into a tree rooted at a ``root`` node."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    expanded = [
        line[: len(line) - len(line.lstrip(" \t"))].expandtabs(4) + line.lstrip(" \t")
        for line in lines
    ]
    return Node("root", children=_parse_blocks(expanded)[0])


def replace_pattern(node: Node, old: str, new: str) -> None:
    """Replace every occurrence of ``old`` in the text nodes below ``node``."""
    for current in node.walk():
        if current.type == "text" and current.value is not None:
            current.value = current.value.replace(old, new)


def _join(nodes: list[Node], separator: str) -> str:
    return separator.join(_render(node) for node in nodes)


def _render_code(node: Node) -> str:
    value = node.value or ""
    longest = max((len(run) for run in re.findall(r"`{3,}", value)), default=2)
    fence = "`" * max(3, longest + 1)
    info = " ".join(part for part in (node.lang, node.meta) if part)
    return f"{fence}{info}\n{value}\n{fence}" if value else f"{fence}{info}\n{fence}"


def _render_item(item: Node, marker: str) -> str:
    body = _join(item.children, "\n\n" if item.spread else "\n")
    if item.checked is not None:
        box = "[x]" if item.checked else "[ ]"
        body = f"{box} {body}" if body else box
    if not body:
        return marker
    pad = " " * (len(marker) + 1)
    first, *rest = body.split("\n")
    return "\n".join([f"{marker} {first}", *(f"{pad}{line}" if line else "" for line in rest)])


def _render(node: Node) -> str:
    match node.type:
        case "root":
            return _join(node.children, "\n\n")
        case "heading":
            text = _join(node.children, "")
            hashes = "#" * (node.depth or 1)
            return f"{hashes} {text}" if text else hashes
        case "thematicBreak":
            return "---"
        case "code":
            return _render_code(node)
        case "blockquote":
            inner = _join(node.children, "\n\n")
            return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
        case "list":
            start = node.start if node.start is not None else 1
            return ("\n\n" if node.spread else "\n").join(
                _render_item(item, f"{start + n}." if node.ordered else "-")
                for n, item in enumerate(node.children)
            )
        case "listItem":
            return _render_item(node, "-")
        case _:
            return _join(node.children, "") if node.children else node.value or ""


def mdast_to_string(node: Node) -> str:
    """Serialise a tree back to markdown, using ``-`` for bullets and rules."""
    out = _render(node)
    return out if not out or out.endswith("\n") else out + "\n"