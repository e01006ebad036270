"""Moving the todos section from the previous daily into the new one."""

from __future__ import annotations

import os
from pathlib import Path

from dailies.mdast import Node, mdast_to_string


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def _header_level(trimmed: str) -> int:
    return len(trimmed) - len(trimmed.lstrip("#"))


def _is_todos_header(trimmed: str, level: int) -> bool:
    return trimmed[level:].lstrip().lower().startswith("todos")


def update_todos(template: Node, previous_path: str | os.PathLike[str]) -> str:
    """Take the todos out of the previous entry and put them into the template."""
    path = Path(previous_path)
    template_str = mdast_to_string(template)
    remaining, todos = remove_todos_section(path.read_text(encoding="utf-8"))
    path.write_text(remaining, encoding="utf-8")
    return insert_todos_section(template_str, todos)


def remove_todos_section(markdown: str) -> tuple[str, str]:
    """Split text into (everything else, body of the todos sections)."""
    main: list[str] = []
    todos: list[str] = []
    todos_level: int | None = None
    for line in _lines(markdown):
        trimmed = line.lstrip()
        is_header = trimmed.startswith("#")
        level = _header_level(trimmed)
        if todos_level is None:
            if is_header and _is_todos_header(trimmed, level):
                todos_level = level
            main.append(line)
        elif is_header and level <= todos_level:
            todos_level = None
            main.append(line)
        else:
            todos.append(line)
    return "".join(f"{line}\n" for line in main), "".join(f"{line}\n" for line in todos)


def insert_todos_section(base_markdown: str, new_todos_content: str) -> str:
    """Replace the body of the todos section, or append if there is none."""
    out: list[str] = []
    todos_level: int | None = None
    inserted = False
    for line in _lines(base_markdown):
        trimmed = line.lstrip()
        is_header = trimmed.startswith("#")
        level = _header_level(trimmed)
        if todos_level is None:
            out.append(f"{line}\n")
            if is_header and _is_todos_header(trimmed, level):
                todos_level = level
                out.append(f"{new_todos_content}\n")
                inserted = True
        elif is_header and level <= todos_level:
            todos_level = None
            out.append(f"{line}\n")
    if not inserted:
        out.append(new_todos_content)
    return "".join(out)