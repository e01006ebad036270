"""Habit counters carried over from the previous daily entry."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from dailies.mdast import Node

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_HABITS_HEADING = "Habits"


def _parse_count(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        return 0
    value = int(text)
    return value if _INT_MIN <= value <= _INT_MAX else 0


@dataclass(frozen=True)
class Habit:
    """A named counter; habits compare and hash by name only."""

    name: str
    count: int = field(default=0, compare=False)

    @classmethod
    def from_line(cls, line: str) -> Habit | None:
        """Read ``name: count``; a count that is not a number counts as 0."""
        parts = line.split(":")
        if len(parts) < 2:
            return None
        return cls(parts[0].strip(), _parse_count(parts[1].strip()))

    def __str__(self) -> str:
        return f"{self.name}: {self.count}"


def _find_habit_list(root: Node) -> Node | None:
    if root.type != "root":
        return None
    for heading, following in zip(root.children, root.children[1:]):
        if heading.type != "heading" or not heading.children:
            continue
        first = heading.children[0]
        if first.type == "text" and first.value == _HABITS_HEADING:
            return following
    return None


def _collect_habits(node: Node) -> dict[str, Habit]:
    habits: dict[str, Habit] = {}
    for current in node.walk():
        if current.type == "text" and (habit := Habit.from_line(current.value or "")):
            habits.setdefault(habit.name, habit)
    return habits


def update_habits(template: Node, previous: Node, days_since_last: int) -> None:
    """Set each template habit to its previous count plus the days elapsed."""
    template_list = _find_habit_list(template)
    previous_list = _find_habit_list(previous)
    if template_list is None or previous_list is None:
        return
    known = _collect_habits(previous_list)
    for node in template_list.walk():
        if node.type != "text":
            continue
        habit = Habit.from_line(node.value or "")
        if habit is None:
            continue
        prior = known.get(habit.name)
        if prior is not None:
            node.value = str(Habit(prior.name, prior.count + days_since_last))