"""Configuration: where dailies live, how they are named and what they start from."""

from __future__ import annotations

import os
import random
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import NamedTuple

from dailies.mdast import Node, parse_markdown

CONFIG_NAME = "dailies.toml"
DOT_CONFIG_NAME = ".dailies.toml"

_VARIABLE = re.compile(r"\$(?:\{(?P<braced>[^}]*)\}|(?P<name>[A-Za-z0-9_]+))")


class ConfigNotFoundError(FileNotFoundError):
    """No configuration file exists in any of the searched locations."""


class PreviousDaily(NamedTuple):
    """The most recent entry: its parsed tree, its path and its age in days."""

    tree: Node
    path: Path
    days_since: int


def _expand(raw: str) -> Path:
    """Expand ``$VAR``, ``${VAR}`` and a leading ``~``; unknown variables are errors."""

    def substitute(match: re.Match[str]) -> str:
        name = match["braced"] if match["braced"] is not None else match["name"]
        try:
            return os.environ[name]
        except KeyError:
            raise ValueError(f"environment variable not found: {name}") from None

    expanded = _VARIABLE.sub(substitute, raw)
    if expanded == "~" or expanded.startswith("~/"):
        home = os.environ.get("HOME") or str(Path.home())
        expanded = home + expanded[1:]
    return Path(expanded)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def find_config_path(
    environ: Mapping[str, str] | None = None, cwd: str | os.PathLike[str] | None = None
) -> Path:
    """Return the first configuration file found.

    Checked in order: under ``$HOME`` and then ``$XDG_CONFIG_HOME`` the files
    ``.dailies.toml``, ``config/dailies.toml`` and ``config/dailies/dailies.toml``;
    finally ``.dailies.toml`` in the working directory.
    """
    env = os.environ if environ is None else environ
    for variable in ("HOME", "XDG_CONFIG_HOME"):
        base_value = env.get(variable)
        if base_value is None:
            continue
        base = Path(base_value)
        for candidate in (
            base / DOT_CONFIG_NAME,
            base / "config" / CONFIG_NAME,
            base / "config" / "dailies" / CONFIG_NAME,
        ):
            if candidate.is_file():
                return candidate

    here = Path.cwd() if cwd is None else Path(cwd)
    local = here / DOT_CONFIG_NAME
    if local.is_file():
        return local
    raise ConfigNotFoundError("No configuration file found!")


@dataclass(frozen=True)
class Config:
    """Settings read from the configuration file."""

    dailies_dir: Path
    entry_template: Path
    date_template: str
    prompt_path: Path | None = None

    @classmethod
    def load(cls) -> Config:
        """Find, read and resolve the configuration file."""
        path = find_config_path()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Error reading config {path}: {exc}") from exc
        return cls.from_toml(text).resolve_paths()

    @classmethod
    def from_toml(cls, text: str) -> Config:
        """Build a configuration from TOML text, without expanding its paths."""
        data = tomllib.loads(text)

        def required(key: str) -> str:
            if key not in data:
                raise ValueError(f"missing field `{key}`")
            value = data[key]
            if not isinstance(value, str):
                raise ValueError(f"field `{key}` must be a string")
            return value

        prompt = data.get("prompt_path")
        if prompt is not None and not isinstance(prompt, str):
            raise ValueError("field `prompt_path` must be a string")
        return cls(
            dailies_dir=Path(required("dailies_dir")),
            entry_template=Path(required("entry_template")),
            date_template=required("date_template"),
            prompt_path=Path(prompt) if prompt is not None else None,
        )

    def resolve_paths(self) -> Config:
        """Return a copy with ``~`` and environment variables expanded in its paths."""
        return replace(
            self,
            dailies_dir=_expand(str(self.dailies_dir)),
            entry_template=_expand(str(self.entry_template)),
            prompt_path=_expand(str(self.prompt_path)) if self.prompt_path is not None else None,
        )

    def get_previous_daily(self, today: date | None = None) -> PreviousDaily | None:
        """Return the last entry by file name, or None if the directory is empty."""
        entries = sorted(self.dailies_dir.iterdir(), key=lambda p: p.name)
        if not entries:
            return None
        path = entries[-1]
        current = today if today is not None else datetime.now().date()
        try:
            previous = datetime.strptime(path.stem, self.date_template).date()
        except ValueError as exc:
            raise ValueError(f"Failed to parse previous date from file name: {path}") from exc
        tree = parse_markdown(path.read_text(encoding="utf-8"))
        return PreviousDaily(tree, path, (current - previous).days)

    def get_cur_daily_name(self, now: datetime | None = None) -> str:
        """Format the current (or given) time with the date template."""
        moment = now if now is not None else datetime.now()
        return moment.strftime(self.date_template)

    def get_daily_prompt(self, rng: random.Random | None = None) -> str | None:
        """Pick a random line of the prompt file, if one is configured."""
        if self.prompt_path is None:
            return None
        lines = _lines(self.prompt_path.read_text(encoding="utf-8"))
        if not lines:
            return None
        return (rng if rng is not None else random).choice(lines)