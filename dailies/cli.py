"""Command that creates today's daily entry."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from dailies.config import Config, ConfigNotFoundError
from dailies.habit import update_habits
from dailies.mdast import PROMPT, TITLE, mdast_to_string, parse_markdown, replace_pattern
from dailies.todos import update_todos


def _quoted(path: Path) -> str:
    text = str(path)
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def update_template(config: Config, now: datetime | None = None) -> str:
    """Fill in the template and carry habits and todos over from the last entry."""
    moment = now if now is not None else datetime.now()
    try:
        contents = config.entry_template.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        print(f"WARNING: Empty template: {_quoted(config.entry_template)}", file=sys.stderr)
        return ""

    tree = parse_markdown(contents)
    replace_pattern(tree, TITLE, config.get_cur_daily_name(moment))

    prompt = config.get_daily_prompt()
    if prompt is not None:
        replace_pattern(tree, PROMPT, prompt)

    previous = config.get_previous_daily(moment.date())
    if previous is None:
        return mdast_to_string(tree)
    update_habits(tree, previous.tree, previous.days_since)
    return update_todos(tree, previous.path)


def generate_daily(config: Config, now: datetime | None = None) -> Path:
    """Create today's entry unless it exists, print its path and return it."""
    moment = now if now is not None else datetime.now()
    path = config.dailies_dir / f"{moment.strftime(config.date_template)}.md"
    if not path.is_file():
        path.write_text(update_template(config, moment), encoding="utf-8")
    print(_quoted(path))
    return path


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dailies", description="Daily journaling in plain markdown"
    )
    parser.parse_args(argv)
    try:
        config = Config.load()
    except ConfigNotFoundError:
        print("Error; No configuration file found!", file=sys.stderr)
        print("Refer to the ReadMe on how to create one", file=sys.stderr)
        return 1
    generate_daily(config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())