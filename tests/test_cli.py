from datetime import datetime
from pathlib import Path

import pytest

from dailies.cli import generate_daily, main, update_template
from dailies.config import Config

NOW = datetime(2024, 3, 5, 9, 0)

TEMPLATE = "# {{title}}\n\n## Habits\n\n- run: 0\n\n## Todos\n"
PREVIOUS = "# 2024-03-03\n\n## Habits\n\n- run: 4\n\n## Todos\n\n- [ ] buy milk\n"


@pytest.fixture
def setup(tmp_path):
    dailies = tmp_path / "dailies"
    dailies.mkdir()
    template = tmp_path / "template.md"
    template.write_text(TEMPLATE)
    return Config(dailies, template, "%Y-%m-%d")


def test_update_template_without_previous_fills_title(setup):
    text = update_template(setup, NOW)
    assert text.startswith("# " + NOW.strftime("%Y-%m-%d") + "\n")
    assert "{{title}}" not in text
    assert "- run: 0" in text


def test_update_template_missing_template_returns_empty(tmp_path, capsys):
    config = Config(tmp_path, tmp_path / "missing.md", "%Y-%m-%d")
    assert update_template(config, NOW) == ""
    assert "WARNING: Empty template" in capsys.readouterr().err


def test_update_template_replaces_prompt(tmp_path):
    template = tmp_path / "template.md"
    template.write_text("# {{title}}\n\n{{prompt}}\n")
    prompts = tmp_path / "prompts.txt"
    prompts.write_text("Only question\n")
    dailies = tmp_path / "dailies"
    dailies.mkdir()
    config = Config(dailies, template, "%Y-%m-%d", prompts)
    text = update_template(config, NOW)
    assert "Only question" in text
    assert "{{prompt}}" not in text


def test_update_template_carries_habits_and_todos(setup):
    previous = setup.dailies_dir / "2024-03-03.md"
    previous.write_text(PREVIOUS)
    text = update_template(setup, NOW)
    assert "run: 6" in text
    assert "buy milk" in text
    remaining = previous.read_text()
    assert "buy milk" not in remaining
    assert "## Todos" in remaining


def test_generate_daily_keeps_existing_file(setup):
    existing = setup.dailies_dir / (NOW.strftime("%Y-%m-%d") + ".md")
    existing.write_text("already written\n")
    generate_daily(setup, NOW)
    assert existing.read_text() == "already written\n"


def test_main_without_config_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "No configuration file found" in capsys.readouterr().err


def test_main_creates_todays_entry(tmp_path, monkeypatch):
    dailies = tmp_path / "dailies"
    dailies.mkdir()
    template = tmp_path / "template.md"
    template.write_text(TEMPLATE)
    (tmp_path / ".dailies.toml").write_text(
        f'dailies_dir = "{dailies.as_posix()}"\n'
        f'entry_template = "{template.as_posix()}"\n'
        'date_template = "%Y-%m-%d"\n'
    )
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    created = list(dailies.iterdir())
    assert len(created) == 1
    assert Path(created[0]).suffix == ".md"
    assert "{{title}}" not in created[0].read_text()