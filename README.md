# dailies

Daily journaling in plain markdown.

Each time you run `dailies`, it makes sure a file for today exists in your
journal directory and prints its path. When it creates a new entry it:

- fills in a markdown template, putting today's date in place of `{{title}}`
  and a randomly chosen prompt in place of `{{prompt}}`;
- carries habit counters over from the most recent entry, adding the number of
  days that have passed since then;
- moves the TODOs out of the most recent entry and into today's.

If today's entry is already there, it is left as it is.

## Installation

```sh
pip install .
```

The package needs Python 3.11 or later and has no dependencies outside the
standard library.

## Configuration

`dailies` reads a TOML file. It uses the first one of these that exists:

1. `$HOME/.dailies.toml`
2. `$HOME/config/dailies.toml`
3. `$HOME/config/dailies/dailies.toml`
4. `$XDG_CONFIG_HOME/.dailies.toml`
5. `$XDG_CONFIG_HOME/config/dailies.toml`
6. `$XDG_CONFIG_HOME/config/dailies/dailies.toml`
7. `./.dailies.toml`

If none exists, `dailies` prints an error and exits with status 1.

Example:

```toml
dailies_dir = "~/journal"
entry_template = "~/journal-templates/daily.md"
date_template = "%Y-%m-%d"
prompt_path = "~/journal-templates/prompts.txt"   # optional
```

- `dailies_dir` is the directory that holds one `<date>.md` file per day.
- `entry_template` is the markdown template for new entries.
- `date_template` is a `strftime` format. It is used for file names and for
  `{{title}}`.
- `prompt_path` is an optional file with one prompt per line.

A leading `~` and `$VAR` / `${VAR}` in paths are expanded; a variable that is
not set is an error.

## Template

```markdown
# {{title}}

{{prompt}}

## Habits

- running: 0
- reading: 0

## TODOs
```

Habits are the block that comes right after a heading reading exactly
`Habits`. Each item looks like `name: count`. When a new entry is made, each
habit that the previous entry also has gets the previous count plus the number
of days since that entry.

The lines under a heading whose text starts with `todos` (any case), up to the
next heading of the same or a higher level, are taken out of the previous
entry and put under the TODOs heading of the new one. If the new entry has no
such heading, they are appended at the end.

The previous entry is the last file in `dailies_dir` by name; its name without
the extension must parse with `date_template`, so keep only entries in that
directory. If the template cannot be read, a warning is printed and an empty
entry is written.

## Usage

```sh
dailies
```

This prints the path of today's entry in double quotes, e.g.
`"/home/me/journal/2024-05-01.md"`.

## Library

- `dailies.config`: `Config` (`load`, `from_toml`, `resolve_paths`,
  `get_previous_daily`, `get_cur_daily_name`, `get_daily_prompt`),
  `find_config_path` and `ConfigNotFoundError`.
- `dailies.mdast`: `Node`, `parse_markdown`, `replace_pattern`,
  `mdast_to_string`.
- `dailies.habit`: `Habit` and `update_habits`.
- `dailies.todos`: `update_todos`, `remove_todos_section`,
  `insert_todos_section`.
- `dailies.cli`: `update_template`, `generate_daily` and `main`.

## Limitations

The markdown handling covers block structure only: headings, paragraphs,
lists (including task items), block quotes, fenced code and thematic breaks.
Inline markup is kept as plain text. A new entry is written back out in a
normalised form (`-` for bullets and rules, blank lines between blocks), so
its layout may differ from the template's. `dailies` does not open an editor
and does not browse or search past entries.