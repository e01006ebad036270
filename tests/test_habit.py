import pytest

from dailies.habit import Habit, update_habits
from dailies.mdast import mdast_to_string, parse_markdown

TEMPLATE = "# {{title}}\n\n## Habits\n\n- Gym: 0\n- Read: 0\n- Stretch: 0\n\n## Notes\n\nGym: 5\n"
PREVIOUS = "# 2024-01-01\n\n## Habits\n\n- Gym: 3\n- Read: 7\n"
PREVIOUS_COUNTS = {"Gym": 3, "Read": 7}


def _habit_counts(root):
    habits_list = root.children[root.children.index(
        next(n for n in root.children if n.type == "heading" and n.children
             and n.children[0].value == "Habits")) + 1]
    counts = {}
    for node in habits_list.walk():
        if node.type == "text":
            habit = Habit.from_line(node.value)
            if habit is not None:
                counts[habit.name] = habit.count
    return counts


def test_from_line_reads_name_and_count():
    habit = Habit.from_line("  Gym : 3 ")
    assert habit.name == "Gym"
    assert habit.count == 3


@pytest.mark.parametrize("line", ["", "just text"])
def test_from_line_without_colon(line):
    assert Habit.from_line(line) is None


@pytest.mark.parametrize("line", ["Read: lots", "a:b:c", "Run: 99999999999", "Run: 2.5"])
def test_from_line_bad_count_is_zero(line):
    assert Habit.from_line(line).count == 0


def test_from_line_signed_count():
    assert Habit.from_line("Run: -2").count == -2


def test_habits_compare_by_name():
    assert Habit("Gym", 1) == Habit("Gym", 2)
    assert hash(Habit("Gym", 1)) == hash(Habit("Gym", 2))
    assert Habit("Gym", 1) != Habit("Read", 1)


def test_str_format():
    assert str(Habit("Gym", 4)) == "Gym: 4"


@pytest.mark.parametrize("habit", [Habit("Gym", 4), Habit("Read more", -1)])
def test_str_round_trip(habit):
    parsed = Habit.from_line(str(habit))
    assert parsed == habit
    assert parsed.count == habit.count


@pytest.mark.parametrize("days", [0, 1, 5])
def test_update_habits_adds_days(days):
    template = parse_markdown(TEMPLATE)
    previous = parse_markdown(PREVIOUS)
    update_habits(template, previous, days)
    counts = _habit_counts(template)
    assert counts["Gym"] == PREVIOUS_COUNTS["Gym"] + days
    assert counts["Read"] == PREVIOUS_COUNTS["Read"] + days
    assert counts["Stretch"] == 0


def test_update_habits_leaves_other_sections():
    template = parse_markdown(TEMPLATE)
    update_habits(template, parse_markdown(PREVIOUS), 2)
    assert mdast_to_string(template).endswith("## Notes\n\nGym: 5\n")


def test_update_habits_without_previous_section():
    template = parse_markdown(TEMPLATE)
    before = mdast_to_string(template)
    update_habits(template, parse_markdown("# Yesterday\n\nnothing\n"), 3)
    assert mdast_to_string(template) == before


def test_update_habits_without_template_section():
    template = parse_markdown("# Day\n\n- Gym: 0\n")
    before = mdast_to_string(template)
    update_habits(template, parse_markdown(PREVIOUS), 3)
    assert mdast_to_string(template) == before


def test_first_duplicate_in_previous_wins():
    template = parse_markdown(TEMPLATE)
    previous = parse_markdown("## Habits\n\n- Gym: 3\n- Gym: 9\n")
    update_habits(template, previous, 1)
    assert _habit_counts(template)["Gym"] == 3 + 1