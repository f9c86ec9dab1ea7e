"""Tests for task display."""

import io
from datetime import date, datetime, timezone

from rich.console import Console

from tickler.display import Field, PrField, print_table, print_unique_table, task_detail
from tickler.taskwarrior.models import Task

TODAY = date(2026, 10, 18)


def local_noon(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, 12).astimezone(timezone.utc)


def render(renderable) -> str:
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def test_due_values() -> None:
    """Test how due dates are described relative to today."""
    assert Field.DUE.value_for(Task(uuid="a"), TODAY) == "None"
    assert Field.DUE.value_for(Task(uuid="a", due=local_noon(TODAY)), TODAY) == "Today"
    overdue = Task(uuid="a", due=local_noon(date(2026, 10, 1)))
    assert Field.DUE.value_for(overdue, TODAY) == "Overdue (2026-10-01)"
    later = Task(uuid="a", due=local_noon(date(2026, 10, 23)))
    assert Field.DUE.value_for(later, TODAY) == "2026-10-23 Fri"


def test_due_style() -> None:
    """Test due today or earlier is highlighted."""
    assert Field.DUE.style_for(Task(uuid="a", due=local_noon(TODAY)), TODAY) == "red"
    assert Field.DUE.style_for(Task(uuid="a"), TODAY) != "red"


def test_simple_fields() -> None:
    """Test id, next, project and waiting values."""
    task = Task(id=4, uuid="a", project="garden", tags={"next"})

    assert Field.ID.value_for(task) == "4"
    assert Field.ID.value_for(Task(uuid="b")) == "0"
    assert Field.NEXT.value_for(task) == "N"
    assert Field.NEXT.value_for(Task(uuid="b")) == ""
    assert Field.PROJECT.value_for(task) == "garden"
    assert Field.WAITING.value_for(task) == "Ready"


def test_pr_fields() -> None:
    """Test PR rows read the github UDAs."""
    task = Task.model_validate({"uuid": "a", "githubtitle": "Fix it", "githubuser": "octocat"})

    assert PrField.TITLE.value_for(task) == "Fix it"
    assert PrField.USER.label == "User"
    assert PrField.BODY.value_for(task) == ""


def test_task_detail_renders_labels_and_values() -> None:
    """Test the detail view lists each row."""
    task = Task.model_validate({"id": 3, "uuid": "a", "githubtitle": "Fix [it]"})

    text = render(task_detail(task, [Field.ID, PrField.TITLE]))

    assert "Title" in text
    assert "Fix [it]" in text


def test_print_unique_table_skips_seen_tasks() -> None:
    """Test a task is only shown in the first table that contains it."""
    console = Console(file=io.StringIO(), width=120, color_system=None)
    first = Task(id=1, uuid="a", description="First")
    second = Task(id=2, uuid="b", description="Second")
    seen: set[str] = set()

    print_unique_table(console, [first], [Field.DESCRIPTION], "white", seen)
    print_unique_table(console, [first, second], [Field.DESCRIPTION], "white", seen)
    print_unique_table(console, [second], [Field.DESCRIPTION], "white", seen)

    lines = [line.strip() for line in console.file.getvalue().splitlines() if line.strip()]
    assert lines == ["First", "Second", "--none--"]
    assert seen == {"a", "b"}


def test_print_table_empty() -> None:
    """Test an empty table prints a placeholder."""
    console = Console(file=io.StringIO(), width=120, color_system=None)

    print_table(console, [], [Field.ID], "white")

    assert "--none--" in console.file.getvalue()
