"""Rich tables for tasks."""

from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tickler.taskwarrior.models import Task

NONE_STYLE = "yellow"
LABEL_STYLE = "bright_black"


class Field(Enum):
    """Columns available for task tables."""

    DESCRIPTION = "Description"
    ANNOTATED_DESCRIPTION = "Annotated description"
    ANNOTATIONS = "Annotations"
    DUE = "Due"
    ID = "ID"
    NEXT = "Next label"
    PROJECT = "Project"
    WAITING = "Waiting"

    @property
    def label(self) -> str:
        if self is Field.ANNOTATED_DESCRIPTION:
            return "Description"
        return self.value

    def value_for(self, task: Task, today: date | None = None) -> str:
        today = today or date.today()
        if self is Field.DESCRIPTION:
            return task.description
        if self is Field.ANNOTATED_DESCRIPTION:
            return task.annotated_description()
        if self is Field.ANNOTATIONS:
            return "\n".join(
                f"{a.entry.strftime('%Y-%m-%d') if a.entry else ''} {a.description}"
                for a in task.annotations
            )
        if self is Field.DUE:
            if task.due is None:
                return "None"
            due = task.due.astimezone().date()
            if due == today:
                return "Today"
            if due < today:
                return f"Overdue ({due.isoformat()})"
            return task.due.astimezone().strftime("%Y-%m-%d %a")
        if self is Field.ID:
            return str(task.id or 0)
        if self is Field.NEXT:
            return "N" if task.is_next() else ""
        if self is Field.PROJECT:
            return task.project or ""
        if self is Field.WAITING:
            return task.wait.astimezone().strftime("%Y-%m-%d %a") if task.wait else "Ready"
        raise AssertionError(f"Unhandled field {self}")

    def style_for(self, task: Task, today: date | None = None) -> str | None:
        """Style for this cell, or None to use the table's description style."""
        today = today or date.today()
        if self in (Field.DESCRIPTION, Field.ANNOTATED_DESCRIPTION, Field.ANNOTATIONS):
            return None
        if self is Field.DUE:
            if task.due is not None and task.due.astimezone().date() <= today:
                return "red"
            return LABEL_STYLE
        if self is Field.NEXT:
            return "bright_red"
        if self is Field.WAITING:
            return LABEL_STYLE if task.wait else "bright_red"
        return LABEL_STYLE


class PrField(Enum):
    """Pull request details stored in ``github*`` user-defined attributes."""

    TITLE = "githubtitle"
    BODY = "githubbody"
    USER = "githubuser"
    URL = "githuburl"
    STATE = "githubstate"

    @property
    def label(self) -> str:
        return {
            PrField.TITLE: "Title",
            PrField.BODY: "Body",
            PrField.USER: "User",
            PrField.URL: "URL",
            PrField.STATE: "State",
        }[self]

    def value_for(self, task: Task) -> str:
        return task.uda(self.value)


def task_table(
    tasks: Iterable[Task], fields: Sequence[Field], description_style: str = "white"
) -> Table:
    """Build a borderless table with one row per task."""
    table = Table(show_header=False, box=None, pad_edge=False)
    for _ in fields:
        table.add_column()
    for task in tasks:
        table.add_row(
            *(
                Text(field.value_for(task), style=field.style_for(task) or description_style)
                for field in fields
            )
        )
    return table


def task_detail(task: Task, rows: Sequence[Field | PrField]) -> Table:
    """Build a two-column label/value view of a single task."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style=LABEL_STYLE, justify="right")
    table.add_column()
    for row in rows:
        table.add_row(row.label, Text(row.value_for(task)))
    return table


def print_table(
    console: Console, tasks: Sequence[Task], fields: Sequence[Field], description_style: str
) -> None:
    print_unique_table(console, tasks, fields, description_style, set())


def print_unique_table(
    console: Console,
    tasks: Sequence[Task],
    fields: Sequence[Field],
    description_style: str,
    seen_uuids: set[str],
) -> None:
    """Print tasks not already in ``seen_uuids``, recording the ones printed.

    Sharing ``seen_uuids`` between calls shows each task only once across a
    set of tables.
    """
    unseen = [task for task in tasks if task.uuid not in seen_uuids]
    if not unseen:
        console.print(f"    [{NONE_STYLE}]--none--[/{NONE_STYLE}]")
        return

    seen_uuids.update(task.uuid for task in unseen)
    console.print(task_table(unseen, fields, description_style))

