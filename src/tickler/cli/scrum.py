"""Daily scrum report."""

from datetime import date

import click
from rich.markup import escape

from tickler import factory
from tickler.display import Field, print_unique_table
from tickler.errors import error_context

STANDARD_FIELDS = (Field.ID, Field.PROJECT, Field.NEXT, Field.ANNOTATED_DESCRIPTION)


def lower_bound(today: date, days: int | None = None) -> str:
    """Taskwarrior date expression for the previous scrum.

    Mondays look back to Friday and Sundays to Friday; any other day looks
    back one day.
    """
    if days is not None:
        return f"today-{days}d"
    weekday = today.weekday()
    if weekday == 0:
        return "today-3d"
    if weekday == 6:
        return "today-2d"
    return "yesterday"


def render_filter(template: str, bound: str) -> str:
    return template.replace("{bound}", bound)


@click.command()
@click.option(
    "-d",
    "--days",
    type=click.IntRange(min=0),
    default=None,
    help="How many days ago to use as the cutoff. Defaults by day of the week.",
)
def scrum(days: int | None) -> None:
    """Daily scrum summary."""
    services = factory.get_services()
    config = factory.get_config()
    store = services.store
    console = services.console

    today = date.today()
    bound = lower_bound(today, days)

    # load everything first so nothing is printed if a query fails
    with error_context("Could not fetch completed tasks"):
        completed = store.query(render_filter(config.scrum.completed, bound))
    with error_context("Could not fetch in progress tasks"):
        started = store.query(render_filter(config.scrum.in_progress, bound))
    with error_context("Could not fetch due tasks"):
        due = store.query(render_filter(config.scrum.due, bound))
    with error_context("Could not fetch modified tasks"):
        modified = store.query(render_filter(config.scrum.modified, bound))
    with error_context("Could not fetch follow-up tasks"):
        waiting = store.query(render_filter(config.scrum.waiting, bound))

    console.print(
        f"[bold]Today is {today.strftime('%A, %Y-%m-%d')}. "
        f"Last scrum should have been {escape(bound)}[/bold]\n"
    )

    seen: set[str] = set()

    console.print("[cyan]Tasks completed since last scrum:[/cyan]")
    print_unique_table(console, completed, (Field.PROJECT, Field.DESCRIPTION), "green", seen)

    console.print("\n[cyan]In-progress tasks:[/cyan]")
    print_unique_table(console, started, STANDARD_FIELDS, "blue", seen)

    console.print("\n[cyan]Tasks due soon:[/cyan]")
    print_unique_table(
        console,
        due,
        (Field.ID, Field.DUE, Field.PROJECT, Field.NEXT, Field.ANNOTATED_DESCRIPTION),
        "red",
        seen,
    )

    console.print("\n[cyan]Waiting tasks for the next five days:[/cyan]")
    print_unique_table(
        console,
        waiting,
        (Field.ID, Field.WAITING, Field.PROJECT, Field.ANNOTATED_DESCRIPTION),
        "magenta",
        seen,
    )

    # last, since it overlaps every other section
    console.print("\n[cyan]Other tasks modified since last scrum:[/cyan]")
    print_unique_table(console, modified, STANDARD_FIELDS, "yellow", seen)
