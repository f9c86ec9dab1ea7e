"""Commands that act on the ACTIVE (started) task."""

import re

import click
from rich.markup import escape

from tickler import factory
from tickler.display import Field, PrField, print_table
from tickler.errors import PreconditionError, error_context
from tickler.taskwarrior import operations
from tickler.taskwarrior.models import Project, Task
from tickler.taskwarrior.store import TaskStore
from tickler.workflow import add_to_project, set_next_task

ACTIVE_FILTER = "+ACTIVE"
NEXT_FILTER = "+next -ACTIVE status:pending"
NOTHING = "-- nothing --"
INTERRUPT_PROJECT = Project("interrupt")

ACTIVE_FIELDS = (Field.ID, Field.PROJECT, Field.ANNOTATED_DESCRIPTION)

URL_PATTERN = re.compile(r"https?://[^\s<>\"']+")


def active_tasks(store: TaskStore) -> list[Task]:
    with error_context("Could not fetch current tasks"):
        return store.query(ACTIVE_FILTER)


def single_active_task(store: TaskStore) -> Task:
    """Return the only active task, failing when there are none or several."""
    candidates = active_tasks(store)
    if not candidates:
        raise PreconditionError("No active task")
    if len(candidates) > 1:
        raise PreconditionError("More than one active task detected. Aborting")
    return candidates[0]


def find_links(text: str) -> list[str]:
    """Return the http(s) URLs in ``text`` in order of appearance."""
    return [match.rstrip(".,;:!?)]") for match in URL_PATTERN.findall(text)]


def task_links(task: Task) -> list[str]:
    """Jira and GitHub links plus any URLs found in the task's annotations."""
    links = []
    for url in (task.uda("jiraurl"), PrField.URL.value_for(task)):
        if url:
            links.append(url)
    for annotation in task.annotations:
        links.extend(find_links(annotation.description))
    # keep first occurrence order
    return list(dict.fromkeys(links))


@click.command("next")
def next_task() -> None:
    """Find something to work on."""
    services = factory.get_services()
    console = services.console

    active = active_tasks(services.store)
    if active:
        console.print("[red]Cannot start a task when other task(s) are active:[/red]")
        print_table(console, active, ACTIVE_FIELDS, "magenta")
        return

    candidates = services.store.query(NEXT_FILTER)
    choices = [
        f"{task.id or 0} {task.project or ''}: {task.description}" for task in candidates
    ]
    choices.append(NOTHING)

    choice = services.prompter.select_one("What would you like to work on?", choices, default=0)
    if choice < len(candidates):
        task = candidates[choice]
        services.store.mutate(task, operations.start())
        console.print(f"[green]started {task.id or 0}[/green]")


@click.command()
def done() -> None:
    """Mark the currently active task as done, selecting a new next task if possible.

    If the completed task's project has other pending tasks, prompts for which
    of those should be the next task for that project.
    """
    services = factory.get_services()
    store = services.store
    console = services.console

    task = single_active_task(store)
    console.print(f"[green]Finishing: {escape(task.description)}[/green]")
    store.mutate(task, operations.finish())

    resume_uuid = task.resume_uuid()
    if resume_uuid:
        resume = store.get(resume_uuid)
        # completed tasks lose their id
        if resume.id is not None:
            console.print(
                f"[magenta]Resuming previous task: {escape(resume.description)}[/magenta]"
            )
            store.mutate(resume, operations.start())
            return

    if task.project:
        project = Project(task.project)
        if store.query(project.pending_filter()):
            set_next_task(services, project)


@click.command()
def stop() -> None:
    """Stop the ACTIVE task(s), if any."""
    services = factory.get_services()
    active = active_tasks(services.store)
    if not active:
        raise PreconditionError("No active task")

    for task in active:
        services.store.mutate(task, operations.stop())
        services.console.print(
            f"[green]Stopped {task.id or 0} {escape(task.description)}[/green]"
        )


@click.command()
def table() -> None:
    """'Table' the active task by stopping work and removing the next tag."""
    services = factory.get_services()
    task = single_active_task(services.store)

    services.console.print(f"[dim yellow]Tabling: {escape(task.description)}[/dim yellow]")
    services.store.mutate(task, operations.stop())
    services.store.mutate(task, operations.remove_tags(["next"]))


@click.command()
def current() -> None:
    """Display the ACTIVE task, if one exists."""
    services = factory.get_services()
    print_table(services.console, active_tasks(services.store), ACTIVE_FIELDS, "yellow")


@click.command()
@click.option("-m", "--message", default=None, help="The annotation. Prompted for if omitted.")
def annotate(message: str | None) -> None:
    """Annotate the ACTIVE task."""
    services = factory.get_services()
    active = active_tasks(services.store)
    if not active:
        raise PreconditionError("Can only annotate active task")

    if message is None:
        message = services.prompter.input_text("Message?")
    services.store.mutate(active[0], operations.annotate(message))


@click.command()
def interrupt() -> None:
    """Create and start an interrupt task.

    Any ACTIVE task is stopped first; the first of them is resumed by `done`
    once the interrupt is finished.
    """
    services = factory.get_services()
    store = services.store
    console = services.console

    active = active_tasks(store)
    for task in active:
        store.mutate(task, operations.stop())
        console.print(f"[yellow]Stopped {task.id or 0} {escape(task.description)}[/yellow]")

    task = add_to_project(services, INTERRUPT_PROJECT)
    store.mutate(task, operations.add_tags(["interrupt"]))
    if active:
        store.mutate(task, operations.set_resumable(active[0].uuid))
    store.mutate(task, operations.start())

    console.print(f"[green]started {task.id or 0}[/green]")


@click.command("open")
def open_links() -> None:
    """Open the ACTIVE task in a browser, if it can be.

    Supports Jira and GitHub links plus URLs in annotations.
    """
    services = factory.get_services()
    active = active_tasks(services.store)
    if not active:
        raise PreconditionError("Can only open an active task")

    links = task_links(active[0])
    if not links:
        services.console.print("[yellow]No links detected in active task[/yellow]")
        return

    client = factory.make_iou_client()
    if len(links) == 1:
        client.open(links[0])
        return

    choice = services.prompter.select_one("Which URL to open?", links, default=0)
    client.open(links[choice])
