"""Planning and review commands: inbox, projects, requests and RFCs."""

import logging

import click
from rich.markup import escape

from tickler import factory
from tickler.cli.active import find_links
from tickler.config import Config
from tickler.display import Field, print_table
from tickler.errors import PreconditionError, error_context
from tickler.taskwarrior import operations
from tickler.taskwarrior.models import ActionCategory, Project, Task, TaskFields
from tickler.workflow import (
    Services,
    force_next_task,
    inbox_task,
    new_task,
    process_pr,
    set_next_task,
)

logger = logging.getLogger(__name__)

INBOX_FILTER = "status:pending +in"
RFC_INBOX_TAG = "rfc_inbox"
RNR_TAG = "rnr"


@click.command()
def new() -> None:
    """Add a new task."""
    new_task(factory.get_services())


@click.command()
def inbox() -> None:
    """Daily inbox review.

    Also runs the rfc-util command once the inbox is empty.
    """
    services = factory.get_services()
    console = services.console

    while True:
        # ids shift after every mutation so re-query each time
        tasks = services.store.query(INBOX_FILTER)
        if not tasks:
            console.print("[yellow]Your inbox is empty[/yellow]")
            break

        task = tasks[0]
        console.print("\n\nThe next item is:\n")
        print_table(console, [task], [Field.ANNOTATED_DESCRIPTION], "yellow")
        console.print()
        inbox_task(services, task)

    create_rfc_reviews(services, factory.get_config())


@click.command()
def projects() -> None:
    """Ensure projects have next actions."""
    services = factory.get_services()
    config = factory.get_config()

    for project in services.store.list_projects(excluding=config.excluded_projects):
        if not project:
            continue
        set_next_task(services, project)

    services.console.print("[yellow]No remaining projects[/yellow]")


@click.command()
def replan() -> None:
    """Replan a project by changing which task is next."""
    services = factory.get_services()
    config = factory.get_config()

    candidates = services.store.list_projects(excluding=config.excluded_projects)
    choice = services.prompter.select_one("Which project to replan?", candidates, default=0)
    force_next_task(services, Project(candidates[choice]))


@click.command()
def requests() -> None:
    """Process all pull requests awaiting review."""
    services = factory.get_services()
    config = factory.get_config()
    client = factory.make_iou_client()

    with error_context("Could not fetch pull requests"):
        prs = services.store.query(config.requests.filter)

    for task in prs:
        process_pr(services, task, client)


@click.command("rfc-util")
def rfc_util() -> None:
    """Create rnr tasks for RFC tickets if RFC links are available."""
    create_rfc_reviews(factory.get_services(), factory.get_config())


def notion_link(task: Task) -> str | None:
    """First notion link in the task's Jira description, if any."""
    for link in find_links(task.uda("jiradescription")):
        if "notion" in link:
            return link
    return None


def create_rfc_reviews(services: Services, config: Config) -> list[Task]:
    """Create a read-and-review task for every RFC whose document is linked.

    Args:
        services: Workflow collaborators
        config: Supplies the RFC filter and the project for review tasks

    Returns:
        The review tasks that were created

    Raises:
        PreconditionError: If an eligible RFC lacks its Jira summary or url
    """
    store = services.store
    with error_context("Could not fetch rfcs"):
        rfcs = store.query(config.rfcs.filter)

    eligible = [(rfc, link) for rfc in rfcs if (link := notion_link(rfc)) is not None]
    if not eligible:
        return []

    services.console.print("\n[yellow]Eligible RFCs detected[/yellow]")

    created = []
    for rfc, link in eligible:
        summary = rfc.uda("jirasummary")
        if not summary:
            raise PreconditionError(f"Failed to get jira summary from task {rfc.uuid}")
        jira_url = rfc.uda("jiraurl")
        if not jira_url:
            raise PreconditionError(f"Failed to get jira url from task {rfc.uuid}")

        description = f"RFC Review: {summary}"
        fields = (
            TaskFields()
            .with_description(description)
            .with_contexts(ActionCategory.COMPUTER, ActionCategory.WORK)
            .with_tags(RNR_TAG)
            .with_project(config.rfcs.rnr_task_project)
        )
        review = store.create(fields)
        store.mutate(rfc, operations.remove_tags([RFC_INBOX_TAG]))
        store.mutate(review, operations.annotate(jira_url))
        store.mutate(review, operations.annotate(link))

        logger.info(f"[RFC] Created review task {review.uuid} for {rfc.uuid}")
        services.console.print(f"[green]Added rnr task for '{escape(description)}'[/green]")
        created.append(review)

    return created
