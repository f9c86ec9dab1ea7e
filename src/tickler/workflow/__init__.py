"""Interactive workflows and helpers that drive them to completion."""

from tickler.iou_client import UrlOpener
from tickler.taskwarrior.models import Project, Task
from tickler.workflow import create, inbox, next_action, pr
from tickler.workflow.base import Services, State, Terminal, drive

__all__ = [
    "Services",
    "State",
    "Terminal",
    "drive",
    "new_task",
    "add_to_project",
    "inbox_task",
    "set_next_task",
    "force_next_task",
    "process_pr",
]


def new_task(services: Services) -> Task:
    """Create a task from scratch and return it."""
    return drive(create.start(services)).task


def add_to_project(services: Services, project: Project) -> Task:
    """Create a task in ``project`` and return it."""
    return drive(create.for_project(services, project)).task


def inbox_task(services: Services, task: Task) -> State:
    """Triage one inbox item, returning the terminal state that was reached."""
    return drive(inbox.start(services, task))


def set_next_task(services: Services, project: Project) -> None:
    """Make sure ``project`` has a next action."""
    drive(next_action.start(services, project))


def force_next_task(services: Services, project: Project) -> None:
    """Pick a new next action for ``project``, replacing any existing one."""
    drive(next_action.start(services, project, force=True))


def process_pr(services: Services, task: Task, opener: UrlOpener) -> None:
    drive(pr.start(services, task, opener))
