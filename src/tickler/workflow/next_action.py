"""Next-action selection workflow.

Ensures a project has a task tagged ``next``. With ``force`` the existing
next action is cleared and a new one is always picked.
"""

from dataclasses import dataclass

from rich.markup import escape

from tickler.errors import error_context
from tickler.taskwarrior import operations
from tickler.taskwarrior.models import Project, Task
from tickler.workflow import create
from tickler.workflow.base import State, Services, Terminal, drive

NEXT_TAG = "next"
NEW_TASK = "--New task--"


def start(services: Services, project: Project, force: bool = False) -> "Checking":
    return Checking(services, project, force)


@dataclass(frozen=True)
class Checking(State):
    project: Project
    force: bool = False

    def step(self) -> State:
        store = self.services.store
        tasks = store.query(self.project.pending_filter())
        current = [task for task in tasks if task.is_next()]

        if current:
            if not self.force:
                return Done(self.services, self.project)
            for task in current:
                store.mutate(task, operations.remove_tags([NEXT_TAG]))

        self.services.console.print(
            "\n\nThe following project does not have a next task:\n"
            f" -> [yellow]{escape(self.project)}[/yellow]\n"
        )
        return Picking(self.services, self.project, tuple(tasks))


@dataclass(frozen=True)
class Picking(State):
    project: Project
    tasks: tuple[Task, ...]

    def step(self) -> State:
        choices = [task.description for task in self.tasks]
        choices.append(NEW_TASK)

        prompter = self.services.prompter
        choice = prompter.select_one("Which task should be next?", choices, default=0)
        if choice < len(self.tasks):
            task = self.tasks[choice]
        else:
            with error_context("Failed to create a new next task"):
                task = drive(create.for_project(self.services, self.project)).task

        with error_context("Failed attempting to modify task with +next"):
            self.services.store.mutate(task, operations.add_tags([NEXT_TAG]))

        self.services.console.print("    [green]Next task selected[/green]")
        return Done(self.services, self.project)


@dataclass(frozen=True)
class Done(Terminal):
    project: Project
