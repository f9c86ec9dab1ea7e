"""New task creation workflow.

Things required for a new task:

* Action (required)
* Context (required, at least one)
* Project (optional)
* Due date (optional)
* Brainpower (defaults to medium)
* Estimate (defaults to thirty minutes)
"""

from dataclasses import dataclass

from tickler.taskwarrior.models import (
    ActionCategory,
    Brainpower,
    Estimate,
    Project,
    Task,
    TaskFields,
)
from tickler.workflow.base import Services, State, Terminal

NEW_PROJECT = "--New project--"


def start(services: Services) -> "ProjectInfo":
    """Entry point for a task that may or may not belong to a project."""
    return ProjectInfo(services, TaskFields())


def for_project(services: Services, project: Project) -> "Action":
    """Entry point for adding a task to a known project.

    Used when picking the next action of a project that has none.
    """
    return Action(services, TaskFields().with_project(project))


@dataclass(frozen=True)
class ProjectInfo(State):
    fields: TaskFields

    def step(self) -> State:
        prompter = self.services.prompter
        fields = self.fields

        if prompter.confirm("Is this part of a project?", default=True):
            # the new project option goes at the front of the list
            choices: list[str] = [NEW_PROJECT, *self.services.store.list_projects()]
            choice = prompter.select_one("Select a project", choices, default=0)
            if choice == 0:
                project = Project(prompter.input_text("Project"))
            else:
                project = Project(choices[choice])
            fields = fields.with_project(project)

        return Action(self.services, fields)


@dataclass(frozen=True)
class Action(State):
    fields: TaskFields

    def step(self) -> State:
        description = self.services.prompter.input_text("What is the action?")
        return Context(self.services, self.fields.with_description(description))


@dataclass(frozen=True)
class Context(State):
    fields: TaskFields

    def step(self) -> State:
        prompter = self.services.prompter

        contexts = list(ActionCategory)
        while True:
            selections = prompter.select_many("What context(s) fit this task?", contexts)
            if selections:
                break
            self.services.console.print("  [red]You must specify at least one context[/red]  ")

        brainpower = list(Brainpower)
        brain_choice = prompter.select_one(
            "How much brainpower will this take?", brainpower, default=1
        )

        estimates = list(Estimate)
        estimate_choice = prompter.select_one(
            "Rough estimate for how long this task will take?", estimates, default=0
        )

        fields = (
            self.fields.with_contexts(*(contexts[i] for i in sorted(selections)))
            .with_brainpower(brainpower[brain_choice])
            .with_estimate(estimates[estimate_choice])
        )
        return Timing(self.services, fields)


@dataclass(frozen=True)
class Timing(State):
    fields: TaskFields

    def step(self) -> State:
        prompter = self.services.prompter
        fields = self.fields

        if prompter.confirm("Is there a specific due date?", default=False):
            fields = fields.with_due(prompter.input_text("When is it due?"))

        task = self.services.store.create(fields)
        self.services.console.print(f"    [green]Added a new task with id {task.id}[/green]")
        return Done(self.services, task)


@dataclass(frozen=True)
class Done(Terminal):
    task: Task
