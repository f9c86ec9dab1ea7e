"""Inbox triage workflow.

Walks a single inbox item through the GTD decision tree: trash, incubate
or file it when it is not actionable; otherwise do it now, defer it as a
new task or delegate it with a follow-up reminder.
"""

from dataclasses import dataclass
from enum import Enum

from tickler.errors import error_context
from tickler.taskwarrior import operations
from tickler.taskwarrior.models import ActionCategory, Task, TaskFields
from tickler.taskwarrior.store import TaskStore
from tickler.workflow import create
from tickler.workflow.base import Services, State, Terminal, drive


class NonAction(Enum):
    TRASH = "Trash"
    INCUBATE = "Incubate"
    REFERENCE = "Reference"

    def __str__(self) -> str:
        return self.value


class ActionChoice(Enum):
    DO = "Do it"
    DEFER = "Defer"
    DELEGATE = "Delegate"

    def __str__(self) -> str:
        return self.value


class Delegation(Enum):
    """Ways of handing a task to someone else.

    Each value is the prompt label; :attr:`annotation` is the note left on
    the follow-up task.
    """

    SLACK = "Send a slack message to this person"
    EMAIL = "Send an email to this person"
    PHONE = "Text/Call this person"
    AGENDA = "Make a note for the next meeting with this person"

    @property
    def annotation(self) -> str:
        return {
            Delegation.SLACK: "Sent a slack message",
            Delegation.EMAIL: "Sent an email",
            Delegation.PHONE: "Texted or called",
            Delegation.AGENDA: "Meant to bring it up in the next meeting",
        }[self]

    def __str__(self) -> str:
        return self.value


def start(services: Services, task: Task) -> "Starting":
    return Starting(services, task)


@dataclass(frozen=True)
class Starting(State):
    task: Task

    def step(self) -> State:
        if self.services.prompter.confirm(
            "Is this actionable (could you start work on this now)?", default=True
        ):
            return Actioning(self.services, self.task)
        return Inactioning(self.services, self.task)


@dataclass(frozen=True)
class Inactioning(State):
    task: Task

    def step(self) -> State:
        choices = list(NonAction)
        selection = self.services.prompter.select_one(
            "What would you like to do?", choices, default=0
        )
        choice = choices[selection]

        if choice is NonAction.TRASH:
            self.services.store.mutate(self.task, operations.delete())
            self.services.console.print("[red]    Task deleted[/red]")
            return Deleted(self.services, self.task)
        if choice is NonAction.REFERENCE:
            self.services.store.mutate(self.task, operations.reference())
            self.services.console.print("[green]    Task filed for reference[/green]")
            return Referenced(self.services, self.task)
        if choice is NonAction.INCUBATE:
            return Incubating(self.services, self.task)
        raise AssertionError(f"Unhandled choice {choice}")


@dataclass(frozen=True)
class Incubating(State):
    task: Task

    def step(self) -> State:
        prompter = self.services.prompter

        if prompter.confirm("Would you like to be reminded about this task later?", default=True):
            wait = prompter.input_text(
                "When would you like to be reminded? (any valid 'wait:' value)", default="+1d"
            )
            self.services.store.mutate(self.task, operations.tickle(wait))
        else:
            self.services.store.mutate(self.task, operations.someday())

        self.services.console.print("[green]    Task incubated[/green]")
        return Incubated(self.services, self.task)


@dataclass(frozen=True)
class Actioning(State):
    task: Task

    def step(self) -> State:
        prompter = self.services.prompter
        choices = list(ActionChoice)
        selection = prompter.select_one("What would you like to do?", choices, default=0)
        choice = choices[selection]

        if choice is ActionChoice.DO:
            # Once you decide to do an inbox item there is no way out other
            # than finishing it.
            while not prompter.confirm("Is it done?", default=True):
                pass
            self.services.store.mutate(self.task, operations.finish())
            self.services.console.print("[green]    Task finished[/green]")
            return Finished(self.services, self.task)
        if choice is ActionChoice.DEFER:
            return Deferring(self.services, self.task)
        if choice is ActionChoice.DELEGATE:
            return Delegating(self.services, self.task)
        raise AssertionError(f"Unhandled choice {choice}")


@dataclass(frozen=True)
class Deferring(State):
    task: Task

    def step(self) -> State:
        with error_context("Attempting to create a task as part of the deferring step"):
            drive(create.start(self.services))

        self.services.store.mutate(self.task, operations.delete())
        self.services.console.print("[green]    Task deferred (original deleted)[/green]")
        return Deferred(self.services, self.task)


@dataclass(frozen=True)
class Delegating(State):
    task: Task

    def step(self) -> State:
        prompter = self.services.prompter
        store = self.services.store

        choices = list(Delegation)
        selection = prompter.select_one("What would you like to do?", choices, default=0)
        delegation = choices[selection]
        message = prompter.input_text(
            "What would you like the reminder for this follow-up to be?"
        )
        wait = prompter.input_text("When should this follow-up appear in your inbox?")

        follow_up = create_follow_up(store, self.task, message, wait)
        # record which delegation option was chosen for later reference
        store.mutate(follow_up, operations.annotate(delegation.annotation))

        store.mutate(self.task, operations.delete())
        self.services.console.print("[green]    Task delegated (original deleted)[/green]")
        return Delegated(self.services, self.task)


def create_follow_up(store: TaskStore, task: Task, message: str, wait: str) -> Task:
    """Create an inbox task that resurfaces at ``wait`` to chase ``task``."""
    fields = (
        TaskFields()
        .with_tags("in", "tickle")
        .with_wait(wait)
        .with_contexts(ActionCategory.WORK, ActionCategory.HOME)
        .with_description(message)
    )
    with error_context("Failed to create follow-up task"):
        follow_up = store.create(fields)
    store.mutate(follow_up, operations.annotate(f"follow up from {task.description}"))
    return follow_up


@dataclass(frozen=True)
class Incubated(Terminal):
    task: Task


@dataclass(frozen=True)
class Referenced(Terminal):
    task: Task


@dataclass(frozen=True)
class Delegated(Terminal):
    task: Task


@dataclass(frozen=True)
class Deferred(Terminal):
    task: Task


@dataclass(frozen=True)
class Finished(Terminal):
    task: Task


@dataclass(frozen=True)
class Deleted(Terminal):
    task: Task
