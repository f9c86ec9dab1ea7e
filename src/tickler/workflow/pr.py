"""Pull request review workflow."""

from dataclasses import dataclass

from tickler.display import Field, PrField, task_detail
from tickler.errors import PreconditionError
from tickler.iou_client import UrlOpener
from tickler.taskwarrior import operations
from tickler.taskwarrior.models import Task
from tickler.workflow.base import Services, State, Terminal

DETAIL_ROWS = (
    Field.ID,
    PrField.TITLE,
    PrField.USER,
    PrField.STATE,
    PrField.URL,
    PrField.BODY,
    Field.ANNOTATIONS,
)


def start(services: Services, task: Task, opener: UrlOpener) -> "Starting":
    return Starting(services, task, opener)


@dataclass(frozen=True)
class Starting(State):
    task: Task
    opener: UrlOpener

    def step(self) -> State:
        console = self.services.console
        console.print("[cyan]Next PR:[/cyan]")
        console.print(task_detail(self.task, DETAIL_ROWS))

        if self.services.prompter.confirm("Open in browser?", default=True):
            url = PrField.URL.value_for(self.task)
            if not url:
                raise PreconditionError(
                    f"Task is missing the github url UDA: {self.task.uuid}"
                )
            self.opener.open(url)

        return Processing(self.services, self.task)


@dataclass(frozen=True)
class Processing(State):
    task: Task

    def step(self) -> State:
        prompter = self.services.prompter
        if prompter.confirm("Would you like to hide this PR until later?", default=False):
            wait = prompter.input_text(
                "When would you like to see this PR again? (any valid 'wait:' value)",
                default="+1d",
            )
            self.services.store.mutate(self.task, operations.tickle(wait))
        return Done(self.services, self.task)


@dataclass(frozen=True)
class Done(Terminal):
    task: Task
