"""Models for Taskwarrior tasks and the fields used to create them."""

import shlex
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tickler.errors import PreconditionError

# Taskwarrior's export date format, always UTC
TASKWARRIOR_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

# Annotation prefix linking a task to the task that should be resumed after it
RESUME_PREFIX = "DTR:"


def parse_taskwarrior_date(value: Any) -> datetime | None:
    """Parse a Taskwarrior export date, tolerating ISO strings and datetimes."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value, TASKWARRIOR_DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            return datetime.fromisoformat(value)
    raise ValueError(f"Unsupported date value: {value!r}")


class TaskStatus(str, Enum):
    """Task status as reported by Taskwarrior."""

    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"
    WAITING = "waiting"
    RECURRING = "recurring"


class Annotation(BaseModel):
    """Timestamped note attached to a task."""

    entry: datetime | None = None
    description: str = ""

    @field_validator("entry", mode="before")
    @classmethod
    def _parse_entry(cls, value: Any) -> datetime | None:
        return parse_taskwarrior_date(value)


class Task(BaseModel):
    """Task as exported by Taskwarrior.

    Unknown export keys (user-defined attributes such as ``githuburl`` or
    ``jiraurl``) are kept as extra fields and read through :meth:`uda`.
    """

    model_config = ConfigDict(extra="allow")

    id: int | None = None  # Only present while the task is pending/waiting
    uuid: str
    description: str = ""
    project: str | None = None
    tags: set[str] = Field(default_factory=set)
    annotations: list[Annotation] = Field(default_factory=list)
    status: TaskStatus = TaskStatus.PENDING
    entry: datetime | None = None
    modified: datetime | None = None
    start: datetime | None = None
    end: datetime | None = None
    wait: datetime | None = None
    due: datetime | None = None
    urgency: float = 0.0

    @field_validator("id", mode="before")
    @classmethod
    def _zero_id_is_absent(cls, value: Any) -> Any:
        # Taskwarrior exports completed and deleted tasks with id 0
        if value == 0:
            return None
        return value

    @field_validator("entry", "modified", "start", "end", "wait", "due", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> datetime | None:
        return parse_taskwarrior_date(value)

    def uda(self, key: str) -> str:
        """Return a user-defined attribute as a string, empty when absent."""
        value = (self.model_extra or {}).get(key)
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def is_next(self) -> bool:
        """Whether this task is its project's next action.

        Completed tasks are never next.
        """
        if self.status == TaskStatus.COMPLETED:
            return False
        return self.has_tag("next")

    def annotated_description(self) -> str:
        lines = [self.description]
        for annotation in self.annotations:
            day = annotation.entry.strftime("%Y-%m-%d") if annotation.entry else ""
            lines.append(f"    {day} {annotation.description}")
        return "\n".join(lines)

    def resume_uuid(self) -> str | None:
        """UUID from the most recent resume annotation, if any."""
        for annotation in reversed(self.annotations):
            if annotation.description.startswith(RESUME_PREFIX):
                return annotation.description[len(RESUME_PREFIX) :]
        return None


class Project(str):
    """Name of a Taskwarrior project. The empty string means "no project"."""

    def pending_filter(self) -> str:
        """Filter expression matching the project's pending tasks."""
        return f"project:{shlex.quote(str(self))} status:pending"


class ActionCategory(Enum):
    """Context tags describing where or how a task can be done."""

    AGENDA = "@agenda"
    ANYWHERE = "@anywhere"
    COMPUTER = "@computer"
    ERRANDS = "@errands"
    HOME = "@home"
    PHONE = "@phone"
    READ_AND_REVIEW = "@rnr"
    WORK = "@work"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    def __str__(self) -> str:
        return self.label


_CATEGORY_LABELS = {
    ActionCategory.AGENDA: "Agenda",
    ActionCategory.ANYWHERE: "Anywhere",
    ActionCategory.COMPUTER: "Computer",
    ActionCategory.ERRANDS: "Errands",
    ActionCategory.HOME: "Home",
    ActionCategory.PHONE: "Phone",
    ActionCategory.READ_AND_REVIEW: "ReadAndReview",
    ActionCategory.WORK: "Work",
}


class Brainpower(Enum):
    """Brainpower rating, stored in the ``brain`` UDA."""

    LOW = "L"
    MEDIUM = "M"
    HIGH = "H"

    def __str__(self) -> str:
        return self.name.title()


class Estimate(IntEnum):
    """Effort estimate in minutes, stored in the ``est`` UDA."""

    SMALL = 30
    MEDIUM = 360
    LARGE = 1440
    XLARGE = 2880
    UNKNOWN = 9999

    def __str__(self) -> str:
        return _ESTIMATE_LABELS[self]


_ESTIMATE_LABELS = {
    Estimate.SMALL: "Thirty minutes",
    Estimate.MEDIUM: "Six hours",
    Estimate.LARGE: "One day",
    Estimate.XLARGE: "Two days",
    Estimate.UNKNOWN: "More than two days (not well understood)",
}


class TaskFields(BaseModel):
    """Accumulates the fields of a task that does not exist yet.

    Instances are immutable; every ``with_*`` call returns an updated copy.
    """

    model_config = ConfigDict(frozen=True)

    description: str = ""
    contexts: tuple[ActionCategory, ...] = ()
    tags: tuple[str, ...] = ()
    project: str | None = None
    wait: str | None = None
    due: str | None = None
    estimate: Estimate = Estimate.SMALL
    brainpower: Brainpower = Brainpower.MEDIUM

    def with_description(self, description: str) -> "TaskFields":
        return self.model_copy(update={"description": description})

    def with_project(self, project: str) -> "TaskFields":
        return self.model_copy(update={"project": project})

    def with_contexts(self, *contexts: ActionCategory) -> "TaskFields":
        return self.model_copy(update={"contexts": self.contexts + tuple(contexts)})

    def with_tags(self, *tags: str) -> "TaskFields":
        return self.model_copy(update={"tags": self.tags + tuple(tags)})

    def with_wait(self, wait: str) -> "TaskFields":
        return self.model_copy(update={"wait": wait})

    def with_due(self, due: str) -> "TaskFields":
        return self.model_copy(update={"due": due})

    def with_estimate(self, estimate: Estimate) -> "TaskFields":
        return self.model_copy(update={"estimate": estimate})

    def with_brainpower(self, brainpower: Brainpower) -> "TaskFields":
        return self.model_copy(update={"brainpower": brainpower})

    def validate_complete(self) -> None:
        """Raise PreconditionError unless the task can be created."""
        if not self.description.strip():
            raise PreconditionError("A task needs a non-empty description")
        if not self.contexts:
            raise PreconditionError("A task needs at least one context")

    def to_args(self) -> list[str]:
        """Serialize as ``task add`` arguments."""
        args = ["add", f"brain:{self.brainpower.value}", f"est:{int(self.estimate)}"]
        if self.project is not None:
            args.append(f"project:{self.project}")
        args.extend(f"+{context.tag}" for context in self.contexts)
        args.extend(f"+{tag}" for tag in self.tags)
        if self.wait is not None:
            args.append(f"wait:{self.wait}")
        if self.due is not None:
            args.append(f"due:{self.due}")
        args.append(self.description)
        return args
