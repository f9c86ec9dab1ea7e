"""Mutations that can be applied to an existing task."""

from collections.abc import Iterable
from dataclasses import dataclass

from tickler.taskwarrior.models import RESUME_PREFIX

# Project used for someday/maybe items
MAYBE_PROJECT = "maybe"


@dataclass(frozen=True)
class Operation:
    """A Taskwarrior command applied to one task.

    ``args`` follow the task id on the command line; ``failure`` is the
    message used when the command does not succeed.
    """

    args: tuple[str, ...]
    failure: str


def finish() -> Operation:
    return Operation(("done",), "Could not finish task")


def delete() -> Operation:
    return Operation(("delete",), "Could not delete task")


def start() -> Operation:
    return Operation(("start",), "Could not start task")


def stop() -> Operation:
    return Operation(("stop",), "Could not stop task")


def annotate(text: str) -> Operation:
    return Operation(("annotate", text), "Could not annotate task")


def add_tags(tags: Iterable[str]) -> Operation:
    tags = list(tags)
    return Operation(
        ("modify", *(f"+{tag}" for tag in tags)), f"Could not add tags {tags}"
    )


def remove_tags(tags: Iterable[str]) -> Operation:
    tags = list(tags)
    return Operation(
        ("modify", *(f"-{tag}" for tag in tags)), f"Could not remove tags {tags}"
    )


def tickle(wait: str) -> Operation:
    """Hide the task until ``wait`` (any Taskwarrior date expression)."""
    return Operation(("modify", "+tickle", f"wait:{wait}"), "Could not add task to tickler")


def someday() -> Operation:
    return Operation(
        ("modify", "-in", "-@home", "-@work", f"project:{MAYBE_PROJECT}"),
        "Could not move task to maybe",
    )


def reference() -> Operation:
    return Operation(
        ("modify", "-in", "-@home", "-@work", "+reference"),
        "Could not move task to be referenced",
    )


def set_resumable(uuid: str) -> Operation:
    """Record that the task with ``uuid`` should be resumed after this one."""
    return Operation(("annotate", f"{RESUME_PREFIX}{uuid}"), "Could not annotate task")
