"""Task store backed by the Taskwarrior command line."""

import json
import logging
import re
import shlex
import subprocess
from collections.abc import Iterable, Sequence
from typing import Protocol

from pydantic import ValidationError

from tickler.errors import PreconditionError, StoreError
from tickler.taskwarrior.models import Project, Task, TaskFields
from tickler.taskwarrior.operations import Operation

logger = logging.getLogger(__name__)

CREATED_TASK_RE = re.compile(r"^Created task (\d+)\.", re.MULTILINE)


class TaskStore(Protocol):
    """Protocol for querying and mutating tasks."""

    def query(self, filter_expression: str) -> list[Task]:
        """Return all tasks matching a Taskwarrior filter."""
        ...

    def get(self, identifier: int | str) -> Task:
        """Fetch a single task by id or uuid."""
        ...

    def create(self, fields: TaskFields) -> Task:
        """Create a task and return it with its id populated."""
        ...

    def mutate(self, task: Task, operation: Operation) -> None:
        """Apply an operation to an existing task."""
        ...

    def list_projects(self, excluding: Iterable[str] = ()) -> list[Project]:
        """List known projects except the excluded ones."""
        ...


def parse_created_id(output: str) -> int:
    """Parse the new task id from Taskwarrior's ``Created task N.`` message."""
    match = CREATED_TASK_RE.search(output)
    if not match:
        raise StoreError(f"Could not parse id from created task output: {output!r}")
    return int(match.group(1))


class TaskwarriorStore:
    """Task store that shells out to the ``task`` executable."""

    def __init__(self, command: Sequence[str] = ("task",)) -> None:
        """Initialize with the command used to invoke Taskwarrior."""
        self._command = list(command)

    def query(self, filter_expression: str) -> list[Task]:
        args = [
            "rc.json.array=on",
            "rc.confirmation=off",
            *shlex.split(filter_expression),
            "export",
        ]
        result = self._run(args)
        if result.returncode != 0:
            raise StoreError(
                f"Failed to load tasks for filter {filter_expression!r}: {result.stderr.strip()}"
            )

        try:
            raw = json.loads(result.stdout or "[]")
            return [Task.model_validate(item) for item in raw]
        except (json.JSONDecodeError, ValidationError) as e:
            raise StoreError(
                f"Could not read exported tasks for filter {filter_expression!r}"
            ) from e

    def get(self, identifier: int | str) -> Task:
        tasks = self.query(str(identifier))
        if not tasks:
            raise StoreError(f"Could not find task with id {identifier}")
        return tasks[0]

    def create(self, fields: TaskFields) -> Task:
        fields.validate_complete()

        result = self._run(["rc.confirmation=off", *fields.to_args()])
        if result.returncode != 0:
            raise StoreError(f"Failed to create task: {result.stderr.strip()}")

        task_id = parse_created_id(result.stdout)
        logger.info(f"[Store] Created task {task_id}: {fields.description}")
        return self.get(task_id)

    def mutate(self, task: Task, operation: Operation) -> None:
        if task.id is None:
            raise PreconditionError(f"{operation.failure}: task {task.uuid} does not have an id")

        result = self._run(["rc.confirmation=off", str(task.id), *operation.args])
        if result.returncode != 0:
            raise StoreError(
                f"{operation.failure}: command with args {list(operation.args)} "
                f"for task {task.id} did not succeed: {result.stderr.strip()}"
            )
        logger.info(f"[Store] Task {task.id}: {' '.join(operation.args)}")

    def list_projects(self, excluding: Iterable[str] = ()) -> list[Project]:
        excluded = set(excluding)
        result = self._run(["_projects"])
        if result.returncode != 0:
            raise StoreError(f"Could not list projects: {result.stderr.strip()}")

        return [
            Project(line)
            for line in result.stdout.splitlines()
            if line.strip() and line not in excluded
        ]

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        command = [*self._command, *args]
        logger.debug(f"[Store] Running {command}")
        try:
            return subprocess.run(command, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            logger.error(f"[Store] Taskwarrior not found: {self._command[0]}")
            raise StoreError(f"Taskwarrior executable not found: {self._command[0]}") from e
        except OSError as e:
            raise StoreError(f"Failed to execute {command}: {e}") from e
