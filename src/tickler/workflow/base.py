"""Stateful workflow engine.

A workflow is a chain of named states. Each non-terminal state performs
its I/O in ``step`` and returns the successor state; terminal states end
the chain and carry the workflow's payload, if any.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from rich.console import Console

from tickler.errors import PreconditionError
from tickler.prompts import Prompter
from tickler.taskwarrior.store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Services:
    """Collaborators every workflow step may use."""

    store: TaskStore
    prompter: Prompter
    console: Console


@dataclass(frozen=True)
class State(ABC):
    """A single named state of a workflow."""

    services: Services

    @property
    def terminated(self) -> bool:
        return False

    @abstractmethod
    def step(self) -> "State":
        """Advance exactly one transition, returning the next state."""


@dataclass(frozen=True)
class Terminal(State):
    """A state from which no further step is taken."""

    @property
    def terminated(self) -> bool:
        return True

    def step(self) -> State:
        raise PreconditionError(f"Attempted to step terminal state {type(self).__name__}")


def drive(state: State) -> State:
    """Step a workflow until it reaches a terminal state and return that state.

    Errors raised by a step abort the whole workflow.
    """
    while True:
        next_state = state.step()
        logger.debug(
            f"[Workflow] {type(state).__name__} -> {type(next_state).__name__}"
        )
        state = next_state
        if state.terminated:
            return state
