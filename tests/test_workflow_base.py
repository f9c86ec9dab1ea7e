"""Tests for the workflow engine."""

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from fakes import FakeStore, RecordingOpener
from tickler.errors import PreconditionError
from tickler.workflow import create, inbox, next_action, pr
from tickler.workflow.base import State, Terminal, drive


@dataclass(frozen=True)
class Counting(State):
    remaining: int

    def step(self) -> State:
        if self.remaining == 0:
            return Stopped(self.services)
        return Counting(self.services, self.remaining - 1)


@dataclass(frozen=True)
class Stopped(Terminal):
    pass


def test_drive_returns_terminal_state(make_services: Callable) -> None:
    """Test drive steps until a terminal state is reached."""
    services, _ = make_services()
    final = drive(Counting(services, 3))

    assert isinstance(final, Stopped)
    assert final.terminated


def test_stepping_terminal_state_is_rejected(
    make_services: Callable, store: FakeStore
) -> None:
    """Test a terminal state refuses to step and touches nothing."""
    services, prompter = make_services()
    task = store.add("Something")

    terminals = [
        Stopped(services),
        create.Done(services, task),
        inbox.Finished(services, task),
        inbox.Deleted(services, task),
        inbox.Incubated(services, task),
        inbox.Referenced(services, task),
        inbox.Delegated(services, task),
        inbox.Deferred(services, task),
        next_action.Done(services, "proj"),
        pr.Done(services, task),
    ]
    for state in terminals:
        assert state.terminated
        with pytest.raises(PreconditionError):
            state.step()

    assert store.mutations == []
    assert prompter.prompts == []


def test_non_terminal_states_are_not_terminated(
    make_services: Callable, store: FakeStore
) -> None:
    """Test every non-terminal state reports terminated as False."""
    services, _ = make_services()
    task = store.add("Something")
    fields = create.start(services).fields

    states = [
        Counting(services, 1),
        create.ProjectInfo(services, fields),
        create.Action(services, fields),
        create.Context(services, fields),
        create.Timing(services, fields),
        inbox.Starting(services, task),
        inbox.Inactioning(services, task),
        inbox.Incubating(services, task),
        inbox.Actioning(services, task),
        inbox.Deferring(services, task),
        inbox.Delegating(services, task),
        next_action.Checking(services, "proj"),
        next_action.Picking(services, "proj", (task,)),
        pr.Starting(services, task, RecordingOpener()),
        pr.Processing(services, task),
    ]
    assert not any(state.terminated for state in states)


def test_states_are_immutable(make_services: Callable) -> None:
    """Test states cannot be modified in place."""
    services, _ = make_services()
    state = Counting(services, 1)

    with pytest.raises(AttributeError):
        state.remaining = 5  # type: ignore[misc]
