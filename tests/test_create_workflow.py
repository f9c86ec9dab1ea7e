"""Tests for the new task creation workflow."""

from collections.abc import Callable

import pytest

from fakes import FakeStore
from tickler.errors import PreconditionError, PromptError, StoreError
from tickler.taskwarrior.models import ActionCategory, Brainpower, Estimate
from tickler.workflow import add_to_project, create, new_task
from tickler.workflow.base import drive

WORK = list(ActionCategory).index(ActionCategory.WORK)
COMPUTER = list(ActionCategory).index(ActionCategory.COMPUTER)


def test_new_task_without_project(make_services: Callable, store: FakeStore) -> None:
    """Test the full flow for a task outside any project."""
    services, prompter = make_services(
        confirms=[False, False],
        multis=[{WORK}],
        selects=[2, 1],
        inputs=["Write report"],
    )

    task = new_task(services)

    assert task.description == "Write report"
    assert task.project is None
    assert "@work" in task.tags
    fields = store.created[0]
    assert fields.brainpower is Brainpower.HIGH
    assert fields.estimate is Estimate.MEDIUM
    assert fields.due is None
    assert prompter.exhausted


def test_new_task_in_existing_project(make_services: Callable, store: FakeStore) -> None:
    """Test choosing an existing project from the list."""
    store.add("Existing", project="garden")
    store.add("Other", project="house")
    services, _ = make_services(
        confirms=[True, False],
        # project list is [--New project--, garden, house]
        selects=[2, 1, 0],
        multis=[{COMPUTER}],
        inputs=["Fix gutter"],
    )

    task = new_task(services)

    assert task.project == "house"


def test_new_project_sentinel_prompts_for_name(
    make_services: Callable, store: FakeStore
) -> None:
    """Test the new project entry asks for a free-text name."""
    services, prompter = make_services(
        confirms=[True, True],
        selects=[0, 1, 0],
        multis=[{WORK}],
        inputs=["launch", "Plan launch", "friday"],
    )

    task = new_task(services)

    assert task.project == "launch"
    assert store.created[0].due == "friday"
    assert "Project" in prompter.prompts


def test_context_reprompted_until_non_empty(
    make_services: Callable, store: FakeStore, output: Callable[[], str]
) -> None:
    """Test empty context selections are rejected until one is chosen."""
    services, prompter = make_services(
        multis=[set(), set(), {WORK}],
        selects=[1, 0],
        confirms=[False],
    )
    state = create.Context(services, create.start(services).fields.with_description("Do it"))

    next_state = state.step()

    assert isinstance(next_state, create.Timing)
    assert next_state.fields.contexts == (ActionCategory.WORK,)
    context_prompts = [p for p in prompter.prompts if p.startswith("What context")]
    assert len(context_prompts) == 3
    assert output().count("You must specify at least one context") == 2
    assert store.created == []


def test_contexts_added_in_listing_order(make_services: Callable) -> None:
    """Test multiple contexts are stored in the order they are listed."""
    services, _ = make_services(multis=[{WORK, COMPUTER}], selects=[1, 0])
    state = create.Context(services, create.start(services).fields)

    next_state = state.step()

    assert next_state.fields.contexts == (ActionCategory.COMPUTER, ActionCategory.WORK)


def test_add_to_project_skips_project_question(
    make_services: Callable, store: FakeStore
) -> None:
    """Test the project entry point starts at the action prompt."""
    services, prompter = make_services(
        multis=[{WORK}], selects=[1, 0], confirms=[False], inputs=["Call plumber"]
    )

    task = add_to_project(services, "house")

    assert task.project == "house"
    assert "Is this part of a project?" not in prompter.prompts


def test_created_task_always_has_description_and_context(
    make_services: Callable, store: FakeStore
) -> None:
    """Test a blank description is refused at creation time."""
    services, _ = make_services(
        confirms=[False, False], multis=[{WORK}], selects=[1, 0], inputs=["   "]
    )

    with pytest.raises(PreconditionError):
        new_task(services)
    assert store.tasks == {}


def test_prompt_cancellation_aborts(make_services: Callable, store: FakeStore) -> None:
    """Test a cancelled prompt aborts the workflow without creating anything."""
    services, _ = make_services(confirms=[False])

    with pytest.raises(PromptError):
        drive(create.start(services))
    assert store.created == []


def test_store_failure_propagates(make_services: Callable, store: FakeStore) -> None:
    """Test a failed create aborts the workflow."""

    def fail(fields: object) -> None:
        raise StoreError("backend down")

    store.create = fail  # type: ignore[method-assign]
    services, _ = make_services(
        confirms=[False, False], multis=[{WORK}], selects=[1, 0], inputs=["Thing"]
    )

    with pytest.raises(StoreError, match="backend down"):
        new_task(services)
