"""Tests for task models."""

from datetime import datetime, timezone

import pytest

from tickler.errors import PreconditionError
from tickler.taskwarrior.models import (
    ActionCategory,
    Brainpower,
    Estimate,
    Project,
    Task,
    TaskFields,
    TaskStatus,
)


def test_task_from_export() -> None:
    """Test parsing a Taskwarrior export record with UDAs."""
    task = Task.model_validate(
        {
            "id": 12,
            "uuid": "8b1c",
            "description": "Review PR",
            "project": "work.api",
            "tags": ["next", "@work"],
            "status": "pending",
            "entry": "20261017T120000Z",
            "due": "20261020T000000Z",
            "annotations": [{"entry": "20261017T130000Z", "description": "DTR:abcd"}],
            "githuburl": "https://github.com/acme/api/pull/1",
            "urgency": 4.2,
        }
    )

    assert task.id == 12
    assert task.due == datetime(2026, 10, 20, tzinfo=timezone.utc)
    assert task.uda("githuburl") == "https://github.com/acme/api/pull/1"
    assert task.uda("jiraurl") == ""
    assert task.is_next()
    assert task.resume_uuid() == "abcd"


def test_completed_task_has_no_id() -> None:
    """Test Taskwarrior's id 0 for completed tasks becomes None."""
    task = Task.model_validate(
        {"id": 0, "uuid": "x", "status": "completed", "tags": ["next"]}
    )

    assert task.id is None
    assert task.status == TaskStatus.COMPLETED
    assert not task.is_next()


def test_resume_uuid_uses_latest_annotation() -> None:
    """Test the most recent resume link wins."""
    task = Task.model_validate(
        {
            "uuid": "x",
            "annotations": [
                {"description": "DTR:first"},
                {"description": "some note"},
                {"description": "DTR:second"},
            ],
        }
    )

    assert task.resume_uuid() == "second"
    assert Task(uuid="y").resume_uuid() is None


def test_annotated_description() -> None:
    """Test annotations are listed under the description."""
    task = Task.model_validate(
        {
            "uuid": "x",
            "description": "Call Alice",
            "annotations": [{"entry": "20261001T100000Z", "description": "left voicemail"}],
        }
    )

    assert task.annotated_description() == "Call Alice\n    2026-10-01 left voicemail"


def test_project_pending_filter_quotes_name() -> None:
    """Test project names with spaces stay a single filter term."""
    assert Project("garden").pending_filter() == "project:garden status:pending"
    assert Project("my proj").pending_filter() == "project:'my proj' status:pending"


def test_category_labels() -> None:
    """Test context tags and their display names."""
    assert ActionCategory.READ_AND_REVIEW.tag == "@rnr"
    assert str(ActionCategory.READ_AND_REVIEW) == "ReadAndReview"
    assert [str(c) for c in ActionCategory] == [
        "Agenda",
        "Anywhere",
        "Computer",
        "Errands",
        "Home",
        "Phone",
        "ReadAndReview",
        "Work",
    ]


def test_brainpower_and_estimate_ladders() -> None:
    """Test the fixed rating ladders."""
    assert [b.value for b in Brainpower] == ["L", "M", "H"]
    assert str(Brainpower.MEDIUM) == "Medium"
    assert [int(e) for e in Estimate] == [30, 360, 1440, 2880, 9999]
    assert str(Estimate.SMALL) == "Thirty minutes"


def test_task_fields_are_immutable() -> None:
    """Test with_* returns a new builder."""
    empty = TaskFields()
    named = empty.with_description("Thing")

    assert empty.description == ""
    assert named.description == "Thing"
    assert named.estimate is Estimate.SMALL
    assert named.brainpower is Brainpower.MEDIUM


def test_task_fields_to_args() -> None:
    """Test serialization to ``task add`` arguments."""
    fields = (
        TaskFields()
        .with_description("Plan trip")
        .with_project("travel")
        .with_contexts(ActionCategory.HOME)
        .with_tags("in", "tickle")
        .with_wait("+2d")
        .with_due("eom")
    )

    assert fields.to_args() == [
        "add",
        "brain:M",
        "est:30",
        "project:travel",
        "+@home",
        "+in",
        "+tickle",
        "wait:+2d",
        "due:eom",
        "Plan trip",
    ]


@pytest.mark.parametrize(
    "fields",
    [
        TaskFields().with_contexts(ActionCategory.WORK),
        TaskFields().with_description("  ").with_contexts(ActionCategory.WORK),
        TaskFields().with_description("No context"),
    ],
)
def test_incomplete_fields_rejected(fields: TaskFields) -> None:
    """Test a description and a context are required."""
    with pytest.raises(PreconditionError):
        fields.validate_complete()
