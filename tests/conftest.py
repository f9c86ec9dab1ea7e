"""Test fixtures for tickler."""

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from fakes import FakeStore, ScriptedPrompter
from tickler.workflow.base import Services


@pytest.fixture
def journal() -> list[tuple[Any, ...]]:
    """Shared record of prompts and store calls, in order."""
    return []


@pytest.fixture
def store(journal: list[tuple[Any, ...]]) -> FakeStore:
    return FakeStore(journal=journal)


@pytest.fixture
def console() -> Console:
    """Console writing plain text to a buffer."""
    return Console(file=io.StringIO(), width=120, color_system=None, highlight=False)


@pytest.fixture
def output(console: Console) -> Callable[[], str]:
    """Return everything printed to the console so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def make_services(
    store: FakeStore, console: Console, journal: list[tuple[Any, ...]]
) -> Callable[..., tuple[Services, ScriptedPrompter]]:
    """Build Services around a ScriptedPrompter with the given responses."""

    def build(**responses: Any) -> tuple[Services, ScriptedPrompter]:
        prompter = ScriptedPrompter(journal=journal, **responses)
        return Services(store=store, prompter=prompter, console=console), prompter

    return build


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Minimal YAML config with a single IOU server."""
    path = tmp_path / "config.yaml"
    path.write_text(
        """
iou:
  servers:
    - http://iou.test/open
excluded_projects:
  - maybe
rfcs:
  filter: "status:pending +rfc_inbox"
  rnr_task_project: rfcs
"""
    )
    return path


@pytest.fixture
def installed(
    monkeypatch: pytest.MonkeyPatch, store: FakeStore, console: Console
) -> Callable[..., ScriptedPrompter]:
    """Install fakes into the factory for CLI tests."""

    def install(**responses: Any) -> ScriptedPrompter:
        prompter = ScriptedPrompter(**responses)
        monkeypatch.setattr("tickler.factory._store", store)
        monkeypatch.setattr("tickler.factory._console", console)
        monkeypatch.setattr("tickler.factory._prompter", prompter)
        return prompter

    monkeypatch.setattr("tickler.factory._config", None)
    monkeypatch.delenv("TICKLER_CONFIG", raising=False)
    return install
