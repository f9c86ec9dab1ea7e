"""Dependency injection factory."""

import logging

from rich.console import Console

from tickler.config import Config
from tickler.errors import ConfigError
from tickler.iou_client import IouClient
from tickler.prompts import ConsolePrompter, Prompter
from tickler.taskwarrior.store import TaskStore, TaskwarriorStore
from tickler.workflow.base import Services

logger = logging.getLogger(__name__)

# Global instances for dependency injection
_config: Config | None = None
_store: TaskStore | None = None
_console: Console | None = None
_prompter: Prompter | None = None


def load_config(path: str | None = None) -> Config:
    """Load Config from ``path`` (or the default location) and install it."""
    global _config
    _config = Config.load(path)
    return _config


def get_config() -> Config:
    """Get or create Config instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def get_store() -> TaskStore:
    """Get or create the Taskwarrior-backed TaskStore."""
    global _store
    if _store is None:
        _store = TaskwarriorStore(get_config().task_command)
    return _store


def get_console() -> Console:
    """Get or create the shared rich Console."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def get_prompter() -> Prompter:
    """Get or create the interactive Prompter."""
    global _prompter
    if _prompter is None:
        _prompter = ConsolePrompter(get_console())
    return _prompter


def get_services() -> Services:
    """Bundle the collaborators workflows need."""
    return Services(store=get_store(), prompter=get_prompter(), console=get_console())


def make_iou_client() -> IouClient:
    """Create an IouClient for one of the configured servers.

    Raises:
        ConfigError: If no IOU servers are configured
    """
    config = get_config()
    servers = config.iou.servers
    if not servers:
        raise ConfigError("No IOU servers configured (iou.servers)")

    server = servers[0]
    if len(servers) > 1:
        choice = get_prompter().select_one("Which IOU server?", servers, default=0)
        server = servers[choice]

    logger.debug(f"[Factory] Using IOU server {server}")
    return IouClient([server], timeout=config.iou_timeout)
