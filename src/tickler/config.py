"""Configuration for tickler."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tickler.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TICKLER_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class IouConfig:
    """IOU servers that open URLs in a browser."""

    servers: list[str] = field(default_factory=list)


@dataclass
class RfcConfig:
    """Which tasks are RFCs and where their review tasks go."""

    filter: str = "status:pending +rfc_inbox"
    rnr_task_project: str = "rfcs"


@dataclass
class RequestsConfig:
    """Which tasks are pull requests awaiting review."""

    filter: str = "status:pending githuburl.any:"


@dataclass
class ScrumConfig:
    """Filters for the daily scrum report.

    ``{bound}`` is replaced by the report's lower date bound.
    """

    completed: str = "+@work status:completed end.after:{bound}"
    in_progress: str = "-in +@work +ACTIVE"
    due: str = "-in +@work status:Pending and (+DUE or +OVERDUE)"
    modified: str = "+@work status:pending modified.after:{bound}"
    waiting: str = (
        "+@work -@home and ((+WAITING and wait.before:today+5d) or (+tickle and status:Pending))"
    )


class Config(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_prefix="TICKLER_", env_nested_delimiter="__")

    iou: IouConfig = Field(default_factory=IouConfig)
    excluded_projects: set[str] = Field(default_factory=set)
    rfcs: RfcConfig = Field(default_factory=RfcConfig)
    requests: RequestsConfig = Field(default_factory=RequestsConfig)
    scrum: ScrumConfig = Field(default_factory=ScrumConfig)
    task_command: list[str] = Field(default_factory=lambda: ["task"])
    iou_timeout: float = Field(default=10.0)
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def load(cls, path: str | None = None) -> "Config":
        """Load configuration from a YAML file.

        Args:
            path: Explicit config file; must exist when given

        Returns:
            Config populated from the file, environment and defaults

        Raises:
            ConfigError: If an explicit file is missing or any setting is invalid
        """
        explicit = path or os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(explicit).expanduser() if explicit else default_location()

        if config_path.exists():
            data = read_config_file(config_path)
        elif explicit:
            raise ConfigError(f"Specified config path does not exist: {config_path}")
        else:
            logger.info(f"[Config] No config at {config_path}, using defaults")
            data = {}

        try:
            config = cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

        logger.info(f"[Config] Loaded configuration for {config_path}")
        return config


def read_config_file(config_path: Path) -> dict:
    """Parse a YAML config file into a mapping."""
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {config_path}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")
    return data


def default_location() -> Path:
    """Default per-user config file."""
    return Path.home() / ".config" / "tickler" / "config.yaml"
