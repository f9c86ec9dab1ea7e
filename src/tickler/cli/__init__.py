"""Command-line interface for tickler."""

import logging

import click

from tickler import __version__, factory
from tickler.cli.active import (
    annotate,
    current,
    done,
    interrupt,
    next_task,
    open_links,
    stop,
    table,
)
from tickler.cli.external import ALIASES, commands, external_command
from tickler.cli.review import inbox, new, projects, replan, requests, rfc_util
from tickler.cli.scrum import scrum

logger = logging.getLogger(__name__)


class TicklerGroup(click.Group):
    """Group that understands command aliases and external ``tickler-*`` commands."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command

        canonical = ALIASES.get(cmd_name)
        if canonical is not None:
            return super().get_command(ctx, canonical)

        return external_command(cmd_name)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        _, command, remaining = super().resolve_command(ctx, args)
        return command.name if command else None, command, remaining


@click.group(cls=TicklerGroup)
@click.option(
    "-C",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file location.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="tickler")
def cli(config_path: str | None, verbose: bool) -> None:
    """Opinionated GTD workflows on top of Taskwarrior."""
    config = factory.load_config(config_path)
    logging.getLogger().setLevel(logging.DEBUG if verbose else config.log_level)
    logger.debug(f"[CLI] Using task command {config.task_command}")


for command in (
    annotate,
    commands,
    current,
    done,
    inbox,
    interrupt,
    new,
    next_task,
    open_links,
    projects,
    replan,
    requests,
    rfc_util,
    scrum,
    stop,
    table,
):
    cli.add_command(command)
