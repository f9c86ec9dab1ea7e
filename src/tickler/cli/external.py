"""Command aliases and external ``tickler-<name>`` subcommands."""

import logging
import os
import subprocess
from pathlib import Path

import click

logger = logging.getLogger(__name__)

EXTERNAL_PREFIX = "tickler-"

ALIASES = {
    "comment": "annotate",
    "finish": "done",
    "int": "interrupt",
    "start": "next",
    "proj": "projects",
    "req": "requests",
    "rfc_util": "rfc-util",
    "list": "commands",
}


def search_directories() -> list[Path]:
    """Directories on PATH, in order."""
    return [Path(entry) for entry in os.environ.get("PATH", "").split(os.pathsep) if entry]


def is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_external(name: str) -> Path | None:
    """Locate ``tickler-<name>`` on PATH."""
    for directory in search_directories():
        candidate = directory / f"{EXTERNAL_PREFIX}{name}"
        if is_executable(candidate):
            return candidate
    return None


def external_commands() -> list[str]:
    """Names of all external subcommands found on PATH, sorted."""
    names: set[str] = set()
    for directory in search_directories():
        try:
            entries = list(directory.iterdir())
        except OSError:
            continue
        for entry in entries:
            if entry.name.startswith(EXTERNAL_PREFIX) and is_executable(entry):
                names.add(entry.name[len(EXTERNAL_PREFIX) :])
    return sorted(names)


def external_command(name: str) -> click.Command | None:
    """Build a command that runs ``tickler-<name>``, or None if it is not installed."""
    executable = find_external(name)
    if executable is None:
        return None

    @click.pass_context
    def run(ctx: click.Context, args: tuple[str, ...]) -> None:
        logger.debug(f"[CLI] Running external command {executable} {list(args)}")
        result = subprocess.run([str(executable), *args], check=False)
        ctx.exit(result.returncode)

    return click.Command(
        name,
        callback=run,
        params=[click.Argument(["args"], nargs=-1, type=click.UNPROCESSED)],
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
        add_help_option=False,
        help=f"External command {executable}",
    )


@click.command("commands")
def commands() -> None:
    """List the installed external subcommands.

    Looks for executables on PATH prefixed with 'tickler-'.
    """
    names = external_commands()
    if not names:
        click.echo("No external subcommands detected.")
        return

    click.echo("The following external subcommands were detected.")
    click.echo("Run `tickler SUBCOMMAND -h/--help` for more information.\n")
    for name in names:
        click.echo(f"    {name}")
