"""Tickler main entry point."""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape

from tickler.cli import cli
from tickler.errors import TicklerError, error_chain

logger = logging.getLogger(__name__)


def report_error(console: Console, error: BaseException) -> None:
    """Print an error followed by each of its causes."""
    messages = error_chain(error)
    console.print(f"[red]Error: {escape(messages[0])}[/red]")
    for message in messages[1:]:
        console.print(f"[red]  caused by: {escape(message)}[/red]")


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface."""
    # Configure logging; the CLI raises the level from config or -v
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        result = cli.main(args=argv, prog_name="tickler", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except TicklerError as e:
        logger.debug("[Main] Command failed", exc_info=True)
        report_error(Console(stderr=True, highlight=False), e)
        return 1

    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
