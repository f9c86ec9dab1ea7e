"""Interactive prompts."""

import re
from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from tickler.errors import PreconditionError, PromptError

T = TypeVar("T")


class Prompter(Protocol):
    """Protocol for asking the user questions."""

    def confirm(self, prompt: str, default: bool = True) -> bool:
        """Ask a yes/no question."""
        ...

    def select_one(self, prompt: str, items: Sequence[Any], default: int = 0) -> int:
        """Let the user pick one item; returns its index."""
        ...

    def select_many(self, prompt: str, items: Sequence[Any]) -> set[int]:
        """Let the user pick any number of items; returns their indices."""
        ...

    def input_text(self, prompt: str, default: str | None = None) -> str:
        """Ask for free text."""
        ...


def _interact(ask: Callable[[], T]) -> T:
    try:
        return ask()
    except (KeyboardInterrupt, EOFError) as e:
        raise PromptError("Input was cancelled") from e


class ConsolePrompter:
    """Prompter that reads from the terminal using rich prompts."""

    def __init__(self, console: Console) -> None:
        """Initialize with the console used for output."""
        self._console = console

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return _interact(lambda: Confirm.ask(prompt, default=default, console=self._console))

    def select_one(self, prompt: str, items: Sequence[Any], default: int = 0) -> int:
        if not items:
            raise PreconditionError(f"Nothing to choose from for: {prompt}")
        self._print_items(items)
        choices = [str(number) for number in range(1, len(items) + 1)]
        number = _interact(
            lambda: IntPrompt.ask(
                prompt,
                choices=choices,
                default=default + 1,
                show_choices=False,
                console=self._console,
            )
        )
        return number - 1

    def select_many(self, prompt: str, items: Sequence[Any]) -> set[int]:
        if not items:
            raise PreconditionError(f"Nothing to choose from for: {prompt}")
        self._print_items(items)
        while True:
            raw = _interact(
                lambda: Prompt.ask(
                    f"{prompt} (numbers separated by spaces or commas)",
                    default="",
                    show_default=False,
                    console=self._console,
                )
            )
            selected = self._parse_numbers(raw, len(items))
            if selected is not None:
                return selected
            self._console.print(f"[red]Please enter numbers between 1 and {len(items)}[/red]")

    def input_text(self, prompt: str, default: str | None = None) -> str:
        if default is None:
            while True:
                answer = _interact(lambda: Prompt.ask(prompt, console=self._console))
                if answer.strip():
                    return answer
                self._console.print("[red]An answer is required[/red]")
        return _interact(lambda: Prompt.ask(prompt, default=default, console=self._console))

    def _print_items(self, items: Sequence[Any]) -> None:
        for number, item in enumerate(items, start=1):
            self._console.print(
                f"  [bold cyan]{number:>2}[/bold cyan]  {escape(str(item))}", highlight=False
            )

    @staticmethod
    def _parse_numbers(raw: str, count: int) -> set[int] | None:
        """Parse "1, 3 4" into zero-based indices; None if anything is invalid."""
        selected: set[int] = set()
        for token in re.split(r"[\s,]+", raw.strip()):
            if not token:
                continue
            if not token.isdigit() or not 1 <= int(token) <= count:
                return None
            selected.add(int(token) - 1)
        return selected
