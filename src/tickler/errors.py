"""Error taxonomy for tickler."""

from collections.abc import Iterator
from contextlib import contextmanager


class TicklerError(Exception):
    """Base class for all errors surfaced to the operator."""


class StoreError(TicklerError):
    """The task store command failed or returned unparseable output."""


class PromptError(TicklerError):
    """Interactive input failed or was cancelled."""


class PreconditionError(TicklerError):
    """A required precondition of an operation was violated."""


class NotifyError(TicklerError):
    """A URL could not be delivered to the IOU server(s)."""


class ConfigError(TicklerError):
    """Configuration could not be loaded or is invalid."""


@contextmanager
def error_context(message: str) -> Iterator[None]:
    """Re-raise any TicklerError as the same class with a contextual message.

    The original error is kept as ``__cause__`` so the full chain can be
    reported.
    """
    try:
        yield
    except TicklerError as e:
        raise e.__class__(message) from e


def error_chain(error: BaseException) -> list[str]:
    """Return the messages of an error and all of its causes, outermost first."""
    messages: list[str] = []
    current: BaseException | None = error
    while current is not None:
        messages.append(str(current) or current.__class__.__name__)
        current = current.__cause__
    return messages
