"""Client for IOU servers, which open URLs in a browser on another machine."""

import logging
from collections.abc import Sequence
from typing import Protocol

import httpx

from tickler.errors import NotifyError

logger = logging.getLogger(__name__)


class UrlOpener(Protocol):
    """Protocol for opening a URL for the user."""

    def open(self, url: str) -> None:
        """Open the URL, raising NotifyError on failure."""
        ...


class IouClient:
    """Posts URLs to every configured IOU server."""

    def __init__(
        self,
        servers: Sequence[str],
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize with the server endpoints to notify.

        Args:
            servers: Full endpoint URLs of the IOU servers
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.servers = list(servers)
        self._timeout = timeout
        self._transport = transport

    def open(self, url: str) -> None:
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            for server in self.servers:
                try:
                    response = client.post(server, json={"url": url})
                except httpx.HTTPError as e:
                    logger.error(f"[IOU] Failed to reach {server}: {e}")
                    raise NotifyError(f"Could not reach IOU server {server}: {e}") from e

                if not response.is_success:
                    raise NotifyError(
                        f"Could not successfully post url to IOU server {server}: "
                        f"{response.status_code} {response.text}"
                    )
                logger.info(f"[IOU] Sent {url} to {server}")
