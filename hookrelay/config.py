"""Endpoint configuration bundle and transport defaults."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from .handlers import ResponseHandler, noop_response_handler

DEFAULT_TIMEOUT = 30.0  # seconds

_default_transport: Optional[httpx.AsyncClient] = None


def build_transport(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create the HTTP client used to reach local endpoints.

    The first response received is final: redirects are handed to the
    response handler instead of being followed.

    Args:
        timeout: Request timeout in seconds

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=False,
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0
        )
    )


def discard_logger(name: str = "hookrelay.discard") -> logging.Logger:
    """Return a logger that drops everything written to it."""
    log = logging.Logger(name)
    log.addHandler(logging.NullHandler())
    log.propagate = False
    return log


def get_default_transport() -> httpx.AsyncClient:
    """Get or create the process-wide transport used for event destinations."""
    global _default_transport
    if _default_transport is None or _default_transport.is_closed:
        _default_transport = build_transport()
    return _default_transport


def set_default_transport(transport: Optional[httpx.AsyncClient]) -> None:
    """Replace the process-wide transport. ``None`` resets to lazy creation."""
    global _default_transport
    _default_transport = transport


async def close_default_transport() -> None:
    """Close the process-wide transport, if one was created."""
    global _default_transport
    if _default_transport is not None:
        await _default_transport.aclose()
        _default_transport = None


@dataclass
class EndpointConfig:
    """Optional configuration parameters of an EndpointClient.

    One bundle may be shared by many clients. ``out_queue`` receives an
    ``ErrorElement`` for every failed delivery; if it is bounded and full,
    the failing sender waits until a consumer makes room.
    """

    transport: Optional[httpx.AsyncClient] = None
    log: Optional[logging.Logger] = None
    response_handler: Optional[ResponseHandler] = None
    out_queue: Optional[asyncio.Queue] = None
    _owns_transport: bool = field(default=False, init=False, repr=False)

    def with_defaults(self) -> "EndpointConfig":
        """Fill every unset field with its default and return self."""
        if self.log is None:
            self.log = discard_logger()

        if self.transport is None:
            self.transport = build_transport()
            self._owns_transport = True

        if self.response_handler is None:
            self.response_handler = noop_response_handler

        if self.out_queue is None:
            self.out_queue = asyncio.Queue()

        return self

    async def aclose(self) -> None:
        """Close the transport if ``with_defaults`` created it.

        A transport passed in by the caller is left open for the caller to close.
        """
        if self._owns_transport and self.transport is not None:
            await self.transport.aclose()
