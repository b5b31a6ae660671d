"""Endpoint client used to POST captured webhook events to a local endpoint."""

import inspect
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

import httpx

from .config import EndpointConfig, get_default_transport
from .elements import ErrorElement
from .errors import FailedToPostError, RequestBuildError
from .headers import EXCLUDED_EVENT_HEADERS, normalize_events, normalize_headers, split_host


@dataclass(frozen=True)
class EventContext:
    """A received event waiting to be forwarded.

    Holds the original body and headers plus the routing metadata the
    caller uses to pick destinations.
    """

    request_body: bytes
    request_headers: Mapping[str, str] = field(default_factory=dict)
    webhook_id: str = ""
    webhook_conversation_id: str = ""
    event_id: str = ""
    event_type: str = ""
    account: str = ""
    context: str = ""

    def __post_init__(self):
        if isinstance(self.request_body, str):
            object.__setattr__(self, "request_body", self.request_body.encode("utf-8"))

    @property
    def is_connect(self) -> bool:
        """True when the event belongs to a connected account."""
        return self.account != ""


class EndpointClient:
    """Client used to POST webhook requests to one local endpoint.

    Instances are read-only after construction and may be shared by any
    number of concurrent tasks. Build them with ``new_endpoint_client``.
    """

    def __init__(
        self,
        url: str,
        headers: Dict[str, str],
        host: Optional[str],
        connect: bool,
        events: FrozenSet[str],
        is_event_destination: bool,
        config: EndpointConfig,
    ):
        self.url = url
        self.headers = headers
        self.host = host
        self.connect = connect
        self.events = events
        self.is_event_destination = is_event_destination
        self.config = config

    def __repr__(self) -> str:
        return (
            f"EndpointClient(url={self.url!r}, connect={self.connect}, "
            f"events={sorted(self.events)}, is_event_destination={self.is_event_destination})"
        )

    def supports_event_type(self, connect: bool, event_type: str) -> bool:
        """Check whether this endpoint wants an event of the given type and mode."""
        if connect != self.connect:
            return False

        return "*" in self.events or event_type in self.events

    def supports_context(self, context: str) -> bool:
        """Check whether this endpoint accepts an event with the given context.

        Connect endpoints need a context tag; direct endpoints must not get one.
        """
        if self.connect:
            return context != ""

        return context == ""

    def build_request(self, transport: httpx.AsyncClient, evt_ctx: EventContext) -> httpx.Request:
        """Build the POST request for an event.

        Event headers are copied first, then the client's own headers replace
        any header with the same name. Host comes from the client override if
        it has one, otherwise from the URL.

        Raises:
            RequestBuildError: If the URL or a header cannot be used
        """
        try:
            headers = httpx.Headers()
            for key, value in evt_ctx.request_headers.items():
                if key.lower() not in EXCLUDED_EVENT_HEADERS:
                    headers[key] = value

            for key, value in self.headers.items():
                headers[key] = value

            if self.host is not None:
                headers["Host"] = self.host

            return transport.build_request(
                "POST",
                self.url,
                headers=headers,
                content=evt_ctx.request_body,
            )
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise RequestBuildError(f"Cannot build request for {self.url!r}: {e}") from e

    async def post(self, evt_ctx: EventContext) -> None:
        """Send an event to the local endpoint through the configured transport.

        Raises:
            RequestBuildError: If the request cannot be constructed
            FailedToPostError: If the transport fails; an ErrorElement is
                also put on the output queue
        """
        self.config.log.debug(
            "Forwarding event to local endpoint",
            extra={"prefix": "hookrelay.EndpointClient.post", "url": self.url},
        )
        await self._deliver(self.config.transport, evt_ctx)

    async def post_v2(self, evt_ctx: EventContext) -> None:
        """Send an event to a local event destination.

        Same contract as ``post`` but goes through the process-wide default
        transport.
        """
        await self._deliver(get_default_transport(), evt_ctx)

    async def _deliver(self, transport: httpx.AsyncClient, evt_ctx: EventContext) -> None:
        request = self.build_request(transport, evt_ctx)

        try:
            response = await transport.send(request, stream=True)
        except httpx.TransportError as e:
            error = FailedToPostError(e)
            await self.config.out_queue.put(ErrorElement(error=error))
            raise error from e

        try:
            await response.aread()
            result = self.config.response_handler.process_response(evt_ctx, self.url, response)
            if inspect.isawaitable(result):
                await result
        finally:
            await response.aclose()


def new_endpoint_client(
    url: str,
    headers: Iterable[str],
    connect: bool,
    events: Iterable[str],
    is_event_destination: bool = False,
    config: Optional[EndpointConfig] = None,
) -> EndpointClient:
    """Create an EndpointClient, filling unset configuration with defaults.

    Args:
        url: Local URL events are POSTed to
        headers: Extra headers as ``"Key: Value"`` strings
        connect: Whether the endpoint receives connected-account events
        events: Event types to forward, ``"*"`` for all
        is_event_destination: Whether the endpoint is an event destination
        config: Shared configuration; a fresh one is used when omitted

    Returns:
        EndpointClient instance

    Raises:
        HeaderValidationError: If a header entry has no colon
    """
    if config is None:
        config = EndpointConfig()
    config.with_defaults()

    header_map, host = split_host(normalize_headers(headers))

    return EndpointClient(
        url=url,
        headers=header_map,
        host=host,
        connect=connect,
        events=normalize_events(events),
        is_event_destination=is_event_destination,
        config=config,
    )
