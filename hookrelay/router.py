"""Fan-out of received events to the endpoint clients that want them."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .endpoint import EndpointClient, EventContext


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of delivering one event to one endpoint."""

    url: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class EventRouter:
    """Routes events to matching endpoint clients and delivers them concurrently.

    Regular endpoints are matched on event type and connect mode and receive
    the event through ``post``. Event destinations are matched on the event
    context and receive it through ``post_v2``.
    """

    def __init__(self, clients: Iterable[EndpointClient], max_concurrency: int = 10):
        """Initialize the EventRouter."""
        self.clients = list(clients)
        self.max_concurrency = max_concurrency
        self.logger = logging.getLogger("hookrelay.router")
        self._semaphore: Optional[asyncio.Semaphore] = None

    def targets(self, evt_ctx: EventContext) -> List[Tuple[EndpointClient, bool]]:
        """Select the clients that should receive an event.

        Returns:
            List of (client, use_post_v2) pairs, in client order
        """
        selected = []
        for client in self.clients:
            if client.is_event_destination:
                if client.supports_context(evt_ctx.context):
                    selected.append((client, True))
            elif client.supports_event_type(evt_ctx.is_connect, evt_ctx.event_type):
                selected.append((client, False))
        return selected

    async def dispatch(self, evt_ctx: EventContext) -> List[DeliveryResult]:
        """Deliver an event to every matching client.

        Failures are logged and reported in the results, never raised.
        """
        targets = self.targets(evt_ctx)
        if not targets:
            self.logger.debug(f"No endpoint accepts event {evt_ctx.event_id or evt_ctx.event_type!r}")
            return []

        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_concurrency)

        return list(await asyncio.gather(
            *(self._deliver(client, use_v2, evt_ctx) for client, use_v2 in targets)
        ))

    async def _deliver(self, client: EndpointClient, use_v2: bool, evt_ctx: EventContext) -> DeliveryResult:
        async with self._semaphore:
            try:
                if use_v2:
                    await client.post_v2(evt_ctx)
                else:
                    await client.post(evt_ctx)
            except Exception as e:
                self.logger.error(f"Failed to forward to {client.url}: {e}")
                return DeliveryResult(url=client.url, error=e)
        return DeliveryResult(url=client.url)
