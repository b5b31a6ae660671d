"""Response handlers invoked after a successful delivery."""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Protocol, Union

import httpx

if TYPE_CHECKING:
    from .endpoint import EventContext


HandlerResult = Optional[Awaitable[Any]]


class ResponseHandler(Protocol):
    """Handles a response from the endpoint.

    The response body has already been read when the handler runs, so plain
    functions may use ``response.content`` or ``response.json()``. The client
    closes the response afterwards. A handler may be a coroutine; the client
    awaits it.
    """

    def process_response(
        self, evt_ctx: "EventContext", url: str, response: httpx.Response
    ) -> HandlerResult:
        ...


class ResponseHandlerFunc:
    """Adapter allowing plain functions (or coroutine functions) as handlers."""

    def __init__(
        self,
        func: Callable[["EventContext", str, httpx.Response], Union[None, Awaitable[Any]]],
    ):
        self.func = func

    def process_response(
        self, evt_ctx: "EventContext", url: str, response: httpx.Response
    ) -> HandlerResult:
        return self.func(evt_ctx, url, response)


def _ignore(evt_ctx: "EventContext", url: str, response: httpx.Response) -> None:
    return None


noop_response_handler = ResponseHandlerFunc(_ignore)
