"""hookrelay - Forward captured webhook events to local endpoints.

Features:
- Per-endpoint routing on event type, connect mode and event context
- Faithful POST reconstruction with header overrides and Host rewriting
- Non-blocking failure reporting on a shared asyncio queue
- Concurrent fan-out to every matching endpoint

License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Public API
from .config import (
    DEFAULT_TIMEOUT,
    EndpointConfig,
    build_transport,
    close_default_transport,
    get_default_transport,
    set_default_transport,
)
from .elements import ErrorElement
from .endpoint import EndpointClient, EventContext, new_endpoint_client
from .errors import FailedToPostError, HeaderValidationError, HookRelayError, RequestBuildError
from .handlers import ResponseHandler, ResponseHandlerFunc, noop_response_handler
from .headers import normalize_events, normalize_headers
from .logger import get_logger, setup_logging
from .router import DeliveryResult, EventRouter

__all__ = [
    # Version info
    "__version__",
    "__license__",

    # Core components
    "EndpointClient",
    "EventContext",
    "new_endpoint_client",
    "EndpointConfig",
    "EventRouter",
    "DeliveryResult",
    "ErrorElement",
    "ResponseHandler",
    "ResponseHandlerFunc",
    "noop_response_handler",

    # Errors
    "HookRelayError",
    "HeaderValidationError",
    "RequestBuildError",
    "FailedToPostError",

    # Transport
    "DEFAULT_TIMEOUT",
    "build_transport",
    "get_default_transport",
    "set_default_transport",
    "close_default_transport",

    # Utilities
    "normalize_headers",
    "normalize_events",
    "get_logger",
    "setup_logging",
]
