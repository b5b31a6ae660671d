"""Records pushed to the shared output queue."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class ErrorElement:
    """An error raised while forwarding, for consumers of the output queue."""

    error: Exception
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
