"""Header and event-list normalization."""

import re
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .errors import HeaderValidationError

# Header names the transport computes itself; never copied from the event.
EXCLUDED_EVENT_HEADERS = frozenset({"host", "content-length", "transfer-encoding", "trailer"})

_CONTROL_CHARS = re.compile(r"[\x00-\x1f]+")


def normalize_headers(raw: Iterable[str]) -> Dict[str, str]:
    """Turn ``"Key: Value"`` strings into a header map.

    Control characters (0x00-0x1F) are stripped, the entry is split on the
    first colon and both sides are trimmed. Entries with an empty key are
    dropped; a repeated key keeps the last value.

    Args:
        raw: Header specifications

    Returns:
        Mapping of header name (case preserved) to value

    Raises:
        HeaderValidationError: If an entry has no colon
    """
    header_map: Dict[str, str] = {}

    for header in raw:
        cleaned = _CONTROL_CHARS.sub("", header)

        key, sep, value = cleaned.partition(":")
        if not sep:
            raise HeaderValidationError(header)

        key = key.strip()
        if key:
            header_map[key] = value.strip()

    return header_map


def normalize_events(raw: Iterable[str]) -> FrozenSet[str]:
    """Deduplicate event-type subscriptions. ``"*"`` is kept as-is."""
    return frozenset(raw)


def split_host(headers: Dict[str, str]) -> Tuple[Dict[str, str], Optional[str]]:
    """Separate a ``host`` header (any case) from the rest.

    Returns:
        Tuple of (headers without host, host override or None)
    """
    host = None
    remaining = {}
    for key, value in headers.items():
        if key.lower() == "host":
            host = value
        else:
            remaining[key] = value
    return remaining, host
