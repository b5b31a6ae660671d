"""Exceptions raised while preparing and delivering forwarded events."""


class HookRelayError(Exception):
    """Base class for hookrelay errors."""


class HeaderValidationError(HookRelayError, ValueError):
    """A header specification could not be parsed.

    Raised for entries such as ``"Bad-Header"`` that carry no ``:`` separator.
    """

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Invalid header {header!r}: expected 'Key: Value'")


class RequestBuildError(HookRelayError):
    """The outgoing request could not be constructed (e.g. malformed URL)."""


class FailedToPostError(HookRelayError):
    """Describes a failure to send a POST request to an endpoint."""

    def __init__(self, err: Exception):
        self.err = err
        super().__init__(str(err))

    def __str__(self) -> str:
        return str(self.err)
