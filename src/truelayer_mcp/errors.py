"""Error taxonomy for TrueLayer API interactions.

The token manager and the operations modules raise these; the tool layer is
the only place that converts them into text results.
"""


class TrueLayerError(Exception):
    """Base class for all errors raised while talking to TrueLayer."""


class TransportError(TrueLayerError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class SigningError(TrueLayerError):
    """The request could not be signed with the configured key."""


class MalformedResponseError(TrueLayerError):
    """The response body was not JSON or lacked a required field."""


class AuthExchangeError(TrueLayerError):
    """The token endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        """Store the HTTP status returned by the token endpoint."""
        self.status_code = status_code
        super().__init__(message or f"Token exchange failed with HTTP {status_code}.")


class UpstreamApiError(TrueLayerError):
    """A business API call answered with a non-2xx status."""

    def __init__(self, status_code: int, *, title: str | None = None, detail: str | None = None) -> None:
        """Store the HTTP status and any problem-details fields from the body."""
        self.status_code = status_code
        self.title = title
        self.detail = detail
        message = f"TrueLayer API returned HTTP {status_code}"
        if title:
            message += f": {title}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


__all__ = [
    "AuthExchangeError",
    "MalformedResponseError",
    "SigningError",
    "TransportError",
    "TrueLayerError",
    "UpstreamApiError",
]
