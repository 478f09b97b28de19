"""Pipekit exception hierarchy."""

from __future__ import annotations


class PipekitError(Exception):
    """Base exception for all Pipekit client errors."""


class ConfigurationError(PipekitError, ValueError):
    """Malformed base URI or logical path."""


class InvalidPipeError(PipekitError, ValueError):
    """A routed identifier (user, pipe or run) is missing."""


class SerializationError(PipekitError):
    """Request body could not be encoded as JSON."""


class AuthenticationError(PipekitError):
    """No authorization token is available for the call."""


class TransportError(PipekitError):
    """Connection, DNS or TLS failure while talking to the service."""


class RequestTimeoutError(TransportError):
    """The call deadline expired before the exchange completed."""

    def __init__(self, timeout: float, url: str) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(f"Request to {url} timed out after {timeout}s")


class DecodeError(PipekitError):
    """Response body is not valid JSON for the decode target."""


class APIError(PipekitError):
    """The service answered with an HTTP status >= 400."""

    def __init__(self, status_code: int, method: str = "", url: str = "", body: str = "") -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        super().__init__(f"HTTP status: {status_code}")
