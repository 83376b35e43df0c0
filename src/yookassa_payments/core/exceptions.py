"""
Exception hierarchy shared by the client, the webhook verifier and the CLI.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "ConfigError",
    "MappingError",
    "RemoteAPIError",
    "TransportError",
    "UnknownAPIError",
    "VerificationError",
    "YookassaError",
]


class YookassaError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(YookassaError):
    """Raised when the supplied configuration is missing or invalid."""


class TransportError(YookassaError):
    """The request never produced an HTTP response (DNS, connect, TLS, read...)."""


class MappingError(YookassaError):
    """A response object cannot be turned into a typed record."""

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        self.missing = missing
        super().__init__(message)


class RemoteAPIError(YookassaError):
    """The API answered with a non-200 status."""

    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self.body = body
        super().__init__(f"API responded with {status}: {body}")


class UnknownAPIError(YookassaError):
    """Any failure that did not come with an HTTP status from the API."""

    def __init__(self, details: Any) -> None:
        self.details = details
        super().__init__(f"Unknown error: {details}")


class VerificationError(YookassaError):
    """An inbound notification could not be confirmed against the API."""

    def __init__(self, reason: str, details: Optional[Any] = None) -> None:
        self.reason = reason
        self.details = details
        message = reason if details is None else f"{reason}: {details}"
        super().__init__(message)
