"""Exceptions raised by feedsheet."""

from __future__ import annotations


class FeedError(Exception):
    """Base exception for feed errors."""

    pass


class PreconditionError(FeedError, ValueError):
    """Raised when a call is missing the spreadsheet key or worksheet.

    This is a programming error and is raised before any request is made.
    """

    pass


class TransportError(FeedError):
    """Raised when the request could not be completed (network, DNS, TLS)."""

    pass


class MissingResponseError(FeedError):
    """Raised when the transport returned no response."""

    def __init__(self) -> None:
        super().__init__("Missing response.")


class AuthError(FeedError):
    """Raised when the feed rejects the authorization token (401)."""

    def __init__(self) -> None:
        super().__init__("Invalid authorization key.")


class HttpError(FeedError):
    """Raised when the feed returns any other HTTP error status."""

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP error {status_code}: {reason}")
