"""
Exception hierarchy for the agent backend client.

Every failure of a backend call surfaces as one of these exceptions. The client
never retries on its own; callers decide whether an error is worth retrying.
"""

from typing import Any, Dict, Optional


class BackendClientError(Exception):
    """
    Base exception for all backend client errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (if applicable)
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class ConfigurationError(BackendClientError):
    """Invalid client configuration (endpoint table, settings).

    Raised while building the client, never while issuing a call.
    """
    pass


class NotAuthenticatedError(BackendClientError):
    """A session-bearing call was attempted without an active session."""

    def __init__(self, message: str = "No active session, login first"):
        super().__init__(message)


class TransportError(BackendClientError):
    """The request did not get a response (connection, DNS, timeout)."""
    pass


class UnexpectedStatusError(BackendClientError):
    """
    The backend answered with a status other than the expected success code.

    The raw response body is kept for diagnostics.
    """

    def __init__(
        self,
        status_code: int,
        body: bytes = b"",
        *,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or "Unexpected response status",
            status_code=status_code,
        )
        self.body = body


class DecodeError(BackendClientError):
    """The response body is not valid JSON or does not match the expected shape."""

    def __init__(self, message: str, body: bytes = b""):
        super().__init__(message)
        self.body = body


class AuthenticationError(BackendClientError):
    """
    The backend rejected the login credentials.

    The HTTP exchange itself succeeded, but the login response carried
    `status=false`. No session is established.
    """

    def __init__(
        self,
        message: str = "Backend rejected the login credentials",
        *,
        error: str = "",
    ):
        super().__init__(message, details={"error": error} if error else None)
        self.error = error
