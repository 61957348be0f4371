"""Briq client error taxonomy.

Every failure raised by the transport core is one of the classes below.
Each carries a machine-readable ``code``, an optional HTTP ``status_code``
and an optional ``details`` mapping. ``kind`` identifies the variant so
callers can dispatch on it without isinstance chains.
"""

from enum import StrEnum
from typing import Any

__all__ = [
    "ErrorKind",
    "BriqError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "NetworkError",
    "ServerError",
    "RequestTimeoutError",
    "ConfigurationError",
]


class ErrorKind(StrEnum):
    """Closed set of error kinds."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    SERVER = "server"
    TIMEOUT = "timeout"
    CONFIGURATION = "configuration"


class BriqError(Exception):
    """Base class for all Briq client errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code (e.g., "NOT_FOUND_ERROR").
        status_code: HTTP status code, when the error maps to one.
        details: Optional additional error details.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def with_context(self, context: str) -> "BriqError":
        """Return a copy of this error with ``context`` prefixed to the message.

        The copy keeps the class, code, status and details, so callers can
        still catch the specific kind after a service adds context.
        """
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.message = f"{context}: {self.message}"
        clone.args = (clone.message,)
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for structured logging."""
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class ValidationError(BriqError):
    """Request data rejected, locally or by the API (400)."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", 400, details)


class AuthenticationError(BriqError):
    """Missing or invalid API key (401)."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR", 401, details)


class AuthorizationError(BriqError):
    """API key is valid but lacks permission (403)."""

    kind = ErrorKind.AUTHORIZATION

    def __init__(
        self,
        message: str = "Insufficient permissions",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "AUTHORIZATION_ERROR", 403, details)


class NotFoundError(BriqError):
    """Requested resource does not exist (404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with ID '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            message,
            "NOT_FOUND_ERROR",
            404,
            {"resource": resource, "id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class RateLimitError(BriqError):
    """Too many requests (429).

    Attributes:
        retry_after: Seconds from the ``Retry-After`` header, when present.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, "RATE_LIMIT_ERROR", 429, {"retry_after": retry_after})
        self.retry_after = retry_after


class NetworkError(BriqError):
    """Transport-level failure: DNS, refused or reset connection, etc."""

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str = "Network error occurred",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "NETWORK_ERROR", None, details)


class ServerError(BriqError):
    """Server-side failure or malformed server response."""

    kind = ErrorKind.SERVER

    def __init__(
        self,
        message: str = "Internal server error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "SERVER_ERROR", status_code, details)


class RequestTimeoutError(BriqError):
    """No response arrived within the configured timeout.

    Attributes:
        timeout_ms: The timeout that expired, in milliseconds.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout_ms: int) -> None:
        super().__init__(
            f"Request timed out after {timeout_ms}ms",
            "TIMEOUT_ERROR",
            408,
            {"timeout": timeout_ms},
        )
        self.timeout_ms = timeout_ms


class ConfigurationError(BriqError):
    """Malformed client configuration, raised at construction time."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR", None, details)
