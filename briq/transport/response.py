"""Response interpretation.

Turns the raw status/headers/body of one attempt into the success envelope
or the matching error from ``briq.core.errors``.
"""

import contextlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict

from briq.core.constants import (
    HTTP_BAD_REQUEST,
    HTTP_FORBIDDEN,
    HTTP_NOT_FOUND,
    HTTP_TOO_MANY_REQUESTS,
    HTTP_UNAUTHORIZED,
)
from briq.core.errors import (
    AuthenticationError,
    AuthorizationError,
    BriqError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)


class ApiResponse(TypedDict, total=False):
    """Success envelope returned by every transport call."""

    success: bool
    data: Any
    message: str
    error: str
    timestamp: str


class PaginationInfo(TypedDict):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PaginatedResponse(TypedDict, total=False):
    """Envelope for list endpoints."""

    success: bool
    data: list[Any]
    pagination: PaginationInfo
    message: str


@dataclass(frozen=True)
class RawResponse:
    """What one network attempt produced, before interpretation."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    text: str = ""
    reason_phrase: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def _parse_body(raw: RawResponse) -> Any:
    if not raw.text:
        return {}
    try:
        return json.loads(raw.text)
    except ValueError as e:
        raise ServerError("Invalid JSON response from server", raw.status_code) from e


def _error_message(status_code: int, body: Any) -> str:
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if message:
            return str(message)
    return f"HTTP {status_code} error"


def _retry_after(headers: Mapping[str, str]) -> int | None:
    value = headers.get("Retry-After")
    if value is None:
        # Plain dicts are case-sensitive; httpx.Headers are not.
        value = headers.get("retry-after")
    if value is None:
        return None
    with contextlib.suppress(ValueError):
        return int(value.strip())
    return None


def error_from_response(raw: RawResponse, body: Any) -> BriqError:
    """Map a non-2xx response to an error instance (does not raise)."""
    status = raw.status_code
    message = _error_message(status, body)
    details = {
        "status_code": status,
        "status_text": raw.reason_phrase,
        "response": body,
    }

    if status == HTTP_BAD_REQUEST:
        return ValidationError(message, details)
    if status == HTTP_UNAUTHORIZED:
        return AuthenticationError(message, details)
    if status == HTTP_FORBIDDEN:
        return AuthorizationError(message, details)
    if status == HTTP_NOT_FOUND:
        return NotFoundError("Resource")
    if status == HTTP_TOO_MANY_REQUESTS:
        return RateLimitError(message, _retry_after(raw.headers))
    # 500/502/503/504 and every unlisted status
    return ServerError(message, status, details)


def interpret_response(raw: RawResponse) -> ApiResponse:
    """Produce the success envelope or raise the matching error.

    Args:
        raw: Status, headers and body text of one attempt.

    Returns:
        The body verbatim when it already carries ``success``, otherwise
        ``{"success": True, "data": body}``.

    Raises:
        ServerError: If the body is not valid JSON, or for 5xx/unlisted statuses.
        BriqError: The kind mapped from any other non-2xx status.
    """
    body = _parse_body(raw)

    if raw.is_success:
        if isinstance(body, dict) and "success" in body:
            envelope: ApiResponse = body  # type: ignore[assignment]
            return envelope
        return {"success": True, "data": body}

    raise error_from_response(raw, body)
