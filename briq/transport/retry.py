"""Retry strategy for Briq API requests.

Deterministic exponential backoff (no jitter) around a single-attempt
coroutine factory. Only network failures, timeouts, rate limits and 5xx
responses are retried; the last attempt's error is what the caller sees.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from briq.core.constants import (
    DEFAULT_MAX_ATTEMPTS,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_TOO_MANY_REQUESTS,
    RETRY_BACKOFF_FACTOR,
    RETRY_BASE_DELAY_MS,
    RETRY_MAX_DELAY_MS,
)
from briq.core.errors import BriqError, ConfigurationError, ErrorKind

__all__ = [
    "RetryObserver",
    "RetryPolicy",
    "calculate_backoff_delay",
    "is_retryable_error",
    "with_retries",
]

logger = structlog.get_logger()

T = TypeVar("T")

RetryObserver = Callable[[str, dict[str, Any]], None]
"""Callback receiving ``(event_name, fields)`` for retry diagnostics."""


def calculate_backoff_delay(
    attempt: int,
    base_delay_ms: int = RETRY_BASE_DELAY_MS,
    max_delay_ms: int = RETRY_MAX_DELAY_MS,
    factor: int = RETRY_BACKOFF_FACTOR,
) -> int:
    """Delay in milliseconds before the retry that follows ``attempt``.

    Args:
        attempt: 1-indexed number of the attempt that just failed.
        base_delay_ms: Delay after the first failure.
        max_delay_ms: Upper bound for any delay.
        factor: Growth factor per attempt.

    Returns:
        ``min(base_delay_ms * factor ** (attempt - 1), max_delay_ms)``.
    """
    return min(base_delay_ms * factor ** (attempt - 1), max_delay_ms)


def is_retryable_error(error: BaseException) -> bool:
    """Whether re-issuing the request could change the outcome."""
    if not isinstance(error, BriqError):
        return False

    if error.kind in (ErrorKind.NETWORK, ErrorKind.TIMEOUT):
        return True

    if error.status_code is not None:
        return (
            error.status_code >= HTTP_INTERNAL_SERVER_ERROR
            or error.status_code == HTTP_TOO_MANY_REQUESTS
        )

    return False


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry settings.

    Attributes:
        max_attempts: Total attempts, including the first. Must be >= 1.
        base_delay_ms: Backoff delay after the first failure.
        max_delay_ms: Backoff cap.
        factor: Backoff growth factor.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: int = RETRY_BASE_DELAY_MS
    max_delay_ms: int = RETRY_MAX_DELAY_MS
    factor: int = RETRY_BACKOFF_FACTOR

    def __post_init__(self) -> None:
        if (
            not isinstance(self.max_attempts, int)
            or isinstance(self.max_attempts, bool)
            or self.max_attempts < 1
        ):
            raise ConfigurationError(
                "Max attempts must be an integer of at least 1",
                {"max_attempts": self.max_attempts},
            )
        if self.base_delay_ms < 0 or self.max_delay_ms < 0 or self.factor < 1:
            raise ConfigurationError(
                "Backoff delays must be non-negative and factor at least 1",
                {
                    "base_delay_ms": self.base_delay_ms,
                    "max_delay_ms": self.max_delay_ms,
                    "factor": self.factor,
                },
            )

    def delay_ms(self, attempt: int) -> int:
        return calculate_backoff_delay(
            attempt, self.base_delay_ms, self.max_delay_ms, self.factor
        )


def _notify(
    observer: RetryObserver | None, event: str, fields: dict[str, Any]
) -> None:
    if observer is not None:
        observer(event, fields)


async def with_retries(
    func: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    observer: RetryObserver | None = None,
    context: dict[str, Any] | None = None,
) -> T:
    """Execute ``func`` with bounded exponential-backoff retries.

    Args:
        func: Zero-argument coroutine factory performing one attempt.
        policy: Attempt bound and backoff settings.
        observer: Optional callback for diagnostic events.
        context: Extra fields (method, url) attached to diagnostic events.

    Returns:
        Result of the first successful attempt.

    Raises:
        BriqError: The error of the last attempt, when it was not retryable
            or no attempts remain.
    """
    fields = dict(context or {})
    attempt = 1

    while True:
        try:
            return await func()
        except BriqError as e:
            if not is_retryable_error(e):
                event_fields = {**fields, "attempt": attempt, "error_code": e.code}
                logger.info("api_request_not_retryable", **event_fields)
                _notify(observer, "api_request_not_retryable", event_fields)
                raise

            if attempt >= policy.max_attempts:
                event_fields = {
                    **fields,
                    "total_attempts": attempt,
                    "error_code": e.code,
                }
                logger.error("api_retries_exhausted", **event_fields)
                _notify(observer, "api_retries_exhausted", event_fields)
                raise

            delay_ms = policy.delay_ms(attempt)
            event_fields = {
                **fields,
                "attempt": attempt,
                "max_attempts": policy.max_attempts,
                "error_code": e.code,
                "delay_ms": delay_ms,
            }
            logger.warning("api_request_retry", **event_fields)
            _notify(observer, "api_request_retry", event_fields)

            await asyncio.sleep(delay_ms / 1000)
            attempt += 1
