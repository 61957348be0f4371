"""Request pipeline: build, execute, interpret, retry.

Exports:
    HttpClient for issuing requests
    Request/response types
    Retry policy and helpers
"""

from briq.transport.http_client import HttpClient
from briq.transport.request import Request, build_query_params, build_url
from briq.transport.response import (
    ApiResponse,
    PaginatedResponse,
    RawResponse,
    interpret_response,
)
from briq.transport.retry import (
    RetryPolicy,
    calculate_backoff_delay,
    is_retryable_error,
    with_retries,
)

__all__ = [
    "HttpClient",
    "Request",
    "build_query_params",
    "build_url",
    "ApiResponse",
    "PaginatedResponse",
    "RawResponse",
    "interpret_response",
    "RetryPolicy",
    "calculate_backoff_delay",
    "is_retryable_error",
    "with_retries",
]
