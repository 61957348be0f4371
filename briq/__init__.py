"""Async Python client for the Karibu Briq SMS API.

Exports:
    Briq client and factory functions
    Configuration types
    Error classes
    Phone, SMS segment and pagination helpers
"""

from briq.client import Briq, briq, create_client
from briq.core.config import BriqSettings, ClientConfig, resolve_config
from briq.core.constants import SDK_VERSION
from briq.core.errors import (
    AuthenticationError,
    AuthorizationError,
    BriqError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
)
from briq.transport.http_client import HttpClient
from briq.transport.request import Request
from briq.transport.response import ApiResponse, PaginatedResponse
from briq.transport.retry import RetryPolicy
from briq.utils.helpers import (
    Pagination,
    calculate_sms_segments,
    format_phone_number,
    format_phone_numbers,
    normalize_pagination_params,
)

__version__ = SDK_VERSION

__all__ = [
    # Client
    "Briq",
    "briq",
    "create_client",
    "HttpClient",
    "Request",
    "ApiResponse",
    "PaginatedResponse",
    # Config
    "BriqSettings",
    "ClientConfig",
    "RetryPolicy",
    "resolve_config",
    # Errors
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
    # Helpers
    "Pagination",
    "calculate_sms_segments",
    "format_phone_number",
    "format_phone_numbers",
    "normalize_pagination_params",
    "__version__",
]
