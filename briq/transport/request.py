"""Request value object and URL/header/query construction."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal
from urllib.parse import quote, urlencode

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

QueryValue = str | int | float | bool | None


@dataclass(frozen=True)
class Request:
    """One logical API request, re-issued verbatim on every retry.

    Attributes:
        method: HTTP method.
        path: Endpoint path relative to the versioned base URL.
        headers: Caller headers, merged over the client defaults.
        body: JSON-serializable payload (never sent with GET).
        params: Query parameters; None values are dropped.
        timeout_ms: Per-call timeout override in milliseconds.
    """

    method: HttpMethod
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    params: Mapping[str, QueryValue] | None = None
    timeout_ms: int | None = None


def _format_query_value(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_params(params: Mapping[str, QueryValue] | None) -> dict[str, str]:
    """Drop None entries and stringify the rest."""
    if not params:
        return {}
    return {
        key: _format_query_value(value)
        for key, value in params.items()
        if value is not None
    }


def build_query_string(params: Mapping[str, QueryValue] | None) -> str:
    """Encode query parameters, e.g. ``{"a": 1, "b": None}`` -> ``"a=1"``."""
    return urlencode(build_query_params(params), quote_via=quote)


def build_url(
    base_url: str,
    version: str,
    path: str,
    params: Mapping[str, QueryValue] | None = None,
) -> str:
    """Absolute request URL, with a query string only when one is needed."""
    clean_path = path[1:] if path.startswith("/") else path
    url = f"{base_url.rstrip('/')}/{version.strip('/')}/{clean_path}"
    query = build_query_string(params)
    if query:
        url = f"{url}?{query}"
    return url


def merge_headers(
    defaults: Mapping[str, str], overrides: Mapping[str, str] | None
) -> dict[str, str]:
    """Caller headers win over defaults, compared case-insensitively."""
    merged = dict(defaults)
    if overrides:
        lowered = {key.lower() for key in overrides}
        merged = {k: v for k, v in merged.items() if k.lower() not in lowered}
        merged.update(overrides)
    return merged
