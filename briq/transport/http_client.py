"""HTTP client for the Briq API.

``HttpClient.execute()`` performs exactly one network attempt and returns
a ``RawResponse``. ``HttpClient.request()`` composes build → execute →
interpret inside the retry loop, and the verb helpers wrap ``request()``.
"""

import asyncio
import json
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from briq.core.constants import USER_AGENT
from briq.core.errors import NetworkError, RequestTimeoutError, ValidationError
from briq.transport.request import (
    HttpMethod,
    QueryValue,
    Request,
    build_url,
    merge_headers,
)
from briq.transport.response import ApiResponse, RawResponse, interpret_response
from briq.transport.retry import RetryObserver, with_retries

if TYPE_CHECKING:
    from briq.core.config import ClientConfig

logger = structlog.get_logger()


class HttpClient:
    """Async transport for the Briq API.

    Each attempt opens its own ``httpx.AsyncClient``; nothing is shared
    between calls except the immutable configuration, so concurrent calls
    are safe.
    """

    def __init__(
        self,
        config: "ClientConfig",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        observer: RetryObserver | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            config: Resolved client configuration.
            transport: Optional httpx transport (e.g., ``httpx.MockTransport``).
            observer: Optional callback for retry diagnostic events.
        """
        self.config = config
        self.retry_policy = config.retry_policy()
        self.default_headers: dict[str, str] = {
            "Content-Type": "application/json",
            "X-API-Key": config.api_key,
            "User-Agent": USER_AGENT,
        }
        self._transport = transport
        self._observer = observer

    def build_url(self, request: Request) -> str:
        return build_url(
            self.config.base_url, self.config.version, request.path, request.params
        )

    def _encode_body(self, request: Request) -> bytes | None:
        if request.method == "GET" or request.body is None:
            return None
        try:
            return json.dumps(request.body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ValidationError(
                "Request body is not JSON serializable",
                {"original_error": str(e)},
            ) from e

    def _timeout_ms(self, request: Request) -> int:
        if request.timeout_ms is None:
            return self.config.timeout_ms
        if (
            not isinstance(request.timeout_ms, int)
            or isinstance(request.timeout_ms, bool)
            or request.timeout_ms < 1
        ):
            raise ValidationError(
                "Timeout must be a positive integer",
                {"timeout_ms": request.timeout_ms},
            )
        return request.timeout_ms

    async def execute(self, request: Request) -> RawResponse:
        """Perform one network attempt.

        Args:
            request: The logical request.

        Returns:
            Status, headers and body text of the response.

        Raises:
            RequestTimeoutError: If no response arrived within the timeout.
            NetworkError: On any other transport failure.
            ValidationError: If the body cannot be JSON-encoded or the
                per-call timeout is not a positive integer.
        """
        timeout_ms = self._timeout_ms(request)
        timeout_s = timeout_ms / 1000
        url = self.build_url(request)
        headers = merge_headers(self.default_headers, request.headers)
        content = self._encode_body(request)

        logger.debug(
            "api_request_start",
            method=request.method,
            url=url,
            timeout_ms=timeout_ms,
        )
        start_time = time.monotonic()

        try:
            async with asyncio.timeout(timeout_s):
                async with httpx.AsyncClient(
                    transport=self._transport, timeout=timeout_s
                ) as client:
                    response = await client.request(
                        request.method, url, headers=headers, content=content
                    )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.error(
                "api_request_failed",
                method=request.method,
                url=url,
                error_code="TIMEOUT_ERROR",
                timeout_ms=timeout_ms,
            )
            raise RequestTimeoutError(timeout_ms) from e
        except Exception as e:
            # Any other transport failure, including non-httpx errors
            # raised by an injected transport.
            logger.error(
                "api_request_failed",
                method=request.method,
                url=url,
                error_code="NETWORK_ERROR",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(
                "Network request failed", {"original_error": str(e)}
            ) from e

        latency_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            "api_request_complete",
            method=request.method,
            url=url,
            status_code=response.status_code,
            latency_ms=latency_ms,
        )

        return RawResponse(
            status_code=response.status_code,
            headers=response.headers,
            text=response.text,
            reason_phrase=response.reason_phrase,
        )

    async def request(self, request: Request) -> ApiResponse:
        """Send ``request`` with retries and return the success envelope.

        Raises:
            BriqError: The last attempt's error.
        """

        async def attempt() -> ApiResponse:
            raw = await self.execute(request)
            return interpret_response(raw)

        return await with_retries(
            attempt,
            self.retry_policy,
            observer=self._observer,
            context={"method": request.method, "path": request.path},
        )

    async def _send(
        self,
        method: HttpMethod,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> ApiResponse:
        return await self.request(
            Request(
                method=method,
                path=path,
                headers=dict(headers or {}),
                body=body,
                params=params,
                timeout_ms=timeout_ms,
            )
        )

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> ApiResponse:
        return await self._send(
            "GET", path, params=params, headers=headers, timeout_ms=timeout_ms
        )

    async def post(
        self,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> ApiResponse:
        return await self._send(
            "POST", path, body, params=params, headers=headers, timeout_ms=timeout_ms
        )

    async def put(
        self,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> ApiResponse:
        return await self._send(
            "PUT", path, body, params=params, headers=headers, timeout_ms=timeout_ms
        )

    async def patch(
        self,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> ApiResponse:
        return await self._send(
            "PATCH", path, body, params=params, headers=headers, timeout_ms=timeout_ms
        )

    async def delete(
        self,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> ApiResponse:
        return await self._send(
            "DELETE", path, body, params=params, headers=headers, timeout_ms=timeout_ms
        )
