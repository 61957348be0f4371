"""Tests for the retry strategy.

Tests behavior of retry logic:
- Deterministic exponential backoff with a cap
- Retry classification by kind and status
- Attempt bound and last-error propagation
- Diagnostic events
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from structlog.testing import capture_logs

from briq.core.errors import (
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
)
from briq.transport.retry import (
    RetryPolicy,
    calculate_backoff_delay,
    is_retryable_error,
    with_retries,
)


@pytest.fixture
def policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=3)


class TestBackoffDelay:
    """Test calculate_backoff_delay."""

    @pytest.mark.parametrize(
        ("attempt", "expected"),
        [(1, 1000), (2, 2000), (3, 4000), (4, 8000), (5, 10000), (10, 10000)],
    )
    def test_default_schedule(self, attempt, expected) -> None:
        """Delays double from 1s and cap at 10s."""
        assert calculate_backoff_delay(attempt, 1000, 10000, 2) == expected

    def test_monotonic_and_capped(self) -> None:
        """Delays never decrease and never exceed the cap."""
        delays = [calculate_backoff_delay(n, 300, 5000, 3) for n in range(1, 12)]
        assert delays == sorted(delays)
        assert max(delays) == 5000

    def test_policy_uses_its_settings(self) -> None:
        """RetryPolicy.delay_ms applies the policy's base and cap."""
        policy = RetryPolicy(max_attempts=5, base_delay_ms=100, max_delay_ms=250)
        assert [policy.delay_ms(n) for n in (1, 2, 3)] == [100, 200, 250]


class TestRetryClassifier:
    """Test is_retryable_error."""

    @pytest.mark.parametrize(
        "error",
        [
            NetworkError(),
            RequestTimeoutError(5000),
            RateLimitError(),
            ServerError("unavailable", 503),
            ServerError("not implemented", 501),
            ServerError("bad gateway", 502),
        ],
    )
    def test_retryable(self, error) -> None:
        """Network, timeout, 429 and any status >= 500 are retryable."""
        assert is_retryable_error(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            AuthenticationError(),
            NotFoundError(),
            ConfigurationError("bad"),
            ServerError("odd redirect", 302),
        ],
    )
    def test_not_retryable(self, error) -> None:
        """Client-side kinds are never retried."""
        assert is_retryable_error(error) is False

    def test_foreign_exception_not_retryable(self) -> None:
        """Errors outside the taxonomy are never retried."""
        assert is_retryable_error(RuntimeError("boom")) is False


class TestRetryPolicyValidation:
    """Test RetryPolicy construction."""

    @pytest.mark.parametrize("max_attempts", [0, -1, 1.5, True])
    def test_rejects_invalid_max_attempts(self, max_attempts) -> None:
        """max_attempts below 1 is rejected, never clamped."""
        with pytest.raises(ConfigurationError, match="at least 1"):
            RetryPolicy(max_attempts=max_attempts)

    def test_rejects_negative_delay(self) -> None:
        with pytest.raises(ConfigurationError):
            RetryPolicy(base_delay_ms=-1)

    def test_single_attempt_allowed(self) -> None:
        assert RetryPolicy(max_attempts=1).max_attempts == 1


class TestWithRetriesSuccess:
    """Test successful execution paths."""

    @pytest.mark.asyncio
    async def test_returns_result_on_success(self, policy) -> None:
        """Should return the result when no error occurs."""
        func = AsyncMock(return_value={"success": True})

        result = await with_retries(func, policy)

        assert result == {"success": True}
        func.assert_called_once()

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self, policy) -> None:
        """Two network failures then success: 3 attempts, 2 delays."""
        func = AsyncMock(side_effect=[NetworkError(), NetworkError(), "ok"])

        with patch(
            "briq.transport.retry.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            result = await with_retries(func, policy)

        assert result == "ok"
        assert func.call_count == 3
        assert [call.args[0] for call in mock_sleep.await_args_list] == [1.0, 2.0]


class TestWithRetriesFailure:
    """Test failure paths."""

    @pytest.mark.asyncio
    async def test_non_retryable_error_fails_immediately(self, policy) -> None:
        """A validation error is raised after one attempt, without delay."""
        func = AsyncMock(side_effect=ValidationError("bad phone"))

        with (
            patch(
                "briq.transport.retry.asyncio.sleep", new_callable=AsyncMock
            ) as mock_sleep,
            pytest.raises(ValidationError, match="bad phone"),
        ):
            await with_retries(func, policy)

        func.assert_called_once()
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_raises_last_error_when_exhausted(self, policy) -> None:
        """After max_attempts the last error, not the first, propagates."""
        first = NetworkError("first")
        last = ServerError("last", 503)
        func = AsyncMock(side_effect=[first, NetworkError("second"), last])

        with (
            patch("briq.transport.retry.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(ServerError) as exc_info,
        ):
            await with_retries(func, policy)

        assert exc_info.value is last
        assert func.call_count == 3

    @pytest.mark.asyncio
    async def test_single_attempt_policy_never_sleeps(self) -> None:
        """With max_attempts=1 a retryable error is raised straight away."""
        func = AsyncMock(side_effect=RequestTimeoutError(100))

        with (
            patch(
                "briq.transport.retry.asyncio.sleep", new_callable=AsyncMock
            ) as mock_sleep,
            pytest.raises(RequestTimeoutError),
        ):
            await with_retries(func, RetryPolicy(max_attempts=1))

        func.assert_called_once()
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stops_retrying_once_error_turns_permanent(self, policy) -> None:
        """A non-retryable error on attempt 2 ends the loop."""
        func = AsyncMock(side_effect=[NetworkError(), AuthenticationError()])

        with (
            patch("briq.transport.retry.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(AuthenticationError),
        ):
            await with_retries(func, policy)

        assert func.call_count == 2


class TestDiagnosticEvents:
    """Test the observer callback and log events."""

    @pytest.mark.asyncio
    async def test_observer_sees_retries_and_exhaustion(self, policy) -> None:
        """Observer receives one retry event per delay and a final exhaustion."""
        observer = MagicMock()
        func = AsyncMock(side_effect=NetworkError())

        with (
            patch("briq.transport.retry.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(NetworkError),
        ):
            await with_retries(
                func, policy, observer=observer, context={"method": "GET"}
            )

        events = [call.args[0] for call in observer.call_args_list]
        assert events == [
            "api_request_retry",
            "api_request_retry",
            "api_retries_exhausted",
        ]
        exhausted_fields = observer.call_args_list[-1].args[1]
        assert exhausted_fields["total_attempts"] == 3
        assert exhausted_fields["error_code"] == "NETWORK_ERROR"
        assert exhausted_fields["method"] == "GET"

    @pytest.mark.asyncio
    async def test_exhaustion_is_logged(self, policy) -> None:
        """An error-level event is logged before the final error is raised."""
        func = AsyncMock(side_effect=ServerError("down", 503))

        with (
            capture_logs() as logs,
            patch("briq.transport.retry.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(ServerError),
        ):
            await with_retries(func, policy)

        exhausted = [log for log in logs if log["event"] == "api_retries_exhausted"]
        assert len(exhausted) == 1
        assert exhausted[0]["log_level"] == "error"

    @pytest.mark.asyncio
    async def test_no_observer_is_fine(self, policy) -> None:
        """Omitting the observer does not change behavior."""
        func = AsyncMock(side_effect=[RateLimitError(), "ok"])

        with patch("briq.transport.retry.asyncio.sleep", new_callable=AsyncMock):
            assert await with_retries(func, policy) == "ok"
