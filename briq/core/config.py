"""Client configuration.

Environment defaults are read by ``BriqSettings`` (pydantic-settings, with
``.env`` file support). ``resolve_config()`` merges explicit arguments over
those defaults once, at client construction, and returns an immutable
``ClientConfig``. Nothing downstream reads the environment again.
"""

from dataclasses import dataclass, field
from typing import Any

import pydantic
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from briq.core.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT_MS,
)
from briq.core.errors import ConfigurationError, ValidationError
from briq.transport.retry import RetryPolicy
from briq.utils.validators import validate_api_key


class BriqSettings(BaseSettings):
    """Environment-backed defaults (``BRIQ_*`` variables)."""

    model_config = SettingsConfigDict(
        env_prefix="BRIQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr = SecretStr("")
    sender_id: str = ""
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    # Milliseconds
    timeout: int = DEFAULT_TIMEOUT_MS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class ClientConfig:
    """Immutable, validated client configuration.

    Attributes:
        api_key: Briq API key sent as ``X-API-Key``.
        base_url: API root, without the version segment.
        version: API version path segment.
        timeout_ms: Per-attempt timeout in milliseconds.
        max_attempts: Total attempts per request, including the first.
        sender_id: Default sender ID for outgoing messages.
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_API_VERSION
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    sender_id: str = ""

    def __post_init__(self) -> None:
        try:
            validate_api_key(self.api_key)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid API key: {e.message}") from e

        if not isinstance(self.base_url, str) or not self.base_url.startswith(
            ("http://", "https://")
        ):
            raise ConfigurationError(
                "Base URL must be an http(s) URL",
                {"base_url": self.base_url},
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if not isinstance(self.version, str) or not self.version.strip("/"):
            raise ConfigurationError("API version must be a non-empty string")

        if not _is_positive_int(self.timeout_ms):
            raise ConfigurationError(
                "Timeout must be a positive integer",
                {"timeout_ms": self.timeout_ms},
            )

        if not _is_positive_int(self.max_attempts):
            raise ConfigurationError(
                "Max attempts must be an integer of at least 1",
                {"max_attempts": self.max_attempts},
            )

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy for this configuration."""
        return RetryPolicy(max_attempts=self.max_attempts)

    def public_dict(self) -> dict[str, Any]:
        """Return the configuration without the API key."""
        return {
            "base_url": self.base_url,
            "version": self.version,
            "timeout_ms": self.timeout_ms,
            "max_attempts": self.max_attempts,
        }


def resolve_config(
    api_key: str | None = None,
    *,
    base_url: str | None = None,
    version: str | None = None,
    timeout_ms: int | None = None,
    max_attempts: int | None = None,
    sender_id: str | None = None,
    settings: BriqSettings | None = None,
) -> ClientConfig:
    """Merge explicit arguments over environment defaults.

    Args:
        api_key: API key. Falls back to ``BRIQ_API_KEY``.
        base_url: API root. Falls back to ``BRIQ_BASE_URL``.
        version: API version segment. Falls back to ``BRIQ_API_VERSION``.
        timeout_ms: Per-attempt timeout. Falls back to ``BRIQ_TIMEOUT``.
        max_attempts: Attempts per request. Falls back to ``BRIQ_MAX_ATTEMPTS``.
        sender_id: Default sender ID. Falls back to ``BRIQ_SENDER_ID``.
        settings: Pre-loaded settings (loaded from the environment if None).

    Returns:
        Validated ClientConfig.

    Raises:
        ConfigurationError: If the environment or the merged values are invalid.
    """
    if settings is None:
        try:
            settings = BriqSettings()
        except pydantic.ValidationError as e:
            raise ConfigurationError(
                "Invalid BRIQ_* environment configuration",
                {"errors": e.errors(include_url=False)},
            ) from e

    return ClientConfig(
        api_key=api_key if api_key is not None else settings.api_key.get_secret_value(),
        base_url=base_url if base_url is not None else settings.base_url,
        version=version if version is not None else settings.api_version,
        timeout_ms=timeout_ms if timeout_ms is not None else settings.timeout,
        max_attempts=max_attempts if max_attempts is not None else settings.max_attempts,
        sender_id=sender_id if sender_id is not None else settings.sender_id,
    )
