"""Briq client facade and factory functions."""

from typing import Any

import httpx
import structlog

from briq.core.config import ClientConfig, resolve_config
from briq.core.errors import BriqError
from briq.services.campaigns import CampaignService
from briq.services.messages import MessageService
from briq.services.workspaces import WorkspaceService
from briq.transport.http_client import HttpClient
from briq.transport.retry import RetryObserver

logger = structlog.get_logger()


class Briq:
    """Entry point for the Briq SMS API.

    Example:
        client = Briq(api_key="...")
        await client.messages.send_instant("+255700000000", "Hello from Briq!")

    Attributes:
        workspaces: Workspace operations.
        campaigns: Campaign operations.
        messages: Message dispatch and logs.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        version: str | None = None,
        timeout_ms: int | None = None,
        max_attempts: int | None = None,
        sender_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        observer: RetryObserver | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Pre-resolved configuration. When None, the keyword
                arguments are merged over ``BRIQ_*`` environment defaults.
            api_key: API key.
            base_url: API root URL.
            version: API version segment.
            timeout_ms: Per-attempt timeout in milliseconds.
            max_attempts: Attempts per request, including the first.
            sender_id: Default sender ID for messages.
            transport: Optional httpx transport.
            observer: Optional callback for retry diagnostic events.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if config is None:
            config = resolve_config(
                api_key,
                base_url=base_url,
                version=version,
                timeout_ms=timeout_ms,
                max_attempts=max_attempts,
                sender_id=sender_id,
            )
        self._http = HttpClient(config, transport=transport, observer=observer)
        self.workspaces = WorkspaceService(self._http)
        self.campaigns = CampaignService(self._http)
        self.messages = MessageService(self._http)

    @property
    def http(self) -> HttpClient:
        """Underlying transport, for endpoints without a service method."""
        return self._http

    async def test_connection(self) -> bool:
        """Return True if an authenticated request succeeds."""
        try:
            await self.workspaces.list()
        except BriqError as e:
            logger.warning("connection_test_failed", error_code=e.code, error=e.message)
            return False
        return True

    def get_config(self) -> dict[str, Any]:
        """Active configuration, without the API key."""
        return self._http.config.public_dict()


def create_client(**kwargs: Any) -> Briq:
    """Create a client; keyword arguments match ``Briq``."""
    return Briq(**kwargs)


def briq() -> Briq:
    """Create a client configured entirely from ``BRIQ_*`` environment variables.

    Raises:
        ConfigurationError: If BRIQ_API_KEY is missing or malformed.
    """
    return Briq(config=resolve_config())
