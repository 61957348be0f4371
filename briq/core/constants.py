"""API constants for the Briq SMS API.

Endpoint paths are relative to ``<base_url>/<version>/``.
"""

import re

DEFAULT_BASE_URL = "https://karibu.briq.tz"
DEFAULT_API_VERSION = "v1"
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_MAX_ATTEMPTS = 3
SDK_VERSION = "0.1.0"
USER_AGENT = f"briq-python/{SDK_VERSION}"


class Endpoints:
    """Endpoint table grouped by resource."""

    # Messages
    MESSAGE_SEND_INSTANT = "message/send-instant"
    MESSAGE_SEND_CAMPAIGN = "message/send-campaign"
    MESSAGE_LOGS = "message/logs"
    MESSAGE_HISTORY = "message/history"

    # Workspaces
    WORKSPACE_CREATE = "workspace/create/"
    WORKSPACE_ALL = "workspace/all/"

    # Campaigns
    CAMPAIGN_CREATE = "campaign/create/"
    CAMPAIGN_ALL = "campaign/all/"

    @staticmethod
    def workspace(workspace_id: str) -> str:
        return f"workspace/{workspace_id}"

    @staticmethod
    def workspace_update(workspace_id: str) -> str:
        return f"workspace/update/{workspace_id}"

    @staticmethod
    def campaign(campaign_id: str) -> str:
        return f"campaign/{campaign_id}/"

    @staticmethod
    def campaign_update(campaign_id: str) -> str:
        return f"campaign/update/{campaign_id}"

    @staticmethod
    def campaign_delete(campaign_id: str) -> str:
        return f"campaign/{campaign_id}"


# HTTP status codes used by the response interpreter and retry classifier
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429
HTTP_INTERNAL_SERVER_ERROR = 500

# Validation patterns
PHONE_NUMBER_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
API_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{16,}$")

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100

# Retry backoff (milliseconds)
RETRY_BASE_DELAY_MS = 1000
RETRY_MAX_DELAY_MS = 10000
RETRY_BACKOFF_FACTOR = 2

MESSAGE_STATUSES = ("pending", "sent", "delivered", "failed", "cancelled")
