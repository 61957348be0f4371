"""Base class for Briq resource services."""

import math
from collections.abc import Mapping
from typing import Any

from briq.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from briq.core.errors import BriqError, NotFoundError, ValidationError
from briq.transport.http_client import HttpClient
from briq.transport.response import ApiResponse, PaginatedResponse


class BaseService:
    """Shared helpers for services built on HttpClient.

    Attributes:
        client: Transport used for every request.
    """

    def __init__(self, client: HttpClient) -> None:
        self.client = client

    @staticmethod
    def _validate_required(params: Mapping[str, Any], required: list[str]) -> None:
        missing = [
            name for name in required if params.get(name) is None or params.get(name) == ""
        ]
        if missing:
            raise ValidationError(
                f"Missing required parameters: {', '.join(missing)}",
                {"missing": missing},
            )

    @staticmethod
    def _sanitize(payload: Mapping[str, Any]) -> dict[str, Any]:
        """Drop None values and strip surrounding whitespace from strings."""
        return {
            key: value.strip() if isinstance(value, str) else value
            for key, value in payload.items()
            if value is not None
        }

    @staticmethod
    def _context_error(action: str, error: BriqError) -> BriqError:
        return error.with_context(f"Failed to {action}")

    @staticmethod
    def _resource_error(
        resource: str, resource_id: str, action: str, error: BriqError
    ) -> BriqError:
        """404s name the resource; everything else gets action context."""
        if error.status_code == 404:
            return NotFoundError(resource, resource_id)
        return error.with_context(f"Failed to {action}")

    @staticmethod
    def _paginate(
        response: ApiResponse, page: int | None, limit: int | None
    ) -> PaginatedResponse:
        """Attach pagination metadata when the API returned a bare list."""
        data = response.get("data")
        if not isinstance(data, list):
            paginated: PaginatedResponse = response  # type: ignore[assignment]
            return paginated

        page = page or DEFAULT_PAGE
        limit = limit or DEFAULT_PAGE_LIMIT
        return {
            "success": True,
            "data": data,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": len(data),
                "total_pages": math.ceil(len(data) / limit),
                "has_next": False,
                "has_prev": page > 1,
            },
        }
