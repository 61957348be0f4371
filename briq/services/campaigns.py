"""Campaign management."""

from datetime import date
from typing import Any

from briq.core.constants import Endpoints
from briq.core.errors import BriqError, NotFoundError, ValidationError
from briq.services.base import BaseService
from briq.transport.response import ApiResponse, PaginatedResponse
from briq.utils.validators import (
    parse_iso_datetime,
    validate_campaign_name,
    validate_description,
    validate_iso_date,
    validate_pagination_params,
    validate_search,
    validate_uuid,
)

# Delivery settings sent with every new campaign
DEFAULT_CAMPAIGN_SETTINGS: dict[str, Any] = {
    "sendRate": 60,
    "retryFailures": True,
    "maxRetries": 3,
    "stopOnFailure": False,
    "trackClicks": False,
    "trackReplies": False,
}


def _launch_date_value(launch_date: str | date) -> str:
    if isinstance(launch_date, str):
        return launch_date.strip()
    return parse_iso_datetime(launch_date, "Launch date").isoformat()


class CampaignService(BaseService):
    """Create, list, fetch, update and delete campaigns."""

    async def create(
        self,
        name: str,
        workspace_id: str,
        launch_date: str | date,
        description: str | None = None,
    ) -> ApiResponse:
        """Create a campaign in a workspace.

        Args:
            name: Campaign name (1-150 characters).
            workspace_id: Owning workspace UUID.
            launch_date: ISO 8601 string, date or datetime.
            description: Optional description (at most 500 characters).

        Returns:
            Envelope containing the created campaign.
        """
        self._validate_required(
            {"name": name, "workspace_id": workspace_id, "launch_date": launch_date},
            ["name", "workspace_id", "launch_date"],
        )
        validate_campaign_name(name)
        validate_uuid(workspace_id, "Workspace ID")
        validate_description(description)

        payload = self._sanitize(
            {
                "name": name,
                "workspace_id": workspace_id,
                "launch_date": _launch_date_value(launch_date),
                "description": description,
            }
        )
        payload["settings"] = dict(DEFAULT_CAMPAIGN_SETTINGS)

        try:
            return await self.client.post(Endpoints.CAMPAIGN_CREATE, payload)
        except BriqError as e:
            raise self._context_error("create campaign", e) from e

    async def list(
        self,
        page: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        workspace_id: str | None = None,
        search: str | None = None,
        from_: str | None = None,
        to: str | None = None,
    ) -> PaginatedResponse:
        """List campaigns, optionally filtered by workspace, search or date range."""
        validate_pagination_params(page, limit, offset)
        if workspace_id is not None:
            validate_uuid(workspace_id, "Workspace ID")
        if search is not None:
            search = search.strip()
            validate_search(search)

        params = {
            "page": page,
            "limit": limit,
            "offset": offset,
            "workspace_id": workspace_id,
            "search": search,
            "from": from_,
            "to": to,
        }
        try:
            response = await self.client.get(Endpoints.CAMPAIGN_ALL, params=params)
        except BriqError as e:
            raise self._context_error("list campaigns", e) from e
        return self._paginate(response, page, limit)

    async def get_by_id(self, campaign_id: str) -> ApiResponse:
        validate_uuid(campaign_id, "Campaign ID")
        try:
            return await self.client.get(Endpoints.campaign(campaign_id))
        except BriqError as e:
            raise self._resource_error("Campaign", campaign_id, "get campaign", e) from e

    async def update(
        self,
        campaign_id: str,
        name: str | None = None,
        description: str | None = None,
        workspace_id: str | None = None,
        launch_date: str | date | None = None,
    ) -> ApiResponse:
        """Update campaign fields. A new launch date must lie in the future."""
        validate_uuid(campaign_id, "Campaign ID")
        fields = {
            "name": name,
            "description": description,
            "workspace_id": workspace_id,
            "launch_date": launch_date,
        }
        if all(value is None for value in fields.values()):
            raise ValidationError("Update request cannot be empty")

        if name is not None:
            validate_campaign_name(name)
        if workspace_id is not None:
            validate_uuid(workspace_id, "Workspace ID")
        if launch_date is not None:
            validate_iso_date(launch_date, "Launch date")
            fields["launch_date"] = _launch_date_value(launch_date)
        validate_description(description)

        try:
            return await self.client.patch(
                Endpoints.campaign_update(campaign_id), self._sanitize(fields)
            )
        except BriqError as e:
            raise self._resource_error("Campaign", campaign_id, "update campaign", e) from e

    async def delete(self, campaign_id: str) -> ApiResponse:
        validate_uuid(campaign_id, "Campaign ID")
        try:
            return await self.client.delete(Endpoints.campaign_delete(campaign_id))
        except BriqError as e:
            raise self._resource_error("Campaign", campaign_id, "delete campaign", e) from e

    async def exists(self, campaign_id: str) -> bool:
        try:
            await self.get_by_id(campaign_id)
        except NotFoundError:
            return False
        return True
