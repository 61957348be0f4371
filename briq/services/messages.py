"""SMS dispatch and message history."""

from briq.core.constants import MESSAGE_STATUSES, Endpoints
from briq.core.errors import BriqError, ValidationError
from briq.services.base import BaseService
from briq.transport.response import ApiResponse, PaginatedResponse
from briq.utils.helpers import format_phone_number, format_phone_numbers
from briq.utils.validators import (
    validate_message,
    validate_pagination_params,
    validate_phone_numbers,
    validate_uuid,
)


class MessageService(BaseService):
    """Send instant and campaign messages, and read delivery logs."""

    async def send_instant(
        self,
        recipients: str | list[str],
        content: str,
        sender_id: str | None = None,
        campaign_id: str | None = None,
    ) -> ApiResponse:
        """Send a message to one or more phone numbers.

        Args:
            recipients: A phone number or list of phone numbers.
            content: Message text (at most 1600 characters).
            sender_id: Sender ID. Defaults to the configured sender ID.
            campaign_id: Optional campaign to attribute the message to.

        Returns:
            Envelope containing the created message(s).

        Raises:
            ValidationError: If a recipient or the content is invalid.
        """
        self._validate_required(
            {"recipients": recipients, "content": content}, ["recipients", "content"]
        )
        numbers = [recipients] if isinstance(recipients, str) else list(recipients)
        validate_phone_numbers(numbers)
        validate_message(content)
        if campaign_id is not None:
            validate_uuid(campaign_id, "Campaign ID")

        payload = {
            "content": content,
            "recipients": format_phone_numbers(numbers),
            "sender_id": sender_id or self.client.config.sender_id,
        }
        if campaign_id:
            payload["campaign_id"] = campaign_id

        try:
            return await self.client.post(Endpoints.MESSAGE_SEND_INSTANT, payload)
        except BriqError as e:
            raise self._context_error("send instant message", e) from e

    async def send_campaign(
        self,
        campaign_id: str,
        group_id: str | None = None,
        content: str | None = None,
        sender_id: str | None = None,
    ) -> ApiResponse:
        """Send a message to a campaign's recipient group."""
        self._validate_required({"campaign_id": campaign_id}, ["campaign_id"])
        validate_uuid(campaign_id, "Campaign ID")
        if content is not None:
            validate_message(content)

        payload = self._sanitize(
            {
                "campaign_id": campaign_id,
                "group_id": group_id,
                "content": content,
                "sender_id": sender_id or self.client.config.sender_id or None,
            }
        )
        try:
            return await self.client.post(Endpoints.MESSAGE_SEND_CAMPAIGN, payload)
        except BriqError as e:
            raise self._context_error("send campaign message", e) from e

    async def get_logs(
        self,
        page: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        workspace_id: str | None = None,
        campaign_id: str | None = None,
        status: str | None = None,
        from_: str | None = None,
        to: str | None = None,
        phone_number: str | None = None,
    ) -> PaginatedResponse:
        """Message delivery logs, filtered by campaign, status, dates or number."""
        validate_pagination_params(page, limit, offset)
        if workspace_id is not None:
            validate_uuid(workspace_id, "Workspace ID")
        if campaign_id is not None:
            validate_uuid(campaign_id, "Campaign ID")
        if status is not None and status not in MESSAGE_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(MESSAGE_STATUSES)}"
            )

        params = {
            "page": page,
            "limit": limit,
            "offset": offset,
            "workspace_id": workspace_id,
            "campaign_id": campaign_id,
            "status": status,
            "from": from_,
            "to": to,
            "phoneNumber": format_phone_number(phone_number) if phone_number else None,
        }
        try:
            response = await self.client.get(Endpoints.MESSAGE_LOGS, params=params)
        except BriqError as e:
            raise self._context_error("get message logs", e) from e
        return self._paginate(response, page, limit)

    async def get_history(
        self,
        page: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        workspace_id: str | None = None,
        phone_number: str | None = None,
        from_: str | None = None,
        to: str | None = None,
    ) -> PaginatedResponse:
        """Message history, optionally for a single phone number."""
        validate_pagination_params(page, limit, offset)
        if workspace_id is not None:
            validate_uuid(workspace_id, "Workspace ID")

        params = {
            "page": page,
            "limit": limit,
            "offset": offset,
            "workspace_id": workspace_id,
            "phoneNumber": format_phone_number(phone_number) if phone_number else None,
            "from": from_,
            "to": to,
        }
        try:
            response = await self.client.get(Endpoints.MESSAGE_HISTORY, params=params)
        except BriqError as e:
            raise self._context_error("get message history", e) from e
        return self._paginate(response, page, limit)
