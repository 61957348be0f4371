"""Workspace management."""

from briq.core.constants import Endpoints
from briq.core.errors import BriqError, NotFoundError, ValidationError
from briq.services.base import BaseService
from briq.transport.response import ApiResponse, PaginatedResponse
from briq.utils.validators import (
    validate_description,
    validate_pagination_params,
    validate_search,
    validate_uuid,
    validate_workspace_name,
)


class WorkspaceService(BaseService):
    """Create, list, fetch and update workspaces."""

    async def create(self, name: str, description: str | None = None) -> ApiResponse:
        """Create a workspace.

        Raises:
            ValidationError: If the name or description is invalid.
            BriqError: On API failure, with "Failed to create workspace" context.
        """
        self._validate_required({"name": name}, ["name"])
        validate_workspace_name(name)
        validate_description(description)

        payload = self._sanitize({"name": name, "description": description})
        try:
            return await self.client.post(Endpoints.WORKSPACE_CREATE, payload)
        except BriqError as e:
            raise self._context_error("create workspace", e) from e

    async def list(
        self,
        page: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        search: str | None = None,
    ) -> PaginatedResponse:
        """List workspaces with optional pagination and search."""
        validate_pagination_params(page, limit, offset)
        if search is not None:
            search = search.strip()
            validate_search(search)

        params = {"page": page, "limit": limit, "offset": offset, "search": search}
        try:
            response = await self.client.get(Endpoints.WORKSPACE_ALL, params=params)
        except BriqError as e:
            raise self._context_error("list workspaces", e) from e
        return self._paginate(response, page, limit)

    async def get_by_id(self, workspace_id: str) -> ApiResponse:
        """Fetch one workspace.

        Raises:
            NotFoundError: If the workspace does not exist.
        """
        validate_uuid(workspace_id, "Workspace ID")
        try:
            return await self.client.get(Endpoints.workspace(workspace_id))
        except BriqError as e:
            raise self._resource_error("Workspace", workspace_id, "get workspace", e) from e

    async def update(
        self,
        workspace_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> ApiResponse:
        """Update a workspace's name and/or description."""
        validate_uuid(workspace_id, "Workspace ID")
        if name is None and description is None:
            raise ValidationError("Update request cannot be empty")
        if name is not None:
            validate_workspace_name(name)
        validate_description(description)

        payload = self._sanitize({"name": name, "description": description})
        try:
            return await self.client.patch(Endpoints.workspace_update(workspace_id), payload)
        except BriqError as e:
            raise self._resource_error(
                "Workspace", workspace_id, "update workspace", e
            ) from e

    async def exists(self, workspace_id: str) -> bool:
        try:
            await self.get_by_id(workspace_id)
        except NotFoundError:
            return False
        return True
