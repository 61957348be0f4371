"""Resource services for workspaces, campaigns and messages."""

from briq.services.base import BaseService
from briq.services.campaigns import CampaignService
from briq.services.messages import MessageService
from briq.services.workspaces import WorkspaceService

__all__ = [
    "BaseService",
    "CampaignService",
    "MessageService",
    "WorkspaceService",
]
