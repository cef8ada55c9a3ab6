"""Roster directory service - contacts and templates the invite flow picks from"""

import logging
from typing import Optional

from ...api_client import ApiClient, parse_models
from ...errors import ApiError, NetworkError, NotFoundError
from .schemas import Contact, Template

logger = logging.getLogger(__name__)

JOB_INVITATION_TEMPLATE = "job invitation"


class RosterDirectoryService:
    """Lookups for inviting and messaging contacts from a roster"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_contacts(self, department_id: Optional[str] = None) -> list[Contact]:
        """Contacts of the organization, optionally only those in one department"""
        params = {"departmentId": department_id} if department_id else None
        try:
            data = await self.client.get("/api/contacts", params=params)
            return parse_models(Contact, data or [])
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load contacts") from e

    async def get_templates(self) -> list[Template]:
        try:
            data = await self.client.get("/api/templates")
            return parse_models(Template, data or [])
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load templates") from e

    @staticmethod
    def find_invitation_template(templates: list[Template]) -> Optional[Template]:
        """The template named "Job Invitation", matched case-insensitively"""
        template = next((t for t in templates if t.name.lower() == JOB_INVITATION_TEMPLATE), None)
        if template is None:
            logger.warning("⚠️ No Job Invitation template configured")
        return template
