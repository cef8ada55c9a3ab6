"""Contact portal service - invitations and schedule for a signed-in contact"""

import logging
from calendar import monthrange
from datetime import date
from typing import Optional

from ...api_client import ApiClient, parse_model, parse_models
from ...errors import ApiError, NetworkError, NotFoundError, UpdateError, ValidationError
from .schemas import ContactDepartment, ContactSchedule, Invitation, InvitationList, ScheduleEntry

logger = logging.getLogger(__name__)

# What each invitation button sends
RESPONSE_STATUSES = {
    "accept": "confirmed",
    "decline": "declined",
    "maybe": "maybe",
}

RESPONSE_TEXT = {
    "accept": "accepted",
    "decline": "declined",
    "maybe": "marked as maybe",
}


class ContactPortalService:
    """Service layer for the contact-facing screens"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_invitations(self) -> list[Invitation]:
        """Pending invitations (no reply or maybe), earliest job first"""
        try:
            data = await self.client.get("/api/contact/invitations")
            invitations = parse_model(InvitationList, data).invitations
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load invitations") from e
        return sorted(invitations, key=lambda i: i.startTime)

    async def get_schedule(self) -> ContactSchedule:
        try:
            data = await self.client.get("/api/contact/schedule")
            return parse_model(ContactSchedule, data)
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load schedule") from e

    async def get_departments(self) -> list[ContactDepartment]:
        try:
            data = await self.client.get("/api/contact/departments")
            return parse_models(ContactDepartment, data)
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load departments") from e

    async def respond(self, entry: ScheduleEntry, action: str) -> str:
        """
        Answer an invitation with accept, decline or maybe.

        Returns:
            The status now held by the contact's availability record

        Raises:
            ValidationError: Unknown action or the entry has no availability id
            UpdateError: The backend rejected the response
        """
        status = RESPONSE_STATUSES.get(action)
        if status is None:
            raise ValidationError(f"Unknown invitation action: {action}")
        await self._set_status(entry, status)
        return status

    async def cancel(self, entry: ScheduleEntry, reason: Optional[str] = None) -> None:
        """Withdraw from a job the contact had accepted"""
        logger.info(f"🚫 Contact cancelling job {entry.id}{f': {reason}' if reason else ''}")
        await self._set_status(entry, "declined")

    async def _set_status(self, entry: ScheduleEntry, status: str) -> None:
        if not entry.availabilityId:
            raise ValidationError("Unable to perform action. Missing availability information.")
        try:
            await self.client.patch(
                f"/api/contact/availability/{entry.availabilityId}", {"status": status}
            )
        except NotFoundError as e:
            raise UpdateError(e.message, status_code=404) from e
        except ApiError as e:
            logger.error(f"❌ Contact response rejected for {entry.availabilityId}: {e.message}")
            raise UpdateError(e.message or "Failed to update invitation status", status_code=e.status_code) from e


def filter_by_department(entries: list[ScheduleEntry], department_id: Optional[str]) -> list[ScheduleEntry]:
    if not department_id:
        return list(entries)
    return [e for e in entries if e.departmentId == department_id]


def group_by_day(entries: list[ScheduleEntry], year: int, month: int) -> list[tuple[date, list[ScheduleEntry]]]:
    """Days of the month that have jobs, in order, each with the jobs starting that day"""
    days = []
    for day in range(1, monthrange(year, month)[1] + 1):
        current = date(year, month, day)
        jobs = [e for e in entries if e.startTime.date() == current]
        if jobs:
            days.append((current, jobs))
    return days
