"""
Roster status controller

Holds the displayed roster for one job, applies operator-initiated status
changes through the backend and derives the per-status groupings the board
renders. Every mutation is followed by a full reload; nothing is patched
locally, so the last reload to finish decides what is displayed.
"""

import logging
from collections.abc import Iterator
from typing import Optional

from ...api_client import ApiClient, parse_model
from ...errors import ApiError, HeyTeamError, NetworkError, NotFoundError, UpdateError, ValidationError
from ...shared.validators import AVAILABILITY_STATUSES, validate_status
from .schemas import (
    AddContactsResult,
    AvailabilityCreate,
    AvailabilityRecord,
    Contact,
    RosterJob,
    SendMessageRequest,
    StatusColumn,
)

logger = logging.getLogger(__name__)

STATUS_COLUMNS = [
    StatusColumn(id="confirmed", label="Confirmed", color="#0db2b5"),
    StatusColumn(id="maybe", label="Maybe", color="#f59e0b"),
    StatusColumn(id="declined", label="Declined", color="#d92d20"),
    StatusColumn(id="no_reply", label="No Reply", color="#6b7280"),
]


class StatusGroup:
    """
    Lazy view of a job's records holding one status.

    Filters again on every iteration, so it always reflects the job it was
    built from and can be iterated any number of times.
    """

    def __init__(self, job: Optional[RosterJob], status: str):
        self.job = job
        self.status = status

    def __iter__(self) -> Iterator[AvailabilityRecord]:
        if self.job is None:
            return iter(())
        return (a for a in self.job.availability if a.status == self.status)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"StatusGroup(status={self.status!r}, ids={[a.id for a in self]})"


class RosterStatusController:
    """Roster board state for a single job"""

    def __init__(self, client: ApiClient, job_id: str):
        self.client = client
        self.job_id = job_id
        self.job: Optional[RosterJob] = None

    async def load_roster(self, job_id: Optional[str] = None) -> RosterJob:
        """
        Fetch the job and its availability list, replacing the displayed job.

        Raises:
            NotFoundError: The job does not exist
            NetworkError: The request failed or the backend errored
        """
        job_id = job_id or self.job_id
        try:
            data = await self.client.get(f"/api/jobs/{job_id}/roster")
            job = parse_model(RosterJob, data)
        except ApiError as e:
            logger.error(f"❌ Failed to load roster for job {job_id}: {e.message}")
            raise NetworkError(
                e.message or "Failed to load job roster",
                error_type="HTTP Error" if e.status_code else "Response Error",
                status_code=e.status_code,
            ) from e

        self.job_id = job_id
        self.job = job
        logger.debug(f"📋 Loaded roster for job {job_id} ({len(job.availability)} records)")
        return job

    @staticmethod
    def group_by_status(job: Optional[RosterJob], status: str) -> StatusGroup:
        """Records of job holding status; recomputed on every iteration"""
        return StatusGroup(job, status)

    def groups(self) -> dict[str, StatusGroup]:
        """One group per status for the displayed job"""
        return {status: self.group_by_status(self.job, status) for status in AVAILABILITY_STATUSES}

    def columns(self) -> list[tuple[StatusColumn, StatusGroup]]:
        """Board columns in display order with their records"""
        return [(column, self.group_by_status(self.job, column.id)) for column in STATUS_COLUMNS]

    @staticmethod
    def transition_options(record: AvailabilityRecord) -> list[StatusColumn]:
        """Statuses an operator can move record to (every status but its own)"""
        return [column for column in STATUS_COLUMNS if column.id != record.status]

    def confirmed_contacts(self) -> list[Contact]:
        return [a.contact for a in self.group_by_status(self.job, "confirmed")]

    def off_board(self) -> list[AvailabilityRecord]:
        """Records whose status has no board column, such as cancelled"""
        return [a for a in self.job.availability if not a.on_board] if self.job else []

    def uninvited(self, contacts: list[Contact]) -> list[Contact]:
        """Contacts not yet on the displayed roster"""
        on_roster = {a.contact.id for a in self.job.availability} if self.job else set()
        return [c for c in contacts if c.id not in on_roster]

    async def set_status(self, availability_id: str, new_status: str) -> None:
        """
        Move one record to new_status, then reload the whole roster.

        Raises:
            ValidationError: new_status is not a roster status (nothing is sent)
            UpdateError: The backend rejected the change
            NetworkError: The request could not complete
        """
        validate_status(new_status)

        logger.info(f"🔄 Availability {availability_id} on job {self.job_id} → {new_status}")
        try:
            await self.client.patch(
                f"/api/jobs/{self.job_id}/availability/{availability_id}",
                {"status": new_status},
            )
        except NotFoundError as e:
            logger.error(f"❌ Availability {availability_id} no longer exists on job {self.job_id}")
            raise UpdateError(e.message, status_code=404) from e
        except ApiError as e:
            logger.error(f"❌ Status update rejected for availability {availability_id}: {e.message}")
            raise UpdateError(e.message, status_code=e.status_code) from e

        await self.load_roster()

    async def add_contacts(self, contact_ids: list[str], status: str = "confirmed") -> AddContactsResult:
        """
        Put contacts straight onto the roster with status, one request each.

        Reloads when at least one contact was added.

        Raises:
            ValidationError: No contacts selected or status is not a roster status
            UpdateError: Every request failed
        """
        if not contact_ids:
            raise ValidationError("Please select at least one contact")
        validate_status(status)

        result = AddContactsResult()
        for contact_id in contact_ids:
            payload = AvailabilityCreate(jobId=self.job_id, contactId=contact_id, status=status)
            try:
                await self.client.post("/api/availability", payload.model_dump())
                result.success_count += 1
            except HeyTeamError as e:
                logger.warning(f"⚠️ Could not add contact {contact_id} to job {self.job_id}: {e.message}")
                result.error_count += 1

        logger.info(
            f"👥 Added {result.success_count} contact(s) to job {self.job_id} as {status} "
            f"({result.error_count} failed)"
        )
        if result.success_count == 0:
            raise UpdateError("Failed to add contacts")

        await self.load_roster()
        return result

    async def invite_contacts(self, template_id: str, contact_ids: list[str]) -> None:
        """
        Send the job invitation template to contacts, then reload.

        Raises:
            ValidationError: No contacts or no template selected
            UpdateError: The backend refused to queue the messages
        """
        await self._send(template_id, contact_ids, "Failed to send invitations")

    async def broadcast(self, template_id: str) -> None:
        """Message everyone in the confirmed column"""
        contact_ids = [c.id for c in self.confirmed_contacts()]
        await self._send(template_id, contact_ids, "Failed to send message")

    async def _send(self, template_id: str, contact_ids: list[str], failure_message: str) -> None:
        if not contact_ids:
            raise ValidationError("Please select at least one contact")
        if not template_id:
            raise ValidationError("Please select a template")

        payload = SendMessageRequest(jobId=self.job_id, templateId=template_id, contactIds=contact_ids)
        try:
            await self.client.post("/api/send-message", payload.model_dump())
        except (ApiError, NotFoundError) as e:
            raise UpdateError(e.message or failure_message) from e

        logger.info(f"📨 Queued template {template_id} for {len(contact_ids)} contact(s) on job {self.job_id}")
        await self.load_roster()
