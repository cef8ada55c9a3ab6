"""Roster domain schemas - Pydantic models for validation"""

import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import is_valid_status
from ..jobs.schemas import Job

logger = logging.getLogger(__name__)


class Contact(BaseModel):
    """Schema for a contact (worker) referenced by an availability record"""

    id: str
    firstName: str
    lastName: str
    phone: str
    email: Optional[str] = None
    status: Optional[str] = None  # free, on_job or off_shift on /api/contacts

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}".strip()


class AvailabilityRecord(BaseModel):
    """One contact's response to one job"""

    id: str
    status: str = "no_reply"
    contact: Contact
    shiftPreference: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        if v is None:
            return "no_reply"
        if not is_valid_status(v):
            # e.g. "cancelled" written by the backend; kept, but shown in no column
            logger.warning(f"⚠️ Availability record has off-board status: {v!r}")
        return v

    @property
    def on_board(self) -> bool:
        """Whether the status is one of the four board columns"""
        return is_valid_status(self.status)


class RosterJob(Job):
    """Schema for GET /api/jobs/{id}/roster - a job with its availability list"""

    availability: list[AvailabilityRecord] = Field(default_factory=list)

    @field_validator("availability", mode="before")
    @classmethod
    def default_availability(cls, v):
        return v or []

    def find_record(self, availability_id: str) -> Optional[AvailabilityRecord]:
        return next((a for a in self.availability if a.id == availability_id), None)


class StatusColumn(BaseModel):
    """A roster board column"""

    id: str
    label: str
    color: str


class AvailabilityCreate(BaseModel):
    """Schema for POST /api/availability (manually adding a contact to a roster)"""

    jobId: str
    contactId: str
    status: str = "confirmed"


class SendMessageRequest(BaseModel):
    """Schema for POST /api/send-message (job invitations and broadcasts)"""

    jobId: str
    templateId: str
    contactIds: list[str]


class AddContactsResult(BaseModel):
    """Outcome of adding several contacts to a roster one by one"""

    success_count: int = 0
    error_count: int = 0


class Template(BaseModel):
    """Schema for a message template from GET /api/templates"""

    id: str
    name: str
    content: str = ""
