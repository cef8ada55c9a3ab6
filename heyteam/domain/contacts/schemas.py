"""Contact portal schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ScheduleEntry(BaseModel):
    """A job as the contact sees it, with their own availability"""

    id: str
    name: str
    location: str
    startTime: datetime
    endTime: datetime
    notes: Optional[str] = None
    departmentId: Optional[str] = None
    availabilityStatus: str = "no_reply"
    availabilityId: Optional[str] = None
    shiftPreference: Optional[str] = None

    @field_validator("availabilityStatus", mode="before")
    @classmethod
    def default_status(cls, v):
        return v or "no_reply"


class Invitation(ScheduleEntry):
    """Schema for one entry of GET /api/contact/invitations"""

    createdAt: Optional[datetime] = None


class InvitationList(BaseModel):
    invitations: list[Invitation] = Field(default_factory=list)


class ContactSchedule(BaseModel):
    """Schema for GET /api/contact/schedule"""

    upcoming: list[ScheduleEntry] = Field(default_factory=list)
    past: list[ScheduleEntry] = Field(default_factory=list)

    @property
    def all_entries(self) -> list[ScheduleEntry]:
        return [*self.upcoming, *self.past]


class ContactDepartment(BaseModel):
    id: str
    name: str
    organizationId: Optional[str] = None
