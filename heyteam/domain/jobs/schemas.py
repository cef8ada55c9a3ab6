"""Job domain schemas - Pydantic models for validation"""

import json
import logging
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

RECURRENCE_TYPES = ("daily", "weekly", "monthly")


class SkillRequirement(BaseModel):
    """Skill and headcount needed for a job"""

    skill: str
    headcount: int = Field(default=1, ge=1)
    notes: Optional[str] = None


class RecurrencePattern(BaseModel):
    """How often a recurring job repeats"""

    type: str
    interval: int = Field(default=1, ge=1)
    daysOfWeek: Optional[list[int]] = None
    endDate: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        if v not in RECURRENCE_TYPES:
            raise ValueError(f"Recurrence type must be one of: {', '.join(RECURRENCE_TYPES)}")
        return v

    @field_validator("daysOfWeek")
    @classmethod
    def validate_days(cls, v):
        if v is not None and any(day < 0 or day > 6 for day in v):
            raise ValueError("Days of week must be between 0 (Sunday) and 6 (Saturday)")
        return v


class RecurrenceUnset(BaseModel):
    """The job carries no recurrence pattern"""

    kind: Literal["unset"] = "unset"

    @property
    def pattern(self) -> Optional[RecurrencePattern]:
        return None


class RecurrenceRaw(BaseModel):
    """A stored pattern that could not be parsed; behaves as no recurrence"""

    kind: Literal["raw"] = "raw"
    text: str

    @property
    def pattern(self) -> Optional[RecurrencePattern]:
        return None


class RecurrenceParsed(BaseModel):
    """A usable recurrence pattern"""

    kind: Literal["parsed"] = "parsed"
    pattern: RecurrencePattern


Recurrence = Union[RecurrenceUnset, RecurrenceRaw, RecurrenceParsed]


def resolve_recurrence(value) -> Recurrence:
    """
    Turn the backend's recurrencePattern field into a Recurrence variant.

    The backend stores the pattern either as an object or as a JSON string.
    Anything that does not parse falls back to RecurrenceRaw, which reads as
    "no recurrence".
    """
    if isinstance(value, (RecurrenceUnset, RecurrenceRaw, RecurrenceParsed)):
        return value
    if value is None or value == "":
        return RecurrenceUnset()

    text = value if isinstance(value, str) else json.dumps(value)
    data = value
    if isinstance(value, str):
        try:
            data = json.loads(value)
        except ValueError:
            logger.warning(f"⚠️ Ignoring unparseable recurrence pattern: {value!r}")
            return RecurrenceRaw(text=text)

    if data is None:
        return RecurrenceUnset()
    if isinstance(data, RecurrencePattern):
        return RecurrenceParsed(pattern=data)

    try:
        return RecurrenceParsed(pattern=RecurrencePattern.model_validate(data))
    except PydanticValidationError:
        logger.warning(f"⚠️ Ignoring invalid recurrence pattern: {text}")
        return RecurrenceRaw(text=text)


class Job(BaseModel):
    """Schema for a job as returned by /api/jobs/{id}"""

    id: str
    name: str
    location: str
    startTime: datetime
    endTime: datetime
    notes: Optional[str] = None
    requiredHeadcount: Optional[int] = None
    departmentId: Optional[str] = None
    isRecurring: bool = False
    recurrencePattern: Recurrence = Field(default_factory=RecurrenceUnset)
    skillRequirements: list[SkillRequirement] = Field(default_factory=list)

    @field_validator("isRecurring", mode="before")
    @classmethod
    def default_recurring(cls, v):
        return bool(v)

    @field_validator("skillRequirements", mode="before")
    @classmethod
    def default_skills(cls, v):
        return v or []

    @field_validator("endTime")
    @classmethod
    def check_end_after_start(cls, v, info: ValidationInfo):
        start = info.data.get("startTime")
        if start is not None and v <= start:
            logger.warning(
                f"⚠️ Job {info.data.get('id')} ends at {v.isoformat()}, not after its start {start.isoformat()}"
            )
        return v

    @field_validator("recurrencePattern", mode="before")
    @classmethod
    def resolve_pattern(cls, v):
        return resolve_recurrence(v)

    @property
    def recurrence(self) -> Optional[RecurrencePattern]:
        """Effective pattern, None unless the job recurs with a parsed pattern"""
        if not self.isRecurring:
            return None
        return self.recurrencePattern.pattern


class JobUpdate(BaseModel):
    """Schema for PATCH /api/jobs/{id}"""

    name: str
    location: str
    startTime: str
    endTime: str
    requiredHeadcount: Optional[int] = None
    notes: Optional[str] = None
    skillRequirements: list[SkillRequirement] = Field(default_factory=list)
    departmentId: Optional[str] = None
    isRecurring: bool = False
    recurrencePattern: Optional[RecurrencePattern] = None


class AvailabilityCounts(BaseModel):
    """Per-status roster totals attached to each job of GET /api/jobs"""

    confirmed: int = 0
    maybe: int = 0
    declined: int = 0
    noReply: int = 0


class JobSummary(Job):
    """Schema for one entry of GET /api/jobs"""

    availabilityCounts: AvailabilityCounts = Field(default_factory=AvailabilityCounts)

    @property
    def open_positions(self) -> Optional[int]:
        """Headcount still unfilled by confirmed contacts, None without a target"""
        if not self.requiredHeadcount:
            return None
        return max(self.requiredHeadcount - self.availabilityCounts.confirmed, 0)
