"""
Job edit form

Mutable form state for editing one job. Holds what the operator has typed,
keeps headcount in step with the skill requirements, and turns itself into
a JobUpdate once the required-field checks pass.
"""

from datetime import datetime
from typing import Optional

from ...errors import ValidationError
from ...shared.validators import clean_text, require_fields, validate_time_range
from ..departments.schemas import Department
from .schemas import RECURRENCE_TYPES, Job, JobUpdate, RecurrencePattern, SkillRequirement


class JobEditForm:
    """Editable copy of a job's fields"""

    def __init__(
        self,
        name: str = "",
        location: str = "",
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        required_headcount: Optional[int] = None,
        notes: str = "",
        department_id: Optional[str] = None,
        is_recurring: bool = False,
        recurrence_pattern: Optional[RecurrencePattern] = None,
        skill_requirements: Optional[list[SkillRequirement]] = None,
    ):
        self.name = name
        self.location = location
        self.start_time = start_time
        self.end_time = end_time
        self.required_headcount = required_headcount
        self.notes = notes
        self.department_id = department_id
        self.is_recurring = is_recurring
        self.recurrence_pattern = recurrence_pattern
        self.skill_requirements: list[SkillRequirement] = []
        self.set_skill_requirements(skill_requirements or [])

    @classmethod
    def from_job(cls, job: Job) -> "JobEditForm":
        return cls(
            name=job.name,
            location=job.location,
            start_time=job.startTime,
            end_time=job.endTime,
            required_headcount=job.requiredHeadcount,
            notes=job.notes or "",
            department_id=job.departmentId,
            is_recurring=job.isRecurring,
            recurrence_pattern=job.recurrencePattern.pattern,
            skill_requirements=[req.model_copy() for req in job.skillRequirements],
        )

    # Skill requirements

    @property
    def headcount_from_skills(self) -> int:
        return sum(req.headcount for req in self.skill_requirements)

    @property
    def headcount_editable(self) -> bool:
        """Headcount is typed by hand only while no skill asks for people"""
        return self.headcount_from_skills == 0

    def set_skill_requirements(self, requirements: list[SkillRequirement]) -> None:
        self.skill_requirements = list(requirements)
        total = self.headcount_from_skills
        if total > 0:
            self.required_headcount = total

    def add_skill(self, skill: str, headcount: int = 1, notes: Optional[str] = None) -> None:
        if not skill or not skill.strip():
            raise ValidationError("Skill name is required")
        requirement = SkillRequirement(
            skill=skill.strip(), headcount=max(headcount or 1, 1), notes=clean_text(notes)
        )
        self.set_skill_requirements([*self.skill_requirements, requirement])

    def remove_skill(self, index: int) -> None:
        requirements = list(self.skill_requirements)
        del requirements[index]
        self.set_skill_requirements(requirements)

    # Department

    def choose_department(self, department: Optional[Department]) -> None:
        """Select a department, filling an empty location from its address"""
        self.department_id = department.id if department else None
        if department and department.address and not self.location.strip():
            self.location = department.address

    # Recurrence

    def set_recurring(self, value: bool) -> None:
        self.is_recurring = value
        if not value:
            self.recurrence_pattern = None
        elif self.recurrence_pattern is None:
            self.recurrence_pattern = RecurrencePattern(type="daily", interval=1)

    def set_recurrence_type(self, recurrence_type: str) -> None:
        if recurrence_type not in RECURRENCE_TYPES:
            raise ValidationError(f"Recurrence type must be one of: {', '.join(RECURRENCE_TYPES)}")
        current = self.recurrence_pattern
        days = current.daysOfWeek if current else None
        if recurrence_type == "weekly":
            days = days if days is not None else []
        else:
            days = None
        self.recurrence_pattern = RecurrencePattern(
            type=recurrence_type,
            interval=current.interval if current else 1,
            daysOfWeek=days,
            endDate=current.endDate if current else None,
        )

    def set_recurrence_interval(self, value) -> None:
        """Accepts typed text; anything unusable becomes 1"""
        try:
            interval = int(value)
        except (TypeError, ValueError):
            interval = 1
        if self.recurrence_pattern:
            self.recurrence_pattern = self.recurrence_pattern.model_copy(
                update={"interval": max(interval, 1)}
            )

    def toggle_day(self, day: int) -> None:
        if not self.recurrence_pattern or self.recurrence_pattern.type != "weekly":
            return
        days = set(self.recurrence_pattern.daysOfWeek or [])
        days.symmetric_difference_update({day})
        self.recurrence_pattern = self.recurrence_pattern.model_copy(
            update={"daysOfWeek": sorted(days)}
        )

    def set_recurrence_end(self, end_date: Optional[datetime]) -> None:
        if self.recurrence_pattern:
            self.recurrence_pattern = self.recurrence_pattern.model_copy(
                update={"endDate": end_date.isoformat() if end_date else None}
            )

    # Submission

    def validate(self) -> None:
        """
        Check the form before it is sent.

        Raises:
            ValidationError: A required field is missing or end is not after start
        """
        require_fields(self.name, self.location, self.start_time, self.end_time)
        validate_time_range(self.start_time, self.end_time)

    def to_update(self) -> JobUpdate:
        """Validated PATCH payload"""
        self.validate()
        return JobUpdate(
            name=self.name.strip(),
            location=self.location.strip(),
            startTime=self.start_time.isoformat(),
            endTime=self.end_time.isoformat(),
            requiredHeadcount=self.required_headcount or None,
            notes=clean_text(self.notes),
            skillRequirements=self.skill_requirements,
            departmentId=self.department_id or None,
            isRecurring=self.is_recurring,
            recurrencePattern=self.recurrence_pattern if self.is_recurring else None,
        )
