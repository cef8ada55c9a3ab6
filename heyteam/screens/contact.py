"""Contact-facing screens: invitations and schedule"""

from datetime import date
from typing import Optional

from ..context import AppContext
from ..domain.contacts.schemas import ContactDepartment, ContactSchedule, Invitation, ScheduleEntry
from ..domain.contacts.service import (
    RESPONSE_TEXT,
    ContactPortalService,
    filter_by_department,
    group_by_day,
)
from ..shared.formatting import format_long_date, format_time
from .base import Screen


class InvitationsScreen(Screen):
    """Pending invitations the contact can accept, decline or answer maybe"""

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.service = ContactPortalService(context.client)
        self.invitations: list[Invitation] = []
        self.action_in_progress: Optional[str] = None

    async def load(self) -> None:
        self.loading = True
        try:
            ok, invitations = await self.guard(
                self.service.get_invitations(), "Failed to load invitations"
            )
        finally:
            self.loading = False
        if ok:
            self.invitations = invitations

    async def respond(self, invitation_id: str, action: str) -> bool:
        invitation = next((i for i in self.invitations if i.id == invitation_id), None)
        if invitation is None:
            self.toasts.error("Invitation not found")
            return False

        self.action_in_progress = invitation_id
        try:
            ok, _ = await self.guard(
                self.service.respond(invitation, action), "Failed to update invitation status"
            )
        finally:
            self.action_in_progress = None
        if not ok:
            return False

        self.toasts.success(f"Job {RESPONSE_TEXT[action]} successfully")
        await self.load()
        return True

    def render(self) -> list[dict]:
        return [
            {
                "id": i.id,
                "name": i.name,
                "location": i.location,
                "date": format_long_date(i.startTime),
                "time": f"{format_time(i.startTime)} - {format_time(i.endTime)}",
                "status": i.availabilityStatus,
            }
            for i in self.invitations
        ]


class ScheduleScreen(Screen):
    """The contact's upcoming and past jobs, filterable by department"""

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.service = ContactPortalService(context.client)
        self.schedule = ContactSchedule()
        self.departments: list[ContactDepartment] = []
        self.selected_department_id: Optional[str] = None

    async def load(self) -> None:
        self.loading = True
        try:
            ok, schedule = await self.guard(self.service.get_schedule(), "Failed to load schedule")
            if ok:
                self.schedule = schedule
            ok, departments = await self.guard(
                self.service.get_departments(), "Failed to load departments"
            )
            if ok:
                self.departments = departments
        finally:
            self.loading = False

    def select_department(self, department_id: Optional[str]) -> None:
        self.selected_department_id = department_id

    @property
    def upcoming(self) -> list[ScheduleEntry]:
        return filter_by_department(self.schedule.upcoming, self.selected_department_id)

    @property
    def past(self) -> list[ScheduleEntry]:
        return filter_by_department(self.schedule.past, self.selected_department_id)

    def month(self, year: int, month: int) -> list[tuple[date, list[ScheduleEntry]]]:
        entries = filter_by_department(self.schedule.all_entries, self.selected_department_id)
        return group_by_day(entries, year, month)

    def _find(self, job_id: str) -> Optional[ScheduleEntry]:
        return next((e for e in self.schedule.all_entries if e.id == job_id), None)

    async def respond(self, job_id: str, action: str) -> bool:
        entry = self._find(job_id)
        if entry is None:
            self.toasts.error("Job not found")
            return False
        ok, _ = await self.guard(self.service.respond(entry, action), "Failed to update job status")
        if ok:
            self.toasts.success(f"Job {RESPONSE_TEXT[action]} successfully")
            await self.load()
        return ok

    async def cancel(self, job_id: str, reason: Optional[str] = None) -> bool:
        entry = self._find(job_id)
        if entry is None:
            self.toasts.error("Job not found")
            return False
        ok, _ = await self.guard(self.service.cancel(entry, reason), "Failed to update job status")
        if ok:
            self.toasts.success(f"Job assignment canceled{f': {reason}' if reason else ''}")
            await self.load()
        return ok
