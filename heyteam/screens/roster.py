"""Admin roster board for one job"""

from typing import Optional

from ..context import AppContext
from ..domain.roster.controller import STATUS_COLUMNS, RosterStatusController
from ..domain.roster.schemas import AvailabilityRecord, Contact, RosterJob, Template
from ..domain.roster.service import RosterDirectoryService
from ..errors import HeyTeamError, NotFoundError
from ..shared.formatting import format_job_range, profile_initial
from .base import Screen


class RosterScreen(Screen):
    """Invitees grouped into Confirmed / Maybe / Declined / No Reply columns"""

    def __init__(self, context: AppContext, job_id: str):
        super().__init__(context)
        self.controller = RosterStatusController(context.client, job_id)
        self.directory = RosterDirectoryService(context.client)
        self.invite_candidates: list[Contact] = []
        self.templates: list[Template] = []
        self.invitation_template: Optional[Template] = None

    @property
    def job(self) -> Optional[RosterJob]:
        return self.controller.job

    async def mount(self) -> None:
        """First load; a missing job sends the operator back"""
        self.loading = True
        try:
            await self.controller.load_roster()
        except NotFoundError as e:
            self.toasts.error(e.message or "Job not found")
            self.context.navigator.back()
        except HeyTeamError as e:
            self.toasts.error(e.message or "Failed to load job roster")
        finally:
            self.loading = False

    async def on_focus(self) -> None:
        await self.guard(self.controller.load_roster(), "Failed to load job roster")

    async def refresh(self) -> None:
        self.refreshing = True
        try:
            await self.guard(self.controller.load_roster(), "Failed to load job roster")
        finally:
            self.refreshing = False

    async def change_status(self, availability_id: str, new_status: str) -> bool:
        ok, _ = await self.guard(
            self.controller.set_status(availability_id, new_status), "Failed to update status"
        )
        return ok

    async def add_contacts(self, contact_ids: list[str], status: str = "confirmed") -> bool:
        ok, result = await self.guard(
            self.controller.add_contacts(contact_ids, status), "Failed to add contacts"
        )
        if ok:
            plural = "s" if result.success_count > 1 else ""
            failed = f" ({result.error_count} failed)" if result.error_count else ""
            label = next(c.label for c in STATUS_COLUMNS if c.id == status)
            self.toasts.success(f'Added {result.success_count} contact{plural} as "{label}"{failed}')
        return ok

    async def invite(self, template_id: str, contact_ids: list[str]) -> bool:
        ok, _ = await self.guard(
            self.controller.invite_contacts(template_id, contact_ids), "Failed to send invitations"
        )
        if ok:
            plural = "s" if len(contact_ids) > 1 else ""
            self.toasts.success(f"Invitations sent to {len(contact_ids)} contact{plural}")
        return ok

    async def open_invite(self) -> bool:
        """Load the contacts not yet on the roster and the Job Invitation template"""
        ok, contacts = await self.guard(self.directory.get_contacts(), "Failed to load contacts")
        if ok:
            self.invite_candidates = self.controller.uninvited(contacts)
        loaded, templates = await self.guard(self.directory.get_templates(), "Failed to load template")
        if not loaded:
            return False
        self.templates = templates
        self.invitation_template = self.directory.find_invitation_template(templates)
        if self.invitation_template is None:
            self.toasts.error("Job Invitation template not found. Please create one first.")
            return False
        return ok

    async def send_invitations(self, contact_ids: list[str]) -> bool:
        if self.invitation_template is None:
            self.toasts.error("Job Invitation template not found")
            return False
        return await self.invite(self.invitation_template.id, contact_ids)

    async def open_broadcast(self) -> bool:
        ok, templates = await self.guard(self.directory.get_templates(), "Failed to load templates")
        if ok:
            self.templates = templates
        return ok

    async def broadcast(self, template_id: str) -> bool:
        ok, _ = await self.guard(self.controller.broadcast(template_id), "Failed to send message")
        if ok:
            self.toasts.success("Message sent to confirmed contacts")
        return ok

    def render(self) -> Optional[dict]:
        """Plain data for the board, rebuilt from the displayed job on every call"""
        job = self.job
        if job is None:
            return None
        return {
            "name": job.name,
            "location": job.location,
            "time": format_job_range(job.startTime, job.endTime),
            "notes": job.notes,
            "columns": [
                {
                    "id": column.id,
                    "label": column.label,
                    "color": column.color,
                    "count": len(group),
                    "can_broadcast": column.id == "confirmed" and bool(group),
                    "records": [self._render_record(record) for record in group],
                }
                for column, group in self.controller.columns()
            ],
            "off_board_count": len(self.controller.off_board()),
        }

    def _render_record(self, record: AvailabilityRecord) -> dict:
        contact = record.contact
        return {
            "id": record.id,
            "initial": profile_initial(contact.firstName),
            "name": contact.full_name,
            "phone": contact.phone,
            "email": contact.email,
            "options": [c.id for c in self.controller.transition_options(record)],
        }
