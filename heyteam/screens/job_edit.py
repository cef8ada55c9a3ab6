"""Admin job edit screen"""

from typing import Optional

from ..context import AppContext
from ..domain.departments.schemas import Department
from ..domain.departments.service import DepartmentService
from ..domain.jobs.form import JobEditForm
from ..domain.jobs.schemas import Job
from ..domain.jobs.service import JobService
from ..errors import HeyTeamError
from .base import Screen


class JobEditScreen(Screen):
    """Loads a job into a JobEditForm and saves it back"""

    def __init__(self, context: AppContext, job_id: str):
        super().__init__(context)
        self.job_id = job_id
        self.jobs = JobService(context.client)
        self.department_service = DepartmentService(context.client)
        self.job: Optional[Job] = None
        self.form: Optional[JobEditForm] = None
        self.departments: list[Department] = []
        self.saving = False

    async def mount(self) -> bool:
        """Load the job; on failure show the error and go back"""
        self.loading = True
        try:
            self.job = await self.jobs.get_job(self.job_id)
        except HeyTeamError as e:
            self.toasts.error(e.message or "Failed to load job")
            self.context.navigator.back()
            return False
        finally:
            self.loading = False

        self.form = JobEditForm.from_job(self.job)
        await self.load_departments()
        return True

    async def load_departments(self) -> None:
        ok, departments = await self.guard(
            self.department_service.list_departments(), "Failed to load departments"
        )
        if ok:
            self.departments = departments

    def choose_department(self, department_id: Optional[str]) -> None:
        department = self.department_service.find(self.departments, department_id)
        self.form.choose_department(department)

    async def create_department(
        self, name: str, description: Optional[str] = None, address: Optional[str] = None
    ) -> Optional[Department]:
        """Create a department and select it"""
        ok, department = await self.guard(
            self.department_service.create_department(name, description, address),
            "Failed to create department",
        )
        if not ok:
            return None
        self.departments.append(department)
        self.form.choose_department(department)
        return department

    async def save(self) -> bool:
        """Validate and PATCH the form; success goes back to the previous screen"""
        if self.form is None:
            return False
        self.saving = True
        try:
            ok, job = await self.guard(self._submit(), "Failed to update job")
        finally:
            self.saving = False
        if not ok:
            return False

        self.job = job
        self.toasts.success("Job updated successfully")
        self.context.navigator.back()
        return True

    async def _submit(self) -> Job:
        update = self.form.to_update()
        return await self.jobs.update_job(self.job_id, update)
