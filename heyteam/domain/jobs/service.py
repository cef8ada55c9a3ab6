"""Job service - loads and saves jobs through the portal API"""

import logging
from typing import Optional

from ...api_client import ApiClient, parse_model, parse_models
from ...errors import ApiError, NetworkError, NotFoundError, UpdateError
from .schemas import Job, JobSummary, JobUpdate

logger = logging.getLogger(__name__)


class JobService:
    """Service layer for job reads and edits"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_jobs(self, department_id: Optional[str] = None) -> list[JobSummary]:
        """Every job of the organization with its roster counts, earliest first"""
        params = {"departmentId": department_id} if department_id else None
        try:
            data = await self.client.get("/api/jobs", params=params)
            jobs = parse_models(JobSummary, data or [])
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load jobs") from e
        return sorted(jobs, key=lambda j: j.startTime)

    async def get_job(self, job_id: str) -> Job:
        """
        Get a job with its recurrence resolved.

        Raises:
            NotFoundError: The job does not exist
            NetworkError: The request failed or the backend errored
        """
        try:
            data = await self.client.get(f"/api/jobs/{job_id}")
            return parse_model(Job, data)
        except ApiError as e:
            raise NetworkError(e.message or "Failed to load job", status_code=e.status_code) from e

    async def update_job(self, job_id: str, update: JobUpdate) -> Job:
        """
        Save every editable field of a job.

        Raises:
            UpdateError: The backend rejected the change
        """
        logger.info(f"📝 Updating job {job_id}")
        try:
            data = await self.client.patch(f"/api/jobs/{job_id}", update.model_dump(mode="json"))
        except NotFoundError as e:
            raise UpdateError(e.message, status_code=404) from e
        except ApiError as e:
            logger.error(f"❌ Job {job_id} update rejected: {e.message}")
            raise UpdateError(e.message or "Failed to update job", status_code=e.status_code) from e

        if data is None:
            return await self.get_job(job_id)
        return parse_model(Job, data)
