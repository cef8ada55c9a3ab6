"""Department service - lookup and management of departments"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ...api_client import ApiClient, parse_model, parse_models
from ...errors import ApiError, NetworkError, NotFoundError, UpdateError, ValidationError
from .schemas import Department, DepartmentCreate

logger = logging.getLogger(__name__)


class DepartmentService:
    """Service layer for departments"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_departments(self) -> list[Department]:
        """Get all departments of the organization"""
        try:
            data = await self.client.get("/api/departments")
            return parse_models(Department, data)
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load departments") from e

    async def create_department(
        self, name: str, description: Optional[str] = None, address: Optional[str] = None
    ) -> Department:
        """
        Create a department.

        Raises:
            ValidationError: name is blank
            UpdateError: The backend rejected the department
        """
        try:
            payload = DepartmentCreate(name=name, description=description, address=address)
        except PydanticValidationError as e:
            raise ValidationError("Department name is required") from e

        try:
            data = await self.client.post("/api/departments", payload.model_dump())
        except (ApiError, NotFoundError) as e:
            logger.error(f"❌ Failed to create department {payload.name}: {e.message}")
            raise UpdateError(e.message or "Failed to create department") from e

        department = parse_model(Department, data)
        logger.info(f"🏢 Created department {department.id} ({department.name})")
        return department

    async def update_department(
        self,
        department_id: str,
        name: str,
        description: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Department:
        """
        Rename a department or change its description and address.

        Raises:
            ValidationError: name is blank
            UpdateError: The backend rejected the change or the department is gone
        """
        try:
            payload = DepartmentCreate(name=name, description=description, address=address)
        except PydanticValidationError as e:
            raise ValidationError("Department name is required") from e

        try:
            data = await self.client.patch(f"/api/departments/{department_id}", payload.model_dump())
        except NotFoundError as e:
            raise UpdateError(e.message, status_code=404) from e
        except ApiError as e:
            logger.error(f"❌ Failed to update department {department_id}: {e.message}")
            raise UpdateError(e.message or "Failed to update department", status_code=e.status_code) from e

        logger.info(f"🏢 Updated department {department_id}")
        return parse_model(Department, data)

    async def delete_department(self, department_id: str) -> None:
        """
        Delete a department.

        Raises:
            UpdateError: The backend refused the deletion or the department is gone
        """
        try:
            await self.client.delete(f"/api/departments/{department_id}")
        except NotFoundError as e:
            raise UpdateError(e.message, status_code=404) from e
        except ApiError as e:
            logger.error(f"❌ Failed to delete department {department_id}: {e.message}")
            raise UpdateError(e.message or "Failed to delete department", status_code=e.status_code) from e
        logger.info(f"🗑️ Deleted department {department_id}")

    @staticmethod
    def find(departments: list[Department], department_id: Optional[str]) -> Optional[Department]:
        return next((d for d in departments if d.id == department_id), None)
