"""Department domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import clean_text


class Department(BaseModel):
    """Schema for department response"""

    id: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None


class DepartmentCreate(BaseModel):
    """Schema for creating a new department"""

    name: str
    description: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Department name is required")
        return v

    @field_validator("description", "address")
    @classmethod
    def blank_to_none(cls, v):
        return clean_text(v)
