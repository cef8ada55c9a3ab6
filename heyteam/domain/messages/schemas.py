"""Message domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

MESSAGE_DIRECTIONS = ("inbound", "outbound")
MESSAGE_STATUSES = ("sent", "delivered", "failed")


class Message(BaseModel):
    """Schema for one entry of GET /api/messages/history"""

    id: str
    contactId: str
    contactName: str = "Unknown"
    jobId: Optional[str] = None
    jobName: Optional[str] = None
    direction: str
    content: str = ""
    status: str
    createdAt: datetime

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v):
        if v not in MESSAGE_DIRECTIONS:
            raise ValueError(f"Direction must be one of: {', '.join(MESSAGE_DIRECTIONS)}")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v not in MESSAGE_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(MESSAGE_STATUSES)}")
        return v

    @property
    def is_inbound(self) -> bool:
        return self.direction == "inbound"


class MessageSegment(BaseModel):
    """A run of message text, either plain or a link"""

    text: str
    is_link: bool = False
    url: Optional[str] = None
