"""Shared validation utilities"""

from datetime import datetime
from typing import Optional

from ..errors import ValidationError

AVAILABILITY_STATUSES = ("confirmed", "maybe", "declined", "no_reply")


def is_valid_status(status: Optional[str]) -> bool:
    """Whether status is one of the four roster statuses"""
    return status in AVAILABILITY_STATUSES


def validate_status(status: Optional[str]) -> str:
    """
    Check a roster status before it is submitted.

    Raises:
        ValidationError: If status is not one of AVAILABILITY_STATUSES
    """
    if not is_valid_status(status):
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(AVAILABILITY_STATUSES)}"
        )
    return status


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim a free-text field, turning blanks into None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_fields(*values) -> None:
    """
    Ensure every required form value is present.

    Strings count as missing when blank after trimming.

    Raises:
        ValidationError: If any value is missing
    """
    for value in values:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("Please fill in all required fields")


def validate_time_range(start: datetime, end: datetime) -> None:
    """
    Ensure a job ends strictly after it starts.

    Raises:
        ValidationError: If end is not after start
    """
    if end <= start:
        raise ValidationError("End time must be after start time")
