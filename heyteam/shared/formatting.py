"""Display formatting for job dates and times"""

from datetime import datetime


def format_time(value: datetime) -> str:
    """12-hour clock without a leading zero, e.g. '9:05 AM'"""
    return value.strftime("%I:%M %p").lstrip("0")


def format_job_range(start: datetime, end: datetime) -> str:
    """Roster header range, e.g. 'Mar 4, 9:00 AM - 5:00 PM'"""
    return f"{start.strftime('%b')} {start.day}, {format_time(start)} - {format_time(end)}"


def format_long_date(value: datetime) -> str:
    """Invitation date, e.g. 'Tuesday, March 4, 2025'"""
    return f"{value.strftime('%A, %B')} {value.day}, {value.year}"


def format_timestamp(value: datetime) -> str:
    """Message timestamp, e.g. 'Mar 4, 2025 9:00 AM'"""
    return f"{value.strftime('%b')} {value.day}, {value.year} {format_time(value)}"


def profile_initial(first_name: str) -> str:
    return (first_name[:1] or "A").upper()
