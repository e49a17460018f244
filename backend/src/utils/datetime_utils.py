"""
Datetime utilities for consistent handling across the application.

Timestamps are stored timezone-aware in UTC. Appointment dates and times are
plain calendar values (no timezone) exactly as the patient booked them.
"""

import logging
from datetime import datetime, timezone, date, time

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Get the current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


def parse_date_string(date_str: str) -> date:
    """
    Parse a date string in YYYY-MM-DD format.

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date format: {date_str} (expected YYYY-MM-DD)")


def parse_time_string(time_str: str) -> time:
    """
    Parse a time-of-day string in HH:MM:SS or HH:MM format.

    Appointment times keep second precision; HH:MM is normalized to HH:MM:00.

    Raises:
        ValueError: If the string matches neither format
    """
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(time_str, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time format: {time_str} (expected HH:MM:SS)")
