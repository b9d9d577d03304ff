"""Datetime utilities for parsing user input and rendering task times.

Input formats are fixed: a command either matches them exactly or is
rejected. All datetimes are naive and interpreted as local wall-clock time.
"""

from datetime import datetime
from typing import Optional


# Formats accepted on the command line
DATETIME_FORMAT_INPUT = "%Y-%m-%d %H%M"
DATE_FORMAT_INPUT = "%d-%m-%Y"

# Formats used when showing tasks and expenses
DATETIME_FORMAT_OUTPUT = "%b %d %Y, %I:%M %p"
DATE_FORMAT_OUTPUT = "%d %b %Y"


def parse_datetime_string(text: str, fmt: str = DATETIME_FORMAT_INPUT) -> datetime:
    """Parse a date/time string against a fixed format.
    
    Args:
        text: Raw text taken from the command line
        fmt: strptime format the text must match
        
    Returns:
        Naive datetime
        
    Raises:
        ValueError: If the text does not match the format
    """
    return datetime.strptime(text.strip(), fmt)


def parse_date_string(text: str, fmt: str = DATE_FORMAT_INPUT) -> datetime:
    """Parse a date-only string; the time component is midnight."""
    return datetime.strptime(text.strip(), fmt)


def format_datetime(dt: datetime, fmt: str = DATETIME_FORMAT_OUTPUT) -> str:
    """Render a datetime for display."""
    return dt.strftime(fmt)


def to_storage_string(dt: Optional[datetime]) -> Optional[str]:
    """Convert a datetime to the ISO 8601 string written to the task file.

    The year is always four digits, so years before 1000 survive a reload.
    """
    if dt is None:
        return None
    return dt.isoformat(timespec="seconds")


def from_storage_string(text: Optional[str]) -> Optional[datetime]:
    """Parse a datetime written by to_storage_string.
    
    Returns None for empty input. Raises ValueError on malformed input.
    """
    if not text:
        return None
    return datetime.fromisoformat(text)
