"""Normalization utilities for minutes file names and meeting dates.

Minutes files are named after the meeting date, optionally followed by a
task force suffix: ``2024-03-12.html``, ``2024-03-12-f2f.html``.
Functions here return None for names that do not follow that convention
instead of raising.
"""

import re
from datetime import date
from typing import Optional

from dateutil import parser as dateutil_parser

_FILE_NAME_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:-(.*))?$")


def file_stem(file_name: str) -> str:
    """Return the portion of a file name before its first "."."""
    return file_name.split(".")[0]


def parse_minutes_date(file_name: str) -> Optional[date]:
    """Parse the meeting date from the leading part of a minutes file name.

    Examples:
        "2024-03-12.html" -> date(2024, 3, 12)
        "2024-03-12-f2f.html" -> date(2024, 3, 12)
        "index.html" -> None
    """
    match = _FILE_NAME_PATTERN.match(file_stem(file_name))
    if not match:
        return None
    try:
        return dateutil_parser.isoparse(match.group(1)).date()
    except ValueError:
        return None


def parse_task_force(file_name: str) -> str:
    """Return the task force suffix of a minutes file name.

    The suffix is whatever follows the date and a dash in the file stem;
    minutes of the main group have no suffix and map to "".
    """
    match = _FILE_NAME_PATTERN.match(file_stem(file_name))
    if not match or not match.group(2):
        return ""
    return match.group(2)


def format_meeting_date(value: date) -> str:
    """Format a meeting date the way the generated pages display it.

    Example: date(2024, 3, 12) -> "Tue Mar 12 2024"
    """
    return value.strftime("%a %b %d %Y")
