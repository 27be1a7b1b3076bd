"""Date key and time label formatting shared by the planner and the views."""
import re
from datetime import date, datetime
from typing import Optional

MONTH_ABBREVIATIONS = [
    "", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
]
DAYS_OF_WEEK = ["SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"]

_TIME_LABEL_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")


def format_date_key(value: date) -> str:
    """
    Format a calendar day as an unpadded ``day_month_year`` key.

    Example:
        >>> format_date_key(date(2025, 7, 9))
        '9_7_2025'
    """
    return f"{value.day}_{value.month}_{value.year}"


def format_time_label(value: datetime) -> str:
    """
    Format a wall-clock instant as ``HH:MM AM`` (12-hour, zero-padded).

    Locale-independent, unlike ``strftime('%p')``.

    Example:
        >>> format_time_label(datetime(2025, 7, 9, 18, 0))
        '06:00 PM'
    """
    period = "AM" if value.hour < 12 else "PM"
    hour_12 = value.hour % 12 or 12
    return f"{hour_12:02d}:{value.minute:02d} {period}"


def normalize_time_label(label: str) -> str:
    """Bring a time label to canonical form (``6:00 pm`` -> ``06:00 PM``)."""
    match = _TIME_LABEL_PATTERN.match(label)
    if not match:
        return label.strip().upper()
    hour, minute, period = match.groups()
    return f"{int(hour):02d}:{minute} {period.upper()}"


def parse_date_key(date_key: str) -> Optional[date]:
    """Parse a ``day_month_year`` key, returning None when malformed."""
    try:
        day, month, year = (int(part) for part in date_key.split("_"))
        return date(year, month, day)
    except ValueError:
        return None


def slot_date_format(date_key: str) -> str:
    """Render ``9_7_2025`` as ``9 Jul 2025``."""
    day, month, year = date_key.split("_")
    return f"{day} {MONTH_ABBREVIATIONS[int(month)]} {year}"


def weekday_abbreviation(value: date) -> str:
    """Sunday-first three letter weekday (``SUN`` .. ``SAT``)."""
    # date.weekday() is Monday=0
    return DAYS_OF_WEEK[(value.weekday() + 1) % 7]


def format_fee(amount: float) -> str:
    """Whole fees without decimals (``50``), others with two (``49.50``)."""
    return str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"
