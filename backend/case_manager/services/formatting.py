"""
Display helpers shared by the API responses.

Call log rows carry pre-formatted date and time strings so that every client
shows the same values, e.g. ``10/19/2026`` and ``4:05 pm``.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from case_manager.config import get_settings


def _localize(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were stored as UTC
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(ZoneInfo(get_settings().display_timezone))


def display_date(ts: datetime) -> str:
    """Format a timestamp as MM/DD/YYYY in the display time zone."""
    return _localize(ts).strftime("%m/%d/%Y")


def display_time(ts: datetime) -> str:
    """Format a timestamp as a 12-hour clock time, e.g. ``9:07 am``."""
    local = _localize(ts)
    hour = local.hour % 12 or 12
    meridian = "am" if local.hour < 12 else "pm"
    return f"{hour}:{local.minute:02d} {meridian}"


def normalize_phone(phone: str) -> Optional[str]:
    """
    Normalize a US phone number to XXX-XXX-XXXX.

    Returns None when the input does not hold exactly ten digits
    (an optional leading country code 1 is dropped).
    """
    digits = "".join(c for c in phone if c.isdigit())
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10:
        return None
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
