"""
Date display helpers for saved recipes.

All output is rendered in the viewer's local timezone (or an explicit tzinfo)
using en-US style formats.
"""

import math
from datetime import datetime, timezone, tzinfo
from typing import Optional, Union

from chef.models import DateInfo

HOURS_PER_DAY = 24
HOURS_PER_WEEK = 168


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO-8601 instant into an aware datetime.

    Accepts a trailing "Z" (as written by browsers) and treats naive values as UTC.

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso(value: datetime) -> str:
    return parse_timestamp(value).astimezone(timezone.utc).isoformat()


def _localize(dt: datetime, tz: Optional[tzinfo]) -> datetime:
    return dt.astimezone(tz) if tz is not None else dt.astimezone()


def format_time(dt: datetime) -> str:
    return dt.strftime("%I:%M %p")


def format_date(dt: datetime) -> str:
    return f"{dt.month}/{dt.day}/{dt.year}"


def format_full_date_time(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    return f"{format_date(dt)}, {hour}:{dt.strftime('%M:%S %p')}"


def format_relative(
    value: Union[str, datetime],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """
    Short label for a timestamp relative to now.

    - under 24 hours ago: time of day ("02:30 PM")
    - under 7 days ago: short weekday and time ("Mon 02:30 PM")
    - otherwise: short month and day ("Oct 5")
    """
    dt = parse_timestamp(value)
    now = parse_timestamp(now) if now is not None else utc_now()
    elapsed_hours = math.floor((now - dt).total_seconds() / 3600)

    local = _localize(dt, tz)
    if elapsed_hours < HOURS_PER_DAY:
        return format_time(local)
    if elapsed_hours < HOURS_PER_WEEK:
        return f"{local.strftime('%a')} {format_time(local)}"
    return f"{local.strftime('%b')} {local.day}"


def get_date_info(
    value: Union[str, datetime],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> DateInfo:
    """
    Compute all display fields for a creation timestamp.

    Args:
        value: Creation instant (ISO string or datetime)
        now: Reference "now" for the relative label (defaults to current UTC time)
        tz: Timezone to render in (defaults to the local timezone)

    Returns:
        DateInfo with date, time, full date-time and relative label
    """
    local = _localize(parse_timestamp(value), tz)
    return DateInfo(
        date=format_date(local),
        time=format_time(local),
        full_date_time=format_full_date_time(local),
        relative_time=format_relative(value, now=now, tz=tz),
    )
