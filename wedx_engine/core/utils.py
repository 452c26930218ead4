"""
Date, time and identifier helpers shared by the ritual engines.

Wedding dates arrive as ISO strings (``2026-06-15`` or a full timestamp such
as ``2026-06-15T00:00:00.000Z``); event times arrive as ``HH:MM`` strings.
Date-only and naive values are interpreted as UTC.
"""

import random
import string
import time
from datetime import date, datetime, timedelta, timezone
from typing import Optional

_BASE36_ALPHABET = string.digits + string.ascii_lowercase

MINUTES_PER_DAY = 24 * 60
SECONDS_PER_DAY = 24 * 60 * 60


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_id(prefix: str = "id") -> str:
    """
    Generate a unique identifier of the form ``{prefix}-{timestamp36}-{random}``.

    Args:
        prefix: Identifier prefix (e.g. "ritual-task", "resolution")

    Returns:
        str: Fresh identifier
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=9))
    return f"{prefix}-{timestamp}-{suffix}"


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(moment: Optional[datetime] = None) -> datetime:
    """
    Return ``moment`` as an aware UTC datetime, or the current time if omitted.

    Naive values are interpreted as UTC.
    """
    if moment is None:
        return utc_now()
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO date or datetime string into an aware UTC datetime.

    Raises:
        ValueError: If the string is not a valid ISO date/datetime
    """
    if not value or not value.strip():
        raise ValueError("Date string is empty")

    return as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def calendar_date(value: str) -> str:
    """
    Normalize an event date string to ``YYYY-MM-DD``.

    Strings that are not ISO dates are returned unchanged so they still
    group with identical strings.
    """
    try:
        return parse_iso_datetime(value).date().isoformat()
    except ValueError:
        return value


def subtract_days(moment: datetime, days: int) -> datetime:
    """Return ``moment`` shifted ``days`` calendar days earlier."""
    return moment - timedelta(days=days)


def parse_time_to_minutes(value: str) -> int:
    """
    Convert ``HH:MM`` (or ``HH:MM:SS``) to minutes after midnight.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            parsed = datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
        return parsed.hour * 60 + parsed.minute + round(parsed.second / 60)
    raise ValueError(f"Invalid time of day: {value!r}")


def format_minutes(minutes: int) -> str:
    """Format minutes after midnight as ``HH:MM``."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_ranges_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Check if two time ranges overlap (touching ranges do not overlap)."""
    return (
        parse_time_to_minutes(start1) < parse_time_to_minutes(end2)
        and parse_time_to_minutes(end1) > parse_time_to_minutes(start2)
    )


def calculate_overlap_duration(start1: str, end1: str, start2: str, end2: str) -> int:
    """Calculate the overlap of two time ranges in minutes (0 if disjoint)."""
    overlap_start = max(parse_time_to_minutes(start1), parse_time_to_minutes(start2))
    overlap_end = min(parse_time_to_minutes(end1), parse_time_to_minutes(end2))

    if overlap_start >= overlap_end:
        return 0
    return overlap_end - overlap_start


def format_date_for_display(value: str) -> str:
    """
    Format a date string as e.g. ``Saturday, June 15, 2024``.

    Unparseable strings are returned unchanged.
    """
    try:
        parsed: date = parse_iso_datetime(value).date()
    except ValueError:
        return value
    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"


def days_until(target: datetime, now: Optional[datetime] = None) -> float:
    """Fractional days from ``now`` until ``target`` (negative if past)."""
    reference = as_utc(now)
    return (as_utc(target) - reference).total_seconds() / SECONDS_PER_DAY
