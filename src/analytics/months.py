"""Calendar-month keys ("YYYY-MM") used to bucket demands and deliveries.

Completion instants are converted into an explicit timezone before their
month is taken. Naive datetimes are treated as UTC.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo

from src.exceptions import InvalidMonthKeyError

UTC = timezone.utc

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month_key(key: str) -> tuple[int, int]:
    """Parse "YYYY-MM" into (year, month) with month in 1..12."""
    match = _MONTH_KEY_RE.match(key) if isinstance(key, str) else None
    if not match:
        raise InvalidMonthKeyError(f"Invalid month key: {key!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthKeyError(f"Invalid month key: {key!r}")
    return year, month


def format_month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def to_local(instant: datetime, tz: tzinfo = UTC) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(tz)


def month_key_of(instant: datetime, tz: tzinfo = UTC) -> str:
    """Month key of an instant as seen in ``tz``."""
    local = to_local(instant, tz)
    return format_month_key(local.year, local.month)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by ``delta`` months across year boundaries."""
    shifted_year, month_index = divmod(year * 12 + (month - 1) + delta, 12)
    return shifted_year, month_index + 1


def month_window(now: datetime, months: int, tz: tzinfo = UTC) -> list[str]:
    """Month keys of the ``months`` months ending at ``now``, oldest first."""
    local = to_local(now, tz)
    return [
        format_month_key(*shift_month(local.year, local.month, -offset))
        for offset in range(months - 1, -1, -1)
    ]


def month_label(key: str) -> str:
    """Short month name for a key ("2024-07" -> "Jul")."""
    _, month = parse_month_key(key)
    return MONTH_LABELS[month - 1]
