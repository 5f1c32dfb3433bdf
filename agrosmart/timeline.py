"""Sowing-to-harvest countdown metrics.

All arithmetic is done in milliseconds since the epoch.  Calendar dates are
taken as midnight UTC, naive datetimes as UTC.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone

DAY_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class CropProgress:
    percent: float  # 0..100
    days_left: int  # >= 0


def to_epoch_ms(value: date | datetime | str) -> float:
    """Convert a date, datetime or ISO string to epoch milliseconds."""
    if isinstance(value, str):
        value = value.strip()
        value = date.fromisoformat(value) if len(value) == 10 else datetime.fromisoformat(value)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
    else:
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    return value.timestamp() * 1000


def days_remaining(harvest_date, now) -> int:
    remaining = math.ceil((to_epoch_ms(harvest_date) - to_epoch_ms(now)) / DAY_MS)
    return max(0, remaining)


def progress(sowing_date, harvest_date, now) -> CropProgress:
    """
    How far a crop is through its season.

    The window length is floored at 1 ms so equal or inverted dates never
    divide by zero; percent is clamped to [0, 100] and days_left to >= 0.
    """
    start = to_epoch_ms(sowing_date)
    end = to_epoch_ms(harvest_date)
    current = to_epoch_ms(now)

    total = max(1.0, end - start)
    elapsed = max(0.0, current - start)
    percent = min(100.0, elapsed / total * 100)

    return CropProgress(percent=percent, days_left=days_remaining(harvest_date, now))
