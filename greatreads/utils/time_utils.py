"""
Time and reading-duration utilities.

Key concepts:
  - Absolute instants: every timestamp that crosses the core boundary is an
    ISO-8601 instant. Naive datetimes are interpreted as UTC so that burst
    windows always compare absolute time points.
  - Reading estimates: the page-based reading-time helpers used by the book
    detail and reading-log views.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

# Words per page and words per minute used by the reading-time estimate.
WORDS_PER_PAGE = 250
DEFAULT_READING_SPEED_WPM = 250


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC; aware datetimes are
    converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def seconds_between(earlier: datetime, later: datetime) -> float:
    """Return ``later - earlier`` in seconds (negative if ``later`` is earlier)."""
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds()


def estimate_reading_time_minutes(
    pages: int,
    reading_speed: int = DEFAULT_READING_SPEED_WPM,
) -> int:
    """Estimate minutes needed to read ``pages`` pages.

    Assumes ~250 words per page.

    Args:
        pages:         Number of pages left to read.
        reading_speed: Reading speed in words per minute.

    Returns:
        Whole minutes, rounded up.
    """
    return math.ceil((pages * WORDS_PER_PAGE) / reading_speed)


def calculate_reading_days(pages: int, pages_per_day: int) -> int:
    """Days needed to read ``pages`` at ``pages_per_day``; 0 when pace is unknown."""
    if pages_per_day == 0:
        return 0
    return math.ceil(pages / pages_per_day)
