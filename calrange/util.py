"""Utility constants and helpers for calrange.

Time-of-day arithmetic works on integer microseconds since midnight, the
resolution of ``datetime.time``.
"""

from datetime import time, timedelta

# Time unit constants (all values in microseconds)
MICROSECOND = 1
SECOND = 1_000_000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# Sentinel bounds of the time-of-day domain
MIDNIGHT = time.min
LAST_INSTANT = time.max


def time_to_offset(value: time) -> int:
    """Microseconds elapsed since midnight."""
    return (
        value.hour * HOUR
        + value.minute * MINUTE
        + value.second * SECOND
        + value.microsecond
    )


def offset_to_time(offset: int) -> time:
    """Clock reading ``offset`` microseconds after midnight, wrapping daily."""
    offset %= DAY
    hours, offset = divmod(offset, HOUR)
    minutes, offset = divmod(offset, MINUTE)
    seconds, microseconds = divmod(offset, SECOND)
    return time(hours, minutes, seconds, microseconds)


def offset_to_timedelta(offset: int) -> timedelta:
    return timedelta(microseconds=offset)
