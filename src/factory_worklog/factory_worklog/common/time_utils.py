from __future__ import annotations

import random
import string
import time as _time
from datetime import date
from typing import Tuple

import jdatetime

from ..core.constants import DATE_DISPLAY_FORMAT

MINUTES_PER_DAY = 24 * 60

AM = "قبل از ظهر"
PM = "بعد از ظهر"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def minutes_since_midnight(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight; empty or invalid input is 0."""
    if not value:
        return 0
    try:
        hours, minutes = (int(p) for p in value.strip().split(":")[:2])
    except (ValueError, AttributeError):
        return 0
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return 0
    return hours * 60 + minutes


def format_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def duration(start: str, end: str) -> str:
    """Elapsed time between two "HH:MM" values as "HH:MM".

    An end earlier than the start is always read as crossing midnight.
    The result has no day component.
    """
    if not start or not end:
        return "00:00"

    start_min = minutes_since_midnight(start)
    end_min = minutes_since_midnight(end)
    if end_min < start_min:
        end_min += MINUTES_PER_DAY

    return format_minutes((end_min - start_min) % MINUTES_PER_DAY)


def to_12_hour(value: str) -> Tuple[int, int, str]:
    """Split "HH:MM" into (hour 1-12, minute, period) for the AM/PM picker."""
    if not value:
        return 8, 0, AM
    total = minutes_since_midnight(value)
    hours, minutes = divmod(total, 60)
    period = PM if hours >= 12 else AM
    return hours % 12 or 12, minutes, period


def to_24_hour(hour: int, minute: int, period: str) -> str:
    h24 = int(hour)
    if period == PM and h24 < 12:
        h24 += 12
    if period == AM and h24 == 12:
        h24 = 0
    return f"{h24:02d}:{int(minute):02d}"


def generate_id(length: int = 9) -> str:
    """Short opaque identifier, unique enough within a session."""
    return "".join(random.choices(_ID_ALPHABET, k=length))


def now_millis() -> int:
    """Current epoch time in milliseconds.

    Note: Wrapped so tests can patch/mock easier.
    """
    return int(_time.time() * 1000)


def today_display() -> str:
    """Today on the Persian (Jalali) calendar, e.g. "1403/02/01"."""
    return jdatetime.date.fromgregorian(date=date.today()).strftime(DATE_DISPLAY_FORMAT)
