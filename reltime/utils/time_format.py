"""Time utilities for relative time display: input normalization and unit selection"""
import math
from datetime import date, datetime, timezone
from typing import Tuple, Union

from dateutil import parser

from reltime.core.errors import InvalidDateError

DateInput = Union[datetime, date, int, float, str]

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

# Coarsest first; thresholds are average durations, not calendar arithmetic
UNITS: Tuple[Tuple[str, float], ...] = (
    ("year", 365 * DAY_MS),
    ("month", 365 / 12 * DAY_MS),
    ("week", 7 * DAY_MS),
    ("day", DAY_MS),
    ("hour", HOUR_MS),
    ("minute", MINUTE_MS),
    ("second", SECOND_MS),
)


def to_datetime(value: DateInput) -> datetime:
    """
    Normalize a date input to an aware UTC datetime

    Args:
        value: datetime (naive is taken as UTC), date, epoch milliseconds,
            or a date string in any format dateutil understands

    Returns:
        Aware datetime in UTC

    Raises:
        InvalidDateError: if the value cannot be read as a point in time
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    # bool is an int subclass but never a timestamp
    if isinstance(value, bool):
        raise InvalidDateError(value, "unsupported date type")

    if isinstance(value, (int, float)):
        return _from_epoch_ms(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidDateError(value)
        try:
            parsed = parser.parse(text)
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(value) from e
        return to_datetime(parsed)

    raise InvalidDateError(value, "unsupported date type")


def _from_epoch_ms(ms: float) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime"""
    if not math.isfinite(ms):
        raise InvalidDateError(ms, "non-finite timestamp")
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidDateError(ms, "timestamp out of range") from e


def elapsed_ms(target: datetime, now: datetime) -> float:
    """Signed milliseconds from now to target; negative means past"""
    return (target - now).total_seconds() * 1000


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero"""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def select_unit(elapsed: float) -> Tuple[str, Union[int, float]]:
    """
    Pick the coarsest unit whose threshold the delta reaches

    Args:
        elapsed: Signed delta in milliseconds

    Returns:
        (unit, signed rounded value), e.g. ("minute", -30); a past delta
        that rounds to zero gives -0.0 so it still reads as past
    """
    for unit, unit_ms in UNITS:
        if unit == "second" or abs(elapsed) >= unit_ms:
            value = round_half_away(elapsed / unit_ms)
            if value == 0 and elapsed < 0:
                return unit, -0.0
            return unit, value
    raise AssertionError("unreachable: 'second' always matches")
