"""
Expiry handling for signed envelopes.

Relative expiries use the compact duration grammar of the ``ms`` package
(``"1h"``, ``"-1s"``, ``"2 days"``, ``"1.5h"``), so tokens minted by other
implementations of the format can be configured with the same strings.
Absolute deadlines are stored in the envelope as JavaScript-style ISO-8601
strings (``2024-01-15T10:30:00.250Z``).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

# =============================================================================
# Duration grammar
# =============================================================================

SECOND_MS = 1000.0
MINUTE_MS = SECOND_MS * 60
HOUR_MS = MINUTE_MS * 60
DAY_MS = HOUR_MS * 24
WEEK_MS = DAY_MS * 7
YEAR_MS = DAY_MS * 365.25

MAX_DURATION_LENGTH = 100

_DURATION_RE = re.compile(
    r"^(?P<value>-?(?:\d+)?\.?\d+) *"
    r"(?P<unit>milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m"
    r"|hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?$",
    re.IGNORECASE,
)

_UNIT_MS = {
    "y": YEAR_MS,
    "w": WEEK_MS,
    "d": DAY_MS,
    "h": HOUR_MS,
    "m": MINUTE_MS,
    "s": SECOND_MS,
    "ms": 1.0,
}


def _unit_key(unit: str) -> str:
    unit = unit.lower()
    if unit.startswith(("ms", "millisecond")):
        return "ms"
    return unit[0]


def parse_duration(value: str | int | float | timedelta) -> float:
    """Convert a duration into milliseconds.

    Args:
        value: Milliseconds as a number, a ``timedelta``, or a duration
            string such as ``"1h"``, ``"-1s"`` or ``"2 days"``. A bare
            numeric string is read as milliseconds.

    Returns:
        The duration in milliseconds (may be negative).

    Raises:
        ValueError: If the string does not match the duration grammar.
        TypeError: If the value is of an unsupported type.
    """
    if isinstance(value, bool):
        raise TypeError("Duration cannot be a boolean")
    if isinstance(value, timedelta):
        return value.total_seconds() * SECOND_MS
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise TypeError(f"Unsupported duration type: {type(value).__name__}")

    if len(value) > MAX_DURATION_LENGTH:
        raise ValueError(f"Duration string too long: {len(value)} > {MAX_DURATION_LENGTH}")

    match = _DURATION_RE.match(value.strip())
    if match is None:
        raise ValueError(f'Invalid duration expression "{value}"')

    amount = float(match.group("value"))
    unit = match.group("unit")
    if unit is None:
        return amount
    return amount * _UNIT_MS[_unit_key(unit)]


# =============================================================================
# Absolute deadlines
# =============================================================================


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_expiry(
    expires_in: str | int | float | timedelta | datetime | None,
    now: datetime | None = None,
) -> datetime | None:
    """Resolve an expiry option into an absolute UTC deadline.

    Falsy values (``None``, ``""``, ``0``) mean "never expires".

    Args:
        expires_in: Relative duration (see :func:`parse_duration`) or an
            absolute ``datetime``.
        now: Reference time, defaults to the current UTC time.

    Returns:
        The deadline, or ``None`` when no expiry was requested.

    Raises:
        ValueError: If the duration is invalid or the deadline falls outside
            the representable date range.
    """
    if not expires_in:
        return None
    if isinstance(expires_in, datetime):
        return _as_utc(expires_in)

    reference = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    try:
        return reference + timedelta(milliseconds=parse_duration(expires_in))
    except OverflowError as e:
        raise ValueError(f'Expiry "{expires_in}" is out of range') from e


def to_iso_string(value: datetime | date) -> str:
    """Format a date like JavaScript's ``Date.prototype.toISOString``."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    moment = _as_utc(value)
    # Years below 1000 keep four digits
    return f"{moment.year:04d}-{moment:%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def parse_iso_string(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Returns:
        The parsed datetime, or ``None`` if ``value`` is not a valid timestamp.
    """
    if not isinstance(value, str):
        return None
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None
