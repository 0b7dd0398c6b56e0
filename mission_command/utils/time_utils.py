"""
Time helpers.

All timestamps in the package are timezone-aware UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone

_BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch for an aware datetime."""
    return int(moment.timestamp() * 1000)


def to_base36(value: int) -> str:
    """Encode a non-negative integer in upper-case base 36.

    Raises:
        ValueError: If ``value`` is negative.
    """
    if value < 0:
        raise ValueError(f"to_base36 expects a non-negative integer, got {value}.")
    if value == 0:
        return "0"

    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def format_utc_stamp(moment: datetime) -> str:
    """Compact UTC stamp for filenames, e.g. ``20261019T150000Z``."""
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
