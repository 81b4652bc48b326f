from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2021-01-01T12:34:56Z
      - 2021-01-01T12:34:56.123Z
      - 2021-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # Python's fromisoformat doesn't accept 'Z' in 3.9/3.10, so normalize.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    if dt.tzinfo is None:
        raise ValueError("RFC3339 value must carry a UTC offset")
    return dt.astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    """
    Convert datetime to RFC3339 (UTC, with 'Z').

    Keeps microseconds if present.
    """
    s = as_utc(dt).isoformat(timespec="microseconds")
    return s.replace("+00:00", "Z")


def as_utc(dt: datetime) -> datetime:
    """
    Return dt as a tz-aware UTC datetime.

    The Dropbox SDK returns naive datetimes that are already in UTC, so naive
    values are tagged rather than converted.
    """
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
