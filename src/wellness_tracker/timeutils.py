"""Time helpers shared by services and storage adapters."""

from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND = timedelta(milliseconds=1)


def utc_now() -> datetime:
    """Return the current UTC time truncated to whole milliseconds."""
    now = datetime.now(tz=UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_millis(value: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return (value - EPOCH) // _MILLISECOND


def from_millis(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=value)


def duration_to_millis(value: timedelta) -> int:
    return value // _MILLISECOND


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Return a zone for an IANA name, or None for the process local zone."""
    if name is None:
        return None
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def to_local(value: datetime, tz: tzinfo | None = None) -> datetime:
    """Project an instant onto local calendar fields."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(tz)
