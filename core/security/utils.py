"""Security helpers."""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    """UTC now."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch."""
    return (as_utc(value) - EPOCH) // timedelta(milliseconds=1)
