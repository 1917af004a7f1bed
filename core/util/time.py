"""Timestamp helpers."""
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch, used in export filenames."""
    return int(dt.timestamp() * 1000)


def fmt_date(dt: datetime) -> str:
    """Day/month/year display format used on exported documents."""
    return dt.strftime("%d/%m/%Y")
