from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from ..core.exceptions import ValidationError


def parse_iso_datetime(value: str, field_name: str = "Fecha") -> datetime:
    """Parse an ISO 8601 timestamp (``2024-12-25T08:00:00`` or with ``Z``/offset).

    Aware values are converted to naive UTC so they compare with stored timestamps.
    """

    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} inválida (ISO 8601)")
    raw = (value or "").strip()
    if not raw:
        raise ValidationError(f"{field_name} es obligatoria")
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"{field_name} inválida (ISO 8601)")

    if parsed.tzinfo is not None:
        parsed = _to_naive_utc(parsed)
    return parsed


def _to_naive_utc(value: datetime) -> datetime:
    offset = value.utcoffset() or timedelta(0)
    return (value - offset).replace(tzinfo=None)


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), datetime.min.time())


def start_of_week(value: datetime) -> datetime:
    """Monday 00:00 of the ISO week containing ``value``."""
    monday: date = value.date() - timedelta(days=value.weekday())
    return datetime.combine(monday, datetime.min.time())


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def now_utc() -> datetime:
    """Current time as naive UTC, the same basis as parsed and stored timestamps.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
