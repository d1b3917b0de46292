from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import CSV_DATETIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp that carries an explicit offset.

    Naive timestamps are rejected: the calendar day of an event depends on it.
    """
    try:
        ts = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise ValidationError(f"Data/hora inválida: {value!r}") from None
    if ts.tzinfo is None:
        raise ValidationError(f"Data/hora sem fuso horário: {value!r}")
    return ts


def parse_local_datetime(value: str, tz: tzinfo) -> datetime:
    """Parse 'dd/MM/yyyy HH:mm:ss' (export format) as wall-clock time in ``tz``."""
    try:
        naive = datetime.strptime(value.strip(), CSV_DATETIME_FORMAT)
    except (AttributeError, ValueError):
        raise ValidationError(f"Data/hora inválida: {value!r}") from None
    return naive.replace(tzinfo=tz)


def get_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError) as e:
        raise ValidationError(f"Fuso horário desconhecido: {name!r}") from e


def local_date(ts: datetime, tz: tzinfo) -> date:
    return ts.astimezone(tz).date()


def format_local(ts: datetime, tz: tzinfo, fmt: str = CSV_DATETIME_FORMAT) -> str:
    return ts.astimezone(tz).strftime(fmt)


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def local_day_bounds(start: Optional[date], end: Optional[date], tz: tzinfo) -> tuple[Optional[datetime], Optional[datetime]]:
    """Instant range ``[start 00:00, end+1 00:00)`` in ``tz`` for a date filter."""
    lo = datetime.combine(start, time.min, tzinfo=tz) if start else None
    hi = datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz) if end else None
    if lo and hi and lo >= hi:
        raise ValidationError("Data inicial deve ser anterior ou igual à final")
    return lo, hi
