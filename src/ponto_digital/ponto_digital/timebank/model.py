from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import RecordType
from ..records.model import AttendanceEvent


@dataclass(frozen=True)
class ClassifiedEvent:
    """An event plus the entrada/saída label derived from its position in the day."""

    event: AttendanceEvent
    record_type: RecordType

    @property
    def timestamp(self) -> datetime:
        return self.event.timestamp


@dataclass(frozen=True)
class DailyWorkSummary:
    """One (employee, calendar day) with at least one event.

    ``records`` keeps the chronological order; a trailing entrada without a
    saída is present but contributes nothing to ``total_worked_minutes``.
    """

    work_date: date
    user_id: str
    user_name: str
    records: tuple[ClassifiedEvent, ...]
    total_worked_minutes: int
    expected_minutes: int
    balance_minutes: int
    pending: bool = False


@dataclass(frozen=True)
class BankOfHoursTotal:
    user_id: str
    user_name: str
    total_balance_minutes: int
    days: int = 0
