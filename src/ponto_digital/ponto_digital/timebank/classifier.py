"""Entrada/saída inference and bank-of-hours arithmetic.

Every function here is pure: events in, fresh values out. Records are assumed
to be validated already (timezone-aware timestamps, non-empty user id).

Rules, per (employee, local calendar day):

* events are sorted by timestamp (record id breaks ties) and labelled by
  position: even index -> entrada, odd index -> saída;
* consecutive (entrada, saída) pairs add ``floor(minutes)`` to the day;
* a trailing entrada without saída adds nothing;
* balance = worked - expected.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import local_date
from ..core.constants import UNKNOWN_USER_NAME
from ..core.enums import NegativeDurationPolicy, RecordType, UnpairedEntryPolicy
from ..records.model import AttendanceEvent
from .model import BankOfHoursTotal, ClassifiedEvent, DailyWorkSummary
from .policies.base import ExpectedMinutesPolicy
from .policies.fixed_policy import FixedExpectedMinutes

DayKey = tuple[str, date]


def _instant(ts: datetime) -> datetime:
    # Aware datetimes sharing one tzinfo compare and subtract by wall clock.
    return ts.astimezone(timezone.utc)


def group_by_user_day(events: Iterable[AttendanceEvent], tz: tzinfo) -> dict[DayKey, list[AttendanceEvent]]:
    groups: dict[DayKey, list[AttendanceEvent]] = defaultdict(list)
    for ev in events:
        groups[(ev.user_id, local_date(ev.timestamp, tz))].append(ev)
    return dict(groups)


def sort_events(events: Iterable[AttendanceEvent]) -> list[AttendanceEvent]:
    return sorted(events, key=lambda e: (_instant(e.timestamp), e.record_id))


def classify_day(events: Iterable[AttendanceEvent]) -> list[ClassifiedEvent]:
    """Label one day's events by parity; no other check is made."""
    return [
        ClassifiedEvent(event=ev, record_type=RecordType.ENTRADA if i % 2 == 0 else RecordType.SAIDA)
        for i, ev in enumerate(sort_events(events))
    ]


def pair_minutes(entrada: ClassifiedEvent, saida: ClassifiedEvent) -> int:
    """Whole minutes from entrada to saída, floored (negative if out of order)."""
    return int((_instant(saida.timestamp) - _instant(entrada.timestamp)).total_seconds() // 60)


def pair_day(
    classified: Sequence[ClassifiedEvent],
    *,
    negative_policy: NegativeDurationPolicy = NegativeDurationPolicy.ALLOW,
) -> tuple[int, bool]:
    """Return ``(worked_minutes, has_unpaired_entrada)`` for a classified day."""
    total = 0
    for i in range(0, len(classified) - 1, 2):
        minutes = pair_minutes(classified[i], classified[i + 1])
        if minutes < 0 and negative_policy == NegativeDurationPolicy.CLAMP:
            minutes = 0
        total += minutes
    return total, len(classified) % 2 == 1


def summarize_days(
    events: Iterable[AttendanceEvent],
    *,
    tz: tzinfo,
    user_names: Optional[Mapping[str, str]] = None,
    expected_policy: Optional[ExpectedMinutesPolicy] = None,
    unpaired_policy: UnpairedEntryPolicy = UnpairedEntryPolicy.ZERO,
    negative_policy: NegativeDurationPolicy = NegativeDurationPolicy.ALLOW,
) -> list[DailyWorkSummary]:
    """Build one summary per (employee, day), most recent day first.

    With ``UnpairedEntryPolicy.PENDING`` a day ending on an entrada is flagged
    ``pending`` and its balance is held at zero instead of being charged.
    """
    names = user_names or {}
    policy = expected_policy or FixedExpectedMinutes()

    summaries: list[DailyWorkSummary] = []
    for (user_id, work_date), day_events in group_by_user_day(events, tz).items():
        classified = classify_day(day_events)
        worked, unpaired = pair_day(classified, negative_policy=negative_policy)
        expected = policy.expected_minutes(user_id, work_date)

        pending = unpaired and unpaired_policy == UnpairedEntryPolicy.PENDING
        summaries.append(
            DailyWorkSummary(
                work_date=work_date,
                user_id=user_id,
                user_name=names.get(user_id) or UNKNOWN_USER_NAME,
                records=tuple(classified),
                total_worked_minutes=worked,
                expected_minutes=expected,
                balance_minutes=0 if pending else worked - expected,
                pending=pending,
            )
        )

    summaries.sort(key=lambda s: (s.user_name, s.user_id))
    summaries.sort(key=lambda s: s.work_date, reverse=True)
    return summaries


def bank_of_hours(summaries: Iterable[DailyWorkSummary]) -> list[BankOfHoursTotal]:
    """Sum daily balances per employee id (never merged by display name)."""
    totals: dict[str, int] = {}
    days: dict[str, int] = {}
    names: dict[str, str] = {}
    for s in summaries:
        totals[s.user_id] = totals.get(s.user_id, 0) + s.balance_minutes
        days[s.user_id] = days.get(s.user_id, 0) + 1
        names.setdefault(s.user_id, s.user_name)

    out = [
        BankOfHoursTotal(user_id=uid, user_name=names[uid], total_balance_minutes=total, days=days[uid])
        for uid, total in totals.items()
    ]
    out.sort(key=lambda b: (b.user_name, b.user_id))
    return out
