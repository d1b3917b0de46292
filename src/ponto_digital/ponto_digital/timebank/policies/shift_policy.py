from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from ...core.constants import DEFAULT_EXPECTED_DAILY_MINUTES
from ...users.model import Employee
from .base import ExpectedMinutesPolicy


class ShiftWindowExpectedMinutes(ExpectedMinutesPolicy):
    """Quota from each employee's ``work_start_time``..``work_end_time``.

    Employees without a configured window fall back to ``default_minutes``.
    """

    def __init__(self, employees: Iterable[Employee], *, default_minutes: int = DEFAULT_EXPECTED_DAILY_MINUTES):
        self.default_minutes = int(default_minutes)
        self._by_user: dict[str, int] = {}
        for emp in employees:
            if emp.work_start_time and emp.work_end_time:
                day = date.min
                span = datetime.combine(day, emp.work_end_time) - datetime.combine(day, emp.work_start_time)
                self._by_user[emp.user_id] = max(int(span.total_seconds() // 60), 0)

    def expected_minutes(self, user_id: str, work_date: date) -> int:
        return self._by_user.get(user_id, self.default_minutes)
