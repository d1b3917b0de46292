from __future__ import annotations

from datetime import date

from ...core.constants import DEFAULT_EXPECTED_DAILY_MINUTES
from .base import ExpectedMinutesPolicy


class FixedExpectedMinutes(ExpectedMinutesPolicy):
    """Same quota for everyone, every day (default: 8h)."""

    def __init__(self, minutes: int = DEFAULT_EXPECTED_DAILY_MINUTES):
        if minutes < 0:
            raise ValueError("expected minutes must be >= 0")
        self.minutes = int(minutes)

    def expected_minutes(self, user_id: str, work_date: date) -> int:
        return self.minutes
