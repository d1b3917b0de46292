from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from ..core.constants import DEFAULT_EXPECTED_DAILY_MINUTES
from ..core.enums import ExpectedMinutesMode
from ..users.model import Employee
from .policies.base import ExpectedMinutesPolicy
from .policies.fixed_policy import FixedExpectedMinutes
from .policies.shift_policy import ShiftWindowExpectedMinutes


@dataclass
class ExpectedMinutesPolicyFactory:
    """Factory Pattern: choose the daily quota rule from configuration.

    ``fixed`` (default) ignores per-employee shift fields entirely.
    """

    mode: ExpectedMinutesMode = ExpectedMinutesMode.FIXED
    default_minutes: int = DEFAULT_EXPECTED_DAILY_MINUTES

    def build(self, employees: Callable[[], Iterable[Employee]]) -> ExpectedMinutesPolicy:
        if self.mode == ExpectedMinutesMode.SHIFT:
            return ShiftWindowExpectedMinutes(employees(), default_minutes=self.default_minutes)
        return FixedExpectedMinutes(self.default_minutes)
