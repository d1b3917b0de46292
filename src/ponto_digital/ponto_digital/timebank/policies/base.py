from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class ExpectedMinutesPolicy(ABC):
    """How many minutes an employee is expected to work on a given day."""

    @abstractmethod
    def expected_minutes(self, user_id: str, work_date: date) -> int:
        raise NotImplementedError
