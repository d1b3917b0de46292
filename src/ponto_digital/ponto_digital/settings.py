from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from types import ModuleType

from .common.datetime_utils import get_zone
from .core.constants import DEFAULT_EXPECTED_DAILY_MINUTES, DEFAULT_TIMEZONE
from .core.enums import ExpectedMinutesMode, NegativeDurationPolicy, UnpairedEntryPolicy


@dataclass(frozen=True)
class AppSettings:
    """Typed view of the policy knobs read from the settings module."""

    timezone: str = DEFAULT_TIMEZONE
    public_base_url: str = "http://localhost:5000"
    expected_daily_minutes: int = DEFAULT_EXPECTED_DAILY_MINUTES
    expected_minutes_mode: ExpectedMinutesMode = ExpectedMinutesMode.FIXED
    unpaired_policy: UnpairedEntryPolicy = UnpairedEntryPolicy.ZERO
    negative_policy: NegativeDurationPolicy = NegativeDurationPolicy.ALLOW
    tz: tzinfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tz", get_zone(self.timezone))

    @classmethod
    def from_module(cls, settings: ModuleType) -> "AppSettings":
        return cls(
            timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
            public_base_url=str(getattr(settings, "PUBLIC_BASE_URL", "http://localhost:5000")),
            expected_daily_minutes=int(getattr(settings, "EXPECTED_DAILY_MINUTES", DEFAULT_EXPECTED_DAILY_MINUTES)),
            expected_minutes_mode=ExpectedMinutesMode(getattr(settings, "EXPECTED_MINUTES_POLICY", "fixed")),
            unpaired_policy=UnpairedEntryPolicy(getattr(settings, "UNPAIRED_ENTRY_POLICY", "zero")),
            negative_policy=NegativeDurationPolicy(getattr(settings, "NEGATIVE_DURATION_POLICY", "allow")),
        )
