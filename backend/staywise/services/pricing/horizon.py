"""Dated candidates the pricing rules are evaluated against."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from staywise.services.pricing.config import PricingConfig


@dataclass(frozen=True)
class DateCandidate:
    date: date
    offset: int  # 1 = tomorrow
    is_weekend: bool
    is_holiday: bool
    is_last_minute: bool

    @property
    def day_of_week(self) -> str:
        return calendar.day_name[self.date.weekday()]

    @property
    def month(self) -> int:
        return self.date.month


def build_horizon(today: date, config: PricingConfig) -> list[DateCandidate]:
    """Dates from tomorrow through today + horizon_days. Today itself is excluded."""
    candidates = []
    for offset in range(1, config.horizon_days + 1):
        d = today + timedelta(days=offset)
        candidates.append(DateCandidate(
            date=d,
            offset=offset,
            is_weekend=d.weekday() in config.weekend_days,
            is_holiday=(d.month, d.day) in config.holidays,
            is_last_minute=offset <= config.last_minute_days,
        ))
    return candidates
