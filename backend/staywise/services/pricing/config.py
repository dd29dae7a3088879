"""Pricing engine configuration: multipliers, windows and confidence scoring."""

from dataclasses import dataclass, field
from decimal import Decimal

from staywise.config import Settings, settings

# (month, day) pairs. Fixed-date holidays only.
DEFAULT_HOLIDAYS: tuple[tuple[int, int], ...] = (
    (1, 1),    # New Year's Day
    (7, 4),    # Independence Day
    (10, 31),  # Halloween
    (12, 24),  # Christmas Eve
    (12, 25),  # Christmas Day
    (12, 31),  # New Year's Eve
)


@dataclass(frozen=True)
class Multipliers:
    """Multiplicative adjustments applied to the base nightly price."""
    weekend: Decimal = Decimal("1.25")
    holiday: Decimal = Decimal("1.15")
    last_minute: Decimal = Decimal("0.90")
    summer: Decimal = Decimal("1.10")
    winter: Decimal = Decimal("0.95")


@dataclass(frozen=True)
class Seasons:
    """Inclusive month sets for the seasonal rules."""
    summer_months: frozenset[int] = frozenset({6, 7, 8, 9})
    winter_months: frozenset[int] = frozenset({12, 1, 2})


@dataclass(frozen=True)
class ConfidenceWeights:
    """Heuristic confidence score (not a probability). Scale 0-100."""
    base: int = 75
    weekend: int = 15
    holiday: int = 10
    seasonal: int = 5
    last_minute: int = -10
    multi_factor: int = 5       # applied when more than multi_factor_threshold factors
    multi_factor_threshold: int = 2
    floor: int = 60
    ceiling: int = 95


@dataclass(frozen=True)
class PricingConfig:
    horizon_days: int = 14
    last_minute_days: int = 3
    max_suggestions: int = 10
    weekend_days: frozenset[int] = frozenset({4, 5})  # date.weekday(): Friday, Saturday
    holidays: frozenset[tuple[int, int]] = frozenset(DEFAULT_HOLIDAYS)
    winter_discount_enabled: bool = True
    multi_factor_bonus_enabled: bool = True
    multipliers: Multipliers = field(default_factory=Multipliers)
    seasons: Seasons = field(default_factory=Seasons)
    confidence: ConfidenceWeights = field(default_factory=ConfidenceWeights)

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "PricingConfig":
        source = source or settings
        return cls(
            horizon_days=source.pricing_horizon_days,
            last_minute_days=source.pricing_last_minute_days,
            max_suggestions=source.pricing_max_suggestions,
            holidays=frozenset(source.holiday_list),
            winter_discount_enabled=source.pricing_winter_discount_enabled,
            multi_factor_bonus_enabled=source.pricing_multi_factor_bonus_enabled,
        )
