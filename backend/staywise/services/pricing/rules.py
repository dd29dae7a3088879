"""Ordered adjustment rule table and its evaluation for one horizon date.

Rules are evaluated in table order against a baseline state. Each matching
rule multiplies the running price multiplier. A rule marked ``replaces``
resets the reasoning and factors to its own; any other rule appends its
fragment and factor tags to whatever is there, baseline included.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from staywise.services.pricing.config import PricingConfig
from staywise.services.pricing.horizon import DateCandidate

Impact = Literal["increase", "decrease", "maintain"]

BASELINE_REASON = "Standard pricing maintained"
BASELINE_FACTOR = "baseline"


@dataclass(frozen=True)
class AdjustmentRule:
    name: str
    applies: Callable[[DateCandidate], bool]
    multiplier: Decimal
    reason: str          # used when the rule replaces
    fragment: str        # appended to earlier reasoning as " + <fragment>"
    factors: tuple[str, ...]
    impact: Impact | None = None   # None leaves impact untouched
    impact_if_unset: bool = False  # only override impact while it is still "maintain"
    replaces: bool = False


@dataclass
class Adjustment:
    multiplier: Decimal = Decimal("1")
    reason: str = BASELINE_REASON
    factors: list[str] = field(default_factory=lambda: [BASELINE_FACTOR])
    impact: Impact = "maintain"
    applied: list[str] = field(default_factory=list)

    def apply(self, rule: AdjustmentRule) -> None:
        self.multiplier *= rule.multiplier
        if rule.replaces:
            self.reason = rule.reason
            self.factors = list(rule.factors)
        else:
            self.reason = f"{self.reason} + {rule.fragment}"
            self.factors.extend(f for f in rule.factors if f not in self.factors)
        if rule.impact is not None and (not rule.impact_if_unset or self.impact == "maintain"):
            self.impact = rule.impact
        self.applied.append(rule.name)


def build_rules(config: PricingConfig) -> list[AdjustmentRule]:
    """Build the rule table in priority order for the given configuration."""
    m = config.multipliers
    seasons = config.seasons

    rules = [
        AdjustmentRule(
            name="weekend",
            applies=lambda c: c.is_weekend,
            multiplier=m.weekend,
            reason="Weekend premium - higher leisure demand",
            fragment="weekend premium",
            factors=("weekend", "demand"),
            impact="increase",
            replaces=True,
        ),
        AdjustmentRule(
            name="holiday",
            applies=lambda c: c.is_holiday,
            multiplier=m.holiday,
            reason="Holiday period pricing",
            fragment="holiday period",
            factors=("holiday",),
            impact="increase",
        ),
        AdjustmentRule(
            name="last_minute",
            applies=lambda c: c.is_last_minute and not c.is_weekend and not c.is_holiday,
            multiplier=m.last_minute,
            reason="Last-minute discount to boost occupancy",
            fragment="last-minute discount",
            factors=("last_minute", "occupancy"),
            impact="decrease",
            replaces=True,
        ),
        AdjustmentRule(
            name="summer",
            applies=lambda c: c.month in seasons.summer_months,
            multiplier=m.summer,
            reason="Summer season adjustment",
            fragment="summer season adjustment",
            factors=("seasonal",),
        ),
    ]

    if config.winter_discount_enabled:
        rules.append(AdjustmentRule(
            name="winter",
            applies=lambda c: c.month in seasons.winter_months and not c.is_holiday,
            multiplier=m.winter,
            reason="Winter season discount",
            fragment="winter season discount",
            factors=("seasonal",),
            impact="decrease",
            impact_if_unset=True,
        ))

    return rules


def evaluate(candidate: DateCandidate, rules: list[AdjustmentRule]) -> Adjustment:
    adjustment = Adjustment()
    for rule in rules:
        if rule.applies(candidate):
            adjustment.apply(rule)
    return adjustment
