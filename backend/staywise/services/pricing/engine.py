"""Pricing heuristic engine — per-date price suggestions from the rule table.

The engine is a pure function of (properties, today, config): no database
reads, no randomness, no clock reads once ``today`` is fixed. Same inputs
always give the same ranked output.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from staywise.data.currency import normalize_currency
from staywise.services.pricing.config import PricingConfig
from staywise.services.pricing.horizon import DateCandidate, build_horizon
from staywise.services.pricing.rules import AdjustmentRule, Impact, build_rules, evaluate

logger = logging.getLogger(__name__)

RULE_TYPES = ("weekend", "seasonal", "event", "demand", "occupancy")


def to_decimal(value: Any) -> Decimal | None:
    """Coerce a price-like value to Decimal. Returns None if it can't be read."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def round_price(amount: Decimal) -> Decimal:
    """Round to a whole currency unit, halves away from zero."""
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PropertySnapshot:
    """Read-only view of a property for one suggestion run."""
    id: str
    name: str
    base_price: Decimal | None
    currency: str = "USD"
    location: str | None = None
    type: str | None = None
    amenities: tuple[str, ...] = ()

    @classmethod
    def from_model(cls, prop: Any) -> "PropertySnapshot":
        return cls(
            id=str(prop.id),
            name=prop.name,
            base_price=to_decimal(prop.base_price),
            currency=normalize_currency(prop.currency),
            location=getattr(prop, "location", None),
            type=getattr(prop, "property_type", None),
            amenities=tuple(getattr(prop, "amenities", None) or ()),
        )

    @property
    def has_valid_base_price(self) -> bool:
        return self.base_price is not None and self.base_price.is_finite() and self.base_price > 0


@dataclass
class PricingSuggestion:
    property_id: str
    property_name: str
    date: date
    current_price: Decimal
    suggested_price: Decimal
    confidence: int
    reasoning: str
    factors: list[str] = field(default_factory=list)
    impact: Impact = "maintain"
    rule_type: str = "occupancy"
    currency: str = "USD"
    source: str = "heuristic"  # heuristic | ai

    @property
    def price_delta(self) -> Decimal:
        return self.suggested_price - self.current_price

    @property
    def revenue_impact(self) -> Decimal:
        """Estimated revenue impact used for ranking: |delta| x confidence."""
        return abs(self.price_delta) * Decimal(self.confidence) / Decimal(100)


def score_confidence(candidate: DateCandidate, factors: list[str], config: PricingConfig) -> int:
    w = config.confidence
    score = w.base
    if candidate.is_weekend:
        score += w.weekend
    if candidate.is_holiday:
        score += w.holiday
    if "seasonal" in factors:
        score += w.seasonal
    if "last_minute" in factors:
        score += w.last_minute
    if config.multi_factor_bonus_enabled and len(factors) > w.multi_factor_threshold:
        score += w.multi_factor
    return clamp_confidence(score, config)


def clamp_confidence(score: float, config: PricingConfig) -> int:
    return int(min(config.confidence.ceiling, max(config.confidence.floor, round(score))))


def classify_rule_type(factors: list[str]) -> str:
    """Coarse display category, first match wins."""
    if "weekend" in factors:
        return "weekend"
    if "seasonal" in factors:
        return "seasonal"
    if "holiday" in factors:
        return "event"
    if "last_minute" in factors:
        return "demand"
    return "occupancy"


def suggest_for_property(
    prop: PropertySnapshot,
    today: date,
    config: PricingConfig,
    rules: list[AdjustmentRule] | None = None,
) -> list[PricingSuggestion]:
    """Unranked suggestions for one property across the horizon, in date order."""
    if not prop.has_valid_base_price:
        logger.warning(f"Skipping property {prop.id} ({prop.name}): invalid base price {prop.base_price!r}")
        return []

    if rules is None:
        rules = build_rules(config)

    base = prop.base_price
    suggestions = []
    for candidate in build_horizon(today, config):
        adjustment = evaluate(candidate, rules)
        if not adjustment.applied:
            continue
        suggested = round_price(base * adjustment.multiplier)
        if suggested == base:
            continue

        suggestions.append(PricingSuggestion(
            property_id=prop.id,
            property_name=prop.name,
            date=candidate.date,
            current_price=base,
            suggested_price=suggested,
            confidence=score_confidence(candidate, adjustment.factors, config),
            reasoning=adjustment.reason,
            factors=adjustment.factors,
            impact=adjustment.impact,
            rule_type=classify_rule_type(adjustment.factors),
            currency=prop.currency,
        ))

    return suggestions


def rank_suggestions(suggestions: list[PricingSuggestion], limit: int) -> list[PricingSuggestion]:
    """Sort by estimated revenue impact, descending, and keep the top ``limit``.

    The sort is stable, so ties keep their input order (property order, then date).
    """
    ranked = sorted(suggestions, key=lambda s: s.revenue_impact, reverse=True)
    return ranked[:limit]


def generate_suggestions(
    properties: list[PropertySnapshot],
    today: date | None = None,
    config: PricingConfig | None = None,
) -> list[PricingSuggestion]:
    """Ranked price-adjustment suggestions for all properties over the horizon."""
    if not properties:
        return []

    config = config or PricingConfig.from_settings()
    today = today or date.today()
    rules = build_rules(config)

    suggestions: list[PricingSuggestion] = []
    for prop in properties:
        suggestions.extend(suggest_for_property(prop, today, config, rules))

    ranked = rank_suggestions(suggestions, config.max_suggestions)
    logger.info(
        f"Generated {len(suggestions)} heuristic suggestions for {len(properties)} properties, "
        f"returning top {len(ranked)}"
    )
    return ranked
