"""Tests for the heuristic pricing engine."""

import logging
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

import pytest

from staywise.services.pricing.config import PricingConfig
from staywise.services.pricing.engine import (
    classify_rule_type,
    generate_suggestions,
    rank_suggestions,
    round_price,
    suggest_for_property,
)
from staywise.services.pricing.horizon import build_horizon
from staywise.services.pricing.rules import BASELINE_FACTOR, BASELINE_REASON, build_rules, evaluate


def _by_date(suggestions):
    return {s.date: s for s in suggestions}


class TestHorizon:
    def test_starts_tomorrow_and_spans_fourteen_days(self, config):
        today = date(2026, 3, 2)
        horizon = build_horizon(today, config)
        assert len(horizon) == 14
        assert horizon[0].date == date(2026, 3, 3)
        assert horizon[-1].date == date(2026, 3, 16)
        assert today not in {c.date for c in horizon}

    def test_flags(self, config):
        horizon = {c.date: c for c in build_horizon(date(2026, 3, 2), config)}
        assert horizon[date(2026, 3, 6)].is_weekend  # Friday
        assert horizon[date(2026, 3, 7)].is_weekend  # Saturday
        assert not horizon[date(2026, 3, 8)].is_weekend  # Sunday
        assert horizon[date(2026, 3, 5)].is_last_minute
        assert not horizon[date(2026, 3, 6)].is_last_minute
        assert horizon[date(2026, 3, 3)].day_of_week == "Tuesday"


class TestRules:
    def test_no_rule_is_baseline(self, config):
        candidate = {c.date: c for c in build_horizon(date(2026, 3, 2), config)}[date(2026, 3, 10)]
        adjustment = evaluate(candidate, build_rules(config))
        assert adjustment.applied == []
        assert adjustment.multiplier == Decimal("1")
        assert adjustment.reason == BASELINE_REASON
        assert adjustment.factors == [BASELINE_FACTOR]
        assert adjustment.impact == "maintain"

    def test_weekend_and_summer_combine(self, config):
        candidate = {c.date: c for c in build_horizon(date(2026, 7, 6), config)}[date(2026, 7, 10)]
        adjustment = evaluate(candidate, build_rules(config))
        assert adjustment.applied == ["weekend", "summer"]
        assert adjustment.multiplier == Decimal("1.375")
        assert adjustment.reason == "Weekend premium - higher leisure demand + summer season adjustment"
        assert adjustment.factors == ["weekend", "demand", "seasonal"]
        assert adjustment.impact == "increase"

    def test_last_minute_keeps_decrease_through_summer(self, config):
        candidate = {c.date: c for c in build_horizon(date(2026, 7, 6), config)}[date(2026, 7, 7)]
        adjustment = evaluate(candidate, build_rules(config))
        assert adjustment.applied == ["last_minute", "summer"]
        assert adjustment.impact == "decrease"
        assert adjustment.factors == ["last_minute", "occupancy", "seasonal"]

    def test_last_minute_suppressed_on_weekend(self, config):
        candidate = build_horizon(date(2026, 3, 5), config)[0]  # Friday, offset 1
        assert candidate.is_weekend and candidate.is_last_minute
        adjustment = evaluate(candidate, build_rules(config))
        assert "last_minute" not in adjustment.applied

    def test_winter_rule_can_be_disabled(self):
        config = PricingConfig(winter_discount_enabled=False)
        assert "winter" not in [r.name for r in build_rules(config)]


class TestSingleDateScenarios:
    def test_friday_in_july(self, config, make_property):
        suggestions = suggest_for_property(make_property("100"), date(2026, 7, 6), config)
        s = _by_date(suggestions)[date(2026, 7, 10)]
        assert s.suggested_price == Decimal("138")  # 137.5 rounds half up
        assert s.factors == ["weekend", "demand", "seasonal"]
        assert s.confidence == 95
        assert s.impact == "increase"
        assert s.rule_type == "weekend"

    def test_last_minute_tuesday_in_march(self, config, make_property):
        suggestions = suggest_for_property(make_property("100"), date(2026, 3, 2), config)
        s = _by_date(suggestions)[date(2026, 3, 3)]
        assert s.suggested_price == Decimal("90")
        assert s.impact == "decrease"
        assert s.factors == ["last_minute", "occupancy"]
        assert s.confidence == 65
        assert s.rule_type == "demand"
        assert s.reasoning == "Last-minute discount to boost occupancy"

    def test_plain_weekdays_in_march_are_not_suggested(self, config, make_property):
        suggestions = suggest_for_property(make_property("100"), date(2026, 3, 2), config)
        dates = {s.date for s in suggestions}
        assert dates == {
            date(2026, 3, 3), date(2026, 3, 4), date(2026, 3, 5),
            date(2026, 3, 6), date(2026, 3, 7), date(2026, 3, 13), date(2026, 3, 14),
        }

    def test_summer_weekday(self, config, make_property):
        s = _by_date(suggest_for_property(make_property("100"), date(2026, 7, 6), config))[date(2026, 7, 13)]
        assert s.suggested_price == Decimal("110")
        assert s.factors == ["baseline", "seasonal"]
        assert s.confidence == 80
        assert s.rule_type == "seasonal"
        assert s.impact == "maintain"
        assert s.reasoning == "Standard pricing maintained + summer season adjustment"

    def test_last_minute_summer_confidence_gets_multi_factor_bonus(self, make_property):
        today = date(2026, 7, 6)
        with_bonus = _by_date(suggest_for_property(make_property("100"), today, PricingConfig()))
        without_bonus = _by_date(suggest_for_property(
            make_property("100"), today, PricingConfig(multi_factor_bonus_enabled=False),
        ))
        assert with_bonus[date(2026, 7, 7)].suggested_price == Decimal("99")
        assert with_bonus[date(2026, 7, 7)].confidence == 75
        assert without_bonus[date(2026, 7, 7)].confidence == 70


class TestHolidaysAndWinter:
    @pytest.fixture
    def december(self, config, make_property):
        return _by_date(suggest_for_property(make_property("100"), date(2026, 12, 20), config))

    def test_christmas_eve(self, december):
        s = december[date(2026, 12, 24)]
        assert s.suggested_price == Decimal("115")
        assert s.factors == ["baseline", "holiday"]
        assert s.confidence == 85
        assert s.rule_type == "event"
        assert s.impact == "increase"
        assert s.reasoning == "Standard pricing maintained + holiday period"

    def test_christmas_on_a_friday(self, december):
        s = december[date(2026, 12, 25)]
        assert s.suggested_price == Decimal("144")  # 143.75
        assert s.factors == ["weekend", "demand", "holiday"]
        assert s.reasoning == "Weekend premium - higher leisure demand + holiday period"
        assert s.confidence == 95

    def test_winter_weekend(self, december):
        s = december[date(2026, 12, 26)]
        assert s.suggested_price == Decimal("119")  # 118.75
        assert s.impact == "increase"

    def test_winter_sunday_discount(self, december):
        s = december[date(2026, 12, 27)]
        assert s.suggested_price == Decimal("95")
        assert s.impact == "decrease"
        assert s.rule_type == "seasonal"

    def test_last_minute_in_winter_rounds_half_up(self, december):
        assert december[date(2026, 12, 21)].suggested_price == Decimal("86")  # 85.5

    def test_winter_disabled(self, make_property):
        config = PricingConfig(winter_discount_enabled=False)
        suggestions = _by_date(suggest_for_property(make_property("100"), date(2026, 12, 20), config))
        assert date(2026, 12, 27) not in suggestions
        assert suggestions[date(2026, 12, 21)].suggested_price == Decimal("90")

    def test_custom_holiday_overrides_last_minute(self, make_property):
        config = PricingConfig(holidays=frozenset({(3, 4)}))
        s = _by_date(suggest_for_property(make_property("100"), date(2026, 3, 2), config))[date(2026, 3, 4)]
        assert s.suggested_price == Decimal("115")
        assert s.factors == ["baseline", "holiday"]
        assert s.impact == "increase"

    def test_independence_day_weekday_in_summer(self, config, make_property):
        s = _by_date(suggest_for_property(make_property("100"), date(2028, 6, 28), config))[date(2028, 7, 4)]
        assert s.suggested_price == Decimal("127")  # 126.5
        assert s.factors == ["baseline", "holiday", "seasonal"]
        assert s.confidence == 95
        assert s.impact == "increase"
        assert s.rule_type == "seasonal"
        assert s.reasoning == "Standard pricing maintained + holiday period + summer season adjustment"


class TestGenerateSuggestions:
    def test_empty_input(self, config):
        assert generate_suggestions([], date(2026, 3, 2), config) == []

    def test_ranked_by_revenue_impact(self, config, make_property):
        suggestions = generate_suggestions([make_property("100")], date(2026, 3, 2), config)
        assert len(suggestions) == 7
        impacts = [s.revenue_impact for s in suggestions]
        assert impacts == sorted(impacts, reverse=True)
        # Ties keep date order
        assert [s.date for s in suggestions[:4]] == [
            date(2026, 3, 6), date(2026, 3, 7), date(2026, 3, 13), date(2026, 3, 14),
        ]
        assert all(s.rule_type == "demand" for s in suggestions[4:])

    def test_truncates_to_max_suggestions(self, config, make_property):
        properties = [make_property("100", name=f"Unit {i}") for i in range(3)]
        suggestions = generate_suggestions(properties, date(2026, 7, 6), config)
        assert len(suggestions) == 10
        assert all(s.rule_type == "weekend" for s in suggestions)
        assert suggestions[0].property_name == "Unit 0"

    def test_respects_configured_limit(self, make_property):
        config = PricingConfig(max_suggestions=3)
        assert len(generate_suggestions([make_property("100")], date(2026, 3, 2), config)) == 3

    def test_deterministic(self, config, make_property):
        properties = [make_property("100"), make_property("249.99")]
        first = generate_suggestions(properties, date(2026, 5, 14), config)
        second = generate_suggestions(properties, date(2026, 5, 14), config)
        assert first == second

    @pytest.mark.parametrize("base_price", ["0", "-50", None, "NaN", "Infinity"])
    def test_invalid_base_price_is_skipped(self, config, make_property, base_price, caplog):
        good = make_property("100", name="Good")
        bad = make_property(base_price, name="Bad")
        with caplog.at_level(logging.WARNING):
            suggestions = generate_suggestions([bad, good], date(2026, 3, 2), config)
        assert suggestions
        assert {s.property_name for s in suggestions} == {"Good"}
        assert "invalid base price" in caplog.text

    def test_suggestions_always_change_the_price(self, config, make_property):
        properties = [make_property("100"), make_property("137.45"), make_property("19")]
        start = date(2026, 1, 1)
        for offset in range(0, 365, 5):
            today = start + timedelta(days=offset)
            for s in generate_suggestions(properties, today, config):
                assert s.suggested_price != s.current_price
                assert 60 <= s.confidence <= 95
                direction = "increase" if s.suggested_price > s.current_price else "decrease"
                assert s.impact in (direction, "maintain")
                if s.impact == "maintain":
                    assert s.factors == ["baseline", "seasonal"]
                assert s.date > today
                assert s.date <= today + timedelta(days=config.horizon_days)

    def test_currency_carried_through(self, config, make_property):
        suggestions = generate_suggestions([make_property("100", currency="EUR")], date(2026, 3, 2), config)
        assert {s.currency for s in suggestions} == {"EUR"}


class TestHelpers:
    def test_round_price_half_up(self):
        assert round_price(Decimal("137.5")) == Decimal("138")
        assert round_price(Decimal("85.5")) == Decimal("86")
        assert round_price(Decimal("85.49")) == Decimal("85")

    @pytest.mark.parametrize("factors,expected", [
        (["weekend", "demand", "seasonal"], "weekend"),
        (["seasonal"], "seasonal"),
        (["holiday"], "event"),
        (["last_minute", "occupancy"], "demand"),
        (["baseline"], "occupancy"),
        (["holiday", "seasonal"], "seasonal"),
    ])
    def test_classify_rule_type(self, factors, expected):
        assert classify_rule_type(factors) == expected

    def test_rank_is_stable_for_ties(self, config, make_property):
        suggestions = suggest_for_property(make_property("100"), date(2026, 3, 2), config)
        shuffled = list(reversed(suggestions))
        ranked = rank_suggestions(shuffled, limit=100)
        weekends = [s for s in ranked if s.rule_type == "weekend"]
        assert [s.date for s in weekends] == [s.date for s in shuffled if s.rule_type == "weekend"]

    def test_config_is_frozen(self, config):
        with pytest.raises(Exception):
            config.horizon_days = 30
        assert replace(config, horizon_days=30).horizon_days == 30
