import uuid
from datetime import date
from decimal import Decimal

import pytest

from staywise.models.pricing_rule import PricingRule
from staywise.services.pricing.applier import SuggestionApplyError, apply_suggestion, build_rule_record
from staywise.services.pricing.engine import PricingSuggestion

from conftest import FakeSession

PROPERTY_ID = uuid.UUID("6f1c2a9e-4b1d-4c1e-9a57-3d0f1b2c4e5a")


@pytest.fixture
def suggestion():
    return PricingSuggestion(
        property_id=str(PROPERTY_ID),
        property_name="Lakeside Cabin",
        date=date(2026, 3, 3),
        current_price=Decimal("100"),
        suggested_price=Decimal("90"),
        confidence=65,
        reasoning="Last-minute discount to boost occupancy",
        factors=["last_minute", "occupancy"],
        impact="decrease",
        rule_type="demand",
    )


def test_rule_record_shape(suggestion):
    record = build_rule_record(suggestion)
    assert record == {
        "property_id": PROPERTY_ID,
        "rule_type": "demand",
        "rule_name": "AI Suggestion - Last-minute discount to boost occupancy",
        "conditions": {
            "dates": ["2026-03-03"],
            "original_price": 100.0,
            "confidence": 65,
            "factors": ["last_minute", "occupancy"],
        },
        "price_adjustment": Decimal("-10"),
        "is_percentage": False,
        "is_active": True,
    }


def test_rule_name_is_truncated(suggestion):
    suggestion.reasoning = "x" * 500
    assert len(build_rule_record(suggestion)["rule_name"]) == 300


async def test_apply_inserts_rule(suggestion):
    db = FakeSession()
    rule = await apply_suggestion(db, suggestion)

    assert isinstance(rule, PricingRule)
    assert db.added == [rule]
    assert db.committed
    assert rule.id is not None
    assert rule.price_adjustment == Decimal("-10")
    assert rule.is_percentage is False


async def test_apply_failure_rolls_back(suggestion):
    db = FakeSession(fail_commit=True)
    with pytest.raises(SuggestionApplyError):
        await apply_suggestion(db, suggestion)
    assert db.rolled_back
    assert not db.committed
