"""Persist an accepted suggestion as a fixed-amount pricing rule."""

import logging
import uuid
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.models.pricing_rule import PricingRule
from staywise.services.pricing.engine import PricingSuggestion

logger = logging.getLogger(__name__)

RULE_NAME_PREFIX = "AI Suggestion - "
RULE_NAME_MAX = 300


class SuggestionApplyError(Exception):
    """The pricing rule could not be written. Safe to retry."""


def build_rule_record(suggestion: PricingSuggestion) -> dict:
    """Shape a suggestion into a pricing_rules row (fixed, not percentage)."""
    rule_name = f"{RULE_NAME_PREFIX}{suggestion.reasoning}"[:RULE_NAME_MAX]
    return {
        "property_id": uuid.UUID(str(suggestion.property_id)),
        "rule_type": suggestion.rule_type,
        "rule_name": rule_name,
        "conditions": {
            "dates": [suggestion.date.isoformat()],
            "original_price": float(suggestion.current_price),
            "confidence": suggestion.confidence,
            "factors": list(suggestion.factors),
        },
        "price_adjustment": Decimal(suggestion.price_delta),
        "is_percentage": False,
        "is_active": True,
    }


async def apply_suggestion(db: AsyncSession, suggestion: PricingSuggestion) -> PricingRule:
    """Insert the pricing rule for an accepted suggestion.

    Raises:
        SuggestionApplyError if the write fails; the session is rolled back.
    """
    rule = PricingRule(**build_rule_record(suggestion))
    db.add(rule)
    try:
        await db.commit()
        await db.refresh(rule)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to apply pricing suggestion for property {suggestion.property_id}: {e}")
        raise SuggestionApplyError("Failed to apply pricing suggestion") from e

    logger.info(
        f"Applied pricing suggestion: property={suggestion.property_id} date={suggestion.date} "
        f"adjustment={suggestion.price_delta}"
    )
    return rule
