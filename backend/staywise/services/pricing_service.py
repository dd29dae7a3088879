"""Pricing service — loads properties, runs AI-or-heuristic suggestions, applies them.

Per property the AI stage is tried first when enabled; any failure falls
through to the deterministic engine for that property. The combined list is
ranked by estimated revenue impact and truncated.
"""

import asyncio
import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.models.pricing_rule import PricingRule
from staywise.models.property import Property
from staywise.services.pricing.ai_pricing import AIPricingStage
from staywise.services.pricing.applier import apply_suggestion
from staywise.services.pricing.config import PricingConfig
from staywise.services.pricing.engine import (
    PricingSuggestion,
    PropertySnapshot,
    rank_suggestions,
    suggest_for_property,
)
from staywise.services.pricing.rules import build_rules

logger = logging.getLogger(__name__)


class PropertyFetchError(Exception):
    """Active properties could not be read; suggestion generation is skipped."""


class PricingService:
    """Generates and applies nightly pricing suggestions."""

    def __init__(self, ai_stage: AIPricingStage | None = None, config: PricingConfig | None = None):
        self.config = config or PricingConfig.from_settings()
        self.ai_stage = ai_stage or AIPricingStage(config=self.config)

    async def load_properties(
        self, db: AsyncSession, property_ids: list[uuid.UUID] | None = None
    ) -> list[PropertySnapshot]:
        """Read active properties as engine snapshots."""
        query = select(Property).where(Property.is_active == True).order_by(Property.created_at, Property.id)
        if property_ids:
            query = query.where(Property.id.in_(property_ids))
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch properties: {e}")
            raise PropertyFetchError("Failed to fetch properties") from e
        return [PropertySnapshot.from_model(p) for p in result.scalars().all()]

    async def generate(
        self,
        db: AsyncSession,
        today: date | None = None,
        property_ids: list[uuid.UUID] | None = None,
    ) -> list[PricingSuggestion]:
        properties = await self.load_properties(db, property_ids)
        return await self.suggest(properties, today)

    async def suggest(
        self, properties: list[PropertySnapshot], today: date | None = None
    ) -> list[PricingSuggestion]:
        if not properties:
            return []

        today = today or date.today()

        ai_results: list[list[PricingSuggestion] | None] = [None] * len(properties)
        if self.ai_stage.enabled:
            ai_results = await asyncio.gather(*(self.ai_stage.suggest(p, today) for p in properties))

        rules = build_rules(self.config)
        suggestions: list[PricingSuggestion] = []
        fallback_count = 0
        for prop, ai_suggestions in zip(properties, ai_results):
            if ai_suggestions is not None:
                suggestions.extend(ai_suggestions)
            else:
                fallback_count += 1
                suggestions.extend(suggest_for_property(prop, today, self.config, rules))

        ranked = rank_suggestions(suggestions, self.config.max_suggestions)
        logger.info(
            f"Pricing suggestions: {len(properties)} properties "
            f"({fallback_count} heuristic), {len(suggestions)} candidates, {len(ranked)} returned"
        )
        return ranked

    async def apply(self, db: AsyncSession, suggestion: PricingSuggestion) -> PricingRule:
        """Persist an accepted suggestion.

        Raises:
            ValueError if the property does not exist.
            SuggestionApplyError if the write fails.
        """
        prop = await db.get(Property, uuid.UUID(str(suggestion.property_id)))
        if prop is None:
            raise ValueError("Property not found")
        return await apply_suggestion(db, suggestion)

    async def list_rules(
        self,
        db: AsyncSession,
        property_id: uuid.UUID | None = None,
        active_only: bool = True,
    ) -> list[PricingRule]:
        query = select(PricingRule).order_by(PricingRule.created_at.desc())
        if property_id:
            query = query.where(PricingRule.property_id == property_id)
        if active_only:
            query = query.where(PricingRule.is_active == True)
        result = await db.execute(query)
        return list(result.scalars().all())


pricing_service = PricingService()
