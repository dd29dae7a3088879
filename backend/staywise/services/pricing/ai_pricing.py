"""AI pricing stage — best-effort LLM suggestions with a strict JSON contract.

Any failure (provider error, timeout, non-JSON, contract violation) returns
None so the caller falls back to the deterministic heuristic engine.
"""

import asyncio
import json
import logging
from datetime import date as date_type
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from staywise.config import settings
from staywise.data.currency import format_price
from staywise.services.llm_client import LLMClient, llm_client
from staywise.services.pricing.config import PricingConfig
from staywise.services.pricing.engine import (
    PricingSuggestion,
    PropertySnapshot,
    clamp_confidence,
    classify_rule_type,
    round_price,
    to_decimal,
)
from staywise.services.pricing.horizon import build_horizon

logger = logging.getLogger(__name__)

PRICING_SYSTEM_PROMPT = """You are a revenue manager for short-term rental and hotel properties. Suggest nightly price changes for the dates you are given.

Your response MUST be valid JSON with this exact structure:
{
    "suggestions": [
        {
            "date": "YYYY-MM-DD",
            "suggestedPrice": 123,
            "confidence": 60-95,
            "reasoning": "One short sentence explaining the change",
            "factors": ["weekend" | "demand" | "holiday" | "seasonal" | "last_minute" | "occupancy"],
            "impact": "increase" | "decrease"
        }
    ]
}

Guidelines:
- Only include dates from the list provided, and only where the price should change
- Prices are whole numbers in the property's currency
- Consider weekend/weekday patterns, seasonality, holidays and last-minute opportunities
- Keep changes within -30% and +50% of the base price

Respond with ONLY the JSON, no markdown formatting, no preamble."""


class AISuggestionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date: date_type
    suggested_price: float = Field(alias="suggestedPrice", gt=0)
    confidence: float = Field(default=75, ge=0, le=100)
    reasoning: str = Field(min_length=1, max_length=500)
    factors: list[str] = Field(default_factory=list)
    impact: Literal["increase", "decrease", "maintain"] | None = None


class AIPricingResponse(BaseModel):
    suggestions: list[AISuggestionItem]


class AIPricingStage:
    """Asks the LLM for per-date suggestions for one property."""

    def __init__(
        self,
        client: LLMClient | None = None,
        config: PricingConfig | None = None,
        enabled: bool | None = None,
        timeout: float | None = None,
    ):
        self.client = client or llm_client
        self.config = config or PricingConfig.from_settings()
        self._enabled = settings.pricing_ai_enabled if enabled is None else enabled
        self.timeout = timeout or settings.pricing_ai_timeout_seconds

    @property
    def enabled(self) -> bool:
        return self._enabled and self.client.available

    async def suggest(self, prop: PropertySnapshot, today: date_type) -> list[PricingSuggestion] | None:
        """Return validated suggestions, or None to signal fallback."""
        if not self.enabled:
            return None
        if not prop.has_valid_base_price:
            return None

        prompt = self.build_prompt(prop, today)
        try:
            raw = await asyncio.wait_for(
                self.client.complete(
                    system=PRICING_SYSTEM_PROMPT,
                    user=prompt,
                    max_tokens=1500,
                    temperature=0.3,
                    json_mode=True,
                ),
                timeout=self.timeout,
            )
            suggestions = self.parse_response(raw, prop, today)
        except asyncio.TimeoutError:
            logger.warning(f"AI pricing timed out after {self.timeout}s for property {prop.id}, using fallback")
            return None
        except Exception as e:
            logger.warning(f"AI pricing failed for property {prop.id}, using fallback: {e}")
            return None

        logger.info(f"AI pricing returned {len(suggestions)} suggestions for property {prop.id}")
        return suggestions

    def build_prompt(self, prop: PropertySnapshot, today: date_type) -> str:
        """Build the structured prompt for the LLM."""
        horizon = build_horizon(today, self.config)
        sections = [
            f"Property: {prop.name}",
            f"Type: {prop.type or 'accommodation'}",
            f"Base Price: {format_price(prop.base_price, prop.currency)} ({prop.currency}) per night",
            f"Location: {prop.location or 'Unknown'}",
        ]
        if prop.amenities:
            sections.append(f"Amenities: {', '.join(prop.amenities)}")

        sections.extend([
            "",
            f"=== DATES (next {self.config.horizon_days} days from {today.isoformat()}) ===",
        ])
        for c in horizon:
            sections.append(f"- {c.date.isoformat()} ({c.day_of_week})")

        sections.extend([
            "",
            "Return suggestions only for dates where the price should change.",
        ])
        return "\n".join(sections)

    def parse_response(self, raw: str, prop: PropertySnapshot, today: date_type) -> list[PricingSuggestion]:
        """Validate the LLM output against the contract.

        Raises:
            ValueError on non-JSON, schema violations, or dates outside the horizon.
        """
        text = (raw or "").strip()
        # Strip markdown code fences if present
        if text.startswith("```"):
            text = text.split("\n", 1)[1] if "\n" in text else text[3:]
            if text.endswith("```"):
                text = text[:-3]
            text = text.strip()

        payload = AIPricingResponse.model_validate(json.loads(text))

        horizon_dates = {c.date for c in build_horizon(today, self.config)}
        base = prop.base_price
        seen: set[date_type] = set()
        suggestions = []

        for item in payload.suggestions:
            if item.date not in horizon_dates:
                raise ValueError(f"Suggestion date {item.date} outside horizon")
            if item.date in seen:
                continue
            seen.add(item.date)

            suggested = round_price(to_decimal(item.suggested_price))
            if suggested == base:
                continue

            # Models sometimes answer on a 0-1 scale
            confidence = item.confidence * 100 if item.confidence <= 1 else item.confidence
            factors = [f.strip().lower() for f in item.factors if f.strip()]

            suggestions.append(PricingSuggestion(
                property_id=prop.id,
                property_name=prop.name,
                date=item.date,
                current_price=base,
                suggested_price=suggested,
                confidence=clamp_confidence(confidence, self.config),
                reasoning=item.reasoning.strip(),
                factors=factors,
                impact="increase" if suggested > base else "decrease",
                rule_type=classify_rule_type(factors),
                currency=prop.currency,
                source="ai",
            ))

        return sorted(suggestions, key=lambda s: s.date)
