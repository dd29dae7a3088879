import uuid
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from staywise.services.pricing.engine import PricingSuggestion, RULE_TYPES

Impact = Literal["increase", "decrease", "maintain"]


class SuggestionResponse(BaseModel):
    property_id: str
    property_name: str
    date: date_type
    current_price: float
    suggested_price: float
    currency: str
    confidence: int
    reasoning: str
    factors: list[str]
    impact: Impact
    rule_type: str
    source: str

    model_config = {"from_attributes": True}


class SuggestionListResponse(BaseModel):
    suggestions: list[SuggestionResponse]
    count: int
    generated_for: date_type


class ApplySuggestionRequest(BaseModel):
    property_id: uuid.UUID
    property_name: str = ""
    date: date_type
    current_price: float = Field(gt=0)
    suggested_price: float = Field(gt=0)
    currency: str = "USD"
    confidence: int = Field(ge=0, le=100)
    reasoning: str = Field(min_length=1)
    factors: list[str] = Field(default_factory=list)
    impact: Impact = "maintain"
    rule_type: str = "occupancy"

    def to_suggestion(self) -> PricingSuggestion:
        rule_type = self.rule_type if self.rule_type in RULE_TYPES else "occupancy"
        return PricingSuggestion(
            property_id=str(self.property_id),
            property_name=self.property_name,
            date=self.date,
            current_price=Decimal(str(self.current_price)),
            suggested_price=Decimal(str(self.suggested_price)),
            confidence=self.confidence,
            reasoning=self.reasoning,
            factors=list(self.factors),
            impact=self.impact,
            rule_type=rule_type,
            currency=self.currency,
        )


class PricingRuleResponse(BaseModel):
    id: uuid.UUID
    property_id: uuid.UUID
    rule_type: str
    rule_name: str
    conditions: dict | None
    price_adjustment: float | None
    is_percentage: bool
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
