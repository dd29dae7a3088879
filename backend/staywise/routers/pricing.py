"""Pricing suggestions router."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.database import get_db
from staywise.schemas.pricing import (
    ApplySuggestionRequest,
    PricingRuleResponse,
    SuggestionListResponse,
    SuggestionResponse,
)
from staywise.services.pricing.applier import SuggestionApplyError
from staywise.services.pricing_service import PropertyFetchError, pricing_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/suggestions", response_model=SuggestionListResponse)
async def get_suggestions(
    today: date | None = Query(None, description="Reference date; defaults to the current date"),
    property_id: list[uuid.UUID] | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Ranked nightly price suggestions for the next two weeks."""
    today = today or date.today()
    try:
        suggestions = await pricing_service.generate(db, today=today, property_ids=property_id)
    except PropertyFetchError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return SuggestionListResponse(
        suggestions=[SuggestionResponse.model_validate(s) for s in suggestions],
        count=len(suggestions),
        generated_for=today,
    )


@router.post("/suggestions/apply", status_code=201, response_model=PricingRuleResponse)
async def apply_suggestion(req: ApplySuggestionRequest, db: AsyncSession = Depends(get_db)):
    """Persist an accepted suggestion as a fixed-amount pricing rule."""
    if req.suggested_price == req.current_price:
        raise HTTPException(status_code=400, detail="Suggested price equals current price")

    try:
        rule = await pricing_service.apply(db, req.to_suggestion())
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SuggestionApplyError as e:
        raise HTTPException(status_code=503, detail=f"{e}. Please try again.")

    return PricingRuleResponse.model_validate(rule)


@router.get("/rules", response_model=list[PricingRuleResponse])
async def list_pricing_rules(
    property_id: uuid.UUID | None = Query(None),
    active_only: bool = Query(True),
    db: AsyncSession = Depends(get_db),
):
    rules = await pricing_service.list_rules(db, property_id=property_id, active_only=active_only)
    return [PricingRuleResponse.model_validate(r) for r in rules]
