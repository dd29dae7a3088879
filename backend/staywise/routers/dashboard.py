"""Dashboard router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.database import get_db
from staywise.schemas.reservation import DashboardStats
from staywise.services.dashboard_service import dashboard_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)):
    """Headline numbers: properties, reservations, revenue, check-ins, occupancy."""
    return await dashboard_service.get_stats(db)
