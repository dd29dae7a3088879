"""Headline numbers for the dashboard overview page."""

import logging
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.models.property import Property
from staywise.models.reservation import Reservation
from staywise.services.reservation_service import month_bounds, nights_in_window

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 7


def occupancy_rate(occupied_nights: int, property_count: int, days_in_month: int) -> float:
    """Percent of available property-nights that are booked, one decimal."""
    possible = property_count * days_in_month
    if possible <= 0:
        return 0.0
    return round(occupied_nights / possible * 100, 1)


class DashboardService:
    async def get_stats(self, db: AsyncSession, today: date | None = None) -> dict:
        today = today or date.today()
        month_start, month_end = month_bounds(today.year, today.month)

        property_count = await db.scalar(
            select(func.count()).select_from(Property).where(Property.is_active == True)
        ) or 0
        reservation_count = await db.scalar(select(func.count()).select_from(Reservation)) or 0

        monthly_revenue = await db.scalar(
            select(func.coalesce(func.sum(Reservation.total_price), 0)).where(
                Reservation.status == "confirmed",
                Reservation.check_in >= month_start,
                Reservation.check_in < month_end,
            )
        ) or 0

        upcoming = await db.scalar(
            select(func.count()).select_from(Reservation).where(
                Reservation.status == "confirmed",
                Reservation.check_in >= today,
                Reservation.check_in < today + timedelta(days=UPCOMING_WINDOW_DAYS),
            )
        ) or 0

        stays = await db.execute(
            select(Reservation.check_in, Reservation.check_out)
            .join(Property, Property.id == Reservation.property_id)
            .where(
                Property.is_active == True,
                Reservation.status == "confirmed",
                Reservation.check_out > month_start,
                Reservation.check_in < month_end,
            )
        )
        occupied = sum(
            len(nights_in_window(check_in, check_out, month_start, month_end))
            for check_in, check_out in stays.all()
        )

        return {
            "total_properties": property_count,
            "total_reservations": reservation_count,
            "monthly_revenue": float(monthly_revenue),
            "upcoming_check_ins": upcoming,
            "occupancy_rate": occupancy_rate(occupied, property_count, (month_end - month_start).days),
        }


dashboard_service = DashboardService()
