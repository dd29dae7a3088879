"""Date-window queries behind the reservation calendar."""

import calendar
import logging
import uuid
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.models.reservation import Reservation

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the next month."""
    first = date(year, month, 1)
    days = calendar.monthrange(year, month)[1]
    return first, first + timedelta(days=days)


def nights_in_window(check_in: date, check_out: date, start: date, end: date) -> list[date]:
    """Occupied nights of a stay that fall in [start, end). The check-out day is not a night."""
    first = max(check_in, start)
    last = min(check_out, end)
    return [first + timedelta(days=i) for i in range((last - first).days)]


class ReservationService:
    async def list_reservations(
        self,
        db: AsyncSession,
        property_id: uuid.UUID | None = None,
        status: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Reservation]:
        """Reservations matching the filters. start/end select stays overlapping [start, end)."""
        query = select(Reservation).order_by(Reservation.check_in, Reservation.created_at)
        if property_id:
            query = query.where(Reservation.property_id == property_id)
        if status:
            query = query.where(Reservation.status == status)
        if start:
            query = query.where(Reservation.check_out > start)
        if end:
            query = query.where(Reservation.check_in < end)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def month_calendar(
        self,
        db: AsyncSession,
        year: int,
        month: int,
        property_id: uuid.UUID | None = None,
    ) -> dict:
        """Reservation ids grouped by occupied night for one month."""
        start, end = month_bounds(year, month)
        reservations = await self.list_reservations(db, property_id=property_id, start=start, end=end)
        return build_calendar(reservations, start, end)


def build_calendar(reservations: list[Reservation], start: date, end: date) -> dict:
    days: dict[str, list[str]] = {}
    d = start
    while d < end:
        days[d.isoformat()] = []
        d += timedelta(days=1)

    for r in reservations:
        if r.status == "cancelled":
            continue
        for night in nights_in_window(r.check_in, r.check_out, start, end):
            days[night.isoformat()].append(str(r.id))

    return {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "days": days,
        "reservation_count": len(reservations),
    }


reservation_service = ReservationService()
