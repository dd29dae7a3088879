"""Reservation management and calendar router."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.database import get_db
from staywise.models.property import Property
from staywise.models.reservation import Reservation
from staywise.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationStatus,
    ReservationUpdate,
)
from staywise.services.reservation_service import reservation_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_reservation(reservation_id: uuid.UUID, db: AsyncSession) -> Reservation:
    reservation = await db.get(Reservation, reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation


@router.get("", response_model=list[ReservationResponse])
async def list_reservations(
    property_id: uuid.UUID | None = Query(None),
    status: ReservationStatus | None = Query(None),
    start: date | None = Query(None, description="Stays overlapping on or after this date"),
    end: date | None = Query(None, description="Stays overlapping before this date"),
    db: AsyncSession = Depends(get_db),
):
    if start and end and end <= start:
        raise HTTPException(status_code=400, detail="end must be after start")
    reservations = await reservation_service.list_reservations(
        db, property_id=property_id, status=status, start=start, end=end,
    )
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.get("/calendar")
async def reservation_calendar(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    property_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Occupied nights for a month, keyed by ISO date."""
    return await reservation_service.month_calendar(db, year, month, property_id)


@router.post("", status_code=201, response_model=ReservationResponse)
async def create_reservation(req: ReservationCreate, db: AsyncSession = Depends(get_db)):
    if req.check_out <= req.check_in:
        raise HTTPException(status_code=400, detail="check_out must be after check_in")

    prop = await db.get(Property, req.property_id)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")

    reservation = Reservation(**req.model_dump())
    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)
    logger.info(
        f"Reservation created: {reservation.id} property={req.property_id} "
        f"{req.check_in}..{req.check_out}"
    )
    return ReservationResponse.model_validate(reservation)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(reservation_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    reservation = await _get_reservation(reservation_id, db)
    return ReservationResponse.model_validate(reservation)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: uuid.UUID,
    req: ReservationUpdate,
    db: AsyncSession = Depends(get_db),
):
    reservation = await _get_reservation(reservation_id, db)
    changes = req.model_dump(exclude_unset=True)

    check_in = changes.get("check_in", reservation.check_in)
    check_out = changes.get("check_out", reservation.check_out)
    if check_out <= check_in:
        raise HTTPException(status_code=400, detail="check_out must be after check_in")

    for key, value in changes.items():
        setattr(reservation, key, value)
    await db.commit()
    await db.refresh(reservation)
    return ReservationResponse.model_validate(reservation)


@router.delete("/{reservation_id}")
async def delete_reservation(reservation_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    reservation = await _get_reservation(reservation_id, db)
    await db.delete(reservation)
    await db.commit()
    return {"deleted": True}
