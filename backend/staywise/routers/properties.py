"""Property and room management router."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staywise.database import get_db
from staywise.models.property import Property, Room
from staywise.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
    RoomCreate,
    RoomResponse,
    RoomUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_property(property_id: uuid.UUID, db: AsyncSession) -> Property:
    prop = await db.get(Property, property_id)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


async def _get_room(property_id: uuid.UUID, room_id: uuid.UUID, db: AsyncSession) -> Room:
    result = await db.execute(
        select(Room).where(Room.id == room_id, Room.property_id == property_id)
    )
    room = result.scalar_one_or_none()
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.get("", response_model=list[PropertyResponse])
async def list_properties(
    active: bool | None = Query(None, description="Filter by is_active"),
    db: AsyncSession = Depends(get_db),
):
    """List properties, newest first."""
    query = select(Property).order_by(Property.created_at.desc())
    if active is not None:
        query = query.where(Property.is_active == active)
    result = await db.execute(query)
    return [PropertyResponse.model_validate(p) for p in result.scalars().all()]


@router.post("", status_code=201, response_model=PropertyResponse)
async def create_property(req: PropertyCreate, db: AsyncSession = Depends(get_db)):
    data = req.model_dump()
    data["currency"] = data["currency"].upper()
    prop = Property(**data)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    logger.info(f"Property created: {prop.id} ({prop.name})")
    return PropertyResponse.model_validate(prop)


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    prop = await _get_property(property_id, db)
    return PropertyResponse.model_validate(prop)


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: uuid.UUID,
    req: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partially update a property."""
    prop = await _get_property(property_id, db)
    for key, value in req.model_dump(exclude_unset=True).items():
        if key == "currency" and value:
            value = value.upper()
        setattr(prop, key, value)
    await db.commit()
    await db.refresh(prop)
    return PropertyResponse.model_validate(prop)


@router.delete("/{property_id}")
async def delete_property(property_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Delete a property with its rooms, reservations and pricing rules."""
    prop = await _get_property(property_id, db)
    await db.delete(prop)
    await db.commit()
    logger.info(f"Property deleted: {property_id}")
    return {"deleted": True}


# ─── Rooms ───


@router.get("/{property_id}/rooms", response_model=list[RoomResponse])
async def list_rooms(property_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await _get_property(property_id, db)
    result = await db.execute(
        select(Room).where(Room.property_id == property_id).order_by(Room.room_number)
    )
    return [RoomResponse.model_validate(r) for r in result.scalars().all()]


@router.post("/{property_id}/rooms", status_code=201, response_model=RoomResponse)
async def create_room(
    property_id: uuid.UUID,
    req: RoomCreate,
    db: AsyncSession = Depends(get_db),
):
    await _get_property(property_id, db)
    room = Room(property_id=property_id, **req.model_dump())
    db.add(room)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail=f"Room {req.room_number} already exists")
    await db.refresh(room)
    return RoomResponse.model_validate(room)


@router.patch("/{property_id}/rooms/{room_id}", response_model=RoomResponse)
async def update_room(
    property_id: uuid.UUID,
    room_id: uuid.UUID,
    req: RoomUpdate,
    db: AsyncSession = Depends(get_db),
):
    room = await _get_room(property_id, room_id, db)
    for key, value in req.model_dump(exclude_unset=True).items():
        setattr(room, key, value)
    room_number = room.room_number
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail=f"Room {room_number} already exists")
    await db.refresh(room)
    return RoomResponse.model_validate(room)


@router.delete("/{property_id}/rooms/{room_id}")
async def delete_room(
    property_id: uuid.UUID,
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    room = await _get_room(property_id, room_id, db)
    await db.delete(room)
    await db.commit()
    return {"deleted": True}
