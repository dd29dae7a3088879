import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ReservationStatus = Literal["confirmed", "pending", "cancelled", "completed"]


class ReservationCreate(BaseModel):
    property_id: uuid.UUID
    guest_name: str = Field(min_length=1, max_length=200)
    guest_email: str | None = None
    guest_phone: str | None = None
    check_in: date
    check_out: date
    guests_count: int = Field(default=1, ge=1)
    total_price: float = Field(ge=0)
    status: ReservationStatus = "confirmed"
    source: str = "manual"
    external_reservation_id: str | None = None
    notes: str | None = None


class ReservationUpdate(BaseModel):
    guest_name: str | None = Field(default=None, min_length=1, max_length=200)
    guest_email: str | None = None
    guest_phone: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    guests_count: int | None = Field(default=None, ge=1)
    total_price: float | None = Field(default=None, ge=0)
    status: ReservationStatus | None = None
    source: str | None = None
    external_reservation_id: str | None = None
    notes: str | None = None

    @field_validator("guest_name", "check_in", "check_out", "guests_count", "total_price", "status", "source")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ReservationResponse(BaseModel):
    id: uuid.UUID
    property_id: uuid.UUID
    guest_name: str
    guest_email: str | None
    guest_phone: str | None
    check_in: date
    check_out: date
    nights: int
    guests_count: int
    total_price: float
    status: str
    source: str
    external_reservation_id: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DashboardStats(BaseModel):
    total_properties: int
    total_reservations: int
    monthly_revenue: float
    upcoming_check_ins: int
    occupancy_rate: float
