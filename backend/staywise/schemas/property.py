import uuid
from datetime import datetime, time
from typing import Literal

from pydantic import BaseModel, Field, field_validator

PropertyType = Literal[
    "hotel", "bed_and_breakfast", "apartment", "villa", "chalet", "cabin",
    "glamping", "camping", "hostel", "guesthouse", "resort",
]


class PropertyBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    property_type: PropertyType = "apartment"
    address: str | None = None
    city: str | None = None
    country: str | None = None
    max_guests: int = Field(default=2, ge=1)
    bedrooms: int = Field(default=1, ge=0)
    bathrooms: int = Field(default=1, ge=0)
    star_rating: int | None = Field(default=None, ge=1, le=5)
    amenities: list[str] = Field(default_factory=list)
    base_price: float = Field(default=100.0, gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    check_in_time: time = time(15, 0)
    check_out_time: time = time(11, 0)
    is_active: bool = True


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    property_type: PropertyType | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    max_guests: int | None = Field(default=None, ge=1)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    star_rating: int | None = Field(default=None, ge=1, le=5)
    amenities: list[str] | None = None
    base_price: float | None = Field(default=None, gt=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    check_in_time: time | None = None
    check_out_time: time | None = None
    is_active: bool | None = None

    @field_validator(
        "name", "property_type", "max_guests", "bedrooms", "bathrooms", "amenities",
        "base_price", "currency", "check_in_time", "check_out_time", "is_active",
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class PropertyResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    property_type: str
    address: str | None
    city: str | None
    country: str | None
    max_guests: int
    bedrooms: int
    bathrooms: int
    star_rating: int | None
    amenities: list[str]
    base_price: float | None
    currency: str
    check_in_time: time
    check_out_time: time
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RoomBase(BaseModel):
    room_number: str = Field(min_length=1, max_length=50)
    room_type: str = "standard"
    size_sqm: float | None = Field(default=None, gt=0)
    max_guests: int = Field(default=2, ge=1)
    base_price: float = Field(default=0, ge=0)
    amenities: list[str] = Field(default_factory=list)
    description: str | None = None
    floor_number: int | None = None
    position_description: str | None = None
    is_active: bool = True


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    room_number: str | None = Field(default=None, min_length=1, max_length=50)
    room_type: str | None = None
    size_sqm: float | None = Field(default=None, gt=0)
    max_guests: int | None = Field(default=None, ge=1)
    base_price: float | None = Field(default=None, ge=0)
    amenities: list[str] | None = None
    description: str | None = None
    floor_number: int | None = None
    position_description: str | None = None
    is_active: bool | None = None

    @field_validator("room_number", "room_type", "max_guests", "base_price", "amenities", "is_active")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class RoomResponse(RoomBase):
    id: uuid.UUID
    property_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
