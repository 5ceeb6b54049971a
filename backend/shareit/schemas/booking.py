"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator

from shareit.domain.booking_state import BookingStatus
from shareit.utils.time import to_naive_utc


class BookingCreate(BaseModel):
    item_id: int
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def normalize_instant(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class BookingUpdate(BaseModel):
    """Administrative partial update; only supplied fields are overwritten."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    item_id: Optional[int] = None
    booker_id: Optional[int] = None
    status: Optional[BookingStatus] = None

    @field_validator("start", "end")
    @classmethod
    def normalize_instant(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None


class BookingItem(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class BookingBooker(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    item: BookingItem
    booker: BookingBooker

    model_config = {"from_attributes": True}


class BookingShort(BaseModel):
    id: int
    booker_id: int
    start: datetime
    end: datetime

    model_config = {"from_attributes": True}
