"""
Pydantic schemas for item-related request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shareit.schemas.booking import BookingShort
from shareit.schemas.comment import CommentResponse


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=1000)
    available: bool
    request_id: Optional[int] = None


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    available: Optional[bool] = None


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str
    available: bool
    owner_id: int
    request_id: Optional[int] = None

    model_config = {"from_attributes": True}


class ItemDetailResponse(ItemResponse):
    """Item view: comments for everyone, neighbouring bookings for the owner."""

    last_booking: Optional[BookingShort] = None
    next_booking: Optional[BookingShort] = None
    comments: list[CommentResponse] = []
