"""
Booking endpoints: request, decide, look up and list bookings.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_current_user_id
from shareit.core.config import get_settings
from shareit.db.session import get_db
from shareit.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from shareit.services.booking_query_service import list_for_booker, list_for_owner
from shareit.services.booking_service import (
    approve_booking,
    create_booking,
    delete_booking,
    get_booking,
    update_booking,
)

settings = get_settings()
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Request a booking. The booking starts in WAITING until the owner decides."""
    return await create_booking(db, user_id, booking_data.item_id, booking_data.start, booking_data.end)


@router.get("/", response_model=list[BookingResponse])
async def list_booker_bookings(
    state: str = Query("ALL"),
    offset: int = Query(0, ge=0, alias="from"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Bookings made by the caller: ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED."""
    return await list_for_booker(db, user_id, state, offset, size)


@router.get("/owner", response_model=list[BookingResponse])
async def list_owner_bookings(
    state: str = Query("ALL"),
    offset: int = Query(0, ge=0, alias="from"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Bookings of the caller's items, in the same categories as the booker listing."""
    return await list_for_owner(db, user_id, state, offset, size)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking_endpoint(
    booking_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """A single booking; visible to its booker and to the item's owner."""
    return await get_booking(db, booking_id, user_id)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def approve_booking_endpoint(
    booking_id: int,
    approved: Optional[bool] = Query(None),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Owner approves (`approved=true`) or rejects (`approved=false`) a booking."""
    return await approve_booking(db, user_id, booking_id, approved)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking_endpoint(
    booking_id: int,
    changes: BookingUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Administrative partial update of a booking's fields, including CANCELED status."""
    return await update_booking(db, booking_id, changes)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking_endpoint(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Administrative removal of a booking."""
    await delete_booking(db, booking_id)
