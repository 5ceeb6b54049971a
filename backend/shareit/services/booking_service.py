"""
Booking lifecycle: creation, owner decision, single lookup, admin update/delete.

STATE MACHINE
=============

    create ──> WAITING ──approve(true)──> APPROVED   (final for the owner)
                  │
                  └────approve(false)──> REJECTED   (owner may reconsider)

  CANCELED is only reachable through `update_booking`.

Creation rules, checked in this order:
  1. end strictly after start                      -> InvalidInterval
  2. booker and item exist                         -> UserNotFound / ItemNotFound
  3. booker is not the item's owner                -> OwnerSelfBooking
  4. item is available                             -> ItemUnavailable

No overlap check is made against other bookings of the same item; two
WAITING or even APPROVED bookings may cover the same period.

Concurrency:
  Each call works on the request's own session. Two concurrent approvals of
  the same booking are not serialized here; the AlreadyApproved check sees
  whatever the first one committed.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.exceptions import (
    AppException,
    BookingNotFound,
    InvalidInterval,
    ItemUnavailable,
    NotAuthorized,
    NotItemOwner,
    OwnerSelfBooking,
)
from shareit.core.logging import get_logger
from shareit.core.metrics import record_booking_operation, record_transition
from shareit.domain.booking_state import BookingStatus, resolve_decision
from shareit.models.booking import Booking
from shareit.repositories.booking_repository import BookingRepository
from shareit.schemas.booking import BookingUpdate
from shareit.services.item_service import get_item
from shareit.services.user_service import get_user

logger = get_logger(__name__)


def _check_interval(start: datetime, end: datetime) -> None:
    if end <= start:
        logger.warning("booking_invalid_interval", start=str(start), end=str(end))
        raise InvalidInterval(start, end)


async def get_booking_or_404(db: AsyncSession, booking_id: int) -> Booking:
    booking = await BookingRepository(db).get_by_id(booking_id)
    if booking is None:
        logger.warning("booking_not_found", booking_id=booking_id)
        raise BookingNotFound(booking_id)
    return booking


async def create_booking(
    db: AsyncSession,
    user_id: int,
    item_id: int,
    start: datetime,
    end: datetime,
) -> Booking:
    """Request a booking of `item_id` by `user_id`; starts out WAITING."""
    try:
        _check_interval(start, end)
        booker = await get_user(db, user_id)
        item = await get_item(db, item_id)

        if item.owner_id == user_id:
            logger.warning("booking_by_owner", item_id=item_id, user_id=user_id)
            raise OwnerSelfBooking(item_id)

        if not item.available:
            logger.warning("booking_item_unavailable", item_id=item_id, user_id=user_id)
            raise ItemUnavailable(item_id)
    except AppException as exc:
        record_booking_operation("create", type(exc).__name__)
        raise

    booking = await BookingRepository(db).save(
        Booking(
            start=start,
            end=end,
            status=BookingStatus.WAITING,
            item=item,
            booker=booker,
        )
    )
    record_booking_operation("create")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        item_id=item_id,
        booker_id=user_id,
        start=str(start),
        end=str(end),
    )
    return booking


async def approve_booking(
    db: AsyncSession,
    user_id: int,
    booking_id: int,
    approved: bool | None,
) -> Booking:
    """
    Owner's decision on a booking request.
    `approved` is required; True approves, False rejects.
    """
    try:
        booking = await get_booking_or_404(db, booking_id)
        if booking.item.owner_id != user_id:
            logger.warning("booking_approve_denied", booking_id=booking_id, user_id=user_id)
            raise NotItemOwner(user_id, booking.item_id)

        previous = booking.status
        target = resolve_decision(booking_id, previous, approved)
    except AppException as exc:
        record_booking_operation("approve", type(exc).__name__)
        logger.warning("booking_approve_failed", booking_id=booking_id, reason=type(exc).__name__)
        raise

    booking.status = target
    booking = await BookingRepository(db).save(booking)

    record_booking_operation("approve")
    record_transition(previous.value, target.value)
    logger.info(
        "booking_decided",
        booking_id=booking_id,
        owner_id=user_id,
        from_status=previous.value,
        to_status=target.value,
    )
    return booking


async def get_booking(db: AsyncSession, booking_id: int, user_id: int) -> Booking:
    """A single booking, visible only to its booker and the item's owner."""
    booking = await get_booking_or_404(db, booking_id)
    if user_id not in (booking.booker_id, booking.item.owner_id):
        logger.warning("booking_access_denied", booking_id=booking_id, user_id=user_id)
        raise NotAuthorized(user_id, booking_id)
    return booking


async def update_booking(db: AsyncSession, booking_id: int, changes: BookingUpdate) -> Booking:
    """
    Administrative field-level update.

    Only the supplied fields are overwritten. The merged booking must still
    satisfy the creation invariants: a valid interval, an existing item and
    booker, and a booker who is not the item's owner. Item availability and
    the acting user are not checked.
    """
    booking = await get_booking_or_404(db, booking_id)
    fields = changes.model_dump(exclude_unset=True, exclude_none=True)

    try:
        start = fields.get("start", booking.start)
        end = fields.get("end", booking.end)
        _check_interval(start, end)

        item = await get_item(db, fields["item_id"]) if "item_id" in fields else booking.item
        booker = await get_user(db, fields["booker_id"]) if "booker_id" in fields else booking.booker
        if item.owner_id == booker.id:
            logger.warning("booking_by_owner", item_id=item.id, user_id=booker.id)
            raise OwnerSelfBooking(item.id)
    except AppException as exc:
        record_booking_operation("update", type(exc).__name__)
        raise

    previous = booking.status
    booking.start = start
    booking.end = end
    booking.item = item
    booking.booker = booker
    if "status" in fields:
        booking.status = fields["status"]

    booking = await BookingRepository(db).save(booking)
    record_booking_operation("update")
    if booking.status != previous:
        record_transition(previous.value, booking.status.value)
    logger.info("booking_updated", booking_id=booking_id, fields=sorted(fields))
    return booking


async def delete_booking(db: AsyncSession, booking_id: int) -> None:
    deleted = await BookingRepository(db).delete_by_id(booking_id)
    if not deleted:
        record_booking_operation("delete", BookingNotFound.__name__)
        logger.warning("booking_not_found", booking_id=booking_id)
        raise BookingNotFound(booking_id)
    record_booking_operation("delete")
    logger.info("booking_deleted", booking_id=booking_id)
