"""
Booking listings for the booker's and the owner's point of view.

Both listings take the category as the raw `state` literal, the `from`
offset and the page `size`, and return bookings newest start first.

The reference instant `now` is sampled once per call (or passed in) and
threaded through to the store, so every category in one call agrees on
what "now" is.

Owner listings first read the owner's ALL page. An empty page means the
owner has nothing to list and fails with NoItemsForOwner before the
category literal is even looked at.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.exceptions import NoItemsForOwner, UnsupportedStatus
from shareit.core.logging import get_logger
from shareit.core.metrics import record_booking_query
from shareit.domain.category import Category, parse_category
from shareit.models.booking import Booking
from shareit.repositories.booking_repository import BookingRepository, Viewpoint
from shareit.repositories.pagination import Page
from shareit.services.user_service import get_user
from shareit.utils.time import utcnow

logger = get_logger(__name__)


def _parse(state: str, viewpoint: Viewpoint, user_id: int) -> Category:
    try:
        return parse_category(state)
    except UnsupportedStatus:
        logger.warning("booking_list_unknown_state", state=state, viewpoint=viewpoint.value, user_id=user_id)
        raise


async def list_for_booker(
    db: AsyncSession,
    user_id: int,
    state: str = Category.ALL.value,
    offset: int = 0,
    size: int = 10,
    now: Optional[datetime] = None,
) -> list[Booking]:
    """Bookings made by `user_id` in the given category."""
    await get_user(db, user_id)
    page = Page(offset, size)
    category = _parse(state, Viewpoint.BOOKER, user_id)
    now = now or utcnow()

    bookings = await BookingRepository(db).for_category(Viewpoint.BOOKER, user_id, category, now, page)
    record_booking_query(Viewpoint.BOOKER.value, category.value)
    logger.info(
        "booking_list",
        viewpoint=Viewpoint.BOOKER.value,
        user_id=user_id,
        category=category.value,
        page=page.index,
        count=len(bookings),
    )
    return bookings


async def list_for_owner(
    db: AsyncSession,
    user_id: int,
    state: str = Category.ALL.value,
    offset: int = 0,
    size: int = 10,
    now: Optional[datetime] = None,
) -> list[Booking]:
    """Bookings of the items owned by `user_id` in the given category."""
    await get_user(db, user_id)
    page = Page(offset, size)
    store = BookingRepository(db)

    owned = await store.by_item_owner(user_id, page)
    if not owned:
        logger.warning("booking_list_owner_without_items", user_id=user_id)
        raise NoItemsForOwner(user_id)

    category = _parse(state, Viewpoint.OWNER, user_id)
    if category is Category.ALL:
        bookings = owned
    else:
        bookings = await store.for_category(Viewpoint.OWNER, user_id, category, now or utcnow(), page)

    record_booking_query(Viewpoint.OWNER.value, category.value)
    logger.info(
        "booking_list",
        viewpoint=Viewpoint.OWNER.value,
        user_id=user_id,
        category=category.value,
        page=page.index,
        count=len(bookings),
    )
    return bookings
