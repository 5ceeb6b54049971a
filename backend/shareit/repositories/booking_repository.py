"""
Booking store: every booking lookup the lifecycle and query services need.

Listings are always ordered newest start first (ties by id) and paginated
with `Page`. The time predicates are the SQL form of
`shareit.domain.category.classify`:

  CURRENT   start_date <= now AND end_date >= now
  PAST      end_date < now
  FUTURE    start_date > now
"""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Select, and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.domain.booking_state import BookingStatus
from shareit.domain.category import Category, STATUS_FILTERS
from shareit.models.booking import Booking
from shareit.models.item import Item
from shareit.repositories.pagination import Page


class Viewpoint(str, enum.Enum):
    BOOKER = "booker"
    OWNER = "owner"


def category_criteria(category: Category, now: datetime) -> list:
    """WHERE clauses selecting the bookings of `category` at `now`."""
    if category is Category.ALL:
        return []
    if category is Category.CURRENT:
        return [and_(Booking.start <= now, Booking.end >= now)]
    if category is Category.PAST:
        return [Booking.end < now]
    if category is Category.FUTURE:
        return [Booking.start > now]
    return [Booking.status == STATUS_FILTERS[category]]


class BookingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        return await self.db.get(Booking, booking_id)

    async def save(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def delete_by_id(self, booking_id: int) -> bool:
        booking = await self.get_by_id(booking_id)
        if booking is None:
            return False
        await self.db.delete(booking)
        await self.db.flush()
        return True

    # --- listings ---------------------------------------------------------

    def _scope(self, viewpoint: Viewpoint, user_id: int) -> Select:
        if viewpoint is Viewpoint.BOOKER:
            return select(Booking).where(Booking.booker_id == user_id)
        return (
            select(Booking)
            .join(Item, Booking.item_id == Item.id)
            .where(Item.owner_id == user_id)
        )

    async def _find(self, viewpoint: Viewpoint, user_id: int, criteria: list, page: Page) -> list[Booking]:
        query = (
            self._scope(viewpoint, user_id)
            .where(*criteria)
            .order_by(Booking.start.desc(), Booking.id.desc())
            .offset(page.start)
            .limit(page.size)
        )
        result = await self.db.execute(query)
        return list(result.scalars().unique().all())

    async def for_category(
        self,
        viewpoint: Viewpoint,
        user_id: int,
        category: Category,
        now: datetime,
        page: Page,
    ) -> list[Booking]:
        return await self._find(viewpoint, user_id, category_criteria(category, now), page)

    async def by_booker(self, user_id: int, page: Page) -> list[Booking]:
        return await self._find(Viewpoint.BOOKER, user_id, [], page)

    async def by_booker_current(self, user_id: int, now: datetime, page: Page) -> list[Booking]:
        return await self.for_category(Viewpoint.BOOKER, user_id, Category.CURRENT, now, page)

    async def by_booker_past(self, user_id: int, now: datetime, page: Page) -> list[Booking]:
        return await self.for_category(Viewpoint.BOOKER, user_id, Category.PAST, now, page)

    async def by_booker_future(self, user_id: int, now: datetime, page: Page) -> list[Booking]:
        return await self.for_category(Viewpoint.BOOKER, user_id, Category.FUTURE, now, page)

    async def by_booker_status(self, user_id: int, status: BookingStatus, page: Page) -> list[Booking]:
        return await self._find(Viewpoint.BOOKER, user_id, [Booking.status == status], page)

    async def by_item_owner(self, user_id: int, page: Page) -> list[Booking]:
        return await self._find(Viewpoint.OWNER, user_id, [], page)

    async def by_item_owner_current(self, user_id: int, now: datetime, page: Page) -> list[Booking]:
        return await self.for_category(Viewpoint.OWNER, user_id, Category.CURRENT, now, page)

    async def by_item_owner_past(self, user_id: int, now: datetime, page: Page) -> list[Booking]:
        return await self.for_category(Viewpoint.OWNER, user_id, Category.PAST, now, page)

    async def by_item_owner_future(self, user_id: int, now: datetime, page: Page) -> list[Booking]:
        return await self.for_category(Viewpoint.OWNER, user_id, Category.FUTURE, now, page)

    async def by_item_owner_status(self, user_id: int, status: BookingStatus, page: Page) -> list[Booking]:
        return await self._find(Viewpoint.OWNER, user_id, [Booking.status == status], page)

    # --- item timeline ----------------------------------------------------

    async def last_for_item(self, item_id: int, now: datetime) -> Optional[Booking]:
        """Most recently finished booking of the item, rejected ones excluded."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.item_id == item_id,
                Booking.end < now,
                Booking.status != BookingStatus.REJECTED,
            )
            .order_by(Booking.end.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def finished_approved_for_booker(
        self, booker_id: int, item_id: int, now: datetime
    ) -> Optional[Booking]:
        """Any APPROVED booking of the item by `booker_id` that ended before `now`."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.booker_id == booker_id,
                Booking.item_id == item_id,
                Booking.end < now,
                Booking.status == BookingStatus.APPROVED,
            )
            .order_by(Booking.end.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def next_for_item(self, item_id: int, now: datetime) -> Optional[Booking]:
        """Nearest upcoming booking of the item, rejected ones excluded."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.item_id == item_id,
                Booking.start > now,
                Booking.status != BookingStatus.REJECTED,
            )
            .order_by(Booking.start.asc())
            .limit(1)
        )
        return result.scalars().first()
