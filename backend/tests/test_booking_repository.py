"""
Tests for the booking store's named finders and the item timeline lookups.
"""

import pytest

from shareit.domain.booking_state import BookingStatus
from shareit.repositories.booking_repository import BookingRepository
from shareit.repositories.pagination import Page


@pytest.mark.asyncio
async def test_named_booker_finders(db_session, booker, timeline, now):
    store = BookingRepository(db_session)
    page = Page(0, 10)

    assert [b.id for b in await store.by_booker(booker.id, page)] == [
        timeline["future_rejected"].id,
        timeline["future_waiting"].id,
        timeline["current"].id,
        timeline["past"].id,
    ]
    assert [b.id for b in await store.by_booker_current(booker.id, now, page)] == [timeline["current"].id]
    assert [b.id for b in await store.by_booker_past(booker.id, now, page)] == [timeline["past"].id]
    assert len(await store.by_booker_future(booker.id, now, page)) == 2
    assert [b.id for b in await store.by_booker_status(booker.id, BookingStatus.APPROVED, page)] == [
        timeline["current"].id,
        timeline["past"].id,
    ]


@pytest.mark.asyncio
async def test_named_owner_finders(db_session, owner, booker, timeline, now):
    store = BookingRepository(db_session)
    page = Page(0, 10)

    assert len(await store.by_item_owner(owner.id, page)) == 4
    assert [b.id for b in await store.by_item_owner_current(owner.id, now, page)] == [timeline["current"].id]
    assert [b.id for b in await store.by_item_owner_past(owner.id, now, page)] == [timeline["past"].id]
    assert len(await store.by_item_owner_future(owner.id, now, page)) == 2
    assert [b.id for b in await store.by_item_owner_status(owner.id, BookingStatus.WAITING, page)] == [
        timeline["future_waiting"].id
    ]
    # the owner has booked nothing themselves
    assert await store.by_booker(owner.id, page) == []
    assert await store.by_item_owner(booker.id, page) == []


@pytest.mark.asyncio
async def test_listing_eager_loads_item_and_booker(db_session, booker, timeline):
    bookings = await BookingRepository(db_session).by_booker(booker.id, Page(0, 10))
    assert {b.item.name for b in bookings} == {"Cordless drill"}
    assert {b.booker.name for b in bookings} == {"Booker"}


@pytest.mark.asyncio
async def test_last_and_next_for_item(db_session, item, timeline, now):
    store = BookingRepository(db_session)

    last = await store.last_for_item(item.id, now)
    upcoming = await store.next_for_item(item.id, now)

    assert last.id == timeline["past"].id
    assert upcoming.id == timeline["future_waiting"].id


@pytest.mark.asyncio
async def test_rejected_bookings_are_not_neighbours(db_session, item, booker, make_booking, now):
    await make_booking(item, booker, -3, -1, BookingStatus.REJECTED)
    await make_booking(item, booker, 1, 3, BookingStatus.REJECTED)
    store = BookingRepository(db_session)

    assert await store.last_for_item(item.id, now) is None
    assert await store.next_for_item(item.id, now) is None


@pytest.mark.asyncio
async def test_delete_by_id(db_session, item, booker, make_booking):
    booking = await make_booking(item, booker, 1, 2)
    store = BookingRepository(db_session)

    assert await store.delete_by_id(booking.id) is True
    assert await store.get_by_id(booking.id) is None
    assert await store.delete_by_id(booking.id) is False


@pytest.mark.asyncio
async def test_finished_approved_for_booker(db_session, item, booker, stranger, make_booking, now):
    store = BookingRepository(db_session)
    await make_booking(item, booker, -1, 1, BookingStatus.APPROVED)
    await make_booking(item, booker, -6, -4, BookingStatus.REJECTED)
    assert await store.finished_approved_for_booker(booker.id, item.id, now) is None

    finished = await make_booking(item, booker, -5, -2, BookingStatus.APPROVED)
    assert (await store.finished_approved_for_booker(booker.id, item.id, now)).id == finished.id
    assert await store.finished_approved_for_booker(stranger.id, item.id, now) is None
