"""
Tests for the booker and owner booking listings.
"""

from datetime import timedelta

import pytest

from shareit.core.exceptions import NoItemsForOwner, UnsupportedStatus, UserNotFound, ValidationError
from shareit.domain.booking_state import BookingStatus
from shareit.domain.category import Category, matches
from shareit.models import Item
from shareit.services.booking_query_service import list_for_booker, list_for_owner

EXPECTED = {
    "ALL": ["future_rejected", "future_waiting", "current", "past"],
    "CURRENT": ["current"],
    "PAST": ["past"],
    "FUTURE": ["future_rejected", "future_waiting"],
    "WAITING": ["future_waiting"],
    "REJECTED": ["future_rejected"],
}


def ids(bookings):
    return [b.id for b in bookings]


@pytest.mark.asyncio
@pytest.mark.parametrize("state, names", EXPECTED.items())
async def test_booker_listing_by_category(db_session, booker, timeline, state, names):
    bookings = await list_for_booker(db_session, booker.id, state)
    assert ids(bookings) == [timeline[name].id for name in names]


@pytest.mark.asyncio
@pytest.mark.parametrize("state, names", EXPECTED.items())
async def test_owner_listing_by_category(db_session, owner, timeline, state, names):
    bookings = await list_for_owner(db_session, owner.id, state)
    assert ids(bookings) == [timeline[name].id for name in names]


@pytest.mark.asyncio
async def test_listing_defaults_to_all(db_session, booker, owner, timeline):
    assert len(await list_for_booker(db_session, booker.id)) == 4
    assert len(await list_for_owner(db_session, owner.id)) == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("state", ["WAITING", "REJECTED"])
async def test_owner_status_listing_covers_every_booker(
    db_session, owner, booker, stranger, item, make_booking, state
):
    status = BookingStatus(state)
    first = await make_booking(item, booker, 1, 2, status)
    second = await make_booking(item, stranger, 3, 4, status)
    await make_booking(item, stranger, 5, 6, BookingStatus.APPROVED)

    owner_view = await list_for_owner(db_session, owner.id, state)
    assert ids(owner_view) == [second.id, first.id]

    assert ids(await list_for_booker(db_session, booker.id, state)) == [first.id]
    assert ids(await list_for_booker(db_session, stranger.id, state)) == [second.id]


@pytest.mark.asyncio
async def test_owner_listing_excludes_other_owners_items(db_session, owner, booker, stranger, item, make_booking):
    mine = await make_booking(item, booker, 1, 2)
    foreign_item = Item(name="Tent", description="Two person tent", available=True, owner=stranger)
    db_session.add(foreign_item)
    await db_session.commit()
    await make_booking(foreign_item, booker, 1, 2)

    assert ids(await list_for_owner(db_session, owner.id, "ALL")) == [mine.id]


@pytest.mark.asyncio
async def test_booker_listing_excludes_other_bookers(db_session, booker, stranger, item, make_booking):
    mine = await make_booking(item, booker, 1, 2)
    await make_booking(item, stranger, 1, 2)

    assert ids(await list_for_booker(db_session, booker.id, "ALL")) == [mine.id]


@pytest.mark.asyncio
async def test_booker_without_bookings_gets_empty_list(db_session, stranger):
    assert await list_for_booker(db_session, stranger.id, "ALL") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("state", [c.value for c in Category] + ["UNKNOWN"])
async def test_owner_without_items(db_session, stranger, state):
    """An owner with nothing to list fails before the state is parsed."""
    with pytest.raises(NoItemsForOwner):
        await list_for_owner(db_session, stranger.id, state)


@pytest.mark.asyncio
async def test_booker_unknown_state(db_session, booker, timeline):
    with pytest.raises(UnsupportedStatus) as exc_info:
        await list_for_booker(db_session, booker.id, "UNKNOWN")
    assert exc_info.value.detail == "Unknown state: UNSUPPORTED_STATUS"


@pytest.mark.asyncio
async def test_owner_unknown_state(db_session, owner, timeline):
    with pytest.raises(UnsupportedStatus):
        await list_for_owner(db_session, owner.id, "SOMETIMES")


@pytest.mark.asyncio
async def test_unknown_user(db_session):
    with pytest.raises(UserNotFound):
        await list_for_booker(db_session, 999, "ALL")
    with pytest.raises(UserNotFound):
        await list_for_owner(db_session, 999, "ALL")


@pytest.mark.asyncio
@pytest.mark.parametrize("offset, size", [(-1, 10), (0, 0)])
async def test_invalid_page_window(db_session, booker, offset, size):
    with pytest.raises(ValidationError):
        await list_for_booker(db_session, booker.id, "ALL", offset, size)


@pytest.mark.asyncio
async def test_finished_booking_is_only_past(db_session, booker, item, make_booking):
    """A booking that ended two days ago is PAST and never FUTURE or CURRENT."""
    booking = await make_booking(item, booker, -5, -2, BookingStatus.APPROVED)

    assert ids(await list_for_booker(db_session, booker.id, "PAST")) == [booking.id]
    assert await list_for_booker(db_session, booker.id, "FUTURE") == []
    assert await list_for_booker(db_session, booker.id, "CURRENT") == []


@pytest.mark.asyncio
async def test_explicit_now_moves_the_frames(db_session, booker, timeline, now):
    """Seen from a week ago, every timeline booking is still ahead."""
    week_ago = now - timedelta(days=7)
    future = await list_for_booker(db_session, booker.id, "FUTURE", now=week_ago)
    assert len(future) == 4
    assert await list_for_booker(db_session, booker.id, "PAST", now=week_ago) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("state", ["CURRENT", "PAST", "FUTURE", "WAITING", "REJECTED"])
async def test_store_agrees_with_classifier(db_session, booker, timeline, now, state):
    category = Category(state)
    listed = set(ids(await list_for_booker(db_session, booker.id, state, now=now)))
    expected = {b.id for b in timeline.values() if matches(b, category, now)}
    assert listed == expected


@pytest.mark.asyncio
async def test_pagination(db_session, booker, owner, timeline):
    all_ids = [timeline[name].id for name in EXPECTED["ALL"]]

    assert ids(await list_for_booker(db_session, booker.id, "ALL", 0, 2)) == all_ids[:2]
    assert ids(await list_for_booker(db_session, booker.id, "ALL", 2, 2)) == all_ids[2:]
    assert ids(await list_for_owner(db_session, owner.id, "ALL", 2, 2)) == all_ids[2:]
    # offsets are aligned down to the start of their page
    assert ids(await list_for_booker(db_session, booker.id, "ALL", 3, 2)) == all_ids[2:]
    assert await list_for_booker(db_session, booker.id, "ALL", 4, 2) == []


@pytest.mark.asyncio
async def test_owner_page_past_the_end(db_session, owner, timeline):
    with pytest.raises(NoItemsForOwner):
        await list_for_owner(db_session, owner.id, "ALL", 10, 10)


@pytest.mark.asyncio
async def test_same_start_ordered_by_id_desc(db_session, booker, item, make_booking):
    first = await make_booking(item, booker, 1, 2)
    second = await make_booking(item, booker, 1, 3)

    assert ids(await list_for_booker(db_session, booker.id, "ALL")) == [second.id, first.id]
