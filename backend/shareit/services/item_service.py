"""
Item catalog: owner-managed listings and the public substring search.

Search results are cached in Redis (see cache_service). The routes drop the
cached searches only after an item write has been committed; dropping them
earlier would let a concurrent search re-cache the pre-write rows.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.exceptions import CommentNotAllowed, ItemNotFound, NotItemOwner
from shareit.core.logging import get_logger
from shareit.models.comment import Comment
from shareit.models.item import Item
from shareit.repositories.booking_repository import BookingRepository
from shareit.repositories.comment_repository import CommentRepository
from shareit.repositories.item_repository import ItemRepository
from shareit.repositories.pagination import Page
from shareit.schemas.booking import BookingShort
from shareit.schemas.comment import CommentResponse
from shareit.schemas.item import ItemCreate, ItemDetailResponse, ItemResponse, ItemUpdate
from shareit.services.cache_service import get_cached_search, set_cached_search
from shareit.services.user_service import get_user
from shareit.utils.time import utcnow

logger = get_logger(__name__)


async def get_item(db: AsyncSession, item_id: int) -> Item:
    """Get a single item by ID. Raises ItemNotFound if absent."""
    item = await ItemRepository(db).get_by_id(item_id)
    if item is None:
        logger.warning("item_not_found", item_id=item_id)
        raise ItemNotFound(item_id)
    return item


async def _owned_item(db: AsyncSession, user_id: int, item_id: int) -> Item:
    item = await get_item(db, item_id)
    if item.owner_id != user_id:
        logger.warning("item_write_denied", item_id=item_id, user_id=user_id)
        raise NotItemOwner(user_id, item_id)
    return item


async def create_item(db: AsyncSession, user_id: int, item_data: ItemCreate) -> Item:
    owner = await get_user(db, user_id)
    item = await ItemRepository(db).save(
        Item(
            name=item_data.name,
            description=item_data.description,
            available=item_data.available,
            request_id=item_data.request_id,
            owner=owner,
        )
    )

    logger.info("item_created", item_id=item.id, owner_id=user_id)
    return item


async def update_item(db: AsyncSession, user_id: int, item_id: int, item_data: ItemUpdate) -> Item:
    """Patch an item. Only its owner may do so."""
    item = await _owned_item(db, user_id, item_id)

    for field, value in item_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(item, field, value)
    item = await ItemRepository(db).save(item)

    logger.info("item_updated", item_id=item.id, owner_id=user_id)
    return item


async def delete_item(db: AsyncSession, user_id: int, item_id: int) -> None:
    item = await _owned_item(db, user_id, item_id)
    await ItemRepository(db).delete(item)
    logger.info("item_deleted", item_id=item_id, owner_id=user_id)


async def _detail(db: AsyncSession, item: Item, now: datetime, with_timeline: bool) -> ItemDetailResponse:
    comments = await CommentRepository(db).for_item(item.id)
    last = upcoming = None
    if with_timeline:
        bookings = BookingRepository(db)
        last = await bookings.last_for_item(item.id, now)
        upcoming = await bookings.next_for_item(item.id, now)
    return ItemDetailResponse(
        **ItemResponse.model_validate(item).model_dump(),
        last_booking=BookingShort.model_validate(last) if last else None,
        next_booking=BookingShort.model_validate(upcoming) if upcoming else None,
        comments=[CommentResponse.model_validate(c) for c in comments],
    )


async def get_item_view(
    db: AsyncSession,
    user_id: int,
    item_id: int,
    now: Optional[datetime] = None,
) -> ItemDetailResponse:
    """
    Item as seen by `user_id`.
    Everyone sees the comments; only the owner gets the last and next bookings.
    """
    item = await get_item(db, item_id)
    return await _detail(db, item, now or utcnow(), with_timeline=item.owner_id == user_id)


async def list_owner_items(
    db: AsyncSession,
    user_id: int,
    offset: int = 0,
    size: int = 10,
    now: Optional[datetime] = None,
) -> list[ItemDetailResponse]:
    await get_user(db, user_id)
    now = now or utcnow()
    items = await ItemRepository(db).by_owner(user_id, Page(offset, size))
    return [await _detail(db, item, now, with_timeline=True) for item in items]


async def add_comment(
    db: AsyncSession,
    user_id: int,
    item_id: int,
    text: str,
    now: Optional[datetime] = None,
) -> Comment:
    """
    Leave a comment on an item.
    The author must have an APPROVED booking of the item that has already ended.
    """
    author = await get_user(db, user_id)
    item = await get_item(db, item_id)
    now = now or utcnow()

    finished = await BookingRepository(db).finished_approved_for_booker(user_id, item.id, now)
    if finished is None:
        logger.warning("comment_denied", item_id=item_id, user_id=user_id)
        raise CommentNotAllowed(user_id, item_id)

    comment = await CommentRepository(db).save(
        Comment(text=text, item_id=item.id, author=author, created=now)
    )
    logger.info("comment_added", comment_id=comment.id, item_id=item_id, author_id=user_id)
    return comment


async def search_items(db: AsyncSession, text: str, offset: int = 0, size: int = 10) -> list[dict]:
    """
    Case-insensitive substring search over available items.
    Blank text matches nothing.
    """
    page = Page(offset, size)
    if not text or not text.strip():
        return []

    cached = await get_cached_search(text, page.index, page.size)
    if cached is not None:
        logger.info("item_search_cache_hit", text=text, page=page.index)
        return cached

    items = await ItemRepository(db).search(text, page)
    results = [ItemResponse.model_validate(item).model_dump() for item in items]
    await set_cached_search(text, page.index, page.size, results)
    return results
