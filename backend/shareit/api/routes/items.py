"""
Item endpoints. Search results are cached in Redis; each write commits first
and then drops the cached searches.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_current_user_id
from shareit.core.config import get_settings
from shareit.db.session import get_db
from shareit.schemas.comment import CommentCreate, CommentResponse
from shareit.schemas.item import ItemCreate, ItemDetailResponse, ItemResponse, ItemUpdate
from shareit.services.cache_service import invalidate_item_search_cache
from shareit.services.item_service import (
    add_comment,
    create_item,
    delete_item,
    get_item_view,
    list_owner_items,
    search_items,
    update_item,
)

settings = get_settings()
router = APIRouter(prefix="/items", tags=["Items"])


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item_endpoint(
    item_data: ItemCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    item = await create_item(db, user_id, item_data)
    await db.commit()
    await invalidate_item_search_cache()
    return item


@router.get("/", response_model=list[ItemDetailResponse])
async def list_owner_items_endpoint(
    offset: int = Query(0, ge=0, alias="from"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """The caller's items with their last and next bookings."""
    return await list_owner_items(db, user_id, offset, size)


@router.get("/search", response_model=list[ItemResponse])
async def search_items_endpoint(
    text: str = Query(""),
    offset: int = Query(0, ge=0, alias="from"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """Available items whose name or description contains `text`."""
    return await search_items(db, text, offset, size)


@router.get("/{item_id}", response_model=ItemDetailResponse)
async def get_item_endpoint(
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await get_item_view(db, user_id, item_id)


@router.patch("/{item_id}", response_model=ItemResponse)
async def update_item_endpoint(
    item_id: int,
    item_data: ItemUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    item = await update_item(db, user_id, item_id, item_data)
    await db.commit()
    await invalidate_item_search_cache()
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item_endpoint(
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await delete_item(db, user_id, item_id)
    await db.commit()
    await invalidate_item_search_cache()


@router.post("/{item_id}/comment", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment_endpoint(
    item_id: int,
    comment_data: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Comment on an item the caller has finished an approved booking of."""
    return await add_comment(db, user_id, item_id, comment_data.text)
