"""
User endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.config import get_settings
from shareit.db.session import get_db
from shareit.schemas.user import UserCreate, UserResponse, UserUpdate
from shareit.services.cache_service import invalidate_item_search_cache
from shareit.services.user_service import create_user, delete_user, get_user, list_users, update_user

settings = get_settings()
router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user_endpoint(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    return await create_user(db, user_data)


@router.get("/", response_model=list[UserResponse])
async def list_users_endpoint(
    offset: int = Query(0, ge=0, alias="from"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    db: AsyncSession = Depends(get_db),
):
    return await list_users(db, offset, size)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_endpoint(user_id: int, db: AsyncSession = Depends(get_db)):
    return await get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user_endpoint(user_id: int, user_data: UserUpdate, db: AsyncSession = Depends(get_db)):
    return await update_user(db, user_id, user_data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(user_id: int, db: AsyncSession = Depends(get_db)):
    """Remove a user; their items go with them, so cached searches are dropped."""
    await delete_user(db, user_id)
    await db.commit()
    await invalidate_item_search_cache()
