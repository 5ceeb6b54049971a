"""
User directory: plain CRUD plus the existence lookup the booking engine relies on.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.exceptions import EmailAlreadyExists, UserNotFound
from shareit.core.logging import get_logger
from shareit.models.user import User
from shareit.repositories.pagination import Page
from shareit.repositories.user_repository import UserRepository
from shareit.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User:
    """Get a user by ID. Raises UserNotFound if absent."""
    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        logger.warning("user_not_found", user_id=user_id)
        raise UserNotFound(user_id)
    return user


async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
    """Create a user. Raises 409 if the email is already registered."""
    users = UserRepository(db)
    if await users.get_by_email(user_data.email):
        logger.warning("user_create_failed", reason="email_exists", email=user_data.email)
        raise EmailAlreadyExists(user_data.email)

    user = await users.save(User(name=user_data.name, email=user_data.email))
    logger.info("user_created", user_id=user.id, email=user.email)
    return user


async def update_user(db: AsyncSession, user_id: int, user_data: UserUpdate) -> User:
    users = UserRepository(db)
    user = await get_user(db, user_id)

    if user_data.email is not None and user_data.email != user.email:
        if await users.get_by_email(user_data.email):
            logger.warning("user_update_failed", reason="email_exists", user_id=user_id)
            raise EmailAlreadyExists(user_data.email)
        user.email = user_data.email
    if user_data.name is not None:
        user.name = user_data.name

    user = await users.save(user)
    logger.info("user_updated", user_id=user.id)
    return user


async def list_users(db: AsyncSession, offset: int = 0, size: int = 10) -> list[User]:
    return await UserRepository(db).list_all(Page(offset, size))


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await get_user(db, user_id)
    await UserRepository(db).delete(user)
    logger.info("user_deleted", user_id=user_id)
