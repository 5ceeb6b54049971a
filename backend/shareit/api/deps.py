"""
Request dependencies shared by the routers.
"""

from fastapi import Header

from shareit.core.config import get_settings

settings = get_settings()


async def get_current_user_id(
    user_id: int = Header(..., alias=settings.USER_ID_HEADER, gt=0),
) -> int:
    """Caller identity, already authenticated by the gateway in front of us."""
    return user_id
