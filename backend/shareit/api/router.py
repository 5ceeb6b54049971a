"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from shareit.api.routes import users, items, bookings

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(users.router)
api_router.include_router(items.router)
api_router.include_router(bookings.router)
