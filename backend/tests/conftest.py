"""
Pytest fixtures for test database, client, and booking actors.

Each test gets a fresh in-memory SQLite database (aiosqlite + StaticPool),
so no PostgreSQL or Redis is needed to run the suite.
"""

import os

os.environ["REDIS_ENABLED"] = "false"

from datetime import timedelta
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from shareit.main import app
from shareit.db.base import Base
from shareit.db.session import get_db
from shareit.domain.booking_state import BookingStatus
from shareit.models import Booking, Item, User
from shareit.services import cache_service
from shareit.utils.time import utcnow

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def as_user():
    """Identity header for requests made on behalf of a user."""

    def _headers(user: User) -> dict:
        return {"X-Sharer-User-Id": str(user.id)}

    return _headers


@pytest.fixture
def now():
    return utcnow()


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE only fires with foreign keys switched on
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add(db_session: AsyncSession, obj):
    db_session.add(obj)
    await db_session.commit()
    return obj


@pytest_asyncio.fixture
async def owner(db_session: AsyncSession) -> User:
    """User who lists items."""
    return await _add(db_session, User(name="Owner", email="owner@example.com"))


@pytest_asyncio.fixture
async def booker(db_session: AsyncSession) -> User:
    """User who books other people's items."""
    return await _add(db_session, User(name="Booker", email="booker@example.com"))


@pytest_asyncio.fixture
async def stranger(db_session: AsyncSession) -> User:
    """User unrelated to any booking."""
    return await _add(db_session, User(name="Stranger", email="stranger@example.com"))


@pytest_asyncio.fixture
async def item(db_session: AsyncSession, owner: User) -> Item:
    """Available item owned by `owner`."""
    return await _add(
        db_session,
        Item(name="Cordless drill", description="18V drill with two batteries", available=True, owner=owner),
    )


@pytest_asyncio.fixture
async def unavailable_item(db_session: AsyncSession, owner: User) -> Item:
    return await _add(
        db_session,
        Item(name="Ladder", description="Aluminium ladder, in repair", available=False, owner=owner),
    )


@pytest_asyncio.fixture
async def make_booking(db_session: AsyncSession, now):
    """Insert a booking directly, bypassing the lifecycle rules.

    Offsets are in days relative to `now`.
    """

    async def _make(item: Item, booker: User, start_days: float, end_days: float,
                    status: BookingStatus = BookingStatus.WAITING) -> Booking:
        return await _add(
            db_session,
            Booking(
                start=now + timedelta(days=start_days),
                end=now + timedelta(days=end_days),
                item=item,
                booker=booker,
                status=status,
            ),
        )

    return _make


@pytest_asyncio.fixture
async def timeline(make_booking, item, booker) -> dict:
    """One booking per time frame plus a rejected one, all by `booker` on `item`."""
    return {
        "past": await make_booking(item, booker, -5, -2, BookingStatus.APPROVED),
        "current": await make_booking(item, booker, -1, 1, BookingStatus.APPROVED),
        "future_waiting": await make_booking(item, booker, 2, 3, BookingStatus.WAITING),
        "future_rejected": await make_booking(item, booker, 4, 6, BookingStatus.REJECTED),
    }


class InMemoryRedis:
    """The slice of the redis.asyncio client the search cache uses."""

    def __init__(self):
        self.store: dict[str, str] = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value

    async def delete(self, *keys):
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    async def scan_iter(self, match="*", count=None):
        prefix = match.rstrip("*")
        for key in list(self.store):
            if key.startswith(prefix):
                yield key


@pytest.fixture
def redis_cache(monkeypatch) -> InMemoryRedis:
    """Turn the item search cache on, backed by an in-memory store."""
    fake = InMemoryRedis()
    monkeypatch.setattr(cache_service, "get_redis", AsyncMock(return_value=fake))
    return fake
