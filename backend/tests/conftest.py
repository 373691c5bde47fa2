"""Test fixtures for the hotel booking backend."""
from __future__ import annotations

import json
import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import dispose_engine, get_sessionmaker
from app.main import app
from app.models import Room, RoomQuota
from app.pricing.overrides import parse_calendar_date


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


async def _seed_room(
    db_url: str,
    *,
    name: str = "Ocean Twin",
    capacity: int = 2,
    daily_prices: list[dict[str, object]] | None = None,
    weekday_prices: list[dict[str, object]] | None = None,
    quotas: dict[str, int] | None = None,
) -> Room:
    """Insert a room with the given overrides and return it."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        room = Room(
            name=name,
            capacity=capacity,
            room_count=3,
            daily_prices=json.dumps(daily_prices or []),
            weekday_prices=json.dumps(weekday_prices or []),
        )
        session.add(room)
        await session.flush()
        for day, count in (quotas or {}).items():
            session.add(
                RoomQuota(room_id=room.id, date=parse_calendar_date(day), quota=count)
            )
        await session.commit()
        await session.refresh(room)
        return room


@pytest_asyncio.fixture()
async def app_context(
    reset_database: AsyncIterator[None], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and a seeded room priced for early June 2025."""
    room = await _seed_room(
        db_url,
        daily_prices=[
            {"date": "2025-06-01", "price": 1000},
            {"date": "2025-06-02", "price": 1200},
        ],
        weekday_prices=[{"weekdayIndex": 5, "price": 800}],
        quotas={"2025-06-01": 2, "2025-06-02": 3, "2025-06-06": 1},
    )
    context: dict[str, object] = {"room_id": room.id, "db_url": db_url}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context


@pytest.fixture()
def seed_room(db_url: str):
    """Return a coroutine function that inserts a room into the test database."""

    async def _factory(**kwargs: object) -> Room:
        return await _seed_room(db_url, **kwargs)  # type: ignore[arg-type]

    return _factory
