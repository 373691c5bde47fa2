"""Room lookup and calendar override editing."""

from __future__ import annotations

import datetime
import logging
import uuid
from collections.abc import Iterable, Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.models.room import Room, RoomQuota
from app.pricing.overrides import (
    DailyPriceOverride,
    PriceOverrideStore,
    QuotaOverride,
    QuotaStore,
    RoomSnapshot,
    WeekdayPriceRule,
    WeekdayPriceStore,
    parse_daily_prices,
    parse_weekday_prices,
    serialize_daily_prices,
    serialize_weekday_prices,
    to_money,
)
from app.pricing.resolver import iter_dates

logger = logging.getLogger(__name__)


class RoomNotFoundError(ValueError):
    """Raised when a room id does not resolve to a room."""


class InvalidDateRangeError(ValueError):
    """Raised when a range ends before it starts."""


async def get_room(session: AsyncSession, *, room_id: uuid.UUID) -> Room | None:
    result = await session.execute(
        select(Room).options(selectinload(Room.quotas)).where(Room.id == room_id)
    )
    return result.scalar_one_or_none()


async def require_room(session: AsyncSession, *, room_id: uuid.UUID) -> Room:
    room = await get_room(session, room_id=room_id)
    if room is None:
        raise RoomNotFoundError("Room not found")
    return room


def build_snapshot(room: Room) -> RoomSnapshot:
    """Snapshot a loaded room's overrides for resolution."""
    return RoomSnapshot.from_raw(
        daily_prices=room.daily_prices,
        weekday_prices=room.weekday_prices,
        quotas=[QuotaOverride(date=row.date, count=row.quota) for row in room.quotas],
    )


def _with_daily_prices(room: Room, overrides: Iterable[DailyPriceOverride]) -> None:
    existing = parse_daily_prices(room.daily_prices)
    store = PriceOverrideStore.from_overrides([*existing, *overrides])
    room.daily_prices = serialize_daily_prices(store)


async def _commit_and_reload(session: AsyncSession, room: Room) -> Room:
    room_id = room.id
    await session.commit()
    session.expire(room)
    return await require_room(session, room_id=room_id)


async def set_daily_price(
    session: AsyncSession, *, room: Room, day: datetime.date, price: Decimal
) -> Room:
    """Pin a price to one date, replacing any existing price for it."""
    _with_daily_prices(room, [DailyPriceOverride(date=day, price=to_money(price))])
    logger.info("Set daily price for room %s on %s", room.id, day.isoformat())
    return await _commit_and_reload(session, room)


async def set_date_range_price(
    session: AsyncSession,
    *,
    room: Room,
    start_date: datetime.date,
    end_date: datetime.date,
    price: Decimal,
) -> Room:
    """Pin the same price to every date of the inclusive range."""
    if end_date < start_date:
        raise InvalidDateRangeError("End date must not be before start date")
    max_days = get_settings().max_calendar_days
    if (end_date - start_date).days + 1 > max_days:
        raise InvalidDateRangeError(f"Date ranges are limited to {max_days} days")
    amount = to_money(price)
    overrides = [
        DailyPriceOverride(date=day, price=amount)
        for day in iter_dates(start_date, end_date)
    ]
    _with_daily_prices(room, overrides)
    logger.info(
        "Set %s daily prices for room %s from %s to %s",
        len(overrides),
        room.id,
        start_date.isoformat(),
        end_date.isoformat(),
    )
    return await _commit_and_reload(session, room)


async def remove_daily_price(
    session: AsyncSession, *, room: Room, day: datetime.date
) -> Room:
    remaining = [
        override
        for override in parse_daily_prices(room.daily_prices)
        if override.date != day
    ]
    room.daily_prices = serialize_daily_prices(
        PriceOverrideStore.from_overrides(remaining)
    )
    return await _commit_and_reload(session, room)


async def set_weekday_price(
    session: AsyncSession, *, room: Room, weekday_index: int, price: Decimal
) -> Room:
    """Set the fallback price for a weekday (0=Sunday)."""
    if not 0 <= weekday_index <= 6:
        raise ValueError("Weekday index must be between 0 and 6")
    rules = [
        *parse_weekday_prices(room.weekday_prices),
        WeekdayPriceRule(weekday_index=weekday_index, price=to_money(price)),
    ]
    room.weekday_prices = serialize_weekday_prices(WeekdayPriceStore.from_rules(rules))
    return await _commit_and_reload(session, room)


async def remove_weekday_price(
    session: AsyncSession, *, room: Room, weekday_index: int
) -> Room:
    rules = [
        rule
        for rule in parse_weekday_prices(room.weekday_prices)
        if rule.weekday_index != weekday_index
    ]
    room.weekday_prices = serialize_weekday_prices(WeekdayPriceStore.from_rules(rules))
    return await _commit_and_reload(session, room)


async def replace_quotas(
    session: AsyncSession, *, room: Room, quotas: Sequence[QuotaOverride]
) -> Room:
    """Replace every quota row of a room; duplicate dates keep the last count."""
    store = QuotaStore.from_quotas(quotas)
    room.quotas.clear()
    # Flush the orphan deletes before inserting rows for the same dates.
    await session.flush()
    session.add_all(
        RoomQuota(room_id=room.id, date=entry.date, quota=entry.count)
        for entry in store.entries()
    )
    logger.info("Replaced quotas for room %s with %s dates", room.id, len(store.entries()))
    return await _commit_and_reload(session, room)


async def set_quota(
    session: AsyncSession, *, room: Room, day: datetime.date, count: int
) -> Room:
    if count < 0:
        raise ValueError("Quota must not be negative")
    existing = next((row for row in room.quotas if row.date == day), None)
    if existing is None:
        session.add(RoomQuota(room_id=room.id, date=day, quota=count))
    else:
        existing.quota = count
    return await _commit_and_reload(session, room)
