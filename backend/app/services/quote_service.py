"""Stay quotes and price calendars computed from stored room overrides."""

from __future__ import annotations

import datetime
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.pricing.resolver import (
    NightQuote,
    StayQuote,
    StayRequest,
    resolve_calendar,
    resolve_stay,
)
from app.services.room_service import (
    InvalidDateRangeError,
    build_snapshot,
    require_room,
)


async def quote_stay(
    session: AsyncSession,
    *,
    room_id: uuid.UUID,
    request: StayRequest,
) -> StayQuote:
    """Produce the authoritative quote for a stay in the given room."""
    room = await require_room(session, room_id=room_id)
    settings = get_settings()
    return resolve_stay(
        request,
        build_snapshot(room),
        low_availability_threshold=settings.low_availability_threshold,
    )


async def price_calendar(
    session: AsyncSession,
    *,
    room_id: uuid.UUID,
    start: datetime.date,
    end: datetime.date,
) -> list[NightQuote]:
    """Resolve every date in ``[start, end]`` for calendar display."""
    if end < start:
        raise InvalidDateRangeError("End date must not be before start date")
    max_days = get_settings().max_calendar_days
    if (end - start).days + 1 > max_days:
        raise InvalidDateRangeError(f"Calendar range is limited to {max_days} days")
    room = await require_room(session, room_id=room_id)
    return resolve_calendar(start, end, build_snapshot(room))
