"""Room quotes, price calendars and calendar override editing."""

from __future__ import annotations

import datetime
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.room import Room
from app.pricing.overrides import QuotaOverride
from app.pricing.resolver import StayRequest
from app.schemas.quote import NightQuoteRead, StayQuoteRead, StayQuoteRequest
from app.schemas.room import (
    DailyPriceUpdate,
    DateRangePriceUpdate,
    QuotaEntry,
    QuotaUpdate,
    RoomRead,
    WeekdayPriceUpdate,
)
from app.services import quote_service, room_service

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]


async def _load_room(session: AsyncSession, room_id: uuid.UUID) -> Room:
    room = await room_service.get_room(session, room_id=room_id)
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


@router.get("/{room_id}", response_model=RoomRead, summary="Get room with overrides")
async def get_room(room_id: uuid.UUID, session: SessionDep) -> RoomRead:
    room = await _load_room(session, room_id)
    return RoomRead.from_room(room)


@router.post(
    "/{room_id}/quote", response_model=StayQuoteRead, summary="Quote a stay"
)
async def quote_stay(
    room_id: uuid.UUID, payload: StayQuoteRequest, session: SessionDep
) -> StayQuoteRead:
    try:
        quote = await quote_service.quote_stay(
            session,
            room_id=room_id,
            request=StayRequest(
                check_in=payload.check_in,
                check_out=payload.check_out,
                guest_count=payload.guest_count,
            ),
        )
    except room_service.RoomNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return StayQuoteRead.model_validate(quote)


@router.get(
    "/{room_id}/calendar",
    response_model=list[NightQuoteRead],
    summary="Per-night prices for a date range",
)
async def price_calendar(
    room_id: uuid.UUID,
    session: SessionDep,
    start: Annotated[datetime.date, Query()],
    end: Annotated[datetime.date, Query()],
) -> list[NightQuoteRead]:
    try:
        nights = await quote_service.price_calendar(
            session, room_id=room_id, start=start, end=end
        )
    except room_service.RoomNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except room_service.InvalidDateRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [NightQuoteRead.model_validate(night) for night in nights]


@router.put(
    "/{room_id}/daily-prices/{day}",
    response_model=RoomRead,
    summary="Set the price for one date",
)
async def set_daily_price(
    room_id: uuid.UUID, day: datetime.date, payload: DailyPriceUpdate, session: SessionDep
) -> RoomRead:
    room = await _load_room(session, room_id)
    updated = await room_service.set_daily_price(
        session, room=room, day=day, price=payload.price
    )
    return RoomRead.from_room(updated)


@router.delete(
    "/{room_id}/daily-prices/{day}",
    response_model=RoomRead,
    summary="Remove the price for one date",
)
async def remove_daily_price(
    room_id: uuid.UUID, day: datetime.date, session: SessionDep
) -> RoomRead:
    room = await _load_room(session, room_id)
    updated = await room_service.remove_daily_price(session, room=room, day=day)
    return RoomRead.from_room(updated)


@router.post(
    "/{room_id}/daily-prices/range",
    response_model=RoomRead,
    summary="Set one price for every date of a range",
)
async def set_date_range_price(
    room_id: uuid.UUID, payload: DateRangePriceUpdate, session: SessionDep
) -> RoomRead:
    room = await _load_room(session, room_id)
    try:
        updated = await room_service.set_date_range_price(
            session,
            room=room,
            start_date=payload.start_date,
            end_date=payload.end_date,
            price=payload.price,
        )
    except room_service.InvalidDateRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return RoomRead.from_room(updated)


@router.put(
    "/{room_id}/weekday-prices/{weekday_index}",
    response_model=RoomRead,
    summary="Set the fallback price for a weekday",
)
async def set_weekday_price(
    room_id: uuid.UUID,
    weekday_index: Annotated[int, Path(ge=0, le=6)],
    payload: WeekdayPriceUpdate,
    session: SessionDep,
) -> RoomRead:
    room = await _load_room(session, room_id)
    updated = await room_service.set_weekday_price(
        session, room=room, weekday_index=weekday_index, price=payload.price
    )
    return RoomRead.from_room(updated)


@router.delete(
    "/{room_id}/weekday-prices/{weekday_index}",
    response_model=RoomRead,
    summary="Remove the fallback price for a weekday",
)
async def remove_weekday_price(
    room_id: uuid.UUID,
    weekday_index: Annotated[int, Path(ge=0, le=6)],
    session: SessionDep,
) -> RoomRead:
    room = await _load_room(session, room_id)
    updated = await room_service.remove_weekday_price(
        session, room=room, weekday_index=weekday_index
    )
    return RoomRead.from_room(updated)


@router.put(
    "/{room_id}/quotas",
    response_model=RoomRead,
    summary="Replace all quotas of a room",
)
async def replace_quotas(
    room_id: uuid.UUID, payload: list[QuotaEntry], session: SessionDep
) -> RoomRead:
    room = await _load_room(session, room_id)
    updated = await room_service.replace_quotas(
        session,
        room=room,
        quotas=[QuotaOverride(date=entry.date, count=entry.count) for entry in payload],
    )
    return RoomRead.from_room(updated)


@router.put(
    "/{room_id}/quotas/{day}",
    response_model=RoomRead,
    summary="Set the quota for one date",
)
async def set_quota(
    room_id: uuid.UUID, day: datetime.date, payload: QuotaUpdate, session: SessionDep
) -> RoomRead:
    room = await _load_room(session, room_id)
    updated = await room_service.set_quota(
        session, room=room, day=day, count=payload.count
    )
    return RoomRead.from_room(updated)
