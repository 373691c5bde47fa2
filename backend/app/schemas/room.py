"""Room and calendar override schemas."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.room import Room
from app.pricing.overrides import parse_daily_prices, parse_weekday_prices


class DailyPriceRead(BaseModel):
    """Exact-date price override."""

    date: datetime.date
    price: Decimal


class WeekdayPriceRead(BaseModel):
    """Weekday fallback price; 0 is Sunday."""

    weekday_index: int
    price: Decimal


class QuotaEntry(BaseModel):
    """Remaining rooms on one date."""

    date: datetime.date
    count: int = Field(ge=0)


class RoomRead(BaseModel):
    """Room with its parsed override lists."""

    id: uuid.UUID
    name: str
    capacity: int
    room_count: int
    daily_prices: list[DailyPriceRead] = Field(default_factory=list)
    weekday_prices: list[WeekdayPriceRead] = Field(default_factory=list)
    quotas: list[QuotaEntry] = Field(default_factory=list)
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_room(cls, room: Room) -> RoomRead:
        return cls(
            id=room.id,
            name=room.name,
            capacity=room.capacity,
            room_count=room.room_count,
            daily_prices=[
                DailyPriceRead(date=entry.date, price=entry.price)
                for entry in parse_daily_prices(room.daily_prices)
            ],
            weekday_prices=[
                WeekdayPriceRead(weekday_index=rule.weekday_index, price=rule.price)
                for rule in parse_weekday_prices(room.weekday_prices)
            ],
            quotas=[QuotaEntry(date=row.date, count=row.quota) for row in room.quotas],
            created_at=room.created_at,
            updated_at=room.updated_at,
        )


class DailyPriceUpdate(BaseModel):
    """Price for a single date."""

    price: Decimal = Field(ge=Decimal("0"), max_digits=12, decimal_places=2)


class DateRangePriceUpdate(BaseModel):
    """Same price for every date from ``start_date`` to ``end_date`` inclusive."""

    start_date: datetime.date
    end_date: datetime.date
    price: Decimal = Field(ge=Decimal("0"), max_digits=12, decimal_places=2)


class WeekdayPriceUpdate(BaseModel):
    """Fallback price for a weekday."""

    price: Decimal = Field(ge=Decimal("0"), max_digits=12, decimal_places=2)


class QuotaUpdate(BaseModel):
    """Remaining rooms for a single date."""

    count: int = Field(ge=0)
