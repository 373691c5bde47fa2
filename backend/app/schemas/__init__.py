"""Schema exports."""

from app.schemas.quote import NightQuoteRead, StayQuoteRead, StayQuoteRequest
from app.schemas.reservation import ReservationCreate, ReservationRead
from app.schemas.room import (
    DailyPriceRead,
    DailyPriceUpdate,
    DateRangePriceUpdate,
    QuotaEntry,
    QuotaUpdate,
    RoomRead,
    WeekdayPriceRead,
    WeekdayPriceUpdate,
)

__all__ = [
    "DailyPriceRead",
    "DailyPriceUpdate",
    "DateRangePriceUpdate",
    "NightQuoteRead",
    "QuotaEntry",
    "QuotaUpdate",
    "ReservationCreate",
    "ReservationRead",
    "RoomRead",
    "StayQuoteRead",
    "StayQuoteRequest",
    "WeekdayPriceRead",
    "WeekdayPriceUpdate",
]
