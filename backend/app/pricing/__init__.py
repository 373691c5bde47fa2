"""Pricing and availability resolution shared by every booking surface."""

from app.pricing.overrides import (
    DailyPriceOverride,
    PriceOverrideStore,
    QuotaOverride,
    QuotaStore,
    RoomSnapshot,
    WeekdayPriceRule,
    WeekdayPriceStore,
)
from app.pricing.resolver import (
    NightQuote,
    PriceSource,
    PricedNight,
    StayQuote,
    StayRequest,
    StayStatus,
    UnpricedNight,
    resolve_calendar,
    resolve_night,
    resolve_stay,
)

__all__ = [
    "DailyPriceOverride",
    "NightQuote",
    "PriceOverrideStore",
    "PriceSource",
    "PricedNight",
    "QuotaOverride",
    "QuotaStore",
    "RoomSnapshot",
    "StayQuote",
    "StayRequest",
    "StayStatus",
    "UnpricedNight",
    "WeekdayPriceRule",
    "WeekdayPriceStore",
    "resolve_calendar",
    "resolve_night",
    "resolve_stay",
]
