"""Night and stay resolution over a room's calendar overrides."""

from __future__ import annotations

import datetime
import enum
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal

from app.pricing.overrides import RoomSnapshot, money_str, to_money

DEFAULT_LOW_AVAILABILITY_THRESHOLD = 5


class PriceSource(str, enum.Enum):
    """Which override priced a night."""

    EXACT_DATE = "exact_date"
    WEEKDAY = "weekday"


class StayStatus(str, enum.Enum):
    """Overall verdict for a requested stay."""

    AVAILABLE = "available"
    INVALID_DATES = "invalid_dates"
    UNPRICED = "unpriced"
    SOLD_OUT = "sold_out"


@dataclass(frozen=True, slots=True)
class PricedNight:
    """A night with a resolved price.

    ``quota`` is 0 when the date has no quota record.
    """

    date: datetime.date
    amount: Decimal
    quota: int
    source: PriceSource
    kind: Literal["priced"] = "priced"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "kind": self.kind,
            "amount": money_str(self.amount),
            "quota": self.quota,
            "source": self.source.value,
        }


@dataclass(frozen=True, slots=True)
class UnpricedNight:
    """A night no override prices."""

    date: datetime.date
    kind: Literal["unpriced"] = "unpriced"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "kind": self.kind,
            "amount": None,
            "quota": None,
            "source": None,
        }


NightQuote = PricedNight | UnpricedNight


@dataclass(frozen=True, slots=True)
class StayRequest:
    """Requested stay; ``check_out`` is exclusive."""

    check_in: datetime.date
    check_out: datetime.date
    guest_count: int = 1

    def __post_init__(self) -> None:
        if self.guest_count < 1:
            raise ValueError("Guest count must be at least 1")


@dataclass(frozen=True, slots=True)
class StayQuote:
    """Aggregate price and bookability verdict for a stay."""

    check_in: datetime.date
    check_out: datetime.date
    night_count: int
    total_price: Decimal
    all_nights_priced: bool
    first_unpriced_date: datetime.date | None
    min_available_quota: int
    sold_out: bool
    status: StayStatus
    low_availability: bool
    nights: tuple[NightQuote, ...]

    @property
    def bookable(self) -> bool:
        return not self.sold_out

    @property
    def message(self) -> str:
        return stay_message(self.status, self.first_unpriced_date)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the quote to plain types for responses."""
        return {
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "night_count": self.night_count,
            "total_price": money_str(self.total_price),
            "all_nights_priced": self.all_nights_priced,
            "first_unpriced_date": (
                self.first_unpriced_date.isoformat()
                if self.first_unpriced_date
                else None
            ),
            "min_available_quota": self.min_available_quota,
            "sold_out": self.sold_out,
            "status": self.status.value,
            "message": self.message,
            "low_availability": self.low_availability,
            "nights": [night.to_dict() for night in self.nights],
        }


def stay_message(status: StayStatus, first_unpriced_date: datetime.date | None) -> str:
    if status is StayStatus.INVALID_DATES:
        return "date selection invalid"
    if status is StayStatus.UNPRICED:
        day = first_unpriced_date.isoformat() if first_unpriced_date else "unknown date"
        return f"no pricing configured for {day}"
    if status is StayStatus.SOLD_OUT:
        return "this room is sold out for these dates"
    return "available"


def count_nights(check_in: datetime.date, check_out: datetime.date) -> int:
    return max((check_out - check_in).days, 0)


def iter_nights(check_in: datetime.date, check_out: datetime.date) -> Iterator[datetime.date]:
    """Yield every night from ``check_in`` up to, not including, ``check_out``."""
    current = check_in
    while current < check_out:
        yield current
        current += datetime.timedelta(days=1)


def iter_dates(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Yield every date of the inclusive range ``[start, end]``."""
    for offset in range((end - start).days + 1):
        yield start + datetime.timedelta(days=offset)


def resolve_night(day: datetime.date, room: RoomSnapshot) -> NightQuote:
    """Price one night: exact date first, then weekday fallback.

    Inventory always comes from the date's quota record, whichever override
    priced the night; a missing record means no rooms are left.
    """
    quota = room.quotas.get(day) or 0
    override = room.daily_prices.get(day)
    if override is not None:
        return PricedNight(
            date=day,
            amount=override.price,
            quota=quota,
            source=PriceSource.EXACT_DATE,
        )

    rule = room.weekday_prices.get(day)
    if rule is not None:
        return PricedNight(
            date=day,
            amount=rule.price,
            quota=quota,
            source=PriceSource.WEEKDAY,
        )

    return UnpricedNight(date=day)


def resolve_stay(
    request: StayRequest,
    room: RoomSnapshot,
    *,
    low_availability_threshold: int = DEFAULT_LOW_AVAILABILITY_THRESHOLD,
) -> StayQuote:
    """Resolve every night of a stay and decide whether it can be booked."""
    night_count = count_nights(request.check_in, request.check_out)
    if night_count == 0:
        return StayQuote(
            check_in=request.check_in,
            check_out=request.check_out,
            night_count=0,
            total_price=to_money(0),
            all_nights_priced=False,
            first_unpriced_date=None,
            min_available_quota=0,
            sold_out=True,
            status=StayStatus.INVALID_DATES,
            low_availability=False,
            nights=(),
        )

    total = Decimal("0")
    nights: list[NightQuote] = []
    first_unpriced: datetime.date | None = None
    min_quota: int | None = None

    for day in iter_nights(request.check_in, request.check_out):
        night = resolve_night(day, room)
        nights.append(night)
        if isinstance(night, UnpricedNight):
            first_unpriced = day
            break
        total += night.amount
        min_quota = night.quota if min_quota is None else min(min_quota, night.quota)

    all_priced = first_unpriced is None
    available_quota = min_quota if min_quota is not None else 0
    sold_out = not all_priced or available_quota <= 0 or night_count < 1

    if not all_priced:
        status = StayStatus.UNPRICED
    elif sold_out:
        status = StayStatus.SOLD_OUT
    else:
        status = StayStatus.AVAILABLE

    return StayQuote(
        check_in=request.check_in,
        check_out=request.check_out,
        night_count=night_count,
        total_price=to_money(total),
        all_nights_priced=all_priced,
        first_unpriced_date=first_unpriced,
        min_available_quota=available_quota,
        sold_out=sold_out,
        status=status,
        low_availability=(
            not sold_out and available_quota <= low_availability_threshold
        ),
        nights=tuple(nights),
    )


def resolve_calendar(
    start: datetime.date, end: datetime.date, room: RoomSnapshot
) -> list[NightQuote]:
    """Resolve each date of the inclusive range ``[start, end]``."""
    return [resolve_night(day, room) for day in iter_dates(start, end)]


__all__ = [
    "DEFAULT_LOW_AVAILABILITY_THRESHOLD",
    "NightQuote",
    "PriceSource",
    "PricedNight",
    "StayQuote",
    "StayRequest",
    "StayStatus",
    "UnpricedNight",
    "count_nights",
    "iter_dates",
    "iter_nights",
    "resolve_calendar",
    "resolve_night",
    "resolve_stay",
    "stay_message",
]
