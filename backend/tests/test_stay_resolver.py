"""Night resolution and stay aggregation."""
from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from app.pricing import (
    PriceSource,
    PricedNight,
    RoomSnapshot,
    StayRequest,
    StayStatus,
    UnpricedNight,
    resolve_calendar,
    resolve_night,
    resolve_stay,
)

JUNE_1 = datetime.date(2025, 6, 1)  # Sunday
JUNE_2 = datetime.date(2025, 6, 2)  # Monday
JUNE_3 = datetime.date(2025, 6, 3)


def _stay(check_in: datetime.date, nights: int) -> StayRequest:
    return StayRequest(check_in=check_in, check_out=check_in + datetime.timedelta(days=nights))


def test_exact_dates_with_a_zero_quota_night_are_sold_out() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[
            {"date": "2025-06-01", "price": 1000},
            {"date": "2025-06-02", "price": 1200},
        ],
        quotas=[{"date": "2025-06-01", "count": 2}, {"date": "2025-06-02", "count": 0}],
    )
    quote = resolve_stay(_stay(JUNE_1, 2), room)

    assert quote.night_count == 2
    assert quote.total_price == Decimal("2200.00")
    assert quote.all_nights_priced is True
    assert quote.min_available_quota == 0
    assert quote.sold_out is True
    assert quote.status is StayStatus.SOLD_OUT
    assert quote.message == "this room is sold out for these dates"


def test_weekday_fallback_prices_a_monday() -> None:
    room = RoomSnapshot.from_raw(weekday_prices=[{"weekdayIndex": 1, "price": 500}])
    quote = resolve_stay(_stay(JUNE_2, 1), room)

    assert quote.total_price == Decimal("500.00")
    assert quote.all_nights_priced is True
    night = quote.nights[0]
    assert isinstance(night, PricedNight)
    assert night.source is PriceSource.WEEKDAY
    assert night.quota == 0
    assert quote.min_available_quota == 0
    assert quote.sold_out is True


def test_weekday_night_uses_a_quota_record_when_present() -> None:
    room = RoomSnapshot.from_raw(
        weekday_prices=[{"weekdayIndex": 1, "price": 500}],
        quotas=[{"date": "2025-06-02", "count": 4}],
    )
    quote = resolve_stay(_stay(JUNE_2, 1), room)

    assert quote.min_available_quota == 4
    assert quote.sold_out is False
    assert quote.status is StayStatus.AVAILABLE
    assert quote.low_availability is True


def test_weekday_night_without_quota_record_blocks_a_mixed_stay() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[{"date": "2025-06-01", "price": 1000}],
        weekday_prices=[{"weekdayIndex": 1, "price": 500}],
        quotas=[{"date": "2025-06-01", "count": 3}],
    )
    quote = resolve_stay(_stay(JUNE_1, 2), room)

    assert quote.total_price == Decimal("1500.00")
    assert quote.nights[1].quota == 0
    assert quote.min_available_quota == 0
    assert quote.sold_out is True
    assert quote.status is StayStatus.SOLD_OUT


def test_no_overrides_leaves_first_night_unpriced() -> None:
    quote = resolve_stay(_stay(JUNE_1, 3), RoomSnapshot())

    assert quote.all_nights_priced is False
    assert quote.first_unpriced_date == JUNE_1
    assert quote.sold_out is True
    assert quote.status is StayStatus.UNPRICED
    assert quote.message == "no pricing configured for 2025-06-01"
    assert quote.total_price == Decimal("0.00")


def test_aggregation_stops_at_first_unpriced_night() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[
            {"date": "2025-06-01", "price": 1000},
            {"date": "2025-06-03", "price": 1300},
        ],
        quotas=[{"date": "2025-06-01", "count": 5}, {"date": "2025-06-03", "count": 5}],
    )
    quote = resolve_stay(_stay(JUNE_1, 3), room)

    assert quote.first_unpriced_date == JUNE_2
    assert quote.total_price == Decimal("1000.00")
    assert len(quote.nights) == 2
    assert isinstance(quote.nights[-1], UnpricedNight)
    assert quote.status is StayStatus.UNPRICED


def test_exact_date_beats_weekday_price() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[{"date": "2025-06-02", "price": 1200}],
        weekday_prices=[{"weekdayIndex": 1, "price": 500}],
        quotas=[{"date": "2025-06-02", "count": 3}],
    )
    night = resolve_night(JUNE_2, room)

    assert isinstance(night, PricedNight)
    assert night.amount == Decimal("1200.00")
    assert night.source is PriceSource.EXACT_DATE
    assert night.quota == 3


def test_exact_date_night_without_quota_record_counts_as_zero() -> None:
    room = RoomSnapshot.from_raw(daily_prices=[{"date": "2025-06-01", "price": 1000}])
    night = resolve_night(JUNE_1, room)

    assert isinstance(night, PricedNight)
    assert night.quota == 0
    assert resolve_stay(_stay(JUNE_1, 1), room).sold_out is True


@pytest.mark.parametrize(
    ("check_in", "check_out"),
    [(JUNE_1, JUNE_1), (JUNE_3, JUNE_1)],
)
def test_empty_or_reversed_range_is_invalid(
    check_in: datetime.date, check_out: datetime.date
) -> None:
    room = RoomSnapshot.from_raw(daily_prices=[{"date": "2025-06-01", "price": 1000}])
    quote = resolve_stay(StayRequest(check_in=check_in, check_out=check_out), room)

    assert quote.night_count == 0
    assert quote.total_price == Decimal("0.00")
    assert quote.all_nights_priced is False
    assert quote.sold_out is True
    assert quote.status is StayStatus.INVALID_DATES
    assert quote.message == "date selection invalid"
    assert quote.nights == ()


def test_minimum_quota_and_low_availability_threshold() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[
            {"date": "2025-06-01", "price": 100},
            {"date": "2025-06-02", "price": 100},
        ],
        quotas=[{"date": "2025-06-01", "count": 9}, {"date": "2025-06-02", "count": 6}],
    )
    quote = resolve_stay(_stay(JUNE_1, 2), room)
    assert quote.min_available_quota == 6
    assert quote.low_availability is False

    tight = resolve_stay(_stay(JUNE_1, 2), room, low_availability_threshold=6)
    assert tight.low_availability is True
    assert tight.sold_out is False


def test_resolution_is_repeatable() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[{"date": "2025-06-01", "price": "99.99"}],
        weekday_prices=[{"day": 1, "price": "0.01"}],
        quotas=[{"date": "2025-06-01", "count": 1}, {"date": "2025-06-02", "count": 1}],
    )
    first = resolve_stay(_stay(JUNE_1, 2), room)
    second = resolve_stay(_stay(JUNE_1, 2), room)

    assert first == second
    assert first.total_price == Decimal("100.00")
    assert first.to_dict()["total_price"] == "100.00"


def test_guest_count_must_be_positive() -> None:
    with pytest.raises(ValueError):
        StayRequest(check_in=JUNE_1, check_out=JUNE_2, guest_count=0)


def test_calendar_includes_both_ends() -> None:
    room = RoomSnapshot.from_raw(
        daily_prices=[{"date": "2025-06-01", "price": 1000}],
        weekday_prices=[{"weekdayIndex": 2, "price": 700}],
    )
    nights = resolve_calendar(JUNE_1, JUNE_3, room)

    assert [night.date for night in nights] == [JUNE_1, JUNE_2, JUNE_3]
    assert [night.kind for night in nights] == ["priced", "unpriced", "priced"]
    assert nights[2].to_dict() == {
        "date": "2025-06-03",
        "kind": "priced",
        "amount": "700.00",
        "quota": 0,
        "source": "weekday",
    }


def test_calendar_reaches_the_last_representable_date() -> None:
    last = datetime.date.max
    room = RoomSnapshot.from_raw(daily_prices=[{"date": last.isoformat(), "price": 10}])
    nights = resolve_calendar(last - datetime.timedelta(days=1), last, room)

    assert [night.kind for night in nights] == ["unpriced", "priced"]
