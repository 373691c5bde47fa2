"""Room quote, calendar and override editing API tests."""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_quote_sums_exact_date_prices(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    response = await client.post(
        f"/api/v1/rooms/{room_id}/quote",
        json={"check_in": "2025-06-01", "check_out": "2025-06-03", "guest_count": 2},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["night_count"] == 2
    assert body["total_price"] == "2200.00"
    assert body["all_nights_priced"] is True
    assert body["min_available_quota"] == 2
    assert body["sold_out"] is False
    assert body["status"] == "available"
    assert body["low_availability"] is True
    assert [night["source"] for night in body["nights"]] == ["exact_date", "exact_date"]


async def test_quote_reports_first_unpriced_night(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    response = await client.post(
        f"/api/v1/rooms/{room_id}/quote",
        json={"check_in": "2025-06-02", "check_out": "2025-06-05"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["all_nights_priced"] is False
    assert body["first_unpriced_date"] == "2025-06-03"
    assert body["sold_out"] is True
    assert body["status"] == "unpriced"
    assert body["message"] == "no pricing configured for 2025-06-03"


async def test_quote_with_invalid_dates(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    response = await client.post(
        f"/api/v1/rooms/{room_id}/quote",
        json={"check_in": "2025-06-02", "check_out": "2025-06-02"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "invalid_dates"
    assert body["message"] == "date selection invalid"
    assert body["total_price"] == "0.00"
    assert body["sold_out"] is True


async def test_quote_unknown_room_returns_404(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    response = await client.post(
        f"/api/v1/rooms/{uuid.uuid4()}/quote",
        json={"check_in": "2025-06-01", "check_out": "2025-06-02"},
    )
    assert response.status_code == 404


async def test_calendar_lists_every_date(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    response = await client.get(
        f"/api/v1/rooms/{room_id}/calendar",
        params={"start": "2025-06-01", "end": "2025-06-07"},
    )
    assert response.status_code == 200
    nights = response.json()
    assert [night["date"] for night in nights][0] == "2025-06-01"
    assert len(nights) == 7
    assert [night["kind"] for night in nights] == [
        "priced",
        "priced",
        "unpriced",
        "unpriced",
        "unpriced",
        "priced",
        "unpriced",
    ]
    friday = nights[5]
    assert friday["amount"] == "800.00"
    assert friday["source"] == "weekday"
    assert friday["quota"] == 1

    reversed_range = await client.get(
        f"/api/v1/rooms/{room_id}/calendar",
        params={"start": "2025-06-07", "end": "2025-06-01"},
    )
    assert reversed_range.status_code == 400


async def test_admin_edits_are_visible_to_quotes(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    range_resp = await client.post(
        f"/api/v1/rooms/{room_id}/daily-prices/range",
        json={"start_date": "2025-06-03", "end_date": "2025-06-04", "price": "950.00"},
    )
    assert range_resp.status_code == 200
    dates = [entry["date"] for entry in range_resp.json()["daily_prices"]]
    assert dates == ["2025-06-01", "2025-06-02", "2025-06-03", "2025-06-04"]

    quota_resp = await client.put(
        f"/api/v1/rooms/{room_id}/quotas",
        json=[
            {"date": "2025-06-03", "count": 4},
            {"date": "2025-06-04", "count": 4},
        ],
    )
    assert quota_resp.status_code == 200
    assert [entry["date"] for entry in quota_resp.json()["quotas"]] == [
        "2025-06-03",
        "2025-06-04",
    ]

    quote = await client.post(
        f"/api/v1/rooms/{room_id}/quote",
        json={"check_in": "2025-06-03", "check_out": "2025-06-05"},
    )
    assert quote.json()["total_price"] == "1900.00"
    assert quote.json()["min_available_quota"] == 4

    single = await client.put(
        f"/api/v1/rooms/{room_id}/quotas/2025-06-04", json={"count": 0}
    )
    assert single.status_code == 200
    quote = await client.post(
        f"/api/v1/rooms/{room_id}/quote",
        json={"check_in": "2025-06-03", "check_out": "2025-06-05"},
    )
    assert quote.json()["status"] == "sold_out"

    removed = await client.delete(f"/api/v1/rooms/{room_id}/daily-prices/2025-06-04")
    assert removed.status_code == 200
    quote = await client.post(
        f"/api/v1/rooms/{room_id}/quote",
        json={"check_in": "2025-06-03", "check_out": "2025-06-05"},
    )
    assert quote.json()["first_unpriced_date"] == "2025-06-04"


async def test_weekday_price_endpoints(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    response = await client.put(
        f"/api/v1/rooms/{room_id}/weekday-prices/2", json={"price": "640"}
    )
    assert response.status_code == 200
    rules = response.json()["weekday_prices"]
    assert [(rule["weekday_index"], rule["price"]) for rule in rules] == [
        (2, "640.00"),
        (5, "800.00"),
    ]

    out_of_range = await client.put(
        f"/api/v1/rooms/{room_id}/weekday-prices/7", json={"price": "640"}
    )
    assert out_of_range.status_code == 422

    removed = await client.delete(f"/api/v1/rooms/{room_id}/weekday-prices/5")
    assert removed.status_code == 200
    assert [rule["weekday_index"] for rule in removed.json()["weekday_prices"]] == [2]


async def test_negative_prices_and_quotas_are_rejected(
    app_context: dict[str, object],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    price = await client.put(
        f"/api/v1/rooms/{room_id}/daily-prices/2025-06-10", json={"price": "-1"}
    )
    assert price.status_code == 422

    quota = await client.put(
        f"/api/v1/rooms/{room_id}/quotas/2025-06-10", json={"count": -3}
    )
    assert quota.status_code == 422

    room = await client.get(f"/api/v1/rooms/{room_id}")
    assert room.status_code == 200
    assert "2025-06-10" not in [entry["date"] for entry in room.json()["daily_prices"]]


async def test_ranges_at_the_calendar_edges(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    room_id = app_context["room_id"]

    last_day = await client.get(
        f"/api/v1/rooms/{room_id}/calendar",
        params={"start": "9999-12-31", "end": "9999-12-31"},
    )
    assert last_day.status_code == 200
    assert [night["date"] for night in last_day.json()] == ["9999-12-31"]

    pinned = await client.post(
        f"/api/v1/rooms/{room_id}/daily-prices/range",
        json={"start_date": "9999-12-30", "end_date": "9999-12-31", "price": "10"},
    )
    assert pinned.status_code == 200
    assert pinned.json()["daily_prices"][-1]["date"] == "9999-12-31"

    too_long = await client.post(
        f"/api/v1/rooms/{room_id}/daily-prices/range",
        json={"start_date": "0001-01-01", "end_date": "9999-12-31", "price": "10"},
    )
    assert too_long.status_code == 400
