"""Stay quote schema definitions."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.pricing.resolver import PriceSource, StayStatus


class StayQuoteRequest(BaseModel):
    """Dates and party size for a quote; ``check_out`` is exclusive."""

    check_in: datetime.date
    check_out: datetime.date
    guest_count: int = Field(default=1, ge=1)


class NightQuoteRead(BaseModel):
    """One resolved night."""

    date: datetime.date
    kind: Literal["priced", "unpriced"]
    amount: Decimal | None = None
    quota: int | None = None
    source: PriceSource | None = None

    model_config = ConfigDict(from_attributes=True)


class StayQuoteRead(BaseModel):
    """Aggregated price and bookability verdict."""

    check_in: datetime.date
    check_out: datetime.date
    night_count: int
    total_price: Decimal
    all_nights_priced: bool
    first_unpriced_date: datetime.date | None
    min_available_quota: int
    sold_out: bool
    status: StayStatus
    message: str
    low_availability: bool
    nights: list[NightQuoteRead]

    model_config = ConfigDict(from_attributes=True)
