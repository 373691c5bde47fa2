"""Pydantic schemas for reservations."""
from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.reservation import PaymentMethod, ReservationStatus


class ReservationCreate(BaseModel):
    """Booking submission.

    ``total_price`` is what the client displayed; it is only compared against
    the recomputed total and never stored as the reservation price.
    """

    room_id: uuid.UUID
    check_in: datetime.date
    check_out: datetime.date
    guest_count: int = Field(ge=1)
    total_price: Decimal | None = Field(
        default=None, ge=Decimal("0"), max_digits=12, decimal_places=2
    )
    payment_method: PaymentMethod = PaymentMethod.ON_SITE


class ReservationRead(BaseModel):
    """Serialized reservation representation."""

    id: uuid.UUID
    room_id: uuid.UUID
    check_in: datetime.date
    check_out: datetime.date
    guest_count: int
    total_price: Decimal
    client_total_price: Decimal | None = None
    status: ReservationStatus
    payment_method: PaymentMethod
    reservation_code: str
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
