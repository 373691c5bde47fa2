"""Reservation models."""
from __future__ import annotations

import datetime
import enum
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.room import Room


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"


class PaymentMethod(str, enum.Enum):
    """How the guest intends to pay."""

    ON_SITE = "on_site"
    CREDIT_CARD = "credit_card"


class Reservation(TimestampMixin, Base):
    """A booked stay in a room type."""

    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    check_in: Mapped[datetime.date] = mapped_column(Date(), nullable=False)
    check_out: Mapped[datetime.date] = mapped_column(Date(), nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer(), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    client_total_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.PENDING, nullable=False
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod), default=PaymentMethod.ON_SITE, nullable=False
    )
    reservation_code: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False
    )
    # JSON list of the quota row ids this booking took a room from.
    held_quota_ids: Mapped[str | None] = mapped_column(Text())

    room: Mapped["Room"] = relationship("Room", back_populates="reservations")
