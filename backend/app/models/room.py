"""Room type inventory and its calendar overrides."""

from __future__ import annotations

import datetime
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.reservation import Reservation


class Room(TimestampMixin, Base):
    """A bookable room type.

    ``daily_prices`` and ``weekday_prices`` hold the serialized override lists
    edited by the admin console.
    """

    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer(), nullable=False, default=2)
    room_count: Mapped[int] = mapped_column(Integer(), nullable=False, default=1)
    daily_prices: Mapped[str | None] = mapped_column(Text())
    weekday_prices: Mapped[str | None] = mapped_column(Text())

    quotas: Mapped[list["RoomQuota"]] = relationship(
        "RoomQuota",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="RoomQuota.date",
    )
    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="room"
    )


class RoomQuota(Base):
    """Remaining bookable rooms of a room type on one date."""

    __tablename__ = "room_quotas"
    __table_args__ = (UniqueConstraint("room_id", "date", name="uq_room_quota_date"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[datetime.date] = mapped_column(Date(), nullable=False)
    quota: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)

    room: Mapped["Room"] = relationship("Room", back_populates="quotas")
