"""ORM models package export."""

from app.models.reservation import PaymentMethod, Reservation, ReservationStatus
from app.models.room import Room, RoomQuota

__all__ = [
    "PaymentMethod",
    "Reservation",
    "ReservationStatus",
    "Room",
    "RoomQuota",
]
