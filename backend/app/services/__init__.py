"""Service layer exports."""
from app.services import (
    quote_service,
    reservation_service,
    room_service,
)

__all__ = [
    "quote_service",
    "reservation_service",
    "room_service",
]
