"""Reservation submission with server-side price verification."""
from __future__ import annotations

import datetime
import json
import logging
import secrets
import uuid
from decimal import Decimal
from typing import Literal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.models.reservation import PaymentMethod, Reservation, ReservationStatus
from app.models.room import Room
from app.pricing.overrides import money_str, parse_amount
from app.pricing.resolver import (
    PricedNight,
    StayQuote,
    StayRequest,
    resolve_stay,
)
from app.services.room_service import build_snapshot, require_room

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CANCELED},
    ReservationStatus.CANCELED: set(),
}


class StayUnavailableError(ValueError):
    """Raised when the authoritative quote says the stay cannot be booked."""

    def __init__(self, quote: StayQuote) -> None:
        super().__init__(quote.message)
        self.quote = quote


class PriceMismatchError(ValueError):
    """Raised when a submitted total disagrees with the authoritative total."""

    def __init__(self, *, submitted: Decimal, authoritative: Decimal) -> None:
        super().__init__(
            f"Submitted total {money_str(submitted)} does not match "
            f"the current price {money_str(authoritative)}"
        )
        self.submitted = submitted
        self.authoritative = authoritative


class CapacityExceededError(ValueError):
    """Raised when more guests are requested than the room holds."""


def _generate_reservation_code() -> str:
    return f"RSV{secrets.token_hex(4).upper()}"


def _take_quotas(room: Room, days: list[datetime.date]) -> list[str]:
    """Take one room from each date's quota and return the ids of the rows touched."""
    rows = {row.date: row for row in room.quotas}
    taken: list[str] = []
    for day in days:
        row = rows.get(day)
        if row is not None and row.quota > 0:
            row.quota -= 1
            taken.append(str(row.id))
    return taken


def _release_quotas(room: Room, held_quota_ids: str | None) -> None:
    # Rows replaced since the booking are left alone.
    held = set(json.loads(held_quota_ids or "[]"))
    for row in room.quotas:
        if str(row.id) in held:
            row.quota += 1


async def get_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID
) -> Reservation | None:
    result = await session.execute(
        select(Reservation).where(Reservation.id == reservation_id)
    )
    return result.scalar_one_or_none()


async def create_reservation(
    session: AsyncSession,
    *,
    room_id: uuid.UUID,
    check_in: datetime.date,
    check_out: datetime.date,
    guest_count: int,
    client_total_price: Decimal | None = None,
    payment_method: PaymentMethod = PaymentMethod.ON_SITE,
    mismatch_policy: Literal["reject", "override"] | None = None,
) -> Reservation:
    """Book a stay at the price recomputed from server-held overrides.

    The submitted total is advisory: depending on ``mismatch_policy`` a
    disagreeing value is either rejected or replaced by the authoritative total.
    """
    settings = get_settings()
    room = await require_room(session, room_id=room_id)
    if guest_count > room.capacity:
        raise CapacityExceededError(
            f"Room holds at most {room.capacity} guests"
        )

    quote = resolve_stay(
        StayRequest(check_in=check_in, check_out=check_out, guest_count=guest_count),
        build_snapshot(room),
        low_availability_threshold=settings.low_availability_threshold,
    )
    if quote.sold_out:
        logger.info(
            "Rejected reservation for room %s: %s", room.id, quote.status.value
        )
        raise StayUnavailableError(quote)

    submitted_total: Decimal | None = None
    if client_total_price is not None:
        submitted_total = parse_amount(client_total_price)
        if submitted_total is None:
            raise ValueError("Submitted total is not a valid amount")

    policy = mismatch_policy or settings.price_mismatch_policy
    if submitted_total is not None and submitted_total != quote.total_price:
        if policy == "reject":
            logger.warning(
                "Rejected reservation for room %s: submitted total %s, current total %s",
                room.id,
                money_str(submitted_total),
                money_str(quote.total_price),
            )
            raise PriceMismatchError(
                submitted=submitted_total,
                authoritative=quote.total_price,
            )
        logger.warning(
            "Overriding submitted total %s with %s for room %s",
            money_str(submitted_total),
            money_str(quote.total_price),
            room.id,
        )

    booked_days = [night.date for night in quote.nights if isinstance(night, PricedNight)]
    held_quota_ids = _take_quotas(room, booked_days)

    reservation = Reservation(
        room_id=room.id,
        check_in=check_in,
        check_out=check_out,
        guest_count=guest_count,
        total_price=quote.total_price,
        client_total_price=submitted_total,
        status=ReservationStatus.PENDING,
        payment_method=payment_method,
        reservation_code=_generate_reservation_code(),
        held_quota_ids=json.dumps(held_quota_ids),
    )
    session.add(reservation)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(reservation)
    logger.info(
        "Created reservation %s for room %s (%s nights, total %s)",
        reservation.reservation_code,
        room.id,
        quote.night_count,
        money_str(quote.total_price),
    )
    return reservation


def _validate_status_transition(current: ReservationStatus, target: ReservationStatus) -> None:
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValueError(f"Invalid status transition from {current.value} to {target.value}")


async def cancel_reservation(
    session: AsyncSession, *, reservation: Reservation
) -> Reservation:
    """Cancel a reservation and hand its nights back to the quota."""
    _validate_status_transition(reservation.status, ReservationStatus.CANCELED)
    room = await require_room(session, room_id=reservation.room_id)
    _release_quotas(room, reservation.held_quota_ids)
    reservation.status = ReservationStatus.CANCELED
    await session.commit()
    await session.refresh(reservation)
    return reservation
