"""Reservation submission API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.reservation import ReservationCreate, ReservationRead
from app.services import reservation_service
from app.services.room_service import RoomNotFoundError

router = APIRouter()


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation",
)
async def create_reservation(
    payload: ReservationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ReservationRead:
    """Book a stay; the stored total is always recomputed on the server."""
    try:
        reservation = await reservation_service.create_reservation(
            session,
            room_id=payload.room_id,
            check_in=payload.check_in,
            check_out=payload.check_out,
            guest_count=payload.guest_count,
            client_total_price=payload.total_price,
            payment_method=payload.payment_method,
        )
    except RoomNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except reservation_service.StayUnavailableError as exc:
        quote = exc.quote
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "status": quote.status.value,
                "message": quote.message,
                "first_unpriced_date": (
                    quote.first_unpriced_date.isoformat()
                    if quote.first_unpriced_date
                    else None
                ),
            },
        ) from exc
    except reservation_service.PriceMismatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(exc),
                "submitted_total": str(exc.submitted),
                "total_price": str(exc.authoritative),
            },
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create reservation",
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(reservation)


async def _load_reservation(session: AsyncSession, reservation_id: uuid.UUID):
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    return reservation


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ReservationRead:
    reservation = await _load_reservation(session, reservation_id)
    return ReservationRead.model_validate(reservation)


@router.post(
    "/{reservation_id}/cancel",
    response_model=ReservationRead,
    summary="Cancel reservation",
)
async def cancel_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ReservationRead:
    reservation = await _load_reservation(session, reservation_id)
    try:
        canceled = await reservation_service.cancel_reservation(
            session, reservation=reservation
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(canceled)
