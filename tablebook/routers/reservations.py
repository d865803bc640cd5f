"""Reservation API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from tablebook.database import get_db
from tablebook.dependencies import CurrentUser, get_current_user, get_email_service
from tablebook.rate_limit import limiter
from tablebook.schemas.reservation import ReservationCreated, ReservationRequest, ReservationResponse
from tablebook.services.email import EmailService
from tablebook.services.reservation import get_reservation_service

logger = logging.getLogger("tablebook")

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("", response_model=ReservationCreated, status_code=201)
@limiter.limit("20/minute")
async def create_reservation(
    request: Request,
    body: ReservationRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> ReservationCreated:
    """Book seats for the signed-in user if the time slot has room."""
    service = get_reservation_service()
    result = service.create_reservation(
        db,
        email=user.email,
        restaurant_id=body.restaurant_id,
        date=body.date,
        time_slot=body.time_slot,
        guests=body.guests,
    )
    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    reservation = ReservationResponse.model_validate(result.reservation)
    restaurant_name = result.restaurant.name  # type: ignore[union-attr]
    # The booking stands whether or not the confirmation goes out.
    sent = await email_service.send_reservation_confirmation(
        to=user.email,
        restaurant_name=restaurant_name,
        date=reservation.date,
        time_slot=reservation.time_slot,
        guests=reservation.guests,
    )
    if not sent:
        logger.warning("Reservation %d confirmed but confirmation email to %s failed", reservation.id, user.email)

    return ReservationCreated(
        message="Reservation confirmed",
        reservation=reservation,
        confirmation_sent=sent,
    )


@router.get("", response_model=list[ReservationResponse])
def list_reservations(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ReservationResponse]:
    """List the signed-in user's reservations."""
    service = get_reservation_service()
    return [ReservationResponse.model_validate(r) for r in service.get_user_reservations(db, user.email)]
