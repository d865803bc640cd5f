"""Reservation service: seat availability and the admission check."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tablebook.config import get_settings
from tablebook.errors import ErrorKind
from tablebook.models.reservation import Reservation, SeatAllocation
from tablebook.models.restaurant import Restaurant
from tablebook.validation import validate_reservation, validate_time_slot

logger = logging.getLogger("tablebook")


@dataclass
class ReservationResult:
    """Result of an admission check."""

    success: bool
    error: str | None = None
    kind: ErrorKind | None = None
    reservation: Reservation | None = None
    restaurant: Restaurant | None = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code if self.kind else 201

    @classmethod
    def failure(cls, kind: ErrorKind, error: str) -> "ReservationResult":
        return cls(success=False, error=error, kind=kind)


class ReservationService:
    """Admits bookings against a restaurant's per-slot seat capacity.

    Capacity lives in SeatAllocation rows, one per (restaurant, date, slot).
    Admission is a single conditional UPDATE on that row, so the capacity
    check and the seat claim cannot be split by a concurrent request.
    """

    def __init__(self, enforce_time_slots: bool | None = None) -> None:
        if enforce_time_slots is None:
            enforce_time_slots = get_settings().RESERVATION_ENFORCE_TIME_SLOTS
        self.enforce_time_slots = enforce_time_slots

    def _find_allocation(self, db: Session, restaurant_id: int, date: str, time_slot: int) -> SeatAllocation | None:
        return (
            db.query(SeatAllocation)
            .filter(
                SeatAllocation.restaurant_id == restaurant_id,
                SeatAllocation.date == date,
                SeatAllocation.time_slot == time_slot,
            )
            .first()
        )

    def _sum_reservations(self, db: Session, restaurant_id: int, date: str, time_slot: int) -> int:
        total = (
            db.query(func.coalesce(func.sum(Reservation.guests), 0))
            .filter(
                Reservation.restaurant_id == restaurant_id,
                Reservation.date == date,
                Reservation.time_slot == time_slot,
            )
            .scalar()
        )
        return int(total or 0)

    def _ensure_allocation(self, db: Session, restaurant_id: int, date: str, time_slot: int) -> int:
        """Return the allocation row id for the slot, creating the row if needed.

        A new row starts from the guests already booked for the slot. If a
        concurrent request created the row first, the unique constraint fires
        and the existing row is used.
        """
        allocation = self._find_allocation(db, restaurant_id, date, time_slot)
        if allocation:
            return allocation.id

        allocation = SeatAllocation(
            restaurant_id=restaurant_id,
            date=date,
            time_slot=time_slot,
            booked_guests=self._sum_reservations(db, restaurant_id, date, time_slot),
        )
        db.add(allocation)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            allocation = self._find_allocation(db, restaurant_id, date, time_slot)
            if allocation is None:
                raise
        return allocation.id

    def booked_seats(self, db: Session, restaurant_id: int, date: str, time_slot: int) -> int:
        allocation = self._find_allocation(db, restaurant_id, date, time_slot)
        if allocation:
            return allocation.booked_guests
        return self._sum_reservations(db, restaurant_id, date, time_slot)

    def available_seats(self, db: Session, restaurant: Restaurant, date: str, time_slot: int) -> int:
        """Seats still free for the exact (restaurant, date, slot) bucket."""
        return max(restaurant.total_seats - self.booked_seats(db, restaurant.id, date, time_slot), 0)

    def _reject(
        self, db: Session, restaurant: Restaurant, date: str, time_slot: int, guests: int
    ) -> ReservationResult:
        available = self.available_seats(db, restaurant, date, time_slot)
        logger.info(
            "Rejected booking for restaurant %d on %s slot %d: %d guests, %d available",
            restaurant.id,
            date,
            time_slot,
            guests,
            available,
        )
        return ReservationResult.failure(ErrorKind.CAPACITY, f"Only {available} seats available for this time slot")

    def create_reservation(
        self, db: Session, email: str, restaurant_id: int, date: str, time_slot: int, guests: int
    ) -> ReservationResult:
        """Run the admission check and persist the reservation if it fits.

        email is the authenticated user's, never a client-supplied value.
        """
        validation = validate_reservation(date, guests)
        if not validation.valid:
            return ReservationResult.failure(ErrorKind.VALIDATION, validation.error)  # type: ignore[arg-type]

        restaurant = db.get(Restaurant, restaurant_id)
        if not restaurant:
            return ReservationResult.failure(ErrorKind.NOT_FOUND, "Restaurant not found")

        if self.enforce_time_slots:
            validation = validate_time_slot(time_slot, restaurant.time_slots or [])
            if not validation.valid:
                return ReservationResult.failure(ErrorKind.VALIDATION, validation.error)  # type: ignore[arg-type]

        date = date.strip()
        if guests > restaurant.total_seats:
            return self._reject(db, restaurant, date, time_slot, guests)

        allocation_id = self._ensure_allocation(db, restaurant.id, date, time_slot)

        claimed = db.execute(
            update(SeatAllocation)
            .where(
                SeatAllocation.id == allocation_id,
                SeatAllocation.booked_guests + guests <= restaurant.total_seats,
            )
            .values(booked_guests=SeatAllocation.booked_guests + guests, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount != 1:
            db.rollback()
            return self._reject(db, restaurant, date, time_slot, guests)

        reservation = Reservation(
            email=email,
            restaurant_id=restaurant.id,
            date=date,
            time_slot=time_slot,
            guests=guests,
        )
        db.add(reservation)
        db.commit()
        db.refresh(reservation)

        return ReservationResult(success=True, reservation=reservation, restaurant=restaurant)

    def get_user_reservations(self, db: Session, email: str) -> list[Reservation]:
        """Get all reservations for a user, newest first."""
        return (
            db.query(Reservation)
            .filter(Reservation.email == email)
            .order_by(Reservation.created_at.desc(), Reservation.id.desc())
            .all()
        )


_reservation_service: ReservationService | None = None


def get_reservation_service() -> ReservationService:
    """Get singleton reservation service instance."""
    global _reservation_service
    if _reservation_service is None:
        _reservation_service = ReservationService()
    return _reservation_service
