"""Reservation and seat allocation models."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from tablebook.database import Base


class Reservation(Base):
    """Admitted booking for a restaurant, date and time slot."""

    __tablename__ = "reservation"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurant.id"), nullable=False, index=True)
    date = Column(String(32), nullable=False)
    time_slot = Column(Integer, nullable=False)
    guests = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class SeatAllocation(Base):
    """Running guest total for one (restaurant, date, time slot) bucket.

    booked_guests only changes through a conditional UPDATE that also checks
    the restaurant's capacity, so it never exceeds total_seats.
    """

    __tablename__ = "seat_allocation"
    __table_args__ = (UniqueConstraint("restaurant_id", "date", "time_slot", name="uq_seat_allocation_slot"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurant.id"), nullable=False, index=True)
    date = Column(String(32), nullable=False)
    time_slot = Column(Integer, nullable=False)
    booked_guests = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
