"""Pydantic schemas for reservation and review endpoints."""

from datetime import datetime

from pydantic import Field

from tablebook.database import MAX_INTEGER
from tablebook.schemas.catalog import CamelModel


class ReservationRequest(CamelModel):
    restaurant_id: int = Field(ge=1, le=MAX_INTEGER)
    date: str = ""
    time_slot: int = Field(ge=-MAX_INTEGER, le=MAX_INTEGER)
    # Checked against the restaurant's seats by the admission check
    guests: int = 0


class ReservationResponse(CamelModel):
    id: int
    email: str
    restaurant_id: int
    date: str
    time_slot: int
    guests: int
    created_at: datetime


class ReservationCreated(CamelModel):
    message: str
    reservation: ReservationResponse
    confirmation_sent: bool


class ReviewRequest(CamelModel):
    rating: int
    text: str = ""


class ReviewResponse(CamelModel):
    id: int
    restaurant_id: int
    user_email: str
    user_name: str
    rating: int
    text: str
    created_at: datetime
