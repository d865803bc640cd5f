"""Pydantic schemas for product and restaurant endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for models exchanged with the frontend in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ProductCreate(CamelModel):
    name: str = Field(min_length=1, max_length=256)
    description: str | None = None
    price: float = Field(ge=0)
    category: str | None = None
    image_url: str | None = None


class ProductResponse(CamelModel):
    id: int
    name: str
    description: str | None
    price: float
    category: str | None
    image_url: str | None
    created_at: datetime


class RestaurantResponse(CamelModel):
    id: int
    name: str
    rating: float
    rating_count: int
    cuisines: list[str]
    price_for_two: int
    address: str
    location: str
    opening_time: str
    closing_time: str
    phone: str
    main_image: str | None
    other_images: list[str]
    menu_images: list[str]
    time_slots: list[int]
    direction: str | None
    info: list[str]
    total_seats: int
    created_at: datetime


class AvailabilityResponse(CamelModel):
    restaurant_id: int
    date: str
    time_slot: int
    total_seats: int
    booked_seats: int
    available_seats: int
