"""Restaurant API endpoints: listing, detail, availability, reviews and creation."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, Query, UploadFile
from sqlalchemy.orm import Session

from tablebook.database import MAX_INTEGER, get_db
from tablebook.dependencies import CurrentUser, get_current_user
from tablebook.schemas.catalog import AvailabilityResponse, RestaurantResponse
from tablebook.schemas.reservation import ReviewRequest, ReviewResponse
from tablebook.services.catalog import get_catalog_service
from tablebook.services.images import get_image_storage
from tablebook.services.reservation import get_reservation_service
from tablebook.services.review import get_review_service

router = APIRouter(tags=["Restaurants"])

RestaurantId = Annotated[int, Path(ge=1, le=MAX_INTEGER)]


def _split_values(values: list[str]) -> list[str]:
    """Accept both repeated form fields and comma-separated values."""
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


@router.get("/restaurants", response_model=list[RestaurantResponse])
def list_restaurants(
    location: str | None = None,
    q: str | None = None,
    db: Session = Depends(get_db),
) -> list[RestaurantResponse]:
    """List restaurants, filtered by location and name/cuisine search."""
    service = get_catalog_service()
    restaurants = service.list_restaurants(db, location=location, q=q)
    return [RestaurantResponse.model_validate(r) for r in restaurants]


@router.get("/restaurants/{restaurant_id}", response_model=RestaurantResponse)
def get_restaurant(restaurant_id: RestaurantId, db: Session = Depends(get_db)) -> RestaurantResponse:
    """Get a single restaurant."""
    service = get_catalog_service()
    restaurant = service.get_restaurant(db, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return RestaurantResponse.model_validate(restaurant)


@router.get("/restaurants/{restaurant_id}/availability", response_model=AvailabilityResponse)
def get_availability(
    restaurant_id: RestaurantId,
    date: str = Query(..., min_length=1),
    time_slot: int = Query(..., alias="timeSlot", ge=-MAX_INTEGER, le=MAX_INTEGER),
    db: Session = Depends(get_db),
) -> AvailabilityResponse:
    """Seats left for one date and time slot."""
    restaurant = get_catalog_service().get_restaurant(db, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")

    service = get_reservation_service()
    date = date.strip()
    booked = service.booked_seats(db, restaurant.id, date, time_slot)
    return AvailabilityResponse(
        restaurant_id=restaurant.id,
        date=date,
        time_slot=time_slot,
        total_seats=restaurant.total_seats,
        booked_seats=booked,
        available_seats=max(restaurant.total_seats - booked, 0),
    )


@router.get("/restaurants/{restaurant_id}/reviews", response_model=list[ReviewResponse])
def list_reviews(restaurant_id: RestaurantId, db: Session = Depends(get_db)) -> list[ReviewResponse]:
    """List reviews for a restaurant."""
    if not get_catalog_service().get_restaurant(db, restaurant_id):
        raise HTTPException(status_code=404, detail="Restaurant not found")
    reviews = get_review_service().get_reviews(db, restaurant_id)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.post("/restaurants/{restaurant_id}/reviews", response_model=ReviewResponse, status_code=201)
def add_review(
    restaurant_id: RestaurantId,
    body: ReviewRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ReviewResponse:
    """Review a restaurant as the signed-in user."""
    service = get_review_service()
    result = service.add_review(db, restaurant_id, user.email, user.name, body.rating, body.text)
    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)
    return ReviewResponse.model_validate(result.review)


@router.post("/add-restaurants", response_model=RestaurantResponse, status_code=201)
async def add_restaurant(
    name: str = Form(..., min_length=1),
    rating: float = Form(..., ge=0, le=5),
    rating_count: int = Form(..., alias="ratingCount", ge=0, le=MAX_INTEGER),
    cuisines: list[str] = Form(...),
    price_for_two: int = Form(..., alias="priceForTwo", ge=0, le=MAX_INTEGER),
    address: str = Form(..., min_length=1),
    location: str = Form(..., min_length=1),
    opening_time: str = Form(..., alias="openingTime"),
    closing_time: str = Form(..., alias="closingTime"),
    phone: str = Form(..., min_length=1),
    total_seats: int = Form(..., alias="totalSeats", gt=0, le=MAX_INTEGER),
    time_slots: list[int] = Form(default=[], alias="timeSlots"),
    direction: str | None = Form(None),
    info: list[str] = Form(default=[]),
    main_image: UploadFile | None = File(None, alias="mainImage"),
    other_images: list[UploadFile] | None = File(None, alias="otherImages"),
    menu_images: list[UploadFile] | None = File(None, alias="menuImages"),
    db: Session = Depends(get_db),
) -> RestaurantResponse:
    """Create a restaurant from a multipart form with its images."""
    storage = get_image_storage()
    stored: list[str] = []

    try:
        main_image_path = None
        if main_image is not None and main_image.filename:
            main_image_path = await storage.store(main_image)
            stored.append(main_image_path)
        other_image_paths = await storage.store_many(other_images)
        stored.extend(other_image_paths)
        menu_image_paths = await storage.store_many(menu_images)
        stored.extend(menu_image_paths)
    except ValueError as e:
        storage.remove(stored)
        raise HTTPException(status_code=400, detail=str(e)) from None

    service = get_catalog_service()
    try:
        restaurant = service.create_restaurant(
            db,
            name=name.strip(),
            rating=rating,
            rating_count=rating_count,
            cuisines=_split_values(cuisines),
            price_for_two=price_for_two,
            address=address.strip(),
            location=location.strip(),
            opening_time=opening_time,
            closing_time=closing_time,
            phone=phone.strip(),
            main_image=main_image_path,
            other_images=other_image_paths,
            menu_images=menu_image_paths,
            time_slots=sorted(set(time_slots)),
            direction=direction,
            info=[line.strip() for line in info if line.strip()],
            total_seats=total_seats,
        )
    except Exception:
        db.rollback()
        storage.remove(stored)
        raise
    return RestaurantResponse.model_validate(restaurant)
