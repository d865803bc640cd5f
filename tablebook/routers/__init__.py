"""API routers."""

from tablebook.routers.auth import router as auth_router
from tablebook.routers.products import router as products_router
from tablebook.routers.reservations import router as reservations_router
from tablebook.routers.restaurants import router as restaurants_router

__all__ = ["auth_router", "products_router", "restaurants_router", "reservations_router"]
