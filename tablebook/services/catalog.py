"""Catalog service for products and restaurants."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from tablebook.models.product import Product
from tablebook.models.restaurant import Restaurant


class CatalogService:
    """Handles product and restaurant listing and creation."""

    def list_products(self, db: Session) -> list[Product]:
        return db.query(Product).order_by(Product.id).all()

    def create_product(self, db: Session, **fields) -> Product:
        product = Product(**fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    def list_restaurants(self, db: Session, location: str | None = None, q: str | None = None) -> list[Restaurant]:
        """List restaurants, optionally filtered by location and a name/cuisine search.

        location is an exact case-insensitive match. q matches any substring
        of the name or of one of the cuisines, ignoring case.
        """
        query = db.query(Restaurant)
        if location and location.strip():
            query = query.filter(func.lower(Restaurant.location) == location.strip().lower())
        restaurants = query.order_by(Restaurant.id).all()

        if not q or not q.strip():
            return restaurants

        needle = q.strip().lower()
        return [
            r
            for r in restaurants
            if needle in r.name.lower() or any(needle in cuisine.lower() for cuisine in r.cuisines or [])
        ]

    def get_restaurant(self, db: Session, restaurant_id: int) -> Restaurant | None:
        return db.get(Restaurant, restaurant_id)

    def create_restaurant(self, db: Session, **fields) -> Restaurant:
        """Create a restaurant record. Image fields hold paths from ImageStorage."""
        restaurant = Restaurant(**fields)
        db.add(restaurant)
        db.commit()
        db.refresh(restaurant)
        return restaurant


_catalog_service: CatalogService | None = None


def get_catalog_service() -> CatalogService:
    """Get singleton catalog service instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
