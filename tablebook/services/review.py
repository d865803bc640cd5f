"""Review service."""

from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.orm import Session

from tablebook.errors import ErrorKind
from tablebook.models.restaurant import Restaurant
from tablebook.models.review import Review
from tablebook.validation import validate_review


@dataclass
class ReviewResult:
    success: bool
    error: str | None = None
    kind: ErrorKind | None = None
    review: Review | None = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code if self.kind else 201


class ReviewService:
    """Stores reviews and keeps the restaurant's rating aggregate current."""

    def add_review(
        self, db: Session, restaurant_id: int, user_email: str, user_name: str, rating: int, text: str
    ) -> ReviewResult:
        validation = validate_review(rating, text)
        if not validation.valid:
            return ReviewResult(success=False, error=validation.error, kind=ErrorKind.VALIDATION)

        restaurant = db.get(Restaurant, restaurant_id)
        if not restaurant:
            return ReviewResult(success=False, error="Restaurant not found", kind=ErrorKind.NOT_FOUND)

        review = Review(
            restaurant_id=restaurant.id,
            user_email=user_email,
            user_name=user_name,
            rating=rating,
            text=text.strip(),
        )
        db.add(review)
        # One statement, so every review lands in the aggregate exactly once
        db.execute(
            update(Restaurant)
            .where(Restaurant.id == restaurant.id)
            .values(
                rating=(Restaurant.rating * Restaurant.rating_count + rating) / (Restaurant.rating_count + 1.0),
                rating_count=Restaurant.rating_count + 1,
            )
            .execution_options(synchronize_session=False)
        )
        db.commit()
        db.refresh(review)

        return ReviewResult(success=True, review=review)

    def get_reviews(self, db: Session, restaurant_id: int) -> list[Review]:
        """Reviews for a restaurant, newest first."""
        return (
            db.query(Review)
            .filter(Review.restaurant_id == restaurant_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )


_review_service: ReviewService | None = None


def get_review_service() -> ReviewService:
    """Get singleton review service instance."""
    global _review_service
    if _review_service is None:
        _review_service = ReviewService()
    return _review_service
