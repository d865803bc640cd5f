"""Restaurant model."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text

from tablebook.database import Base


class Restaurant(Base):
    """Bookable restaurant with a fixed seat capacity per time slot."""

    __tablename__ = "restaurant"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False, index=True)
    rating = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)
    cuisines = Column(JSON, nullable=False, default=list)
    price_for_two = Column(Integer, nullable=False)
    address = Column(String(512), nullable=False)
    location = Column(String(128), nullable=False, index=True)
    opening_time = Column(String(16), nullable=False)
    closing_time = Column(String(16), nullable=False)
    phone = Column(String(32), nullable=False)
    main_image = Column(String(512), nullable=True)
    other_images = Column(JSON, nullable=False, default=list)
    menu_images = Column(JSON, nullable=False, default=list)
    time_slots = Column(JSON, nullable=False, default=list)
    direction = Column(Text, nullable=True)
    info = Column(JSON, nullable=False, default=list)
    total_seats = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
