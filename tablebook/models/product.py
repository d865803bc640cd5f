"""Product catalog model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from tablebook.database import Base


class Product(Base):
    """Catalog item."""

    __tablename__ = "product"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    category = Column(String(128), nullable=True, index=True)
    image_url = Column(String(512), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
