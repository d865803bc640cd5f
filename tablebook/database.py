"""Database engine, sessions and schema bootstrap."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from tablebook.config import get_settings

settings = get_settings()
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# Largest value an Integer column holds on every supported backend
MAX_INTEGER = 2**31 - 1


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def load_models() -> None:
    """Import every model module so its table registers with Base.metadata."""
    from tablebook.models import product, reservation, restaurant, review, user  # noqa: F401


def init_db(bind: Engine | None = None) -> None:
    """Create all tables directly. Production schemas go through Alembic instead."""
    load_models()
    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
