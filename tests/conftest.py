"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tablebook.database import Base, get_db, init_db
from tablebook.dependencies import get_email_service
from tablebook.models.restaurant import Restaurant
from tablebook.models.user import User
from tablebook.services.auth import AuthService
from tablebook.services.email import EmailBackend, EmailService


class RecordingEmailBackend(EmailBackend):
    """Keeps sent mail in memory. Set fail=True to simulate a transport error."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail = False

    async def send(self, to: str, subject: str, body: str) -> bool:
        if self.fail:
            return False
        self.sent.append({"to": to, "subject": subject, "body": body})
        return True


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="session_factory")
def session_factory_fixture(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(name="db_session")
def db_session_fixture(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(name="email_backend")
def email_backend_fixture() -> RecordingEmailBackend:
    return RecordingEmailBackend()


@pytest.fixture(name="upload_dir")
def upload_dir_fixture(tmp_path, monkeypatch):
    """Point image uploads at a temporary directory."""
    from tablebook.config import get_settings

    upload_dir = tmp_path / "uploads"
    monkeypatch.setattr(get_settings(), "UPLOAD_DIR", str(upload_dir))
    return upload_dir


@pytest.fixture(name="client")
def client_fixture(db_session: Session, email_backend: RecordingEmailBackend, upload_dir):
    """Create a test client with overridden DB and email dependencies and disabled rate limiting."""
    from main import app
    from tablebook.rate_limit import limiter

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: EmailService(email_backend, "http://client.test")
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


def create_verified_user(db: Session, name: str, email: str, password: str) -> User:
    auth_service = AuthService()
    result = auth_service.register(db, name, email, password)
    auth_service.verify_account(db, result.token)
    return db.query(User).filter(User.email == email).one()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create a verified user and return its data with a session token."""
    from tablebook.services.jwt import get_jwt_service

    user = create_verified_user(db_session, "Test User", "test@example.com", "password123")
    token = get_jwt_service().create_token(email=user.email, name=user.name)

    return {
        "user_id": user.id,
        "email": user.email,
        "name": user.name,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


def build_restaurant() -> Restaurant:
    """A restaurant with ten seats per slot and slots 18-20."""
    return Restaurant(
        name="Spice Route",
        rating=4.0,
        rating_count=10,
        cuisines=["North Indian", "Mughlai"],
        price_for_two=1200,
        address="12 Park Street",
        location="Kolkata",
        opening_time="12:00",
        closing_time="23:00",
        phone="+91 33 1234 5678",
        other_images=[],
        menu_images=[],
        time_slots=[18, 19, 20],
        info=["Outdoor seating"],
        total_seats=10,
    )


@pytest.fixture(name="restaurant")
def restaurant_fixture(db_session: Session) -> Restaurant:
    restaurant = build_restaurant()
    db_session.add(restaurant)
    db_session.commit()
    db_session.refresh(restaurant)
    return restaurant


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(db_session: Session):
    """Factory: create a verified user and return Authorization headers for it."""
    from tablebook.services.jwt import get_jwt_service

    def make(name: str, email: str, password: str = "password123") -> dict:
        user = create_verified_user(db_session, name, email, password)
        token = get_jwt_service().create_token(email=user.email, name=user.name)
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture(name="file_session_factory")
def file_session_factory_fixture(tmp_path):
    """Sessions on a file-backed SQLite database, each with its own connection, for multi-threaded tests."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'tablebook.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
        pool_size=20,
    )
    init_db(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture(name="file_restaurant_id")
def file_restaurant_id_fixture(file_session_factory) -> int:
    with file_session_factory() as session:
        restaurant = build_restaurant()
        session.add(restaurant)
        session.commit()
        return restaurant.id
