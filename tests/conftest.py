"""Pytest configuration and fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""
os.environ["FRONTEND_URL"] = "http://frontend.test"
os.environ["APP_ENV"] = "development"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.exceptions import EmailDeliveryError
from app.models.user import User  # noqa: F401
from app.services.auth import AuthService, get_auth_service
from app.services.notifier import ResetNotifier


class RecordingNotifier(ResetNotifier):
    """Notifier that records reset emails instead of sending them."""

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[dict] = []
        self.fail = False

    def send_reset_email(self, to_email: str, reset_url: str) -> None:
        if self.fail:
            raise EmailDeliveryError()
        self.sent.append({"to": to_email, "reset_url": reset_url, "html": self.render(reset_url)})


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="notifier")
def notifier_fixture() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(name="auth_service")
def auth_service_fixture(notifier: RecordingNotifier) -> AuthService:
    return AuthService(notifier=notifier)


@pytest.fixture(name="client")
def client_fixture(db_session: Session, auth_service: AuthService):
    """Create a test client with the test DB and recording notifier wired in."""
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session, auth_service: AuthService) -> dict:
    """Register a test user and return its credentials."""
    user = auth_service.register(db_session, "test@example.com", "password123")
    return {"user_id": user.id, "email": user.email, "password": "password123"}
