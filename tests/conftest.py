"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment before imports
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["TESTING"] = "true"


class RecordingEmailSender:
    """Stands in for the email provider and remembers what was sent."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send_verification(self, email: str, verify_url: str) -> bool:
        from userauth.errors import NotificationError

        if self.fail:
            raise NotificationError("provider unavailable")
        self.sent.append((email, verify_url))
        return True


@pytest.fixture
def auth_config():
    """Config with a fixed secret and the cheapest bcrypt cost."""
    from userauth.config import AuthConfig

    return AuthConfig(
        jwt_secret="test-secret",
        bcrypt_cost_factor=4,
        public_base_url="http://testserver",
        database_url="sqlite:///:memory:",
    )


@pytest.fixture
def directory():
    from userauth.users.directory import InMemoryUserDirectory

    return InMemoryUserDirectory()


@pytest.fixture
def sql_directory():
    """SqlUserDirectory on a private in-memory SQLite database."""
    from sqlalchemy.orm import sessionmaker

    from userauth.users.directory import SqlUserDirectory
    from userauth.users.models import create_db_engine, init_db

    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    yield SqlUserDirectory(sessionmaker(bind=engine, expire_on_commit=False))
    engine.dispose()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def failing_email_sender():
    return RecordingEmailSender(fail=True)


@pytest.fixture
def service(auth_config, directory, email_sender):
    from userauth.auth.service import AuthService

    return AuthService(auth_config, directory, email_sender=email_sender)


@pytest.fixture
def client(auth_config, directory, email_sender):
    """TestClient over an app backed by the in-memory directory."""
    from fastapi.testclient import TestClient

    from userauth.web.server import create_app

    app = create_app(auth_config, directory=directory, email_sender=email_sender)
    with TestClient(app) as test_client:
        yield test_client
