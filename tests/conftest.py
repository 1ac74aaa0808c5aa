"""
Pytest fixtures for GitHub integration tests.

Uses an in-memory SQLite database per test and a fake GitHub REST API served
through httpx.MockTransport.
"""

import os

# Settings are cached on first use, so the environment must be set before
# anything imports ghsync.config.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "unit-session-secret-4f9c2a7e1b8d6053ca91e7"
os.environ["GITHUB_CLIENT_ID"] = "test-client-id"
os.environ["GITHUB_CLIENT_SECRET"] = "test-client-secret"
os.environ["FRONTEND_URL"] = "http://localhost:4200"
os.environ.pop("TOKEN_ENCRYPTION_KEY", None)
os.environ.pop("CORS_ALLOWED_ORIGINS", None)

from collections.abc import Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from cryptography.fernet import Fernet  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from ghsync import models  # noqa: F401,E402
from ghsync.db import Base  # noqa: E402
from ghsync.github import GitHubClient  # noqa: E402
from ghsync.identity import UserIdentity  # noqa: E402
from ghsync.repositories import IntegrationRepository  # noqa: E402
from ghsync.security import TokenEncryption  # noqa: E402
from ghsync.services import IntegrationService  # noqa: E402

from .fakes import FAKE_API_URL, VALID_TOKEN, FakeGitHub  # noqa: E402


@pytest.fixture
def fake_github() -> FakeGitHub:
    """One organization with two repositories."""
    return FakeGitHub(repos={"acme": ["api", "web"]})


@pytest.fixture
def client_factory(fake_github) -> Callable[[str], GitHubClient]:
    """Build GitHubClients that talk to the fake API."""

    def factory(access_token: str) -> GitHubClient:
        return GitHubClient(
            access_token,
            base_url=FAKE_API_URL,
            transport=httpx.MockTransport(fake_github.handler),
        )

    return factory


@pytest.fixture
def github_client(client_factory):
    with client_factory(VALID_TOKEN) as client:
        yield client


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def encryption() -> TokenEncryption:
    return TokenEncryption(Fernet.generate_key().decode())


@pytest.fixture
def integration_repository(test_session, encryption) -> IntegrationRepository:
    return IntegrationRepository(test_session, encryption=encryption)


@pytest.fixture
def service(test_session, client_factory, integration_repository) -> IntegrationService:
    return IntegrationService(
        test_session,
        client_factory=client_factory,
        repository=integration_repository,
    )


@pytest.fixture
def identity() -> UserIdentity:
    return UserIdentity(user_id="583231", username="octocat")
