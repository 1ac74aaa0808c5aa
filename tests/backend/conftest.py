import os
import sys
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.auth.session import SessionPayload, create_session_token  # noqa: E402
from backend.app.config import get_settings  # noqa: E402
from backend.app.database import db, get_db  # noqa: E402
from backend.app.dependencies import get_github_client_factory  # noqa: E402
from backend.app.main import create_app  # noqa: E402
from ghsync.github import GitHubProfile  # noqa: E402
from ghsync.identity import UserIdentity  # noqa: E402
from ghsync.models import GitHubIntegration  # noqa: E402
from ghsync.repositories import IntegrationRepository  # noqa: E402


@pytest.fixture
def test_app_client(test_db, client_factory) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db_session = TestingSessionLocal()
        try:
            yield db_session
            db_session.commit()  # Auto-commit on success like production
        except Exception:
            db_session.rollback()
            raise
        finally:
            db_session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_github_client_factory] = lambda: client_factory

    with TestClient(app) as client:
        yield client, TestingSessionLocal

    db.reset()


@pytest.fixture
def session_identity() -> UserIdentity:
    return UserIdentity(user_id="583231", username="octocat")


@pytest.fixture
def authorized_client(
    test_app_client, session_identity
) -> Iterator[tuple[TestClient, sessionmaker]]:
    """Client carrying a signed session cookie for ``session_identity``."""
    client, TestingSessionLocal = test_app_client
    token = create_session_token(
        SessionPayload(sub=session_identity.user_id, username=session_identity.username)
    )
    client.cookies.set(get_settings().session_cookie_name, token)

    yield client, TestingSessionLocal

    client.cookies.clear()


@pytest.fixture
def store_credential(test_app_client, session_identity) -> Callable[[str], None]:
    """Seed a credential record for the session user."""
    _, TestingSessionLocal = test_app_client

    def store(access_token: str = "tok_valid") -> None:
        session = TestingSessionLocal()
        try:
            IntegrationRepository(session).upsert_for_user(
                session_identity.user_id,
                access_token,
                profile=GitHubProfile(id=session_identity.user_id, username=session_identity.username),
            )
            session.commit()
        finally:
            session.close()

    return store


@pytest.fixture
def credential_count(test_app_client, session_identity) -> Callable[[], int]:
    _, TestingSessionLocal = test_app_client

    def count() -> int:
        session = TestingSessionLocal()
        try:
            return session.query(GitHubIntegration).filter_by(user_id=session_identity.user_id).count()
        finally:
            session.close()

    return count
