"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_EMAIL"] = "admin@test.com"
os.environ["ADMIN_PASSWORD"] = "TestAdmin123!"
os.environ["EMAIL_PROVIDER"] = "console"
os.environ["CONTACT_RECIPIENT_EMAIL"] = "owner@test.com"
os.environ["SITE_OWNER_NAME"] = "Jane Doe"
os.environ["SOCIAL_LINKS"] = "GitHub=https://github.com/janedoe,LinkedIn=https://linkedin.com/in/janedoe"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="portfolio-uploads-")
os.environ.pop("SENTRY_DSN", None)

from authentication.auth import create_access_token, get_password_hash  # noqa: E402
from repositories.database import Base, get_db  # noqa: E402
import repositories.db_models as db_models  # noqa: E402
from services.email_service import EmailProvider, get_email_provider  # noqa: E402

# Test database engine (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_PASSWORD = "adminpassword123"


class RecordingEmailProvider(EmailProvider):
    """Mail transport that records messages instead of sending them.

    Addresses in `fail_for` make send() return False; `raise_for` makes it raise.
    """

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self.attempted: list[str] = []
        self.fail_for: set[str] = set()
        self.raise_for: set[str] = set()

    async def send(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> bool:
        self.attempted.append(to_email)
        if to_email in self.raise_for:
            raise ConnectionError(f"transport down for {to_email}")
        if to_email in self.fail_for:
            return False
        self.sent.append(
            {
                "to": to_email,
                "subject": subject,
                "html": html_body,
                "text": text_body,
            }
        )
        return True


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh in-memory database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session."""
    return db_session


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    return RecordingEmailProvider()


@pytest.fixture(scope="function")
def client(db_session, email_provider):
    """Create a test client with database and mail transport overridden."""
    from main import app
    from helpers.rate_limiter import limiter

    # Reset rate limiter storage before each test to prevent rate limit errors
    limiter.reset()

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_provider] = lambda: email_provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_account(db_session) -> db_models.AdminAccount:
    """Create an admin account."""
    account = db_models.AdminAccount(
        username="siteadmin",
        email="siteadmin@example.com",
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=db_models.AdminRole.ADMIN,
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def admin_auth_headers(admin_account) -> dict:
    """Bearer headers for the admin account."""
    token = create_access_token(admin_account)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_contact(db_session):
    """Factory fixture to store contact submissions."""

    def _create_contact(
        subject: str = "Hello",
        status: db_models.ContactStatus = db_models.ContactStatus.NEW,
        email: str = "visitor@example.com",
    ) -> db_models.ContactSubmission:
        contact = db_models.ContactSubmission(
            name="Visitor",
            email=email,
            subject=subject,
            message="I liked your work.",
            ip_address="203.0.113.5",
            user_agent="pytest",
            status=status,
        )
        db_session.add(contact)
        db_session.commit()
        db_session.refresh(contact)
        return contact

    return _create_contact


@pytest.fixture
def test_project(db_session) -> db_models.Project:
    project = db_models.Project(
        title="Portfolio API",
        description="Backend for this site",
        technologies=["Python", "FastAPI"],
        github_url="https://github.com/janedoe/portfolio",
        featured=True,
        status=db_models.ProjectStatus.COMPLETED,
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def test_post(db_session) -> db_models.BlogPost:
    post = db_models.BlogPost(
        title="Hello World",
        slug="hello-world",
        content="<p>First post</p>",
        excerpt="First post",
        tags=["intro"],
        published=True,
    )
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post
