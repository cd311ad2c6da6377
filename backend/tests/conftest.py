import html
import os
import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse

# Settings are read at import time, so the environment comes first
os.environ["SECRET_KEY"] = "k3Yq9vR2mP4wL8nZ3bT6yH1jF5cD0gA2sQx7"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SMTP_HOST"] = ""
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.services.credential_store import CredentialStore
from app.services.email_service import EmailService, get_email_service

PASSWORD = "Abcd1234!"


@dataclass
class SentEmail:
    to: str
    subject: str
    body: str


class RecordingEmailService(EmailService):
    """Keeps outgoing mail in memory instead of talking to SMTP."""

    def __init__(self):
        super().__init__(settings)
        self.sent = []
        self.fail_with = None

    async def send_email(self, to_email, subject, html_body):
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(SentEmail(to_email, subject, html_body))

    def confirmation_params(self, index=-1):
        """userId and token from the link in a sent confirmation email."""
        href = re.search(r"href='([^']+)'", self.sent[index].body).group(1)
        query = parse_qs(urlparse(html.unescape(href)).query)
        return {"userId": query["userId"][0], "token": query["token"][0]}


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingEmailService()


@pytest.fixture
async def client(session_factory, mailer, tmp_path, monkeypatch):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    monkeypatch.setattr(settings, "upload_dir", str(tmp_path / "uploads"))
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    async def _make(
        email="alice@example.com",
        password=PASSWORD,
        full_name="Alice Example",
        confirmed=True,
        roles=None,
    ):
        async with session_factory() as session:
            store = CredentialStore(session)
            return await store.create(
                email, full_name, password, email_confirmed=confirmed, roles=roles
            )

    return _make


@pytest.fixture
def auth_headers(client, make_user):
    """Create a confirmed user, log in over HTTP and return bearer headers."""

    async def _headers(email="alice@example.com", password=PASSWORD, roles=None):
        await make_user(email=email, password=password, roles=roles)
        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _headers
